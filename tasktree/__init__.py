"""tasktree - an outliner-style task manager.

Tasks form an ordered forest; filters, status badges, drag-and-drop moves
and the sidebar are all derived from it by pure functions.
"""

__version__ = "0.1.0"
