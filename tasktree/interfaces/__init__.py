"""User-facing interfaces for tasktree."""
