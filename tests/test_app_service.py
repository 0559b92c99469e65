"""Reducer scenarios: adding, checking, dragging and nesting tasks."""

import pytest
from helpers import (
    TODAY,
    add_task,
    badge_labels,
    check_nth,
    drag_and_drop_nth,
    drag_to_filter,
    drag_to_tab,
    drop_targets_after,
    nth_task,
    open_nth,
    side_bar_active_projects,
    start_drag_nth,
    switch_to_filter,
    switch_to_filter_called,
    tasks,
    tasks_in_section,
    update_all,
)

from tasktree.application import AppState, CheckEvent, SelectEditingTaskEvent, update_app
from tasktree.domain.task import SectionFilter

EMPTY = AppState()
ACTIONS = SectionFilter(section="actions")


class TestAddingTasks:
    """Tests for adding tasks through the title field."""

    def test_empty_state_has_no_tasks(self) -> None:
        """Test that a fresh state shows no tasks."""
        assert tasks(EMPTY, "title") == []

    def test_tasks_are_added_top_to_bottom(self) -> None:
        """Test that new tasks are appended in order, unfinished and stalled."""
        state = update_all(EMPTY, switch_to_filter("all"), add_task("Task 1"), add_task("Task 2"), add_task("Task 3"))

        assert tasks(state, "title") == ["Task 1", "Task 2", "Task 3"]
        assert tasks(state, "done") == [False, False, False]
        assert badge_labels(state) == [["Stalled"], ["Stalled"], ["Stalled"]]

    def test_submit_clears_the_title_field(self) -> None:
        """Test that the add field is empty after submitting."""
        state = update_all(EMPTY, add_task("Task 1"))

        assert state.text_fields["addTitle"] == ""

    def test_task_added_in_ready_filter_is_shown_there(self) -> None:
        """Test that a task added under the ready filter becomes ready."""
        state = update_all(EMPTY, switch_to_filter("ready"), add_task("Task 1"))

        assert tasks(state, "title") == ["Task 1"]
        assert badge_labels(state) == [["Ready"]]

    def test_tasks_added_in_project_filter_go_into_the_project(self) -> None:
        """Test that adding inside a project filter nests the task in the project."""
        step1 = update_all(
            EMPTY,
            switch_to_filter("all"),
            add_task("Project", "project"),
            add_task("Outside project"),
            lambda current: switch_to_filter(side_bar_active_projects(current)[0].filter),
        )
        assert tasks(step1, "title") == []

        step2 = update_all(step1, add_task("Inside project"), add_task("Another task"))
        assert tasks(step2, "title") == ["Inside project", "Another task"]

        all_tasks = update_all(step2, switch_to_filter("all"))
        assert tasks(all_tasks, "title", "indentation") == [
            ("Project", 0),
            ("Inside project", 1),
            ("Another task", 1),
            ("Outside project", 0),
        ]


class TestCheckingTasks:
    """Tests for toggling completion."""

    def test_checking_toggles_done(self) -> None:
        """Test that checking twice returns the task to unfinished."""
        step1 = update_all(EMPTY, switch_to_filter("all"), add_task("Task 1"))
        step2 = update_all(step1, check_nth(0))
        step3 = update_all(step2, check_nth(0))

        assert nth_task(step1, 0).done is False
        assert nth_task(step2, 0).done is True
        assert nth_task(step3, 0).done is False

    def test_checking_unknown_task_is_ignored(self) -> None:
        """Test that a stale task id leaves the state unchanged."""
        state = update_all(EMPTY, add_task("Task 1"))

        assert update_app(state, CheckEvent(id="missing"), TODAY) == state

    def test_opening_unknown_task_closes_editor(self) -> None:
        """Test that selecting a missing task leaves no editor open."""
        state = update_app(EMPTY, SelectEditingTaskEvent(id="missing"), TODAY)

        assert state.editor is None


class TestDraggingToFilters:
    """Tests for dropping tasks on sidebar filters."""

    @pytest.fixture
    def example(self) -> AppState:
        return update_all(EMPTY, switch_to_filter("all"), add_task("Task 1"), add_task("Task 2"), add_task("Task 3"))

    def test_ready_filter_makes_task_ready(self, example: AppState) -> None:
        """Test that dropping on ready gives the ready badge."""
        state = update_all(example, drag_to_filter(0, "ready"))

        assert badge_labels(state) == [["Ready"], ["Stalled"], ["Stalled"]]

    def test_stalled_filter_makes_task_stalled_again(self, example: AppState) -> None:
        """Test that dropping a ready task on stalled clears actionable."""
        state = update_all(example, drag_to_filter(0, "ready"), drag_to_filter(0, "stalled"))

        assert badge_labels(state) == [["Stalled"], ["Stalled"], ["Stalled"]]

    def test_done_and_not_done_filters(self, example: AppState) -> None:
        """Test that done completes a task and not-done reopens it."""
        done = update_all(example, drag_to_filter(0, "done"))
        reopened = update_all(done, drag_to_filter(0, "not-done"))

        assert tasks(done, "done") == [True, False, False]
        assert tasks(reopened, "done") == [False, False, False]

    def test_project_filter_nests_task(self) -> None:
        """Test that dropping on a project makes the task its last child."""
        state = update_all(
            EMPTY,
            switch_to_filter("all"),
            add_task("Project", "project"),
            add_task("Task 1"),
            drag_to_tab(1, "Project"),
        )

        assert tasks(state, "title", "indentation") == [("Project", 0), ("Task 1", 1)]

    def test_paused_filter_pauses_task(self) -> None:
        """Test that dropping on paused gives the paused appearance."""
        step1 = update_all(EMPTY, switch_to_filter("all"), add_task("Task 1"))
        step2 = update_all(step1, drag_to_tab(0, "Paused"))

        assert tasks(step1, "paused") == [False]
        assert tasks(step2, "paused") == [True]

    def test_dropping_project_on_itself_changes_nothing(self) -> None:
        """Test that a project cannot be moved into itself."""
        step1 = update_all(EMPTY, switch_to_filter("all"), add_task("Project", "project"))
        step2 = update_all(step1, drag_to_tab(0, "Project"))

        assert step2.tasks == step1.tasks


class TestReordering:
    """Tests for reordering a flat list with drag and drop."""

    @pytest.fixture
    def example(self) -> AppState:
        return update_all(EMPTY, switch_to_filter("all"), add_task("Task 1"), add_task("Task 2"), add_task("Task 3"))

    @pytest.mark.parametrize(
        ("source", "target", "side", "expected"),
        [
            (1, 2, "below", [2, 1, 3]),
            (1, 3, "above", [2, 1, 3]),
            (2, 1, "above", [2, 1, 3]),
            (3, 1, "below", [1, 3, 2]),
            (1, 2, "above", [1, 2, 3]),
            (1, 1, "below", [1, 2, 3]),
            (1, 1, "above", [1, 2, 3]),
        ],
    )
    def test_reorder(self, example: AppState, source: int, target: int, side: str, expected: list[int]) -> None:
        """Test dropping a task above or below another at the top level."""
        state = update_all(example, drag_and_drop_nth(source - 1, target - 1, side, 0))

        assert tasks(state, "title") == [f"Task {n}" for n in expected]


class TestDropTargets:
    """Tests for the drop targets offered while a task is dragged."""

    def test_no_drop_targets_without_drag(self) -> None:
        """Test that drop targets only appear while dragging."""
        state = update_all(EMPTY, switch_to_filter("all"), add_task("Task 1"))

        assert drop_targets_after(state, 0) == []

    def test_flat_list(self) -> None:
        """Test the targets at the top and below the first two tasks of a flat list."""
        state = update_all(
            EMPTY,
            switch_to_filter("all"),
            add_task("Task 1"),
            add_task("Task 2"),
            add_task("Task 3"),
            add_task("Task 4"),
            start_drag_nth(3),
        )

        assert drop_targets_after(state, -1) == [("full", 0)]
        assert drop_targets_after(state, 0) == [(1, 0), ("full", 1)]
        assert drop_targets_after(state, 1) == [(1, 0), ("full", 1)]

    def test_after_nesting_one_task_in_another(self) -> None:
        """Test that a nested follower limits the targets above it."""
        example = update_all(
            EMPTY,
            switch_to_filter("all"),
            add_task("Task 1"),
            add_task("Task 2"),
            add_task("Task 3"),
            add_task("Task 4"),
        )
        nested = update_all(example, drag_and_drop_nth(0, 1, "below", 1))
        dragging = update_all(nested, start_drag_nth(3))

        assert tasks(example, "indentation") == [0, 0, 0, 0]
        assert tasks(nested, "title", "indentation") == [("Task 2", 0), ("Task 1", 1), ("Task 3", 0), ("Task 4", 0)]
        assert drop_targets_after(dragging, 0) == [("full", 1)]
        assert drop_targets_after(dragging, 1) == [(1, 0), (1, 1), ("full", 2)]

    def test_following_task_at_deeper_indentation(self) -> None:
        """Test that targets below a row stop at the next row's indentation."""
        state = update_all(
            EMPTY,
            switch_to_filter("all"),
            add_task("Task 0"),
            add_task("Task 1", 1),
            add_task("Task 2", 2),
            add_task("Task 3", 1),
            add_task("Task 4"),
        )

        assert tasks(state, "indentation") == [0, 1, 2, 1, 0]
        assert drop_targets_after(update_all(state, start_drag_nth(4)), 2) == [(1, 1), (1, 2), ("full", 3)]

    def test_single_task_can_only_stay_in_place(self) -> None:
        """Test that a lone task cannot become its own child."""
        state = update_all(EMPTY, switch_to_filter("all"), add_task("Task 1"), start_drag_nth(0))

        assert drop_targets_after(state, -1) == [("full", 0)]
        assert drop_targets_after(state, 0) == [("full", 0)]

    def test_subtree_cannot_be_dropped_into_itself(self) -> None:
        """Test that no target inside the dragged subtree is deeper than the subtree root."""
        state = update_all(
            EMPTY,
            switch_to_filter("all"),
            add_task("Task 0"),
            add_task("Task 1", 1),
            add_task("Task 2", 2),
            add_task("Task 3", 3),
            add_task("Task 4", 1),
            start_drag_nth(1),
        )

        assert tasks(state, "indentation") == [0, 1, 2, 3, 1]
        for n in (1, 2, 3):
            assert all(indentation < 2 for _, indentation in drop_targets_after(state, n))

    @pytest.mark.parametrize(
        ("titles", "dragged", "expected"),
        [
            ([("Task 0", 0), ("Task 1", 0), ("Task 2", 0)], 1, [(1, 0), ("full", 1)]),
            ([("Task 0", 0), ("Task 1", 1), ("Task 2", 2), ("Task 3", 0)], 2, [(1, 0), (1, 1), ("full", 2)]),
            ([("Task 0", 0), ("Task 1", 1), ("Task 2", 1)], 1, [("full", 1)]),
            (
                [("Task 0", 0), ("Task 1", 1), ("Task 2", 2), ("Task 3", 2), ("Task 4", 1)],
                3,
                [(1, 1), (1, 2), ("full", 3)],
            ),
            (
                [("Task 0", 0), ("Task 1", 1), ("Task 2", 1), ("Task 3", 2), ("Task 4", 0)],
                2,
                [(1, 0), (1, 1), ("full", 2)],
            ),
        ],
    )
    def test_targets_next_to_dragged_task(
        self,
        titles: list[tuple[str, int]],
        dragged: int,
        expected: list[tuple[int | str, int]],
    ) -> None:
        """Test that the rows just above and at the dragged task offer the same targets."""
        state = update_all(
            EMPTY,
            switch_to_filter("all"),
            [add_task(title, indentation) for title, indentation in titles],
            start_drag_nth(dragged),
        )

        assert drop_targets_after(state, dragged) == expected
        assert drop_targets_after(state, dragged - 1) == expected

    def test_below_last_descendant_of_dragged_task(self) -> None:
        """Test that targets inside the dragged subtree stop at its own depth."""
        state = update_all(
            EMPTY,
            switch_to_filter("all"),
            add_task("Task 0"),
            add_task("Task 1", 1),
            add_task("Task 2", 1),
            add_task("Task 3", 2),
            add_task("Task 4"),
            start_drag_nth(2),
        )

        assert drop_targets_after(state, 3) == [(1, 0), ("full", 1)]

    def test_preceding_row_indentation_is_ignored(self) -> None:
        """Test that only the target row and its follower bound the range."""
        state = update_all(
            EMPTY,
            switch_to_filter("all"),
            add_task("Task 0"),
            add_task("Task 1", 1),
            add_task("Task 2"),
            add_task("Task 3", 1),
            start_drag_nth(0),
        )

        assert drop_targets_after(state, 2) == [("full", 1)]


class TestNesting:
    """Tests for changing indentation with drag and drop."""

    @pytest.mark.parametrize(("drop", "side"), [(1, "below"), (2, "above")])
    def test_indent_in_place(self, drop: int, side: str) -> None:
        """Test dropping a task next to itself one level deeper."""
        state = update_all(
            EMPTY,
            switch_to_filter("all"),
            add_task("Task 0"),
            add_task("Task 1"),
            add_task("Task 2"),
            drag_and_drop_nth(1, drop, side, 1),
        )

        assert tasks(state, "title", "indentation") == [("Task 0", 0), ("Task 1", 1), ("Task 2", 0)]

    def test_dragging_a_subtree(self) -> None:
        """Test that a parent is moved together with its children."""
        example = update_all(EMPTY, switch_to_filter("all"), add_task("Task 0"), add_task("Task 1", 1), add_task("Task 2"))
        moved = update_all(example, drag_and_drop_nth(0, 2, "below", 1))

        assert tasks(example, "title", "indentation") == [("Task 0", 0), ("Task 1", 1), ("Task 2", 0)]
        assert tasks(moved, "title", "indentation") == [("Task 2", 0), ("Task 0", 1), ("Task 1", 2)]

    @pytest.mark.parametrize("archived_indentation", [0, 1, 2])
    def test_unindent_past_hidden_archived_task(self, archived_indentation: int) -> None:
        """Test that an archived task below does not block unindenting."""
        step1 = update_all(
            EMPTY,
            switch_to_filter("all"),
            add_task("Task 0"),
            add_task("Task 1", 1),
            add_task("Task 2", archived_indentation, "archive"),
            add_task("Task 3"),
            start_drag_nth(1),
        )
        assert tasks(step1, "title", "indentation") == [("Task 0", 0), ("Task 1", 1), ("Task 3", 0)]
        assert drop_targets_after(step1, 1) == [(1, 0), ("full", 1)]

        step2 = update_all(step1, drag_and_drop_nth(1, 2, "above", 0))
        assert tasks(step2, "title", "indentation") == [("Task 0", 0), ("Task 1", 0), ("Task 3", 0)]

    def test_nest_past_hidden_archived_task(self) -> None:
        """Test nesting a task under a parent with an archived sibling in between."""
        step1 = update_all(
            EMPTY,
            switch_to_filter("all"),
            add_task("Task 0"),
            add_task("Task 1", "archive"),
            add_task("Task 2"),
            start_drag_nth(1),
        )
        assert tasks(step1, "title") == ["Task 0", "Task 2"]

        step2 = update_all(step1, drag_and_drop_nth(1, 0, "below", 1))
        assert tasks(step2, "title", "indentation") == [("Task 0", 0), ("Task 2", 1)]

    def test_nesting_inside_project_filter(self) -> None:
        """Test that indentation in a zoomed project list maps to the real depth."""
        step1 = update_all(
            EMPTY,
            switch_to_filter("all"),
            add_task("Project", "project"),
            add_task("Task 1", 1),
            add_task("Task 2", 1),
            switch_to_filter_called("Project"),
        )
        step2 = update_all(step1, drag_and_drop_nth(1, 0, "below", 1))

        assert tasks(step1, "title", "indentation") == [("Task 1", 0), ("Task 2", 0)]
        assert tasks(step2, "title", "indentation") == [("Task 1", 0), ("Task 2", 1)]

    def test_first_position_in_project_filter(self) -> None:
        """Test that the top of a project list means first child of the project."""
        step1 = update_all(
            EMPTY,
            switch_to_filter("all"),
            add_task("Project", "project"),
            add_task("Task 1", 1),
            add_task("Task 2", 1),
            switch_to_filter_called("Project"),
        )
        step2 = update_all(step1, drag_and_drop_nth(1, 0, "above", 0))

        assert tasks(step2, "title", "indentation") == [("Task 2", 0), ("Task 1", 0)]


class TestMultipleSections:
    """Tests for dragging within and between the sections of a section filter."""

    def test_reorder_inside_section(self) -> None:
        """Test reordering two subtasks inside the stalled section."""
        step1 = update_all(
            EMPTY,
            switch_to_filter("all"),
            add_task("Project", "project"),
            add_task("Task 1", 1),
            add_task("Task 2", 1),
            switch_to_filter(ACTIONS),
        )
        assert tasks_in_section(step1, "Ready", "title") == []
        assert tasks_in_section(step1, "Stalled", "title") == ["Project", "Task 1", "Task 2"]

        step2 = update_all(step1, drag_and_drop_nth(1, 2, "below", 1))
        assert tasks_in_section(step2, "Stalled", "title") == ["Project", "Task 2", "Task 1"]
        assert tasks_in_section(step2, "Stalled", "indentation") == [0, 1, 1]

    def test_dragging_into_ready_section_makes_task_ready(self) -> None:
        """Test that a drop into another section applies that section's filter."""
        step1 = update_all(
            EMPTY,
            switch_to_filter(ACTIONS),
            add_task("Task 0", "ready"),
            add_task("Task 1"),
            add_task("Task 2"),
        )
        assert tasks_in_section(step1, "Ready", "title") == ["Task 0"]
        assert tasks_in_section(step1, "Stalled", "title") == ["Task 1", "Task 2"]

        step2 = update_all(step1, drag_and_drop_nth(1, 0, "below", 0))
        assert tasks_in_section(step2, "Ready", "title") == ["Task 0", "Task 1"]
        assert tasks_in_section(step2, "Stalled", "title") == ["Task 2"]

    def test_drop_into_section_refreshes_editor(self) -> None:
        """Test that the open editor shows the status a list drop applied."""
        step1 = update_all(
            EMPTY,
            switch_to_filter(ACTIONS),
            add_task("Task 0", "ready"),
            add_task("Task 1"),
            open_nth(1),
        )
        assert step1.editor is not None and not step1.editor.actionable

        step2 = update_all(step1, drag_and_drop_nth(1, 0, "below", 0))
        assert tasks_in_section(step2, "Ready", "title") == ["Task 0", "Task 1"]
        assert step2.editor is not None
        assert step2.editor.title == "Task 1"
        assert step2.editor.actionable

    def test_task_shown_in_two_sections(self) -> None:
        """Test that a task planned today and ready moves only when dropped on stalled."""
        example = update_all(
            EMPTY,
            switch_to_filter("all"),
            add_task("Task 0"),
            add_task("Task 1"),
            drag_to_tab(0, "Today"),
            drag_to_tab(0, "Ready"),
            switch_to_filter(ACTIONS),
        )
        assert tasks_in_section(example, "Today", "title") == ["Task 0"]
        assert tasks_in_section(example, "Ready", "title") == ["Task 0"]
        assert tasks_in_section(example, "Stalled", "title") == ["Task 1"]

        unchanged = update_all(example, drag_and_drop_nth(1, 0, "below", 0))
        assert tasks_in_section(unchanged, "Ready", "title") == ["Task 0"]
        assert tasks_in_section(unchanged, "Stalled", "title") == ["Task 1"]

        moved = update_all(example, drag_and_drop_nth(1, 2, "below", 0))
        assert tasks_in_section(moved, "Today", "title") == ["Task 0"]
        assert tasks_in_section(moved, "Ready", "title") == []
        assert tasks_in_section(moved, "Stalled", "title") == ["Task 1", "Task 0"]


class TestStatusScenarios:
    """Tests for ready, stalled and paused propagation through the hierarchy."""

    def test_unfinished_child_keeps_parent_from_stalling(self) -> None:
        """Test that a parent with an open child is not stalled until the child is done."""
        example = update_all(EMPTY, switch_to_filter("all"), add_task("Parent"), add_task("Child", 1))
        finished = update_all(example, check_nth(1))

        assert badge_labels(example) == [[], ["Stalled"]]
        assert badge_labels(finished) == [["Stalled"], []]

    def test_unfinished_child_keeps_action_from_being_ready(self) -> None:
        """Test that an action becomes ready only once its children are done."""
        example = update_all(
            EMPTY,
            switch_to_filter("all"),
            add_task("Parent", "ready"),
            add_task("Child", 1, "ready"),
        )
        finished = update_all(example, check_nth(1))

        assert badge_labels(example) == [[], ["Ready"]]
        assert badge_labels(finished) == [["Ready"], []]

    def test_completed_filter_shows_hierarchy_without_subtasks(self) -> None:
        """Test that the done filter keeps ancestors of done tasks but not their open children."""
        state = update_all(
            EMPTY,
            switch_to_filter("all"),
            add_task("Task 0"),
            add_task("Task 1", 1, "done"),
            add_task("Task 2", 2),
            switch_to_filter("done"),
        )

        assert tasks(state, "title", "indentation", "done") == [("Task 0", 0, False), ("Task 1", 1, True)]

    def test_paused_filter_includes_paused_subtrees(self) -> None:
        """Test that children of a paused task are paused too."""
        state = update_all(
            EMPTY,
            switch_to_filter("all"),
            add_task("Task 0"),
            add_task("Task 1", 1, "paused"),
            add_task("Task 2", 2),
            add_task("Task 3"),
            switch_to_filter("paused"),
        )

        assert tasks(state, "title", "indentation", "paused") == [
            ("Task 0", 0, False),
            ("Task 1", 1, True),
            ("Task 2", 2, True),
        ]

    def test_stalled_filter_shows_stalled_subtasks_of_projects(self) -> None:
        """Test that only stalled descendants and their ancestors are shown."""
        state = update_all(
            EMPTY,
            switch_to_filter("all"),
            add_task("Project", "project"),
            add_task("Task 1", 1, "paused"),
            add_task("Task 2", 1, "done"),
            add_task("Task 3", 1),
            add_task("Task 4", 2),
            switch_to_filter("stalled"),
        )

        assert tasks(state, "title", "indentation") == [("Project", 0), ("Task 3", 1), ("Task 4", 2)]
        assert badge_labels(state) == [["Project", "Stalled"], [], ["Stalled"]]

    def test_stalled_subproject_is_grouped_under_ready_superproject(self) -> None:
        """Test that ready and stalled views both keep the superproject."""
        example = update_all(
            EMPTY,
            switch_to_filter("all"),
            add_task("Project 0", "project"),
            add_task("Task 1", 1, "ready"),
            add_task("Project 2", 1, "project"),
            add_task("Task 3", 2),
        )
        ready = update_all(example, switch_to_filter("ready"))
        stalled = update_all(example, switch_to_filter("stalled"))

        assert tasks(ready, "title", "indentation") == [("Project 0", 0), ("Task 1", 1)]
        assert badge_labels(ready) == [["Project", "Ready"], ["Ready"]]
        assert tasks(stalled, "title", "indentation") == [("Project 0", 0), ("Project 2", 1), ("Task 3", 2)]
        assert badge_labels(stalled) == [["Project", "Ready"], ["Project", "Stalled"], ["Stalled"]]
