"""Tests for TaskRunner tree mutation and introspection."""

import pytest

from tasker.core import (
    RunnerOptions,
    TaskExistsError,
    TaskNotFoundError,
    TaskRunner,
    WorkShape,
)


class TestAddTask:
    """Tests for TaskRunner.add_task."""

    def test_add_without_dependencies(self, runner):
        """Omitted dependencies become an empty list."""
        runner.add_task("build")
        assert runner.list_tasks() == {"build": []}

    def test_single_dependency_name(self, runner):
        """A single name is wrapped in a list."""
        runner.add_task("bundle", "compile")
        assert runner.list_tasks() == {"bundle": ["compile"]}

    def test_duplicate_dependencies_collapsed(self, runner):
        """Duplicate dependency names are kept once, in order."""
        runner.add_task("a", ["b", "c", "b"])
        assert runner.list_tasks()["a"] == ["b", "c"]

    def test_dependencies_need_not_exist(self, runner):
        """Dependencies are only checked at run time."""
        runner.add_task("a", ["later"])
        assert "later" not in runner

    def test_work_as_second_argument(self, runner):
        """add_task(name, work) registers work without dependencies."""

        def build():
            return "ok"

        runner.add_task("build", build)
        task = runner.get_task("build")
        assert task.dependencies == []
        assert task.work.fn is build

    def test_missing_work_is_noop(self, runner):
        """Tasks without work get a no-op."""
        runner.add_task("group", ["a", "b"])
        assert runner.get_task("group").work.shape is WorkShape.NOOP

    def test_missing_name_rejected(self, runner):
        """A missing name is an invalid argument."""
        with pytest.raises(ValueError, match="Missing task name"):
            runner.add_task(None)
        with pytest.raises(ValueError, match="Missing task name"):
            runner.add_task("")

    def test_non_callable_work_rejected(self, runner):
        """Work must be callable."""
        with pytest.raises(ValueError, match="callable"):
            runner.add_task("a", [], work=42)

    def test_duplicate_name_rejected_by_default(self, runner):
        """Re-adding a task raises TaskExistsError."""
        runner.add_task("t")
        with pytest.raises(TaskExistsError, match="Task 't' already exists"):
            runner.add_task("t")

    def test_overwrite_allowed(self):
        """throw_on_overwrite=False silently replaces the task."""
        runner = TaskRunner(throw_on_overwrite=False)
        runner.add_task("t", ["a"], lambda: 1)
        runner.add_task("t", ["b"], lambda: 2)
        assert runner.list_tasks() == {"t": ["b"]}

    def test_chaining(self, runner):
        """Mutations return the runner."""
        runner.add_task("a").add_task("b", "a").add_dependencies("b", "c")
        assert runner.list_tasks() == {"a": [], "b": ["a", "c"]}


class TestRemoveTask:
    """Tests for TaskRunner.remove_task."""

    def test_remove_existing(self, runner):
        """Removed tasks disappear from the tree."""
        runner.add_task("a")
        runner.remove_task("a")
        assert len(runner) == 0

    def test_remove_absent_is_noop(self, runner):
        """Removing an unknown task does nothing."""
        runner.remove_task("ghost")
        assert runner.list_tasks() == {}

    def test_dependents_keep_link(self, runner):
        """Other tasks keep their dependency on a removed task."""
        runner.add_task("a")
        runner.add_task("b", "a")
        runner.remove_task("a")
        assert runner.list_tasks() == {"b": ["a"]}

    def test_missing_name_rejected(self, runner):
        """A missing name is an invalid argument."""
        with pytest.raises(ValueError):
            runner.remove_task(None)


class TestDependencies:
    """Tests for add_dependencies and remove_dependencies."""

    def test_add_dependencies(self, runner):
        """New links are appended once."""
        runner.add_task("a", "b")
        runner.add_dependencies("a", ["b", "c", "c"])
        runner.add_dependencies("a", "d")
        assert runner.list_tasks()["a"] == ["b", "c", "d"]

    def test_add_dependencies_to_missing_task(self, runner):
        """The parent task must exist."""
        with pytest.raises(TaskNotFoundError, match="missing task 'ghost'") as exc_info:
            runner.add_dependencies("ghost", "a")
        assert exc_info.value.name == "ghost"

    def test_add_dependencies_requires_arguments(self, runner):
        """Both arguments are required."""
        runner.add_task("a")
        with pytest.raises(ValueError, match="Missing task name"):
            runner.add_dependencies(None, "b")
        with pytest.raises(ValueError, match="Missing dependencies"):
            runner.add_dependencies("a", None)

    def test_remove_dependencies(self, runner):
        """Listed links are stripped, others kept."""
        runner.add_task("a", ["b", "c", "d"])
        runner.remove_dependencies("a", ["b", "d", "zzz"])
        assert runner.list_tasks()["a"] == ["c"]

    def test_remove_single_dependency(self, runner):
        """A single name is accepted."""
        runner.add_task("a", ["b", "c"])
        runner.remove_dependencies("a", "c")
        assert runner.list_tasks()["a"] == ["b"]

    def test_remove_dependencies_from_missing_task(self, runner):
        """Unknown parent tasks are ignored."""
        runner.remove_dependencies("ghost", "a")

    def test_remove_dependencies_requires_arguments(self, runner):
        """Both arguments are required."""
        with pytest.raises(ValueError, match="Missing task name"):
            runner.remove_dependencies("", "b")
        with pytest.raises(ValueError, match="Missing dependencies"):
            runner.remove_dependencies("a", None)


class TestIntrospection:
    """Tests for list_tasks, execution_order and dunder helpers."""

    def test_list_tasks_returns_copies(self, runner):
        """Mutating the listing does not touch the tree."""
        runner.add_task("a", "b")
        runner.list_tasks()["a"].append("c")
        assert runner.list_tasks() == {"a": ["b"]}

    def test_contains_len_repr(self, runner):
        """Container helpers reflect registered tasks."""
        runner.add_task("a")
        runner.add_task("b")
        assert "a" in runner
        assert "z" not in runner
        assert len(runner) == 2
        assert repr(runner) == "TaskRunner(['a', 'b'])"

    def test_options_and_overrides(self):
        """Keyword overrides are applied on top of options."""
        on_end = lambda name: None  # noqa: E731
        runner = TaskRunner(RunnerOptions(on_task_end=on_end), throw_on_overwrite=False)
        assert runner.options.on_task_end is on_end
        assert runner.options.throw_on_overwrite is False
        assert TaskRunner().options == RunnerOptions()

    def test_execution_order_dependencies_first(self, runner):
        """Dependencies come before dependents, each task once."""
        runner.add_task("deploy", ["bundle", "test"])
        runner.add_task("bundle", "compile")
        runner.add_task("test", "compile")
        runner.add_task("compile")
        runner.add_task("unrelated")

        order = runner.execution_order("deploy")

        assert sorted(order) == ["bundle", "compile", "deploy", "test"]
        assert order.index("compile") < order.index("bundle")
        assert order.index("compile") < order.index("test")
        assert order[-1] == "deploy"

    def test_execution_order_missing_task(self, runner):
        """Missing dependencies are reported by name."""
        runner.add_task("a", "b")
        with pytest.raises(TaskNotFoundError) as exc_info:
            runner.execution_order("a")
        assert exc_info.value.name == "b"

    def test_execution_order_cycle(self, runner):
        """Cycles are reported."""
        from tasker.core import CycleError

        runner.add_task("a", "b")
        runner.add_task("b", "a")
        with pytest.raises(CycleError, match="Cycle found at 'a'"):
            runner.execution_order("a")

    def test_execution_order_deep_chain(self, runner):
        """Long chains are ordered without exhausting the call stack."""
        depth = 2000
        runner.add_task("t0")
        for i in range(1, depth):
            runner.add_task(f"t{i}", f"t{i - 1}")

        assert runner.execution_order(f"t{depth - 1}") == [f"t{i}" for i in range(depth)]
