from datetime import date, datetime

from conftest import make_task
from taskboard.models import TaskPriority, TaskStatus
from taskboard.query import (
    PriorityFilter,
    QuerySpec,
    QueryView,
    SortKey,
    StatusFilter,
    apply_query,
    matches,
    sort_tasks,
)


def ids(tasks):
    return [t["id"] for t in tasks]


def sample():
    return [
        make_task("1", "Design new landing page", "Wireframes and mockups",
                  TaskStatus.IN_PROGRESS, TaskPriority.HIGH, date(2025, 7, 8), datetime(2025, 7, 1)),
        make_task("2", "Set up CI/CD pipeline", None,
                  TaskStatus.TODO, TaskPriority.MEDIUM, None, datetime(2025, 7, 2)),
        make_task("3", "Review pull requests", "Review and merge pending pull requests",
                  TaskStatus.COMPLETED, TaskPriority.LOW, date(2025, 7, 5), datetime(2025, 7, 3)),
        make_task("4", "Client meeting preparation", "Prepare presentation",
                  TaskStatus.TODO, TaskPriority.HIGH, None, datetime(2025, 7, 4)),
    ]


class TestFilter:
    def test_unfiltered_view_is_a_permutation(self):
        tasks = sample()
        for key in SortKey:
            result = apply_query(tasks, QuerySpec(sort_by=key))
            assert sorted(ids(result)) == sorted(ids(tasks))

    def test_search_title_case_insensitive(self):
        proposal = make_task("a", "Complete project proposal")
        review = make_task("b", "Review feedback", "no mention here")
        spec = QuerySpec(search_term="PROPOSAL")
        assert matches(proposal, spec)
        assert not matches(review, spec)

    def test_search_description(self):
        result = apply_query(sample(), QuerySpec(search_term="merge"))
        assert ids(result) == ["3"]

    def test_missing_description_never_matches(self):
        task = make_task("a", "Title", None)
        assert not matches(task, QuerySpec(search_term="none"))

    def test_status_filter(self):
        result = apply_query(sample(), QuerySpec(status_filter=StatusFilter.TODO))
        assert all(t["status"] == TaskStatus.TODO for t in result)
        assert sorted(ids(result)) == ["2", "4"]

    def test_priority_filter(self):
        result = apply_query(sample(), QuerySpec(priority_filter=PriorityFilter.HIGH))
        assert sorted(ids(result)) == ["1", "4"]

    def test_filters_combine(self):
        spec = QuerySpec(
            search_term="p",
            status_filter=StatusFilter.TODO,
            priority_filter=PriorityFilter.HIGH,
        )
        assert ids(apply_query(sample(), spec)) == ["4"]

    def test_is_filtered(self):
        assert not QuerySpec(sort_by=SortKey.DUE).is_filtered
        assert QuerySpec(search_term="x").is_filtered
        assert QuerySpec(status_filter=StatusFilter.COMPLETED).is_filtered
        assert QuerySpec(priority_filter=PriorityFilter.LOW).is_filtered


class TestSort:
    def test_created_newest_first(self):
        tasks = [
            make_task("a", created_at=datetime(2024, 1, 1)),
            make_task("b", created_at=datetime(2024, 1, 2)),
            make_task("c", created_at=datetime(2024, 1, 3)),
        ]
        assert ids(sort_tasks(tasks, SortKey.CREATED)) == ["c", "b", "a"]

    def test_priority_high_first(self):
        tasks = [make_task("B", priority=TaskPriority.LOW), make_task("A", priority=TaskPriority.HIGH)]
        assert ids(sort_tasks(tasks, SortKey.PRIORITY)) == ["A", "B"]

    def test_priority_ties_keep_order(self):
        result = sort_tasks(sample(), SortKey.PRIORITY)
        assert ids(result) == ["1", "4", "2", "3"]

    def test_status_workflow_order(self):
        result = sort_tasks(sample(), SortKey.STATUS)
        assert ids(result) == ["2", "4", "1", "3"]

    def test_due_undated_last_in_original_order(self):
        tasks = [
            make_task("x"),
            make_task("late", due_date=date(2025, 2, 1)),
            make_task("y"),
            make_task("early", due_date=date(2025, 1, 1)),
            make_task("z"),
        ]
        assert ids(sort_tasks(tasks, SortKey.DUE)) == ["early", "late", "x", "y", "z"]


class TestPurity:
    def test_same_spec_twice_gives_same_result(self):
        tasks = sample()
        spec = QuerySpec(search_term="re", sort_by=SortKey.DUE)
        assert apply_query(tasks, spec) == apply_query(tasks, spec)

    def test_input_not_modified(self):
        tasks = sample()
        before = ids(tasks)
        result = apply_query(tasks, QuerySpec(sort_by=SortKey.PRIORITY))
        result[0]["title"] = "changed"
        assert ids(tasks) == before
        assert "changed" not in [t["title"] for t in tasks]


class TestQueryView:
    def test_reuses_result_until_version_or_spec_changes(self):
        calls = []

        def load():
            calls.append(1)
            return sample()

        view = QueryView()
        spec = QuerySpec()
        view.compute(1, load, spec)
        view.compute(1, load, spec)
        assert len(calls) == 1
        view.compute(2, load, spec)
        assert len(calls) == 2
        view.compute(2, load, QuerySpec(sort_by=SortKey.STATUS))
        assert len(calls) == 3

    def test_invalidate_forces_recompute(self):
        calls = []

        def load():
            calls.append(1)
            return sample()

        view = QueryView()
        view.compute(1, load, QuerySpec())
        view.invalidate()
        view.compute(1, load, QuerySpec())
        assert len(calls) == 2
