import logging

from conftest import make_task
from taskboard.events import Notifier, TaskEvent, shared_event, toggled_event
from taskboard.models import TaskStatus


def event(kind="created", task_id="1"):
    return TaskEvent(kind=kind, task_id=task_id, title="t", message="m")


class TestNotifier:
    def test_subscribers_receive_events_in_order(self):
        notifier = Notifier()
        seen = []
        notifier.subscribe(lambda e: seen.append(("a", e.task_id)))
        notifier.subscribe(lambda e: seen.append(("b", e.task_id)))
        notifier.publish(event(task_id="7"))
        assert seen == [("a", "7"), ("b", "7")]

    def test_unsubscribe(self):
        notifier = Notifier()
        seen = []
        unsubscribe = notifier.subscribe(seen.append)
        unsubscribe()
        unsubscribe()
        notifier.publish(event())
        assert seen == []

    def test_failing_subscriber_is_logged_and_skipped(self, caplog):
        notifier = Notifier()
        seen = []

        def broken(_):
            raise RuntimeError("boom")

        notifier.subscribe(broken)
        notifier.subscribe(seen.append)
        with caplog.at_level(logging.ERROR, logger="taskboard.events"):
            notifier.publish(event())
        assert len(seen) == 1
        assert "subscriber failed" in caplog.text

    def test_recent_is_bounded_and_newest_first(self):
        notifier = Notifier(history=3)
        for i in range(5):
            notifier.publish(event(task_id=str(i)))
        assert [e.task_id for e in notifier.recent()] == ["4", "3", "2"]
        assert [e.task_id for e in notifier.recent(limit=1)] == ["4"]


class TestMessages:
    def test_share_message_pluralization(self):
        task = make_task("1")
        task["shared_with"] = ["a@x.com"]
        assert shared_event(task).message == "Task has been shared with 1 user."
        task["shared_with"] = ["a@x.com", "b@x.com"]
        assert shared_event(task).message == "Task has been shared with 2 users."

    def test_toggle_messages_follow_new_status(self):
        done = make_task("1", status=TaskStatus.COMPLETED)
        assert toggled_event(done).title == "Task completed"
        reopened = make_task("1", status=TaskStatus.TODO)
        assert toggled_event(reopened).title == "Task reopened"
