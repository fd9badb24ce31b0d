"""Unit tests for MessageLog ordering and reset behaviour."""

import pytest
import pytest_check as check
from pydantic import ValidationError

from edumate.models.session import Message, Role
from edumate.session.message_log import MessageLog


class TestAppend:
    """Tests for appending messages."""

    def test_add_assigns_increasing_sequences(self) -> None:
        """Messages are numbered from 1 in insertion order."""
        log = MessageLog()

        first = log.add(Role.ASSISTANT, "Hello")
        second = log.add(Role.USER, "Hi")

        check.equal(first.sequence, 1)
        check.equal(second.sequence, 2)
        check.equal([m.content for m in log.all()], ["Hello", "Hi"])

    def test_append_accepts_gaps(self) -> None:
        """Sequences must increase but need not be contiguous."""
        log = MessageLog()
        log.append(Message(role=Role.USER, content="a", sequence=1))
        log.append(Message(role=Role.USER, content="b", sequence=5))

        assert log.next_sequence == 6
        assert len(log) == 2

    def test_append_rejects_duplicate_sequence(self) -> None:
        """A repeated sequence number is refused and the log is unchanged."""
        log = MessageLog()
        log.add(Role.USER, "a")

        with pytest.raises(ValueError, match="does not follow"):
            log.append(Message(role=Role.USER, content="b", sequence=1))

        assert len(log) == 1

    def test_messages_are_immutable(self) -> None:
        """Appended messages cannot be edited in place."""
        log = MessageLog()
        message = log.add(Role.USER, "original")

        with pytest.raises(ValidationError):
            message.content = "edited"  # type: ignore[misc]


class TestView:
    """Tests for the lazy message view."""

    def test_view_is_restartable(self) -> None:
        """Iterating twice yields the same messages."""
        log = MessageLog()
        log.add(Role.USER, "a")
        log.add(Role.ASSISTANT, "b")
        view = log.all()

        assert list(view) == list(view)

    def test_view_reflects_later_appends(self) -> None:
        """A view taken earlier sees messages appended afterwards."""
        log = MessageLog()
        view = log.all()
        log.add(Role.USER, "late")

        assert [m.content for m in view] == ["late"]
        assert len(view) == 1


class TestClear:
    """Tests for clearing the log."""

    def test_clear_empties_and_restarts_numbering(self) -> None:
        """After clear the log is empty and numbering restarts at 1."""
        log = MessageLog()
        log.add(Role.USER, "a")
        log.add(Role.ASSISTANT, "b")

        log.clear()

        check.equal(len(log), 0)
        check.equal(list(log.all()), [])
        check.equal(log.add(Role.USER, "again").sequence, 1)
