"""Append-only, ordered log of conversation messages."""

from collections.abc import Iterator

from edumate.models.session import Message, Role


class MessageView:
    """Lazy, restartable view over a message log in insertion order.

    Each iteration reflects the log's contents at the moment it starts.
    """

    def __init__(self, log: "MessageLog") -> None:
        self._log = log

    def __iter__(self) -> Iterator[Message]:
        return iter(tuple(self._log._messages))

    def __len__(self) -> int:
        return len(self._log)


class MessageLog:
    """Ordered sequence of messages.

    Messages are never reordered or removed individually; ``clear`` is
    the only removal path and restarts numbering at 1.
    """

    def __init__(self) -> None:
        self._messages: list[Message] = []
        self._next_sequence = 1

    def __len__(self) -> int:
        return len(self._messages)

    @property
    def next_sequence(self) -> int:
        return self._next_sequence

    def append(self, message: Message) -> Message:
        """Append a message whose sequence is at least the next expected one.

        Raises:
            ValueError: If the sequence number would not strictly increase.
        """
        if message.sequence < self._next_sequence:
            raise ValueError(
                f"Sequence {message.sequence} does not follow {self._next_sequence - 1}"
            )
        self._messages.append(message)
        self._next_sequence = message.sequence + 1
        return message

    def add(self, role: Role, content: str) -> Message:
        """Build the next message for ``role`` and append it."""
        return self.append(Message(role=role, content=content, sequence=self._next_sequence))

    def all(self) -> MessageView:
        return MessageView(self)

    def clear(self) -> None:
        self._messages = []
        self._next_sequence = 1
