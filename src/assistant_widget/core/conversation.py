"""Session-scoped conversation log."""

import itertools
import logging
from typing import Any, Callable, Iterator, List, Optional, Tuple

from .models import Message, Role


logger = logging.getLogger(__name__)

LogObserver = Callable[[Tuple[Message, ...]], None]


class ConversationLog:
    """Append-only list of messages for one widget session.

    Observers are called with a snapshot after every append or clear; the UI
    uses that to scroll to the newest message.
    """

    def __init__(self):
        self._messages: List[Message] = []
        self._ids = itertools.count(1)
        self._observers: List[LogObserver] = []

    @property
    def messages(self) -> Tuple[Message, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self.messages)

    def new_message(self, role: Role, content: str, is_error: bool = False,
                    context: Optional[Any] = None) -> Message:
        """Build a message carrying the next id. Ids keep increasing across clears."""
        return Message(id=next(self._ids), role=role, content=content,
                       is_error=is_error, context=context)

    def append(self, message: Message) -> None:
        if self._messages and message.id <= self._messages[-1].id:
            raise ValueError(
                f"Message id {message.id} is not greater than last id {self._messages[-1].id}"
            )
        self._messages.append(message)
        self._notify()

    def clear(self) -> None:
        self._messages = []
        self._notify()

    def subscribe(self, observer: LogObserver) -> Callable[[], None]:
        self._observers.append(observer)

        def _unsubscribe():
            if observer in self._observers:
                self._observers.remove(observer)

        return _unsubscribe

    def _notify(self) -> None:
        snapshot = self.messages
        for observer in list(self._observers):
            try:
                observer(snapshot)
            except Exception:
                logger.exception("Conversation observer failed")
