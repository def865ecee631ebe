"""Pointer and resize event plumbing between a host UI and the controller."""

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Protocol

from .models import PointerButton


logger = logging.getLogger(__name__)

POINTER_DOWN = "pointer_down"
POINTER_MOVE = "pointer_move"
POINTER_UP = "pointer_up"
POINTER_LEAVE = "pointer_leave"
RESIZE = "resize"


@dataclass(frozen=True)
class PointerEvent:
    x: float
    y: float
    button: PointerButton = PointerButton.PRIMARY


@dataclass(frozen=True)
class ResizeEvent:
    width: float
    height: float


Handler = Callable[[Any], None]


class EventSource(Protocol):
    """Something the controller can subscribe to. ``subscribe`` returns the unsubscribe call."""

    def subscribe(self, event_type: str, handler: Handler) -> Callable[[], None]:
        ...


class EventHub:
    """In-process EventSource. Hosts publish into it; the controller listens."""

    def __init__(self):
        self._handlers: Dict[str, List[Handler]] = defaultdict(list)

    def subscribe(self, event_type: str, handler: Handler) -> Callable[[], None]:
        self._handlers[event_type].append(handler)

        def _unsubscribe():
            handlers = self._handlers.get(event_type, [])
            if handler in handlers:
                handlers.remove(handler)

        return _unsubscribe

    def publish(self, event_type: str, event: Any) -> None:
        for handler in list(self._handlers.get(event_type, [])):
            try:
                handler(event)
            except Exception:
                logger.exception("Handler for %s failed", event_type)

    def handler_count(self, event_type: str) -> int:
        return len(self._handlers.get(event_type, []))
