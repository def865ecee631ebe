"""Widget state and its pure transition function."""

from dataclasses import dataclass
from typing import Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from .models import DragState, Message, Position, RequestState


class WidgetState(BaseModel):
    """Everything a renderer needs to draw the widget."""

    model_config = ConfigDict(frozen=True)

    open: bool = False
    position: Position
    drag: DragState = Field(default_factory=DragState)
    request_state: RequestState = RequestState.IDLE
    messages: Tuple[Message, ...] = ()
    input_text: str = ""

    @property
    def is_thinking(self) -> bool:
        return self.request_state == RequestState.PENDING

    @property
    def badge_count(self) -> int:
        return len(self.messages)


@dataclass(frozen=True)
class ToggleOpen:
    pass


@dataclass(frozen=True)
class Close:
    pass


@dataclass(frozen=True)
class InputChanged:
    text: str


@dataclass(frozen=True)
class DragChanged:
    drag: DragState


@dataclass(frozen=True)
class Moved:
    position: Position


@dataclass(frozen=True)
class RequestStateChanged:
    request_state: RequestState


@dataclass(frozen=True)
class MessagesChanged:
    messages: Tuple[Message, ...]


Event = Union[ToggleOpen, Close, InputChanged, DragChanged, Moved, RequestStateChanged, MessagesChanged]


def initial_state(position: Position) -> WidgetState:
    return WidgetState(position=position)


def reduce(state: WidgetState, event: Event) -> WidgetState:
    """Return the state after ``event``. Never mutates ``state``."""
    if isinstance(event, ToggleOpen):
        # A drag in progress owns the pointer; its release must not toggle.
        if state.drag.dragging:
            return state
        return state.model_copy(update={"open": not state.open})
    elif isinstance(event, Close):
        return state.model_copy(update={"open": False})
    elif isinstance(event, InputChanged):
        return state.model_copy(update={"input_text": event.text})
    elif isinstance(event, DragChanged):
        return state.model_copy(update={"drag": event.drag})
    elif isinstance(event, Moved):
        return state.model_copy(update={"position": event.position})
    elif isinstance(event, RequestStateChanged):
        return state.model_copy(update={"request_state": event.request_state})
    elif isinstance(event, MessagesChanged):
        return state.model_copy(update={"messages": event.messages})
    raise TypeError(f"Unknown widget event: {event!r}")
