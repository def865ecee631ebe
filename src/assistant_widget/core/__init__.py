"""UI-free interaction core of the assistant widget."""

from .controller import WidgetController, new_session_id
from .conversation import ConversationLog
from .dispatcher import ChatDispatcher, Runner
from .drag import DragController
from .events import EventHub, EventSource, PointerEvent, ResizeEvent
from .models import (
    DragState,
    Message,
    Notification,
    PointerButton,
    Position,
    RequestState,
    Role,
    Viewport,
)
from .position import PositionStore, chat_window_origin, clamp
from .state import WidgetState, reduce

__all__ = [
    "WidgetController",
    "new_session_id",
    "ConversationLog",
    "ChatDispatcher",
    "Runner",
    "DragController",
    "EventHub",
    "EventSource",
    "PointerEvent",
    "ResizeEvent",
    "DragState",
    "Message",
    "Notification",
    "PointerButton",
    "Position",
    "RequestState",
    "Role",
    "Viewport",
    "PositionStore",
    "chat_window_origin",
    "clamp",
    "WidgetState",
    "reduce",
]
