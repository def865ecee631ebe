"""Widget controller: the public surface of the assistant widget core."""

import logging
import random
import string
import time
from typing import Callable, List, Optional, Tuple

from ..config.settings import ChatSettings, WidgetSettings
from ..services.chat_client import ChatClient
from ..storage.kv import KeyValueStore
from .conversation import ConversationLog
from .dispatcher import ChatDispatcher, Runner
from .drag import DragController
from .events import (
    POINTER_DOWN, POINTER_LEAVE, POINTER_MOVE, POINTER_UP, RESIZE,
    EventSource, PointerEvent, ResizeEvent,
)
from .models import Message, Notification, PointerButton, Position, RequestState, Viewport
from .position import PositionStore, chat_window_origin
from .state import (
    Close, DragChanged, Event, InputChanged, MessagesChanged, Moved,
    RequestStateChanged, ToggleOpen, WidgetState, initial_state, reduce,
)


logger = logging.getLogger(__name__)

StateListener = Callable[[WidgetState], None]


def new_session_id() -> str:
    """``session_<epoch ms>_<9 base36 chars>``"""
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=9))
    return f"session_{int(time.time() * 1000)}_{suffix}"


class WidgetController:
    """Open/closed chat window state machine plus drag, send and clear.

    All methods are meant to be called from the host's event loop. Chat
    results come back through ``runner``, which must deliver them on that
    same loop (the Qt host passes ``QtRunner``).
    """

    def __init__(
        self,
        store: KeyValueStore,
        client: ChatClient,
        runner: Runner,
        widget_settings: Optional[WidgetSettings] = None,
        chat_settings: Optional[ChatSettings] = None,
        viewport: Optional[Viewport] = None,
        user_id_provider: Callable[[], Optional[str]] = lambda: None,
        notifier: Optional[Callable[[Notification], None]] = None,
    ):
        self.widget_settings = widget_settings or WidgetSettings()
        self.chat_settings = chat_settings or ChatSettings()
        self.viewport = viewport
        self.user_id_provider = user_id_provider
        self.notifier = notifier

        self.session_id = new_session_id()
        self.positions = PositionStore(store, self.widget_settings)
        self.drag = DragController(self.positions)
        self.log = ConversationLog()
        self.dispatcher = ChatDispatcher(
            self.log,
            client,
            apology_text=self.chat_settings.apology_text,
            failure_notice=self.chat_settings.failure_notice,
            runner=runner,
            notify=self._notify,
            on_state_change=self._on_request_state,
            is_alive=lambda: self._alive,
        )

        self._state = initial_state(self.positions.load(viewport))
        self._listeners: List[StateListener] = []
        self._unsubscribers: List[Callable[[], None]] = []
        self._alive = True
        self.log.subscribe(self._on_messages)

    # === State access ===

    @property
    def state(self) -> WidgetState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state.open

    @property
    def position(self) -> Position:
        return self._state.position

    @property
    def request_state(self) -> RequestState:
        return self._state.request_state

    @property
    def messages(self) -> Tuple[Message, ...]:
        return self._state.messages

    @property
    def alive(self) -> bool:
        return self._alive

    @property
    def quick_questions(self) -> List[str]:
        return list(self.chat_settings.quick_questions)

    def chat_window_origin(self) -> Position:
        return chat_window_origin(
            self._state.position,
            self.widget_settings.chat_width,
            self.widget_settings.chat_height,
        )

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call ``listener`` with the new state after every change."""
        self._listeners.append(listener)

        def _unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # === Chat window ===

    def toggle_open(self) -> None:
        self._apply(ToggleOpen())

    def close(self) -> None:
        self._apply(Close())

    def set_input(self, text: str) -> None:
        self._apply(InputChanged(text))

    def use_quick_question(self, question: str) -> None:
        self.set_input(question)

    def send_current_input(self, text: Optional[str] = None) -> bool:
        """Send ``text`` (or the input buffer). The buffer is cleared as soon as the send is accepted."""
        if not self._alive:
            return False
        if text is None:
            text = self._state.input_text
        accepted = self.dispatcher.send(text, self.session_id, self.user_id_provider())
        if accepted:
            self._apply(InputChanged(""))
        return accepted

    def clear_conversation(self) -> None:
        self.log.clear()
        self._notify(Notification(level="success", text=self.chat_settings.cleared_notice))

    # === Pointer and viewport ===

    def on_pointer_down(self, x: float, y: float, button: PointerButton = PointerButton.PRIMARY) -> None:
        if self.drag.press(Position(x=x, y=y), self._state.position, button):
            self._apply(DragChanged(self.drag.state))

    def on_pointer_move(self, x: float, y: float) -> None:
        position = self.drag.move(Position(x=x, y=y), self.viewport)
        if position is None:
            return
        self._apply(DragChanged(self.drag.state))
        self._apply(Moved(position))

    def on_pointer_up(self, x: Optional[float] = None, y: Optional[float] = None) -> None:
        if not self.drag.dragging:
            return
        was_click = self.drag.release(self._state.position)
        self._apply(DragChanged(self.drag.state))
        if was_click:
            self.toggle_open()

    def on_pointer_leave(self) -> None:
        """Pointer left the window mid-drag: end the gesture without toggling."""
        if not self.drag.dragging:
            return
        self.drag.release(self._state.position)
        self._apply(DragChanged(self.drag.state))

    def on_resize(self, viewport: Viewport) -> None:
        self.viewport = viewport
        self._apply(Moved(self.positions.clamp_to(self._state.position, viewport)))

    # === Lifecycle ===

    def activate(self, events: EventSource) -> None:
        """Subscribe to pointer and resize events. Released again by ``teardown``."""
        self._unsubscribers.extend([
            events.subscribe(POINTER_DOWN, self._handle_pointer_down),
            events.subscribe(POINTER_MOVE, self._handle_pointer_move),
            events.subscribe(POINTER_UP, self._handle_pointer_up),
            events.subscribe(POINTER_LEAVE, lambda _event: self.on_pointer_leave()),
            events.subscribe(RESIZE, self._handle_resize),
        ])

    def teardown(self) -> None:
        """Release listeners. Responses that arrive afterwards are dropped."""
        self._alive = False
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        self._listeners = []

    def _handle_pointer_down(self, event: PointerEvent) -> None:
        self.on_pointer_down(event.x, event.y, event.button)

    def _handle_pointer_move(self, event: PointerEvent) -> None:
        self.on_pointer_move(event.x, event.y)

    def _handle_pointer_up(self, event: PointerEvent) -> None:
        self.on_pointer_up(event.x, event.y)

    def _handle_resize(self, event: ResizeEvent) -> None:
        self.on_resize(Viewport(width=event.width, height=event.height))

    # === Internals ===

    def _on_messages(self, messages: Tuple[Message, ...]) -> None:
        self._apply(MessagesChanged(messages))

    def _on_request_state(self, request_state: RequestState) -> None:
        self._apply(RequestStateChanged(request_state))

    def _apply(self, event: Event) -> None:
        if not self._alive:
            return
        new_state = reduce(self._state, event)
        if new_state == self._state:
            return
        self._state = new_state
        logger.debug("Widget event %s", type(event).__name__)
        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception:
                logger.exception("Widget state listener failed")

    def _notify(self, notification: Notification) -> None:
        if self.notifier is None or not self._alive:
            return
        try:
            self.notifier(notification)
        except Exception:
            logger.exception("Notifier failed")
