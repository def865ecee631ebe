"""Floating trigger widget: Qt host for the widget controller."""

import logging
import threading
from typing import Callable, Optional

from PyQt6.QtWidgets import QApplication, QWidget, QPushButton, QLabel, QMenu, QToolTip
from PyQt6.QtGui import QAction
from PyQt6.QtCore import Qt, QEvent, QObject, QPoint, pyqtSignal, pyqtSlot

from ..core.controller import WidgetController
from ..core.dispatcher import Job, Outcome
from ..core.events import (
    POINTER_DOWN, POINTER_LEAVE, POINTER_MOVE, POINTER_UP, RESIZE,
    EventHub, PointerEvent, ResizeEvent,
)
from ..core.models import Notification, PointerButton, Viewport
from ..core.state import WidgetState
from .chat_window import ChatWindow
from .styles import Styles


logger = logging.getLogger(__name__)

_BUTTONS = {
    Qt.MouseButton.LeftButton: PointerButton.PRIMARY,
    Qt.MouseButton.RightButton: PointerButton.SECONDARY,
    Qt.MouseButton.MiddleButton: PointerButton.MIDDLE,
}


class QtRunner(QObject):
    """Runs chat jobs on a worker thread and delivers results on the GUI thread."""

    finished = pyqtSignal(object, object)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.finished.connect(self._deliver)

    def __call__(self, job: Job, on_done: Callable[[Outcome], None]) -> None:
        def _target():
            self.finished.emit(on_done, job())

        threading.Thread(target=_target, daemon=True).start()

    @pyqtSlot(object, object)
    def _deliver(self, on_done, outcome):
        on_done(outcome)


def screen_viewport() -> Optional[Viewport]:
    screen = QApplication.primaryScreen()
    if screen is None:
        return None
    geometry = screen.availableGeometry()
    return Viewport(width=geometry.width(), height=geometry.height())


class FloatingWidget(QWidget):
    """Always-on-top trigger button. Pointer and screen events go to an EventHub the controller listens on."""

    def __init__(self, controller: WidgetController, theme_provider: Callable[[], str] = lambda: "light"):
        super().__init__()
        self.controller = controller
        self.theme_provider = theme_provider
        self.events = EventHub()
        self.size_px = controller.widget_settings.trigger_size

        # Transparent, always-on-top window exactly the size of the trigger
        self.setWindowFlags(Qt.WindowType.FramelessWindowHint | Qt.WindowType.WindowStaysOnTopHint | Qt.WindowType.Tool)
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)
        self.setFixedSize(self.size_px, self.size_px)

        self.main_btn = QPushButton("🤖", self)
        self.main_btn.setFixedSize(self.size_px, self.size_px)
        self.main_btn.setToolTip("AI助手（可拖动）")
        self.main_btn.installEventFilter(self)

        self.badge = QLabel(self)
        self.badge.setStyleSheet(Styles.badge())
        self.badge.hide()

        self.chat_window = ChatWindow(controller.quick_questions, theme_provider)
        self.chat_window.resize(controller.widget_settings.chat_width, controller.widget_settings.chat_height)
        self.chat_window.hide()
        self.chat_window.send_requested.connect(lambda: self.controller.send_current_input())
        self.chat_window.clear_requested.connect(self.controller.clear_conversation)
        self.chat_window.close_requested.connect(self.controller.close)
        self.chat_window.input_changed.connect(self.controller.set_input)
        self.chat_window.quick_question_selected.connect(self.controller.use_quick_question)

        controller.notifier = self.show_notification
        controller.subscribe(self.render_state)
        controller.activate(self.events)

        screen = QApplication.primaryScreen()
        if screen is not None:
            screen.availableGeometryChanged.connect(self._on_screen_changed)

        self.render_state(controller.state)

    # === Rendering ===

    def _origin(self) -> QPoint:
        screen = QApplication.primaryScreen()
        return screen.availableGeometry().topLeft() if screen is not None else QPoint(0, 0)

    def render_state(self, state: WidgetState):
        theme = self.theme_provider()
        origin = self._origin()
        self.move(origin.x() + int(state.position.x), origin.y() + int(state.position.y))
        self.main_btn.setStyleSheet(Styles.trigger(theme, self.size_px, state.drag.dragging))

        if state.badge_count:
            self.badge.setText(str(state.badge_count))
            self.badge.adjustSize()
            self.badge.move(self.size_px - self.badge.width(), 0)
            self.badge.show()
            self.badge.raise_()
        else:
            self.badge.hide()

        if state.open:
            window_origin = self.controller.chat_window_origin()
            self.chat_window.move(origin.x() + int(window_origin.x), origin.y() + int(window_origin.y))
            self.chat_window.render_state(state)
            if not self.chat_window.isVisible():
                self.chat_window.show()
                self.chat_window.raise_()
                self.chat_window.activateWindow()
                self.chat_window.focus_input()
        elif self.chat_window.isVisible():
            self.chat_window.hide()

    def show_notification(self, notification: Notification):
        logger.info("Notification (%s): %s", notification.level, notification.text)
        anchor = self.chat_window if self.chat_window.isVisible() else self
        QToolTip.showText(anchor.mapToGlobal(QPoint(0, 0)), notification.text, anchor)

    # === Events ===

    def _pointer(self, event, button: PointerButton = PointerButton.PRIMARY) -> PointerEvent:
        point = event.globalPosition().toPoint() - self._origin()
        return PointerEvent(x=point.x(), y=point.y(), button=button)

    def eventFilter(self, obj, event):
        if obj == self.main_btn:
            if event.type() == QEvent.Type.MouseButtonPress:
                if event.button() == Qt.MouseButton.RightButton:
                    self.show_menu()
                    return True
                button = _BUTTONS.get(event.button(), PointerButton.MIDDLE)
                self.events.publish(POINTER_DOWN, self._pointer(event, button))
                return False

            elif event.type() == QEvent.Type.MouseMove and (event.buttons() & Qt.MouseButton.LeftButton):
                self.events.publish(POINTER_MOVE, self._pointer(event))
                return True

            elif event.type() == QEvent.Type.MouseButtonRelease and event.button() == Qt.MouseButton.LeftButton:
                # clicked is never connected; the controller decides click vs drag.
                was_dragging = self.controller.drag.state.moved
                self.events.publish(POINTER_UP, self._pointer(event))
                if was_dragging:
                    self.main_btn.setDown(False)
                    return True
                return False

            elif event.type() == QEvent.Type.Leave and self.controller.drag.dragging and not self.underMouse():
                self.events.publish(POINTER_LEAVE, None)
                return False

        return super().eventFilter(obj, event)

    def _on_screen_changed(self, geometry):
        self.events.publish(RESIZE, ResizeEvent(width=geometry.width(), height=geometry.height()))

    def show_menu(self):
        menu = QMenu(self)
        clear_action = QAction("清空对话", self)
        clear_action.triggered.connect(self.controller.clear_conversation)
        menu.addAction(clear_action)
        menu.addSeparator()
        quit_action = QAction("退出", self)
        quit_action.triggered.connect(self.quit_app)
        menu.addAction(quit_action)
        menu.exec(self.mapToGlobal(QPoint(0, self.size_px)))

    def quit_app(self):
        self.close()
        app = QApplication.instance()
        if app is not None:
            app.quit()

    def closeEvent(self, event):
        self.controller.teardown()
        self.chat_window.hide()
        event.accept()
