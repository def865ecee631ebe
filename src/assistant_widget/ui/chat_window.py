"""Chat window: message list, quick questions and input."""

from typing import Callable, Optional, Tuple

from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QScrollArea, QPushButton, QLabel, QTextEdit
)
from PyQt6.QtCore import Qt, QTimer, pyqtSignal
from PyQt6.QtGui import QKeyEvent

from ..core.models import Message, Role
from ..core.state import WidgetState
from .styles import Styles


class MultilineInput(QTextEdit):
    """QTextEdit that sends on Enter and adds a newline on Shift+Enter."""

    send_message = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setAcceptRichText(False)
        self.setPlaceholderText("请输入您的问题...")
        self.setLineWrapMode(QTextEdit.LineWrapMode.WidgetWidth)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)

        self.base_height = 40
        self.max_lines = 4
        self.max_height = self.base_height + self.fontMetrics().lineSpacing() * (self.max_lines - 1)
        self.setFixedHeight(self.base_height)
        self.textChanged.connect(self.adjust_height)

    def adjust_height(self):
        """Grow with content, up to max_lines."""
        new_height = int(self.document().size().height()) + 16
        new_height = max(self.base_height, min(new_height, self.max_height))
        if new_height != self.height():
            self.setFixedHeight(new_height)

    def keyPressEvent(self, event: QKeyEvent):
        if event.key() in (Qt.Key.Key_Return, Qt.Key.Key_Enter):
            if event.modifiers() == Qt.KeyboardModifier.ShiftModifier:
                super().keyPressEvent(event)
            else:
                self.send_message.emit()
                event.accept()
        else:
            super().keyPressEvent(event)


class MessageBubble(QWidget):
    """One chat message with its timestamp."""

    def __init__(self, message: Message, theme: str, parent=None):
        super().__init__(parent)
        is_user = message.role == Role.USER

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(2)

        row = QHBoxLayout()
        if is_user:
            row.addStretch(1)
        text = QLabel(message.content)
        text.setTextFormat(Qt.TextFormat.PlainText)
        text.setWordWrap(True)
        text.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        text.setStyleSheet(Styles.message(theme, is_user, message.is_error))
        row.addWidget(text, 4)
        if not is_user:
            row.addStretch(1)
        layout.addLayout(row)

        time_label = QLabel(message.timestamp.strftime("%H:%M:%S"))
        time_label.setStyleSheet(Styles.muted_label(theme))
        time_label.setAlignment(
            Qt.AlignmentFlag.AlignRight if is_user else Qt.AlignmentFlag.AlignLeft
        )
        layout.addWidget(time_label)


class ChatWindow(QWidget):
    """Renders a WidgetState; user actions leave through signals."""

    send_requested = pyqtSignal()
    clear_requested = pyqtSignal()
    close_requested = pyqtSignal()
    input_changed = pyqtSignal(str)
    quick_question_selected = pyqtSignal(str)

    def __init__(self, quick_questions, theme_provider: Callable[[], str], parent=None):
        super().__init__(parent)
        self.setWindowFlags(Qt.WindowType.Tool | Qt.WindowType.WindowStaysOnTopHint)
        self.setWindowTitle("AI助手")
        self.quick_questions = list(quick_questions)
        self.theme_provider = theme_provider

        self._rendered: Optional[Tuple[Tuple[int, ...], bool, str]] = None
        self._syncing_input = False

        self._setup_ui()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(5, 0, 5, 5)
        layout.setSpacing(0)

        layout.addWidget(self._create_header())

        self.scroll_area = QScrollArea()
        self.scroll_area.setWidgetResizable(True)
        self.scroll_area.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)

        self.chat_container = QWidget()
        self.chat_layout = QVBoxLayout(self.chat_container)
        self.chat_layout.setAlignment(Qt.AlignmentFlag.AlignTop)
        self.chat_layout.setSpacing(10)
        self.scroll_area.setWidget(self.chat_container)
        layout.addWidget(self.scroll_area)

        input_layout = QHBoxLayout()
        self.input_field = MultilineInput()
        self.input_field.send_message.connect(self.send_requested.emit)
        self.input_field.textChanged.connect(self._on_text_changed)

        self.send_button = QPushButton("➤")
        self.send_button.setFixedSize(40, 40)
        self.send_button.setStyleSheet(Styles.SEND_BUTTON)
        self.send_button.clicked.connect(self.send_requested.emit)

        input_layout.addWidget(self.input_field)
        input_layout.addWidget(self.send_button, alignment=Qt.AlignmentFlag.AlignBottom)
        layout.addLayout(input_layout)

    def _create_header(self) -> QWidget:
        header = QWidget()
        layout = QHBoxLayout(header)
        layout.setContentsMargins(10, 5, 10, 5)

        title = QLabel("🤖 AI助手")
        title.setStyleSheet("font-weight: bold; background: transparent;")
        layout.addWidget(title)
        layout.addStretch()

        clear_btn = QPushButton("🗑️")
        clear_btn.setToolTip("清空对话")
        clear_btn.setFixedSize(28, 28)
        clear_btn.setStyleSheet(Styles.ICON_BUTTON)
        clear_btn.clicked.connect(self.clear_requested.emit)
        layout.addWidget(clear_btn)

        close_btn = QPushButton("✕")
        close_btn.setToolTip("关闭")
        close_btn.setFixedSize(28, 28)
        close_btn.setStyleSheet(Styles.ICON_BUTTON)
        close_btn.clicked.connect(self.close_requested.emit)
        layout.addWidget(close_btn)

        return header

    def render_state(self, state: WidgetState):
        theme = self.theme_provider()
        self.setStyleSheet(Styles.window(theme))
        self.scroll_area.setStyleSheet(Styles.messages_area(theme))
        self.input_field.setStyleSheet(Styles.text_input(theme))

        key = (tuple(m.id for m in state.messages), state.is_thinking, theme)
        if key != self._rendered:
            self._rendered = key
            self._rebuild_messages(state, theme)

        self.send_button.setEnabled(not state.is_thinking)

        if state.input_text != self.input_field.toPlainText():
            self._syncing_input = True
            self.input_field.setPlainText(state.input_text)
            self._syncing_input = False

    def focus_input(self):
        self.input_field.setFocus()

    def _rebuild_messages(self, state: WidgetState, theme: str):
        while self.chat_layout.count():
            item = self.chat_layout.takeAt(0)
            if item.widget():
                item.widget().deleteLater()

        if not state.messages:
            self.chat_layout.addWidget(self._create_empty_state(theme))
            return

        for message in state.messages:
            self.chat_layout.addWidget(MessageBubble(message, theme))
        if state.is_thinking:
            thinking = QLabel("AI正在思考...")
            thinking.setStyleSheet(Styles.muted_label(theme))
            self.chat_layout.addWidget(thinking)
        self._scroll_to_bottom()

    def _create_empty_state(self, theme: str) -> QWidget:
        widget = QWidget()
        layout = QVBoxLayout(widget)
        greeting = QLabel("您好！我是AI助手，可以帮您解答网站功能相关问题。")
        greeting.setWordWrap(True)
        greeting.setStyleSheet(Styles.muted_label(theme))
        layout.addWidget(greeting)

        if self.quick_questions:
            layout.addWidget(QLabel("常见问题："))
            row = QHBoxLayout()
            for question in self.quick_questions:
                btn = QPushButton(question)
                btn.setStyleSheet(Styles.QUICK_QUESTION)
                btn.clicked.connect(lambda _checked=False, q=question: self.quick_question_selected.emit(q))
                row.addWidget(btn)
            row.addStretch()
            layout.addLayout(row)
        return widget

    def _on_text_changed(self):
        if not self._syncing_input:
            self.input_changed.emit(self.input_field.toPlainText())

    def _scroll_to_bottom(self):
        QTimer.singleShot(50, lambda: (
            self.scroll_area.verticalScrollBar().setValue(
                self.scroll_area.verticalScrollBar().maximum()
            )
        ))

    def closeEvent(self, event):
        # Window manager close behaves like the header close button.
        self.close_requested.emit()
        event.ignore()
