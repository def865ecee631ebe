"""UI module with the PyQt6 floating trigger and chat window."""

from .widget import FloatingWidget, QtRunner, screen_viewport
from .chat_window import ChatWindow
from .styles import Styles

__all__ = ["FloatingWidget", "QtRunner", "screen_viewport", "ChatWindow", "Styles"]
