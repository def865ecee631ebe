"""Network services used by the widget."""

from .chat_client import ChatClient, ChatReply, ChatRequest, ChatServiceError

__all__ = ["ChatClient", "ChatReply", "ChatRequest", "ChatServiceError"]
