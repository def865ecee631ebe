"""HTTP client for the assistant chat endpoint."""

import logging
from typing import Any, Optional

import requests
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..config.settings import ChatSettings


logger = logging.getLogger(__name__)


class ChatServiceError(Exception):
    """Chat request failed: transport error, non-success status or malformed body."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ChatRequest(BaseModel):
    """Request body for ``POST /api/ai-chat``."""

    model_config = ConfigDict(populate_by_name=True)

    question: str
    session_id: str = Field(..., alias="sessionId")
    user_id: Optional[str] = Field(None, alias="userId")


class ChatReply(BaseModel):
    """Success body returned by the chat endpoint."""

    answer: str
    context: Optional[Any] = None


class ChatClient:
    """Single-attempt client for the chat endpoint.

    Args:
        base_url: Service root, e.g. ``http://localhost:3001``
        endpoint: Path of the chat route
        timeout: Seconds before giving up; None keeps the transport default
        session: Optional ``requests.Session`` (injected in tests)
    """

    def __init__(
        self,
        base_url: str,
        endpoint: str = "/api/ai-chat",
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.url = base_url.rstrip("/") + "/" + endpoint.lstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: ChatSettings, session: Optional[requests.Session] = None) -> "ChatClient":
        return cls(
            base_url=settings.base_url,
            endpoint=settings.endpoint,
            timeout=settings.timeout,
            session=session,
        )

    def ask(self, question: str, session_id: str, user_id: Optional[str] = None) -> ChatReply:
        """Send one question and return the parsed reply.

        Raises:
            ChatServiceError: on any failure
        """
        payload = ChatRequest(question=question, session_id=session_id, user_id=user_id)
        try:
            response = self.session.post(
                self.url,
                json=payload.model_dump(by_alias=True),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ChatServiceError(f"Chat request failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise ChatServiceError(
                f"Chat service returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ChatServiceError(f"Chat service returned invalid JSON: {e}") from e

        try:
            return ChatReply.model_validate(data)
        except ValidationError as e:
            raise ChatServiceError(f"Chat service returned a malformed reply: {e}") from e

    def close(self) -> None:
        self.session.close()
