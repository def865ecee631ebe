"""One request/response cycle against the chat endpoint."""

import logging
from typing import Callable, Optional, Union

from ..services.chat_client import ChatClient, ChatReply
from .conversation import ConversationLog
from .models import Notification, RequestState, Role


logger = logging.getLogger(__name__)

Outcome = Union[ChatReply, Exception]
Job = Callable[[], Outcome]
# A runner executes the job off the event loop and must call on_done back on
# the loop thread (see ui.widget.QtRunner).
Runner = Callable[[Job, Callable[[Outcome], None]], None]


class ChatDispatcher:
    """Sends user questions, one at a time, and records both sides in the log.

    A send is accepted only when the trimmed text is non-empty and no request
    is pending. The result is applied through ``on_done`` of the runner, which
    the host supplies so completion lands on its event loop; when ``is_alive``
    reports the owner has been torn down it is dropped.
    """

    def __init__(
        self,
        log: ConversationLog,
        client: ChatClient,
        apology_text: str,
        failure_notice: str,
        runner: Runner,
        notify: Optional[Callable[[Notification], None]] = None,
        on_state_change: Optional[Callable[[RequestState], None]] = None,
        is_alive: Callable[[], bool] = lambda: True,
    ):
        self.log = log
        self.client = client
        self.apology_text = apology_text
        self.failure_notice = failure_notice
        self.runner = runner
        self.notify = notify
        self.on_state_change = on_state_change
        self.is_alive = is_alive
        self._state = RequestState.IDLE

    @property
    def request_state(self) -> RequestState:
        return self._state

    @property
    def pending(self) -> bool:
        return self._state == RequestState.PENDING

    def send(self, user_text: str, session_id: str, user_id: Optional[str] = None) -> bool:
        """Start a request. Returns False (and changes nothing) if rejected."""
        question = (user_text or "").strip()
        if not question or self.pending:
            return False

        self.log.append(self.log.new_message(Role.USER, question))
        self._set_state(RequestState.PENDING)

        def _job() -> Outcome:
            try:
                return self.client.ask(question, session_id, user_id)
            except Exception as e:
                return e

        self.runner(_job, self._complete)
        return True

    def _complete(self, outcome: Outcome) -> None:
        if not self.is_alive():
            logger.debug("Dropping chat response for a torn-down widget")
            return

        if isinstance(outcome, ChatReply):
            self.log.append(self.log.new_message(
                Role.ASSISTANT, outcome.answer, context=outcome.context,
            ))
        else:
            logger.error("Failed to send message: %s", outcome)
            self.log.append(self.log.new_message(
                Role.ASSISTANT, self.apology_text, is_error=True,
            ))
            self._notify(Notification(level="error", text=self.failure_notice))

        self._set_state(RequestState.IDLE)

    def _set_state(self, state: RequestState) -> None:
        self._state = state
        if self.on_state_change:
            try:
                self.on_state_change(state)
            except Exception:
                logger.exception("Request state observer failed")

    def _notify(self, notification: Notification) -> None:
        if self.notify:
            try:
                self.notify(notification)
            except Exception:
                logger.exception("Notifier failed")
