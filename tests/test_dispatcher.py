import pytest

from assistant_widget.core.conversation import ConversationLog
from assistant_widget.core.dispatcher import ChatDispatcher
from assistant_widget.core.models import RequestState, Role

from conftest import StubClient, sync_runner

APOLOGY = "sorry"
NOTICE = "send failed"


def _dispatcher(client, runner=sync_runner, **kwargs):
    log = ConversationLog()
    notices = []
    states = []
    dispatcher = ChatDispatcher(
        log,
        client,
        apology_text=APOLOGY,
        failure_notice=NOTICE,
        runner=runner,
        notify=notices.append,
        on_state_change=states.append,
        **kwargs,
    )
    return dispatcher, log, notices, states


def test_whitespace_is_rejected_silently(stub_client):
    dispatcher, log, notices, states = _dispatcher(stub_client)
    assert dispatcher.send("   ", "s") is False
    assert len(log) == 0
    assert dispatcher.request_state == RequestState.IDLE
    assert stub_client.calls == []
    assert states == []


def test_success_appends_user_then_assistant(stub_client):
    dispatcher, log, notices, states = _dispatcher(stub_client)
    assert dispatcher.send("  hello  ", "session_1", "u1") is True

    assert [(m.role, m.content) for m in log] == [(Role.USER, "hello"), (Role.ASSISTANT, "hi")]
    assert not any(m.is_error for m in log)
    assert dispatcher.request_state == RequestState.IDLE
    assert states == [RequestState.PENDING, RequestState.IDLE]
    assert stub_client.calls == [{"question": "hello", "session_id": "session_1", "user_id": "u1"}]
    assert notices == []


def test_success_keeps_reply_context():
    dispatcher, log, _, _ = _dispatcher(StubClient(answer="a", context={"source": "docs"}))
    dispatcher.send("q", "s")
    assert log.messages[-1].context == {"source": "docs"}


def test_failure_appends_apology_and_notifies(failing_client):
    dispatcher, log, notices, _ = _dispatcher(failing_client)
    dispatcher.send("hello", "s")

    assert len(log) == 2
    reply = log.messages[1]
    assert reply.role == Role.ASSISTANT
    assert reply.is_error is True
    assert reply.content == APOLOGY
    assert [n.text for n in notices] == [NOTICE]
    assert notices[0].level == "error"
    assert dispatcher.request_state == RequestState.IDLE


def test_unexpected_exception_is_treated_as_failure():
    dispatcher, log, _, _ = _dispatcher(StubClient(error=KeyError("boom")))
    dispatcher.send("hello", "s")
    assert log.messages[-1].is_error
    assert dispatcher.request_state == RequestState.IDLE


def test_second_send_while_pending_is_ignored(stub_client, deferred_runner):
    dispatcher, log, _, _ = _dispatcher(stub_client, runner=deferred_runner)

    assert dispatcher.send("first", "s") is True
    assert dispatcher.request_state == RequestState.PENDING
    assert len(log) == 1

    assert dispatcher.send("hello", "s") is False
    assert len(log) == 1
    assert len(deferred_runner.jobs) == 1

    deferred_runner.finish_all()
    assert [m.content for m in log] == ["first", "hi"]
    assert dispatcher.request_state == RequestState.IDLE
    assert dispatcher.send("again", "s") is True


def test_response_for_dead_owner_is_dropped(stub_client, deferred_runner):
    alive = {"value": True}
    dispatcher, log, notices, states = _dispatcher(
        stub_client, runner=deferred_runner, is_alive=lambda: alive["value"],
    )
    dispatcher.send("hello", "s")
    alive["value"] = False
    deferred_runner.finish_all()

    assert len(log) == 1
    assert states == [RequestState.PENDING]
    assert notices == []


def test_runner_must_be_supplied(stub_client):
    with pytest.raises(TypeError):
        ChatDispatcher(ConversationLog(), stub_client, apology_text=APOLOGY, failure_notice=NOTICE)
