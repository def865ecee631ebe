import pytest

from assistant_widget.core.models import DragState, Message, Position, RequestState, Role
from assistant_widget.core.state import (
    Close, DragChanged, InputChanged, MessagesChanged, Moved,
    RequestStateChanged, ToggleOpen, initial_state, reduce,
)


@pytest.fixture()
def state():
    return initial_state(Position(x=10, y=20))


def test_initial_state(state):
    assert state.open is False
    assert state.messages == ()
    assert state.request_state == RequestState.IDLE
    assert not state.drag.dragging
    assert state.input_text == ""


def test_toggle_flips_open(state):
    opened = reduce(state, ToggleOpen())
    assert opened.open is True
    assert reduce(opened, ToggleOpen()).open is False


def test_toggle_ignored_while_dragging(state):
    dragging = reduce(state, DragChanged(DragState(dragging=True, dx=1, dy=1)))
    assert reduce(dragging, ToggleOpen()).open is False


def test_close_only_closes(state):
    assert reduce(state, Close()).open is False
    assert reduce(reduce(state, ToggleOpen()), Close()).open is False


def test_reduce_does_not_mutate(state):
    reduce(state, InputChanged("typed"))
    reduce(state, Moved(Position(x=1, y=1)))
    assert state.input_text == ""
    assert state.position == Position(x=10, y=20)


def test_derived_views(state):
    messages = (Message(id=1, role=Role.USER, content="a"),)
    busy = reduce(reduce(state, MessagesChanged(messages)), RequestStateChanged(RequestState.PENDING))
    assert busy.badge_count == 1
    assert busy.is_thinking


def test_unknown_event_raises(state):
    with pytest.raises(TypeError):
        reduce(state, object())
