import json

import pytest

from assistant_widget.config.settings import WidgetSettings
from assistant_widget.core.models import Position, Viewport
from assistant_widget.core.position import PositionStore, chat_window_origin, clamp
from assistant_widget.storage.kv import MemoryStore

from conftest import BrokenStore


@pytest.mark.parametrize(
    "x, y, width, height",
    [
        (-50, -50, 1280, 800),
        (5000, 5000, 1280, 800),
        (100, 100, 1280, 800),
        (1224, 744, 1280, 800),
        (30, 30, 40, 40),
        (0, 0, 0, 0),
    ],
)
def test_clamp_stays_in_bounds_and_is_idempotent(x, y, width, height):
    size = 56
    once = clamp(Position(x=x, y=y), width, height, size)
    assert 0 <= once.x <= max(0, width - size)
    assert 0 <= once.y <= max(0, height - size)
    assert clamp(once, width, height, size) == once


def test_clamp_leaves_inside_position_alone():
    assert clamp(Position(x=100, y=200), 1280, 800, 56) == Position(x=100, y=200)


def test_load_defaults_to_bottom_right(store, viewport):
    positions = PositionStore(store)
    assert positions.load(viewport) == Position(x=1280 - 56 - 20, y=800 - 56 - 20)


def test_load_without_viewport_uses_fixed_fallback(store):
    positions = PositionStore(store)
    assert positions.load(None) == Position(x=20, y=20)


def test_load_returns_saved_position(viewport):
    store = MemoryStore({"ai-chatbot-position": json.dumps({"x": 300, "y": 150})})
    assert PositionStore(store).load(viewport) == Position(x=300, y=150)


def test_load_clamps_saved_position_to_smaller_viewport():
    store = MemoryStore({"ai-chatbot-position": json.dumps({"x": 1800, "y": 1000})})
    loaded = PositionStore(store).load(Viewport(width=800, height=600))
    assert loaded == Position(x=800 - 56, y=600 - 56)


@pytest.mark.parametrize("raw", ["not json", "{\"x\": 1}", "[1, 2]", "{\"x\": \"a\", \"y\": 2}", ""])
def test_load_ignores_unparseable_value(raw, viewport):
    store = MemoryStore({"ai-chatbot-position": raw})
    assert PositionStore(store).load(viewport) == Position(x=1204, y=724)


def test_load_survives_broken_storage(viewport):
    assert PositionStore(BrokenStore()).load(viewport) == Position(x=1204, y=724)


def test_save_writes_json_under_position_key(store):
    PositionStore(store).save(Position(x=12, y=34))
    assert json.loads(store.get("ai-chatbot-position")) == {"x": 12, "y": 34}


def test_save_does_not_raise_on_storage_error():
    PositionStore(BrokenStore()).save(Position(x=1, y=2))


def test_custom_settings_change_key_and_geometry(store):
    settings = WidgetSettings(trigger_size=40, margin=10, position_key="pos")
    positions = PositionStore(store, settings)
    assert positions.load(Viewport(width=500, height=400)) == Position(x=450, y=350)
    positions.save(Position(x=1, y=1))
    assert store.get("pos") is not None


def test_clamp_to_without_viewport_only_floors_at_zero(store):
    positions = PositionStore(store)
    assert positions.clamp_to(Position(x=-5, y=9000), None) == Position(x=0, y=9000)


def test_chat_window_origin_is_above_left_and_floored():
    assert chat_window_origin(Position(x=1000, y=700), 400, 600) == Position(x=600, y=100)
    assert chat_window_origin(Position(x=100, y=100), 400, 600) == Position(x=0, y=0)


def test_load_without_viewport_floors_saved_negative_position():
    store = MemoryStore({"ai-chatbot-position": json.dumps({"x": -500, "y": -40})})
    assert PositionStore(store).load(None) == Position(x=0, y=0)
