"""Trigger position: clamping, defaults and persistence."""

import logging
from typing import Optional

from pydantic import ValidationError

from ..config.settings import WidgetSettings
from ..storage.kv import KeyValueStore
from .models import Position, Viewport


logger = logging.getLogger(__name__)


def clamp(position: Position, viewport_width: float, viewport_height: float, trigger_size: float) -> Position:
    """Project each axis into ``[0, dimension - trigger_size]``.

    A viewport smaller than the trigger pins that axis to 0.
    """
    max_x = max(0.0, viewport_width - trigger_size)
    max_y = max(0.0, viewport_height - trigger_size)
    return Position(
        x=min(max(position.x, 0.0), max_x),
        y=min(max(position.y, 0.0), max_y),
    )


def chat_window_origin(trigger: Position, width: float, height: float) -> Position:
    """Chat window sits left of and above the trigger, never off the top-left edge."""
    return Position(x=max(0.0, trigger.x - width), y=max(0.0, trigger.y - height))


class PositionStore:
    """Loads, clamps and saves the trigger position.

    Persistence is best-effort: read and write failures are logged and never
    reach the caller.
    """

    def __init__(self, store: KeyValueStore, settings: Optional[WidgetSettings] = None):
        self.store = store
        self.settings = settings or WidgetSettings()

    @property
    def trigger_size(self) -> int:
        return self.settings.trigger_size

    def default(self, viewport: Optional[Viewport]) -> Position:
        """Bottom-right corner, or the fixed fallback when no viewport is known."""
        if viewport is None:
            return Position(x=self.settings.fallback_x, y=self.settings.fallback_y)
        offset = self.settings.trigger_size + self.settings.margin
        return self.clamp_to(
            Position(x=viewport.width - offset, y=viewport.height - offset),
            viewport,
        )

    def load(self, viewport: Optional[Viewport] = None) -> Position:
        saved = self._read()
        if saved is None:
            return self.default(viewport)
        return self.clamp_to(saved, viewport)

    def save(self, position: Position) -> None:
        try:
            self.store.set(self.settings.position_key, position.model_dump_json())
        except Exception as e:
            logger.warning("Failed to save widget position: %s", e)

    def clamp_to(self, position: Position, viewport: Optional[Viewport]) -> Position:
        """Clamp against a viewport; without one only the lower bound applies."""
        if viewport is None:
            return Position(x=max(position.x, 0.0), y=max(position.y, 0.0))
        return clamp(position, viewport.width, viewport.height, self.settings.trigger_size)

    def _read(self) -> Optional[Position]:
        try:
            raw = self.store.get(self.settings.position_key)
        except Exception as e:
            logger.warning("Failed to read saved widget position: %s", e)
            return None
        if not raw:
            return None
        try:
            return Position.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("Failed to parse saved position %r: %s", raw, e)
            return None
