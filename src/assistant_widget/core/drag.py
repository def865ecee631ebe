"""Pointer drag handling for the floating trigger."""

import logging
from typing import Optional

from .models import DragState, PointerButton, Position, Viewport
from .position import PositionStore


logger = logging.getLogger(__name__)


class DragController:
    """idle -> dragging on primary press, dragging -> idle on release or leave.

    A release with no move in between is a click; any move turns the gesture
    into a drag and the click is suppressed.
    """

    def __init__(self, positions: PositionStore):
        self.positions = positions
        self.state = DragState()

    @property
    def dragging(self) -> bool:
        return self.state.dragging

    def press(self, pointer: Position, trigger_top_left: Position,
              button: PointerButton = PointerButton.PRIMARY) -> bool:
        """Start a drag. Returns False when the press is ignored."""
        if button != PointerButton.PRIMARY or self.state.dragging:
            return False
        offset = pointer - trigger_top_left
        self.state = DragState(dragging=True, dx=offset.x, dy=offset.y)
        return True

    def move(self, pointer: Position, viewport: Optional[Viewport]) -> Optional[Position]:
        """Live position for the pointer, or None when not dragging. Nothing is persisted."""
        if not self.state.dragging:
            return None
        if not self.state.moved:
            self.state = self.state.model_copy(update={"moved": True})
        raw = Position(x=pointer.x - self.state.dx, y=pointer.y - self.state.dy)
        return self.positions.clamp_to(raw, viewport)

    def release(self, position: Position) -> bool:
        """Finish the gesture and persist ``position``.

        Returns True when the gesture was a plain click.
        """
        if not self.state.dragging:
            return False
        was_click = not self.state.moved
        self.state = DragState()
        self.positions.save(position)
        logger.debug("Drag finished at (%s, %s), click=%s", position.x, position.y, was_click)
        return was_click
