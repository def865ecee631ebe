"""Value types shared by the widget core."""

from datetime import datetime
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class Position(BaseModel):
    """Top-left corner of the trigger, in viewport pixels."""

    model_config = ConfigDict(frozen=True)

    x: float = Field(..., allow_inf_nan=False)
    y: float = Field(..., allow_inf_nan=False)

    def __sub__(self, other: "Position") -> "Position":
        return Position(x=self.x - other.x, y=self.y - other.y)


class Viewport(BaseModel):
    """Visible area the trigger must stay inside."""

    model_config = ConfigDict(frozen=True)

    width: float = Field(..., ge=0)
    height: float = Field(..., ge=0)


class PointerButton(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    MIDDLE = "middle"


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """One entry of the conversation log."""

    model_config = ConfigDict(frozen=True)

    id: int
    role: Role
    content: str
    timestamp: datetime = Field(default_factory=datetime.now)
    is_error: bool = False
    context: Optional[Any] = None


class RequestState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"


class DragState(BaseModel):
    """Pointer offset captured at press time, plus whether the pointer has moved since."""

    model_config = ConfigDict(frozen=True)

    dragging: bool = False
    dx: float = 0.0
    dy: float = 0.0
    moved: bool = False


class Notification(BaseModel):
    """Transient user-facing message (toast)."""

    model_config = ConfigDict(frozen=True)

    level: Literal["success", "error", "info"]
    text: str
