"""
Input Event - Represents a single raw input action.

Pointer events carry a position in window (surface) coordinates; key
events carry a logical key. Uses Pydantic for validation and immutability.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from moodbooster.models import InputKey, InputKind, Vector2D


class InputEvent(BaseModel):
    """Immutable input event from any source.

    All input sources must convert their events to this common format.

    Attributes:
        kind: Pointer down/move/up or key down
        timestamp: Time when the event occurred (seconds, monotonic clock)
        position: Pointer position in surface coordinates (pointer kinds)
        key: Logical key (KEY_DOWN only)

    Examples:
        >>> event = InputEvent.pointer(InputKind.POINTER_DOWN, 100, 200, 1.5)
        >>> event.position.x
        100.0
    """
    kind: InputKind
    timestamp: float
    position: Optional[Vector2D] = None
    key: Optional[InputKey] = None

    model_config = ConfigDict(frozen=True)

    @field_validator('timestamp')
    @classmethod
    def validate_timestamp(cls, v: float) -> float:
        """Validate timestamp is non-negative."""
        if v < 0:
            raise ValueError(f'Timestamp must be non-negative, got {v}')
        return v

    @model_validator(mode='after')
    def check_payload(self) -> 'InputEvent':
        """Pointer events need a position, key events need a key."""
        if self.kind.is_pointer and self.position is None:
            raise ValueError(f'{self.kind.value} event requires a position')
        if self.kind == InputKind.KEY_DOWN and self.key is None:
            raise ValueError('key_down event requires a key')
        return self

    @classmethod
    def pointer(cls, kind: InputKind, x: float, y: float, timestamp: float) -> 'InputEvent':
        """Build a pointer event at (x, y)."""
        return cls(kind=kind, timestamp=timestamp, position=Vector2D(x=float(x), y=float(y)))

    @classmethod
    def key_down(cls, key: InputKey, timestamp: float) -> 'InputEvent':
        return cls(kind=InputKind.KEY_DOWN, timestamp=timestamp, key=key)

    def __str__(self) -> str:
        """String representation for debugging."""
        if self.position is not None:
            return (f"InputEvent({self.kind.value}, pos=({self.position.x:.2f}, "
                    f"{self.position.y:.2f}), t={self.timestamp:.3f})")
        return f"InputEvent({self.kind.value}, key={self.key.value}, t={self.timestamp:.3f})"
