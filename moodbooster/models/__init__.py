"""
Data models for Mood Booster.

- Primitives: geometric types (Point2D, Vector2D, Resolution, Rectangle)
- Enums: phases, consume outcomes, notice kinds, input vocabulary
- Game: FallingItem and the GameState snapshot

Usage:
    >>> from moodbooster.models import GameState, Phase, FallingItem
"""

from .primitives import (
    Point2D,
    Vector2D,
    Resolution,
    Rectangle,
)

from .enums import (
    Phase,
    ConsumeResult,
    NoticeKind,
    InputKind,
    InputKey,
    HeroPose,
)

from .game import (
    MOOD_MAX,
    FallingItem,
    GameState,
)

__all__ = [
    # Primitives
    "Point2D",
    "Vector2D",
    "Resolution",
    "Rectangle",
    # Enums
    "Phase",
    "ConsumeResult",
    "NoticeKind",
    "InputKind",
    "InputKey",
    "HeroPose",
    # Game
    "MOOD_MAX",
    "FallingItem",
    "GameState",
]
