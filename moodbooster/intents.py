"""
Player intents.

Input handlers never touch the game state directly. They produce intents,
which the state machine queues and applies at the start of the next tick.
"""
from typing import Union

from pydantic import BaseModel, ConfigDict


class StartIntent(BaseModel):
    """Begin a run (ignored while one is in progress)."""
    model_config = ConfigDict(frozen=True)


class MoveIntent(BaseModel):
    """Move the player horizontally by ``delta`` stage pixels."""
    delta: float

    model_config = ConfigDict(frozen=True)


class PositionIntent(BaseModel):
    """Put the player at stage position ``x`` (clamped)."""
    x: float

    model_config = ConfigDict(frozen=True)


class ConsumeIntent(BaseModel):
    """Drink from the coffee spout."""
    model_config = ConfigDict(frozen=True)


Intent = Union[StartIntent, MoveIntent, PositionIntent, ConsumeIntent]
