"""
Game data models.

These models define the simulation state handed from the state machine to
the renderer: the falling items and the whole-game snapshot.
"""

from typing import TYPE_CHECKING, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from moodbooster.models.enums import Phase
from moodbooster.models.primitives import Rectangle

if TYPE_CHECKING:
    from moodbooster.config import GameConfig


MOOD_MAX = 100


class FallingItem(BaseModel):
    """Immutable falling collectible.

    Created by the spawner above the top edge of the stage, advanced by the
    physics step, flagged once when it overlaps the player.

    Attributes:
        id: Unique id within a run, assigned in spawn order
        x: Horizontal center, fixed at spawn
        y: Vertical center, grows as the item falls
        fall_speed: Pixels per second, fixed at spawn
        collected: True once the player has caught the item

    Examples:
        >>> item = FallingItem(id=1, x=300.0, y=-30.0, fall_speed=200.0)
        >>> item.advance(0.5).y
        70.0
    """
    id: int = Field(..., ge=1)
    x: float
    y: float
    fall_speed: float = Field(..., ge=0)
    collected: bool = False

    model_config = ConfigDict(frozen=True)

    def advance(self, dt: float) -> 'FallingItem':
        """Return the item moved down by fall_speed * dt."""
        if dt <= 0 or self.fall_speed == 0:
            return self
        return self.model_copy(update={'y': self.y + self.fall_speed * dt})

    def mark_collected(self) -> 'FallingItem':
        """Return a collected copy of this item."""
        return self.model_copy(update={'collected': True})

    def get_bounds(self, half_size: float) -> Rectangle:
        """Bounding box centered on the item."""
        return Rectangle.from_center(self.x, self.y, half_size, half_size)

    def __str__(self) -> str:
        return (f"FallingItem(id={self.id}, x={self.x:.1f}, y={self.y:.1f}, "
                f"speed={self.fall_speed:.1f}, collected={self.collected})")


class GameState(BaseModel):
    """Immutable snapshot of the whole game.

    The state machine is the only writer; every mutation produces a new
    snapshot. The renderer and the input mapper only read it.

    Attributes:
        phase: Current phase of the game cycle
        mood: Win meter, 0..100
        time_left: Countdown in seconds
        player_x: Horizontal center of the player
        action_cooldown: Seconds until the next consume is allowed
        attract_timer: Idle seconds spent in ATTRACT
        score: Points from consumes and collected items
        items: Falling items in spawn order
        run_id: Incremented by every start, pairs with item ids
    """
    phase: Phase = Phase.ATTRACT
    mood: int = Field(0, ge=0, le=MOOD_MAX)
    time_left: float = Field(..., ge=0)
    player_x: float
    action_cooldown: float = Field(0.0, ge=0)
    attract_timer: float = Field(0.0, ge=0)
    score: int = Field(0, ge=0)
    items: Tuple[FallingItem, ...] = ()
    run_id: int = Field(0, ge=0)

    model_config = ConfigDict(frozen=True)

    @field_validator('items', mode='before')
    @classmethod
    def coerce_items(cls, v):
        """Accept any iterable of items."""
        return tuple(v)

    @classmethod
    def initial(cls, config: 'GameConfig') -> 'GameState':
        """Attract-phase state used before the first run."""
        return cls(
            phase=Phase.ATTRACT,
            time_left=config.game_duration,
            player_x=config.stage_center_x,
        )

    @computed_field
    @property
    def is_meter_full(self) -> bool:
        return self.mood >= MOOD_MAX

    def __str__(self) -> str:
        return (f"GameState(phase={self.phase.value}, mood={self.mood}, "
                f"time_left={self.time_left:.2f}, player_x={self.player_x:.1f}, "
                f"cooldown={self.action_cooldown:.2f}, score={self.score}, "
                f"items={len(self.items)})")
