"""
Mood Booster - Falling item spawner.

Emits one coffee bean every spawn interval at a random horizontal position
and speed. Randomness comes from an injectable ``random.Random`` so runs
are reproducible under a fixed seed.
"""
import random
from typing import List, Optional

from moodbooster.config import GameConfig
from moodbooster.logging import get_logger
from moodbooster.models import FallingItem

log = get_logger('spawner')


class ItemSpawner:
    """Spawns falling items on a fixed interval.

    The accumulator resets to zero on every spawn (the remainder is not
    carried), so at most one item appears per tick and identical ``dt``
    sequences always give identical spawn times.
    """

    def __init__(self, config: GameConfig, rng: Optional[random.Random] = None):
        """Initialize the spawner.

        Args:
            config: Game configuration (interval, margins, speeds)
            rng: Random source; a fresh unseeded one if omitted
        """
        self._config = config
        self._rng = rng if rng is not None else random.Random()
        self._accumulator = 0.0
        self._next_id = 1

    @property
    def accumulator(self) -> float:
        """Seconds accumulated toward the next spawn."""
        return self._accumulator

    @property
    def next_id(self) -> int:
        return self._next_id

    def reset(self) -> None:
        """Reset timing and ids for a new run."""
        self._accumulator = 0.0
        self._next_id = 1

    def update(self, dt: float) -> List[FallingItem]:
        """Advance the spawn timer.

        Args:
            dt: Delta time in seconds

        Returns:
            The items spawned this tick (zero or one)
        """
        self._accumulator += max(0.0, dt)
        if self._accumulator < self._config.spawn_interval:
            return []

        self._accumulator = 0.0
        return [self.spawn()]

    def spawn(
        self,
        x: Optional[float] = None,
        y: Optional[float] = None,
        fall_speed: Optional[float] = None,
    ) -> FallingItem:
        """Create a new item with the next id.

        Values left as None are drawn the usual way: ``x`` uniformly inside
        the spawn margins, ``y`` just above the top edge, ``fall_speed`` as
        base speed plus jitter.
        """
        cfg = self._config
        if x is None:
            x = self._rng.uniform(cfg.spawn_margin, cfg.stage_width - cfg.spawn_margin)
        if y is None:
            y = -cfg.item_half_size
        if fall_speed is None:
            fall_speed = cfg.item_base_speed + self._rng.uniform(0, cfg.item_speed_jitter)

        item = FallingItem(id=self._next_id, x=x, y=y, fall_speed=fall_speed)
        self._next_id += 1
        log.trace("Spawned %s", item)
        return item
