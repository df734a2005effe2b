"""Falling-item physics and player collision.

Advances items, removes the ones that left the stage and flags the ones
the player catches. The player only moves horizontally; its vertical
position is fixed at ``config.player_y``.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from moodbooster.config import GameConfig
from moodbooster.models import FallingItem, Rectangle


@dataclass
class PhysicsResult:
    """Outcome of one physics step.

    Attributes:
        items: Items remaining on the stage, in spawn order
        collected: Items caught this step (also present in ``items``)
        removed: Number of items that fell past the bottom edge
        purged: Number of items collected on an earlier step and dropped now
    """
    items: Tuple[FallingItem, ...]
    collected: List[FallingItem] = field(default_factory=list)
    removed: int = 0
    purged: int = 0


def player_bounds(player_x: float, config: GameConfig) -> Rectangle:
    """Player hitbox centered on (player_x, player_y)."""
    half = config.player_half_size
    return Rectangle.from_center(player_x, config.player_y, half, half)


def check_item_collision(item: FallingItem, player_x: float, config: GameConfig) -> bool:
    """Check if an item overlaps the player.

    Axis-aligned box test between the player hitbox and the item bounds.
    Boxes that only touch along an edge do not overlap, and collected
    items never collide.

    Args:
        item: Item to check
        player_x: Horizontal center of the player
        config: Supplies player depth and both half sizes

    Returns:
        True if the boxes overlap
    """
    if item.collected:
        return False

    return player_bounds(player_x, config).overlaps(item.get_bounds(config.item_half_size))


def is_off_stage(item: FallingItem, config: GameConfig) -> bool:
    """True once the item has fallen fully past the bottom edge."""
    return item.y >= config.stage_height + config.item_half_size


def step_items(
    items: Iterable[FallingItem],
    player_x: float,
    dt: float,
    config: GameConfig,
) -> PhysicsResult:
    """Run one physics step.

    Order per item: drop it if it was collected on an earlier step, move
    it, drop it if it left the stage, then test it against the player.
    Each item is tested at most once per step.

    Args:
        items: Items from the previous snapshot, in spawn order
        player_x: Horizontal center of the player
        dt: Delta time in seconds
        config: Game configuration

    Returns:
        PhysicsResult with the surviving items and what happened
    """
    result = PhysicsResult(items=())
    survivors: List[FallingItem] = []

    for item in items:
        if item.collected:
            result.purged += 1
            continue

        moved = item.advance(dt)
        if is_off_stage(moved, config):
            result.removed += 1
            continue

        if check_item_collision(moved, player_x, config):
            moved = moved.mark_collected()
            result.collected.append(moved)

        survivors.append(moved)

    result.items = tuple(survivors)
    return result
