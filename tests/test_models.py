"""
Tests for the data models.

Tests cover:
- Point2D, Resolution and Rectangle primitives
- FallingItem movement and collection
- GameState validation and helpers
- Enum helpers
"""

import pytest
from pydantic import ValidationError

from moodbooster.config import GameConfig
from moodbooster.models import (
    ConsumeResult,
    FallingItem,
    GameState,
    InputKind,
    Phase,
    Point2D,
    Rectangle,
    Resolution,
    Vector2D,
)


class TestPrimitives:
    """Tests for geometric primitives."""

    def test_point_is_frozen(self):
        """Points cannot be mutated."""
        point = Point2D(x=1.0, y=2.0)
        with pytest.raises(ValidationError):
            point.x = 5.0

    def test_vector_alias(self):
        assert Vector2D is Point2D

    def test_resolution_rejects_zero(self):
        with pytest.raises(ValidationError):
            Resolution(width=0, height=100)

    def test_rectangle_from_center(self):
        """from_center places the top-left corner half an extent away."""
        rect = Rectangle.from_center(100.0, 200.0, 50.0, 25.0)
        assert rect.x == 50.0
        assert rect.y == 175.0
        assert rect.width == 100.0
        assert rect.height == 50.0
        assert rect.center == Point2D(x=100.0, y=200.0)

    def test_rectangle_edges(self):
        rect = Rectangle(x=10.0, y=20.0, width=30.0, height=40.0)
        assert (rect.left, rect.right, rect.top, rect.bottom) == (10.0, 40.0, 20.0, 60.0)

    def test_rectangle_contains_boundary(self):
        """Points on the edge are inside."""
        rect = Rectangle(x=0.0, y=0.0, width=10.0, height=10.0)
        assert rect.contains_point(Point2D(x=10.0, y=10.0))
        assert not rect.contains_point(Point2D(x=10.1, y=5.0))

    def test_rectangle_touching_edges_do_not_overlap(self):
        a = Rectangle(x=0.0, y=0.0, width=10.0, height=10.0)
        assert a.overlaps(Rectangle(x=9.0, y=9.0, width=5.0, height=5.0))
        assert not a.overlaps(Rectangle(x=10.0, y=0.0, width=5.0, height=5.0))

    def test_rectangle_rejects_negative_size(self):
        with pytest.raises(ValidationError):
            Rectangle(x=0.0, y=0.0, width=-1.0, height=10.0)


class TestFallingItem:
    """Tests for FallingItem."""

    def test_advance_moves_down(self):
        item = FallingItem(id=1, x=100.0, y=0.0, fall_speed=200.0)
        moved = item.advance(0.25)
        assert moved.y == 50.0
        assert moved.x == 100.0
        assert item.y == 0.0  # source item unchanged

    def test_advance_zero_dt_returns_same(self):
        item = FallingItem(id=1, x=100.0, y=0.0, fall_speed=200.0)
        assert item.advance(0.0) is item

    def test_mark_collected(self):
        item = FallingItem(id=3, x=1.0, y=2.0, fall_speed=0.0)
        collected = item.mark_collected()
        assert collected.collected
        assert not item.collected
        assert collected.id == 3

    def test_negative_speed_rejected(self):
        with pytest.raises(ValidationError):
            FallingItem(id=1, x=0.0, y=0.0, fall_speed=-5.0)

    def test_id_starts_at_one(self):
        with pytest.raises(ValidationError):
            FallingItem(id=0, x=0.0, y=0.0, fall_speed=1.0)

    def test_bounds(self):
        item = FallingItem(id=1, x=100.0, y=100.0, fall_speed=1.0)
        bounds = item.get_bounds(30.0)
        assert bounds.left == 70.0
        assert bounds.bottom == 130.0


class TestGameState:
    """Tests for the GameState snapshot."""

    def test_initial_state(self):
        """Initial state is ATTRACT with a full timer and a centered player."""
        cfg = GameConfig()
        state = GameState.initial(cfg)
        assert state.phase == Phase.ATTRACT
        assert state.mood == 0
        assert state.score == 0
        assert state.time_left == cfg.game_duration
        assert state.player_x == cfg.stage_width / 2
        assert state.items == ()
        assert state.run_id == 0

    def test_mood_bounds(self):
        with pytest.raises(ValidationError):
            GameState(mood=101, time_left=10.0, player_x=0.0)
        with pytest.raises(ValidationError):
            GameState(mood=-1, time_left=10.0, player_x=0.0)

    def test_negative_score_rejected(self):
        with pytest.raises(ValidationError):
            GameState(score=-1, time_left=10.0, player_x=0.0)

    def test_items_coerced_to_tuple(self):
        items = [FallingItem(id=1, x=0.0, y=0.0, fall_speed=1.0)]
        state = GameState(time_left=10.0, player_x=0.0, items=items)
        assert isinstance(state.items, tuple)

    def test_meter_full(self):
        assert GameState(mood=100, time_left=1.0, player_x=0.0).is_meter_full
        assert not GameState(mood=99, time_left=1.0, player_x=0.0).is_meter_full


class TestEnums:
    """Tests for enum helpers."""

    def test_terminal_phases(self):
        assert Phase.VICTORY.is_terminal
        assert Phase.DEFEAT.is_terminal
        assert not Phase.ATTRACT.is_terminal
        assert not Phase.PLAYING.is_terminal

    def test_consume_succeeded(self):
        assert ConsumeResult.CONSUMED.succeeded
        assert not ConsumeResult.COOLDOWN.succeeded

    def test_pointer_kinds(self):
        assert InputKind.POINTER_MOVE.is_pointer
        assert not InputKind.KEY_DOWN.is_pointer
