"""
Tests for the input layer.

Tests cover:
- InputEvent validation
- InputSource ABC and a mock source
- PygameInputSource with posted pygame events
- InputManager source handling and detach
- SurfaceScaler and InputMapper intent translation
"""

from typing import List

import pygame
import pytest
from pydantic import ValidationError

from moodbooster.config import GameConfig
from moodbooster.input import (
    InputEvent,
    InputManager,
    InputMapper,
    InputSource,
    PygameInputSource,
    SurfaceScaler,
)
from moodbooster.intents import ConsumeIntent, MoveIntent, PositionIntent, StartIntent
from moodbooster.models import GameState, InputKey, InputKind, Phase, Point2D, Resolution


class MockInputSource(InputSource):
    """Mock implementation of InputSource for testing."""

    def __init__(self):
        self.events: List[InputEvent] = []
        self.update_calls = 0
        self.last_dt = 0.0

    def poll_events(self) -> List[InputEvent]:
        events = self.events.copy()
        self.events.clear()
        return events

    def update(self, dt: float) -> None:
        self.update_calls += 1
        self.last_dt = dt

    def add_event(self, event: InputEvent) -> None:
        self.events.append(event)


def tap(x, y, kind=InputKind.POINTER_DOWN, t=1.0):
    return InputEvent.pointer(kind, x, y, t)


class TestInputEvent:
    """Tests for InputEvent validation."""

    def test_pointer_event(self):
        event = tap(10, 20)
        assert event.position == Point2D(x=10.0, y=20.0)
        assert event.key is None

    def test_key_event(self):
        event = InputEvent.key_down(InputKey.ACTION, 2.0)
        assert event.kind == InputKind.KEY_DOWN
        assert event.key == InputKey.ACTION

    def test_negative_timestamp_rejected(self):
        with pytest.raises(ValueError):
            tap(0, 0, t=-1.0)

    def test_pointer_requires_position(self):
        with pytest.raises(ValidationError):
            InputEvent(kind=InputKind.POINTER_DOWN, timestamp=0.0)

    def test_key_requires_key(self):
        with pytest.raises(ValidationError):
            InputEvent(kind=InputKind.KEY_DOWN, timestamp=0.0)

    def test_frozen(self):
        event = tap(1, 2)
        with pytest.raises(ValidationError):
            event.timestamp = 5.0


class TestInputSourceABC:
    """Tests for the InputSource interface."""

    def test_cannot_instantiate_input_source_directly(self):
        with pytest.raises(TypeError):
            InputSource()  # type: ignore

    def test_close_discards_pending(self):
        source = MockInputSource()
        source.add_event(tap(1, 1))
        source.close()
        assert source.poll_events() == []


class TestPygameInputSource:
    """Tests for PygameInputSource with real pygame events."""

    @pytest.fixture
    def pygame_init(self):
        pygame.init()
        pygame.display.set_mode((100, 100))
        pygame.event.clear()
        yield
        pygame.quit()

    def test_left_click_creates_pointer_down(self, pygame_init):
        source = PygameInputSource(time_source=lambda: 3.0)
        pygame.event.post(pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(10, 20), button=1))
        source.update(0.016)

        events = source.poll_events()
        assert len(events) == 1
        assert events[0].kind == InputKind.POINTER_DOWN
        assert events[0].position == Point2D(x=10.0, y=20.0)
        assert events[0].timestamp == 3.0

    def test_release_creates_pointer_up(self, pygame_init):
        source = PygameInputSource()
        pygame.event.post(pygame.event.Event(pygame.MOUSEBUTTONUP, pos=(5, 5), button=1))
        source.update(0.016)
        assert source.poll_events()[0].kind == InputKind.POINTER_UP

    def test_right_button_ignored(self, pygame_init):
        source = PygameInputSource()
        pygame.event.post(pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(5, 5), button=3))
        source.update(0.016)
        assert source.poll_events() == []

    def test_drag_motion(self, pygame_init):
        """Motion only counts while the left button is held."""
        source = PygameInputSource()
        pygame.event.post(pygame.event.Event(
            pygame.MOUSEMOTION, pos=(30, 40), rel=(1, 1), buttons=(1, 0, 0)))
        pygame.event.post(pygame.event.Event(
            pygame.MOUSEMOTION, pos=(31, 41), rel=(1, 1), buttons=(0, 0, 0)))
        source.update(0.016)

        events = source.poll_events()
        assert [e.kind for e in events] == [InputKind.POINTER_MOVE]

    def test_bound_keys(self, pygame_init):
        source = PygameInputSource()
        for key in (pygame.K_LEFT, pygame.K_d, pygame.K_SPACE, pygame.K_r):
            pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=key))
        source.update(0.016)

        keys = [e.key for e in source.poll_events()]
        assert keys == [InputKey.LEFT, InputKey.RIGHT, InputKey.ACTION, InputKey.RESTART]

    def test_other_events_reposted(self, pygame_init):
        """Events the source does not handle stay available to the main loop."""
        source = PygameInputSource()
        pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE))
        source.update(0.016)

        assert source.poll_events() == []
        remaining = pygame.event.get(pygame.KEYDOWN)
        assert any(e.key == pygame.K_ESCAPE for e in remaining)

    def test_events_cleared_after_poll(self, pygame_init):
        source = PygameInputSource()
        pygame.event.post(pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(1, 1), button=1))
        source.update(0.016)
        source.poll_events()
        assert source.poll_events() == []


class TestInputManager:
    """Tests for InputManager."""

    def test_no_source(self):
        manager = InputManager()
        assert not manager.has_source()
        assert manager.get_events() == []
        manager.update(0.016)  # no error

    def test_update_forwards_dt(self):
        source = MockInputSource()
        manager = InputManager(source)
        manager.update(0.5)
        assert source.update_calls == 1
        assert source.last_dt == 0.5

    def test_get_events(self):
        source = MockInputSource()
        manager = InputManager(source)
        source.add_event(tap(1, 2))
        assert len(manager.get_events()) == 1
        assert manager.get_events() == []

    def test_clear_events(self):
        source = MockInputSource()
        manager = InputManager(source)
        source.add_event(tap(1, 2))
        manager.clear_events()
        assert manager.get_events() == []

    def test_set_source_type_checked(self):
        manager = InputManager()
        with pytest.raises(TypeError):
            manager.set_source("mouse")  # type: ignore

    def test_detach(self):
        source = MockInputSource()
        manager = InputManager(source)
        source.add_event(tap(1, 2))

        assert manager.detach() is source
        assert not manager.has_source()
        assert source.events == []
        assert manager.detach() is None


class TestSurfaceScaler:
    """Tests for window to stage scaling."""

    def test_per_axis_scale(self):
        scaler = SurfaceScaler(Resolution(width=540, height=480), Resolution(width=1080, height=1920))
        assert scaler.scale == (2.0, 4.0)
        assert scaler.to_stage(Point2D(x=100.0, y=100.0)) == Point2D(x=200.0, y=400.0)

    def test_resize(self):
        scaler = SurfaceScaler(Resolution(width=540, height=960), Resolution(width=1080, height=1920))
        scaler.resize(1080, 1920)
        assert scaler.scale == (1.0, 1.0)
        assert scaler.surface == Resolution(width=1080, height=1920)


class TestInputMapper:
    """Tests for event to intent translation."""

    @pytest.fixture
    def cfg(self):
        return GameConfig()

    @pytest.fixture
    def mapper(self, cfg):
        scaler = SurfaceScaler(cfg.window_resolution, cfg.stage_resolution)
        return InputMapper(cfg, scaler)

    def snapshot(self, cfg, phase=Phase.PLAYING, player_x=540.0):
        return GameState(phase=phase, time_left=cfg.game_duration, player_x=player_x)

    def test_tap_in_attract_starts(self, mapper, cfg):
        intents = mapper.translate(tap(100, 100), self.snapshot(cfg, Phase.ATTRACT))
        assert intents == [StartIntent()]

    def test_tap_on_result_screen_ignored(self, mapper, cfg):
        assert mapper.translate(tap(100, 100), self.snapshot(cfg, Phase.VICTORY)) == []

    def test_tap_on_button_consumes(self, mapper, cfg):
        # Window (270, 830) is stage (540, 1660), inside the DRINK button
        intents = mapper.translate(tap(270, 830), self.snapshot(cfg))
        assert intents == [ConsumeIntent()]
        assert not mapper.is_dragging

    def test_drag_moves_relative(self, mapper, cfg):
        """Dragging moves the player by the pointer's stage distance."""
        snapshot = self.snapshot(cfg, player_x=540.0)
        assert mapper.translate(tap(100, 300), snapshot) == []
        assert mapper.is_dragging

        intents = mapper.translate(tap(150, 300, InputKind.POINTER_MOVE), snapshot)
        assert intents == [PositionIntent(x=640.0)]

    def test_drag_anchor_uses_snapshot_at_press(self, mapper, cfg):
        mapper.translate(tap(100, 300), self.snapshot(cfg, player_x=540.0))
        intents = mapper.translate(tap(80, 300, InputKind.POINTER_MOVE),
                                   self.snapshot(cfg, player_x=900.0))
        assert intents == [PositionIntent(x=500.0)]

    def test_move_without_drag_ignored(self, mapper, cfg):
        assert mapper.translate(tap(150, 300, InputKind.POINTER_MOVE), self.snapshot(cfg)) == []

    def test_pointer_up_ends_drag(self, mapper, cfg):
        snapshot = self.snapshot(cfg)
        mapper.translate(tap(100, 300), snapshot)
        mapper.translate(tap(100, 300, InputKind.POINTER_UP), snapshot)
        assert not mapper.is_dragging
        assert mapper.translate(tap(150, 300, InputKind.POINTER_MOVE), snapshot) == []

    def test_drag_ignored_after_run_ends(self, mapper, cfg):
        mapper.translate(tap(100, 300), self.snapshot(cfg))
        ended = self.snapshot(cfg, Phase.DEFEAT)
        assert mapper.translate(tap(150, 300, InputKind.POINTER_MOVE), ended) == []

    def test_keys(self, mapper, cfg):
        snapshot = self.snapshot(cfg)
        key = InputEvent.key_down
        assert mapper.translate(key(InputKey.LEFT, 0.0), snapshot) == [MoveIntent(delta=-cfg.player_step)]
        assert mapper.translate(key(InputKey.RIGHT, 0.0), snapshot) == [MoveIntent(delta=cfg.player_step)]
        assert mapper.translate(key(InputKey.ACTION, 0.0), snapshot) == [ConsumeIntent()]
        assert mapper.translate(key(InputKey.RESTART, 0.0), snapshot) == [StartIntent()]

    def test_reset_ends_drag(self, mapper, cfg):
        mapper.translate(tap(100, 300), self.snapshot(cfg))
        mapper.reset()
        assert not mapper.is_dragging

    def test_translate_all(self, mapper, cfg):
        events = [tap(100, 300), tap(110, 300, InputKind.POINTER_MOVE)]
        intents = mapper.translate_all(events, self.snapshot(cfg, player_x=540.0))
        assert intents == [PositionIntent(x=560.0)]
