"""
Tests for the GameEngine frame loop.

Tests cover:
- Initialization and teardown
- Frames driven by explicit timestamps
- Pointer input reaching the game as intents
- QUIT, ESC and window resize handling
"""

import pygame
import pytest

from moodbooster.config import GameConfig
from moodbooster.engine import GameEngine
from moodbooster.input import InputManager
from moodbooster.models import Phase


@pytest.fixture
def engine():
    engine = GameEngine(
        config=GameConfig(spawn_interval=1000.0, game_duration=0.5, result_display=0.2),
        window_size=(270, 480),
        seed=3,
    )
    pygame.event.clear()
    yield engine
    engine.quit()


def click(x, y):
    pygame.event.post(pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(x, y), button=1))


class TestGameEngine:
    """Tests for GameEngine."""

    def test_initialization(self, engine):
        assert pygame.get_init()
        assert engine.screen.get_size() == (270, 480)
        assert engine.running
        assert engine.game.phase == Phase.ATTRACT
        assert isinstance(engine.input_manager, InputManager)
        assert engine.mapper.scaler.scale == (4.0, 4.0)

    def test_engine_quit(self):
        engine = GameEngine(window_size=(100, 100))
        engine.quit()
        assert not pygame.get_init()
        assert not engine.running

    def test_first_frame_has_zero_dt(self, engine):
        engine.run_frame(100.0)
        assert engine.game.state.attract_timer == 0.0

    def test_frames_advance_attract_timer(self, engine):
        engine.run_frame(100.0)
        engine.run_frame(100.0625)
        assert engine.game.state.attract_timer == 0.0625

    def test_frame_dt_is_clamped(self, engine):
        engine.run_frame(100.0)
        engine.run_frame(105.0)
        assert engine.game.state.attract_timer == engine.config.max_frame_dt

    def test_click_starts_game(self, engine):
        engine.run_frame(0.0)
        click(10, 10)
        report = engine.run_frame(0.05)
        assert report.phase_after == Phase.PLAYING

    def test_full_cycle(self, engine):
        """A run ends in DEFEAT and the result timeout returns to ATTRACT."""
        engine.run_frame(0.0)
        click(10, 10)
        engine.run_frame(0.0)
        assert engine.game.phase == Phase.PLAYING

        t = 0.0
        for _ in range(6):
            t += 0.1
            engine.run_frame(t)
        assert engine.game.phase == Phase.DEFEAT

        for _ in range(3):
            t += 0.1
            engine.run_frame(t)
        assert engine.game.phase == Phase.ATTRACT

    def test_quit_event_stops(self, engine):
        pygame.event.post(pygame.event.Event(pygame.QUIT))
        assert engine.run_frame(0.0) is None
        assert not engine.running
        assert not engine.input_manager.has_source()

    def test_escape_stops(self, engine):
        pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE))
        engine.run_frame(0.0)
        assert not engine.running

    def test_resize_rescales_input(self, engine):
        pygame.event.post(pygame.event.Event(pygame.VIDEORESIZE, w=540, h=960, size=(540, 960)))
        engine.run_frame(0.0)
        assert engine.mapper.scaler.scale == (2.0, 2.0)

    def test_stop_cancels_result_timeout(self, engine):
        engine.game.start()
        engine.game.tick(1.0)
        assert engine.game.phase == Phase.DEFEAT
        timeout = engine.game.result_timeout

        engine.stop()
        assert timeout.cancelled
        assert engine.scheduler.pending == []
        assert not engine.mapper.is_dragging

    def test_run_returns_after_stop(self, engine):
        """run() exits once the loop is stopped."""
        pygame.event.post(pygame.event.Event(pygame.QUIT))
        engine.run()
        assert not engine.running
