"""Shared fixtures. pygame runs headless for the whole test session."""
import os

os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')

import random

import pytest

from moodbooster.config import GameConfig
from moodbooster.game_mode import MoodBoosterGame
from moodbooster.logging import LogLevel, _config
from moodbooster.notifications import NotificationChannel
from moodbooster.scheduler import TimerScheduler


@pytest.fixture(autouse=True)
def quiet_logging():
    """Silence log output and restore levels after each test."""
    saved_default = _config['default_level']
    saved_modules = dict(_config['module_levels'])
    _config['default_level'] = LogLevel.OFF
    _config['module_levels'].clear()
    yield
    _config['default_level'] = saved_default
    _config['module_levels'].clear()
    _config['module_levels'].update(saved_modules)


@pytest.fixture
def config():
    """Default configuration with the periodic spawner effectively off."""
    return GameConfig(spawn_interval=1000.0)


@pytest.fixture
def scheduler():
    return TimerScheduler()


@pytest.fixture
def notices(config):
    return NotificationChannel(duration=config.notice_duration, max_active=config.max_notices)


@pytest.fixture
def game(config, scheduler, notices):
    """Game in ATTRACT with a seeded spawner."""
    return MoodBoosterGame(config=config, scheduler=scheduler, notices=notices,
                           rng=random.Random(1234))


@pytest.fixture
def playing_game(game):
    """Game that has just started a run."""
    game.start()
    return game
