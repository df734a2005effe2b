"""
Mood Booster - Configuration loader.

Defaults come from MOOD_* environment variables (a .env file found from the
working directory is loaded first). GameConfig bundles every tunable value;
a YAML file and keyword overrides can replace any of them.
"""
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, model_validator

from moodbooster.models.primitives import Rectangle, Resolution

load_dotenv(find_dotenv(usecwd=True))


class ConfigError(ValueError):
    """Raised when a configuration file cannot be used."""


def _get_bool(key: str, default: bool) -> bool:
    """Get boolean from environment."""
    val = os.getenv(key, str(default)).lower()
    return val in ('true', '1', 'yes')


def _get_int(key: str, default: int) -> int:
    """Get integer from environment."""
    return int(os.getenv(key, str(default)))


def _get_float(key: str, default: float) -> float:
    """Get float from environment."""
    return float(os.getenv(key, str(default)))


# Stage (logical coordinates) and window
STAGE_WIDTH = _get_int('MOOD_STAGE_WIDTH', 1080)
STAGE_HEIGHT = _get_int('MOOD_STAGE_HEIGHT', 1920)
WINDOW_WIDTH = _get_int('MOOD_WINDOW_WIDTH', 540)
WINDOW_HEIGHT = _get_int('MOOD_WINDOW_HEIGHT', 960)
FPS = _get_int('MOOD_FPS', 60)
MAX_FRAME_DT = _get_float('MOOD_MAX_FRAME_DT', 0.1)  # seconds

# Player
PLAYER_STEP = _get_float('MOOD_PLAYER_STEP', 30.0)  # pixels per key press
PLAYER_HALF_SIZE = _get_float('MOOD_PLAYER_HALF_SIZE', 50.0)
PLAYER_Y = _get_float('MOOD_PLAYER_Y', 1400.0)

# Falling items
ITEM_SIZE = _get_float('MOOD_ITEM_SIZE', 60.0)
SPAWN_INTERVAL = _get_float('MOOD_SPAWN_INTERVAL', 1.5)  # seconds
SPAWN_MARGIN = _get_float('MOOD_SPAWN_MARGIN', 60.0)
ITEM_BASE_SPEED = _get_float('MOOD_ITEM_BASE_SPEED', 250.0)  # pixels/second
ITEM_SPEED_JITTER = _get_float('MOOD_ITEM_SPEED_JITTER', 150.0)

# Coffee spout (consume source)
SOURCE_X = _get_float('MOOD_SOURCE_X', 270.0)
SOURCE_TOLERANCE = _get_float('MOOD_SOURCE_TOLERANCE', 80.0)

# Rewards
CONSUME_COOLDOWN = _get_float('MOOD_CONSUME_COOLDOWN', 0.8)  # seconds
CONSUME_MOOD_INCREASE = _get_int('MOOD_CONSUME_MOOD_INCREASE', 10)
CONSUME_SCORE_BONUS = _get_int('MOOD_CONSUME_SCORE_BONUS', 10)
ITEM_MOOD_INCREASE = _get_int('MOOD_ITEM_MOOD_INCREASE', 5)
ITEM_SCORE_BONUS = _get_int('MOOD_ITEM_SCORE_BONUS', 5)

# Game flow
GAME_DURATION = _get_float('MOOD_GAME_DURATION', 60.0)  # seconds
RESULT_DISPLAY = _get_float('MOOD_RESULT_DISPLAY', 3.0)  # seconds
ATTRACT_TIMEOUT = _get_float('MOOD_ATTRACT_TIMEOUT', 5.0)  # seconds
ATTRACT_AUTO_START = _get_bool('MOOD_ATTRACT_AUTO_START', False)

# DRINK button (stage coordinates, top-left + edge)
CONSUME_BUTTON_X = _get_float('MOOD_CONSUME_BUTTON_X', 465.0)
CONSUME_BUTTON_Y = _get_float('MOOD_CONSUME_BUTTON_Y', 1600.0)
CONSUME_BUTTON_SIZE = _get_float('MOOD_CONSUME_BUTTON_SIZE', 150.0)

# Notices
NOTICE_DURATION = _get_float('MOOD_NOTICE_DURATION', 1.5)  # seconds
MAX_NOTICES = _get_int('MOOD_MAX_NOTICES', 4)

# Optional background image for the renderer
BACKGROUND_IMAGE = os.getenv('MOOD_BACKGROUND_IMAGE') or None

# Colors
COFFEE_DARK = (80, 49, 30)
COFFEE_MID = (122, 82, 52)
COFFEE_LIGHT = (205, 162, 127)
TEAL = (0, 167, 165)
CREAM = (245, 230, 211)
SKY = (135, 206, 235)
STREET = (105, 105, 105)
WHITE = (255, 255, 255)
OVERLAY_COLOR = (0, 0, 0, 204)
BEAN_COLOR = (96, 58, 34)
BEAN_HIGHLIGHT = (160, 110, 70)
SPARKLE_COLOR = (255, 240, 180)


class GameConfig(BaseModel):
    """Every tunable value of the game, validated.

    Instances are immutable; use ``with_overrides`` or ``load`` to derive
    variants.

    Examples:
        >>> cfg = GameConfig(game_duration=30.0)
        >>> cfg.item_half_size
        30.0
    """
    # Stage and window
    stage_width: int = Field(STAGE_WIDTH, gt=0)
    stage_height: int = Field(STAGE_HEIGHT, gt=0)
    window_width: int = Field(WINDOW_WIDTH, gt=0)
    window_height: int = Field(WINDOW_HEIGHT, gt=0)
    fps: int = Field(FPS, gt=0)
    max_frame_dt: float = Field(MAX_FRAME_DT, gt=0)

    # Player
    player_step: float = Field(PLAYER_STEP, ge=0)
    player_half_size: float = Field(PLAYER_HALF_SIZE, gt=0)
    player_y: float = PLAYER_Y

    # Items
    item_size: float = Field(ITEM_SIZE, gt=0)
    spawn_interval: float = Field(SPAWN_INTERVAL, gt=0)
    spawn_margin: float = Field(SPAWN_MARGIN, ge=0)
    item_base_speed: float = Field(ITEM_BASE_SPEED, ge=0)
    item_speed_jitter: float = Field(ITEM_SPEED_JITTER, ge=0)

    # Source
    source_x: float = SOURCE_X
    source_tolerance: float = Field(SOURCE_TOLERANCE, gt=0)

    # Rewards
    consume_cooldown: float = Field(CONSUME_COOLDOWN, ge=0)
    consume_mood_increase: int = Field(CONSUME_MOOD_INCREASE, ge=0)
    consume_score_bonus: int = Field(CONSUME_SCORE_BONUS, ge=0)
    item_mood_increase: int = Field(ITEM_MOOD_INCREASE, ge=0)
    item_score_bonus: int = Field(ITEM_SCORE_BONUS, ge=0)

    # Flow
    game_duration: float = Field(GAME_DURATION, gt=0)
    result_display: float = Field(RESULT_DISPLAY, ge=0)
    attract_timeout: float = Field(ATTRACT_TIMEOUT, ge=0)
    attract_auto_start: bool = ATTRACT_AUTO_START

    # DRINK button
    consume_button_x: float = CONSUME_BUTTON_X
    consume_button_y: float = CONSUME_BUTTON_Y
    consume_button_size: float = Field(CONSUME_BUTTON_SIZE, gt=0)

    # Notices
    notice_duration: float = Field(NOTICE_DURATION, gt=0)
    max_notices: int = Field(MAX_NOTICES, gt=0)

    model_config = ConfigDict(frozen=True, extra='forbid')

    @model_validator(mode='after')
    def check_stage_layout(self) -> 'GameConfig':
        """Cross-field checks against the stage size."""
        if self.player_half_size * 2 >= self.stage_width:
            raise ValueError(
                f'player_half_size {self.player_half_size} does not fit a '
                f'stage {self.stage_width} wide'
            )
        if self.spawn_margin * 2 > self.stage_width:
            raise ValueError(
                f'spawn_margin {self.spawn_margin} leaves no room on a '
                f'stage {self.stage_width} wide'
            )
        if not 0 <= self.source_x <= self.stage_width:
            raise ValueError(f'source_x {self.source_x} is outside the stage')
        if not 0 <= self.player_y <= self.stage_height:
            raise ValueError(f'player_y {self.player_y} is outside the stage')
        return self

    @property
    def item_half_size(self) -> float:
        return self.item_size / 2

    @property
    def min_player_x(self) -> float:
        return self.player_half_size

    @property
    def max_player_x(self) -> float:
        return self.stage_width - self.player_half_size

    @property
    def stage_center_x(self) -> float:
        return self.stage_width / 2

    @property
    def consume_button(self) -> Rectangle:
        """Hit region of the DRINK button in stage coordinates."""
        return Rectangle(
            x=self.consume_button_x,
            y=self.consume_button_y,
            width=self.consume_button_size,
            height=self.consume_button_size,
        )

    @property
    def stage_resolution(self) -> Resolution:
        return Resolution(width=self.stage_width, height=self.stage_height)

    @property
    def window_resolution(self) -> Resolution:
        return Resolution(width=self.window_width, height=self.window_height)

    def clamp_player_x(self, x: float) -> float:
        """Clamp a horizontal position to the player's allowed range."""
        return max(self.min_player_x, min(self.max_player_x, x))

    def with_overrides(self, **overrides: Any) -> 'GameConfig':
        """Return a validated copy with the given fields replaced.

        None values are ignored so argparse defaults can be passed through.
        """
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return GameConfig.model_validate(data)

    @classmethod
    def load(
        cls,
        path: Optional[Union[str, Path]] = None,
        **overrides: Any,
    ) -> 'GameConfig':
        """Build a config from defaults, an optional YAML file and overrides.

        Args:
            path: YAML file holding a mapping of field names to values
            **overrides: Field values applied after the file

        Raises:
            ConfigError: If the file cannot be read or is not a mapping
            pydantic.ValidationError: If a value is invalid or unknown
        """
        data: Dict[str, Any] = {}
        if path is not None:
            data = _read_yaml(Path(path))
        data.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(data)


def _read_yaml(path: Path) -> Dict[str, Any]:
    """Read a YAML mapping from disk."""
    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Config file {path} must contain a mapping, got {type(data).__name__}"
        )
    return data
