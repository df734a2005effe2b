"""
Input mapping from raw events to game intents.

Raw events arrive in window coordinates. The SurfaceScaler converts them to
the stage's logical coordinates, and the InputMapper decides, based on the
latest snapshot, which intents they stand for.
"""
from typing import Iterable, List, Optional

from moodbooster.config import GameConfig
from moodbooster.input.input_event import InputEvent
from moodbooster.intents import (
    ConsumeIntent,
    Intent,
    MoveIntent,
    PositionIntent,
    StartIntent,
)
from moodbooster.models import GameState, InputKey, InputKind, Phase, Point2D, Resolution


class SurfaceScaler:
    """Linear per-axis scale from the window surface to the stage.

    Examples:
        >>> scaler = SurfaceScaler(Resolution(width=540, height=960),
        ...                        Resolution(width=1080, height=1920))
        >>> scaler.to_stage(Point2D(x=135, y=480))
        Point2D(x=270.0, y=960.0)
    """

    def __init__(self, surface: Resolution, stage: Resolution):
        self._stage = stage
        self._surface = surface
        self._scale_x = 1.0
        self._scale_y = 1.0
        self.resize(surface.width, surface.height)

    @property
    def scale(self) -> tuple:
        """(scale_x, scale_y) from surface pixels to stage units."""
        return (self._scale_x, self._scale_y)

    @property
    def surface(self) -> Resolution:
        return self._surface

    def resize(self, width: int, height: int) -> None:
        """Recompute the scale for a new window size."""
        self._surface = Resolution(width=width, height=height)
        self._scale_x = self._stage.width / width
        self._scale_y = self._stage.height / height

    def to_stage(self, point: Point2D) -> Point2D:
        """Map a surface point to stage coordinates."""
        return Point2D(x=point.x * self._scale_x, y=point.y * self._scale_y)


class InputMapper:
    """Translates input events into intents.

    Pointer input works like a touch screen: a tap starts the game from the
    attract screen, a tap on the DRINK button drinks, and a press anywhere
    else starts a drag that moves the player relative to where the drag
    began. Keys move the player in fixed steps.
    """

    def __init__(self, config: GameConfig, scaler: SurfaceScaler):
        """
        Args:
            config: Supplies the DRINK button region and the key step
            scaler: Window to stage conversion
        """
        self._config = config
        self._scaler = scaler
        self._drag_pointer_x: Optional[float] = None
        self._drag_player_x: Optional[float] = None

    @property
    def scaler(self) -> SurfaceScaler:
        return self._scaler

    @property
    def is_dragging(self) -> bool:
        return self._drag_pointer_x is not None

    def reset(self) -> None:
        """End any drag in progress."""
        self._drag_pointer_x = None
        self._drag_player_x = None

    def translate_all(self, events: Iterable[InputEvent], snapshot: GameState) -> List[Intent]:
        intents: List[Intent] = []
        for event in events:
            intents.extend(self.translate(event, snapshot))
        return intents

    def translate(self, event: InputEvent, snapshot: GameState) -> List[Intent]:
        """
        Map one event to zero or more intents.

        Args:
            event: Raw input event (surface coordinates)
            snapshot: Latest game state

        Returns:
            Intents to submit to the game
        """
        if event.kind == InputKind.KEY_DOWN:
            return self._translate_key(event.key)

        point = self._scaler.to_stage(event.position)
        playing = snapshot.phase == Phase.PLAYING

        if event.kind == InputKind.POINTER_DOWN:
            if snapshot.phase == Phase.ATTRACT:
                return [StartIntent()]
            if not playing:
                return []
            if self._config.consume_button.contains_point(point):
                return [ConsumeIntent()]
            self._drag_pointer_x = point.x
            self._drag_player_x = snapshot.player_x
            return []

        if event.kind == InputKind.POINTER_MOVE:
            if not (playing and self.is_dragging):
                return []
            return [PositionIntent(x=self._drag_player_x + point.x - self._drag_pointer_x)]

        # POINTER_UP
        self.reset()
        return []

    def _translate_key(self, key: InputKey) -> List[Intent]:
        step = self._config.player_step
        if key == InputKey.LEFT:
            return [MoveIntent(delta=-step)]
        if key == InputKey.RIGHT:
            return [MoveIntent(delta=step)]
        if key == InputKey.ACTION:
            return [ConsumeIntent()]
        if key == InputKey.RESTART:
            return [StartIntent()]
        return []
