"""
Mood Booster enumerations.

These enums define the game phases, input vocabulary and action outcomes.
"""

from enum import Enum


class Phase(str, Enum):
    """Phases of the game cycle.

    ATTRACT -> PLAYING -> {VICTORY, DEFEAT} -> ATTRACT

    Attributes:
        ATTRACT: Idle/demo screen waiting for a tap (initial phase)
        PLAYING: Active run, countdown running
        VICTORY: Mood meter filled before the countdown expired
        DEFEAT: Countdown expired with the meter below 100
    """
    ATTRACT = "attract"
    PLAYING = "playing"
    VICTORY = "victory"
    DEFEAT = "defeat"

    @property
    def is_terminal(self) -> bool:
        """True for the timed result phases."""
        return self in (Phase.VICTORY, Phase.DEFEAT)


class ConsumeResult(str, Enum):
    """Outcome of a consume (drink) request.

    Attributes:
        CONSUMED: Mood, score and cooldown were applied
        NOT_PLAYING: Requested outside the PLAYING phase
        COOLDOWN: Previous consume is still cooling down
        OUT_OF_RANGE: Player is not under the source
    """
    CONSUMED = "consumed"
    NOT_PLAYING = "not_playing"
    COOLDOWN = "cooldown"
    OUT_OF_RANGE = "out_of_range"

    @property
    def succeeded(self) -> bool:
        return self is ConsumeResult.CONSUMED


class NoticeKind(str, Enum):
    """Kinds of transient user-facing notices."""
    STARTED = "started"
    CONSUMED = "consumed"
    REJECTED = "rejected"
    COLLECTED = "collected"
    VICTORY = "victory"
    DEFEAT = "defeat"


class InputKind(str, Enum):
    """Kinds of raw input events.

    Attributes:
        POINTER_DOWN: Mouse button / touch pressed
        POINTER_MOVE: Pointer moved
        POINTER_UP: Mouse button / touch released
        KEY_DOWN: Discrete key press mapped to an InputKey
    """
    POINTER_DOWN = "pointer_down"
    POINTER_MOVE = "pointer_move"
    POINTER_UP = "pointer_up"
    KEY_DOWN = "key_down"

    @property
    def is_pointer(self) -> bool:
        return self is not InputKind.KEY_DOWN


class InputKey(str, Enum):
    """Logical keys the game understands."""
    LEFT = "left"
    RIGHT = "right"
    ACTION = "action"
    RESTART = "restart"


class HeroPose(str, Enum):
    """How the hero is drawn.

    Attributes:
        IDLE: Standing upright
        DRINKING: Just drank from the spout, sparkles over the head
        HAPPY: Meter full, bouncing
        SLOUCHED: Low mood, posture sagging
    """
    IDLE = "idle"
    DRINKING = "drinking"
    HAPPY = "happy"
    SLOUCHED = "slouched"
