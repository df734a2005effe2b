"""
Mood Booster - Game Mode.

Move the barista under the falling coffee beans and drink from the spout to
fill the mood meter before the countdown runs out.

The state machine below owns the only mutable reference to the game state.
Every mutation builds a new immutable GameState and swaps it in, so the
renderer always sees a consistent snapshot.
"""
import random
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from moodbooster.config import GameConfig
from moodbooster.intents import (
    ConsumeIntent,
    Intent,
    MoveIntent,
    PositionIntent,
    StartIntent,
)
from moodbooster.logging import get_logger
from moodbooster.models import (
    MOOD_MAX,
    ConsumeResult,
    FallingItem,
    GameState,
    NoticeKind,
    Phase,
)
from moodbooster.notifications import NotificationChannel
from moodbooster.physics import step_items
from moodbooster.scheduler import Timeout, TimerScheduler
from moodbooster.spawner import ItemSpawner

log = get_logger('game_mode')

OUT_OF_RANGE_MESSAGE = "Move under the coffee spout!"


@dataclass
class TickReport:
    """What a single tick did.

    Attributes:
        phase_before: Phase when the tick started (before queued intents)
        phase_after: Phase when the tick ended
        spawned: Items created by the spawner this tick
        collected: Items the player caught this tick
        removed: Items that fell off the stage this tick
    """
    phase_before: Phase
    phase_after: Phase
    spawned: List[FallingItem] = field(default_factory=list)
    collected: List[FallingItem] = field(default_factory=list)
    removed: int = 0

    @property
    def transitioned(self) -> bool:
        return self.phase_before != self.phase_after


class MoodBoosterGame:
    """
    Mood Booster game mode.

    Cycle: ATTRACT -> PLAYING -> {VICTORY, DEFEAT} -> ATTRACT.

    While PLAYING, the countdown and the drink cooldown run down with every
    tick, beans fall and are caught by the player, and the mood meter rises
    with every catch and every drink. A full meter wins; an empty countdown
    loses. The result screen returns to attract through a timeout on the
    injected scheduler.

    Calls that do not apply to the current phase are ignored. Gameplay
    operations never raise.
    """

    # Game metadata
    NAME = "Mood Booster"
    DESCRIPTION = "Catch coffee beans and drink up to fill the mood meter before time runs out!"
    VERSION = "1.0.0"
    AUTHOR = "Mood Booster Team"

    # CLI arguments, mapped onto GameConfig fields through 'dest'
    ARGUMENTS: List[Dict[str, Any]] = [
        {
            'name': '--duration',
            'dest': 'game_duration',
            'type': float,
            'default': None,
            'help': 'Round length in seconds'
        },
        {
            'name': '--spawn-interval',
            'dest': 'spawn_interval',
            'type': float,
            'default': None,
            'help': 'Seconds between falling beans'
        },
        {
            'name': '--cooldown',
            'dest': 'consume_cooldown',
            'type': float,
            'default': None,
            'help': 'Seconds between drinks'
        },
        {
            'name': '--auto-start',
            'dest': 'attract_auto_start',
            'action': 'store_true',
            'default': None,
            'help': 'Start a round automatically after the attract timeout'
        },
    ]

    @classmethod
    def get_arguments(cls) -> List[Dict[str, Any]]:
        """CLI argument definitions suitable for argparse."""
        return list(cls.ARGUMENTS)

    @classmethod
    def get_info(cls) -> Dict[str, Any]:
        """Get game metadata as a dictionary.

        Returns:
            Dict with keys: name, description, version, author, arguments
        """
        return {
            'name': cls.NAME,
            'description': cls.DESCRIPTION,
            'version': cls.VERSION,
            'author': cls.AUTHOR,
            'arguments': cls.get_arguments(),
        }

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        scheduler: Optional[TimerScheduler] = None,
        notices: Optional[NotificationChannel] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the game in ATTRACT.

        Args:
            config: Game configuration (defaults from the environment)
            scheduler: Runs the result-screen timeout; the driver advances it
            notices: Channel for user-facing notices
            rng: Random source for the spawner
        """
        self._config = config if config is not None else GameConfig()
        self._scheduler = scheduler if scheduler is not None else TimerScheduler()
        self._notices = notices if notices is not None else NotificationChannel(
            duration=self._config.notice_duration,
            max_active=self._config.max_notices,
        )
        self._spawner = ItemSpawner(self._config, rng)

        self._state = GameState.initial(self._config)
        self._intents: List[Intent] = []
        self._result_timeout: Optional[Timeout] = None

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def state(self) -> GameState:
        """Current immutable snapshot."""
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def scheduler(self) -> TimerScheduler:
        return self._scheduler

    @property
    def notices(self) -> NotificationChannel:
        return self._notices

    @property
    def spawner(self) -> ItemSpawner:
        return self._spawner

    @property
    def result_timeout(self) -> Optional[Timeout]:
        """Pending return-to-attract timeout, if a result is showing."""
        return self._result_timeout

    @property
    def pending_intents(self) -> int:
        return len(self._intents)

    def get_score(self) -> int:
        return self._state.score

    # =========================================================================
    # Intents
    # =========================================================================

    def submit(self, intent: Intent) -> None:
        """Queue an intent for the next tick."""
        self._intents.append(intent)

    def submit_all(self, intents: Iterable[Intent]) -> None:
        self._intents.extend(intents)

    def _drain_intents(self) -> None:
        """Apply queued intents in submission order."""
        queued, self._intents = self._intents, []
        for intent in queued:
            self._apply(intent)

    def _apply(self, intent: Intent) -> None:
        if isinstance(intent, StartIntent):
            self.start()
        elif isinstance(intent, MoveIntent):
            self.move_player(intent.delta)
        elif isinstance(intent, PositionIntent):
            self.set_player_position(intent.x)
        elif isinstance(intent, ConsumeIntent):
            self.request_consume()
        else:
            log.warning("Ignoring unknown intent %r", intent)

    # =========================================================================
    # Operations
    # =========================================================================

    def start(self) -> bool:
        """
        Begin a new run from ATTRACT or a result screen.

        Returns:
            True if a run started, False if one was already in progress
        """
        if self._state.phase == Phase.PLAYING:
            log.debug("start() ignored while playing")
            return False

        self._cancel_result_timeout()
        self._spawner.reset()

        cfg = self._config
        self._state = GameState(
            phase=Phase.PLAYING,
            mood=0,
            time_left=cfg.game_duration,
            player_x=cfg.stage_center_x,
            action_cooldown=0.0,
            attract_timer=0.0,
            score=0,
            items=(),
            run_id=self._state.run_id + 1,
        )
        log.info("Run %d started (%.0fs)", self._state.run_id, cfg.game_duration)
        self._notices.post(NoticeKind.STARTED, "Fill the mood meter!")
        return True

    def tick(self, dt: float) -> TickReport:
        """
        Advance the simulation by ``dt`` seconds.

        Queued intents are applied first, then the phase logic runs once.
        Negative steps are treated as zero.

        Args:
            dt: Delta time in seconds

        Returns:
            TickReport describing what happened
        """
        dt = max(0.0, dt)
        report = TickReport(phase_before=self._state.phase, phase_after=self._state.phase)

        self._drain_intents()

        phase = self._state.phase
        if phase == Phase.ATTRACT:
            self._tick_attract(dt)
        elif phase == Phase.PLAYING:
            self._tick_playing(dt, report)

        report.phase_after = self._state.phase
        return report

    def _tick_attract(self, dt: float) -> None:
        attract_timer = self._state.attract_timer + dt
        self._state = self._state.model_copy(update={'attract_timer': attract_timer})

        cfg = self._config
        if cfg.attract_auto_start and attract_timer >= cfg.attract_timeout:
            log.info("Attract timeout reached, starting automatically")
            self.start()

    def _tick_playing(self, dt: float, report: TickReport) -> None:
        cfg = self._config
        state = self._state

        time_left = max(0.0, state.time_left - dt)
        action_cooldown = max(0.0, state.action_cooldown - dt)

        physics = step_items(state.items, state.player_x, dt, cfg)
        spawned = self._spawner.update(dt)

        mood = state.mood
        score = state.score
        for _item in physics.collected:
            mood = min(mood + cfg.item_mood_increase, MOOD_MAX)
            score += cfg.item_score_bonus

        self._state = state.model_copy(update={
            'time_left': time_left,
            'action_cooldown': action_cooldown,
            'items': physics.items + tuple(spawned),
            'mood': mood,
            'score': score,
        })

        for _item in physics.collected:
            self._notices.post(NoticeKind.COLLECTED, f"Coffee bean +{cfg.item_mood_increase}!")

        report.spawned = spawned
        report.collected = physics.collected
        report.removed = physics.removed

        # Mood wins over the countdown when both finish on the same tick
        if self._state.is_meter_full:
            self._enter_result(Phase.VICTORY)
        elif self._state.time_left <= 0:
            self._enter_result(Phase.DEFEAT)

    def _enter_result(self, phase: Phase) -> None:
        self._state = self._state.model_copy(update={'phase': phase})
        log.info("Run %d ended: %s (mood=%d, score=%d)",
                 self._state.run_id, phase.value, self._state.mood, self._state.score)

        if phase == Phase.VICTORY:
            self._notices.post(NoticeKind.VICTORY, "Mood Charged!")
        else:
            self._notices.post(NoticeKind.DEFEAT, "Need More Coffee!")

        self._cancel_result_timeout()
        self._result_timeout = self._scheduler.schedule(
            self._config.result_display,
            self.return_to_attract,
            name='return_to_attract',
        )

    def return_to_attract(self) -> None:
        """Leave the result screen. The last run's values stay visible."""
        self._cancel_result_timeout()
        if not self._state.phase.is_terminal:
            log.debug("return_to_attract() ignored in %s", self._state.phase.value)
            return

        self._state = self._state.model_copy(update={
            'phase': Phase.ATTRACT,
            'attract_timer': 0.0,
        })
        log.info("Back to attract")

    def request_consume(self) -> ConsumeResult:
        """
        Drink from the coffee spout.

        Succeeds only while PLAYING, with the cooldown expired and the player
        within tolerance of the spout.

        Returns:
            ConsumeResult describing the outcome
        """
        state = self._state
        cfg = self._config

        if state.phase != Phase.PLAYING:
            log.debug("Consume rejected: not playing")
            return ConsumeResult.NOT_PLAYING

        if state.action_cooldown > 0:
            log.debug("Consume rejected: cooldown %.2fs", state.action_cooldown)
            return ConsumeResult.COOLDOWN

        if abs(state.player_x - cfg.source_x) >= cfg.source_tolerance:
            log.debug("Consume rejected: player at %.1f, spout at %.1f",
                      state.player_x, cfg.source_x)
            self._notices.post(NoticeKind.REJECTED, OUT_OF_RANGE_MESSAGE)
            return ConsumeResult.OUT_OF_RANGE

        self._state = state.model_copy(update={
            'mood': min(state.mood + cfg.consume_mood_increase, MOOD_MAX),
            'action_cooldown': cfg.consume_cooldown,
            'score': state.score + cfg.consume_score_bonus,
        })
        log.debug("Consumed: mood=%d score=%d", self._state.mood, self._state.score)
        self._notices.post(NoticeKind.CONSUMED, f"Coffee power +{cfg.consume_mood_increase}!")
        return ConsumeResult.CONSUMED

    def move_player(self, delta: float) -> None:
        """Shift the player horizontally, clamped to the stage."""
        if self._state.phase != Phase.PLAYING:
            log.debug("move_player() ignored in %s", self._state.phase.value)
            return
        self.set_player_position(self._state.player_x + delta)

    def set_player_position(self, x: float) -> None:
        """Place the player at ``x``, clamped to the stage."""
        if self._state.phase != Phase.PLAYING:
            log.debug("set_player_position() ignored in %s", self._state.phase.value)
            return

        player_x = self._config.clamp_player_x(x)
        if player_x != self._state.player_x:
            self._state = self._state.model_copy(update={'player_x': player_x})

    def spawn_item(
        self,
        x: Optional[float] = None,
        y: Optional[float] = None,
        fall_speed: Optional[float] = None,
    ) -> Optional[FallingItem]:
        """
        Insert an item outside the spawn schedule.

        Args:
            x: Horizontal center (random if None)
            y: Vertical center (just above the stage if None)
            fall_speed: Pixels per second (random if None)

        Returns:
            The new item, or None when not playing
        """
        if self._state.phase != Phase.PLAYING:
            log.debug("spawn_item() ignored in %s", self._state.phase.value)
            return None

        item = self._spawner.spawn(x=x, y=y, fall_speed=fall_speed)
        self._state = self._state.model_copy(update={'items': self._state.items + (item,)})
        return item

    def shutdown(self) -> None:
        """Cancel the result timeout and drop queued intents."""
        self._cancel_result_timeout()
        self._intents.clear()
        log.debug("Game shut down")

    def _cancel_result_timeout(self) -> None:
        if self._result_timeout is not None:
            if self._result_timeout.is_pending:
                self._scheduler.cancel(self._result_timeout)
            self._result_timeout = None
