"""
Main game engine for Mood Booster.

This module provides the frame loop: pygame initialization, input pumping,
timeouts, the simulation tick and rendering.
"""
import random
from pathlib import Path
from typing import Optional, Tuple, Union

import pygame

from moodbooster.clock import FrameClock
from moodbooster.config import GameConfig
from moodbooster.game_mode import MoodBoosterGame, TickReport
from moodbooster.input import InputManager, InputMapper, PygameInputSource, SurfaceScaler
from moodbooster.logging import get_logger
from moodbooster.models import Resolution
from moodbooster.notifications import NotificationChannel
from moodbooster.renderer import Renderer
from moodbooster.scheduler import TimerScheduler

log = get_logger('engine')


class GameEngine:
    """Main game engine managing the frame loop and pygame state.

    Each frame derives ``dt`` from the frame clock, turns pending input into
    intents for the game, advances timeouts, ticks the game once and draws
    the resulting snapshot.

    Attributes:
        screen: Pygame display surface
        clock: Pygame clock for frame pacing
        frame_clock: Source of the simulation step
        running: Whether the frame loop should continue
        scheduler: Timeouts advanced once per frame
        notices: User-facing notices
        game: The state machine
        input_manager: Holds the pygame input source
        mapper: Turns input events into intents
        renderer: Draws snapshots

    Examples:
        >>> engine = GameEngine(seed=7)
        >>> engine.run()
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        window_size: Optional[Tuple[int, int]] = None,
        seed: Optional[int] = None,
        fullscreen: bool = False,
        background: Optional[Union[str, Path]] = None,
    ):
        """Initialize pygame, the window and every collaborator.

        Args:
            config: Game configuration (defaults from the environment)
            window_size: Window size; the configured window size if None
            seed: Seed for item spawning
            fullscreen: Use the whole display
            background: Optional background image file
        """
        self.config = config if config is not None else GameConfig()

        # Initialize pygame
        pygame.init()

        if fullscreen:
            self.screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        else:
            size = window_size or self.config.window_resolution.as_tuple()
            self.screen = pygame.display.set_mode(size, pygame.RESIZABLE)
        pygame.display.set_caption(MoodBoosterGame.NAME)

        # Frame pacing and simulation time
        self.clock = pygame.time.Clock()
        self.frame_clock = FrameClock(max_dt=self.config.max_frame_dt)
        self.running = True

        # Simulation
        self.scheduler = TimerScheduler()
        self.notices = NotificationChannel(
            duration=self.config.notice_duration,
            max_active=self.config.max_notices,
        )
        self.game = MoodBoosterGame(
            config=self.config,
            scheduler=self.scheduler,
            notices=self.notices,
            rng=random.Random(seed),
        )

        # Input
        self.input_manager = InputManager(PygameInputSource())
        width, height = self.screen.get_size()
        self.mapper = InputMapper(
            self.config,
            SurfaceScaler(Resolution(width=width, height=height), self.config.stage_resolution),
        )

        self.renderer = Renderer(self.config, background=background)

        log.info("Window %dx%d, stage %dx%d, seed=%s",
                 width, height, self.config.stage_width, self.config.stage_height, seed)

    def handle_events(self) -> None:
        """Process window events left over by the input source.

        QUIT and ESC stop the loop; a resize rescales pointer input.
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                log.info("Window closed")
                self.stop()
                return
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                log.info("Escape pressed")
                self.stop()
                return
            if event.type == pygame.VIDEORESIZE:
                self._on_resize(event.w, event.h)

    def _on_resize(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            return
        surface = pygame.display.get_surface()
        if surface is not None:
            self.screen = surface
        self.mapper.scaler.resize(width, height)
        log.debug("Window resized to %dx%d", width, height)

    def run_frame(self, timestamp: Optional[float] = None) -> Optional[TickReport]:
        """Run a single frame.

        Args:
            timestamp: Monotonic time of the frame; read from the clock if None

        Returns:
            The tick report, or None if the frame stopped the engine
        """
        dt = self.frame_clock.tick(timestamp)

        # Input: the source takes pointer and key events, the rest stay queued
        self.input_manager.update(dt)
        self.handle_events()
        if not self.running:
            return None

        intents = self.mapper.translate_all(self.input_manager.get_events(), self.game.state)
        self.game.submit_all(intents)

        # Timeouts, then the simulation, then the notices
        self.scheduler.update(dt)
        report = self.game.tick(dt)
        self.notices.update(dt)

        self.renderer.render(self.screen, self.game.state, self.notices.active)
        pygame.display.flip()
        return report

    def run(self) -> None:
        """Run the frame loop until stopped."""
        self.frame_clock.seed()
        log.info("Frame loop started at %d fps", self.config.fps)

        while self.running:
            self.run_frame()
            self.clock.tick(self.config.fps)

        log.info("Frame loop stopped")

    def stop(self) -> None:
        """Stop the loop and release timeouts and input."""
        self.running = False
        self.scheduler.cancel_all()
        self.game.shutdown()
        self.input_manager.detach()
        self.mapper.reset()

    def quit(self) -> None:
        """Stop and shut pygame down."""
        self.stop()
        pygame.quit()
