"""
Pygame Input Source - Mouse/touch and keyboard input.
"""
import time
from typing import Callable, Dict, List

import pygame

from moodbooster.input.input_event import InputEvent
from moodbooster.input.sources.base import InputSource
from moodbooster.models import InputKey, InputKind

# Keyboard bindings
KEY_BINDINGS: Dict[int, InputKey] = {
    pygame.K_LEFT: InputKey.LEFT,
    pygame.K_a: InputKey.LEFT,
    pygame.K_RIGHT: InputKey.RIGHT,
    pygame.K_d: InputKey.RIGHT,
    pygame.K_SPACE: InputKey.ACTION,
    pygame.K_RETURN: InputKey.ACTION,
    pygame.K_r: InputKey.RESTART,
}


class PygameInputSource(InputSource):
    """Converts pygame mouse and key events into InputEvent models.

    Left button presses and releases become pointer down/up, motion with the
    left button held becomes pointer move, and bound keys become key downs.
    Everything else (QUIT, ESC, window resize, ...) is re-posted to the
    pygame event queue for the main loop.
    """

    def __init__(self, time_source: Callable[[], float] = time.monotonic):
        """Initialize the pygame input source."""
        self._time_source = time_source
        self._event_queue: List[InputEvent] = []

    def poll_events(self) -> List[InputEvent]:
        """Get new input events since last poll."""
        events = self._event_queue.copy()
        self._event_queue.clear()
        return events

    def update(self, dt: float) -> None:
        """Process pygame events and collect pointer and key input."""
        for event in pygame.event.get():
            if not self._convert(event):
                # Re-post for the main loop to handle
                pygame.event.post(event)

    def _convert(self, event: pygame.event.Event) -> bool:
        """Queue the InputEvent for a pygame event; False if not ours."""
        now = self._time_source()

        if event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
            if event.button != 1:  # Left mouse button only
                return True
            kind = (InputKind.POINTER_DOWN if event.type == pygame.MOUSEBUTTONDOWN
                    else InputKind.POINTER_UP)
            x, y = event.pos
            self._event_queue.append(InputEvent.pointer(kind, x, y, now))
            return True

        if event.type == pygame.MOUSEMOTION:
            if event.buttons[0]:
                x, y = event.pos
                self._event_queue.append(
                    InputEvent.pointer(InputKind.POINTER_MOVE, x, y, now)
                )
            return True

        if event.type == pygame.KEYDOWN and event.key in KEY_BINDINGS:
            self._event_queue.append(InputEvent.key_down(KEY_BINDINGS[event.key], now))
            return True

        return False
