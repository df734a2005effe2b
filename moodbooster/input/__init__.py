"""
Input layer: raw events, sources, the manager and the intent mapper.

Usage:
    >>> from moodbooster.input import InputManager, PygameInputSource
    >>> manager = InputManager(PygameInputSource())
"""
from moodbooster.input.input_event import InputEvent
from moodbooster.input.input_manager import InputManager
from moodbooster.input.input_mapper import InputMapper, SurfaceScaler
from moodbooster.input.sources import InputSource, PygameInputSource

__all__ = [
    'InputEvent',
    'InputManager',
    'InputMapper',
    'SurfaceScaler',
    'InputSource',
    'PygameInputSource',
]
