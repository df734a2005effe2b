"""Input sources: the abstract interface and the pygame implementation."""
from moodbooster.input.sources.base import InputSource
from moodbooster.input.sources.pygame_source import PygameInputSource

__all__ = ['InputSource', 'PygameInputSource']
