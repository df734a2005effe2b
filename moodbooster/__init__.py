"""
Mood Booster - a short arcade mini-game.

Move the barista under falling coffee beans and drink at the spout to fill
the mood meter before the countdown ends.
"""

__version__ = '1.0.0'
