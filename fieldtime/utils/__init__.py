"""
Utilities package for the FieldTime game-state engine.

This package contains utility functions and constants used throughout the application.
"""
from .time_utils import fmt_mmss, now_ts
from .constants import (
    APP_TITLE, DEFAULT_GAME_DURATION_SECONDS, MIN_GAME_LENGTH_MIN,
    MAX_GAME_LENGTH_MIN, TICK_INTERVAL_SECONDS
)

__all__ = [
    "fmt_mmss", "now_ts", "APP_TITLE", "DEFAULT_GAME_DURATION_SECONDS",
    "MIN_GAME_LENGTH_MIN", "MAX_GAME_LENGTH_MIN", "TICK_INTERVAL_SECONDS"
]
