"""
Models package for the FieldTime game-state engine.

This package contains the core data models used throughout the application.
"""
from .position import Position, ADDABLE_POSITIONS, DEFAULT_ACTIVE_POSITIONS
from .results import CommandStatus
from .player import Player
from .roster import Roster
from .swap import QueuedSwap
from .game_state import GameState

__all__ = [
    "Position", "ADDABLE_POSITIONS", "DEFAULT_ACTIVE_POSITIONS", "CommandStatus",
    "Player", "Roster", "QueuedSwap", "GameState"
]
