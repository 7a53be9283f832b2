"""
FieldTime

A game-state engine for tracking field and bench time on a youth sports
roster: a countdown clock, single-occupant position assignment and a swap
queue that batches substitutions until they are applied at a stoppage.

Display clients talk to it through the Flask JSON API in ``fieldtime.ui``.
"""
from .models import CommandStatus, GameState, Player, Position, QueuedSwap
from .services import Clock, GameController, PersistenceService
from .utils import fmt_mmss, now_ts, APP_TITLE

__version__ = "1.0.0"

__all__ = [
    "CommandStatus", "GameState", "Player", "Position", "QueuedSwap",
    "Clock", "GameController", "PersistenceService",
    "fmt_mmss", "now_ts", "APP_TITLE"
]
