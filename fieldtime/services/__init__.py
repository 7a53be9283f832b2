"""
Services package for the FieldTime game-state engine.

This package contains the clock, assignment, swap queue, controller and
persistence services.
"""
from .clock_service import Clock, ClockEvent, ClockEventKind, ClockState, IntervalTicker
from .assignment_service import AssignmentService
from .swap_queue import SwapQueue
from .game_controller import GameController
from .persistence_service import PersistenceError, PersistenceService

__all__ = [
    "Clock", "ClockEvent", "ClockEventKind", "ClockState", "IntervalTicker",
    "AssignmentService", "SwapQueue", "GameController",
    "PersistenceError", "PersistenceService"
]
