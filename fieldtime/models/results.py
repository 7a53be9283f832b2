"""Command outcomes reported by the game-state engine."""
from enum import Enum


class CommandStatus(Enum):
    """
    Result of an engine command.

    Engine commands never raise for stale or invalid input; callers that care
    can inspect the status, everyone else can ignore it.
    """
    APPLIED = "applied"
    QUEUED = "queued"
    UNCHANGED = "unchanged"
    POSITION_NOT_ACTIVE = "position_not_active"
    NO_SUCH_PLAYER = "no_such_player"
    QUEUE_EMPTY = "queue_empty"
    GAME_NOT_RUNNING = "game_not_running"
    INVALID = "invalid"

    @property
    def ok(self) -> bool:
        return self in (CommandStatus.APPLIED, CommandStatus.QUEUED)
