"""
Immediate position assignment for the FieldTime game-state engine.

Used before kickoff or while the clock is paused. Every assignment enforces
the single-occupant rule: moving a player onto a field position benches
whoever stood there.
"""
import logging
from typing import AbstractSet

from ..models import CommandStatus, Player, Position, Roster

logger = logging.getLogger(__name__)


def is_assignable(position: Position, active_positions: AbstractSet[Position]) -> bool:
    """Bench is always assignable; field positions only while active."""
    return position.is_bench or position in active_positions


def displace_occupants(roster: Roster, position: Position, keep: Player) -> int:
    """
    Bench every player at ``position`` other than ``keep``.

    Returns:
        Number of players displaced
    """
    if position.is_bench:
        return 0
    displaced = 0
    for other in roster.occupants(position):
        if other is keep:
            continue
        other.bench()
        displaced += 1
    return displaced


class AssignmentService:
    """Applies position changes synchronously."""

    def __init__(self, roster: Roster, active_positions: AbstractSet[Position]):
        self.roster = roster
        self.active_positions = active_positions

    def assign(self, player_id: str, position: Position) -> CommandStatus:
        """
        Move a player to a position or the bench right away.

        Args:
            player_id: Target player's id
            position: Destination (bench or an active position)

        Returns:
            APPLIED, NO_SUCH_PLAYER or POSITION_NOT_ACTIVE
        """
        player = self.roster.get(player_id)
        if player is None:
            return CommandStatus.NO_SUCH_PLAYER
        if not is_assignable(position, self.active_positions):
            return CommandStatus.POSITION_NOT_ACTIVE

        if position.is_bench:
            player.bench()
        else:
            displaced = displace_occupants(self.roster, position, keep=player)
            player.move_to(position)
            if displaced:
                logger.debug("Displaced %d player(s) from %s", displaced, position.value)

        logger.debug("Assigned %s to %s", player.display_name, position.value)
        return CommandStatus.APPLIED
