"""
Deferred substitutions for the FieldTime game-state engine.

While the clock runs, position changes are staged in a queue and committed
together at a stoppage. Applying is a two-pass batch: every target is
vacated first, then every queued player is placed. Vacating all targets
before placing anyone is what lets "A takes B's spot, B takes A's spot"
come out as a true swap; keep the passes separate.
"""
import logging
from typing import AbstractSet, Iterator, List, Optional

from .assignment_service import displace_occupants, is_assignable
from ..models import CommandStatus, Player, Position, QueuedSwap, Roster

logger = logging.getLogger(__name__)


class SwapQueue:
    """Ordered staged swaps, at most one per player."""

    def __init__(
        self,
        active_positions: AbstractSet[Position],
        entries: Optional[List[QueuedSwap]] = None,
    ):
        self.active_positions = active_positions
        self._entries: List[QueuedSwap] = list(entries or [])

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __iter__(self) -> Iterator[QueuedSwap]:
        return iter(self._entries)

    @property
    def entries(self) -> List[QueuedSwap]:
        return list(self._entries)

    def entry_for(self, player_id: str) -> Optional[QueuedSwap]:
        return next((s for s in self._entries if s.player_id == player_id), None)

    def enqueue(self, player: Player, target: Position) -> CommandStatus:
        """
        Stage a move for ``player``; a newer request replaces an older one.

        Returns:
            QUEUED, POSITION_NOT_ACTIVE, or UNCHANGED when the player is
            already at the target (this covers bench to bench)
        """
        if not is_assignable(target, self.active_positions):
            return CommandStatus.POSITION_NOT_ACTIVE
        current = player.current_position
        if target == current:
            return CommandStatus.UNCHANGED

        item = QueuedSwap(player_id=player.id, target=target, origin=current)
        for idx, existing in enumerate(self._entries):
            if existing.player_id == player.id:
                self._entries[idx] = item
                break
        else:
            self._entries.append(item)
        logger.debug("Queued %s: %s -> %s", player.display_name, current.value, target.value)
        return CommandStatus.QUEUED

    def apply_all(self, roster: Roster) -> int:
        """
        Commit every staged swap as one batch and empty the queue.

        Entries whose player left the roster or whose target is no longer
        active are skipped without failing the batch.

        Returns:
            Number of entries placed
        """
        entries = self._entries
        self._entries = []

        # Pass 1: vacate every valid target
        for item in entries:
            if is_assignable(item.target, self.active_positions):
                displace_occupants(roster, item.target, keep=roster.get(item.player_id))

        # Pass 2: place queued players
        placed = 0
        for item in entries:
            player = roster.get(item.player_id)
            if player is None or not is_assignable(item.target, self.active_positions):
                continue
            player.move_to(item.target)
            placed += 1

        logger.debug("Applied %d of %d queued swaps", placed, len(entries))
        return placed

    def clear(self) -> None:
        self._entries.clear()

    def restore(self, entries: List[QueuedSwap]) -> None:
        """Replace the queue with previously saved entries."""
        self._entries = list(entries)

    def discard_target(self, position: Position) -> int:
        """Drop entries targeting ``position``; returns how many were dropped."""
        before = len(self._entries)
        self._entries = [s for s in self._entries if s.target != position]
        return before - len(self._entries)

    def discard_player(self, player_id: str) -> bool:
        before = len(self._entries)
        self._entries = [s for s in self._entries if s.player_id != player_id]
        return len(self._entries) != before
