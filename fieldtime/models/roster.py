"""
Roster model for the FieldTime game-state engine.

The roster owns the ordered list of players. Order only matters for display
and default iteration; the engine never relies on it.
"""
from typing import Iterable, Iterator, List, Optional

from .player import Player
from .position import Position


class Roster:
    """Ordered collection of players keyed by their opaque id."""

    def __init__(self, players: Optional[Iterable[Player]] = None):
        self._players: List[Player] = list(players or [])

    def __iter__(self) -> Iterator[Player]:
        return iter(self._players)

    def __len__(self) -> int:
        return len(self._players)

    def __contains__(self, player_id: object) -> bool:
        return self.get(player_id) is not None

    @property
    def players(self) -> List[Player]:
        """Shallow copy of the players in display order."""
        return list(self._players)

    def get(self, player_id: object) -> Optional[Player]:
        for player in self._players:
            if player.id == player_id:
                return player
        return None

    def index_of(self, player_id: str) -> int:
        for idx, player in enumerate(self._players):
            if player.id == player_id:
                return idx
        return -1

    def occupants(self, position: Position) -> List[Player]:
        """Players whose current position is ``position``."""
        return [p for p in self._players if p.current_position == position]

    # ------------------------------------------------------------------
    # Roster editing
    # ------------------------------------------------------------------
    def add_player(
        self,
        first_name: str,
        last_name: Optional[str] = None,
        number: Optional[int] = None,
    ) -> Optional[str]:
        """
        Append a new benched player with zeroed counters.

        Returns:
            The new player's id, or None if the first name is blank
        """
        first = _clean(first_name)
        if not first:
            return None
        last = _clean(last_name) or None
        player = Player(first_name=first, last_name=last, number=number)
        self._players.append(player)
        return player.id

    def replace(self, players: Iterable[Player]) -> None:
        self._players = list(players)

    def remove_player(self, player_id: str) -> bool:
        idx = self.index_of(player_id)
        if idx < 0:
            return False
        del self._players[idx]
        return True

    def rename_player(
        self,
        player_id: str,
        first_name: str,
        last_name: Optional[str] = None,
    ) -> bool:
        """Rename a player; ignored when the first name trims to empty."""
        player = self.get(player_id)
        first = _clean(first_name)
        if player is None or not first:
            return False
        player.first_name = first
        player.last_name = _clean(last_name) or None
        return True

    def reorder(self, from_index: int, to_index: int) -> bool:
        """Move a player within the display order."""
        if not 0 <= from_index < len(self._players) or to_index < 0:
            return False
        player = self._players.pop(from_index)
        self._players.insert(min(to_index, len(self._players)), player)
        return True

    # ------------------------------------------------------------------
    # Bulk state changes
    # ------------------------------------------------------------------
    def accrue(self, seconds: int) -> None:
        for player in self._players:
            player.accrue(seconds)

    def reset_counters(self) -> None:
        for player in self._players:
            player.reset_counters()

    def bench_all(self) -> None:
        for player in self._players:
            player.reset_positions()


def _clean(value: object) -> str:
    return value.strip() if isinstance(value, str) else ""
