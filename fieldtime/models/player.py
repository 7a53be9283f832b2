"""
Player model for the FieldTime game-state engine.

This module contains the Player dataclass which represents an individual
roster entry and its per-game state: playing/bench counters, the active flag
and the append-only position history.
"""
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .position import Position
from ..utils import fmt_mmss


def new_id() -> str:
    """Generate an opaque unique identifier."""
    return uuid.uuid4().hex


@dataclass
class Player:
    """
    Represents a rostered player with field and bench time tracking.

    Attributes:
        first_name: Player's first name (required, display only)
        last_name: Player's last name (optional)
        number: Jersey number (optional)
        id: Opaque unique identifier, never changes
        seconds_played: Seconds accrued while occupying a field position
        seconds_on_bench: Seconds accrued while on the bench
        is_active: Whether the player currently occupies a field position
        positions: Append-only position history; the last entry is current
    """
    first_name: str
    last_name: Optional[str] = None
    number: Optional[int] = None
    id: str = field(default_factory=new_id)
    seconds_played: int = 0
    seconds_on_bench: int = 0
    is_active: bool = False
    positions: List[Position] = field(default_factory=lambda: [Position.BENCH])

    @property
    def current_position(self) -> Position:
        return self.positions[-1] if self.positions else Position.BENCH

    def move_to(self, position: Position) -> None:
        """
        Place the player at a position (or the bench).

        History only grows when the position actually changes.
        """
        if self.current_position != position:
            self.positions.append(position)
        self.is_active = not position.is_bench

    def bench(self) -> None:
        self.move_to(Position.BENCH)

    def reset_positions(self) -> None:
        self.positions = [Position.BENCH]
        self.is_active = False

    def reset_counters(self) -> None:
        self.seconds_played = 0
        self.seconds_on_bench = 0

    def accrue(self, seconds: int) -> None:
        """Add elapsed game seconds to the playing or bench counter."""
        if seconds <= 0:
            return
        if self.is_active:
            self.seconds_played += seconds
        else:
            self.seconds_on_bench += seconds

    # Display helpers
    @property
    def display_name(self) -> str:
        if self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.first_name

    def formatted_play_time(self) -> str:
        return fmt_mmss(self.seconds_played)

    def formatted_bench_time(self) -> str:
        return fmt_mmss(self.seconds_on_bench)

    def positions_played(self) -> List[str]:
        """Short labels of every non-bench position in the history."""
        return [p.short for p in self.positions if not p.is_bench]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "number": self.number,
            "seconds_played": self.seconds_played,
            "seconds_on_bench": self.seconds_on_bench,
            "is_active": self.is_active,
            "positions": [p.value for p in self.positions],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """
        Create from dictionary for JSON deserialization.

        Unknown positions in the history are dropped and counters are clamped
        to non-negative values.

        Raises:
            ValueError: If the record has no usable first name or id
        """
        first_name = data.get("first_name")
        if not isinstance(first_name, str) or not first_name.strip():
            raise ValueError("Player record is missing first_name")
        player_id = data.get("id")
        if not isinstance(player_id, str) or not player_id:
            raise ValueError("Player record is missing id")

        positions = [
            pos for pos in (Position.parse(raw) for raw in data.get("positions") or [])
            if pos is not None
        ] or [Position.BENCH]

        number = data.get("number")
        try:
            number = int(number) if number is not None else None
        except (TypeError, ValueError, OverflowError):
            number = None

        player = cls(
            first_name=first_name,
            last_name=data.get("last_name") or None,
            number=number,
            id=player_id,
            seconds_played=_read_counter(data, "seconds_played"),
            seconds_on_bench=_read_counter(data, "seconds_on_bench"),
            positions=positions,
        )
        # The active flag always follows the current position
        player.is_active = not player.current_position.is_bench
        return player


def _read_counter(data: Dict[str, Any], key: str) -> int:
    value = data.get(key, 0) or 0
    try:
        return max(0, int(value))
    except OverflowError as exc:
        raise ValueError(f"Player record has out-of-range {key}") from exc
