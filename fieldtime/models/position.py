"""Position catalog for the FieldTime game-state engine."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple


class Position(Enum):
    """Field positions a player can occupy, plus the bench sentinel."""
    BENCH = "Bench"
    GOALKEEPER = "Goalkeeper"
    LEFT_DEFENSE = "L Defense"
    RIGHT_DEFENSE = "R Defense"
    CENTER_BACK = "Center Back"
    SWEEPER = "Sweeper"
    STOPPER = "Stopper"
    MIDFIELDER = "Midfielder"
    LEFT_MID = "L Mid"
    RIGHT_MID = "R Mid"
    CENTER_MID = "Center Mid"
    ATTACKING_MID = "Attacking Mid"
    DEFENSIVE_MID = "Defensive Mid"
    LEFT_WING = "L Wing"
    RIGHT_WING = "R Wing"
    STRIKER = "Striker"
    CENTER_FULLBACK = "Center Fullback"
    # General groups
    OFFENSE = "Offense"
    DEFENSE = "Defense"

    @property
    def short(self) -> str:
        """Compact label used on field tags and queue rows."""
        return SHORT_LABELS[self]

    @property
    def is_bench(self) -> bool:
        return self is Position.BENCH

    @classmethod
    def parse(cls, value: object) -> Optional[Position]:
        """
        Resolve a position from its display name, enum name or short label.

        Returns None for anything unrecognised so that stale requests can be
        ignored instead of raising.
        """
        if isinstance(value, Position):
            return value
        if not isinstance(value, str):
            return None
        text = value.strip()
        if not text:
            return None
        try:
            return cls(text)
        except ValueError:
            pass
        upper = text.upper()
        if upper in cls.__members__:
            return cls.__members__[upper]
        for position, label in SHORT_LABELS.items():
            if label == upper:
                return position
        return None


SHORT_LABELS = {
    Position.GOALKEEPER: "GK",
    Position.LEFT_DEFENSE: "L DEF",
    Position.RIGHT_DEFENSE: "R DEF",
    Position.CENTER_BACK: "CB",
    Position.SWEEPER: "SWP",
    Position.STOPPER: "STP",
    Position.MIDFIELDER: "MID",
    Position.LEFT_MID: "L MID",
    Position.RIGHT_MID: "R MID",
    Position.CENTER_MID: "C MID",
    Position.ATTACKING_MID: "ATT MID",
    Position.DEFENSIVE_MID: "DEF MID",
    Position.LEFT_WING: "L WING",
    Position.RIGHT_WING: "R WING",
    Position.STRIKER: "ST",
    Position.CENTER_FULLBACK: "CFB",
    Position.OFFENSE: "OFF",
    Position.DEFENSE: "DEF",
    Position.BENCH: "BENCH",
}

# Positions that can be added as field tags (bench is implicit)
ADDABLE_POSITIONS: Tuple[Position, ...] = (
    Position.GOALKEEPER,
    Position.LEFT_DEFENSE, Position.RIGHT_DEFENSE,
    Position.CENTER_BACK, Position.SWEEPER, Position.STOPPER,
    Position.MIDFIELDER, Position.LEFT_MID, Position.RIGHT_MID,
    Position.CENTER_MID, Position.ATTACKING_MID, Position.DEFENSIVE_MID,
    Position.LEFT_WING, Position.RIGHT_WING,
    Position.STRIKER,
    Position.CENTER_FULLBACK,
    Position.OFFENSE, Position.DEFENSE,
)

DEFAULT_ACTIVE_POSITIONS = frozenset({
    Position.GOALKEEPER,
    Position.LEFT_DEFENSE,
    Position.RIGHT_DEFENSE,
    Position.MIDFIELDER,
    Position.LEFT_WING,
    Position.RIGHT_WING,
    Position.STRIKER,
})
