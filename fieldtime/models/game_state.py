"""
GameState model for the FieldTime game-state engine.

This module contains the GameState dataclass, the persistable aggregate of
roster, clock configuration, active positions and swap queue. Snapshots are
opaque key/value blobs versioned by key name; loading is forgiving so that
one damaged key never prevents the rest from loading.
"""
import json
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Set, TypeVar

from .player import Player
from .position import DEFAULT_ACTIVE_POSITIONS, Position
from .swap import QueuedSwap
from ..utils import DEFAULT_GAME_DURATION_SECONDS
from ..utils.constants import (
    ACTIVE_POSITIONS_KEY, GAME_DURATION_KEY, GAME_REMAINING_KEY,
    LEGACY_NAMES_KEY, PLAYERS_KEY, SWAP_QUEUE_KEY
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _default_active_positions() -> Set[Position]:
    return set(DEFAULT_ACTIVE_POSITIONS)


@dataclass
class GameState:
    """
    Represents the persisted state of a game.

    Attributes:
        players: Roster in display order
        duration_seconds: Configured game length used when (re)starting from zero
        remaining_seconds: Seconds left on the countdown
        active_positions: Positions enabled for assignment (never contains bench)
        swap_queue: Staged substitutions, at most one per player
    """
    players: List[Player] = field(default_factory=list)
    duration_seconds: int = DEFAULT_GAME_DURATION_SECONDS
    remaining_seconds: int = DEFAULT_GAME_DURATION_SECONDS
    active_positions: Set[Position] = field(default_factory=_default_active_positions)
    swap_queue: List[QueuedSwap] = field(default_factory=list)

    def to_snapshot(self) -> Dict[str, str]:
        """
        Convert GameState to key/value blobs.

        Returns:
            Mapping of versioned key name to JSON-encoded value
        """
        return {
            PLAYERS_KEY: json.dumps([p.to_dict() for p in self.players]),
            GAME_DURATION_KEY: json.dumps(self.duration_seconds),
            GAME_REMAINING_KEY: json.dumps(self.remaining_seconds),
            SWAP_QUEUE_KEY: json.dumps([s.to_dict() for s in self.swap_queue]),
            ACTIVE_POSITIONS_KEY: json.dumps(
                sorted(p.value for p in self.active_positions)
            ),
        }

    @staticmethod
    def from_snapshot(snapshot: Optional[Dict[str, Any]]) -> "GameState":
        """
        Create GameState from key/value blobs.

        Missing or malformed keys fall back to defaults; corrupt player or
        queue records are skipped individually.

        Args:
            snapshot: Mapping produced by ``to_snapshot`` (possibly partial)

        Returns:
            New GameState instance
        """
        data = snapshot if isinstance(snapshot, dict) else {}
        gs = GameState()

        players = _read_key(data, PLAYERS_KEY, lambda raw: _read_records(raw, Player.from_dict))
        if players is None:
            names = _read_key(data, LEGACY_NAMES_KEY, _read_legacy_names)
            if names:
                logger.info("Migrating %d players from legacy roster key", len(names))
                players = [Player(first_name=name) for name in names]
        gs.players = players or []

        duration = _read_key(data, GAME_DURATION_KEY, _read_seconds)
        if duration is not None:
            gs.duration_seconds = duration

        remaining = _read_key(data, GAME_REMAINING_KEY, _read_seconds)
        gs.remaining_seconds = gs.duration_seconds if remaining is None else remaining
        if gs.remaining_seconds == 0:
            gs.remaining_seconds = gs.duration_seconds

        queue = _read_key(data, SWAP_QUEUE_KEY, lambda raw: _read_records(raw, QueuedSwap.from_dict))
        gs.swap_queue = _dedupe_queue(queue or [])

        active = _read_key(data, ACTIVE_POSITIONS_KEY, _read_positions)
        if active is not None:
            gs.active_positions = active

        gs.bench_inactive_occupants()
        gs.bench_duplicate_occupants()
        return gs

    def bench_inactive_occupants(self) -> int:
        """
        Bench any players standing at positions that are no longer active.

        Returns:
            Number of players benched
        """
        if not self.active_positions:
            return 0
        touched = 0
        for player in self.players:
            pos = player.current_position
            if not pos.is_bench and pos not in self.active_positions:
                player.bench()
                touched += 1
        if touched:
            logger.warning("Benched %d players at inactive positions", touched)
        return touched

    def bench_duplicate_occupants(self) -> int:
        """
        Keep one occupant per field position; the first in roster order stays.

        Returns:
            Number of players benched
        """
        taken: Set[Position] = set()
        touched = 0
        for player in self.players:
            pos = player.current_position
            if pos.is_bench:
                continue
            if pos in taken:
                player.bench()
                touched += 1
            else:
                taken.add(pos)
        if touched:
            logger.warning("Benched %d players sharing a field position", touched)
        return touched


def _read_key(data: Dict[str, Any], key: str, parse: Callable[[Any], T]) -> Optional[T]:
    if key not in data:
        return None
    raw = data[key]
    try:
        if isinstance(raw, (str, bytes)):
            raw = json.loads(raw)
        return parse(raw)
    except (TypeError, ValueError, OverflowError) as exc:
        logger.warning("Ignoring malformed snapshot key %s: %s", key, exc)
        return None


def _read_records(raw: Any, parse: Callable[[Dict[str, Any]], T]) -> List[T]:
    if not isinstance(raw, list):
        raise ValueError("expected a list")
    records: List[T] = []
    for item in raw:
        try:
            if not isinstance(item, dict):
                raise ValueError("expected an object")
            records.append(parse(item))
        except (TypeError, ValueError, OverflowError) as exc:
            logger.warning("Skipping corrupt record: %s", exc)
    return records


def _read_legacy_names(raw: Any) -> List[str]:
    if not isinstance(raw, list):
        raise ValueError("expected a list of names")
    return [name.strip() for name in raw if isinstance(name, str) and name.strip()]


def _read_seconds(raw: Any) -> int:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ValueError("expected a number of seconds")
    if isinstance(raw, float) and not math.isfinite(raw):
        raise ValueError("expected a finite number of seconds")
    return max(0, int(raw))


def _read_positions(raw: Any) -> Set[Position]:
    if not isinstance(raw, list):
        raise ValueError("expected a list of positions")
    positions = {Position.parse(value) for value in raw}
    positions.discard(None)
    positions.discard(Position.BENCH)
    return positions


def _dedupe_queue(queue: List[QueuedSwap]) -> List[QueuedSwap]:
    # last entry per player wins, keeping the first entry's slot
    order: List[str] = []
    latest: Dict[str, QueuedSwap] = {}
    for swap in queue:
        if swap.player_id not in latest:
            order.append(swap.player_id)
        latest[swap.player_id] = swap
    return [latest[player_id] for player_id in order]
