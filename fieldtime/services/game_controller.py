"""
Game controller for the FieldTime game-state engine.

The controller is the single owner of the roster, clock, active position set
and swap queue. External collaborators (display, persistence) call its
command methods and read its published state; nothing else mutates engine
state. All commands, and every tick from the clock's background source, run
under one re-entrant lock.
"""
import copy
import logging
import threading
from typing import Callable, Dict, List, Optional, Set, Tuple

from .assignment_service import AssignmentService
from .clock_service import Clock, ClockEvent, ClockEventKind, ClockState, IntervalTicker, TickerFactory
from .swap_queue import SwapQueue
from ..models import (
    ADDABLE_POSITIONS, CommandStatus, GameState, Player, Position, QueuedSwap, Roster
)
from ..utils import MAX_GAME_LENGTH_MIN, MIN_GAME_LENGTH_MIN, fmt_mmss, now_ts

logger = logging.getLogger(__name__)

ChangeListener = Callable[["GameController"], None]


class GameController:
    """Facade orchestrating clock, roster, assignment engine and swap queue."""

    def __init__(
        self,
        game_state: Optional[GameState] = None,
        *,
        ticker_factory: TickerFactory = IntervalTicker,
    ):
        self._lock = threading.RLock()
        self._listeners: List[Tuple[ChangeListener, bool]] = []
        self._suspended_at: Optional[float] = None

        self.active_positions: Set[Position] = set()
        self.roster = Roster()
        self.assignment = AssignmentService(self.roster, self.active_positions)
        self.swap_queue = SwapQueue(self.active_positions)
        self.clock = Clock(ClockState(), ticker_factory=ticker_factory, lock=self._lock)
        self.clock.add_listener(self._on_clock_event)

        self._restore(game_state or GameState())

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------
    def add_listener(self, listener: ChangeListener, *, on_tick: bool = True) -> None:
        """
        Register a callback invoked with the controller after each change.

        Args:
            listener: Callback taking the controller
            on_tick: Whether to also call it for every elapsed game second
        """
        self._listeners.append((listener, on_tick))

    def remove_listener(self, listener: ChangeListener) -> None:
        self._listeners = [entry for entry in self._listeners if entry[0] != listener]

    def _notify(self, tick: bool = False) -> None:
        for listener, on_tick in list(self._listeners):
            if tick and not on_tick:
                continue
            listener(self)

    # ------------------------------------------------------------------
    # Game control
    # ------------------------------------------------------------------
    @property
    def is_running(self) -> bool:
        return self.clock.is_running

    def start_game(self) -> None:
        with self._lock:
            if self._suspended_at is not None:
                self._settle_suspension()
                if not self.clock.is_running:
                    # The game ran out while suspended
                    self._notify()
                    return
            was_running = self.clock.is_running
            self.clock.start()
            if not was_running:
                logger.info("Game started with %s remaining", self.formatted_time())
                self._notify()

    def pause_game(self) -> None:
        with self._lock:
            was_running = self.clock.is_running
            self.clock.pause()
            self._suspended_at = None
            if was_running:
                logger.info("Game paused at %s", self.formatted_time())
                self._notify()

    def tick(self) -> None:
        """Advance the game by one second (normally driven by the clock)."""
        with self._lock:
            self._settle_suspension()
            self.clock.tick()

    def reset_game(self) -> None:
        """Reset clock and counters, clear the queue and bench everyone."""
        with self._lock:
            self.clock.reset()
            self._suspended_at = None
            self.roster.reset_counters()
            self.roster.bench_all()
            self.swap_queue.clear()
            logger.info("Game reset")
            self._notify()

    def reset_clock_only(self) -> None:
        """Reset clock and counters; positions and active flags are kept."""
        with self._lock:
            self.clock.reset()
            self._suspended_at = None
            self.roster.reset_counters()
            logger.info("Clock and counters reset")
            self._notify()

    def reset_positions(self) -> None:
        """Pause, bench everyone and clear the queue; counters are kept."""
        with self._lock:
            self.clock.pause()
            self._suspended_at = None
            self.roster.bench_all()
            self.swap_queue.clear()
            logger.info("Positions reset")
            self._notify()

    def set_game_length(self, minutes: int) -> CommandStatus:
        """
        Configure the game length in whole minutes.

        When the clock is not running the countdown is reloaded so the display
        reflects the new length before the first start.
        """
        with self._lock:
            if isinstance(minutes, bool) or not isinstance(minutes, int):
                return CommandStatus.INVALID
            if not MIN_GAME_LENGTH_MIN <= minutes <= MAX_GAME_LENGTH_MIN:
                return CommandStatus.INVALID
            self.clock.set_duration(minutes * 60)
            if not self.clock.is_running:
                self.clock.load_remaining(self.clock.duration_seconds)
            self._notify()
            return CommandStatus.APPLIED

    # ------------------------------------------------------------------
    # Background catch-up
    # ------------------------------------------------------------------
    def prepare_for_suspension(self) -> None:
        """Record when the host went idle; only meaningful while running."""
        with self._lock:
            if not self.clock.is_running:
                self._suspended_at = None
                return
            self._suspended_at = now_ts()
            self.clock.suspend()

    def resume_from_suspension(self) -> int:
        """
        Apply the wall-clock time spent suspended.

        Returns:
            Seconds applied to the clock and player counters
        """
        with self._lock:
            if self._suspended_at is None:
                return 0
            applied = self._settle_suspension()
            self._notify()
            return applied

    def _settle_suspension(self) -> int:
        # The idle delta is applied at most once, by whichever command runs first
        if self._suspended_at is None:
            return 0
        delta = max(0, int(now_ts() - self._suspended_at))
        self._suspended_at = None
        applied = self.clock.advance_by(delta)
        if applied:
            logger.info("Caught up %d seconds after suspension", applied)
        return applied

    def _on_clock_event(self, event: ClockEvent) -> None:
        if event.kind in (ClockEventKind.SECOND_ELAPSED, ClockEventKind.TIME_ADVANCED):
            self.roster.accrue(event.seconds)
        self._notify(tick=event.kind is ClockEventKind.SECOND_ELAPSED)

    # ------------------------------------------------------------------
    # Positions and substitutions
    # ------------------------------------------------------------------
    def assign_or_queue(self, player_id: str, position: Position) -> CommandStatus:
        """Assign immediately when stopped, stage in the swap queue when running."""
        with self._lock:
            if not self.clock.is_running:
                status = self.assignment.assign(player_id, position)
            else:
                player = self.roster.get(player_id)
                if player is None:
                    return CommandStatus.NO_SUCH_PLAYER
                status = self.swap_queue.enqueue(player, position)
            if status.ok:
                self._notify()
            return status

    def apply_queue(self) -> CommandStatus:
        with self._lock:
            if not self.clock.is_running:
                return CommandStatus.GAME_NOT_RUNNING
            if not self.swap_queue:
                return CommandStatus.QUEUE_EMPTY
            self.swap_queue.apply_all(self.roster)
            self._notify()
            return CommandStatus.APPLIED

    def clear_queue(self) -> CommandStatus:
        with self._lock:
            if not self.swap_queue:
                return CommandStatus.QUEUE_EMPTY
            self.swap_queue.clear()
            self._notify()
            return CommandStatus.APPLIED

    def add_position(self, position: Position) -> CommandStatus:
        with self._lock:
            if not isinstance(position, Position) or position.is_bench:
                return CommandStatus.INVALID
            if position in self.active_positions:
                return CommandStatus.UNCHANGED
            self.active_positions.add(position)
            self._notify()
            return CommandStatus.APPLIED

    def remove_position(self, position: Position) -> CommandStatus:
        """Disable a position, benching its occupants and dropping queued moves into it."""
        with self._lock:
            if not isinstance(position, Position) or position.is_bench:
                return CommandStatus.INVALID
            if position not in self.active_positions:
                return CommandStatus.POSITION_NOT_ACTIVE
            self.active_positions.discard(position)
            for player in self.roster.occupants(position):
                player.bench()
            dropped = self.swap_queue.discard_target(position)
            if dropped:
                logger.debug("Dropped %d queued swaps into %s", dropped, position.value)
            self._notify()
            return CommandStatus.APPLIED

    # ------------------------------------------------------------------
    # Roster commands
    # ------------------------------------------------------------------
    def add_player(
        self,
        first_name: str,
        last_name: Optional[str] = None,
        number: Optional[int] = None,
    ) -> Optional[str]:
        with self._lock:
            player_id = self.roster.add_player(first_name, last_name, number)
            if player_id is not None:
                self._notify()
            return player_id

    def remove_player(self, player_id: str) -> CommandStatus:
        with self._lock:
            if not self.roster.remove_player(player_id):
                return CommandStatus.NO_SUCH_PLAYER
            self.swap_queue.discard_player(player_id)
            self._notify()
            return CommandStatus.APPLIED

    def rename_player(
        self,
        player_id: str,
        first_name: str,
        last_name: Optional[str] = None,
    ) -> CommandStatus:
        with self._lock:
            if player_id not in self.roster:
                return CommandStatus.NO_SUCH_PLAYER
            if not self.roster.rename_player(player_id, first_name, last_name):
                return CommandStatus.UNCHANGED
            self._notify()
            return CommandStatus.APPLIED

    def reorder_players(self, from_index: int, to_index: int) -> CommandStatus:
        with self._lock:
            if not self.roster.reorder(from_index, to_index):
                return CommandStatus.INVALID
            self._notify()
            return CommandStatus.APPLIED

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def players(self) -> List[Player]:
        return self.roster.players

    def get_player(self, player_id: str) -> Optional[Player]:
        return self.roster.get(player_id)

    def queued_swaps(self) -> List[QueuedSwap]:
        return self.swap_queue.entries

    def formatted_time(self) -> str:
        return fmt_mmss(self.clock.remaining_seconds)

    def picker_positions(self) -> List[Position]:
        """Active positions sorted by display name (bench is offered separately)."""
        return sorted(self.active_positions, key=lambda p: p.value)

    def addable_positions(self) -> List[Position]:
        return [p for p in ADDABLE_POSITIONS if p not in self.active_positions]

    def describe_queue(self) -> List[Dict[str, Optional[str]]]:
        """Queue rows for display, skipping entries whose player is gone."""
        rows = []
        for item in self.swap_queue:
            player = self.roster.get(item.player_id)
            if player is None:
                continue
            rows.append({
                "id": item.id,
                "player_id": player.id,
                "player_name": player.display_name,
                "origin": item.origin.short if item.origin else None,
                "target": item.target.short,
            })
        return rows

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def to_game_state(self) -> GameState:
        """Detached copy of the current state, safe to serialize off the lock."""
        with self._lock:
            return copy.deepcopy(self._snapshot_state())

    def load_game_state(self, game_state: GameState) -> None:
        """Replace all engine state with a loaded snapshot (the clock is paused)."""
        with self._lock:
            self._restore(game_state)
            self._notify()

    def _snapshot_state(self) -> GameState:
        return GameState(
            players=self.roster.players,
            duration_seconds=self.clock.duration_seconds,
            remaining_seconds=self.clock.remaining_seconds,
            active_positions=set(self.active_positions),
            swap_queue=self.swap_queue.entries,
        )

    def _restore(self, game_state: GameState) -> None:
        self.clock.pause()
        self._suspended_at = None
        self.clock.set_duration(game_state.duration_seconds)
        self.clock.load_remaining(game_state.remaining_seconds or game_state.duration_seconds)

        # Mutate in place: the assignment service and queue share these objects
        self.active_positions.clear()
        self.active_positions.update(p for p in game_state.active_positions if not p.is_bench)
        self.roster.replace(game_state.players)
        self.swap_queue.restore(game_state.swap_queue)
