"""Countdown clock service for the FieldTime game-state engine."""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Protocol

from ..utils import DEFAULT_GAME_DURATION_SECONDS, TICK_INTERVAL_SECONDS

logger = logging.getLogger(__name__)


class ClockEventKind(Enum):
    SECOND_ELAPSED = "second_elapsed"
    TIME_ADVANCED = "time_advanced"
    GAME_ENDED = "game_ended"


@dataclass(frozen=True)
class ClockEvent:
    """Notification emitted by the clock; ``seconds`` is the elapsed amount."""
    kind: ClockEventKind
    seconds: int = 0


ClockListener = Callable[[ClockEvent], None]


@dataclass
class ClockState:
    """
    Attributes:
        duration_seconds: Length used when (re)starting from zero
        remaining_seconds: Seconds left on the countdown
        is_running: Whether the clock is marked running
    """
    duration_seconds: int = DEFAULT_GAME_DURATION_SECONDS
    remaining_seconds: int = DEFAULT_GAME_DURATION_SECONDS
    is_running: bool = False


class Ticker(Protocol):
    def start(self) -> None: ...

    def stop(self) -> None: ...


TickerFactory = Callable[[float, Callable[[], None]], Ticker]


class IntervalTicker:
    """Calls ``callback`` every ``interval`` seconds on a daemon thread until stopped."""

    def __init__(self, interval: float, callback: Callable[[], None]):
        self.interval = interval
        self.callback = callback
        self._stopped = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, name="fieldtime-clock", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        # Never joins: the callback may be waiting on a lock held by the caller
        self._stopped.set()

    def _run(self) -> None:
        while not self._stopped.wait(self.interval):
            self.callback()


class Clock:
    """
    Countdown timer with start/pause/reset/catch-up semantics.

    A clock owns at most one tick source at a time. Tick-source callbacks are
    dispatched under ``lock`` so the clock can share its owner's lock; a
    callback from a source that has since been stopped is discarded.
    """

    def __init__(
        self,
        state: Optional[ClockState] = None,
        *,
        ticker_factory: TickerFactory = IntervalTicker,
        lock=None,
        interval: float = TICK_INTERVAL_SECONDS,
    ):
        self.state = state or ClockState()
        self.state.duration_seconds = max(0, int(self.state.duration_seconds))
        self.state.remaining_seconds = max(0, int(self.state.remaining_seconds))
        self._ticker_factory = ticker_factory
        self._lock = lock or threading.RLock()
        self._interval = interval
        self._ticker: Optional[Ticker] = None
        self._generation = 0
        self._listeners: List[ClockListener] = []

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def remaining_seconds(self) -> int:
        return self.state.remaining_seconds

    @property
    def duration_seconds(self) -> int:
        return self.state.duration_seconds

    @property
    def is_running(self) -> bool:
        return self.state.is_running

    @property
    def is_ticking(self) -> bool:
        return self._ticker is not None

    def add_listener(self, listener: ClockListener) -> None:
        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------
    def start(self) -> None:
        """Start or resume the countdown; reloads the duration when at zero."""
        with self._lock:
            if self.state.remaining_seconds == 0:
                self.state.remaining_seconds = self.state.duration_seconds
            self.state.is_running = True
            self._start_ticker()

    def pause(self) -> None:
        with self._lock:
            self.state.is_running = False
            self._stop_ticker()

    def reset(self) -> None:
        with self._lock:
            self.pause()
            self.state.remaining_seconds = self.state.duration_seconds

    def suspend(self) -> None:
        """Stop the tick source but stay marked running (host is going idle)."""
        with self._lock:
            self._stop_ticker()

    def set_duration(self, seconds: int) -> None:
        with self._lock:
            self.state.duration_seconds = max(0, int(seconds))
            if not self.state.is_running and self.state.remaining_seconds == 0:
                self.state.remaining_seconds = self.state.duration_seconds

    def load_remaining(self, seconds: int) -> None:
        """Restore a saved countdown value (pauses the clock)."""
        with self._lock:
            self.pause()
            self.state.remaining_seconds = max(0, int(seconds))

    def tick(self) -> None:
        """Advance the countdown by one second."""
        with self._lock:
            if not self.state.is_running:
                return
            if self.state.remaining_seconds <= 0:
                self.pause()
                return
            self.state.remaining_seconds -= 1
            self._emit(ClockEvent(ClockEventKind.SECOND_ELAPSED, 1))
            if self.state.remaining_seconds == 0:
                self._expire()

    def advance_by(self, seconds: int) -> int:
        """
        Catch up on time that passed without ticks.

        Applies at most the remaining time in one aggregated event and restarts
        ticking if the clock is still marked running.

        Returns:
            Seconds actually applied
        """
        with self._lock:
            applied = min(max(0, int(seconds)), self.state.remaining_seconds)
            if applied > 0:
                self.state.remaining_seconds -= applied
                self._emit(ClockEvent(ClockEventKind.TIME_ADVANCED, applied))
            if self.state.remaining_seconds == 0:
                if self.state.is_running or applied > 0:
                    self._expire()
            elif self.state.is_running:
                self._start_ticker()
            return applied

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _expire(self) -> None:
        self.pause()
        logger.info("Game clock expired")
        self._emit(ClockEvent(ClockEventKind.GAME_ENDED))

    def _emit(self, event: ClockEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    def _start_ticker(self) -> None:
        if self._ticker is not None:
            return
        self._generation += 1
        generation = self._generation
        self._ticker = self._ticker_factory(
            self._interval, lambda: self._on_source_tick(generation)
        )
        self._ticker.start()

    def _stop_ticker(self) -> None:
        if self._ticker is None:
            return
        ticker, self._ticker = self._ticker, None
        self._generation += 1
        ticker.stop()

    def _on_source_tick(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self.tick()
