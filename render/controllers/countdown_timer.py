"""
Countdown Timer

Restartable one-shot countdown with one-second ticks.

Every begin() and stop() bumps a generation number. A tick sequence only
acts while its generation is current, so a re-armed or stopped timer can
never emit a stale tick or expiry.
"""

import logging
import threading
import time
from typing import Callable, Optional

from config.settings import TIMER_TICK_INTERVAL
from render.errors import InvalidArgumentError


def _ignore_tick(generation: int, remaining: float) -> None:
    pass


def _ignore_expiry(generation: int) -> None:
    pass


class CountdownTimer:
    """
    Countdown timer driven by a worker thread or by manual tick() calls.

    Features:
    - One decrement per tick, never below zero
    - Expiry notification exactly once per begin()
    - Re-arm while active supersedes the running tick sequence
    - Cooperative cancellation (checked between ticks only)

    Usage:
        timer = CountdownTimer()
        timer.on_expired = lambda generation: print("pass over")
        timer.begin(8)

        # Manual driving (tests, external clock)
        timer = CountdownTimer(auto_tick=False)
        timer.begin(3)
        timer.tick()
    """

    def __init__(
        self,
        tick_interval: float = TIMER_TICK_INTERVAL,
        auto_tick: bool = True,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        """
        Initialize countdown timer.

        Args:
            tick_interval: Wall-clock seconds between ticks
            auto_tick: If True, begin() spawns a worker thread that ticks.
                       If False, the caller drives ticks with tick().
            sleep: Sleep function used by the worker (time.sleep by default)
        """
        if tick_interval <= 0:
            raise InvalidArgumentError(f"Invalid tick interval: {tick_interval}")

        self.logger = logging.getLogger(__name__)
        self.tick_interval = tick_interval
        self.auto_tick = auto_tick
        self._sleep = sleep or time.sleep

        self._lock = threading.Lock()
        self._remaining: float = 0
        self._is_active = False
        self._has_ever_started = False
        self._generation = 0
        self._worker: Optional[threading.Thread] = None

        # Always callable, replaced by the owner
        self.on_tick: Callable[[int, float], None] = _ignore_tick
        self.on_expired: Callable[[int], None] = _ignore_expiry

    def begin(self, duration: float) -> int:
        """
        Start (or re-arm) the countdown.

        Args:
            duration: Seconds to count down, must be positive

        Returns:
            Generation number of this countdown

        Raises:
            InvalidArgumentError: If duration <= 0
        """
        if duration <= 0:
            raise InvalidArgumentError(f"Invalid countdown duration: {duration}")

        with self._lock:
            rearm = self._is_active
            self._generation += 1
            generation = self._generation
            self._remaining = duration
            self._is_active = True
            self._has_ever_started = True

        if rearm:
            self.logger.debug(f"Timer re-armed (generation {generation})")
        self.logger.debug(f"Countdown started: {duration}s (generation {generation})")

        if self.auto_tick:
            self._worker = threading.Thread(
                target=self._tick_worker,
                args=(generation,),
                daemon=True,
                name=f"CountdownTimer-{generation}",
            )
            self._worker.start()

        return generation

    def stop(self) -> None:
        """
        Cancel the countdown. No expiry is emitted.

        Safe to call when not active.
        """
        with self._lock:
            was_active = self._is_active
            self._generation += 1
            self._is_active = False
            self._has_ever_started = False

        if was_active:
            self.logger.debug("Countdown stopped")

    def tick(self) -> bool:
        """
        Apply one tick to the current countdown.

        Returns:
            True if this tick expired the countdown
        """
        with self._lock:
            generation = self._generation
        return self._apply_tick(generation)

    def is_active(self) -> bool:
        return self._is_active

    def get_remaining(self) -> float:
        return self._remaining

    def has_ever_started(self) -> bool:
        """True from the first begin() until the next stop()"""
        return self._has_ever_started

    @property
    def generation(self) -> int:
        return self._generation

    def is_current(self, generation: int) -> bool:
        return generation == self._generation and self._is_active

    def _apply_tick(self, generation: int) -> bool:
        with self._lock:
            if generation != self._generation or not self._is_active:
                return False
            self._remaining = max(0, self._remaining - 1)
            remaining = self._remaining
            expired = remaining <= 0
            if expired:
                self._is_active = False

        # Notify outside the lock, handlers may call begin()/stop()
        try:
            self.on_tick(generation, remaining)
        except Exception as e:
            self.logger.error(f"Error in tick callback: {e}")

        if expired:
            self.logger.debug(f"Countdown expired (generation {generation})")
            try:
                self.on_expired(generation)
            except Exception as e:
                self.logger.error(f"Error in expiry callback: {e}", exc_info=True)

        return expired

    def _tick_worker(self, generation: int) -> None:
        """
        Background thread for one countdown.

        Sleeps a full interval before every tick, so cancellation is only
        observed between ticks.
        """
        while self.is_current(generation):
            self._sleep(self.tick_interval)
            if self._apply_tick(generation):
                break

    def get_status(self) -> dict:
        return {
            "is_active": self._is_active,
            "remaining": self._remaining,
            "has_ever_started": self._has_ever_started,
            "generation": self._generation,
            "auto_tick": self.auto_tick,
        }
