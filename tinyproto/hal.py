"""Platform services: mutexes, event groups and replaceable timing functions."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

__all__ = [
    "EVENT_BITS_ALL",
    "EVENT_BITS_CLEAR",
    "EVENT_BITS_LEAVE",
    "Mutex",
    "Events",
    "install_hal",
    "reset_hal",
    "sleep",
    "sleep_us",
    "millis",
    "micros",
]

EVENT_BITS_ALL = 0xFF
EVENT_BITS_CLEAR = 1
EVENT_BITS_LEAVE = 0

_U32 = 0xFFFFFFFF
_START_NS = time.monotonic_ns()


def _default_sleep(ms: int) -> None:
    time.sleep(max(ms, 0) / 1000.0)


def _default_sleep_us(us: int) -> None:
    time.sleep(max(us, 0) / 1_000_000.0)


def _default_millis() -> int:
    return ((time.monotonic_ns() - _START_NS) // 1_000_000) & _U32


def _default_micros() -> int:
    return ((time.monotonic_ns() - _START_NS) // 1_000) & _U32


@dataclass
class _Hal:
    sleep: Callable[[int], None] = _default_sleep
    millis: Callable[[], int] = _default_millis
    sleep_us: Callable[[int], None] = _default_sleep_us
    micros: Callable[[], int] = _default_micros


_hal = _Hal()


def install_hal(
    *,
    sleep: Callable[[int], None] | None = None,
    millis: Callable[[], int] | None = None,
    sleep_us: Callable[[int], None] | None = None,
    micros: Callable[[], int] | None = None,
) -> None:
    """Replace timing functions; those passed as None keep their current implementation."""
    if sleep is not None:
        _hal.sleep = sleep
    if millis is not None:
        _hal.millis = millis
    if sleep_us is not None:
        _hal.sleep_us = sleep_us
    if micros is not None:
        _hal.micros = micros


def reset_hal() -> None:
    """Restore the built-in timing functions."""
    _hal.sleep = _default_sleep
    _hal.millis = _default_millis
    _hal.sleep_us = _default_sleep_us
    _hal.micros = _default_micros


def sleep(ms: int) -> None:
    """Sleep for ``ms`` milliseconds."""
    _hal.sleep(ms)


def sleep_us(us: int) -> None:
    """Sleep for ``us`` microseconds."""
    _hal.sleep_us(us)


def millis() -> int:
    """Return a 32-bit millisecond timestamp."""
    return _hal.millis() & _U32


def micros() -> int:
    """Return a 32-bit microsecond timestamp."""
    return _hal.micros() & _U32


class Mutex:
    """Non-reentrant mutex; blocking lock polls try_lock with one-millisecond sleeps."""

    def __init__(self) -> None:
        self._lock = threading.Lock()

    @property
    def locked(self) -> bool:
        return self._lock.locked()

    def try_lock(self) -> bool:
        """Take the mutex if it is free; return whether it was taken."""
        return self._lock.acquire(blocking=False)

    def lock(self) -> None:
        """Take the mutex, waiting until it becomes free."""
        while not self.try_lock():
            sleep(1)

    def unlock(self) -> None:
        """Release the mutex; releasing a free mutex does nothing."""
        try:
            self._lock.release()
        except RuntimeError:
            pass

    def __enter__(self) -> Mutex:
        self.lock()
        return self

    def __exit__(self, *args: object) -> None:
        self.unlock()


class Events:
    """A group of eight event bits guarded by a Mutex."""

    def __init__(self) -> None:
        self._mutex = Mutex()
        self.bits = 0

    def _snapshot(self, bits: int, clear: bool) -> int:
        with self._mutex:
            current = self.bits
            if clear and current & bits:
                self.bits &= ~bits & 0xFF
        return current

    def wait(self, bits: int, clear: bool = False, timeout: int = 0) -> int:
        """Wait up to ``timeout`` ms for any of ``bits``.

        Returns all bits that were set, or 0 on timeout.
        """
        start = millis()
        while True:
            current = self._snapshot(bits, clear)
            if current & bits:
                return current
            if ((millis() - start) & _U32) >= timeout:
                return 0
            sleep(1)

    def check(self, bits: int, clear: bool = False) -> int:
        """Return all bits currently set, clearing ``bits`` if asked and any is set."""
        return self._snapshot(bits, clear)

    def set(self, bits: int) -> None:
        """Set ``bits``."""
        with self._mutex:
            self.bits = (self.bits | bits) & 0xFF

    def clear(self, bits: int) -> None:
        """Clear ``bits``."""
        with self._mutex:
            self.bits &= ~bits & 0xFF