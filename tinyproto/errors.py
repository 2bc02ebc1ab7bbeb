"""Result codes, API flags and the library-wide log level."""

from __future__ import annotations

import enum

__all__ = [
    "ErrorCode",
    "Flag",
    "TinyProtocolError",
    "raise_for_code",
    "set_log_level",
    "get_log_level",
]


class ErrorCode(enum.IntEnum):
    """Result codes returned by protocol operations."""

    SUCCESS = 0
    FAILED = -1
    TIMEOUT = -2
    DATA_TOO_LARGE = -3
    INVALID_DATA = -4
    BUSY = -5
    OUT_OF_SYNC = -6
    AGAIN = -7
    WRONG_CRC = -8
    UNKNOWN_PEER = -9

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    ErrorCode.SUCCESS: "operation successful",
    ErrorCode.FAILED: "operation failed",
    ErrorCode.TIMEOUT: "timeout happened, the operation must be repeated",
    ErrorCode.DATA_TOO_LARGE: "data too large to fit the user buffer",
    ErrorCode.INVALID_DATA: "invalid data passed to the API",
    ErrorCode.BUSY: "operation cannot be performed right now",
    ErrorCode.OUT_OF_SYNC: "received data which is not part of a frame",
    ErrorCode.AGAIN: "no data for now, retry reading",
    ErrorCode.WRONG_CRC: "invalid crc field of incoming frame",
    ErrorCode.UNKNOWN_PEER: "unknown remote peer",
}


class Flag(enum.IntFlag):
    """Flags that control how API functions behave."""

    NO_WAIT = 0
    READ_ALL = 1
    LOCK_SEND = 2
    WAIT_FOREVER = 0x80


class TinyProtocolError(Exception):
    """Raised when a protocol operation reports a negative result code."""

    def __init__(self, code: ErrorCode | int, message: str | None = None) -> None:
        try:
            code = ErrorCode(code)
        except ValueError:
            code = int(code)
        self.code = code
        if message is None:
            if isinstance(code, ErrorCode):
                message = f"{code.name}: {code.description}"
            else:
                message = f"unknown error code {code}"
        super().__init__(message)


def raise_for_code(code: int) -> int:
    """Return a non-negative result unchanged; raise TinyProtocolError for a negative one."""
    if code < 0:
        raise TinyProtocolError(code)
    return code


_LOG_LEVEL_DEFAULT = 0
_log_level = _LOG_LEVEL_DEFAULT


def set_log_level(level: int) -> None:
    """Set the logging level; 0 disables logs."""
    global _log_level
    level = int(level)
    if not 0 <= level <= 0xFF:
        raise ValueError(f"log level must be between 0 and 255, got {level}")
    _log_level = level


def get_log_level() -> int:
    """Return the current logging level."""
    return _log_level