"""Frame check sequences used by the HDLC framing: FCS-16, FCS-32 and a checksum."""

from __future__ import annotations

import enum
from collections.abc import Iterable

__all__ = [
    "CrcType",
    "INIT_CHECKSUM",
    "GOOD_CHECKSUM",
    "INIT_FCS16",
    "GOOD_FCS16",
    "INIT_FCS32",
    "GOOD_FCS32",
    "crc16_byte",
    "crc16",
    "crc32_byte",
    "crc32",
    "checksum_byte",
    "checksum",
    "crc_field_size",
]

INIT_CHECKSUM = 0x0000
GOOD_CHECKSUM = 0x0000
INIT_FCS16 = 0xFFFF
GOOD_FCS16 = 0xF0B8
INIT_FCS32 = 0xFFFFFFFF
GOOD_FCS32 = 0xDEBB20E3

_FCS16_POLY = 0x8408
_FCS32_POLY = 0xEDB88320


class CrcType(enum.IntEnum):
    """CRC options for HDLC frames."""

    DEFAULT = 0
    CRC_8 = 8
    CRC_16 = 16
    CRC_32 = 32
    OFF = 0xFF


def _build_table(poly: int) -> tuple[int, ...]:
    table = []
    for value in range(256):
        for _ in range(8):
            value = (value >> 1) ^ poly if value & 1 else value >> 1
        table.append(value)
    return tuple(table)


_FCS16_TABLE = _build_table(_FCS16_POLY)
_FCS32_TABLE = _build_table(_FCS32_POLY)


def crc16_byte(crc: int, data: int) -> int:
    """Feed one byte into a running FCS-16 value."""
    return ((crc & 0xFFFF) >> 8) ^ _FCS16_TABLE[(crc ^ data) & 0xFF]


def crc16(data: Iterable[int], crc: int = INIT_FCS16) -> int:
    """Return the complemented FCS-16 of ``data`` starting from ``crc``."""
    crc &= 0xFFFF
    for byte in data:
        crc = (crc >> 8) ^ _FCS16_TABLE[(crc ^ byte) & 0xFF]
    return crc ^ 0xFFFF


def crc32_byte(crc: int, data: int) -> int:
    """Feed one byte into a running FCS-32 value."""
    crc &= 0xFFFFFFFF
    return _FCS32_TABLE[(crc ^ data) & 0xFF] ^ (crc >> 8)


def crc32(data: Iterable[int], crc: int = INIT_FCS32) -> int:
    """Return the complemented FCS-32 of ``data`` starting from ``crc``."""
    crc &= 0xFFFFFFFF
    for byte in data:
        crc = _FCS32_TABLE[(crc ^ byte) & 0xFF] ^ (crc >> 8)
    return crc ^ 0xFFFFFFFF


def checksum_byte(total: int, data: int) -> int:
    """Add one byte to a running 16-bit sum."""
    return (total + data) & 0xFFFF


def checksum(data: Iterable[int], total: int = INIT_CHECKSUM) -> int:
    """Return 0xFFFF minus the 16-bit sum of ``data`` added to ``total``."""
    for byte in data:
        total = (total + byte) & 0xFFFF
    return 0xFFFF - (total & 0xFFFF)


def crc_field_size(crc_type: CrcType | int) -> int:
    """Return the size in bytes of the CRC field for ``crc_type``."""
    if crc_type == CrcType.OFF:
        return 0
    return int(crc_type) // 8