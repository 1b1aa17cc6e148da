"""Wrapping 16-bit sequence numbers."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import WRAP_TOLERANCE

_MODULUS = 1 << 16
_MAX = _MODULUS - 1


def _wrapping_offset(a: int, b: int, tolerance: int) -> int:
    diff = a - b
    if abs(diff) > _MAX - tolerance:
        diff += _MODULUS if diff < 0 else -_MODULUS
    return diff


@dataclass(frozen=True)
class SeqNr:
    """A 16-bit sequence number that wraps around and compares across the wrap."""

    value: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.value <= _MAX:
            raise ValueError(f"sequence number out of range: {self.value}")

    @classmethod
    def from_bytes(cls, data: bytes) -> SeqNr:
        if len(data) != 2:
            raise ValueError("sequence number needs exactly 2 bytes")
        return cls(int.from_bytes(data, "big"))

    def offset(self, other: SeqNr) -> int:
        """Signed distance from ``other`` to ``self``, accounting for wrap-around."""
        return _wrapping_offset(self.value, other.value, WRAP_TOLERANCE)

    def __add__(self, other: int) -> SeqNr:
        if isinstance(other, SeqNr) or not isinstance(other, int):
            return NotImplemented
        return SeqNr((self.value + other) % _MODULUS)

    def __sub__(self, other):
        if isinstance(other, SeqNr):
            return self.offset(other)
        if isinstance(other, int):
            return SeqNr((self.value - other) % _MODULUS)
        return NotImplemented

    def __lt__(self, other: SeqNr) -> bool:
        if not isinstance(other, SeqNr):
            return NotImplemented
        return self.offset(other) < 0

    def __le__(self, other: SeqNr) -> bool:
        if not isinstance(other, SeqNr):
            return NotImplemented
        return self.offset(other) <= 0

    def __gt__(self, other: SeqNr) -> bool:
        if not isinstance(other, SeqNr):
            return NotImplemented
        return self.offset(other) > 0

    def __ge__(self, other: SeqNr) -> bool:
        if not isinstance(other, SeqNr):
            return NotImplemented
        return self.offset(other) >= 0

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return f"SeqNr({self.value})"

    def to_bytes(self) -> bytes:
        """Big-endian wire representation."""
        return self.value.to_bytes(2, "big")