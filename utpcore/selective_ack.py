"""The selective ACK header extension."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .constants import SACK_DEPTH

_RAW_SIZE = SACK_DEPTH // 8


@dataclass(frozen=True)
class SelectiveAck:
    """A bitmap of received segments past the first missing one.

    Bit ``i`` lives in byte ``i // 8`` at position ``i % 8`` (least significant first).
    """

    bits: int = 0
    length: int = SACK_DEPTH

    @classmethod
    def from_unacked(cls, indices: Iterable[int]) -> SelectiveAck:
        """Build a bitmap from segment indices, stopping at the first one past the depth."""
        bits = 0
        for idx in indices:
            if idx >= SACK_DEPTH:
                break
            if idx < 0:
                raise ValueError(f"negative selective ack index: {idx}")
            bits |= 1 << idx
        return cls(bits, SACK_DEPTH)

    @classmethod
    def from_bytes(cls, data: bytes) -> SelectiveAck:
        """Parse any length of bitmap; bytes beyond the depth are dropped."""
        bits = int.from_bytes(bytes(data[:_RAW_SIZE]), "little")
        return cls(bits, len(data) * 8)

    def to_bytes(self) -> bytes:
        return self.bits.to_bytes(_RAW_SIZE, "little")

    def count_ones(self) -> int:
        return bin(self.bits).count("1")

    def __iter__(self) -> Iterator[bool]:
        return (bool(self.bits >> idx & 1) for idx in range(SACK_DEPTH))

    def __len__(self) -> int:
        return self.length