"""Segment sizes derived from the link MTU, refined by binary-search probing."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import IPV4_HEADER, IPV6_HEADER, UDP_HEADER, UTP_HEADER

_U16_MAX = 0xFFFF


@dataclass
class SegmentSizesConfig:
    is_ipv4: bool = True
    link_mtu: int = 1500
    probe_expiry_cooldown_packets: int = 3


class SegmentSizes:
    """Tracks the largest payload known to pass and the largest one worth probing."""

    def __init__(self, config: SegmentSizesConfig | None = None) -> None:
        config = config or SegmentSizesConfig()
        ip_header = IPV4_HEADER if config.is_ipv4 else IPV6_HEADER
        default_min_mtu = 576 if config.is_ipv4 else 1280
        overhead = ip_header + UTP_HEADER + UDP_HEADER

        # Too small an MTU is clamped up to carry at least a 1-byte payload.
        link_mtu = max(config.link_mtu, overhead + 1)
        min_mtu = min(default_min_mtu, link_mtu)

        self._min_ss = min_mtu - overhead
        self._max_ss = link_mtu - overhead
        self._cooldown_remaining = 1
        self.cooldown_max_packets = config.probe_expiry_cooldown_packets

    def on_payload_delivered(self, payload_size: int) -> None:
        payload_size = min(payload_size, _U16_MAX)
        self._min_ss = max(self._min_ss, payload_size)
        self._max_ss = max(self._max_ss, self._min_ss)

    def mss(self) -> int:
        return self._min_ss

    def max_ss(self) -> int:
        return self._max_ss

    def next_segment_size(self) -> int:
        """Return the size for the next segment, probing once per cooldown period."""
        if self._cooldown_remaining == 0:
            self._cooldown_remaining = self.cooldown_max_packets
            return self._next_probe()
        self._cooldown_remaining = max(self._cooldown_remaining - 1, 0)
        return self._min_ss

    def _next_probe(self) -> int:
        return min(self._min_ss + (self._max_ss - self._min_ss) // 2 + 1, self._max_ss)

    def is_probing(self) -> bool:
        return self._next_probe() > self._min_ss

    def on_probe_failed(self, size: int) -> None:
        size = size % (_U16_MAX + 1)
        self._max_ss = max(min(self._max_ss, max(size - 1, 0)), self._min_ss)

    def disarm_cooldown(self) -> None:
        self._cooldown_remaining = 0

    def __repr__(self) -> str:
        return f"min_ss={self._min_ss}:max_ss={self._max_ss}"