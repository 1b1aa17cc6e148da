"""Round-trip time and retransmission timeout estimation. Times are in seconds."""

from __future__ import annotations

RTTE_INITIAL_RTT = 0.300
# Linux uses 200ms as the minimum; lower than the 1s floor that the standard asks for.
RTTE_MIN_RTO = 0.200
RTTE_MAX_RTO = 60.0
CLOCK_GRANULARITY = 0.010
K = 4


def _clamp(rto: float) -> float:
    return min(max(rto, RTTE_MIN_RTO), RTTE_MAX_RTO)


def _calc_rto(srtt: float, rttvar: float) -> float:
    return _clamp(srtt + max(rttvar * K, CLOCK_GRANULARITY))


class RttEstimator:
    """Smoothed RTT and RTO estimator with exponential backoff on timeouts."""

    def __init__(self) -> None:
        self._rto = RTTE_INITIAL_RTT
        self._srtt: float | None = None
        self._rttvar = 0.0

    def roundtrip_time(self) -> float:
        return self._rto if self._srtt is None else self._srtt

    def retransmission_timeout(self) -> float:
        return self._rto

    def sample(self, new_rtt: float) -> None:
        """Feed one RTT measurement."""
        if self._srtt is None:
            self._srtt = new_rtt
            self._rttvar = new_rtt / 2
        else:
            self._rttvar = self._rttvar * 3 / 4 + abs(self._srtt - new_rtt) / 4
            self._srtt = (self._srtt * 7 + new_rtt) / 8
        self._rto = _calc_rto(self._srtt, self._rttvar)

    def on_rto_timeout(self) -> None:
        """Back off: double the timeout, within bounds."""
        self._rto = _clamp(self._rto * 2)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RttEstimator):
            return NotImplemented
        return (self.roundtrip_time(), self.retransmission_timeout()) == (
            other.roundtrip_time(),
            other.retransmission_timeout(),
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"rtt:{self.roundtrip_time()},rto:{self.retransmission_timeout()}"