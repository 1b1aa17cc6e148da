"""Congestion control: the controller interface, CUBIC, and a logging wrapper.

Times are in seconds (floats from a monotonic clock); windows are in bytes.
"""

from __future__ import annotations

import abc
import copy
import logging
import math

from .constants import CONGESTION_TRACING_LOG_LEVEL
from .ratelog import RateLimitedLogger, log_if_changed
from .rtte import RttEstimator

# Constants for CUBIC, see RFC 8312.
BETA_CUBIC = 0.7
C = 0.4

_USIZE_MAX = 2**64 - 1


def _to_bytes_count(value: float) -> int:
    """Saturating float-to-unsigned conversion."""
    if math.isnan(value) or value <= 0:
        return 0
    if value >= _USIZE_MAX:
        return _USIZE_MAX
    return int(value)


class CongestionController(abc.ABC):
    """Interface shared by congestion controllers."""

    @abc.abstractmethod
    def window(self) -> int:
        """Number of bytes that may be in flight."""

    @abc.abstractmethod
    def sshthresh(self) -> int: ...

    @abc.abstractmethod
    def set_mss(self, mss: int) -> None: ...

    @abc.abstractmethod
    def smss(self) -> int: ...

    @abc.abstractmethod
    def on_recovered(self, new_cwnd_bytes: int, new_sshthresh: int) -> None: ...

    @abc.abstractmethod
    def on_ack(self, now: float, length: int, rtte: RttEstimator) -> None:
        """Grow the window after ``length`` bytes were acknowledged."""

    @abc.abstractmethod
    def on_retransmission_timeout(self, now: float) -> None: ...

    @abc.abstractmethod
    def on_enter_recovery(self, now: float) -> None: ...

    @abc.abstractmethod
    def set_remote_window(self, win: int) -> None: ...


def _cbrt(x: float) -> float:
    return math.copysign(abs(x) ** (1 / 3), x)


def calc_k(w_max: float) -> float:
    """Seconds needed to get back to ``w_max`` (in MSS units)."""
    return _cbrt(w_max * (1 - BETA_CUBIC) / C)


def w_cubic(t: float, k: float, w_max: float) -> float:
    return C * (t - k) ** 3 + w_max


def w_est(t: float, rtt: float, w_max: float) -> float:
    factor = 3 * (1 - BETA_CUBIC) / (1 + BETA_CUBIC)
    return w_max * BETA_CUBIC + factor * (t / rtt)


class Cubic(CongestionController):
    """CUBIC congestion control; internal windows are in MSS units."""

    def __init__(self, now: float, mss: int) -> None:
        self.cwnd = 2.0
        self.ssthresh = math.inf
        self.k = 0.0
        self.w_max = 0.0
        self.w_max_last = 0.0
        self.mss = mss
        self.last_congestion_event = now
        self.rwnd = 0.0

    def window(self) -> int:
        return _to_bytes_count(min(max(self.cwnd, 2.0), self.rwnd) * self.mss)

    def sshthresh(self) -> int:
        return _to_bytes_count(self.ssthresh * self.mss)

    def on_retransmission_timeout(self, now: float) -> None:
        self.ssthresh = max(self.cwnd * BETA_CUBIC, 2.0)
        self.w_max = self.cwnd
        self.cwnd = 1.0

    def on_enter_recovery(self, now: float) -> None:
        self.w_max = self.cwnd
        self.cwnd *= BETA_CUBIC
        self.ssthresh = max(self.cwnd, 2.0)
        self.last_congestion_event = now

        # Fast convergence, RFC 8312 section 4.6.
        if self.w_max < self.w_max_last:
            self.w_max_last = self.w_max
            self.w_max *= (1 + BETA_CUBIC) / 2
        else:
            self.w_max_last = self.w_max

        self.k = calc_k(self.w_max)

    def on_recovered(self, new_cwnd_bytes: int, new_sshthresh: int) -> None:
        rec_cwnd = new_cwnd_bytes / self.mss
        self.cwnd = max(min(rec_cwnd, self.rwnd), 2.0)
        self.ssthresh = new_sshthresh / self.mss

    def on_ack(self, now: float, length: int, rtte: RttEstimator) -> None:
        if length == 0 or self.cwnd >= self.rwnd:
            return

        if self.cwnd < self.ssthresh:
            self.cwnd += length / self.mss
        else:
            t = now - self.last_congestion_event
            rtt = rtte.roundtrip_time()
            cubic_v = w_cubic(t, self.k, self.w_max)
            est_v = w_est(t, rtt, self.w_max)
            if cubic_v < est_v:
                # TCP-friendly region.
                self.cwnd = est_v
            else:
                # Concave and convex regions.
                self.cwnd += (w_cubic(t + rtt, self.k, self.w_max) - self.cwnd) / self.cwnd
        self.cwnd = max(min(self.cwnd, self.rwnd), 2.0)

    def set_remote_window(self, win: int) -> None:
        self.rwnd = win / self.mss

    def smss(self) -> int:
        return self.mss

    def set_mss(self, mss: int) -> None:
        if self.mss != mss:
            rescale = self.mss / mss
            self.cwnd *= rescale
            self.ssthresh *= rescale
            self.w_max *= rescale
            self.w_max_last *= rescale
            self.mss = mss

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cubic):
            return NotImplemented
        return self.cwnd == other.cwnd and self.ssthresh == other.ssthresh

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"cwnd={self.window()},cwnd_mss={self.cwnd:.2f},"
            f"sshthresh_mss:{self.ssthresh:.2f}:w_max:{self.w_max:.2f},mss:{self.mss}"
        )


class TracingController(CongestionController):
    """Wraps a controller and logs every change of its state."""

    def __init__(self, inner: CongestionController, logger: logging.Logger | None = None) -> None:
        self.inner = inner
        self._logger = logger or logging.getLogger(__name__)
        self._ack_logger = RateLimitedLogger(self._logger, 500)

    def _traced(self, name: str, change, rate_limited: bool = False) -> None:
        log_if_changed(
            self._ack_logger if rate_limited else self._logger,
            CONGESTION_TRACING_LOG_LEVEL,
            name,
            self,
            lambda s: copy.copy(s.inner),
            change,
        )

    def window(self) -> int:
        return self.inner.window()

    def sshthresh(self) -> int:
        return self.inner.sshthresh()

    def set_mss(self, mss: int) -> None:
        self._traced("set_mss", lambda s: s.inner.set_mss(mss))

    def smss(self) -> int:
        return self.inner.smss()

    def on_recovered(self, new_cwnd_bytes: int, new_sshthresh: int) -> None:
        self._traced(
            "on_recovered", lambda s: s.inner.on_recovered(new_cwnd_bytes, new_sshthresh)
        )

    def on_ack(self, now: float, length: int, rtte: RttEstimator) -> None:
        self._traced("on_ack", lambda s: s.inner.on_ack(now, length, rtte), rate_limited=True)

    def on_retransmission_timeout(self, now: float) -> None:
        self._traced("on_rto", lambda s: s.inner.on_retransmission_timeout(now))

    def on_enter_recovery(self, now: float) -> None:
        self._traced("on_enter_recovery", lambda s: s.inner.on_enter_recovery(now))

    def set_remote_window(self, win: int) -> None:
        self.inner.set_remote_window(win)

    def __repr__(self) -> str:
        return repr(self.inner)