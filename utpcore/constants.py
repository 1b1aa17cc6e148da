"""Protocol-wide sizes, timeouts and tuning constants."""

import logging

IPV4_HEADER = 20
IPV6_HEADER = 40

UDP_HEADER = 8
UTP_HEADER = 20

# Flow control (dropping incoming packets) starts after this many bytes are
# left unread in the user's stream reader.
DEFAULT_MAX_RX_BUF_SIZE_PER_VSOCK = 1024 * 1024
# How many unacknowledged bytes a socket can hold without blocking the writer.
DEFAULT_MAX_TX_BUF_SIZE_PER_VSOCK = 64 * 1024

# Delayed ACK timer, in seconds.
ACK_DELAY = 0.040

IMMEDIATE_ACK_EVERY_RMSS = 2

SYNACK_RESEND_INTERVAL = 0.200

# Sequence numbers are 16 bits and wrap around. When two of them are further
# apart than this, they are assumed to have wrapped.
WRAP_TOLERANCE = 1024

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

CONGESTION_TRACING_LOG_LEVEL = logging.DEBUG
RTTE_TRACING_LOG_LEVEL = TRACE
RECOVERY_TRACING_LOG_LEVEL = TRACE

# How long to wait, in seconds, before dropping a connection to a silent remote.
DEFAULT_REMOTE_INACTIVITY_TIMEOUT = 10.0

DEFAULT_MAX_ACTIVE_STREAMS_PER_SOCKET = 128

SACK_DUP_THRESH = 3
SACK_DEPTH = 64


def calc_pipe_expiry(rtt: float) -> float:
    """Return how long (seconds) an in-flight segment counts towards the pipe."""
    return rtt * 3 / 4