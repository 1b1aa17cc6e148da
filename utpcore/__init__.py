"""uTP (BEP 29) building blocks: packet codec, sequence numbers, RTT, MTU probing, congestion control and benchmark tools."""

__version__ = "0.5.1"

__all__ = [
    "benchtools",
    "canary",
    "close_reason",
    "congestion",
    "constants",
    "errors",
    "header",
    "message",
    "mtu",
    "ratelog",
    "rtte",
    "selective_ack",
    "seq_nr",
    "udp_bench",
]