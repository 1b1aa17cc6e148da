# utpcore

Protocol building blocks for uTP, the Micro Transport Protocol that
BitTorrent clients run over UDP (BEP 29). Only the standard library is
needed.

## Modules

- `utpcore.header`: `PacketType`, `Extensions` and `UtpHeader`.
  `UtpHeader.serialize(max_len=None)` encodes the 20-byte fixed header and
  any selective-ACK and close-reason extensions. When `max_len` is given,
  extensions that would not fit are left out. If `max_len` is below 20,
  `SerializeError` is raised. `UtpHeader.deserialize(data)` returns
  `(header, header_size)`. It raises `ProtocolError` for short or truncated
  input, a wrong version or an unknown packet type. Extensions it does not
  know are skipped.
- `utpcore.message`: `UtpMessage`, a header together with its payload.
  `UtpMessage.deserialize` raises `ProtocolError` for an `ST_DATA` packet
  that has no payload, and for any other packet type that carries one.
  `serialize()` encodes the header followed by the payload.
- `utpcore.seq_nr`: `SeqNr`, a 16-bit sequence number. Adding or subtracting
  an `int` wraps around. Subtracting one `SeqNr` from another, or calling
  `offset()`, gives the signed distance between them. Comparisons hold across
  the wrap: numbers more than 65535 − 1024 apart are taken to have wrapped.
- `utpcore.selective_ack`: `SelectiveAck`, the 64-bit SACK bitmap. It has
  `from_unacked`, `from_bytes`, `to_bytes` and `count_ones`. Iterating over
  it yields its 64 bits as booleans.
- `utpcore.close_reason`: `CloseReason`, the 4-byte close-reason extension.
  `description()` gives the name of a code.
- `utpcore.mtu`: `SegmentSizesConfig` and `SegmentSizes`. Given a link MTU,
  `SegmentSizes` tracks the largest payload known to get through (`mss()`)
  and the largest payload worth probing (`max_ss()`).
  `next_segment_size()` returns a binary-search probe once per cooldown
  period and the known-good size the rest of the time. A link MTU that is
  too small is raised to the smallest value that still carries a one-byte
  payload.
- `utpcore.rtte`: `RttEstimator`, a smoothed RTT and retransmission timeout
  in the style of RFC 6298. Times are in seconds. The RTO is kept between
  0.2 s and 60 s and doubles on each `on_rto_timeout()`.
- `utpcore.congestion`: the abstract `CongestionController`, the `Cubic`
  implementation (RFC 8312) and the helpers `calc_k`, `w_cubic` and `w_est`.
  `TracingController` wraps another controller and logs every change of its
  state. Changes made in `on_ack` are logged at most once every 500 ms.
- `utpcore.ratelog`: `RateLimitedLogger(logger, interval_ms, clock=...)`.
  Its `log()` emits at most one record per interval, notes how many records
  it skipped, and returns whether it emitted this one.
  `log_if_changed(logger, level, name, obj, calc, change)` applies `change`
  and logs when the value of `calc` differs afterwards.
- `utpcore.constants`: header sizes, default buffer sizes and timeouts,
  `SACK_DEPTH`, `WRAP_TOLERANCE` and `calc_pipe_expiry()`.
- `utpcore.errors`: `UtpError` and its subclasses `SerializeError`,
  `ProtocolError`, `ConfigError`, `MtuTooLowError` and `BugError`.
- `utpcore.benchtools`: coroutines for any pair of asyncio streams.
  `bench_sender` writes random 16 KiB buffers. `bench_receiver` reads until
  EOF, logs the throughput and returns the number of bytes read. `echo`
  exchanges the big-endian counters 0 to 1000 with the peer, then sends EOF
  and checks that nothing follows. A read or drain that stalls for 5 seconds
  raises `TimeoutError`.

## Example

```python
from utpcore.seq_nr import SeqNr

a = SeqNr(65535)
b = a + 1          # wraps to 0
assert b > a       # ordering holds across the wrap
assert b.offset(a) == 1
```

## Command-line tools

`utpcore-udp-bench` measures raw UDP throughput on localhost, as a baseline.
The receiver binds 127.0.0.1:8002 and the sender binds 127.0.0.1:8001:

```
utpcore-udp-bench
```

Run with no arguments, the command starts the receiver and the sender as two
child processes. The receiver logs its average speed about once a second.
Each side stops when a socket operation fails or stalls for 5 seconds. Either
side can also be run on its own:

```
utpcore-udp-bench server
utpcore-udp-bench client
```

`utpcore-canary` writes a new file of the given size in megabytes. The file
holds the bytes 0 to 255, repeated. It refuses to overwrite an existing file.

```
utpcore-canary canary.bin 10
```

## What it does not do

This package provides the parts of uTP, not a working transport. It has no
uTP socket or stream: it does not bind a port for uTP, accept or open
connections, retransmit, or do loss recovery. The benchmark tools run over
plain UDP, or over asyncio streams that you supply.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```