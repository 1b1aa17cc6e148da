import asyncio
import contextlib
import socket
import struct

import pytest

from utpcore import benchtools


async def _stream_pair():
    a, b = socket.socketpair()
    left = await asyncio.open_connection(sock=a)
    right = await asyncio.open_connection(sock=b)
    return left, right


async def _close(*writers):
    for w in writers:
        w.close()
        with contextlib.suppress(Exception):
            await w.wait_closed()


class _FailingWriter:
    def __init__(self, fail_after):
        self.fail_after = fail_after
        self.chunks = []

    def write(self, data):
        self.chunks.append(bytes(data))

    async def drain(self):
        if len(self.chunks) >= self.fail_after:
            raise BrokenPipeError("peer gone")


class _StalledWriter:
    def __init__(self):
        self.chunks = []

    def write(self, data):
        self.chunks.append(bytes(data))

    async def drain(self):
        await asyncio.sleep(10)


@pytest.mark.asyncio
async def test_echo_both_sides_complete():
    (r1, w1), (r2, w2) = await _stream_pair()
    try:
        results = await asyncio.gather(benchtools.echo(r1, w1), benchtools.echo(r2, w2))
    finally:
        await _close(w1, w2)
    assert results == [benchtools.MAX_COUNTER + 1, benchtools.MAX_COUNTER + 1]


@pytest.mark.asyncio
async def test_echo_rejects_wrong_counter():
    (r1, w1), (r2, w2) = await _stream_pair()
    try:
        w2.write(struct.pack(">Q", 5))
        await w2.drain()
        with pytest.raises(ValueError, match="expected 0, got 5"):
            await benchtools.echo(r1, w1)
    finally:
        await _close(w1, w2)


@pytest.mark.asyncio
async def test_echo_rejects_trailing_bytes():
    (r1, w1), (r2, w2) = await _stream_pair()
    try:
        for counter in range(benchtools.MAX_COUNTER + 1):
            w2.write(struct.pack(">Q", counter))
        w2.write(b"xyz")
        w2.write_eof()
        await w2.drain()
        with pytest.raises(ValueError, match="read unexpected"):
            await benchtools.echo(r1, w1)
    finally:
        await _close(w1, w2)


@pytest.mark.asyncio
async def test_echo_early_eof_is_connection_error():
    (r1, w1), (r2, w2) = await _stream_pair()
    try:
        for counter in range(10):
            w2.write(struct.pack(">Q", counter))
        w2.write_eof()
        await w2.drain()
        with pytest.raises(ConnectionError, match="unexpected EOF"):
            await benchtools.echo(r1, w1)
    finally:
        await _close(w1, w2)


@pytest.mark.asyncio
async def test_echo_times_out_on_silent_peer(monkeypatch):
    monkeypatch.setattr(benchtools, "TIMEOUT", 0.05)
    (r1, w1), (r2, w2) = await _stream_pair()
    try:
        with pytest.raises(TimeoutError):
            await benchtools.echo(r1, w1)
    finally:
        await _close(w1, w2)


@pytest.mark.asyncio
async def test_bench_receiver_counts_all_bytes():
    (r1, w1), (r2, w2) = await _stream_pair()
    payload = bytes(range(256)) * 400
    try:
        w2.write(payload)
        w2.write_eof()
        await w2.drain()
        total = await benchtools.bench_receiver(r1)
    finally:
        await _close(w1, w2)
    assert total == len(payload)


@pytest.mark.asyncio
async def test_bench_receiver_times_out(monkeypatch):
    monkeypatch.setattr(benchtools, "TIMEOUT", 0.05)
    (r1, w1), (r2, w2) = await _stream_pair()
    try:
        with pytest.raises(TimeoutError, match="timeout while reading"):
            await benchtools.bench_receiver(r1)
    finally:
        await _close(w1, w2)


@pytest.mark.asyncio
async def test_bench_sender_stops_on_write_error():
    writer = _FailingWriter(fail_after=3)
    with pytest.raises(ConnectionError, match="error writing"):
        await benchtools.bench_sender(writer)
    assert len(writer.chunks) == 3
    assert all(len(c) == benchtools.BUFFER_SIZE for c in writer.chunks)
    assert writer.chunks[0] == writer.chunks[1] == writer.chunks[2]


@pytest.mark.asyncio
async def test_bench_sender_times_out(monkeypatch):
    monkeypatch.setattr(benchtools, "TIMEOUT", 0.05)
    writer = _StalledWriter()
    with pytest.raises(TimeoutError, match="timeout while writing"):
        await benchtools.bench_sender(writer)
    assert len(writer.chunks) == 1