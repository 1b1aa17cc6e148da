"""Throughput and echo exercises over a pair of asyncio byte streams."""

from __future__ import annotations

import asyncio
import logging
import os
import struct
import time
from collections.abc import Awaitable, Coroutine
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

TIMEOUT = 5.0
BUFFER_SIZE = 16384
MAX_COUNTER = 1000
PRINT_EVERY = 100

_PRINT_INTERVAL = 1.0
_EOF_PROBE_SIZE = 8192
_U64 = struct.Struct(">Q")


async def _timed(aw: Awaitable[T], action: str) -> T:
    """Await ``aw`` within the module timeout, raising TimeoutError otherwise."""
    try:
        return await asyncio.wait_for(aw, TIMEOUT)
    except asyncio.TimeoutError:
        raise TimeoutError(f"timeout {action}") from None


async def _join(*coros: Coroutine[Any, Any, Any]) -> list[Any]:
    """Run coroutines concurrently; on the first failure cancel the rest and re-raise."""
    tasks = [asyncio.ensure_future(c) for c in coros]
    try:
        _, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
    for task in pending:
        task.cancel()
    if pending:
        await asyncio.gather(*pending, return_exceptions=True)
    for task in tasks:
        if task.done() and not task.cancelled() and task.exception() is not None:
            raise task.exception()  # type: ignore[misc]
    return [task.result() for task in tasks]


async def bench_receiver(reader: asyncio.StreamReader) -> int:
    """Read until EOF, logging throughput about once a second; return the bytes read."""
    total = 0
    window_bytes = 0
    last_print: float | None = None
    while True:
        try:
            chunk = await _timed(reader.read(BUFFER_SIZE), "while reading")
        except TimeoutError:
            raise
        except OSError as e:
            raise ConnectionError(f"error reading: {e}") from e
        if not chunk:
            return total

        total += len(chunk)
        window_bytes += len(chunk)
        now = time.monotonic()
        if last_print is None:
            last_print = now
        elif now - last_print > _PRINT_INTERVAL:
            speed = window_bytes / (1024 * 1024) / (now - last_print)
            logger.info("total receiving speed: %.2f MB/s", speed)
            last_print = now
            window_bytes = 0


async def bench_sender(writer: asyncio.StreamWriter) -> None:
    """Write random buffers until the stream fails or stalls past the timeout."""
    buffer = os.urandom(BUFFER_SIZE)
    while True:
        start = time.monotonic()
        try:
            writer.write(buffer)
            await _timed(writer.drain(), "while writing")
        except TimeoutError:
            raise
        except OSError as e:
            raise ConnectionError(f"error writing: {e}") from e
        logger.debug(
            "sent %d bytes in %.0f us", len(buffer), (time.monotonic() - start) * 1e6
        )


async def echo(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> int:
    """Exchange the counters 0..MAX_COUNTER with the peer, then shut down and expect EOF.

    Returns the number of counters received.
    """

    async def read_side() -> int:
        for expected in range(MAX_COUNTER + 1):
            try:
                raw = await _timed(reader.readexactly(_U64.size), "reading")
            except asyncio.IncompleteReadError as e:
                raise ConnectionError(
                    f"error reading: unexpected EOF after {len(e.partial)} bytes"
                ) from e
            (current,) = _U64.unpack(raw)
            if current != expected:
                raise ValueError(f"expected {expected}, got {current}")
            if current % PRINT_EVERY == 0:
                logger.info("current counter %d", current)
        return MAX_COUNTER + 1

    async def write_side() -> None:
        for counter in range(MAX_COUNTER + 1):
            writer.write(_U64.pack(counter))
            await _timed(writer.drain(), "writing")

    received, _ = await _join(read_side(), write_side())

    # Make sure everything written has left before looking for the peer's EOF.
    if writer.can_write_eof():
        writer.write_eof()
    await _timed(writer.drain(), "shutting down")

    tail = await _timed(reader.read(_EOF_PROBE_SIZE), "checking for EOF")
    if tail:
        raise ValueError(f"read unexpected {len(tail)} bytes at the end")

    logger.info("echo completed successfully")
    return received