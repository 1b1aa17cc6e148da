"""Create a canary file: a repeating 0..255 byte sequence, for spotting corruption."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence

_PATTERN = bytes(range(256))
# A chunk whose length is a multiple of the pattern, so chunks join seamlessly.
_CHUNK = _PATTERN * 256


def create_canary_file(path: str | os.PathLike[str], size_mb: int) -> None:
    """Write ``size_mb`` MiB of the canary pattern to a new file at ``path``.

    Raises FileExistsError if the file is already there.
    """
    if size_mb < 0:
        raise ValueError(f"invalid size: {size_mb}")
    remaining = size_mb * 1024 * 1024
    with open(path, "xb") as f:
        while remaining > 0:
            length = min(remaining, len(_CHUNK))
            f.write(_CHUNK[:length])
            remaining -= length


def main(argv: Sequence[str] | None = None) -> int:
    """Command line: ``<filename> <size in megabytes>``."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 1:
        raise SystemExit("first arg should be filename")
    if len(args) < 2:
        raise SystemExit("second arg should be size in megabytes")
    name, size_arg = args[0], args[1]
    try:
        size_mb = int(size_arg)
    except ValueError:
        raise SystemExit("invalid size") from None
    if size_mb < 0:
        raise SystemExit("invalid size")
    try:
        create_canary_file(name, size_mb)
    except OSError as e:
        raise SystemExit(f"cannot write file: {e}") from e
    return 0


if __name__ == "__main__":
    raise SystemExit(main())