"""The uTP packet header and its extensions."""

from __future__ import annotations

import enum
import logging
import struct
from dataclasses import dataclass, field

from .close_reason import CloseReason
from .constants import UTP_HEADER
from .errors import ProtocolError, SerializeError
from .selective_ack import SelectiveAck
from .seq_nr import SeqNr

logger = logging.getLogger(__name__)

_VERSION = 1
NO_NEXT_EXT = 0
EXT_SELECTIVE_ACK = 1
EXT_CLOSE_REASON = 3

_FIXED = struct.Struct(">BBHIIIHH")


class PacketType(enum.IntEnum):
    ST_DATA = 0
    ST_FIN = 1
    ST_STATE = 2
    ST_RESET = 3
    ST_SYN = 4


@dataclass
class Extensions:
    selective_ack: SelectiveAck | None = None
    close_reason: CloseReason | None = None


@dataclass
class UtpHeader:
    htype: PacketType = PacketType.ST_STATE
    connection_id: SeqNr = SeqNr(0)
    timestamp_microseconds: int = 0
    timestamp_difference_microseconds: int = 0
    wnd_size: int = 0
    seq_nr: SeqNr = SeqNr(0)
    ack_nr: SeqNr = SeqNr(0)
    extensions: Extensions = field(default_factory=Extensions)

    def short_repr(self) -> str:
        return (
            f"{self.htype.name}:seq_nr={self.seq_nr}:ack_nr={self.ack_nr}"
            f":wnd_size={self.wnd_size}"
        )

    def serialize(self, max_len: int | None = None) -> bytes:
        """Encode the header; extensions that would exceed ``max_len`` are left out."""
        if max_len is not None and max_len < UTP_HEADER:
            raise SerializeError()

        candidates = []
        if self.extensions.selective_ack is not None:
            candidates.append((EXT_SELECTIVE_ACK, self.extensions.selective_ack.to_bytes()))
        if self.extensions.close_reason is not None:
            candidates.append((EXT_CLOSE_REASON, self.extensions.close_reason.to_bytes()))

        fitted = []
        size = UTP_HEADER
        for ext_id, payload in candidates:
            if max_len is None or size + 2 + len(payload) <= max_len:
                fitted.append((ext_id, payload))
                size += 2 + len(payload)

        first_ext = fitted[0][0] if fitted else NO_NEXT_EXT
        out = bytearray(
            _FIXED.pack(
                (int(self.htype) << 4) | _VERSION,
                first_ext,
                self.connection_id.value,
                self.timestamp_microseconds,
                self.timestamp_difference_microseconds,
                self.wnd_size,
                self.seq_nr.value,
                self.ack_nr.value,
            )
        )
        next_ids = [ext_id for ext_id, _ in fitted[1:]] + [NO_NEXT_EXT]
        for (_, payload), next_id in zip(fitted, next_ids):
            out += bytes((next_id, len(payload)))
            out += payload
        return bytes(out)

    def serialize_with_payload(self, payload: bytes, max_len: int | None = None) -> bytes:
        """Encode the header followed by ``payload``."""
        head = self.serialize(max_len)
        if max_len is not None and len(head) + len(payload) > max_len:
            raise SerializeError()
        return head + bytes(payload)

    @classmethod
    def deserialize(cls, data: bytes) -> tuple[UtpHeader, int]:
        """Decode a header; return it with the number of bytes it occupied."""
        data = bytes(data)
        if len(data) < UTP_HEADER:
            raise ProtocolError("packet shorter than uTP header")
        typever, next_ext, conn_id, ts, ts_diff, wnd, seq, ack = _FIXED.unpack_from(data)
        version = typever & 0x0F
        if version != _VERSION:
            raise ProtocolError(f"wrong version: {version}")
        try:
            htype = PacketType(typever >> 4)
        except ValueError:
            raise ProtocolError(f"unknown packet type: {typever >> 4}") from None

        header = cls(
            htype=htype,
            connection_id=SeqNr(conn_id),
            timestamp_microseconds=ts,
            timestamp_difference_microseconds=ts_diff,
            wnd_size=wnd,
            seq_nr=SeqNr(seq),
            ack_nr=SeqNr(ack),
        )

        pos = UTP_HEADER
        while next_ext:
            if pos + 2 > len(data):
                raise ProtocolError("truncated extension header")
            ext = next_ext
            next_ext, ext_len = data[pos], data[pos + 1]
            ext_data = data[pos + 2 : pos + 2 + ext_len]
            if len(ext_data) < ext_len:
                raise ProtocolError("truncated extension data")
            if ext == EXT_SELECTIVE_ACK:
                header.extensions.selective_ack = SelectiveAck.from_bytes(ext_data)
            elif ext == EXT_CLOSE_REASON and ext_len == 4:
                header.extensions.close_reason = CloseReason.parse(ext_data)
            else:
                logger.debug(
                    "unsupported extension %d (len %d), skipping", ext, ext_len
                )
            pos += 2 + ext_len

        return header, pos