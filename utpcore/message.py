"""A uTP packet: a header together with its payload."""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import ProtocolError
from .header import PacketType, UtpHeader


@dataclass
class UtpMessage:
    """A decoded uTP packet."""

    header: UtpHeader = field(default_factory=UtpHeader)
    data: bytes = b""

    @property
    def payload(self) -> bytes:
        return self.data

    @classmethod
    def deserialize(cls, data: bytes) -> UtpMessage:
        """Decode a packet, rejecting ST_DATA without payload and other types with one."""
        data = bytes(data)
        header, header_size = UtpHeader.deserialize(data)
        payload = data[header_size:]
        if header.htype is PacketType.ST_DATA:
            if not payload:
                raise ProtocolError("ST_DATA has zero payload")
        elif payload:
            raise ProtocolError(f"{header.htype.name} packet with payload")
        return cls(header=header, data=payload)

    def serialize(self) -> bytes:
        """Encode the header followed by the payload."""
        return self.header.serialize_with_payload(self.data)

    def __repr__(self) -> str:
        return f"{self.header.short_repr()}:payload_len={len(self.data)}"