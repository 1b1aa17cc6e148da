"""Exceptions raised by the uTP core."""


class UtpError(Exception):
    """Base class for every uTP error."""


class SerializeError(UtpError):
    """The output does not fit in the space allowed for it."""

    def __init__(self, message: str = "serialize: too small buffer") -> None:
        super().__init__(message)


class ProtocolError(UtpError):
    """A packet or peer violated the wire protocol."""


class ConfigError(UtpError):
    """Invalid configuration."""


class MtuTooLowError(ConfigError):
    """The configured link MTU cannot carry even a one-byte payload."""

    def __init__(self, link_mtu: int, min_mtu: int) -> None:
        self.link_mtu = link_mtu
        self.min_mtu = min_mtu
        super().__init__(
            f"provided link_mtu ({link_mtu}) too low, not enough for even "
            f"1-byte IPv4 packets (min {min_mtu})"
        )


class BugError(UtpError):
    """An internal invariant was broken."""