"""Error types shared across the journal pipeline."""


class ParseError(ValueError):
    """Raised when schema or entry data is malformed."""

    pass


class TransportError(Exception):
    """Raised when a mirror request fails at the network layer."""

    pass
