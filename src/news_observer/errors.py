"""Exceptions raised while fetching articles."""


class FetchError(Exception):
    """Base class for a failed fetch.

    ``kind`` lets callers branch without isinstance checks.
    """

    kind = "fetch"


class TransportFailure(FetchError):
    """Network, DNS or non-success HTTP status."""

    kind = "transport"


class DecodeFailure(FetchError):
    """Response body was not JSON or did not have the expected shape."""

    kind = "decode"
