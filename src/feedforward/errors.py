"""Exception types raised by the feed-forward engine."""
from __future__ import annotations


class DimensionMismatchError(ValueError):
    """A vector, matrix or dataset does not have the width a component expects."""


class NetworkStateError(RuntimeError):
    """An operation was invoked in a state where it cannot run.

    Raised for empty networks and for misuse of activation records, such as
    calling ``backward`` before ``forward`` or consuming a record twice.
    """


__all__ = ["DimensionMismatchError", "NetworkStateError"]
