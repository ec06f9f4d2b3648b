"""Exception types raised by the inventory cache."""

from __future__ import annotations


class KubeSnapError(Exception):
    """Base class for kubesnap errors."""


class TransportError(KubeSnapError):
    """Raised when dialing the API server or a remote list call fails.

    The snapshot being populated stays empty, so the next call retries.
    """

    def __init__(self, operation: str, cause: Exception) -> None:
        super().__init__(f"{operation} failed: {cause}")
        self.operation = operation
        self.cause = cause


class NotFoundError(KubeSnapError):
    """Raised when a point lookup finds no matching resource."""

    def __init__(self, what: str) -> None:
        super().__init__(what)
        self.what = what
