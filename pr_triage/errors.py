"""Exceptions raised by pr-triage.

Every fatal condition of a triage run is a ``PrTriageError``; the CLI prints
its message and exits non-zero. Server-reported GraphQL errors that arrive
alongside data are not exceptions, they are reported by ``diagnostics``.
"""
from typing import Optional


class PrTriageError(Exception):
    """Base exception for all fatal pr-triage errors."""

    pass


class InvalidRepositoryFormat(PrTriageError):
    """Raised when the repository argument is not ``owner/name``."""

    def __init__(self, value: str, example: str):
        self.value = value
        self.example = example
        super().__init__(
            f"Invalid repository name {value!r}: expected the owner/name format, for example {example}"
        )


class MissingCredentials(PrTriageError):
    """Raised when no GitHub token could be found."""

    pass


class TransportFailure(PrTriageError):
    """Raised when the HTTP round trip to the GraphQL endpoint fails."""

    def __init__(self, message: str, status: Optional[int] = None):
        self.status = status
        super().__init__(message)


class MalformedPayload(PrTriageError):
    """Raised when a response body does not decode into the expected envelope shape."""

    def __init__(self, reason: str, path: Optional[str] = None):
        self.reason = reason
        self.path = path
        where = f" at {path}" if path else ""
        super().__init__(f"Malformed GraphQL response{where}: {reason}")


class GraphQLRequestFailed(PrTriageError):
    """Raised when the server returned errors and no data."""

    def __init__(self, operation_name: str, errors):
        self.operation_name = operation_name
        self.errors = tuple(errors)
        first = self.errors[0].message if self.errors else "no data returned"
        super().__init__(
            f"{operation_name} failed with {len(self.errors)} GraphQL error(s): {first}"
        )


class RequiredFieldMissing(PrTriageError):
    """Raised when a mandatory field of a response is null."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Required field missing from response: {path}")


class UnexpectedResultCardinality(PrTriageError):
    """Raised when a list expected to hold exactly one element holds some other count."""

    def __init__(self, path: str, count: int):
        self.path = path
        self.count = count
        super().__init__(f"Expected exactly one element at {path}, got {count}")
