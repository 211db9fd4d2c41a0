"""Exception hierarchy for dgraph-admin.

All exceptions inherit from :class:`DgraphAdminError`, which carries an
``exit_code`` attribute mapped to a constant from
:mod:`dgraph_admin.exit_codes`. The top-level handler in
:func:`dgraph_admin.app.main` catches ``DgraphAdminError`` and exits with the
appropriate code.

Subclass hierarchy::

    DgraphAdminError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- ConfigurationError  (exit 2)
    +-- AuthError           (exit 3)
    +-- NotFoundError       (exit 4)
    +-- ServerError         (exit 5)
    +-- ConnectionError_    (exit 6)

``ConfigurationError`` and ``InvalidUsageError`` are raised before any network
activity. The remaining four are only produced at the CLI boundary from an
:data:`~dgraph_admin.models.Outcome` by :func:`outcome_to_error`; the core
itself reports remote failures as values, not exceptions.
"""

from __future__ import annotations

from typing import Optional

from dgraph_admin.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_SERVER_ERROR,
)
from dgraph_admin.models import ApplicationError, Outcome, TransportError


class DgraphAdminError(Exception):
    """Base exception for all dgraph-admin errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(DgraphAdminError):
    """Raised for unknown command names or unreadable schema input."""

    exit_code = EXIT_INVALID_USAGE


class ConfigurationError(DgraphAdminError):
    """Raised for invalid local input: empty schema, malformed auth, bad URL or timeout."""

    exit_code = EXIT_INVALID_USAGE


class AuthError(DgraphAdminError):
    """The server rejected the request with HTTP 401 or 403."""

    exit_code = EXIT_AUTH_FAILURE


class NotFoundError(DgraphAdminError):
    """The server returned HTTP 404 for the admin endpoint."""

    exit_code = EXIT_NOT_FOUND


class ServerError(DgraphAdminError):
    """The server returned any other non-2xx status."""

    exit_code = EXIT_SERVER_ERROR


class ConnectionError_(DgraphAdminError):
    """Raised when no response was received (timeout, DNS, connection refused, TLS).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


def outcome_to_error(outcome: Outcome) -> Optional[DgraphAdminError]:
    """Map a failed outcome to the exception the CLI exits with.

    Args:
        outcome: The result of :meth:`~dgraph_admin.client.RequestExecutor.execute`.

    Returns:
        ``None`` for :class:`~dgraph_admin.models.Success`, otherwise the
        typed error carrying the matching exit code.
    """
    if isinstance(outcome, TransportError):
        return ConnectionError_(outcome.cause)
    if isinstance(outcome, ApplicationError):
        message = f"HTTP {outcome.status_code}"
        if outcome.status_code in (401, 403):
            return AuthError(message)
        if outcome.status_code == 404:
            return NotFoundError(message)
        return ServerError(message)
    return None
