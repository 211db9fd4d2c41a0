"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~dgraph_admin.exceptions.DgraphAdminError` subclass.
Shell wrappers can inspect the exit code to tell a rejected request from an
unreachable server without parsing stderr.

Example::

    $ dgraph-admin --url https://dgraph.internal drop-data --yes
    $ echo $?
    6   # EXIT_CONNECTION_ERROR -- the drop may or may not have been applied
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""Invalid arguments or local configuration (bad URL, malformed auth, empty schema)."""

EXIT_AUTH_FAILURE = 3
"""The server rejected the credentials (HTTP 401 / 403)."""

EXIT_NOT_FOUND = 4
"""The admin endpoint does not exist on the server (HTTP 404)."""

EXIT_SERVER_ERROR = 5
"""The server answered with any other non-2xx status."""

EXIT_CONNECTION_ERROR = 6
"""No response was received (timeout, DNS failure, connection refused, TLS)."""

EXIT_INTERRUPTED = 130
"""The operator interrupted the command (Ctrl-C)."""
