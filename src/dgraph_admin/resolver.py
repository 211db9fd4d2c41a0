"""Command resolver -- maps an admin command to the HTTP request that performs it.

:func:`resolve` is a pure function: the same command and configuration always
produce an equal :class:`~dgraph_admin.models.RequestDescriptor`, and it never
touches the network. The endpoint paths and drop-op values below are pinned
to one version of Dgraph's admin HTTP API.

==============  ======  =================  ==============================
Command         Method  Path               Body
==============  ======  =================  ==============================
update-schema   POST    ``/alter``         raw schema text
get-schema      GET     ``/admin/schema``  --
drop-all        POST    ``/alter``         ``{"drop_op": "all"}``
drop-data       POST    ``/alter``         ``{"drop_op": "data"}``
get-health      GET     ``/admin/health``  --
==============  ======  =================  ==============================
"""

from __future__ import annotations

import json
from typing import Optional

from dgraph_admin.exceptions import ConfigurationError, InvalidUsageError
from dgraph_admin.models import (
    Command,
    DropAll,
    DropData,
    EndpointConfig,
    GetHealth,
    GetSchema,
    RequestDescriptor,
    UpdateSchema,
)

ALTER_PATH = "/alter"
SCHEMA_PATH = "/admin/schema"
HEALTH_PATH = "/admin/health"

DROP_OP_ALL = "all"
DROP_OP_DATA = "data"

SCHEMA_CONTENT_TYPE = "application/dql"
JSON_CONTENT_TYPE = "application/json"

COMMAND_NAMES: dict[str, type] = {
    "update-schema": UpdateSchema,
    "get-schema": GetSchema,
    "drop-all": DropAll,
    "drop-data": DropData,
    "get-health": GetHealth,
}
"""CLI command names mapped to their command variants."""


def parse_command(name: str, payload: Optional[str] = None) -> Command:
    """Build a command variant from its CLI name.

    Args:
        name: One of the keys of :data:`COMMAND_NAMES`.
        payload: Schema text; only used by ``update-schema``.

    Raises:
        InvalidUsageError: If *name* is not a known command.
    """
    try:
        cls = COMMAND_NAMES[name]
    except KeyError:
        known = ", ".join(COMMAND_NAMES)
        raise InvalidUsageError(f"Unknown command {name!r} (expected one of: {known})") from None
    if cls is UpdateSchema:
        return UpdateSchema(payload=payload)
    return cls()


def resolve(command: Command, config: EndpointConfig) -> RequestDescriptor:
    """Derive the request descriptor for *command*.

    The configured auth header, if any, is added verbatim to every
    descriptor.

    Args:
        command: The admin command to perform.
        config: The endpoint configuration of this invocation.

    Returns:
        The request to send, with a path relative to ``config.base_url``.

    Raises:
        ConfigurationError: If an ``update-schema`` payload is missing or blank.
    """
    headers: dict[str, str] = {}

    if isinstance(command, UpdateSchema):
        if command.payload is None or not command.payload.strip():
            raise ConfigurationError("Schema is empty: nothing to update")
        method, path = "POST", ALTER_PATH
        body: Optional[bytes] = command.payload.encode("utf-8")
        headers["Content-Type"] = SCHEMA_CONTENT_TYPE
    elif isinstance(command, (DropAll, DropData)):
        drop_op = DROP_OP_ALL if isinstance(command, DropAll) else DROP_OP_DATA
        method, path = "POST", ALTER_PATH
        body = json.dumps({"drop_op": drop_op}).encode("utf-8")
        headers["Content-Type"] = JSON_CONTENT_TYPE
    elif isinstance(command, GetSchema):
        method, path, body = "GET", SCHEMA_PATH, None
    elif isinstance(command, GetHealth):
        method, path, body = "GET", HEALTH_PATH, None
    else:
        raise InvalidUsageError(f"Unsupported command: {command!r}")

    if config.auth_header is not None:
        headers[config.auth_header.name] = config.auth_header.value

    return RequestDescriptor(method=method, path=path, headers=headers, body=body)
