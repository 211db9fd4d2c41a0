"""Canonical Pydantic models shared across all dgraph-admin modules.

The models fall into three groups, each matching one stage of an invocation:

**Configuration** -- built once at startup by :mod:`dgraph_admin.config` and
read by both the resolver and the executor:
    :class:`AuthHeader`, :class:`RequestConfig`, :class:`EndpointConfig`.

**Commands and requests** -- the closed set of admin commands and the
request descriptor the resolver derives from them:
    :class:`UpdateSchema`, :class:`GetSchema`, :class:`DropAll`,
    :class:`DropData`, :class:`GetHealth` (together :data:`Command`) and
    :class:`RequestDescriptor`.

**Outcomes** -- the classified result of executing one request:
    :class:`Success`, :class:`ApplicationError`, :class:`TransportError`
    (together :data:`Outcome`).

Every model is frozen; nothing here is mutated after construction.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_BASE_URL = "http://localhost:8080"
"""Dgraph Alpha's default HTTP address."""

DEFAULT_TIMEOUT = 30.0
"""Seconds to wait for a connection and a response before giving up."""


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# --- Configuration ---


class AuthHeader(_Frozen):
    """A single operator-supplied header carrying a token or API key.

    Example::

        AuthHeader(name="X-Dgraph-AuthToken", value="s3cret")
    """

    name: str = Field(description="Header name, sent verbatim")
    value: str = Field(description="Header value, sent verbatim")

    def masked(self) -> str:
        """Return ``Name: ****`` for diagnostics that must not leak the secret."""
        return f"{self.name}: ****"


class RequestConfig(_Frozen):
    """HTTP settings applied to the single request of an invocation."""

    timeout: float = Field(default=DEFAULT_TIMEOUT, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")


class EndpointConfig(_Frozen):
    """Where to send admin requests and how to authenticate them.

    Built by :func:`~dgraph_admin.config.resolve_endpoint_config`, which
    guarantees ``base_url`` is an absolute ``http``/``https`` URL with no path.
    """

    base_url: str = Field(default=DEFAULT_BASE_URL)
    auth_header: Optional[AuthHeader] = None
    request: RequestConfig = Field(default_factory=RequestConfig)


# --- Commands ---


class UpdateSchema(_Frozen):
    """Add or modify the DQL schema. ``payload`` is the new schema text."""

    kind: Literal["update-schema"] = "update-schema"
    payload: Optional[str] = None


class GetSchema(_Frozen):
    """Fetch the current schema."""

    kind: Literal["get-schema"] = "get-schema"


class DropAll(_Frozen):
    """Drop all data and the schema."""

    kind: Literal["drop-all"] = "drop-all"


class DropData(_Frozen):
    """Drop all data but keep the schema."""

    kind: Literal["drop-data"] = "drop-data"


class GetHealth(_Frozen):
    """Fetch the health of every node in the cluster."""

    kind: Literal["get-health"] = "get-health"


Command = Annotated[
    Union[UpdateSchema, GetSchema, DropAll, DropData, GetHealth],
    Field(discriminator="kind"),
]

DESTRUCTIVE_COMMANDS = (UpdateSchema, DropAll, DropData)
"""Commands whose remote effect is unknown when the transport fails."""


class RequestDescriptor(_Frozen):
    """A fully specified HTTP request, relative to the configured base URL.

    Only :func:`~dgraph_admin.resolver.resolve` constructs these.
    """

    method: Literal["GET", "POST"]
    path: str
    headers: dict[str, str] = Field(default_factory=dict)
    body: Optional[bytes] = None


# --- Outcomes ---


class Success(_Frozen):
    """The server answered with a 2xx status. ``body`` is the raw response body."""

    kind: Literal["success"] = "success"
    body: bytes = b""


class ApplicationError(_Frozen):
    """The server answered with a non-2xx status.

    ``body`` is the server's diagnostic, passed through untouched so the
    operator sees Dgraph's own message.
    """

    kind: Literal["application_error"] = "application_error"
    status_code: int
    body: bytes = b""


class TransportError(_Frozen):
    """No response was received.

    For destructive commands the remote outcome is unknown: the request may
    have reached the server before the connection failed.
    """

    kind: Literal["transport_error"] = "transport_error"
    cause: str


Outcome = Annotated[
    Union[Success, ApplicationError, TransportError],
    Field(discriminator="kind"),
]
