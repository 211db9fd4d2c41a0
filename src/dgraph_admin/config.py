"""Endpoint configuration: precedence resolution, URL normalisation, auth parsing.

The whole configuration of an invocation is one immutable
:class:`~dgraph_admin.models.EndpointConfig`, built here once and passed by
parameter to the resolver and the executor. Nothing is read from or written to
disk.

Precedence (high to low):
    1. CLI flags (``--url``, ``--auth``, ``--timeout``)
    2. Environment variables (``DGRAPH_ADMIN_URL``, ``DGRAPH_ADMIN_AUTH``,
       ``DGRAPH_ADMIN_TIMEOUT``)
    3. Defaults (``http://localhost:8080``, no auth, 30 seconds)
"""

from __future__ import annotations

import os
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

from pydantic import ValidationError

from dgraph_admin.exceptions import ConfigurationError
from dgraph_admin.models import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    AuthHeader,
    EndpointConfig,
    RequestConfig,
)

ENV_URL = "DGRAPH_ADMIN_URL"
ENV_AUTH = "DGRAPH_ADMIN_AUTH"
ENV_TIMEOUT = "DGRAPH_ADMIN_TIMEOUT"

_SCHEMES = ("http", "https")


def _is_header_safe(text: str) -> bool:
    """True when *text* is printable ASCII, the only thing httpx will put on the wire."""
    return all(" " <= ch <= "~" for ch in text)


def parse_auth_header(raw: str) -> AuthHeader:
    """Split a ``Name:Value`` string into an :class:`AuthHeader`.

    The string is split on the first ``:`` only, so values may themselves
    contain colons. Surrounding whitespace is stripped from both parts.

    Args:
        raw: The operator-supplied header, e.g. ``X-Dgraph-AuthToken:s3cret``.

    Returns:
        The parsed header.

    Raises:
        ConfigurationError: If there is no ``:``, the name is empty or
            contains whitespace, the value is empty, or either part holds
            anything but printable ASCII (non-ASCII letters, CR/LF, other
            control characters).
    """
    name, sep, value = raw.partition(":")
    if not sep:
        raise ConfigurationError(
            f"Malformed auth header {raw!r}: expected 'Name:Value'"
        )
    name = name.strip()
    value = value.strip()
    if not name or not _is_header_safe(name) or " " in name:
        raise ConfigurationError(f"Malformed auth header {raw!r}: invalid header name")
    if not value:
        raise ConfigurationError(f"Malformed auth header {raw!r}: empty header value")
    if not _is_header_safe(value):
        raise ConfigurationError(
            f"Malformed auth header {raw!r}: value must be printable ASCII"
        )
    return AuthHeader(name=name, value=value)


def normalize_base_url(url: str) -> str:
    """Turn an operator-supplied address into an absolute base URL.

    * ``localhost:8080`` -> ``http://localhost:8080`` (scheme added if missing)
    * ``https://x.cloud.dgraph.io/graphql`` -> ``https://x.cloud.dgraph.io``
      (path, query and fragment trimmed off)

    Raises:
        ConfigurationError: If the URL is empty, uses another scheme, or has
            no host.
    """
    url = url.strip()
    if not url:
        raise ConfigurationError("Dgraph URL must not be empty")

    # Without "//" urlsplit reads "localhost:8080" as scheme "localhost".
    if "://" not in url:
        url = f"http://{url}"

    try:
        parts = urlsplit(url)
        # Accessing .port validates it.
        parts.port
    except ValueError as exc:
        raise ConfigurationError(f"Invalid Dgraph URL {url!r}: {exc}") from exc

    if parts.scheme.lower() not in _SCHEMES:
        raise ConfigurationError(
            f"Invalid Dgraph URL {url!r}: scheme must be http or https"
        )
    if not parts.hostname:
        raise ConfigurationError(f"Invalid Dgraph URL {url!r}: missing host")

    return urlunsplit((parts.scheme.lower(), parts.netloc, "", "", ""))


def parse_timeout(raw: str | float) -> float:
    """Parse a timeout in seconds, rejecting non-numeric and non-positive values."""
    try:
        timeout = float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid timeout {raw!r}: expected seconds") from exc
    if timeout <= 0:
        raise ConfigurationError(f"Invalid timeout {raw!r}: must be positive")
    return timeout


def resolve_endpoint_config(
    url: Optional[str] = None,
    auth: Optional[str] = None,
    timeout: Optional[float] = None,
    insecure: bool = False,
) -> EndpointConfig:
    """Resolve the endpoint configuration with full precedence chain.

    Args:
        url: ``--url`` flag value.
        auth: ``--auth`` flag value (``Name:Value``).
        timeout: ``--timeout`` flag value in seconds.
        insecure: Skip TLS certificate verification.

    Returns:
        The immutable configuration for this invocation.

    Raises:
        ConfigurationError: If any resolved setting is invalid.
    """
    raw_url = url if url is not None else os.environ.get(ENV_URL) or DEFAULT_BASE_URL
    raw_auth = auth if auth is not None else os.environ.get(ENV_AUTH) or None

    raw_timeout: str | float = DEFAULT_TIMEOUT
    if timeout is not None:
        raw_timeout = timeout
    elif os.environ.get(ENV_TIMEOUT):
        raw_timeout = os.environ[ENV_TIMEOUT]

    try:
        return EndpointConfig(
            base_url=normalize_base_url(raw_url),
            auth_header=parse_auth_header(raw_auth) if raw_auth is not None else None,
            request=RequestConfig(
                timeout=parse_timeout(raw_timeout),
                verify_ssl=not insecure,
            ),
        )
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc
