"""Request executor -- sends one resolved request and classifies the result.

:class:`RequestExecutor` wraps :class:`httpx.Client` configured from an
:class:`~dgraph_admin.models.EndpointConfig` (base URL, timeout, TLS
verification). Each call to :meth:`RequestExecutor.execute` performs exactly
one HTTP request and returns exactly one
:data:`~dgraph_admin.models.Outcome`:

- 2xx -> :class:`~dgraph_admin.models.Success` with the raw body;
- any other status -> :class:`~dgraph_admin.models.ApplicationError` with the
  status code and raw body;
- no response (DNS, refused connection, TLS, timeout) ->
  :class:`~dgraph_admin.models.TransportError` with a readable cause.

Requests are never retried and redirects are not followed. Remote failures
are returned as values; nothing here raises for them.
"""

from __future__ import annotations

import json
from typing import Optional

import httpx

from dgraph_admin.models import (
    ApplicationError,
    Command,
    EndpointConfig,
    Outcome,
    RequestDescriptor,
    Success,
    TransportError,
)
from dgraph_admin.output import get_output
from dgraph_admin.resolver import resolve


class RequestExecutor:
    """Blocking executor for resolved admin requests.

    Must be used as a context manager so that the underlying transport is
    opened and closed.

    Args:
        config: Endpoint configuration of this invocation.
        transport: Optional httpx transport, e.g. :class:`httpx.MockTransport`
            in tests.
        dry_run: When ``True``, requests are printed to stderr and a
            synthetic :class:`~dgraph_admin.models.Success` is returned
            without network I/O.

    Example::

        with RequestExecutor(config) as executor:
            outcome = executor.execute(resolve(GetHealth(), config))
    """

    def __init__(
        self,
        config: EndpointConfig,
        transport: Optional[httpx.BaseTransport] = None,
        dry_run: bool = False,
    ) -> None:
        self._config = config
        self._transport = transport
        self._dry_run = dry_run
        self._client: Optional[httpx.Client] = None

    def __enter__(self) -> RequestExecutor:
        self._client = httpx.Client(
            base_url=self._config.base_url,
            timeout=self._config.request.timeout,
            verify=self._config.request.verify_ssl,
            follow_redirects=False,
            transport=self._transport,
        )
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    def execute(self, descriptor: RequestDescriptor) -> Outcome:
        """Send *descriptor* and classify the result.

        Args:
            descriptor: The request produced by
                :func:`~dgraph_admin.resolver.resolve`.

        Returns:
            Exactly one outcome. Transport failures are reported as
            :class:`~dgraph_admin.models.TransportError`, never raised.
        """
        assert self._client is not None, "Executor not initialised -- use as context manager"

        url = f"{self._config.base_url}{descriptor.path}"
        if self._dry_run:
            return self._print_dry_run(descriptor, url)

        output = get_output()
        output.debug(f"{descriptor.method} {url}")

        try:
            response = self._client.request(
                descriptor.method,
                descriptor.path,
                headers=descriptor.headers,
                content=descriptor.body,
            )
        except httpx.TimeoutException as exc:
            cause = f"timed out after {self._config.request.timeout:g}s: {_describe(exc)}"
            output.debug(f"Transport error: {cause}")
            return TransportError(cause=cause)
        except httpx.ConnectError as exc:
            cause = f"connection to {self._config.base_url} failed: {_describe(exc)}"
            output.debug(f"Transport error: {cause}")
            return TransportError(cause=cause)
        except httpx.RequestError as exc:
            cause = f"request to {url} failed: {_describe(exc)}"
            output.debug(f"Transport error: {cause}")
            return TransportError(cause=cause)

        output.debug(f"HTTP {response.status_code} {response.reason_phrase or ''}".rstrip())
        return classify_response(response)

    def _print_dry_run(self, descriptor: RequestDescriptor, url: str) -> Outcome:
        """Describe the request on stderr and return a synthetic success."""
        output = get_output()
        output.notice(f"[dry-run] {descriptor.method} {url}")

        auth = self._config.auth_header
        for key, value in descriptor.headers.items():
            if auth is not None and key == auth.name:
                output.notice(f"  Header: {auth.masked()}")
            else:
                output.notice(f"  Header: {key}: {value}")

        if descriptor.body is not None:
            output.notice(f"  Body: {descriptor.body.decode('utf-8', errors='replace')}")

        return Success(
            body=json.dumps({"dry_run": True, "message": "Request was not sent"}).encode("utf-8")
        )


def classify_response(response: httpx.Response) -> Outcome:
    """Map an HTTP response to :class:`Success` or :class:`ApplicationError`."""
    if 200 <= response.status_code < 300:
        return Success(body=response.content)
    return ApplicationError(status_code=response.status_code, body=response.content)


def _describe(exc: httpx.RequestError) -> str:
    """Readable cause for a transport failure; some httpx errors have empty messages."""
    return str(exc) or type(exc).__name__


def execute(
    descriptor: RequestDescriptor,
    config: EndpointConfig,
    transport: Optional[httpx.BaseTransport] = None,
) -> Outcome:
    """Open an executor for *config*, send *descriptor*, and close it again."""
    with RequestExecutor(config, transport=transport) as executor:
        return executor.execute(descriptor)


def run(
    command: Command,
    config: EndpointConfig,
    transport: Optional[httpx.BaseTransport] = None,
) -> Outcome:
    """Resolve and execute *command*: ``execute(resolve(command, config))``.

    Raises:
        ConfigurationError: If the command fails resolution; no request is sent.
    """
    return execute(resolve(command, config), config, transport=transport)
