"""Outcome rendering -- maps an executed request to what the operator sees.

This module bridges the executor and the output layer. A
:class:`~dgraph_admin.models.Success` body goes to stdout through
:meth:`~dgraph_admin.output.OutputManager.format_response`; an
:class:`~dgraph_admin.models.ApplicationError` body goes to stderr verbatim;
a :class:`~dgraph_admin.models.TransportError` cause is reported as an error.

Three Dgraph-specific touches:

* ``get-schema`` bodies print just the schema text (or ``no schema``)
  outside JSON mode.
* ``get-health`` bodies (a list of per-node reports) are summarised as
  ``<address> is <status>, uptime: <duration>`` outside JSON mode.
* Dgraph answers some failed operations with HTTP 200 and a GraphQL-style
  ``errors`` array; those messages are echoed as warnings.
"""

from __future__ import annotations

import json
from typing import Any

from dgraph_admin.models import (
    DESTRUCTIVE_COMMANDS,
    ApplicationError,
    Command,
    GetHealth,
    GetSchema,
    Outcome,
    Success,
    TransportError,
)
from dgraph_admin.output import OutputFormat, get_output

_DURATION_UNITS = (
    (31_557_600, "year", "years"),
    (2_630_016, "month", "months"),
    (86400, "day", "days"),
    (3600, "h", "h"),
    (60, "m", "m"),
    (1, "s", "s"),
)

_SCHEMA_PATHS = (
    ("data", "getGQLSchema", "schema"),
    ("data", "schema"),
    ("schema",),
)


def decode_body(body: bytes) -> Any:
    """Decode a response body as JSON, falling back to text; ``None`` when empty."""
    if not body:
        return None
    text = body.decode("utf-8", errors="replace")
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def embedded_errors(data: Any) -> list[str]:
    """Return the messages of a GraphQL-style ``errors`` array, if any."""
    if not isinstance(data, dict):
        return []
    errors = data.get("errors")
    if not isinstance(errors, list):
        return []
    messages = []
    for err in errors:
        if isinstance(err, dict) and "message" in err:
            messages.append(str(err["message"]))
        else:
            messages.append(str(err))
    return messages


def format_uptime(seconds: int) -> str:
    """Format a duration the way ``humantime`` does, e.g. ``1year 2months 1day 3m 4s``.

    A year is 365.25 days and a month 30.44 days.
    """
    if seconds <= 0:
        return "0s"
    parts = []
    for size, singular, plural in _DURATION_UNITS:
        count, seconds = divmod(seconds, size)
        if count:
            parts.append(f"{count}{singular if count == 1 else plural}")
    return " ".join(parts)


def schema_text(data: Any) -> tuple[bool, str]:
    """Find the schema text in a get-schema body.

    Looks under ``data.getGQLSchema.schema``, ``data.schema`` and ``schema``.
    An empty body, a null schema or a null ``getGQLSchema`` all count as an
    empty schema. Returns ``(False, "")`` when the body has no recognisable
    schema field, so callers can print it as-is.
    """
    if data is None:
        return True, ""
    if isinstance(data, str):
        return True, data.strip()
    for path in _SCHEMA_PATHS:
        node = data
        for depth, key in enumerate(path):
            if not isinstance(node, dict) or key not in node:
                break
            node = node[key]
            if node is None and depth > 0:
                return True, ""
        else:
            if isinstance(node, str):
                return True, node.strip()
    return False, ""


def health_rows(data: Any) -> list[list[str]] | None:
    """Extract ``[address, status, uptime]`` rows from a health report.

    Returns ``None`` when *data* is not a list of node reports, so callers can
    fall back to printing the body as-is.
    """
    if not isinstance(data, list) or not data:
        return None
    rows = []
    for node in data:
        if not isinstance(node, dict) or "address" not in node or "status" not in node:
            return None
        try:
            uptime = format_uptime(int(node.get("uptime", 0)))
        except (TypeError, ValueError):
            uptime = str(node.get("uptime"))
        rows.append([str(node["address"]), str(node["status"]), uptime])
    return rows


def render_outcome(command: Command, outcome: Outcome) -> None:
    """Print *outcome* for the operator.

    Args:
        command: The command that was executed; selects health summaries
            and the unknown-outcome warning.
        outcome: The classified result.
    """
    output = get_output()

    if isinstance(outcome, Success):
        data = decode_body(outcome.body)
        for message in embedded_errors(data):
            output.warning(f"server reported: {message}")

        if isinstance(command, GetSchema) and output.format != OutputFormat.JSON:
            found, schema = schema_text(data)
            if found:
                output.print_data(schema or "no schema")
                output.success(f"{command.kind}: success")
                return

        rows = health_rows(data) if isinstance(command, GetHealth) else None
        if rows is not None and output.format != OutputFormat.JSON:
            if output.format == OutputFormat.PLAIN:
                for address, status, uptime in rows:
                    output.print_data(f"{address} is {status}, uptime: {uptime}")
            else:
                output.print_table(["Address", "Status", "Uptime"], rows, title="Cluster health")
        elif data is not None:
            output.format_response(data)
        output.success(f"{command.kind}: success")
        return

    if isinstance(outcome, ApplicationError):
        output.error(f"HTTP {outcome.status_code}")
        if outcome.body:
            output.raw_error(outcome.body.decode("utf-8", errors="replace"))
        return

    if isinstance(outcome, TransportError):
        output.error(outcome.cause)
        if isinstance(command, DESTRUCTIVE_COMMANDS):
            output.warning(
                f"{command.kind} outcome is unknown: the request may have reached the server"
            )
