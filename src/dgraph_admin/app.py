"""Typer application and CLI entry point for dgraph-admin.

The root callback collects the global options (target URL, auth header,
timeout, output flags); each sub-command builds its
:data:`~dgraph_admin.models.Command` and hands it to :func:`_execute`, which
resolves the configuration, resolves the request, sends it once and renders
the outcome. Exit codes come from :mod:`dgraph_admin.exit_codes`.

:func:`main` is the console-script entry point declared in ``pyproject.toml``.
"""

from __future__ import annotations

import signal
import sys
from pathlib import Path
from typing import Any, Optional

import typer

from dgraph_admin import __version__
from dgraph_admin.client import RequestExecutor, render_outcome
from dgraph_admin.config import resolve_endpoint_config
from dgraph_admin.exceptions import DgraphAdminError, InvalidUsageError, outcome_to_error
from dgraph_admin.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INTERRUPTED
from dgraph_admin.models import Command, DropAll, DropData, GetHealth, GetSchema, UpdateSchema
from dgraph_admin.output import OutputFormat, OutputManager, debug, error, set_output
from dgraph_admin.resolver import resolve

app = typer.Typer(
    name="dgraph-admin",
    help="dgraph-admin is a simple tool for managing Dgraph.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"dgraph-admin {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    url: Optional[str] = typer.Option(
        None, "--url", help="Dgraph URL (env DGRAPH_ADMIN_URL, default localhost:8080)."
    ),
    auth: Optional[str] = typer.Option(
        None,
        "--auth",
        help="Auth header to include with the request, as 'Name:Value' (env DGRAPH_ADMIN_AUTH).",
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Request timeout in seconds (env DGRAPH_ADMIN_TIMEOUT, default 30)."
    ),
    insecure: bool = typer.Option(
        False, "--insecure", help="Skip TLS certificate verification."
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Print the request instead of sending it."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~dgraph_admin.output.OutputManager` and
    stores the raw connection options in ``ctx.obj``. The options are
    validated in :func:`_execute`, so ``--help`` works with a bad ``--url``.
    """
    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))

    ctx.ensure_object(dict)
    ctx.obj["url"] = url
    ctx.obj["auth"] = auth
    ctx.obj["timeout"] = timeout
    ctx.obj["insecure"] = insecure
    ctx.obj["dry_run"] = dry_run


def _execute(ctx: typer.Context, command: Command) -> None:
    """Resolve and send *command*, render the outcome, and exit non-zero on failure."""
    opts = ctx.obj
    try:
        config = resolve_endpoint_config(
            url=opts["url"],
            auth=opts["auth"],
            timeout=opts["timeout"],
            insecure=opts["insecure"],
        )
        descriptor = resolve(command, config)
    except DgraphAdminError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    debug(f"Target: {config.base_url} (timeout {config.request.timeout:g}s)")
    if config.auth_header is not None:
        debug(f"Auth: {config.auth_header.masked()}")

    with RequestExecutor(config, dry_run=opts["dry_run"]) as executor:
        outcome = executor.execute(descriptor)

    render_outcome(command, outcome)

    failure = outcome_to_error(outcome)
    if failure is not None:
        raise typer.Exit(code=failure.exit_code)


def _read_schema(file: Optional[str]) -> str:
    """Read schema text from *file*, or from stdin when *file* is omitted or ``-``."""
    if file is None or file == "-":
        if sys.stdin.isatty():
            raise InvalidUsageError("No schema given: pass a file or pipe the schema to stdin")
        return sys.stdin.read()
    path = Path(file).expanduser()
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InvalidUsageError(f"Cannot read schema file {path}: {exc}") from exc


def _confirm_drop(ctx: typer.Context, what: str, yes: bool) -> None:
    """Ask before a destructive drop when running interactively."""
    if yes or ctx.obj["dry_run"] or not sys.stdin.isatty():
        return
    typer.confirm(f"This will drop {what}. Continue?", abort=True)


@app.command("update-schema")
def update_schema(
    ctx: typer.Context,
    file: Optional[str] = typer.Argument(
        None, help="Schema file to apply; reads stdin when omitted or '-'."
    ),
) -> None:
    """Add or modify schema."""
    try:
        payload = _read_schema(file)
    except DgraphAdminError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    _execute(ctx, UpdateSchema(payload=payload))


@app.command("get-schema")
def get_schema(ctx: typer.Context) -> None:
    """Get the current schema."""
    _execute(ctx, GetSchema())


@app.command("drop-all")
def drop_all(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
) -> None:
    """Drop all data and schema."""
    _confirm_drop(ctx, "all data and the schema", yes)
    _execute(ctx, DropAll())


@app.command("drop-data")
def drop_data(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
) -> None:
    """Drop all data only (keep schema)."""
    _confirm_drop(ctx, "all data", yes)
    _execute(ctx, DropData())


@app.command("get-health")
def get_health(ctx: typer.Context) -> None:
    """Get status of nodes."""
    _execute(ctx, GetHealth())


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``dgraph-admin`` console script.

    :class:`~dgraph_admin.exceptions.DgraphAdminError` instances that escape
    a command exit with the error's ``exit_code``; any other exception is
    reported and exits with :data:`EXIT_GENERIC_FAILURE`.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)
    except DgraphAdminError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception as exc:
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
