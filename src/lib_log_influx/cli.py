"""Click command line interface for ad-hoc forwarding.

Purpose
-------
Let operators check their connection string and the exact point shape a log
call produces, either against a live InfluxDB (``send``) or printed locally
(``send --dry-run``).

Contents
--------
* :func:`cli` - root group with ``--traceback`` and ``--use-dotenv`` toggles.
* :func:`cli_info` / :func:`cli_send` - subcommands.
* :func:`main` - entry point delegating exit-code handling to
  :mod:`lib_cli_exit_tools`.
"""

from __future__ import annotations

import os
import socket
from typing import Any, Sequence

import click
import lib_cli_exit_tools

from . import __init__conf__
from . import config as log_config
from . import runtime
from .adapters.console.rich_console import RichConsoleSink
from .domain import ConfigurationError, LogLevel

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

_SENDABLE_LEVELS = ["trace", "debug", "info", "warn", "error"]


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(version=__init__conf__.version, prog_name=__init__conf__.shell_command, message="%(prog)s version %(version)s")
@click.option("--traceback/--no-traceback", is_flag=True, default=False, help="Show full Python traceback on errors")
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help=f"Load the nearest .env before running (default: ${log_config.DOTENV_ENV_VAR})",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool | None) -> None:
    """Forward structured log lines to InfluxDB."""

    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback
    if log_config.dotenv_requested(use_dotenv):
        log_config.enable_dotenv()
    if ctx.invoked_subcommand is None:
        click.echo(runtime.summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print package metadata."""

    click.echo(runtime.summary_info(), nl=False)


@cli.command("send", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("message", nargs=-1, required=True)
@click.option("--connection", envvar="LOG_INFLUX_CONNECTION", default=None, help="https://host:port?token=...&database=...")
@click.option("--app-name", default="lib_log_influx", show_default=True)
@click.option("--host", default=None, help="Host tag (default: this machine's hostname)")
@click.option("--proc-id", default=None, help="procid field (default: this process id)")
@click.option("--level", type=click.Choice(_SENDABLE_LEVELS, case_sensitive=False), default="info", show_default=True)
@click.option("--field", "fields", multiple=True, metavar="KEY=VALUE", help="Structured field; repeatable")
@click.option("--dry-run", is_flag=True, default=False, help="Print the point instead of writing it")
def cli_send(
    message: Sequence[str],
    connection: str | None,
    app_name: str,
    host: str | None,
    proc_id: str | None,
    level: str,
    fields: Sequence[str],
    dry_run: bool,
) -> None:
    """Write MESSAGE as a single point."""

    structured = _parse_fields(fields)
    failures: list[dict[str, Any]] = []

    def record_failure(name: str, payload: dict[str, Any]) -> None:
        if name == "sink_write_failed":
            failures.append(payload)

    sink_factory = (lambda _connection: RichConsoleSink()) if dry_run else None
    try:
        logger = runtime.init(
            connection=connection or ("dry-run://" if dry_run else None),
            app_name=app_name,
            host=host or socket.gethostname(),
            proc_id=proc_id or str(os.getpid()),
            diagnostic_hook=record_failure,
            sink_factory=sink_factory,
        )
    except ConfigurationError as exc:
        raise click.UsageError(str(exc)) from exc
    try:
        logger.with_fields(structured).log(LogLevel.from_name(level), " ".join(message))
    finally:
        runtime.shutdown()
    if failures:
        raise click.ClickException(f"sink rejected the point: {failures[0].get('exception', 'unknown error')}")
    if not dry_run:
        click.echo("sent")


def _parse_fields(pairs: Sequence[str]) -> dict[str, str]:
    """Split ``KEY=VALUE`` options into a dictionary.

    Examples
    --------
    >>> _parse_fields(["user=alice", "region=eu=west"])
    {'user': 'alice', 'region': 'eu=west'}
    """
    parsed: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {pair!r}", param_hint="--field")
        parsed[key] = value
    return parsed


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return its exit code, restoring traceback preferences afterwards."""

    previous_traceback = lib_cli_exit_tools.config.traceback
    previous_force_color = lib_cli_exit_tools.config.traceback_force_color
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        lib_cli_exit_tools.config.traceback = previous_traceback
        lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main"]
