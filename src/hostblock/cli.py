from __future__ import annotations

import sys
import logging
from pathlib import Path
from typing import Tuple

import click

from .config import ELEVATE_MODES, HostblockConfig
from .editor import RemoveRequest, UpsertRequest
from .exceptions import HostblockError, format_error_message
from .log_config import setup_logging
from .runner import HostsRunner
from .cli_helpers.display import (
    display_entries,
    display_error,
    display_info,
    display_preview,
    display_success,
)

__all__ = ["cli"]

logger = logging.getLogger("hostblock")


def _runner(ctx: click.Context) -> HostsRunner:
    return HostsRunner(ctx.obj["config"])


def _fail(error: Exception) -> None:
    display_error(format_error_message(error))
    sys.exit(1)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--hosts-file",
    "-f",
    type=click.Path(file_okay=True, dir_okay=False, path_type=Path),
    default=None,
    help="Hosts file to edit. Defaults to the platform hosts file "
    "(/etc/hosts, or %SystemRoot%\\System32\\drivers\\etc\\hosts on Windows).",
)
@click.option(
    "--env-file",
    "-e",
    type=click.Path(file_okay=True, dir_okay=False),
    default=".env.hostblock",
    help="Optional dotenv file with HOSTBLOCK_* settings.",
)
@click.option(
    "--elevate",
    type=click.Choice(ELEVATE_MODES),
    default=None,
    help="When to re-run through sudo/RunAs: on permission errors (auto), always or never.",
)
@click.option("--begin-marker", default=None, help="Line that opens the managed section.")
@click.option("--end-marker", default=None, help="Line that closes the managed section.")
@click.option("--encoding", default=None, help="Single-byte encoding of the hosts file (default: ascii).")
@click.option(
    "--backup/--no-backup",
    default=None,
    help="Keep a copy of the previous file as <hosts>.bak (default: on).",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging output.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    hosts_file: Path | None,
    env_file: str,
    elevate: str | None,
    begin_marker: str | None,
    end_marker: str | None,
    encoding: str | None,
    backup: bool | None,
    verbose: bool,
) -> None:
    """hostblock – keep one managed block of address/name entries in a hosts file."""
    ctx.ensure_object(dict)
    try:
        config = HostblockConfig.load(
            env_file,
            hosts_file=hosts_file,
            elevate=elevate,
            begin_marker=begin_marker,
            end_marker=end_marker,
            encoding=encoding,
            backup=backup,
        )
    except HostblockError as e:
        _fail(e)
        return

    setup_logging(verbose, config.log_file)
    logger.debug(f"🚀 hostblock started - hosts_file: {config.hosts_file}, elevate: {config.elevate}")
    ctx.obj["config"] = config


@cli.command()
@click.argument("address")
@click.argument("names", nargs=-1, required=True)
@click.option("--dry-run", is_flag=True, help="Print the resulting file instead of writing it.")
@click.pass_context
def upsert(ctx: click.Context, address: str, names: Tuple[str, ...], dry_run: bool) -> None:
    """Map ADDRESS to NAMES, replacing any previous entry for the same names."""
    key = " ".join(names)
    runner = _runner(ctx)
    try:
        request = UpsertRequest(value=address, key=key)
        if dry_run:
            display_preview(runner.preview(request))
            return
        changed = runner.apply(request)
    except ValueError as e:
        raise click.UsageError(str(e)) from e
    except HostblockError as e:
        _fail(e)
        return

    if changed:
        display_success(f"{request.value} {request.key} registered in {runner.hosts_file.path}")
    else:
        display_info(f"Already up to date: {runner.hosts_file.path}")


@cli.command()
@click.argument("names", nargs=-1, required=True)
@click.option("--dry-run", is_flag=True, help="Print the resulting file instead of writing it.")
@click.pass_context
def remove(ctx: click.Context, names: Tuple[str, ...], dry_run: bool) -> None:
    """Remove the entry registered for NAMES."""
    key = " ".join(names)
    runner = _runner(ctx)
    try:
        request = RemoveRequest(key=key)
        if dry_run:
            display_preview(runner.preview(request))
            return
        changed = runner.apply(request)
    except ValueError as e:
        raise click.UsageError(str(e)) from e
    except HostblockError as e:
        _fail(e)
        return

    if changed:
        display_success(f"{request.key} removed from {runner.hosts_file.path}")
    else:
        display_info(f"No managed entries to change in {runner.hosts_file.path}")


@cli.command()
@click.pass_context
def show(ctx: click.Context) -> None:
    """List the entries in the managed section."""
    runner = _runner(ctx)
    try:
        entries = runner.entries()
    except HostblockError as e:
        _fail(e)
        return
    display_entries(entries, runner.hosts_file.path)
