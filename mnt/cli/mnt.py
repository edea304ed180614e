# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
"""Inspect the mount table from the command line."""
import json
import logging
from dataclasses import dataclass
from itertools import islice
from pathlib import Path
from typing import Any, Collection, Dict, Iterable, Optional

import click

from mnt._version import __version__
from mnt.click import (
    json_option,
    log_file_option,
    log_level_option,
    mounts_file_option,
    SearchExpression,
    toml_config_option,
)
from mnt.mounts import query
from mnt.mounts.errors import ParseError
from mnt.mounts.overlaps import remove_overlaps
from mnt.mounts.parsing import format_mount_entry
from mnt.mounts.search import matches
from mnt.mounts.source import MountSource, ProcMounts
from mnt.schemas.mount import format_mntops, MountEntry
from mnt.schemas.search import Search
from mnt.utils.log import init_logger, LogLevel
from typeguard import typechecked

LOGGER_NAME = "mnt"
logger = logging.getLogger(LOGGER_NAME)


@dataclass
class CliObject:
    source: MountSource


def as_dict(entry: MountEntry) -> Dict[str, Any]:
    return {
        "spec": entry.spec,
        "file": str(entry.file),
        "vfstype": entry.vfstype,
        "mntops": [format_mntops(op) for op in entry.mntops],
        "freq": int(entry.freq),
        "passno": entry.passno,
    }


def echo_entries(entries: Iterable[MountEntry], as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps([as_dict(entry) for entry in entries]))
        return
    for entry in entries:
        click.echo(format_mount_entry(entry))


@click.group(epilog=f"mnt version: {__version__}")
@toml_config_option("mnt")
@mounts_file_option
@log_level_option
@log_file_option
@click.version_option(__version__)
@click.pass_context
@typechecked
def main(
    ctx: click.Context,
    mounts_file: Path,
    log_level: LogLevel,
    log_file: Optional[str],
) -> None:
    """Query the mount table (/proc/mounts by default)."""
    _, handler = init_logger(LOGGER_NAME, log_level=log_level, log_file=log_file)

    @ctx.call_on_close
    def close_handler() -> None:
        logger.removeHandler(handler)
        handler.close()

    if ctx.obj is None:
        ctx.obj = CliObject(source=ProcMounts(mounts_file))


@main.command(name="list")
@click.argument("root", type=click.Path(path_type=Path), default="/")
@click.option(
    "--no-overlaps",
    is_flag=True,
    default=False,
    help="Hide mounts shadowed by a later mount at the same path or above.",
)
@click.option(
    "--exclude",
    "exclude_files",
    multiple=True,
    type=click.Path(path_type=Path),
    help="Mount point which never shadows another mount. Repeatable.",
)
@json_option
@click.pass_obj
@typechecked
def list_mounts(
    obj: CliObject,
    root: Path,
    no_overlaps: bool,
    exclude_files: Collection[Path],
    as_json: bool,
) -> None:
    """List the mounts at ROOT and below, in mount order."""
    try:
        mounts = query.get_submounts_under(root, source=obj.source)
    except ParseError as e:
        raise click.ClickException(str(e)) from e
    logger.info(f"Found {len(mounts)} mounts under {root}")
    if no_overlaps:
        mounts = remove_overlaps(mounts, exclude_files)
    echo_entries(mounts, as_json)


@main.command(name="mount")
@click.argument("path", type=click.Path(path_type=Path))
@click.option(
    "--writable",
    is_flag=True,
    default=False,
    help="Only report the mount if it is mounted read-write.",
)
@json_option
@click.pass_obj
@typechecked
def mount(obj: CliObject, path: Path, writable: bool, as_json: bool) -> None:
    """Show the mount providing PATH. PATH does not need to exist."""
    found = query.get_mount_providing(
        path, require_writable=writable, source=obj.source
    )
    if found is None:
        click.echo(f"No mount point for {path}")
        return
    echo_entries([found], as_json)


@main.command(name="at")
@click.argument("path", type=click.Path(path_type=Path))
@json_option
@click.pass_obj
@typechecked
def mount_at(obj: CliObject, path: Path, as_json: bool) -> None:
    """Show the most recent mount made exactly at PATH."""
    try:
        found = query.get_mount_at(path, source=obj.source)
    except ParseError as e:
        raise click.ClickException(str(e)) from e
    if found is None:
        raise click.ClickException(f"Nothing is mounted at {path}")
    echo_entries([found], as_json)


@main.command(name="search")
@click.option(
    "--where",
    "criteria",
    multiple=True,
    required=True,
    type=SearchExpression(),
    help=(
        "Search criterion <field>=<value>, with field one of spec, file, vfstype, "
        "mntops, freq, passno. Repeat to require several, e.g. "
        "--where vfstype=tmpfs --where mntops=nosuid,nodev"
    ),
)
@click.option(
    "--limit",
    type=click.IntRange(min=1),
    default=None,
    help="Stop after this many matches.",
)
@json_option
@click.pass_obj
@typechecked
def search(
    obj: CliObject,
    criteria: Collection[Search],
    limit: Optional[int],
    as_json: bool,
) -> None:
    """Print the mounts matching every criterion, in mount order."""
    first, *rest = criteria
    found = (
        entry
        for entry in query.search(first, source=obj.source)
        if all(matches(entry, criterion) for criterion in rest)
    )
    try:
        echo_entries(islice(found, limit), as_json)
    except ParseError as e:
        raise click.ClickException(str(e)) from e


if __name__ == "__main__":
    main()
