# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
"""Queries over the mount table.

Every function takes an optional `source`; by default the live table at
/proc/mounts is read. The table is reread on every call and nothing is cached.
"""
import logging
from pathlib import Path
from typing import List, Optional, Union

from mnt.mounts.errors import ParseError
from mnt.mounts.iterator import MountIter
from mnt.mounts.overlaps import is_ancestor_or_equal
from mnt.mounts.source import MountSource, ProcMounts
from mnt.schemas.mount import MountEntry, Write
from mnt.schemas.search import Search
from mnt.utils.error import log_error

logger = logging.getLogger(__name__)

StrPath = Union[str, Path]


def iter_mounts(source: Optional[MountSource] = None) -> MountIter:
    if source is None:
        source = ProcMounts()
    return MountIter(source.lines())


def get_mounts(source: Optional[MountSource] = None) -> List[MountEntry]:
    """All entries of the mount table, in table order.

    Raises:
        ParseError: If any line is malformed or the table can't be read.
    """
    return list(iter_mounts(source))


def get_mount_at(
    path: StrPath, source: Optional[MountSource] = None
) -> Optional[MountEntry]:
    """The most recent mount whose mount point is exactly `path`."""
    path = Path(path)
    found = None
    for mount in iter_mounts(source):
        if mount.file == path:
            found = mount
    return found


def get_submounts_under(
    root: StrPath, source: Optional[MountSource] = None
) -> List[MountEntry]:
    """Mounts at `root` or below it, in table order."""
    root = Path(root)
    return [
        mount for mount in iter_mounts(source) if is_ancestor_or_equal(root, mount.file)
    ]


@log_error(__name__, return_on_error=None, exceptions=(ParseError,))
def get_mount_providing(
    path: StrPath,
    require_writable: bool = False,
    source: Optional[MountSource] = None,
) -> Optional[MountEntry]:
    """The mount `path` resolves to, i.e. the one with the deepest mount point
    among `path` and its ancestors. The most recent one wins on equal depth.

    With `require_writable`, `None` is returned unless that mount is `rw`.
    `path` does not need to exist. An unreadable or malformed table yields
    `None` rather than an error.
    """
    path = Path(path)
    found: Optional[MountEntry] = None
    for mount in iter_mounts(source):
        if not is_ancestor_or_equal(mount.file, path):
            continue
        if found is None or len(mount.file.parts) >= len(found.file.parts):
            found = mount
    if found is None:
        return None
    if require_writable and Write(True) not in found.mntops:
        logger.debug(f"{found.file} provides {path} but is not writable")
        return None
    return found


def search(predicate: Search, source: Optional[MountSource] = None) -> MountIter:
    """Lazily iterate over the entries matching `predicate`.

    The table is read only as far as the caller consumes the iterator.
    """
    return iter_mounts(source).with_search(predicate)
