# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
from pathlib import Path
from typing import Collection, Iterable, List, Sequence, Union

from mnt.schemas.mount import MountEntry

# Bind mounts show up as extra entries at the root. They shadow everything and
# tell nothing about the path they come from.
_ROOT = Path("/")


def is_ancestor_or_equal(ancestor: Path, path: Path) -> bool:
    return path == ancestor or ancestor in path.parents


def remove_overlaps(
    mounts: Iterable[MountEntry],
    exclude_files: Collection[Union[str, Path]] = (),
) -> List[MountEntry]:
    """Drop the mounts hidden by a later mount at the same path or above it.

    `mounts` must be in mount table order, i.e. the order in which the mounts
    were made. The table is walked from the most recent mount backwards and an
    entry is dropped if an already kept (more recent) entry sits at its path or
    at one of its ancestors. Mounts at `exclude_files` never hide anything.
    Entries at `/` are always dropped. The kept entries are returned in table
    order, and running this again on the result is a no-op.

    Known limitation: a moved mount (`mount --move`) keeps its position in the
    table, so a mount made before the move but shadowed by it afterwards is not
    detected as such.
    """
    excluded = {Path(p) for p in exclude_files}
    kept: List[MountEntry] = []
    for mount in reversed(_as_sequence(mounts)):
        if mount.file == _ROOT:
            continue
        if any(
            is_ancestor_or_equal(newer.file, mount.file)
            for newer in kept
            if newer.file not in excluded
        ):
            continue
        kept.append(mount)
    kept.reverse()
    return kept


def _as_sequence(mounts: Iterable[MountEntry]) -> Sequence[MountEntry]:
    if isinstance(mounts, Sequence):
        return mounts
    return list(mounts)
