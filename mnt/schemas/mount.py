# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
"""Records for one line of the mount table.

See https://man7.org/linux/man-pages/man5/fstab.5.html for the field layout
shared by /proc/mounts and /etc/mtab.
"""
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union


class DumpField(IntEnum):
    IGNORE = 0
    BACKUP = 1


@dataclass(frozen=True)
class Atime:
    enabled: bool


@dataclass(frozen=True)
class DirAtime:
    enabled: bool


@dataclass(frozen=True)
class RelAtime:
    enabled: bool


@dataclass(frozen=True)
class Dev:
    enabled: bool


@dataclass(frozen=True)
class Exec:
    enabled: bool


@dataclass(frozen=True)
class Suid:
    enabled: bool


@dataclass(frozen=True)
class Write:
    enabled: bool


@dataclass(frozen=True)
class Extra:
    """Any option without a dedicated toggle, e.g. `size=10240k`."""

    option: str


MntOps = Union[Atime, DirAtime, RelAtime, Dev, Exec, Suid, Write, Extra]

_TOGGLES: Dict[str, MntOps] = {
    "atime": Atime(True),
    "noatime": Atime(False),
    "diratime": DirAtime(True),
    "nodiratime": DirAtime(False),
    "relatime": RelAtime(True),
    "norelatime": RelAtime(False),
    "dev": Dev(True),
    "nodev": Dev(False),
    "exec": Exec(True),
    "noexec": Exec(False),
    "suid": Suid(True),
    "nosuid": Suid(False),
    "rw": Write(True),
    "ro": Write(False),
}
_TOKENS: Dict[MntOps, str] = {op: token for token, op in _TOGGLES.items()}


def parse_mntops(token: str) -> MntOps:
    """Map a single mount option to its toggle. Never fails.

    Examples:
    >>> parse_mntops("noexec")
    Exec(enabled=False)
    >>> parse_mntops("size=10240k")
    Extra(option='size=10240k')
    """
    return _TOGGLES.get(token, Extra(token))


def format_mntops(op: MntOps) -> str:
    """Inverse of `parse_mntops`.

    >>> format_mntops(Write(False))
    'ro'
    """
    if isinstance(op, Extra):
        return op.option
    return _TOKENS[op]


@dataclass(frozen=True)
class MountEntry:
    """One parsed line of the mount table.

    Equality compares every field; ordering only looks at `file`, so
    `sorted(entries)` lists mounts by mount point.
    """

    spec: str
    file: Path
    vfstype: str
    mntops: Tuple[MntOps, ...]
    freq: DumpField
    passno: Optional[int]

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, MountEntry):
            return NotImplemented
        return self.file < other.file

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, MountEntry):
            return NotImplemented
        return self.file <= other.file

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, MountEntry):
            return NotImplemented
        return self.file > other.file

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, MountEntry):
            return NotImplemented
        return self.file >= other.file
