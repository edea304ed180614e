# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
"""Parse and format lines of the mount table (/proc/mounts, /etc/mtab).

Each line holds six whitespace separated fields:

    <spec> <file> <vfstype> <mntops> <freq> <passno>

Fields are separated by runs of spaces or tabs. Any token past the sixth is
ignored. The kernel escapes space, tab, newline and backslash in `spec` and
`file` as three digit octal sequences (e.g. `\\040`), which are decoded here.
"""
import re
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from mnt.mounts.errors import (
    InvalidFile,
    InvalidFilePath,
    InvalidFreq,
    InvalidPassno,
    MissingFile,
    MissingFreq,
    MissingMntops,
    MissingPassno,
    MissingSpec,
    MissingVfstype,
)
from mnt.schemas.mount import (
    DumpField,
    format_mntops,
    MntOps,
    MountEntry,
    parse_mntops,
)
from mnt.utils.coerce import maybe_int, non_negative_int

_SEPARATORS = re.compile(r"[ \t]+")
_OCTAL_ESCAPE = re.compile(r"\\([0-3][0-7]{2})")
_ESCAPED_CHARS = {" ": "\\040", "\t": "\\011", "\n": "\\012", "\\": "\\134"}


def unescape_octals(s: str) -> str:
    r"""
    >>> unescape_octals(r"/tmp/x\040b")
    '/tmp/x b'
    """
    return _OCTAL_ESCAPE.sub(lambda m: chr(int(m.group(1), 8)), s)


def escape_octals(s: str) -> str:
    return "".join(_ESCAPED_CHARS.get(c, c) for c in s)


def tokenize(line: str) -> List[str]:
    return [token for token in _SEPARATORS.split(line.strip()) if token]


def parse_file(token: str) -> Path:
    decoded = unescape_octals(token)
    if "\0" in decoded:
        raise InvalidFile(token)
    path = Path(decoded)
    if not path.is_absolute():
        raise InvalidFilePath(token)
    return path


def parse_mntops_field(token: str) -> Tuple[MntOps, ...]:
    return tuple(parse_mntops(option) for option in token.split(",") if option)


def parse_freq(token: str) -> DumpField:
    value = maybe_int(token)
    if value == 0:
        return DumpField.IGNORE
    elif value == 1:
        return DumpField.BACKUP
    raise InvalidFreq(token)


def parse_passno(token: str) -> Optional[int]:
    try:
        value = non_negative_int(token)
    except ValueError:
        raise InvalidPassno(token) from None
    return value or None


def parse_mount_entry(line: str) -> MountEntry:
    """Parse one line of the mount table.

    Fields are checked left to right and the first failure is raised, so a line
    with a single token reports `MissingFile` and nothing about later fields.

    Raises:
        LineError: One subclass per missing or invalid field.

    Examples:
    >>> parse_mount_entry("rootfs / rootfs noexec,rw 0 0").mntops
    (Exec(enabled=False), Write(enabled=True))
    """
    tokens: Iterator[str] = iter(tokenize(line))

    spec = next(tokens, None)
    if spec is None:
        raise MissingSpec()

    file = next(tokens, None)
    if file is None:
        raise MissingFile()
    path = parse_file(file)

    vfstype = next(tokens, None)
    if vfstype is None:
        raise MissingVfstype()

    mntops = next(tokens, None)
    if mntops is None:
        raise MissingMntops()

    freq = next(tokens, None)
    if freq is None:
        raise MissingFreq()
    dump = parse_freq(freq)

    passno = next(tokens, None)
    if passno is None:
        raise MissingPassno()

    return MountEntry(
        spec=unescape_octals(spec),
        file=path,
        vfstype=vfstype,
        mntops=parse_mntops_field(mntops),
        freq=dump,
        passno=parse_passno(passno),
    )


def format_mount_entry(entry: MountEntry) -> str:
    """Render `entry` back into a mount table line.

    >>> format_mount_entry(parse_mount_entry("rootfs   / rootfs rw, 0 0"))
    'rootfs / rootfs rw 0 0'
    """
    return " ".join(
        [
            escape_octals(entry.spec),
            escape_octals(str(entry.file)),
            entry.vfstype,
            ",".join(format_mntops(op) for op in entry.mntops),
            str(int(entry.freq)),
            str(entry.passno or 0),
        ]
    )
