# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
from typing import Callable, Dict

from mnt.mounts.errors import LineError
from mnt.mounts.parsing import (
    parse_file,
    parse_freq,
    parse_mntops_field,
    parse_passno,
    unescape_octals,
)
from mnt.schemas.mount import MountEntry
from mnt.schemas.search import (
    ByFile,
    ByFreq,
    ByMntops,
    ByPassno,
    BySpec,
    ByVfstype,
    Search,
)


def matches(entry: MountEntry, search: Search) -> bool:
    if isinstance(search, BySpec):
        return entry.spec == search.spec
    elif isinstance(search, ByFile):
        return entry.file == search.file
    elif isinstance(search, ByVfstype):
        return entry.vfstype == search.vfstype
    elif isinstance(search, ByFreq):
        return entry.freq == search.freq
    elif isinstance(search, ByPassno):
        return entry.passno == search.passno
    elif isinstance(search, ByMntops):
        # every requested option must be present, duplicates and order ignored
        return set(entry.mntops).issuperset(search.mntops)
    raise TypeError(f"Unknown search criterion: {search!r}")


_SEARCH_FIELDS: Dict[str, Callable[[str], Search]] = {
    "spec": lambda value: BySpec(unescape_octals(value)),
    "file": lambda value: ByFile(parse_file(value)),
    "vfstype": ByVfstype,
    "mntops": lambda value: ByMntops(parse_mntops_field(value)),
    "freq": lambda value: ByFreq(parse_freq(value)),
    "passno": lambda value: ByPassno(parse_passno(value)),
}


def parse_search(expression: str) -> Search:
    """Build a search criterion from a `<field>=<value>` expression.

    Values use the mount table syntax of the field, so `passno=0` looks for
    entries without a pass number.

    Examples:
    >>> parse_search("vfstype=tmpfs")
    ByVfstype(vfstype='tmpfs')
    >>> parse_search("mntops=rw,nosuid")
    ByMntops(mntops=(Write(enabled=True), Suid(enabled=False)))
    """
    name, sep, value = expression.partition("=")
    if not sep:
        raise ValueError(f"Expected <field>=<value>, but got {expression!r}")
    try:
        make_search = _SEARCH_FIELDS[name.strip()]
    except KeyError:
        raise ValueError(
            f"Unknown search field {name!r}. Valid fields: {list(_SEARCH_FIELDS)}"
        ) from None
    try:
        return make_search(value.strip())
    except LineError as e:
        raise ValueError(f"Bad value for {name!r}: {e}") from e
