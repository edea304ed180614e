# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
from typing import Iterable, Iterator, Optional, Tuple

from mnt.mounts.errors import LineError, ParseError
from mnt.mounts.parsing import parse_mount_entry
from mnt.mounts.search import matches
from mnt.schemas.mount import MountEntry
from mnt.schemas.search import Search


class MountIter(Iterator[MountEntry]):
    """Lazily parse a mount table, one line per `next()`.

    `lines` may be any iterable of text lines: an open file, a list of strings,
    a generator. Lines are numbered from 1 for diagnostics.

    A malformed line raises `ParseError`; the iterator stays usable and the next
    call continues with the following line. A failure of the line source itself
    (`OSError`, or `UnicodeDecodeError` while decoding) raises `ParseError` and
    ends the iteration.

    If `search` is given, parsed entries which do not match are skipped. Errors
    are never skipped.
    """

    def __init__(self, lines: Iterable[str], search: Optional[Search] = None):
        self._lines: Iterator[Tuple[int, str]] = enumerate(lines, start=1)
        self._search = search
        self._done = False

    @property
    def search(self) -> Optional[Search]:
        return self._search

    def with_search(self, search: Search) -> "MountIter":
        """Continue from the current position, yielding only `search` matches."""
        it = MountIter((), search)
        it._lines = self._lines
        it._done = self._done
        self._done = True
        return it

    def __iter__(self) -> "MountIter":
        return self

    def __next__(self) -> MountEntry:
        while not self._done:
            try:
                item = next(self._lines, None)
            except (OSError, UnicodeDecodeError) as e:
                self._done = True
                raise ParseError(e) from e
            if item is None:
                self._done = True
                break

            line_number, line = item
            try:
                entry = parse_mount_entry(line)
            except LineError as e:
                raise ParseError(e, line_number, line.strip()) from e

            if self._search is None or matches(entry, self._search):
                return entry
        raise StopIteration
