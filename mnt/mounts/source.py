# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
import logging
from pathlib import Path
from typing import Iterable, Protocol, Sequence, Union

logger = logging.getLogger(__name__)

PROC_MOUNTS = "/proc/mounts"


class MountSource(Protocol):
    """Something which can be read as a mount table, any number of times."""

    def lines(self) -> Iterable[str]:
        """Return a fresh iterable over the lines of the mount table."""


class ProcMounts(MountSource):
    """A mount table file, reopened on each call to `lines`.

    The file is opened lazily, so a missing file surfaces while iterating.
    """

    def __init__(self, path: Union[str, Path] = PROC_MOUNTS):
        self.path = Path(path)

    def lines(self) -> Iterable[str]:
        logger.debug(f"Reading mount table from {self.path}")
        with self.path.open("r", encoding="utf-8") as f:
            yield from f

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.path)!r})"


class StaticMounts(MountSource):
    """An in-memory mount table, e.g. a snapshot taken earlier."""

    def __init__(self, lines: Union[str, Sequence[str]]):
        if isinstance(lines, str):
            lines = lines.splitlines()
        self._lines = lines

    def lines(self) -> Iterable[str]:
        return iter(self._lines)
