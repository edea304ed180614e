# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from mnt.schemas.mount import DumpField, MntOps


@dataclass(frozen=True)
class BySpec:
    spec: str


@dataclass(frozen=True)
class ByFile:
    file: Path


@dataclass(frozen=True)
class ByVfstype:
    vfstype: str


@dataclass(frozen=True)
class ByFreq:
    freq: DumpField


@dataclass(frozen=True)
class ByPassno:
    passno: Optional[int]


@dataclass(frozen=True)
class ByMntops:
    """Matches entries having at least all of `mntops`, in any order."""

    mntops: Tuple[MntOps, ...]


Search = Union[BySpec, ByFile, ByVfstype, ByFreq, ByPassno, ByMntops]
