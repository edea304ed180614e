# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
from pathlib import Path

import pytest

from mnt.mounts.source import ProcMounts, StaticMounts
from mnt.tests.fakes import DATA_DIR, read_lines


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture
def proc_mounts() -> StaticMounts:
    return StaticMounts(read_lines("sample-proc-mounts.txt"))


@pytest.fixture
def bind_mounts() -> ProcMounts:
    return ProcMounts(DATA_DIR / "sample-bind-mounts.txt")


@pytest.fixture
def bad_mounts() -> ProcMounts:
    return ProcMounts(DATA_DIR / "sample-bad-line.txt")
