# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
import json
from pathlib import Path
from typing import List, Sequence

import pytest
from click.testing import CliRunner, Result

from mnt.cli.mnt import CliObject, main
from mnt.mounts.source import StaticMounts
from mnt.tests.fakes import DATA_DIR, read_lines
from typeguard import typechecked

SAMPLE = str(DATA_DIR / "sample-proc-mounts.txt")
BIND = str(DATA_DIR / "sample-bind-mounts.txt")
BAD = str(DATA_DIR / "sample-bad-line.txt")


def invoke(args: Sequence[str]) -> Result:
    runner = CliRunner()
    return runner.invoke(main, ["--config", "/dev/null", *args], catch_exceptions=False)


@pytest.mark.parametrize("command", main.commands.keys())
def test_help(command: str) -> None:
    result = invoke([command, "--help"])
    assert result.exit_code == 0
    assert result.stdout.strip() != ""


@pytest.mark.parametrize(
    "args, expected",
    [
        (["list"], read_lines("sample-proc-mounts.txt")),
        (
            ["list", "/sys"],
            [
                "sysfs /sys sysfs rw,nosuid,nodev,noexec,relatime 0 0",
                "tmpfs /sys/fs/cgroup tmpfs ro,nosuid,nodev,noexec,mode=755 0 0",
            ],
        ),
        (
            ["search", "--where", "vfstype=tmpfs"],
            [
                "tmpfs /sys/fs/cgroup tmpfs ro,nosuid,nodev,noexec,mode=755 0 0",
                "tmpfs /run tmpfs rw,nosuid,relatime,size=809928k,mode=755 0 0",
            ],
        ),
        (
            ["search", "--where", "vfstype=tmpfs", "--where", "mntops=rw"],
            ["tmpfs /run tmpfs rw,nosuid,relatime,size=809928k,mode=755 0 0"],
        ),
        (
            ["search", "--where", "mntops=nodev,rw", "--limit", "1"],
            ["sysfs /sys sysfs rw,nosuid,nodev,noexec,relatime 0 0"],
        ),
        (
            ["mount", "/var/tmp/bar"],
            ["/dev/mapper/foo-tmp /var/tmp ext4 rw,relatime,data=ordered 0 0"],
        ),
        (["mount", "/var/"], ["rootfs / rootfs rw 0 0"]),
        (
            ["mount", "--writable", "/sys/fs/cgroup/cpu"],
            ["No mount point for /sys/fs/cgroup/cpu"],
        ),
        (
            ["at", "/run"],
            ["tmpfs /run tmpfs rw,nosuid,relatime,size=809928k,mode=755 0 0"],
        ),
    ],
)
@typechecked
def test_commands(args: Sequence[str], expected: List[str]) -> None:
    result = invoke(["--mounts-file", SAMPLE, *args])
    assert result.exit_code == 0
    assert result.stdout.splitlines() == expected


def test_list_no_overlaps() -> None:
    result = invoke(["--mounts-file", BIND, "list", "--no-overlaps"])
    assert result.exit_code == 0
    assert [line.split()[1] for line in result.stdout.splitlines()] == [
        "/proc",
        "/boot",
        "/home",
        "/home/user",
    ]

    result = invoke(
        ["--mounts-file", BIND, "list", "--no-overlaps", "--exclude", "/home/user"]
    )
    assert "/home/user/cache" in result.stdout


def test_json_output() -> None:
    result = invoke(["--mounts-file", BIND, "mount", "--json", "/boot/grub"])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == [
        {
            "spec": "/dev/sda1",
            "file": "/boot",
            "vfstype": "ext2",
            "mntops": ["rw", "relatime"],
            "freq": 0,
            "passno": 2,
        }
    ]


def test_at_missing() -> None:
    result = invoke(["--mounts-file", SAMPLE, "at", "/var"])
    assert result.exit_code == 1
    assert "Nothing is mounted at /var" in result.stderr


@pytest.mark.parametrize(
    "args",
    [
        ["list"],
        ["at", "/"],
        ["search", "--where", "spec=tmpfs"],
    ],
)
def test_parse_errors_exit_with_failure(args: List[str]) -> None:
    result = invoke(["--mounts-file", BAD, *args])
    assert result.exit_code == 1
    assert "Failed at line 3" in result.stderr


def test_mount_ignores_parse_errors() -> None:
    result = invoke(["--mounts-file", BAD, "mount", "/run"])
    assert result.exit_code == 0
    assert result.stdout == "No mount point for /run\n"


def test_missing_mounts_file(tmp_path: Path) -> None:
    result = invoke(["--mounts-file", str(tmp_path / "nope"), "list"])
    assert result.exit_code == 1
    assert "Failed to read the mounts file" in result.stderr


def test_injected_source() -> None:
    runner = CliRunner()
    obj = CliObject(source=StaticMounts(["rootfs / rootfs ro 0 0"]))
    result = runner.invoke(
        main, ["--config", "/dev/null", "mount", "--writable", "/"], obj=obj
    )
    assert result.exit_code == 0
    assert result.stdout == "No mount point for /\n"


def test_config_file(tmp_path: Path) -> None:
    config = tmp_path / "config.toml"
    config.write_text(f'[mnt]\nmounts_file = "{BIND}"\n\n[mnt.list]\nno_overlaps = true\n')
    runner = CliRunner()
    result = runner.invoke(main, ["--config", str(config), "list"])
    assert result.exit_code == 0
    assert len(result.stdout.splitlines()) == 4


def test_log_file(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "mnt.log"
    result = invoke(
        [
            "--mounts-file",
            SAMPLE,
            "--log-level",
            "INFO",
            "--log-file",
            str(log_file),
            "list",
        ]
    )
    assert result.exit_code == 0
    assert "Found 6 mounts under /" in log_file.read_text()
