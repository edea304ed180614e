# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
import re
from typing import Any, Dict, Optional

from typeguard import typechecked

_DECIMAL = re.compile(r"[+-]?[0-9]+")


def decimal_int(s: str) -> int:
    """Like `int`, but only accepts an optionally signed run of ASCII digits.

    >>> decimal_int("+12")
    12
    >>> decimal_int("1_0")
    Traceback (most recent call last):
    ...
    ValueError: Expected a decimal integer, but got '1_0'
    """
    if _DECIMAL.fullmatch(s) is None:
        raise ValueError(f"Expected a decimal integer, but got {s!r}")
    return int(s)


def non_negative_int(s: str) -> int:
    x = decimal_int(s)
    if x < 0:
        raise ValueError(f"Expected non-negative integer, but got {x}")
    return x


@typechecked
def ensure_dict(x: Any) -> Dict[str, Any]:
    return x


def maybe_int(x: Any) -> Optional[int]:
    try:
        return decimal_int(x)
    except (TypeError, ValueError):
        return None
