# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
"""Miscellaneous error-handling helpers."""

import logging
from functools import wraps
from typing import (
    Callable,
    Optional,
    overload,
    Tuple,
    Type,
    TypeVar,
    Union,
)

from typing_extensions import ParamSpec

_T = TypeVar("_T")
_Tr_co = TypeVar("_Tr_co", covariant=True)
_P = ParamSpec("_P")


@overload
def log_error(
    logger_name: str,
) -> Callable[[Callable[_P, _Tr_co]], Callable[_P, Optional[_Tr_co]]]: ...


@overload
def log_error(
    logger_name: str,
    return_on_error: _T = ...,
    exceptions: Tuple[Type[BaseException], ...] = ...,
) -> Callable[[Callable[_P, _Tr_co]], Callable[_P, Union[None, _T, _Tr_co]]]: ...


def log_error(
    logger_name: str,
    return_on_error: Optional[_T] = None,
    exceptions: Tuple[Type[BaseException], ...] = (Exception,),
) -> Callable[[Callable[_P, _Tr_co]], Callable[_P, Union[None, _T, _Tr_co]]]:
    """Decorator which writes `exceptions` to the given logger and returns
    `return_on_error` instead. Other exceptions propagate.
    """

    def decorator(f: Callable[_P, _Tr_co]) -> Callable[_P, Union[None, _T, _Tr_co]]:
        @wraps(f)
        def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> Union[None, _T, _Tr_co]:
            try:
                return f(*args, **kwargs)
            except exceptions as e:
                logging.getLogger(logger_name).warning(
                    f"{f.__name__} failed, returning {return_on_error!r}: {e}"
                )
                return return_on_error

        return wrapper

    return decorator
