# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
from typing import Optional, Union


class LineError(ValueError):
    """A single mount table line is malformed.

    There is exactly one subclass per field and failure mode. Subclasses which
    reject a value keep the raw text in `token`.
    """

    description = "Malformed line"

    def __init__(self, token: Optional[str] = None) -> None:
        self.token = token
        if token is None:
            detail = self.description
        else:
            detail = f"{self.description}: {token}"
        super().__init__(f"Line parsing: {detail}")


class MissingSpec(LineError):
    description = "Missing field #1 (spec)"


class MissingFile(LineError):
    description = "Missing field #2 (file)"


class InvalidFilePath(LineError):
    description = "Bad field #2 (file) value (not absolute path)"

    def __init__(self, token: str) -> None:
        super().__init__(token)


class InvalidFile(LineError):
    description = "Bad field #2 (file) value"

    def __init__(self, token: str) -> None:
        super().__init__(token)


class MissingVfstype(LineError):
    description = "Missing field #3 (vfstype)"


class MissingMntops(LineError):
    description = "Missing field #4 (mntops)"


class MissingFreq(LineError):
    description = "Missing field #5 (freq)"


class InvalidFreq(LineError):
    description = "Bad field #5 (dump) value"

    def __init__(self, token: str) -> None:
        super().__init__(token)


class MissingPassno(LineError):
    description = "Missing field #6 (passno)"


class InvalidPassno(LineError):
    description = "Bad field #6 (passno) value"

    def __init__(self, token: str) -> None:
        super().__init__(token)


ReadError = Union[OSError, UnicodeDecodeError]


class ParseError(Exception):
    """Reading the mount table failed.

    Either a line could not be parsed (`line_number` and `line` are set) or the
    line source itself failed. The underlying error is kept in `error`.
    """

    def __init__(
        self,
        error: Union[LineError, ReadError],
        line_number: Optional[int] = None,
        line: Optional[str] = None,
    ) -> None:
        self.error = error
        self.line_number = line_number
        self.line = line
        if isinstance(error, LineError):
            message = f"Failed at line {line_number} ({line!r}): {error}"
        else:
            message = f"Failed to read the mounts file: {error}"
        super().__init__(f"Mount parsing: {message}")

    @property
    def is_read_error(self) -> bool:
        return not isinstance(self.error, LineError)
