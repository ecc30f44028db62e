"""
Exceptions raised by daylog. The CLI catches DaylogError and prints it as a single
line, so messages should make sense on their own.
"""

from pathlib import Path
from typing import Optional


class DaylogError(Exception):
    pass


class ValidationError(DaylogError):
    """
    An Event field was given a value it can't hold
    """


class ArgumentError(DaylogError):
    """
    A command line option was missing or malformed
    """


class FormatError(DaylogError):
    """
    A record in the events file could not be parsed
    """

    def __init__(self, path: Path, line: int, reason: str) -> None:
        super().__init__(f"{path}, line {line}: {reason}")
        self.path = path
        self.line = line
        self.reason = reason


class StorageError(DaylogError):
    """
    Reading or writing the events file failed
    """

    def __init__(self, path: Path, cause: Optional[OSError] = None) -> None:
        msg = f"Unable to access {path}"
        if cause is not None and cause.strerror:
            msg += f": {cause.strerror}"
        super().__init__(msg)
        self.path = path
