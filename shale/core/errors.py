"""Exceptions raised by the Shale core.

Every failure surfaces to the immediate caller; nothing here is retried.
Corruption of stored data (``CorruptObject`` and its subclasses) is kept
apart from misuse (wrong path kinds, missing objects) so callers can tell
a broken object store from a bad request.
"""

from pathlib import Path
from typing import Optional, Union


class ShaleError(Exception):
    """Base class for all Shale errors."""


class IOFailure(ShaleError):
    """A filesystem operation failed."""

    def __init__(self, path: Union[str, Path], action: str, reason: Optional[str] = None):
        self.path = Path(path)
        self.action = action
        self.reason = reason
        message = f"failed to {action} {self.path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class CorruptObject(ShaleError):
    """Stored object bytes could not be decoded."""


class FormatError(CorruptObject):
    """Object header is malformed, not text, or has no NUL separator."""


class UnsupportedKind(CorruptObject):
    """Object header names a kind outside blob, tree and commit."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"unsupported object kind: '{kind}'")


class SizeMismatch(CorruptObject):
    """Payload length disagrees with the size declared in the header."""

    def __init__(self, expected: int, actual: int, detail: str = ''):
        self.expected = expected
        self.actual = actual
        message = f"object size mismatch: expected {expected}, got {actual}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class NotFound(ShaleError):
    """No object is stored under the requested name."""

    def __init__(self, name: str, path: Optional[Path] = None):
        self.name = name
        self.path = path
        super().__init__(f"object {name} not found")


class WrongObjectKind(ShaleError):
    """An object exists but is not of the kind the operation needs."""

    def __init__(self, name: str, expected: str, actual: str):
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(f"object {name} is a {actual}, not a {expected}")


class PathKindMismatch(ShaleError):
    """A build operation was pointed at the wrong kind of filesystem entry."""

    expected = 'path'

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"not a {self.expected}: {self.path}")


class NotADirectory(PathKindMismatch):
    expected = 'directory'


class NotAFile(PathKindMismatch):
    expected = 'regular file'


class UnsupportedEntryType(ShaleError):
    """A directory entry is neither a regular file nor a directory."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"unsupported file type for {self.path}")


class ConfigError(ShaleError):
    """A configuration value is missing or malformed."""
