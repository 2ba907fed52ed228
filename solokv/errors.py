"""Error taxonomy for solokv.

Every error raised by the package derives from SoloKVError and also from the
closest builtin, so callers can catch either (e.g. KeyNotFoundError is a
KeyError, StoreIOError is an OSError).
"""
from __future__ import annotations
from typing import Any, Optional


class SoloKVError(Exception):
    """Base class for all solokv errors."""


class StoreIOError(SoloKVError, OSError):
    """Underlying file-system operation failed (open/read/write/replace)."""

    def __init__(self, message: str, path: Optional[str] = None, errno: Optional[int] = None):
        OSError.__init__(self, message)
        self.message = message
        self.path = path
        self.errno = errno

    def __str__(self) -> str:
        return self.message

    @classmethod
    def from_os_error(cls, exc: OSError, path: str, action: str) -> "StoreIOError":
        if isinstance(exc, PermissionError):
            cls = StorePermissionError
        return cls(f"{action} failed for {path}: {exc.strerror or exc}", path=path, errno=exc.errno)


class StorePermissionError(StoreIOError):
    """Access denied, either by the OS or because the store is read-only."""


class MalformedFileError(SoloKVError, ValueError):
    """File content is present but cannot be decoded as a mapping."""

    def __init__(self, detail: str, path: Optional[str] = None):
        where = path or "<bytes>"
        super().__init__(f"data in {where} is corrupted or malformed: {detail}")
        self.detail = detail
        self.path = path


class SerializationError(SoloKVError, ValueError):
    """Mapping holds keys or values the selected format cannot represent."""


class UnsupportedFormatError(SoloKVError, NotImplementedError):
    def __init__(self, format_name: str):
        super().__init__(f"storage format {format_name!r} is not supported")
        self.format_name = format_name


class InvalidFormatError(SoloKVError, ValueError):
    """Format name is not one solokv knows (typo or unsupported alias)."""

    def __init__(self, format_name: str):
        super().__init__(f"the specified format {format_name!r} is incorrect; expected one of json, compact")
        self.format_name = format_name


class KeyNotFoundError(SoloKVError, KeyError):
    """get() on a key that is not in the store."""

    def __init__(self, key: Any):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Key not found: {self.key!r}"


__all__ = [
    "SoloKVError",
    "StoreIOError",
    "StorePermissionError",
    "MalformedFileError",
    "SerializationError",
    "UnsupportedFormatError",
    "InvalidFormatError",
    "KeyNotFoundError",
]
