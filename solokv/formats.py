"""Format codecs.

A codec turns a whole mapping into bytes and back. Codecs are pure: they never
touch the file system, so the file backend owns every I/O concern.

  - JsonCodec: the structured, human-readable format (UTF-8 JSON object)
  - CompactCodec: reserved dense binary format, intentionally unimplemented;
    every call raises UnsupportedFormatError so selecting it can never
    silently write or drop data
"""
from __future__ import annotations
import json
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Protocol, Union

from .errors import InvalidFormatError, MalformedFileError, SerializationError, UnsupportedFormatError


class StorageFormat(str, Enum):
    STRUCTURED = "json"
    COMPACT = "compact"

    @classmethod
    def parse(cls, value: Union["StorageFormat", str]) -> "StorageFormat":
        """Resolve an enum member, its value, or a known alias."""
        if isinstance(value, cls):
            return value
        name = str(value).strip().lower()
        fmt = _ALIASES.get(name)
        if fmt is None:
            raise InvalidFormatError(name)
        return fmt


_ALIASES = {
    "json": StorageFormat.STRUCTURED,
    "structured": StorageFormat.STRUCTURED,
    "compact": StorageFormat.COMPACT,
    "binary": StorageFormat.COMPACT,
}


class Codec(Protocol):
    name: str
    supported: bool

    def encode(self, mapping: Mapping[Any, Any]) -> bytes:
        """Serialize the full mapping. Raise SerializationError if not representable."""
        ...

    def decode(self, data: bytes) -> Dict[Any, Any]:
        """Parse a full payload. Raise MalformedFileError on bad input."""
        ...


class JsonCodec:
    """UTF-8 JSON object codec.

    Keys must be str: json would otherwise coerce int/bool/None keys to
    strings and the mapping would not survive a round trip.
    """
    name = StorageFormat.STRUCTURED.value
    supported = True

    def __init__(self, indent: Optional[int] = None):
        self.indent = indent or None

    def encode(self, mapping: Mapping[Any, Any]) -> bytes:
        bad = [k for k in mapping if not isinstance(k, str)]
        if bad:
            raise SerializationError(f"json keys must be str, got {type(bad[0]).__name__}: {bad[0]!r}")
        separators = (',', ':') if self.indent is None else (',', ': ')
        try:
            text = json.dumps(dict(mapping), ensure_ascii=False, allow_nan=False,
                              indent=self.indent, separators=separators)
        except RecursionError as e:
            raise SerializationError("value nested too deeply to encode as json") from e
        except (TypeError, ValueError) as e:
            raise SerializationError(f"value not representable as json: {e}") from e
        return text.encode("utf-8")

    def decode(self, data: bytes) -> Dict[Any, Any]:
        # zero-length payload is a freshly created, never written file
        if not data:
            return {}
        try:
            text = bytes(data).decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedFileError(f"invalid utf-8 at byte {e.start}") from e
        try:
            doc = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedFileError(f"{e.msg} (line {e.lineno}, column {e.colno})") from e
        except RecursionError as e:
            raise MalformedFileError("document nested too deeply") from e
        if not isinstance(doc, dict):
            raise MalformedFileError(f"expected json object at top level, got {type(doc).__name__}")
        return doc


class CompactCodec:
    name = StorageFormat.COMPACT.value
    supported = False

    def encode(self, mapping: Mapping[Any, Any]) -> bytes:
        raise UnsupportedFormatError(self.name)

    def decode(self, data: bytes) -> Dict[Any, Any]:
        raise UnsupportedFormatError(self.name)


def get_codec(fmt: Union[StorageFormat, str], indent: Optional[int] = None) -> Codec:
    fmt = StorageFormat.parse(fmt)
    if fmt is StorageFormat.STRUCTURED:
        return JsonCodec(indent=indent)
    return CompactCodec()


__all__ = ["StorageFormat", "Codec", "JsonCodec", "CompactCodec", "get_codec"]
