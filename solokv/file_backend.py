"""Whole-file persistence backend.

Every save rewrites the complete file; every load reads and decodes the
complete file. There is no append mode and no write-ahead log.

Options (see BackendConfig / env):
    - Default storage format for stores opened without an explicit one
    - Pretty-printed JSON via SOLOKV_JSON_INDENT (clamped to 0..8)
    - Atomic temp-file + rename writes (SOLOKV_ATOMIC_WRITE=1); off by default,
      in which case a crash mid-write can leave a truncated file behind
    - fsync before returning from save (SOLOKV_FSYNC=1)
    - Read-only stores (SOLOKV_READ_ONLY=1), enforced by the Store
"""
from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from .errors import (InvalidFormatError, MalformedFileError, SerializationError, StoreIOError,
                     UnsupportedFormatError)
from .formats import StorageFormat, get_codec
from .logging_util import warn, debug

MAX_JSON_INDENT = 8
DEFAULT_JSON_INDENT = 0
DEFAULT_FORMAT = StorageFormat.STRUCTURED
TMP_SUFFIX = ".tmp"


def _flag(name: str) -> bool:
    return os.environ.get(name, "0").strip() == "1"


@dataclass
class BackendConfig:
    default_format: StorageFormat = DEFAULT_FORMAT
    json_indent: int = DEFAULT_JSON_INDENT
    atomic_write: bool = False
    fsync: bool = False
    read_only: bool = False

    @classmethod
    def from_env(cls) -> "BackendConfig":
        def _int(name: str, default: int) -> int:
            raw = os.environ.get(name)
            if raw is None:
                return default
            try:
                return int(raw)
            except ValueError:
                warn("invalid_env_int", key=name, value=raw, default=default)
                return default
        fmt = DEFAULT_FORMAT
        raw_fmt = os.environ.get("SOLOKV_DEFAULT_FORMAT")
        if raw_fmt:
            try:
                fmt = StorageFormat.parse(raw_fmt)
            except InvalidFormatError:
                warn("invalid_env_format", key="SOLOKV_DEFAULT_FORMAT", value=raw_fmt, default=DEFAULT_FORMAT.value)
        indent = _int("SOLOKV_JSON_INDENT", DEFAULT_JSON_INDENT)
        if indent < 0 or indent > MAX_JSON_INDENT:
            clamped = min(MAX_JSON_INDENT, max(0, indent))
            warn("backend_config_clamped", original={"json_indent": indent}, clamped={"json_indent": clamped})
            indent = clamped
        return cls(
            default_format=fmt,
            json_indent=indent,
            atomic_write=_flag("SOLOKV_ATOMIC_WRITE"),
            fsync=_flag("SOLOKV_FSYNC"),
            read_only=_flag("SOLOKV_READ_ONLY"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "default_format": self.default_format.value,
            "json_indent": self.json_indent,
            "atomic_write": self.atomic_write,
            "fsync": self.fsync,
            "read_only": self.read_only,
        }


def _read_bytes(path: Path) -> bytes:
    return path.read_bytes()


def _write_bytes(path: Path, payload: bytes, fsync: bool) -> None:
    # "wb" creates the file if needed and truncates existing content
    with open(path, "wb") as f:
        f.write(payload)
        f.flush()
        if fsync:
            os.fsync(f.fileno())


class FileBackend:
    """Single-file backend.

    Responsibilities:
      - Map the store path + format to a codec
      - Load: missing file -> empty mapping, otherwise decode the full content
      - Save: encode first, then rewrite the full file (optionally via rename)
      - Translate OSError into StoreIOError / StorePermissionError
    """
    def __init__(self, path: Union[str, os.PathLike], fmt: Union[StorageFormat, str, None] = None,
                 config: Optional[BackendConfig] = None):
        self.config = config or BackendConfig.from_env()
        self.path = os.fspath(path)
        if os.path.isdir(self.path):  # directory misuse
            raise StoreIOError(f"Path points to a directory, expected file: {self.path}", path=self.path)
        self.format = StorageFormat.parse(fmt) if fmt is not None else self.config.default_format
        self.codec = get_codec(self.format, indent=self.config.json_indent)

    # --- Public API -----------------------------------------------------------------
    def load(self) -> Dict[Any, Any]:
        """Return the decoded mapping, or {} if the file does not exist yet.

        Unsupported codecs fail even for a missing file so a store can never be
        opened in a format it would be unable to save.
        """
        if not self.codec.supported:
            warn("store_load_failed", path=self.path, format=self.format.value, error="unsupported format")
            raise UnsupportedFormatError(self.format.value)
        # only a missing file means first run; other stat/open failures are I/O errors
        try:
            payload = _read_bytes(Path(self.path))
        except FileNotFoundError:
            debug("store_load_missing", path=self.path, format=self.format.value)
            return {}
        except OSError as e:
            warn("store_load_failed", path=self.path, format=self.format.value, error=str(e))
            raise StoreIOError.from_os_error(e, self.path, "read") from e
        try:
            data = self.codec.decode(payload)
        except MalformedFileError as e:
            warn("store_load_failed", path=self.path, format=self.format.value, error=e.detail)
            raise MalformedFileError(e.detail, path=self.path) from e
        debug("store_loaded", path=self.path, format=self.format.value, keys=len(data), bytes=len(payload))
        return data

    def save(self, mapping: Mapping[Any, Any]) -> None:
        """Encode mapping and replace the file content with it."""
        # encode before opening so an unrepresentable value never truncates the file
        try:
            payload = self.codec.encode(mapping)
        except (SerializationError, UnsupportedFormatError) as e:
            warn("store_save_failed", path=self.path, format=self.format.value, error=str(e))
            raise
        target = Path(self.path)
        try:
            if self.config.atomic_write:
                self._replace_atomically(target, payload)
            else:
                _write_bytes(target, payload, self.config.fsync)
        except OSError as e:
            warn("store_save_failed", path=self.path, format=self.format.value, error=str(e))
            raise StoreIOError.from_os_error(e, self.path, "write") from e
        debug("store_saved", path=self.path, format=self.format.value, keys=len(mapping), bytes=len(payload))

    def health_check(self) -> Dict[str, Any]:
        """Return file status and resolved options. Never raises."""
        out: Dict[str, Any] = {
            "path": self.path,
            "format": self.format.value,
            "exists": False,
            "size_bytes": 0,
            "atomic_write": self.config.atomic_write,
            "fsync": self.config.fsync,
            "json_indent": self.config.json_indent,
        }
        try:
            st = os.stat(self.path)
            out["exists"] = True
            out["size_bytes"] = st.st_size
        except FileNotFoundError:
            pass
        except OSError as e:
            return {"ok": False, "error": str(e), **out}
        try:
            out["keys"] = len(self.load())
        except Exception as e:
            return {"ok": False, "error": str(e), **out}
        return {"ok": True, **out}

    # --- Internal -------------------------------------------------------------------
    def _replace_atomically(self, target: Path, payload: bytes) -> None:
        tmp = target.with_name(target.name + TMP_SUFFIX)
        try:
            _write_bytes(tmp, payload, self.config.fsync)
            os.replace(tmp, target)
        except OSError:
            try:
                tmp.unlink()
            except OSError:
                pass
            raise


def load(path: Union[str, os.PathLike], fmt: Union[StorageFormat, str, None] = None,
         config: Optional[BackendConfig] = None) -> Dict[Any, Any]:
    return FileBackend(path, fmt, config).load()


def save(path: Union[str, os.PathLike], fmt: Union[StorageFormat, str, None], mapping: Mapping[Any, Any],
         config: Optional[BackendConfig] = None) -> None:
    FileBackend(path, fmt, config).save(mapping)


def cli_dump_config():  # pragma: no cover - thin CLI wrapper
    """CLI helper: print resolved BackendConfig + health_check JSON."""
    import argparse, json
    ap = argparse.ArgumentParser(description='Dump store config and health info')
    ap.add_argument('path', help='Path to the store file')
    ap.add_argument('--format', default=None, help='Storage format (json | compact)')
    args = ap.parse_args()
    be = FileBackend(args.path, args.format)
    out = {'config': be.config.to_dict(), 'health_check': be.health_check()}
    print(json.dumps(out, indent=2))


if __name__ == '__main__':  # pragma: no cover
    cli_dump_config()
