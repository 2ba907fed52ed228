"""Embedded key-value store over a single file.

The whole mapping lives in memory. Opening a store loads the file once; every
mutation rewrites the file through the backend before it returns.

Mutations are staged: the candidate mapping is built as a copy, persisted,
and only then swapped in. A failed save therefore leaves the in-memory mapping
equal to what is on disk.
"""
from __future__ import annotations
import copy
import os
from typing import Any, Dict, Generic, Hashable, List, Optional, TypeVar, Union

from .base_backend import PersistenceBackend
from .errors import KeyNotFoundError, SerializationError, StorePermissionError
from .file_backend import BackendConfig, FileBackend
from .formats import StorageFormat
from .logging_util import info, debug

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class Store(Generic[K, V]):
    """In-memory mapping persisted as one file.

    Not thread-safe; wrap calls in a lock if several threads share an instance.
    The store assumes it is the only writer of its file.

    Values are deep-copied on put and on get, so mutating an object handed to
    or returned by the store never changes the in-memory mapping behind the
    file's back.

    Read-only mode: an explicit ``config`` fixes it for the store's lifetime.
    Without one, SOLOKV_READ_ONLY is re-read on every mutation.
    """

    def __init__(self, path: Union[str, os.PathLike], fmt: Union[StorageFormat, str, None] = None,
                 config: Optional[BackendConfig] = None, backend: Optional[PersistenceBackend] = None):
        self.config = config or BackendConfig.from_env()
        self.backend: PersistenceBackend = backend or FileBackend(path, fmt, self.config)
        self._read_only_from_env = config is None
        self._data: Dict[K, V] = self.backend.load()
        info("store_opened", path=self.path, format=self.format.value, keys=len(self._data))

    @classmethod
    def open(cls, path: Union[str, os.PathLike], fmt: Union[StorageFormat, str, None] = None,
             config: Optional[BackendConfig] = None) -> "Store[K, V]":
        """Load the store at path, or start empty if the file does not exist."""
        return cls(path, fmt, config)

    @property
    def path(self) -> str:
        return self.backend.path

    @property
    def format(self) -> StorageFormat:
        return getattr(self.backend, "format", StorageFormat.STRUCTURED)

    @property
    def read_only(self) -> bool:
        if not self._read_only_from_env:
            return self.config.read_only
        # Re-read environment each access so operators can flip it on a live store
        env_val = os.environ.get("SOLOKV_READ_ONLY")
        if env_val is None:
            return self.config.read_only
        return env_val.strip() == "1"

    # --- Queries (memory only) ------------------------------------------------------
    def get(self, key: K) -> V:
        try:
            value = self._data[key]
        except KeyError:
            raise KeyNotFoundError(key) from None
        return copy.deepcopy(value)

    def exists(self, key: K) -> bool:
        return key in self._data

    def keys(self) -> List[K]:
        """Snapshot of the current keys; later mutations do not affect it."""
        return list(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Store(path={self.path!r}, format={self.format.value!r}, keys={len(self._data)})"

    # --- Mutations ------------------------------------------------------------------
    def put(self, key: K, value: Optional[V]) -> None:
        """Set key to value, or remove key when value is None, then persist.

        Removing an absent key is not an error; the file is still rewritten.
        """
        if self.read_only:
            raise StorePermissionError(f"store is read-only: {self.path}", path=self.path)
        staged = dict(self._data)
        if value is None:
            staged.pop(key, None)
            op = "delete"
        else:
            try:
                staged[key] = copy.deepcopy(value)
            except RecursionError as e:
                raise SerializationError(f"value for {key!r} nested too deeply") from e
            op = "put"
        self.backend.save(staged)
        self._data = staged
        debug("store_mutated", path=self.path, op=op, keys=len(staged))

    def delete(self, key: K) -> None:
        self.put(key, None)

    def health_check(self) -> Dict[str, Any]:
        hc = self.backend.health_check()
        hc.update({"keys_in_memory": len(self._data), "read_only": self.read_only})
        return hc


def open_store(path: Union[str, os.PathLike], fmt: Union[StorageFormat, str, None] = None,
               config: Optional[BackendConfig] = None) -> Store:
    return Store.open(path, fmt, config)
