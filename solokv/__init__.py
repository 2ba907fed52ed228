"""solokv package initialization.

Single source of truth for the package version so code, tests, and scripts can
import it without duplicating literals. Also re-exports the public API.
"""

PACKAGE_VERSION = "0.1.0"  # Keep in sync with pyproject version.

from .errors import (  # noqa: E402
    SoloKVError,
    StoreIOError,
    StorePermissionError,
    MalformedFileError,
    SerializationError,
    UnsupportedFormatError,
    InvalidFormatError,
    KeyNotFoundError,
)
from .formats import StorageFormat  # noqa: E402
from .file_backend import BackendConfig, FileBackend  # noqa: E402
from .store import Store, open_store  # noqa: E402

__all__ = [
    "PACKAGE_VERSION",
    "Store",
    "open_store",
    "StorageFormat",
    "BackendConfig",
    "FileBackend",
    "SoloKVError",
    "StoreIOError",
    "StorePermissionError",
    "MalformedFileError",
    "SerializationError",
    "UnsupportedFormatError",
    "InvalidFormatError",
    "KeyNotFoundError",
]
