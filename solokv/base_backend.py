"""Backend abstraction layer.

Defines the minimal interface the Store persists through, so an incremental or
log-structured engine can later replace the whole-file backend without changing
the Store's public contract.

KISS: only load-everything and save-everything are abstracted.
"""
from __future__ import annotations
from typing import Protocol, Any, Dict, Mapping


class PersistenceBackend(Protocol):  # pragma: no cover - structural typing helper
    path: str

    def load(self) -> Dict[Any, Any]:
        """Return the full persisted mapping. A missing source MUST yield {}."""
        ...

    def save(self, mapping: Mapping[Any, Any]) -> None:
        """Replace the persisted state with mapping. Raise on any failure."""
        ...

    def health_check(self) -> Dict[str, Any]:
        ...
