import os, pytest
from pathlib import Path
from solokv import Store, StorageFormat

SOLOKV_ENV = [
    'SOLOKV_DEFAULT_FORMAT', 'SOLOKV_JSON_INDENT', 'SOLOKV_ATOMIC_WRITE',
    'SOLOKV_FSYNC', 'SOLOKV_READ_ONLY', 'SOLOKV_LOG_LEVEL', 'LOG_LEVEL',
]

@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # Operator settings on the test host must not leak into assertions
    for name in SOLOKV_ENV:
        monkeypatch.delenv(name, raising=False)

@pytest.fixture()
def store_path(tmp_path) -> Path:
    return tmp_path / 'store.json'

@pytest.fixture()
def store(store_path):
    return Store.open(store_path, StorageFormat.STRUCTURED)
