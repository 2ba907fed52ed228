import pytest
from solokv import Store, BackendConfig, StorePermissionError, StoreIOError


def test_read_only_config_rejects_writes(store_path):
    Store.open(store_path).put('a', 1)
    before = store_path.read_bytes()
    ro = Store.open(store_path, config=BackendConfig(read_only=True))
    with pytest.raises(StorePermissionError) as exc:
        ro.put('b', 2)
    assert isinstance(exc.value, StoreIOError)
    with pytest.raises(StorePermissionError):
        ro.delete('a')
    assert ro.get('a') == 1 and not ro.exists('b')
    assert store_path.read_bytes() == before


def test_read_only_env_hot_reload(store_path, monkeypatch):
    """SOLOKV_READ_ONLY is re-read on every mutation."""
    monkeypatch.setenv('SOLOKV_READ_ONLY', '1')
    store = Store.open(store_path)
    assert store.read_only
    with pytest.raises(StorePermissionError):
        store.put('a', 1)
    monkeypatch.setenv('SOLOKV_READ_ONLY', '0')
    store.put('a', 1)
    assert Store.open(store_path).get('a') == 1


def test_read_only_store_can_still_read(store_path):
    Store.open(store_path).put('a', 'x')
    ro = Store.open(store_path, config=BackendConfig(read_only=True))
    assert ro.keys() == ['a'] and ro.get('a') == 'x'


def test_explicit_config_wins_over_env(store_path, monkeypatch):
    monkeypatch.setenv('SOLOKV_READ_ONLY', '0')
    ro = Store.open(store_path, config=BackendConfig(read_only=True))
    assert ro.read_only
    with pytest.raises(StorePermissionError):
        ro.put('a', 1)
    monkeypatch.setenv('SOLOKV_READ_ONLY', '1')
    rw = Store.open(store_path, config=BackendConfig(read_only=False))
    rw.put('a', 1)
    assert rw.get('a') == 1
