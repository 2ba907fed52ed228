#!/usr/bin/env python3
"""Smoke test for core store invariants.

Checks:
  * Fresh store starts empty
  * put/get/exists/keys contract, delete via put(key, None)
  * Reopening the file yields the same mapping
  * Compact format fails closed
  * (Optional) Read-only mode rejects writes (set SMOKE_READ_ONLY=1)
  * (Optional) health_check contains required keys (set SMOKE_HEALTH_CHECK=1)

Uses SOLOKV_PATH if set, otherwise a temporary file.
"""
import os, sys, json, tempfile
from pathlib import Path
from solokv import (Store, StorageFormat, KeyNotFoundError, StorePermissionError,
                    UnsupportedFormatError)

failures = []

def check(cond, msg):
    if not cond:
        failures.append(msg)

tmpdir = tempfile.TemporaryDirectory()
STORE_PATH = Path(os.environ.get('SOLOKV_PATH') or Path(tmpdir.name) / 'smoke.json')
if STORE_PATH.exists():
    print(json.dumps({'success': False, 'error': f'refusing to reuse existing store: {STORE_PATH}'}))
    sys.exit(1)

# Read-only toggling below must not affect the scenario writes
read_only_env = os.environ.pop('SOLOKV_READ_ONLY', None)

store = Store.open(STORE_PATH, StorageFormat.STRUCTURED)
check(store.keys() == [], f'fresh store not empty: {store.keys()}')
store.put('a', '1')
check(store.get('a') == '1', 'get a after put')
store.put('b', '2')
check(set(store.keys()) == {'a', 'b'}, f'keys mismatch: {store.keys()}')
store.put('a', None)
check(not store.exists('a'), 'a still exists after delete')
try:
    store.get('a')
    check(False, 'get a after delete did not raise')
except KeyNotFoundError:
    pass
check(store.get('b') == '2', 'get b after delete of a')

reopened = Store.open(STORE_PATH, StorageFormat.STRUCTURED)
check(dict((k, reopened.get(k)) for k in reopened.keys()) == {'b': '2'}, 'reload mismatch')

try:
    Store.open(Path(tmpdir.name) / 'compact.bin', StorageFormat.COMPACT)
    check(False, 'compact store opened')
except UnsupportedFormatError:
    pass

if os.environ.get('SMOKE_READ_ONLY', '0') == '1':
    os.environ['SOLOKV_READ_ONLY'] = '1'
    try:
        store.put('c', '3')
        check(False, 'write unexpectedly succeeded in read-only mode')
    except StorePermissionError:
        pass
    check(not store.exists('c'), 'read-only write leaked into memory')
    del os.environ['SOLOKV_READ_ONLY']

if os.environ.get('SMOKE_HEALTH_CHECK', '0') == '1':
    hc = store.health_check()
    required_hc = {'ok', 'path', 'format', 'exists', 'size_bytes', 'keys'}
    missing = required_hc - hc.keys() if isinstance(hc, dict) else required_hc
    if missing:
        check(False, f"health_check missing keys: {sorted(missing)}")
    check(hc.get('ok') is True, f'health_check not ok: {hc}')

if read_only_env is not None:
    os.environ['SOLOKV_READ_ONLY'] = read_only_env
tmpdir.cleanup()

if failures:
    print(json.dumps({'success': False, 'failures': failures}))
    sys.exit(2)
print(json.dumps({'success': True}))
