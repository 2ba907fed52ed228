"""Minimal offline test runner (stdlib only) for core smoke checks.

Usage:
  python test_runner.py                 # runs all checks

Skips the full pytest suite; intended as a fallback when pip/pytest unavailable.
"""
from __future__ import annotations
import json, sys, tempfile, traceback
from pathlib import Path

ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT))

from solokv import Store, KeyNotFoundError  # type: ignore  # noqa: E402
from solokv.formats import JsonCodec  # type: ignore  # noqa: E402


def check_round_trip():
    codec = JsonCodec()
    mapping = {"a": 1, "b": [1, 2], "c": {"nested": True}, "d": "ü"}
    assert codec.decode(codec.encode(mapping)) == mapping
    assert codec.decode(b"") == {}
    return {"keys": len(mapping)}


def check_reload():
    with tempfile.TemporaryDirectory() as d:
        path = Path(d) / "runner.json"
        store = Store.open(path)
        for i in range(10):
            store.put(f"k{i}", i)
        store.put("k0", None)
        reloaded = Store.open(path)
        assert sorted(reloaded.keys()) == sorted(store.keys())
        try:
            reloaded.get("k0")
        except KeyNotFoundError:
            pass
        else:
            raise AssertionError("k0 survived delete")
        return reloaded.health_check()


def main():
    results = {}
    failures = 0
    for name, fn in [("round_trip", check_round_trip), ("reload", check_reload)]:
        try:
            results[name] = fn()
        except Exception:
            failures += 1
            results[name] = {"error": traceback.format_exc()}
    print(json.dumps({"failures": failures, "results": results}, indent=2))
    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
