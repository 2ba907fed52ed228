#!/usr/bin/env python3
"""Idempotent store initializer.

Creates an empty store file in the requested format if none exists. An existing
file is loaded (which validates it) and left untouched. Safe to run repeatedly.

Usage:
  python scripts/init_store.py /path/to/store.json [--format json]
"""
from __future__ import annotations
import argparse, sys, pathlib

from solokv import Store, SoloKVError


def main(argv=None):
    ap = argparse.ArgumentParser(description='Create an empty solokv store file')
    ap.add_argument('path')
    ap.add_argument('--format', default=None, help='json | compact (default from SOLOKV_DEFAULT_FORMAT)')
    args = ap.parse_args(argv)
    path = pathlib.Path(args.path)
    path.parent.mkdir(parents=True, exist_ok=True)
    existed = path.exists()
    try:
        store = Store.open(path, args.format)
        if not existed:
            # an empty mapping still needs a first save to materialize the file
            store.backend.save({})
    except SoloKVError as e:
        print(f"init failed: {e}", file=sys.stderr)
        return 1
    state = 'existing' if existed else 'created'
    print(f"initialized: {path} ({state}, keys={len(store)})")
    return 0

if __name__ == '__main__':
    raise SystemExit(main())
