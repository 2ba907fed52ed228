#!/usr/bin/env python3
"""Create a verified backup of a store file.

The source is fully decoded first, so a corrupt store is reported instead of
being copied. The copy is written with an atomic temp-file + rename so a
crash never leaves a half-written backup.

Usage:
  python scripts/backup_store.py /path/to/store.json /path/to/backup.json
"""
from __future__ import annotations
import sys, pathlib, time

from solokv import SoloKVError
from solokv.file_backend import BackendConfig, FileBackend

def main():
    if len(sys.argv) < 3:
        print('Usage: backup_store.py <store_path> <backup_path>', file=sys.stderr)
        return 2
    src = pathlib.Path(sys.argv[1])
    dst = pathlib.Path(sys.argv[2])
    if not src.exists():
        print(f"source missing: {src}", file=sys.stderr)
        return 1
    cfg = BackendConfig.from_env()
    cfg.atomic_write = True
    start = time.time()
    try:
        source = FileBackend(src, None, cfg)
        data = source.load()
        FileBackend(dst, source.format, cfg).save(data)
    except SoloKVError as e:
        print(f"backup failed: {e}", file=sys.stderr)
        return 1
    dur_ms = int((time.time()-start)*1000)
    print(f"backup_created path={dst} keys={len(data)} ms={dur_ms}")
    return 0

if __name__ == '__main__':
    raise SystemExit(main())
