"""Structured logging helper.

Emits one JSON object per line to stderr. The threshold comes from
SOLOKV_LOG_LEVEL (falling back to LOG_LEVEL) and is read on every call so
tests and operators can change it without re-importing.
"""
from __future__ import annotations
import os, sys, json, time, threading

LOGGER_NAME = "solokv"
LEVEL_ORDER = ["DEBUG", "INFO", "WARN", "ERROR"]
DEFAULT_LEVEL = "INFO"

_lock = threading.Lock()


def current_level() -> str:
    raw = os.environ.get("SOLOKV_LOG_LEVEL") or os.environ.get("LOG_LEVEL") or DEFAULT_LEVEL
    level = raw.strip().upper()
    if level == "WARNING":
        level = "WARN"
    return level if level in LEVEL_ORDER else DEFAULT_LEVEL


def _should(level: str) -> bool:
    return LEVEL_ORDER.index(level) >= LEVEL_ORDER.index(current_level())


def log(level: str, event: str, **fields):
    level = level.upper()
    if level not in LEVEL_ORDER or not _should(level):
        return
    record = {
        "ts": time.strftime('%Y-%m-%dT%H:%M:%SZ', time.gmtime()),
        "level": level,
        "logger": LOGGER_NAME,
        "event": event,
    }
    record.update(fields)
    # default=str keeps Path / enum fields printable
    line = json.dumps(record, separators=(',', ':'), default=str)
    with _lock:
        sys.stderr.write(line + "\n")
        sys.stderr.flush()


def debug(event: str, **fields): log("DEBUG", event, **fields)
def info(event: str, **fields): log("INFO", event, **fields)
def warn(event: str, **fields): log("WARN", event, **fields)
def error(event: str, **fields): log("ERROR", event, **fields)
