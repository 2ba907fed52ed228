#!/usr/bin/env python3
"""Cross-platform project bootstrap utility.

One entry point that works on Windows, WSL, Linux, macOS.

Features:
  - Creates (or reuses) a `.venv` virtual environment
  - Installs the package in editable mode (`pip install -e .`)
  - Optional dev/test dependencies (`--dev`)
  - Optional empty store creation (`--init-store`) at `./data/store.json`
  - Optional test run (`--run-tests`) if pytest is installed/available
  - Prints next-step activation guidance for your shell (PowerShell / bash)

Usage examples:
  python bootstrap.py --init-store            # minimal install + create store
  python bootstrap.py --dev --run-tests       # also install pytest and run it

Idempotent: safe to re-run; will skip work already done.
"""
from __future__ import annotations
import argparse, sys, subprocess, textwrap, platform
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent
VENV_DIR = PROJECT_ROOT / ".venv"
DATA_DIR = PROJECT_ROOT / "data"
DEFAULT_STORE = DATA_DIR / "store.json"


def run(cmd: list[str], **kw):
    """Run a command, raising on non-zero exit."""
    print("[bootstrap] $", " ".join(cmd))
    subprocess.check_call(cmd, **kw)


def ensure_venv(python: str) -> Path:
    if not VENV_DIR.exists():
        print("[bootstrap] Creating virtual environment .venv")
        run([python, "-m", "venv", str(VENV_DIR)])
    if platform.system().lower().startswith("win"):
        return VENV_DIR / "Scripts" / "python.exe"
    return VENV_DIR / "bin" / "python"


def pip_install(venv_py: Path, dev: bool):
    run([str(venv_py), "-m", "pip", "install", "-q", "--upgrade", "pip", "setuptools", "wheel"])
    run([str(venv_py), "-m", "pip", "install", "-e", ".[dev]" if dev else "."], cwd=PROJECT_ROOT)


def init_store(venv_py: Path, store_path: Path):
    if store_path.exists():
        print(f"[bootstrap] Store already exists: {store_path}")
        return
    print(f"[bootstrap] Initializing store: {store_path}")
    run([str(venv_py), "scripts/init_store.py", str(store_path)], cwd=PROJECT_ROOT)


def run_tests(venv_py: Path):
    try:
        run([str(venv_py), "-m", "pytest", "-q"], cwd=PROJECT_ROOT)
    except subprocess.CalledProcessError as e:
        print(f"[bootstrap] Test run failed (exit {e.returncode}).")


def activation_hint():
    ps_hint = ".venv\\Scripts\\Activate.ps1"
    bash_hint = "source .venv/bin/activate"
    return textwrap.dedent(f"""
        Next steps:
          PowerShell: {ps_hint}
          bash/zsh : {bash_hint}

        Inspect a store after activation:
          python -m solokv.file_backend ./data/store.json

        Tuning (optional):
          export SOLOKV_ATOMIC_WRITE=1   # temp file + rename on every save
          export SOLOKV_JSON_INDENT=2    # pretty-printed store files
    """)


def parse_args(argv: list[str]):
    ap = argparse.ArgumentParser(description="Cross-platform bootstrap")
    ap.add_argument("--dev", action="store_true", help="Install dev/test dependencies")
    ap.add_argument("--init-store", action="store_true", help="Create an empty store (data/store.json)")
    ap.add_argument("--store-path", type=Path, default=DEFAULT_STORE, help="Custom store path (with --init-store)")
    ap.add_argument("--run-tests", action="store_true", help="Run pytest after install (requires --dev or existing pytest)")
    return ap.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv or sys.argv[1:])
    venv_py = ensure_venv(sys.executable)
    pip_install(venv_py, args.dev)
    if args.init_store:
        init_store(venv_py, args.store_path)
    if args.run_tests:
        run_tests(venv_py)
    print(activation_hint())
    print("[bootstrap] Done.")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
