# barcart_backend/app/config/paths.py
from __future__ import annotations

"""
Central path resolution for barcart.

Env overrides:
    DATA_DIR
    BARCART_RULES_DIR

Defaults:
    <repo_root>/data
    <repo_root>/barcart_backend/app/rules

Exports:
    - constants: RULES_DIR, REPO_ROOT, APP_ROOT
    - resolvers: resolve_rules_file(), resolve_data_file()
    - helpers: get_data_dir(), ensure_data_dir_exists()
"""

import os
from pathlib import Path

# ──────────────────────────────────────────────────────────────────────────────
_THIS_FILE = Path(__file__).resolve()

def _resolve_repo_root() -> Path:
    p = _THIS_FILE
    for _ in range(6):
        if (p.parent / "barcart_backend" / "app").exists():
            return p.parent
        p = p.parent
    return _THIS_FILE.parents[3]

REPO_ROOT: Path = _resolve_repo_root()
APP_ROOT: Path = _THIS_FILE.parents[1]

def _clean_env(value: str | None) -> str | None:
    if value is None:
        return None
    v = value.strip().strip('"').strip("'")
    return v or None

def _env_path(name: str) -> Path | None:
    raw = _clean_env(os.getenv(name))
    if not raw:
        return None
    return Path(raw).expanduser().resolve()

_default_data = REPO_ROOT / "data"
_default_rules = APP_ROOT / "rules"

RULES_DIR: Path = (_env_path("BARCART_RULES_DIR") or _default_rules).resolve()

# DATA_DIR is re-read on every call so tests can point it at a tmp tree.
def get_data_dir() -> Path:
    return (_env_path("DATA_DIR") or _default_data).resolve()

# ── Resolvers
def resolve_rules_file(name: str) -> Path:
    """Return absolute path under the rules dir for a given filename."""
    return RULES_DIR / name

def resolve_data_file(*parts: str) -> Path:
    """Return absolute path under DATA_DIR for nested parts and ensure parent exists."""
    p = get_data_dir().joinpath(*parts)
    p.parent.mkdir(parents=True, exist_ok=True)
    return p

def ensure_data_dir_exists(*parts: str) -> Path:
    """
    Ensure DATA_DIR (and optional subpaths) exist.
    Examples:
        ensure_data_dir_exists() -> <DATA_DIR>
        ensure_data_dir_exists("library") -> <DATA_DIR>/library
    """
    p = get_data_dir().joinpath(*parts)
    p.mkdir(parents=True, exist_ok=True)
    return p

__all__ = [
    "RULES_DIR", "REPO_ROOT", "APP_ROOT",
    "get_data_dir", "resolve_rules_file", "resolve_data_file",
    "ensure_data_dir_exists",
]
