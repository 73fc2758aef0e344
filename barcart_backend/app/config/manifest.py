# barcart_backend/app/config/manifest.py
from __future__ import annotations

import os
from typing import Dict, List

from .paths import resolve_rules_file

# ---- Environment mode ----
APP_ENV: str = os.getenv("APP_ENV", "development")
DEBUG_MODE: bool = os.getenv("DEBUG", "0") not in ("", "0", "false", "False")
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG_MODE else "INFO").upper()

CORS_ORIGINS: List[str] = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173").split(",")
    if o.strip()
]

# A history entry rated at or above this bumps the smoked wood's affinity.
AFFINITY_RATING_THRESHOLD: int = int(os.getenv("AFFINITY_RATING_THRESHOLD", "4"))

# ---- Rulebook validation manifest ----
RULES_REQUIRED: List[str] = [
    "classifier.yaml",
    "batch.yaml",
    "smoker.yaml",
    "pairing.yaml",
    "woods.yaml",
]

def validate_manifest() -> Dict[str, object]:
    missing_required = [n for n in RULES_REQUIRED if not resolve_rules_file(n).exists()]
    status = "ok" if not missing_required else "missing_required"
    return {
        "status": status,
        "required": RULES_REQUIRED,
        "missing_required": missing_required,
    }

__all__ = [
    "APP_ENV", "DEBUG_MODE", "LOG_LEVEL", "CORS_ORIGINS",
    "AFFINITY_RATING_THRESHOLD", "RULES_REQUIRED", "validate_manifest",
]
