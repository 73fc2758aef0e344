# barcart_backend/app/config/__init__.py
from __future__ import annotations

# Re-export config surface expected by callers across the app.

from .manifest import (
    APP_ENV,
    LOG_LEVEL,
    CORS_ORIGINS,
    AFFINITY_RATING_THRESHOLD,
    validate_manifest,
)

from .paths import (
    RULES_DIR,
    resolve_rules_file,
    resolve_data_file,
    ensure_data_dir_exists,
)

__all__ = [
    # manifest
    "APP_ENV",
    "LOG_LEVEL",
    "CORS_ORIGINS",
    "AFFINITY_RATING_THRESHOLD",
    "validate_manifest",
    # paths
    "RULES_DIR",
    "resolve_rules_file",
    "resolve_data_file",
    "ensure_data_dir_exists",
]
