# barcart_backend/app/services/data_stores/catalog.py
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, List, Optional

from pydantic import ValidationError

from barcart_backend.app.config.paths import resolve_data_file
from barcart_backend.app.schemas import Recipe
from .io_utils import read_json, write_json

log = logging.getLogger("barcart.catalog")

# Purpose:
# Read-only recipe catalog provider. Rows are normalized through the Recipe
# model once, here; rows that cannot be coerced are skipped with a warning so
# one bad entry never takes the whole catalog down.

def recipes_path() -> Path:
    env = os.getenv("BARCART_RECIPES_PATH")
    if env:
        return Path(env).expanduser().resolve()
    return resolve_data_file("library", "recipes.json")

def _rows(raw: Any) -> List[Any]:
    if isinstance(raw, list):
        return raw
    if isinstance(raw, dict):
        for key in ("recipes", "items"):
            if isinstance(raw.get(key), list):
                return raw[key]
    return []

def parse_recipes(rows: List[Any]) -> List[Recipe]:
    out: List[Recipe] = []
    for i, row in enumerate(rows):
        try:
            out.append(Recipe.model_validate(row))
        except ValidationError as e:
            name = row.get("name") if isinstance(row, dict) else None
            log.warning("skip catalog row %d (%s): %s", i, name or "?", e.error_count())
    return out

def load_recipes(path: Optional[Path] = None) -> List[Recipe]:
    p = path or recipes_path()
    recipes = parse_recipes(_rows(read_json(p, default=[])))
    log.debug("loaded %d recipes from %s", len(recipes), p)
    return recipes

def save_recipes(recipes: List[Recipe], path: Optional[Path] = None) -> None:
    """Seed/import helper; the engine itself never writes the catalog."""
    write_json(path or recipes_path(), [r.model_dump(mode="json", by_alias=True) for r in recipes])
