# barcart_backend/app/services/data_stores/woods.py
from __future__ import annotations

import logging
from pathlib import Path
from threading import RLock
from typing import List, Optional

from pydantic import ValidationError

from barcart_backend.app.config.paths import resolve_data_file
from barcart_backend.app.schemas import Wood
from barcart_backend.app.services.rules_loader import seed_woods
from .io_utils import read_json, write_json

log = logging.getLogger("barcart.woods")
_IO_LOCK = RLock()

def woods_path() -> Path:
    return resolve_data_file("library", "woods.json")

# What it does:
# The user's wood library, or the seed library until one has been saved.
def load_woods() -> List[Wood]:
    with _IO_LOCK:
        raw = read_json(woods_path(), default=None)
    rows = raw if isinstance(raw, list) else [dict(w) for w in seed_woods()]
    out: List[Wood] = []
    for row in rows:
        try:
            out.append(Wood.model_validate(row))
        except ValidationError as e:
            log.warning("skip wood row %r: %d error(s)", row.get("name") if isinstance(row, dict) else row, e.error_count())
    return out

def save_woods(woods: List[Wood]) -> None:
    with _IO_LOCK:
        write_json(woods_path(), [w.model_dump(mode="json", by_alias=True) for w in woods])

def get_wood(name: str) -> Optional[Wood]:
    key = (name or "").strip().lower()
    for w in load_woods():
        if w.name.lower() == key or (w.id or "").lower() == key:
            return w
    return None

# What it does:
# Toggle kit membership for a wood by name/id; returns the updated wood or None.
def set_in_kit(name: str, in_kit: bool) -> Optional[Wood]:
    key = (name or "").strip().lower()
    with _IO_LOCK:
        woods = load_woods()
        hit: Optional[Wood] = None
        for i, w in enumerate(woods):
            if w.name.lower() == key or (w.id or "").lower() == key:
                woods[i] = w.model_copy(update={"is_in_my_kit": bool(in_kit)})
                hit = woods[i]
        if hit is not None:
            save_woods(woods)
    return hit
