# barcart_backend/app/services/data_stores/people.py
from __future__ import annotations

import logging
from pathlib import Path
from threading import RLock
from typing import Dict, List, Optional

from pydantic import ValidationError

from barcart_backend.app.config import AFFINITY_RATING_THRESHOLD
from barcart_backend.app.config.paths import resolve_data_file
from barcart_backend.app.schemas import HistoryEntry, PersonProfile
from barcart_backend.app.services.learning.affinity import bump_wood_affinity
from .io_utils import read_json, write_json

log = logging.getLogger("barcart.people")
_IO_LOCK = RLock()

def people_path() -> Path:
    return resolve_data_file("people.json")

def settings_path() -> Path:
    return resolve_data_file("settings.json")

def list_people() -> List[PersonProfile]:
    with _IO_LOCK:
        raw = read_json(people_path(), default=[])
    out: List[PersonProfile] = []
    for row in raw if isinstance(raw, list) else []:
        try:
            out.append(PersonProfile.model_validate(row))
        except ValidationError as e:
            log.warning("skip person row: %d error(s)", e.error_count())
    return out

def load_person(person_id: str) -> Optional[PersonProfile]:
    for p in list_people():
        if p.id == person_id:
            return p
    return None

def upsert_person(person: PersonProfile) -> PersonProfile:
    with _IO_LOCK:
        people = [p for p in list_people() if p.id != person.id]
        people.append(person)
        write_json(people_path(), [p.model_dump(mode="json", by_alias=True) for p in people])
    return person

def load_wood_affinity() -> Dict[str, int]:
    with _IO_LOCK:
        raw = read_json(settings_path(), default={})
    aff = raw.get("woodAffinity") if isinstance(raw, dict) else None
    if not isinstance(aff, dict):
        return {}
    return {str(k): int(v) for k, v in aff.items() if isinstance(v, (int, float))}

# What it does:
# Record a history entry's effect on wood affinity. Only the affinity counter
# is persisted; the history entry itself belongs to the history store.
def record_history(entry: HistoryEntry, threshold: Optional[int] = None) -> Dict[str, int]:
    limit = AFFINITY_RATING_THRESHOLD if threshold is None else threshold
    with _IO_LOCK:
        raw = read_json(settings_path(), default={})
        settings = raw if isinstance(raw, dict) else {}
        updated = bump_wood_affinity(load_wood_affinity(), entry, limit)
        settings["woodAffinity"] = updated
        write_json(settings_path(), settings)
    return updated
