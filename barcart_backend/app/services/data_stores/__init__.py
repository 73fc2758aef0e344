# barcart_backend/app/services/data_stores/__init__.py
"""
Unified export surface for the collaborator stores.

Import from here in routers, e.g.:
    from barcart_backend.app.services.data_stores import (
        load_recipes, load_woods, set_in_kit, load_person, load_wood_affinity,
    )
"""

from __future__ import annotations

# ---- Low-level IO helpers ----
from .io_utils import read_json, write_json, atomic_write  # noqa: F401

# ---- Recipe catalog ----
from .catalog import load_recipes, save_recipes, parse_recipes, recipes_path  # noqa: F401

# ---- Woods ----
from .woods import load_woods, save_woods, get_wood, set_in_kit  # noqa: F401

# ---- People / affinity ----
from .people import (  # noqa: F401
    list_people,
    load_person,
    upsert_person,
    load_wood_affinity,
    record_history,
)

__all__ = [
    "read_json", "write_json", "atomic_write",
    "load_recipes", "save_recipes", "parse_recipes", "recipes_path",
    "load_woods", "save_woods", "get_wood", "set_in_kit",
    "list_people", "load_person", "upsert_person", "load_wood_affinity", "record_history",
]
