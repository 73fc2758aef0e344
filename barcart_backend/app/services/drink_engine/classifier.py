# barcart_backend/app/services/drink_engine/classifier.py
from __future__ import annotations
from typing import Dict, Iterable, Optional

from barcart_backend.app.services.rules_loader import ClassifierTables, classifier_tables

# Purpose:
# Keyword/category classification of a single ingredient. Everything is a
# lower-cased substring check against the classifier rulebook; tables can be
# injected for tests, otherwise the loaded rulebook is used.

def _tables(tables: Optional[ClassifierTables]) -> ClassifierTables:
    return tables or classifier_tables()

# What it does:
# Decide whether an ingredient carries alcohol.
# Order: explicit NA tag (wins outright) → alcoholic category → name keywords.
# A keyword hit in a name that also holds a neutralizer ("non-alcoholic",
# "na ", ...) is skipped and the scan moves on to the next keyword.
def is_alcoholic_ingredient(
    name: str,
    category: Optional[str] = None,
    tags: Optional[Iterable[str]] = None,
    *,
    tables: Optional[ClassifierTables] = None,
) -> bool:
    t = _tables(tables)
    name_lower = (name or "").lower()

    if tags:
        tag_set = {str(x).lower() for x in tags}
        if any(na in tag_set for na in t.na_tags):
            return False

    if category:
        cat_lower = category.lower()
        if any(cat in cat_lower for cat in t.alcoholic_categories):
            return True

    for keyword in t.alcoholic_keywords:
        if keyword not in name_lower:
            continue
        if any(n in name_lower for n in t.neutralizers):
            continue
        return True

    return False

# What it does:
# Plain containment checks. No neutralizer pass here, so "decaf coffee syrup"
# still counts as caffeinated.
def has_caffeine_ingredient(name: str, *, tables: Optional[ClassifierTables] = None) -> bool:
    name_lower = (name or "").lower()
    return any(k in name_lower for k in _tables(tables).caffeine_keywords)

def has_spicy_ingredient(name: str, *, tables: Optional[ClassifierTables] = None) -> bool:
    name_lower = (name or "").lower()
    return any(k in name_lower for k in _tables(tables).spicy_keywords)

def classify_ingredient(
    name: str,
    category: Optional[str] = None,
    tags: Optional[Iterable[str]] = None,
    *,
    tables: Optional[ClassifierTables] = None,
) -> Dict[str, bool]:
    return {
        "alcoholic": is_alcoholic_ingredient(name, category, tags, tables=tables),
        "caffeine": has_caffeine_ingredient(name, tables=tables),
        "spicy": has_spicy_ingredient(name, tables=tables),
    }
