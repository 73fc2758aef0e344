# barcart_backend/app/services/rules_loader.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

from barcart_backend.app.config.paths import resolve_rules_file

# -----------------------------------------------------------------------------
# Logger
# -----------------------------------------------------------------------------
log = logging.getLogger("barcart.rules_loader")

# -----------------------------------------------------------------------------
# Internal IO helpers
# -----------------------------------------------------------------------------
def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")

def _load_yaml_from(path: Path) -> Any:
    try:
        txt = _read_text(path)
        return yaml.safe_load(txt)
    except FileNotFoundError:
        raise
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

# -----------------------------------------------------------------------------
# Public loader API
# -----------------------------------------------------------------------------
@lru_cache(maxsize=32)
def load_yaml_rules(filename: str) -> Any:
    """
    Load a YAML rulebook from the rules dir.
    Raises FileNotFoundError if not present.
    """
    path = resolve_rules_file(filename)
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found: {path}")
    obj = _load_yaml_from(path)
    log.info("[rules] loaded %s from %s", filename, path)
    return obj

def has_rules_file(filename: str) -> bool:
    return resolve_rules_file(filename).exists()

def _lower_tuple(values: Optional[List[Any]]) -> Tuple[str, ...]:
    return tuple(str(v).lower() for v in (values or []) if v is not None)

def _require(doc: Any, key: str, filename: str) -> Any:
    if not isinstance(doc, dict) or key not in doc:
        raise ValueError(f"Rulebook {filename} is missing '{key}'")
    return doc[key]

# -----------------------------------------------------------------------------
# Typed tables
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ClassifierTables:
    na_tags: Tuple[str, ...]
    neutralizers: Tuple[str, ...]
    alcoholic_categories: Tuple[str, ...]
    alcoholic_keywords: Tuple[str, ...]
    caffeine_keywords: Tuple[str, ...]
    spicy_keywords: Tuple[str, ...]

@dataclass(frozen=True)
class CountRange:
    min: int
    max: int

    def contains(self, n: int) -> bool:
        return self.min <= n <= self.max

@dataclass(frozen=True)
class BatchTables:
    target_counts: Mapping[str, CountRange]
    fallback_reason: str
    # Raw template dicts; callers copy them into GeneratedDrink models.
    fallback_templates: Mapping[str, Tuple[Mapping[str, Any], ...]]

@dataclass(frozen=True)
class TroubleshootingTip:
    issue: str
    fix: str

@dataclass(frozen=True)
class SmokerRules:
    caps: Mapping[str, int]
    default_cap: int
    intensity_factors: Mapping[str, float]
    very_strong_ceiling: int
    min_seconds: int
    max_bitters: int
    methods: Mapping[str, str]
    troubleshooting: Tuple[TroubleshootingTip, ...]

@dataclass(frozen=True)
class PairingRule:
    any: Tuple[str, ...]
    match: str
    reason: str
    also_any: Tuple[str, ...] = ()
    wood_name: Optional[str] = None
    wood_reason: Optional[str] = None
    # When set, the wood is picked by ranking the available woods.
    ranked_meal_tags: Optional[Tuple[str, ...]] = None
    ranked_drink_tags: Optional[Tuple[str, ...]] = None

@dataclass(frozen=True)
class PairingRuleSet:
    rules: Tuple[PairingRule, ...]
    default_match: str
    default_reason: str

@dataclass(frozen=True)
class PairingRules:
    meal_to_drink: PairingRuleSet
    drink_to_meal: PairingRuleSet

# -----------------------------------------------------------------------------
# Typed accessors (loaded once; cached)
# -----------------------------------------------------------------------------
@lru_cache(maxsize=1)
def classifier_tables() -> ClassifierTables:
    doc = load_yaml_rules("classifier.yaml")
    return ClassifierTables(
        na_tags=_lower_tuple(_require(doc, "na_tags", "classifier.yaml")),
        neutralizers=_lower_tuple(_require(doc, "neutralizers", "classifier.yaml")),
        alcoholic_categories=_lower_tuple(_require(doc, "alcoholic_categories", "classifier.yaml")),
        alcoholic_keywords=_lower_tuple(_require(doc, "alcoholic_keywords", "classifier.yaml")),
        caffeine_keywords=_lower_tuple(_require(doc, "caffeine_keywords", "classifier.yaml")),
        spicy_keywords=_lower_tuple(_require(doc, "spicy_keywords", "classifier.yaml")),
    )

@lru_cache(maxsize=1)
def batch_tables() -> BatchTables:
    doc = load_yaml_rules("batch.yaml")
    counts: Dict[str, CountRange] = {}
    for key, rng in (_require(doc, "target_counts", "batch.yaml") or {}).items():
        counts[key] = CountRange(min=int(rng["min"]), max=int(rng["max"]))
    templates: Dict[str, Tuple[Mapping[str, Any], ...]] = {}
    for key, items in (_require(doc, "fallback_templates", "batch.yaml") or {}).items():
        if not items:
            raise ValueError(f"batch.yaml: fallback template list '{key}' is empty")
        templates[key] = tuple(MappingProxyType(dict(t)) for t in items)
    for key in counts:
        if key not in templates:
            raise ValueError(f"batch.yaml: no fallback templates for '{key}'")
    return BatchTables(
        target_counts=MappingProxyType(counts),
        fallback_reason=str(doc.get("fallback_reason") or ""),
        fallback_templates=MappingProxyType(templates),
    )

@lru_cache(maxsize=1)
def smoker_rules() -> SmokerRules:
    doc = load_yaml_rules("smoker.yaml")
    tips = tuple(
        TroubleshootingTip(issue=str(t["issue"]), fix=str(t["fix"]))
        for t in (doc.get("troubleshooting") or [])
    )
    return SmokerRules(
        caps=MappingProxyType({str(k): int(v) for k, v in (doc.get("caps") or {}).items()}),
        default_cap=int(_require(doc, "default_cap", "smoker.yaml")),
        intensity_factors=MappingProxyType(
            {str(k): float(v) for k, v in (_require(doc, "intensity_factors", "smoker.yaml") or {}).items()}
        ),
        very_strong_ceiling=int(_require(doc, "very_strong_ceiling", "smoker.yaml")),
        min_seconds=int(_require(doc, "min_seconds", "smoker.yaml")),
        max_bitters=int(doc.get("max_bitters", 3)),
        methods=MappingProxyType({str(k): str(v) for k, v in (doc.get("methods") or {}).items()}),
        troubleshooting=tips,
    )

def _pairing_rule(raw: Dict[str, Any]) -> PairingRule:
    wood = raw.get("wood") or {}
    ranked = wood.get("ranked") if isinstance(wood, dict) else None
    return PairingRule(
        any=_lower_tuple(raw.get("any")),
        also_any=_lower_tuple(raw.get("also_any")),
        match=str(raw["match"]),
        reason=str(raw["reason"]),
        wood_name=wood.get("name") if isinstance(wood, dict) else None,
        wood_reason=wood.get("reason") if isinstance(wood, dict) else None,
        ranked_meal_tags=_lower_tuple(ranked.get("meal_tags")) if ranked else None,
        ranked_drink_tags=_lower_tuple(ranked.get("drink_tags")) if ranked else None,
    )

def _pairing_rule_set(doc: Dict[str, Any], key: str) -> PairingRuleSet:
    section = _require(doc, key, "pairing.yaml")
    default = _require(section, "default", "pairing.yaml")
    return PairingRuleSet(
        rules=tuple(_pairing_rule(r) for r in (section.get("rules") or [])),
        default_match=str(default["match"]),
        default_reason=str(default["reason"]),
    )

@lru_cache(maxsize=1)
def pairing_rules() -> PairingRules:
    doc = load_yaml_rules("pairing.yaml")
    return PairingRules(
        meal_to_drink=_pairing_rule_set(doc, "meal_to_drink"),
        drink_to_meal=_pairing_rule_set(doc, "drink_to_meal"),
    )

@lru_cache(maxsize=1)
def seed_woods() -> Tuple[Mapping[str, Any], ...]:
    doc = load_yaml_rules("woods.yaml")
    return tuple(MappingProxyType(dict(w)) for w in (_require(doc, "woods", "woods.yaml") or []))

def inventory() -> Dict[str, Dict[str, bool]]:
    """Which known rulebooks exist on disk (for the manifest endpoint)."""
    names = ("classifier.yaml", "batch.yaml", "smoker.yaml", "pairing.yaml", "woods.yaml")
    return {"rules": {n: has_rules_file(n) for n in names}}

__all__ = [
    "load_yaml_rules", "has_rules_file", "inventory",
    "ClassifierTables", "CountRange", "BatchTables", "SmokerRules",
    "TroubleshootingTip", "PairingRule", "PairingRuleSet", "PairingRules",
    "classifier_tables", "batch_tables", "smoker_rules", "pairing_rules", "seed_woods",
]
