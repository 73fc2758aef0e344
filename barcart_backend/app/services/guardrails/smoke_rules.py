# barcart_backend/app/services/guardrails/smoke_rules.py
from __future__ import annotations
import math
from typing import Any, List, Optional, Union

from barcart_backend.app.schemas import Intensity, SmokeMethod, Wood
from barcart_backend.app.services.rules_loader import SmokerRules, TroubleshootingTip, smoker_rules

# Purpose:
# Deterministic smoke guardrails. These are never learned or overridden by
# personalization: a cap per wood, an intensity → time mapping clamped to
# [min_seconds, cap], and lint warnings for smoked recipes.

def _rules(rules: Optional[SmokerRules]) -> SmokerRules:
    return rules or smoker_rules()

# What it does:
# Resolve the cap: explicit time_max > per-wood table > default cap.
# Wood names match the table case-insensitively.
def resolve_cap(wood_name: str, time_max: Optional[int] = None, *, rules: Optional[SmokerRules] = None) -> int:
    r = _rules(rules)
    if time_max is not None and time_max > 0:
        return int(time_max)
    key = (wood_name or "").strip().lower()
    for name, cap in r.caps.items():
        if name.lower() == key:
            return cap
    return r.default_cap

def get_safe_smoke_time(
    wood_name: str,
    intensity: Union[Intensity, str],
    time_max: Optional[int] = None,
    *,
    rules: Optional[SmokerRules] = None,
) -> int:
    """
    Seconds of smoke for a wood at an intensity tier.
    light/medium/bold use a floored share of the cap; very-strong is
    min(cap, very_strong_ceiling). Result is clamped to [min_seconds, cap].
    Raises ValueError for an unknown intensity.
    """
    r = _rules(rules)
    cap = resolve_cap(wood_name, time_max, rules=r)
    tier = Intensity(intensity).value

    if tier == Intensity.VERY_STRONG.value:
        raw = min(cap, r.very_strong_ceiling)
    else:
        factor = r.intensity_factors.get(tier)
        if factor is None:
            raise ValueError(f"no intensity factor configured for '{tier}'")
        raw = math.floor(round(cap * factor, 6))

    # Lower bound first so a cap under min_seconds still wins.
    return min(cap, max(r.min_seconds, raw))

def get_safe_smoke_time_for_wood(wood: Wood, *, rules: Optional[SmokerRules] = None) -> int:
    return get_safe_smoke_time(wood.name, wood.intensity, wood.time_max, rules=rules)

# -----------------------------------------------------------------------------
# Recipe lint
# -----------------------------------------------------------------------------
def _get(obj: Any, key: str, default: Any = None) -> Any:
    if isinstance(obj, dict):
        return obj.get(key, default)
    return getattr(obj, key, default)

def _ingredient_name(ing: Any) -> str:
    if isinstance(ing, str):
        return ing
    return str(_get(ing, "name", "") or "")

# What it does:
# Two independent checks for smoked recipes: too many bitters ingredients, and
# no step that mentions smoke. Accepts a Recipe model or a raw dict.
def validate_recipe(recipe: Any, *, rules: Optional[SmokerRules] = None) -> List[str]:
    r = _rules(rules)
    warnings: List[str] = []
    is_smoked = bool(_get(recipe, "is_smoked", None) or _get(recipe, "isSmoked", False))
    if not is_smoked:
        return warnings

    ingredients = _get(recipe, "ingredients", None) or []
    bitters_count = sum(1 for i in ingredients if "bitters" in _ingredient_name(i).lower())
    if bitters_count > r.max_bitters:
        warnings.append(
            f"Smoked drinks should have max {r.max_bitters} dashes of bitters total. "
            "Reduce bitters by 30-50%."
        )

    steps = _get(recipe, "steps", None) or []
    if not any("smoke" in str(s).lower() for s in steps):
        warnings.append("Smoked flag is on, but no smoking step found. Add 'Smoke the glass' to steps.")

    return warnings

# -----------------------------------------------------------------------------
# Method guidance / troubleshooting
# -----------------------------------------------------------------------------
def allowed_methods(wood: Wood) -> List[SmokeMethod]:
    if wood.method_restriction == "garnishOnly":
        return [SmokeMethod.GARNISH]
    return list(SmokeMethod)

def smoke_method_guidance(method: Union[SmokeMethod, str], *, rules: Optional[SmokerRules] = None) -> str:
    return _rules(rules).methods.get(SmokeMethod(method).value, "")

def troubleshoot(issue: str = "", *, rules: Optional[SmokerRules] = None) -> List[TroubleshootingTip]:
    tips = _rules(rules).troubleshooting
    q = (issue or "").strip().lower()
    if not q:
        return list(tips)
    return [t for t in tips if q in t.issue.lower()]
