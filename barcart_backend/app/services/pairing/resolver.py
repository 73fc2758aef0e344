# barcart_backend/app/services/pairing/resolver.py
from __future__ import annotations
from typing import Mapping, Optional, Sequence, Union

from barcart_backend.app.schemas import PairingMode, PairingResult, Wood, WoodRecommendation
from barcart_backend.app.services.learning.affinity import rank_woods_for_context
from barcart_backend.app.services.rules_loader import PairingRule, PairingRules, pairing_rules

# Purpose:
# Keyword pairing between meals and drinks. Rules come from pairing.yaml and
# are tried in order; the first match wins and nothing is combined. With a
# smoker, wood-bearing rules attach a recommendation: either a fixed wood or,
# for ranked rules, the top-scoring available wood.

def _rule_matches(rule: PairingRule, text: str) -> bool:
    if not any(k in text for k in rule.any):
        return False
    if rule.also_any and not any(k in text for k in rule.also_any):
        return False
    return True

def _wood_for(
    rule: PairingRule,
    available_woods: Sequence[Wood],
    user_affinity: Optional[Mapping[str, int]],
) -> Optional[WoodRecommendation]:
    if rule.ranked_meal_tags is not None or rule.ranked_drink_tags is not None:
        ranked = rank_woods_for_context(
            available_woods,
            meal_tags=rule.ranked_meal_tags,
            drink_tags=rule.ranked_drink_tags,
            user_affinity=user_affinity,
        )
        if not ranked:
            return None
        wood, scored = ranked[0]
        return WoodRecommendation(wood=wood.name, reason=scored.reason)
    if rule.wood_name:
        return WoodRecommendation(wood=rule.wood_name, reason=rule.wood_reason or "")
    return None

def generate_pairing(
    text: str,
    mode: Union[PairingMode, str],
    *,
    has_smoker: bool = False,
    available_woods: Optional[Sequence[Wood]] = None,
    user_affinity: Optional[Mapping[str, int]] = None,
    rules: Optional[PairingRules] = None,
) -> PairingResult:
    r = rules or pairing_rules()
    lowered = (text or "").lower()
    rule_set = r.meal_to_drink if PairingMode(mode) == PairingMode.MEAL_TO_DRINK else r.drink_to_meal

    for rule in rule_set.rules:
        if not _rule_matches(rule, lowered):
            continue
        result = PairingResult(match=rule.match, reason=rule.reason)
        if has_smoker:
            result.wood_recommendation = _wood_for(rule, available_woods or [], user_affinity)
        return result

    return PairingResult(match=rule_set.default_match, reason=rule_set.default_reason)
