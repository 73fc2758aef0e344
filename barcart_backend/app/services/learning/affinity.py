# barcart_backend/app/services/learning/affinity.py
from __future__ import annotations
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from barcart_backend.app.schemas import HistoryEntry, PersonProfile, Recipe, SweetnessPref, Wood, WoodScore

# Purpose:
# Personalization layer. Two additive scorers:
# - woods against a drink/meal context plus the user's learned wood affinity
# - recipes against a person's sweetness preference and liked/disliked tags
# The only "learning" is bump_wood_affinity: +1 per well-rated smoked drink.

DRINK_TAG_MATCH = 2.0
DRINK_TAG_AVOID = -3.0
MEAL_TAG_MATCH = 2.0
IN_KIT_BONUS = 1.0
NOT_IN_KIT_PENALTY = -0.5

SWEETNESS_MATCH = 2
TAG_LIKE = 1
TAG_DISLIKE = -2

# Tags that line up with each sweetness preference.
_SWEETNESS_TAGS: Dict[SweetnessPref, Tuple[str, ...]] = {
    SweetnessPref.DRY: ("dry", "bitter"),
    SweetnessPref.SWEET: ("sweet", "fruity"),
}

def _matches(candidates: Iterable[str], context: Optional[Iterable[str]]) -> List[str]:
    ctx = set(context or [])
    return [t for t in candidates if t in ctx]

# What it does:
# Score one wood for a context. Avoid-tag penalties add no reason text so the
# UI never shows discouraging copy; reasons are joined with ". ".
def score_wood_for_context(
    wood: Wood,
    *,
    meal_tags: Optional[Sequence[str]] = None,
    drink_tags: Optional[Sequence[str]] = None,
    user_affinity: Optional[Mapping[str, int]] = None,
) -> WoodScore:
    score = 0.0
    reasons: List[str] = []

    if drink_tags:
        matches = _matches(wood.best_with_drink_tags, drink_tags)
        if matches:
            score += DRINK_TAG_MATCH * len(matches)
            reasons.append(f"Matches drink style ({', '.join(matches)})")
        conflicts = _matches(wood.avoid_with_drink_tags, drink_tags)
        if conflicts:
            score += DRINK_TAG_AVOID * len(conflicts)

    if meal_tags:
        matches = _matches(wood.best_with_food_tags, meal_tags)
        if matches:
            score += MEAL_TAG_MATCH * len(matches)
            reasons.append(f"Pairs with meal ({', '.join(matches)})")

    if user_affinity:
        affinity = user_affinity.get(wood.name, 0)
        if affinity:
            score += affinity
            if affinity > 0:
                reasons.append("Based on your history")

    # Practicality nudge, not a filter.
    score += IN_KIT_BONUS if wood.is_in_my_kit else NOT_IN_KIT_PENALTY

    return WoodScore(score=score, reason=". ".join(reasons))

# What it does:
# Stable descending sort of woods by context score; ties keep input order.
def rank_woods_for_context(
    woods: Sequence[Wood],
    *,
    meal_tags: Optional[Sequence[str]] = None,
    drink_tags: Optional[Sequence[str]] = None,
    user_affinity: Optional[Mapping[str, int]] = None,
) -> List[Tuple[Wood, WoodScore]]:
    scored = [
        (w, score_wood_for_context(w, meal_tags=meal_tags, drink_tags=drink_tags, user_affinity=user_affinity))
        for w in woods
    ]
    return sorted(scored, key=lambda pair: -pair[1].score)

def score_recipe_for_person(recipe: Recipe, person: PersonProfile) -> int:
    tags = set(recipe.tags)
    score = 0

    aligned = _SWEETNESS_TAGS.get(person.sweetness_pref, ())
    if any(t in tags for t in aligned):
        score += SWEETNESS_MATCH

    score += TAG_LIKE * sum(1 for t in person.liked_tags if t in tags)
    score += TAG_DISLIKE * sum(1 for t in person.disliked_tags if t in tags)
    return score

def rank_recipes_for_person(
    recipes: Sequence[Recipe],
    person: Optional[PersonProfile],
) -> Sequence[Recipe]:
    """
    Order recipes for a person, best first. Without a person the input is
    returned untouched (same object). Scores are computed once per recipe and
    the sort is stable, so equal scores keep catalog order.
    """
    if not person:
        return recipes
    scores = {id(r): score_recipe_for_person(r, person) for r in recipes}
    return sorted(recipes, key=lambda r: -scores[id(r)])

# What it does:
# Return a new affinity map with +1 for the wood a well-rated smoked drink
# used. Unrated, low-rated or unsmoked entries leave the map unchanged.
def bump_wood_affinity(
    affinity: Mapping[str, int],
    entry: HistoryEntry,
    threshold: int,
) -> Dict[str, int]:
    out = dict(affinity or {})
    if entry.smoked is None or not entry.smoked.wood:
        return out
    if entry.rating is None or entry.rating < threshold:
        return out
    out[entry.smoked.wood] = int(out.get(entry.smoked.wood, 0)) + 1
    return out
