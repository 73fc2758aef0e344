# barcart_backend/app/services/drink_engine/batch_composer.py
from __future__ import annotations
import logging
import random
from datetime import datetime, timezone
from typing import Callable, List, MutableSequence, Optional, Protocol, Sequence

from barcart_backend.app.schemas import (
    BatchGenerationParams,
    BatchGenerationResult,
    DrinkCategory,
    GeneratedDrink,
    Recipe,
    ValidationResult,
)
from barcart_backend.app.services.rules_loader import (
    BatchTables,
    ClassifierTables,
    batch_tables,
)
from .fallback import fill_with_fallbacks, recipe_to_generated_drink
from .validator import validate_kid_friendly, validate_non_alcoholic

log = logging.getLogger("barcart.batch")

# Purpose:
# Compose one batch: alcoholic, NA mocktails and (optionally) kid mocktails.
# Per category: filter → shuffle → take max → validate (NA categories) →
# pad to min with fallback templates → clamp to max. Then re-check counts and
# sweep the final NA/kid lists once more.

ALCOHOLIC = "alcoholic"
MOCKTAILS = "mocktails_na"
KIDS = "kid_mocktails_na"

class RandomSource(Protocol):
    def shuffle(self, x: MutableSequence) -> None: ...

Check = Callable[[GeneratedDrink], ValidationResult]

def _has_any_tag(recipe: Recipe, tags: Optional[Sequence[str]]) -> bool:
    if not tags:
        return False
    wanted = {t.lower() for t in tags}
    return any(t.lower() in wanted for t in recipe.tags)

# What it does:
# Shuffled candidate pool for one category. Excluded tags drop candidates up
# front; preferred tags float to the front after shuffling (random within
# each group).
def _candidates(
    recipes: Sequence[Recipe],
    category: DrinkCategory,
    params: BatchGenerationParams,
    rng: RandomSource,
) -> List[Recipe]:
    pool = [
        r for r in recipes
        if r.category == category and not _has_any_tag(r, params.exclude_tags)
    ]
    rng.shuffle(pool)
    if params.preferred_tags:
        preferred = [r for r in pool if _has_any_tag(r, params.preferred_tags)]
        rest = [r for r in pool if not _has_any_tag(r, params.preferred_tags)]
        pool = preferred + rest
    return pool

def _compose_category(
    key: str,
    recipes: Sequence[Recipe],
    category: DrinkCategory,
    params: BatchGenerationParams,
    rng: RandomSource,
    tables: BatchTables,
    errors: List[str],
    check: Optional[Check] = None,
    reject_label: str = "",
) -> List[GeneratedDrink]:
    target = tables.target_counts[key]
    drinks: List[GeneratedDrink] = []
    for recipe in _candidates(recipes, category, params, rng)[: target.max]:
        drink = recipe_to_generated_drink(recipe)
        if check is not None:
            result = check(drink)
            if not result.valid:
                # Rejected candidates are not replaced from the catalog.
                errors.append(f'Rejected {reject_label} "{recipe.name}": {result.reason}')
                log.debug("rejected %s %r: %s", key, recipe.name, result.reason)
                continue
        drinks.append(drink)

    added = fill_with_fallbacks(
        drinks, target.min, tables.fallback_templates[key], tables.fallback_reason
    )
    if added:
        log.debug("padded %s with %d fallback template(s)", key, added)
    return drinks[: target.max]

def generate_batch(
    recipes: Sequence[Recipe],
    params: BatchGenerationParams,
    *,
    rng: Optional[RandomSource] = None,
    tables: Optional[BatchTables] = None,
    classifier: Optional[ClassifierTables] = None,
    now: Optional[datetime] = None,
) -> BatchGenerationResult:
    """
    Build a batch from the catalog. Never raises for an empty or undersized
    catalog; fallback templates pad every requested category to its minimum.
    `validation_passed` is False when any list is out of range or any
    rejection / final-sweep error was recorded.
    """
    rng = rng or random.Random()
    tables = tables or batch_tables()
    errors: List[str] = []

    allow_caffeine = params.allow_caffeine_in_kid_mocktails
    allow_spicy = params.allow_spicy_in_kid_mocktails

    def na_check(d: GeneratedDrink) -> ValidationResult:
        return validate_non_alcoholic(d, tables=classifier)

    def kid_check(d: GeneratedDrink) -> ValidationResult:
        return validate_kid_friendly(d, allow_caffeine, allow_spicy, tables=classifier)

    alcoholic = _compose_category(
        ALCOHOLIC, recipes, DrinkCategory.ALCOHOLIC, params, rng, tables, errors,
    )
    mocktails = _compose_category(
        MOCKTAILS, recipes, DrinkCategory.MOCKTAIL, params, rng, tables, errors,
        check=na_check, reject_label="mocktail",
    )
    kids: Optional[List[GeneratedDrink]] = None
    if params.include_kid_friendly:
        kids = _compose_category(
            KIDS, recipes, DrinkCategory.KID_FRIENDLY, params, rng, tables, errors,
            check=kid_check, reject_label="kid mocktail",
        )

    counts = tables.target_counts
    alcoholic_valid = counts[ALCOHOLIC].contains(len(alcoholic))
    mocktails_valid = counts[MOCKTAILS].contains(len(mocktails))
    kid_valid = not params.include_kid_friendly or (
        kids is not None and counts[KIDS].contains(len(kids))
    )

    for drink in mocktails:
        result = na_check(drink)
        if not result.valid:
            errors.append(f'Final validation failed for "{drink.name}": {result.reason}')
    for drink in kids or []:
        result = kid_check(drink)
        if not result.valid:
            errors.append(f'Final validation failed for kid drink "{drink.name}": {result.reason}')

    passed = alcoholic_valid and mocktails_valid and kid_valid and not errors
    log.info(
        "batch composed: alcoholic=%d mocktails=%d kids=%s passed=%s errors=%d",
        len(alcoholic), len(mocktails), len(kids) if kids is not None else "-", passed, len(errors),
    )

    return BatchGenerationResult(
        alcoholic=alcoholic,
        mocktails_na=mocktails,
        kid_mocktails_na=kids,
        generated_at=(now or datetime.now(timezone.utc)).isoformat(),
        params=params,
        validation_passed=passed,
        validation_errors=errors or None,
    )
