# barcart_backend/app/services/drink_engine/fallback.py
from __future__ import annotations
import time
import uuid
from typing import Any, Mapping, Sequence

from barcart_backend.app.schemas import GeneratedDrink, Recipe

# What it does:
# Fresh per-drink id: gen_<epoch ms>_<7 hex chars>.
def generate_id() -> str:
    return f"gen_{int(time.time() * 1000)}_{uuid.uuid4().hex[:7]}"

# What it does:
# Project a catalog recipe into the batch-result shape. Ingredients were already
# normalized by the Recipe model, so they are copied as-is (NA-spirit flags
# included).
def recipe_to_generated_drink(recipe: Recipe, is_fallback: bool = False) -> GeneratedDrink:
    return GeneratedDrink(
        id=generate_id(),
        name=recipe.name,
        description=recipe.description,
        base_spirit=recipe.base_spirit,
        category=recipe.category,
        ingredients=[ing.model_copy() for ing in recipe.ingredients],
        steps=list(recipe.steps),
        glassware=recipe.glassware,
        garnish=recipe.garnish,
        tags=list(recipe.tags),
        is_fallback=is_fallback,
        source_recipe_id=recipe.id,
    )

# What it does:
# Build a fallback drink from a rulebook template, stamping a new id each time.
def fallback_drink(template: Mapping[str, Any], reason: str) -> GeneratedDrink:
    data = dict(template)
    data.pop("id", None)
    return GeneratedDrink(
        **data,
        id=generate_id(),
        is_fallback=True,
        fallback_reason=reason,
    )

# What it does:
# Cycle through the template list by current length until `minimum` is met.
# Duplicates are expected once the shortfall exceeds the template count.
def fill_with_fallbacks(
    drinks: list[GeneratedDrink],
    minimum: int,
    templates: Sequence[Mapping[str, Any]],
    reason: str,
) -> int:
    added = 0
    while len(drinks) < minimum:
        template = templates[len(drinks) % len(templates)]
        drinks.append(fallback_drink(template, reason))
        added += 1
    return added
