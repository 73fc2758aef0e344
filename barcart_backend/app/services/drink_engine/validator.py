# barcart_backend/app/services/drink_engine/validator.py
from __future__ import annotations
from typing import Iterable, Optional, Protocol

from barcart_backend.app.schemas import Ingredient, ValidationResult
from barcart_backend.app.services.rules_loader import ClassifierTables
from .classifier import has_caffeine_ingredient, has_spicy_ingredient, is_alcoholic_ingredient

# Purpose:
# Drink-level checks built on the ingredient classifier. Both return the first
# violation only; reasons name the offending ingredient verbatim.

class HasIngredients(Protocol):
    ingredients: Iterable[Ingredient]

def validate_non_alcoholic(
    drink: HasIngredients,
    *,
    tables: Optional[ClassifierTables] = None,
) -> ValidationResult:
    for ing in drink.ingredients:
        # An explicitly tagged NA spirit skips keyword classification entirely.
        if ing.is_na_spirit:
            continue
        if is_alcoholic_ingredient(ing.name, ing.category, ing.tags, tables=tables):
            return ValidationResult(valid=False, reason=f"Contains alcoholic ingredient: {ing.name}")
    return ValidationResult(valid=True)

# What it does:
# alcohol → caffeine → spice; first failure wins and is returned unchanged.
def validate_kid_friendly(
    drink: HasIngredients,
    allow_caffeine: bool,
    allow_spicy: bool,
    *,
    tables: Optional[ClassifierTables] = None,
) -> ValidationResult:
    na_check = validate_non_alcoholic(drink, tables=tables)
    if not na_check.valid:
        return na_check

    if not allow_caffeine:
        for ing in drink.ingredients:
            if has_caffeine_ingredient(ing.name, tables=tables):
                return ValidationResult(valid=False, reason=f"Contains caffeine: {ing.name}")

    if not allow_spicy:
        for ing in drink.ingredients:
            if has_spicy_ingredient(ing.name, tables=tables):
                return ValidationResult(valid=False, reason=f"Contains spicy ingredient: {ing.name}")

    return ValidationResult(valid=True)
