# barcart_backend/app/routers/generate.py
from __future__ import annotations
from typing import List, Optional

from fastapi import APIRouter
from pydantic import Field

from barcart_backend.app.schemas import (
    BatchGenerationParams,
    BatchGenerationResult,
    CamelModel,
    Ingredient,
    Recipe,
    ValidationResult,
)
from barcart_backend.app.services.data_stores import load_recipes
from barcart_backend.app.services.drink_engine import (
    classify_ingredient,
    generate_batch,
    validate_kid_friendly,
    validate_non_alcoholic,
)

router = APIRouter(tags=["generate"])

class InlineBatchRequest(CamelModel):
    params: BatchGenerationParams
    recipes: List[Recipe] = Field(default_factory=list)

class DrinkCheckIn(CamelModel):
    ingredients: List[Ingredient] = Field(default_factory=list)
    allow_caffeine: bool = False
    allow_spicy: bool = False

# What it does:
# Compose a batch from the stored catalog.
@router.post("/generate/batch", response_model=BatchGenerationResult)
def generate_from_catalog(params: BatchGenerationParams):
    return generate_batch(load_recipes(), params)

# What it does:
# Compose a batch from recipes sent with the request (imports, previews).
@router.post("/generate/batch/inline", response_model=BatchGenerationResult)
def generate_from_inline(req: InlineBatchRequest):
    return generate_batch(req.recipes, req.params)

@router.post("/validate/non-alcoholic", response_model=ValidationResult)
def check_non_alcoholic(drink: DrinkCheckIn):
    return validate_non_alcoholic(drink)

@router.post("/validate/kid-friendly", response_model=ValidationResult)
def check_kid_friendly(drink: DrinkCheckIn):
    return validate_kid_friendly(drink, drink.allow_caffeine, drink.allow_spicy)

@router.get("/classify")
def classify(name: str, category: Optional[str] = None):
    return {"name": name, **classify_ingredient(name, category)}
