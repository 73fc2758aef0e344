# barcart_backend/app/services/drink_engine/__init__.py
from .classifier import (
    classify_ingredient,
    has_caffeine_ingredient,
    has_spicy_ingredient,
    is_alcoholic_ingredient,
)
from .validator import validate_kid_friendly, validate_non_alcoholic
from .batch_composer import RandomSource, generate_batch

__all__ = [
    "classify_ingredient",
    "has_caffeine_ingredient",
    "has_spicy_ingredient",
    "is_alcoholic_ingredient",
    "validate_kid_friendly",
    "validate_non_alcoholic",
    "RandomSource",
    "generate_batch",
]
