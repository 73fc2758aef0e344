# schemas.py  (drink catalog, batch generation, woods, people, pairing)

from __future__ import annotations
from enum import Enum
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


# ===================== Base =====================

class CamelModel(BaseModel):
    # Accept both snake_case and the camelCase keys the web client sends.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ===================== Enums =====================

class DrinkCategory(str, Enum):
    ALCOHOLIC = "alcoholic"
    MOCKTAIL = "mocktail"
    KID_FRIENDLY = "kid-friendly"

class Intensity(str, Enum):
    LIGHT = "light"
    MEDIUM = "medium"
    BOLD = "bold"
    VERY_STRONG = "very-strong"

class SweetnessPref(str, Enum):
    DRY = "dry"
    BALANCED = "balanced"
    SWEET = "sweet"

class AbvComfort(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

class SeasonalPref(str, Enum):
    NEUTRAL = "neutral"
    WARM_WEATHER = "warm-weather"
    COOL_WEATHER = "cool-weather"

class RecipeStyle(str, Enum):
    CLASSIC = "classic"
    MODERN = "modern"
    TIKI = "tiki"
    SMOKY = "smoky"
    LOW_ABV = "low-abv"

class PairingMode(str, Enum):
    MEAL_TO_DRINK = "meal-to-drink"
    DRINK_TO_MEAL = "drink-to-meal"

class SmokeMethod(str, Enum):
    GLASS = "glass"
    COCKTAIL = "cocktail"
    GARNISH = "garnish"


# ===================== Ingredients / recipes =====================

_TEXT_FIELDS = ("name", "amount", "unit")

class Ingredient(CamelModel):
    name: str = ""
    amount: str = ""
    unit: str = ""
    is_optional: bool = False
    is_na_spirit: bool = Field(default=False, alias="isNASpirit")
    category: Optional[str] = None              # e.g. "spirit", "mixer"
    tags: List[str] = Field(default_factory=list)

    # Catalog rows come from hand-edited JSON: missing/null/numeric text fields
    # are coerced once here so the engine never sees a half-shaped ingredient.
    @model_validator(mode="before")
    @classmethod
    def _coerce_shape(cls, data: Any) -> Any:
        if isinstance(data, BaseModel):
            return data.model_dump()
        if isinstance(data, str):
            return {"name": data}
        if not isinstance(data, dict):
            return {}
        d = dict(data)
        for k in _TEXT_FIELDS:
            v = d.get(k)
            d[k] = "" if v is None else str(v)
        # Null flags mean "not set"; everything else goes through pydantic bool parsing.
        for k in ("is_optional", "isOptional", "is_na_spirit", "isNASpirit"):
            if k in d and d[k] is None:
                d.pop(k)
        if d.get("tags") is None:
            d.pop("tags", None)
        return d

class DrinkBase(CamelModel):
    name: str
    description: str = ""
    base_spirit: str = ""
    category: DrinkCategory
    ingredients: List[Ingredient] = Field(default_factory=list)
    steps: List[str] = Field(default_factory=list)
    glassware: str = ""
    garnish: str = ""
    tags: List[str] = Field(default_factory=list)

    # Hand-edited rows may carry null or scalar collections; treat them as empty.
    @field_validator("ingredients", "steps", "tags", mode="before")
    @classmethod
    def _list_or_empty(cls, v: Any) -> Any:
        return v if isinstance(v, (list, tuple)) else []

    @field_validator("description", "base_spirit", "glassware", "garnish", mode="before")
    @classmethod
    def _text_or_empty(cls, v: Any) -> Any:
        return "" if v is None else v

class Recipe(DrinkBase):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    style: Optional[RecipeStyle] = None
    is_smoked: bool = False
    recommended_wood: Optional[str] = None
    smoke_time: Optional[int] = None

class GeneratedDrink(DrinkBase):
    id: str
    is_fallback: bool = False
    fallback_reason: Optional[str] = None
    source_recipe_id: Optional[str] = None

class ValidationResult(BaseModel):
    valid: bool
    reason: Optional[str] = None


# ===================== Batch generation =====================

class BatchGenerationParams(CamelModel):
    person_id: Optional[str] = None
    occasion: Optional[str] = None
    inventory_ids: Optional[List[str]] = None
    include_kid_friendly: bool = False
    # Only meaningful when include_kid_friendly is set.
    allow_caffeine_in_kid_mocktails: bool = False
    allow_spicy_in_kid_mocktails: bool = False
    preferred_tags: Optional[List[str]] = None
    exclude_tags: Optional[List[str]] = None

class BatchGenerationResult(CamelModel):
    alcoholic: List[GeneratedDrink]
    mocktails_na: List[GeneratedDrink] = Field(alias="mocktailsNA")
    kid_mocktails_na: Optional[List[GeneratedDrink]] = Field(default=None, alias="kidMocktailsNA")
    generated_at: str
    params: BatchGenerationParams
    validation_passed: bool
    validation_errors: Optional[List[str]] = None


# ===================== Woods / people =====================

class Wood(CamelModel):
    id: Optional[str] = None
    name: str
    intensity: Intensity = Intensity.MEDIUM
    time_min: int = 5
    # None falls through to the per-wood cap table, then the default cap.
    time_max: Optional[int] = None
    flavor_tags: List[str] = Field(default_factory=list)
    best_with_drink_tags: List[str] = Field(default_factory=list)
    best_with_food_tags: List[str] = Field(default_factory=list)
    avoid_with_drink_tags: List[str] = Field(default_factory=list)
    is_in_my_kit: bool = False
    method_restriction: Optional[Literal["garnishOnly"]] = None

class PersonProfile(CamelModel):
    id: Optional[str] = None
    name: str = ""
    sweetness_pref: SweetnessPref = SweetnessPref.BALANCED
    abv_comfort: AbvComfort = AbvComfort.MEDIUM
    seasonal_pref: SeasonalPref = SeasonalPref.NEUTRAL
    liked_tags: List[str] = Field(default_factory=list)
    disliked_tags: List[str] = Field(default_factory=list)
    # Reserved for a learned ranker; not read by rank_recipes_for_person.
    taste_weights: Dict[str, float] = Field(default_factory=dict)

class SmokedInfo(CamelModel):
    wood: str
    time: Optional[int] = None
    method: Optional[str] = None

class HistoryEntry(CamelModel):
    recipe_id: str
    recipe_name: str = ""
    rating: Optional[int] = None
    notes: Optional[str] = None
    smoked: Optional[SmokedInfo] = None


# ===================== Scoring / pairing =====================

class WoodScore(BaseModel):
    score: float
    reason: str = ""

class WoodRecommendation(BaseModel):
    wood: str
    reason: str = ""

class PairingResult(CamelModel):
    match: str
    reason: str
    wood_recommendation: Optional[WoodRecommendation] = None
