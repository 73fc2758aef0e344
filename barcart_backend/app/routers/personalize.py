# barcart_backend/app/routers/personalize.py
from __future__ import annotations
import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import Field

from barcart_backend.app.schemas import CamelModel, HistoryEntry, PersonProfile, Recipe, Wood, WoodScore
from barcart_backend.app.services.data_stores import (
    load_person,
    load_recipes,
    load_wood_affinity,
    load_woods,
    record_history,
)
from barcart_backend.app.services.learning.affinity import (
    rank_recipes_for_person,
    rank_woods_for_context,
    score_wood_for_context,
)

logger = logging.getLogger("uvicorn.error")

router = APIRouter(prefix="/personalize", tags=["personalize"])

class WoodScoreIn(CamelModel):
    wood: Wood
    meal_tags: Optional[List[str]] = None
    drink_tags: Optional[List[str]] = None
    user_affinity: Optional[Dict[str, int]] = None

class WoodRankIn(CamelModel):
    meal_tags: Optional[List[str]] = None
    drink_tags: Optional[List[str]] = None
    use_history: bool = True

class RankedWood(CamelModel):
    wood: Wood
    score: float
    reason: str = ""

class RecipeRankIn(CamelModel):
    person_id: Optional[str] = None
    person: Optional[PersonProfile] = None
    recipes: Optional[List[Recipe]] = None

@router.post("/woods/score", response_model=WoodScore)
def score_wood(req: WoodScoreIn):
    return score_wood_for_context(
        req.wood, meal_tags=req.meal_tags, drink_tags=req.drink_tags, user_affinity=req.user_affinity,
    )

# What it does:
# Rank the wood library for a context, optionally with learned affinity.
@router.post("/woods/rank", response_model=List[RankedWood])
def rank_woods(req: WoodRankIn):
    affinity = load_wood_affinity() if req.use_history else None
    ranked = rank_woods_for_context(
        load_woods(), meal_tags=req.meal_tags, drink_tags=req.drink_tags, user_affinity=affinity,
    )
    return [RankedWood(wood=w, score=s.score, reason=s.reason) for w, s in ranked]

# What it does:
# Order recipes for a person. An inline profile wins over a stored person id;
# with neither, recipes come back in catalog order.
@router.post("/recipes/rank", response_model=List[Recipe])
def rank_recipes(req: RecipeRankIn):
    person = req.person
    if person is None and req.person_id:
        person = load_person(req.person_id)
        if person is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="person not found")
    recipes = req.recipes if req.recipes is not None else load_recipes()
    return list(rank_recipes_for_person(recipes, person))

# What it does:
# Feed a finished drink back into wood affinity.
@router.post("/history")
def add_history(entry: HistoryEntry):
    try:
        affinity = record_history(entry)
    except OSError:
        logger.exception("Affinity update failed for %s", entry.recipe_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="affinity update failed")
    return {"ok": True, "woodAffinity": affinity}
