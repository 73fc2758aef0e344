# barcart_backend/app/routers/smoker.py
from __future__ import annotations
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, status

from barcart_backend.app.schemas import CamelModel, Intensity, Recipe, SmokeMethod, Wood
from barcart_backend.app.services.data_stores import get_wood, load_woods, set_in_kit
from barcart_backend.app.services.guardrails import (
    allowed_methods,
    get_safe_smoke_time,
    get_safe_smoke_time_for_wood,
    smoke_method_guidance,
    troubleshoot,
    validate_recipe,
)

router = APIRouter(prefix="/smoker", tags=["smoker"])

class KitToggle(CamelModel):
    in_kit: bool

def _wood_or_404(name: str) -> Wood:
    wood = get_wood(name)
    if wood is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="wood not found")
    return wood

# What it does:
# Guardrail time for an arbitrary wood name + intensity.
@router.get("/safe-time")
def safe_time(wood: str, intensity: Intensity, time_max: Optional[int] = None):
    return {"wood": wood, "intensity": intensity.value, "seconds": get_safe_smoke_time(wood, intensity, time_max)}

@router.get("/woods", response_model=List[Wood])
def list_woods():
    return load_woods()

# What it does:
# Guardrail time + allowed methods for a wood from the library.
@router.get("/woods/{name}/safe-time")
def safe_time_for_wood(name: str):
    wood = _wood_or_404(name)
    return {
        "wood": wood.name,
        "intensity": wood.intensity.value,
        "seconds": get_safe_smoke_time_for_wood(wood),
        "methods": [m.value for m in allowed_methods(wood)],
    }

@router.patch("/woods/{name}/kit", response_model=Wood)
def toggle_kit(name: str, payload: KitToggle):
    wood = set_in_kit(name, payload.in_kit)
    if wood is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="wood not found")
    return wood

# What it does:
# Lint a smoked recipe; an empty list means nothing to flag.
@router.post("/lint")
def lint_recipe(recipe: Recipe) -> Dict[str, Any]:
    return {"warnings": validate_recipe(recipe)}

@router.get("/methods/{method}")
def method_tip(method: SmokeMethod):
    return {"method": method.value, "tip": smoke_method_guidance(method)}

@router.get("/troubleshoot")
def troubleshoot_issue(issue: str = ""):
    return {"tips": [{"issue": t.issue, "fix": t.fix} for t in troubleshoot(issue)]}
