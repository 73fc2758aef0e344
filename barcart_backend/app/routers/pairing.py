# barcart_backend/app/routers/pairing.py
from __future__ import annotations

from fastapi import APIRouter

from barcart_backend.app.schemas import CamelModel, PairingMode, PairingResult
from barcart_backend.app.services.data_stores import load_wood_affinity, load_woods
from barcart_backend.app.services.pairing.resolver import generate_pairing

router = APIRouter(prefix="/pairing", tags=["pairing"])

class PairingIn(CamelModel):
    input: str
    mode: PairingMode = PairingMode.MEAL_TO_DRINK
    has_smoker: bool = False

# What it does:
# Keyword pairing; woods and affinity are only read when a smoker is present.
@router.post("", response_model=PairingResult)
def pair(req: PairingIn):
    if not req.has_smoker:
        return generate_pairing(req.input, req.mode)
    return generate_pairing(
        req.input,
        req.mode,
        has_smoker=True,
        available_woods=load_woods(),
        user_affinity=load_wood_affinity(),
    )
