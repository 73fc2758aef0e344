# main.py: backend entrypoint
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from barcart_backend.app.config import APP_ENV, CORS_ORIGINS, LOG_LEVEL, ensure_data_dir_exists, validate_manifest
from barcart_backend.app.routers import generate, pairing, personalize, smoker
from barcart_backend.app.services.rules_loader import inventory

logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logging.getLogger("barcart").setLevel(LOG_LEVEL)
log = logging.getLogger("barcart.main")

app = FastAPI(title="Barcart API")

# --- CORS for Vite dev -------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Routers under /api ------------------------------------------------------
for _module in (generate, smoker, personalize, pairing):
    app.include_router(_module.router, prefix="/api")

@app.on_event("startup")
def _check_rules():
    ensure_data_dir_exists("library")
    m = validate_manifest()
    if m["missing_required"]:
        log.error("missing rulebooks: %s", ", ".join(m["missing_required"]))
    else:
        log.info("rulebooks ok (env=%s)", APP_ENV)

# --- Health ------------------------------------------------------------------
@app.get("/health")
def health():
    return {"ok": True}

@app.get("/api/health")
def api_health():
    # mirror the non-prefixed /health so the FE's /api/health succeeds
    return {"ok": True}

@app.get("/api/manifest")
def manifest():
    return {**validate_manifest(), "env": APP_ENV, "inventory": inventory()}
