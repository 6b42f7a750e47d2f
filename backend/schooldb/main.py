# backend/schooldb/main.py
import os
from typing import List

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .database import Base, engine
from .apps.storage import models as storage_models  # noqa: F401

from .apps.accounts.router import router as accounts_router
from .apps.inventory.router import router as inventory_router
from .apps.requisitions.router import router as requisitions_router
from .apps.dashboard.router import router as dashboard_router


def _allowed_origins() -> List[str]:
    """
    Parse CORS_ALLOWED_ORIGINS from env.

    Accepts comma-separated origins. If unset, defaults to local dev ports.
    """
    raw = os.getenv("CORS_ALLOWED_ORIGINS", "")
    if raw:
        origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
        if origins:
            return origins
    return [
        "http://127.0.0.1:5173",
        "http://localhost:5173",
        "http://localhost:4173",
    ]


Base.metadata.create_all(bind=engine)

app = FastAPI(title="School Supplies API", version="1.0.0")
cors_origins = _allowed_origins()
allow_credentials = "*" not in cors_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/", tags=["health"])
def read_root():
    return {"status": "ok", "message": "School supplies backend is running"}

@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}

app.include_router(accounts_router)
app.include_router(inventory_router)
app.include_router(requisitions_router)
app.include_router(dashboard_router)
