"""FastAPI application entrypoint."""

import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from megadisp.api.routes import megawatt

CORS_ENV_VAR = "MEGADISP_CORS_ORIGINS"


def get_cors_origins() -> list[str]:
    """Comma-separated origins from the environment, ``*`` when unset."""
    raw = os.environ.get(CORS_ENV_VAR, "").strip()
    if not raw:
        return ["*"]
    return [origin.strip().rstrip("/") for origin in raw.split(",") if origin.strip()]


app = FastAPI(title="Megawatt Display API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(megawatt.router, prefix="/megawatt", tags=["megawatt"])


@app.get("/health", tags=["health"])
def healthcheck() -> dict[str, str]:
    """Simple health endpoint for uptime probes."""
    return {"status": "ok"}
