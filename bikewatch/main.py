from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from bikewatch.adapters.api.controllers.traffic import router as traffic_router
from bikewatch.domain.exceptions import (
    BikewatchError,
    DatasetError,
    InvalidTimeSelection,
)

logger = logging.getLogger("uvicorn.error")

app = FastAPI(title="Bikewatch")
app.include_router(traffic_router)


def _reveal_errors() -> bool:
    flag = (os.getenv("BIKEWATCH_REVEAL_ERRORS") or "").strip().lower()
    return flag in {"1", "true", "yes", "on"}


def _status_for(exc: BikewatchError) -> int:
    if isinstance(exc, InvalidTimeSelection):
        return 422
    if isinstance(exc, DatasetError):
        return 503
    return 500


@app.exception_handler(BikewatchError)
async def bikewatch_error_handler(request: Request, exc: BikewatchError) -> JSONResponse:
    """Map domain failures onto status codes the map view can act on."""

    status = _status_for(exc)
    logger.warning("%s on %s: %s", exc.__class__.__name__, request.url.path, exc)
    return JSONResponse(
        status_code=status,
        content={"detail": str(exc) or exc.__class__.__name__, "status": status},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception on %s", request.url.path)
    detail = str(exc) if _reveal_errors() and str(exc) else "Internal Server Error"
    return JSONResponse(status_code=500, content={"detail": detail, "status": 500})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
