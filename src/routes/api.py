"""
Content Page Editor - JSON API Routes

Provides:
- Health check (including the configured content API endpoint)
- Field validation for live feedback from the editor script
"""

import time
from typing import Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel

from src.config import APP_VERSION
from src.services.validation import validate_body, validate_content, validate_title

router = APIRouter(prefix="/api", tags=["API"])

# Track startup time for health check
_START_TIME = time.time()


# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------
class ValidateRequest(BaseModel):
    title: Optional[str] = None
    body: Optional[str] = None


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@router.get("/health")
async def health_check(request: Request):
    """Health check endpoint for the service."""
    uptime = round(time.time() - _START_TIME, 2)
    store = request.app.state.store

    return {
        "status": "ok" if store.error is None else "degraded",
        "content_api": store.service.base_url,
        "store": store.snapshot(),
        "uptime_seconds": uptime,
        "version": APP_VERSION,
    }


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------
@router.post("/validate")
async def api_validate(payload: ValidateRequest):
    """
    Validate the fields present in the request.

    Both fields given: the combined result.  One field given: only that
    field is checked, so the editor can validate the field being typed.
    """
    fields = payload.model_dump(exclude_unset=True)

    if "title" in fields and "body" in fields:
        return validate_content(payload.title, payload.body).to_dict()

    errors = []
    if "title" in fields:
        error = validate_title(payload.title)
        if error:
            errors.append(error.to_dict())
    if "body" in fields:
        error = validate_body(payload.body)
        if error:
            errors.append(error.to_dict())

    return {"isValid": not errors, "errors": errors}
