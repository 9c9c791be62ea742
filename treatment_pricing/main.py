"""FastAPI application for treatment pricing -- REST endpoints over the facade."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from treatment_pricing.algorithms import (
    ALGORITHM_VERSION,
    calculate_treatment,
    calculate_treatment_quick,
    validate_calculation_input,
)
from treatment_pricing.config.settings import get_settings
from treatment_pricing.errors import InvalidArgument, InvalidConfiguration
from treatment_pricing.hooks.audit_hooks import log_calculation
from treatment_pricing.models.contracts import MarkupConfig, MarkupKey, MarkupResult
from treatment_pricing.pricing.loader import load_markup_config
from treatment_pricing.pricing.markup import resolve_markup
from treatment_pricing.records import to_treatment_record

settings = get_settings()

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Treatment Pricing API", version=ALGORITHM_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class CalculateRequest(BaseModel):
    input: dict[str, Any]
    markup_config: Optional[MarkupConfig] = None
    markup_key: Optional[MarkupKey] = None


class ResolveMarkupRequest(BaseModel):
    key: MarkupKey
    markup_config: Optional[MarkupConfig] = None


@lru_cache
def default_markup_config() -> MarkupConfig:
    """Markup config used when a request does not carry its own."""
    path = Path(settings.markup_config_path) if settings.markup_config_path else None
    config = load_markup_config(path)
    logger.info("Loaded markup config from %s", path or "bundled defaults")
    return config


@app.exception_handler(InvalidArgument)
async def invalid_argument_handler(request: Request, exc: InvalidArgument):
    return JSONResponse(
        status_code=400,
        content={"error": "invalid_argument", "detail": str(exc), "field": exc.field},
    )


@app.exception_handler(InvalidConfiguration)
async def invalid_configuration_handler(request: Request, exc: InvalidConfiguration):
    return JSONResponse(
        status_code=422,
        content={
            "error": "pricing_not_configured",
            "detail": str(exc),
            "section": exc.section,
            "missing_fields": exc.missing_fields,
        },
    )


@app.post("/api/calculations")
async def create_calculation(body: CalculateRequest):
    """Price a treatment and return the result plus the row to persist."""
    request_id = str(uuid4())
    result = calculate_treatment(
        body.input,
        markup_config=body.markup_config or default_markup_config(),
        markup_key=body.markup_key,
        currency_symbol=settings.currency_symbol,
    )
    log_calculation(result, request_id=request_id)
    return {
        "request_id": request_id,
        "result": result.model_dump(mode="json"),
        "record": to_treatment_record(result),
    }


@app.post("/api/calculations/quick")
async def quick_calculation(body: CalculateRequest):
    """Preview totals; nothing here is meant to be stored."""
    return calculate_treatment_quick(
        body.input, markup_config=body.markup_config or default_markup_config()
    )


@app.post("/api/calculations/validate")
async def validate_calculation(body: dict[str, Any]):
    errors = validate_calculation_input(body)
    return {"valid": not errors, "errors": errors}


@app.post("/api/markup/resolve", response_model=MarkupResult)
async def resolve_markup_endpoint(body: ResolveMarkupRequest):
    return resolve_markup(body.key, body.markup_config or default_markup_config())


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok", "algorithm_version": ALGORITHM_VERSION}
