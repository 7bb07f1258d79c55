from __future__ import annotations

"""
FastAPI application for the price matcher.

- /match takes already-fetched candidates and returns ranked matches
  (strategy "rank") or a deduplicated merge of two result lists
  (strategy "merge")
- /match/upstream does the same starting from raw marketplace payloads
- CORS is open by default so a browser extension can call the service
"""

import sys
from typing import Any, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from pydantic import BaseModel, Field, model_validator

from .config import (
    CORS_ALLOW_HEADERS,
    CORS_ALLOW_METHODS,
    CORS_ALLOW_ORIGINS,
    LOG_LEVEL,
    Candidate,
    HealthResponse,
    MatchResult,
    ReferenceItem,
)
from .pipeline import run_full_pipeline
from .pipeline_types import Strategy
from .upstream import UpstreamResponseError, candidates_from_payload


# -----------------------
# Request bodies
# -----------------------

def _check_strategy_inputs(strategy: Strategy, reference: Optional[ReferenceItem], has_secondary: bool) -> None:
    if strategy is Strategy.RANK:
        if reference is None:
            raise ValueError("strategy 'rank' requires a reference item")
        if has_secondary:
            raise ValueError("secondary results are only used by strategy 'merge'")


class MatchRequest(BaseModel):
    strategy: Strategy = Strategy.RANK
    reference: Optional[ReferenceItem] = None
    candidates: List[Candidate] = Field(default_factory=list)
    secondary: List[Candidate] = Field(default_factory=list)

    @model_validator(mode="after")
    def _validate_strategy(self) -> "MatchRequest":
        _check_strategy_inputs(self.strategy, self.reference, bool(self.secondary))
        return self


class UpstreamMatchRequest(BaseModel):
    strategy: Strategy = Strategy.RANK
    reference: Optional[ReferenceItem] = None
    payload: Any
    secondary_payload: Optional[Any] = None

    @model_validator(mode="after")
    def _validate_strategy(self) -> "UpstreamMatchRequest":
        _check_strategy_inputs(self.strategy, self.reference, self.secondary_payload is not None)
        return self


# -----------------------
# FastAPI app + startup
# -----------------------

app = FastAPI(title="pricematch")
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_methods=CORS_ALLOW_METHODS,
    allow_headers=CORS_ALLOW_HEADERS,
)


@app.on_event("startup")
def startup_event() -> None:
    logger.remove()
    logger.add(sys.stderr, level=LOG_LEVEL)
    logger.info("pricematch ready (log level {}, CORS origins {})", LOG_LEVEL, CORS_ALLOW_ORIGINS)


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="healthy")


@app.post("/match", response_model=MatchResult)
def match(req: MatchRequest):
    return run_full_pipeline(
        req.strategy,
        reference=req.reference,
        candidates=req.candidates,
        secondary=req.secondary,
    )


@app.post("/match/upstream", response_model=MatchResult)
def match_upstream(req: UpstreamMatchRequest):
    try:
        candidates = candidates_from_payload(req.payload)
        secondary = (
            candidates_from_payload(req.secondary_payload)
            if req.secondary_payload is not None
            else []
        )
    except UpstreamResponseError as e:
        logger.warning("Rejected upstream payload: {}", e)
        raise HTTPException(status_code=502, detail=str(e))

    return run_full_pipeline(
        req.strategy,
        reference=req.reference,
        candidates=candidates,
        secondary=secondary,
    )
