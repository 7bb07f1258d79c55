"""Typed containers shared across pipeline modules."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .config import Candidate


class Strategy(str, Enum):
    """How the final candidate ordering is produced."""

    RANK = "rank"
    MERGE = "merge"


@dataclass(frozen=True)
class ScoredCandidate:
    """A candidate that passed the price gate with a positive relevance score."""

    candidate: Candidate
    score: float
    price: float
    price_display: str
