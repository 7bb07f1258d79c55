# pricematch/rerank.py
from __future__ import annotations

import math
import re
from typing import FrozenSet, List, Optional, Sequence, Union

from loguru import logger

from . import config
from .config import Candidate
from .normalize import tokenize
from .pipeline_types import ScoredCandidate

_NUMBER_RE = re.compile(r"[-+]?\d+(?:\.\d+)?")


# ---------------------------------------------------------------------------
# Price helpers
# ---------------------------------------------------------------------------

def parse_price(raw: Union[str, float, int, None]) -> Optional[float]:
    """
    Best-effort numeric price from an upstream value.

    Numbers pass through; strings drop thousands separators and use the first
    decimal number they contain ("US $1,299.00" -> 1299.0). Anything else
    gives None. Finiteness and sign are checked by the caller.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        try:
            return float(raw)
        except OverflowError:
            return None
    if not isinstance(raw, str):
        return None
    m = _NUMBER_RE.search(raw.replace(",", ""))
    if not m:
        return None
    try:
        return float(m.group(0))
    except ValueError:
        return None


def format_price(price: float, currency: Optional[str] = None) -> str:
    code = (currency or "").strip() or config.DEFAULT_CURRENCY
    return f"{price:.{config.PRICE_DECIMALS}f} {code}"


# ---------------------------------------------------------------------------
# Similarity
# ---------------------------------------------------------------------------

def jaccard(a: FrozenSet[str], b: FrozenSet[str]) -> float:
    if not a or not b:
        return 0.0
    return len(a & b) / len(a | b)


def blend_scores(intent_score: float, context_score: float) -> float:
    return config.INTENT_WEIGHT * intent_score + config.CONTEXT_WEIGHT * context_score


def score_candidate(
    candidate: Candidate,
    title_keywords: FrozenSet[str],
    query_keywords: FrozenSet[str],
    reference_price: float,
) -> Optional[ScoredCandidate]:
    """
    Score one candidate against the reference item.

    Returns None when the candidate is not cheaper than the reference, has no
    usable price, or shares no keywords with either the title or the search
    phrase.
    """
    price = parse_price(candidate.sale_price)
    if price is None or not math.isfinite(price) or price <= 0:
        logger.debug("Rejecting {}: unusable price {!r}", candidate.product_id, candidate.sale_price)
        return None
    if price >= reference_price:
        logger.debug("Rejecting {}: price {} not below {}", candidate.product_id, price, reference_price)
        return None

    candidate_keywords = tokenize(candidate.title)
    intent_score = jaccard(query_keywords, candidate_keywords)
    context_score = jaccard(title_keywords, candidate_keywords)
    final_score = blend_scores(intent_score, context_score)
    if final_score <= 0:
        logger.debug("Rejecting {}: no keyword overlap", candidate.product_id)
        return None

    return ScoredCandidate(
        candidate=candidate,
        score=final_score,
        price=price,
        price_display=format_price(price, candidate.currency_code),
    )


def score_candidates(
    candidates: Sequence[Candidate],
    title_keywords: FrozenSet[str],
    query_keywords: FrozenSet[str],
    reference_price: float,
) -> List[ScoredCandidate]:
    scored: List[ScoredCandidate] = []
    for cand in candidates:
        sc = score_candidate(cand, title_keywords, query_keywords, reference_price)
        if sc is not None:
            scored.append(sc)
    return scored


def rank_candidates(scored: Sequence[ScoredCandidate]) -> List[ScoredCandidate]:
    """
    Order by score, highest first. Equal scores keep their input order.
    """
    return sorted(scored, key=lambda c: -c.score)
