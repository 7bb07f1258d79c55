from __future__ import annotations
"""
Mapping utilities that turn pipeline output into API responses.

Centralises the mapping from ScoredCandidate into the MatchItem schema and the
first-seen deduplication used when two query orderings are merged.
"""

from typing import Iterable, List, Optional, Sequence

from loguru import logger

from . import config
from .config import Candidate, MatchItem, MergedResult, RankedResult
from .pipeline_types import ScoredCandidate


def dedup_merge(primary: Iterable[Candidate], secondary: Iterable[Candidate]) -> List[Candidate]:
    """
    Concatenate ``primary`` then ``secondary`` and keep the first record per
    product id. Primary entries win; order of first appearance is preserved.
    """
    seen = set()
    merged: List[Candidate] = []
    for cand in list(primary) + list(secondary):
        if cand.product_id in seen:
            continue
        seen.add(cand.product_id)
        merged.append(cand)
    return merged


def to_match_item(scored: ScoredCandidate, source_label: Optional[str] = None) -> MatchItem:
    cand = scored.candidate
    return MatchItem(
        title=cand.title,
        link=cand.promotion_link,
        price=scored.price,
        price_display=scored.price_display,
        source_label=source_label or config.SOURCE_LABEL,
        image_url=cand.image_url,
        score=scored.score,
    )


def map_ranked_to_response(
    ranked: Sequence[ScoredCandidate],
    source_label: Optional[str] = None,
) -> RankedResult:
    items = [to_match_item(sc, source_label) for sc in ranked]
    logger.info("Mapped {} ranked matches into API schema", len(items))
    return RankedResult(matches=items)


def map_merged_to_response(products: Sequence[Candidate]) -> MergedResult:
    logger.info("Mapped {} merged products into API schema", len(products))
    return MergedResult(products=list(products))
