from __future__ import annotations
"""
Matching pipeline.

raw candidates -> smart filter -> score -> rank   (Strategy.RANK)
raw candidates + secondary -> dedup-merge          (Strategy.MERGE)

Both strategies produce the final candidate ordering; the caller picks one
depending on how the candidates were fetched (one query, or two parallel
queries with different orderings).
"""

from typing import Optional, Sequence, Union

from loguru import logger

from .config import Candidate, MergedResult, RankedResult, ReferenceItem
from .mapping import dedup_merge, map_merged_to_response, map_ranked_to_response
from .normalize import ordered_keywords
from .pipeline_types import Strategy
from .rerank import rank_candidates, score_candidates
from .smart_filter import smart_filter


def run_rank(
    reference: ReferenceItem,
    candidates: Sequence[Candidate],
    source_label: Optional[str] = None,
) -> RankedResult:
    title_order = ordered_keywords(reference.title)
    query_order = ordered_keywords(reference.search_query)
    title_keywords = frozenset(title_order)
    query_keywords = frozenset(query_order)

    # title keywords first so the core noun comes from the listing itself
    filtered = smart_filter(candidates, title_order + query_order)
    scored = score_candidates(filtered, title_keywords, query_keywords, reference.price)
    ranked = rank_candidates(scored)

    logger.info(
        "Rank pipeline: {} candidates -> {} after smart filter -> {} scored (category={})",
        len(candidates),
        len(filtered),
        len(ranked),
        reference.category,
    )
    return map_ranked_to_response(ranked, source_label)


def run_merge(
    candidates: Sequence[Candidate],
    secondary: Sequence[Candidate] = (),
) -> MergedResult:
    merged = dedup_merge(candidates, secondary)
    logger.info(
        "Merge pipeline: {} + {} candidates -> {} unique",
        len(candidates),
        len(secondary),
        len(merged),
    )
    return map_merged_to_response(merged)


def run_full_pipeline(
    strategy: Union[Strategy, str],
    reference: Optional[ReferenceItem] = None,
    candidates: Sequence[Candidate] = (),
    secondary: Sequence[Candidate] = (),
    source_label: Optional[str] = None,
) -> Union[RankedResult, MergedResult]:
    strategy = Strategy(strategy)
    if strategy is Strategy.MERGE:
        return run_merge(candidates, secondary)

    if reference is None:
        raise ValueError("The rank strategy needs a reference item")
    if secondary:
        logger.warning("Rank pipeline ignores {} secondary candidates", len(secondary))
    return run_rank(reference, candidates, source_label)
