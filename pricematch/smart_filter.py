from __future__ import annotations

"""
Structural conflict filter applied before scoring.

A reference item is usually one kind of accessory (a case, a charger, a
screen protector). Marketplace search happily returns neighbouring
categories for the same phone model, and those share most title words, so
overlap scoring alone cannot separate them.  This module detects the
reference's core noun and drops candidates whose titles mention a
conflicting product type.

It is a lossy heuristic: it only ever removes candidates, and survivors keep
their relative order.
"""

from typing import FrozenSet, Iterable, List, Mapping, Optional, Sequence

from loguru import logger

from .config import Candidate
from .constants import CONFLICT_MAP, PRODUCT_VOCABULARY


def detect_core_noun(
    reference_keywords: Iterable[str],
    vocabulary: FrozenSet[str] = PRODUCT_VOCABULARY,
) -> Optional[str]:
    """
    Return the first keyword that is a recognised product noun.

    Keywords are scanned in the order given; the pipeline passes title
    keywords first, then search-phrase keywords.
    """
    for tok in reference_keywords:
        if tok in vocabulary:
            return tok
    return None


def _has_conflict(title: str, forbidden: FrozenSet[str]) -> bool:
    lowered = (title or "").lower()
    return any(tok in lowered for tok in forbidden)


def smart_filter(
    candidates: Sequence[Candidate],
    reference_keywords: Iterable[str],
    vocabulary: FrozenSet[str] = PRODUCT_VOCABULARY,
    conflicts: Mapping[str, FrozenSet[str]] = CONFLICT_MAP,
) -> List[Candidate]:
    core = detect_core_noun(reference_keywords, vocabulary)
    if core is None:
        logger.debug("Smart filter: no core noun detected; keeping all {} candidates", len(candidates))
        return list(candidates)

    forbidden = conflicts.get(core)
    if not forbidden:
        logger.debug("Smart filter: core noun '{}' has no conflict rule", core)
        return list(candidates)

    kept = [c for c in candidates if not _has_conflict(c.title, forbidden)]
    logger.debug(
        "Smart filter: core noun '{}' dropped {} of {} candidates",
        core,
        len(candidates) - len(kept),
        len(candidates),
    )
    return kept
