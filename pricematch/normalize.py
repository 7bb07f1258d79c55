from __future__ import annotations

"""
Text normalisation helpers shared by the smart filter and the scorer.

Public helpers:

* ordered_keywords(text) -> List[str]
    Keywords in first-occurrence order, duplicates dropped.

* tokenize(text) -> FrozenSet[str]
    The keyword set used for similarity; same tokens, no order.

Both lower-case the text, strip everything outside ``[a-z0-9\\s-]``, split on
whitespace and drop stop words, so titles and search phrases always see the
same view of text.
"""

import re
from typing import FrozenSet, List, Optional

from .constants import STOP_WORDS

_DISALLOWED_CHARS = re.compile(r"[^a-z0-9\s-]")


def _is_keyword(token: str) -> bool:
    return bool(token) and token not in STOP_WORDS


def ordered_keywords(text: Optional[str]) -> List[str]:
    """Keywords of ``text`` in the order they first appear."""
    if not text:
        return []
    if not isinstance(text, str):
        text = str(text)

    cleaned = _DISALLOWED_CHARS.sub("", text.lower())
    out: List[str] = []
    seen = set()
    for tok in cleaned.split():
        if tok in seen or not _is_keyword(tok):
            continue
        seen.add(tok)
        out.append(tok)
    return out


def tokenize(text: Optional[str]) -> FrozenSet[str]:
    """Normalised keyword set of ``text``; empty input gives an empty set."""
    return frozenset(ordered_keywords(text))
