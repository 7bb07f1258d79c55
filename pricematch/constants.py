from __future__ import annotations

"""Fixed vocabulary used by the tokenizer and the smart filter.

Everything here is built once at import time and never mutated; callers get
frozensets and a read-only mapping so the same objects can be shared by every
request.
"""

from types import MappingProxyType
from typing import FrozenSet, Mapping

STOP_WORDS: FrozenSet[str] = frozenset(
    {
        # function words
        "a", "an", "and", "the", "for", "with", "of", "in", "on", "to",
        "by", "or", "at", "from", "is", "are", "this", "that", "your",
        "you", "it", "as",
        # marketplace filler
        "new", "hot", "sale", "free", "shipping",
    }
)

PRODUCT_VOCABULARY: FrozenSet[str] = frozenset(
    {
        "case",
        "cover",
        "protector",
        "charger",
        "cable",
        "adapter",
        "strap",
        "band",
        "holder",
        "mount",
        "stand",
        "earbuds",
        "headphones",
        "keyboard",
        "mouse",
    }
)

_SCREEN_PROTECTION = frozenset({"screen", "protector", "tempered", "glass", "film"})
_POWER = frozenset({"charger", "cable", "adapter"})
_SHELLS = frozenset({"case", "cover"})

CONFLICT_MAP: Mapping[str, FrozenSet[str]] = MappingProxyType(
    {
        "case": _SCREEN_PROTECTION | _POWER | {"strap", "holder", "mount"},
        "cover": _SCREEN_PROTECTION | _POWER | {"strap", "holder", "mount"},
        "protector": _SHELLS | _POWER | {"strap"},
        "charger": _SHELLS | _SCREEN_PROTECTION | {"holder", "mount", "strap"},
        "cable": _SHELLS | _SCREEN_PROTECTION | {"holder", "mount", "strap"},
        "adapter": _SHELLS | _SCREEN_PROTECTION | {"strap"},
        "strap": _SHELLS | _SCREEN_PROTECTION | _POWER,
        "band": _SCREEN_PROTECTION | _POWER | {"case"},
        "holder": _SHELLS | _SCREEN_PROTECTION | {"cable"},
        "mount": _SHELLS | _SCREEN_PROTECTION | {"cable"},
        "earbuds": _SCREEN_PROTECTION | {"cable", "adapter"},
        "headphones": _SCREEN_PROTECTION | {"cable", "adapter", "case"},
    }
)
