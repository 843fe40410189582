"""
Text-related helpers.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

_NAME_SEPARATOR = re.compile(r"[,\s]+")


def split_names(values: Optional[Iterable[str]]) -> List[str]:
    """
    Flatten comma/whitespace separated name lists into unique names.

    Accepts repeated values (``--only a --only b``) as well as a single
    comma-separated value (``--only a,b``). Order of first appearance is kept.
    """
    if not values:
        return []
    seen: dict[str, None] = {}
    for value in values:
        for part in _NAME_SEPARATOR.split(value or ""):
            part = part.strip().strip("/")
            if part:
                seen.setdefault(part, None)
    return list(seen)
