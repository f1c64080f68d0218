from __future__ import annotations

from typing import Optional


YES_KEYWORDS = {"yes", "y"}
NO_KEYWORDS = {"no", "n"}


def parse_answer(text: Optional[str]) -> Optional[bool]:
    """Map a typed reply to True/False, or None when it should be asked again."""

    value = (text or "").strip().lower()
    if value in YES_KEYWORDS:
        return True
    if value in NO_KEYWORDS:
        return False
    return None
