"""
gym_params.py

Locale words used to read free-text schedule lines.
The listing this was built for is Spanish ("domingo" / "cerrado");
English variants are kept alongside so the same filter works on
English listings.

Exports used by gym_scraper.py:
SUNDAY_WORDS, CLOSED_WORDS, is_open_on_sunday()
"""

from __future__ import annotations

from typing import Iterable

# =========================================================
# Day / status words (lowercase)
# =========================================================
SUNDAY_WORDS = (
    "domingo",   # es / pt
    "sunday",    # en
)

CLOSED_WORDS = (
    "cerrado",   # es
    "closed",    # en
)


def _mentions_any(line: str, words: Iterable[str]) -> bool:
    low = (line or "").lower()
    return any(w in low for w in words)


def is_open_on_sunday(hours: Iterable[str]) -> bool:
    """
    True when some schedule line names Sunday and that same line does not
    say closed. Purely lexical: a line such as "Sat-Sun: closed 2pm-3pm"
    counts as closed, "Sunday 8-14, Monday closed" too.
    """
    return any(
        _mentions_any(h, SUNDAY_WORDS) and not _mentions_any(h, CLOSED_WORDS)
        for h in hours or ()
    )
