"""Pull a base-salary range out of free job-description text."""
from __future__ import annotations

import re

from jobfit.models import CompRange

MIN_PLAUSIBLE_COMP = 50_000
MAX_PLAUSIBLE_COMP = 1_000_000

_RANGE_SEP = r"\s*(?:[-–—]|to)\s*"

# Tried in order; the first plausible range wins
COMP_PATTERNS: tuple[tuple[re.Pattern[str], int], ...] = (
    (re.compile(rf"\$(\d{{2,3}}(?:,\d{{3}})+|\d{{5,7}}){_RANGE_SEP}\$?(\d{{2,3}}(?:,\d{{3}})+|\d{{5,7}})"), 1),
    (re.compile(rf"\$(\d{{2,4}})\s*k{_RANGE_SEP}\$?(\d{{2,4}})\s*k\b", re.IGNORECASE), 1_000),
    (re.compile(rf"(?<![\d$.,])(\d{{2,3}},\d{{3}}){_RANGE_SEP}(\d{{2,3}},\d{{3}})(?![\d,])"), 1),
)


def format_comp_range(comp_min: int, comp_max: int) -> str:
    return f"${comp_min:,} - ${comp_max:,}"


def parse_comp_from_text(text: str) -> CompRange | None:
    """First plausible "$150,000 - $200,000" / "$150k-$200k" / "150,000 to 200,000" range."""
    for pattern, multiplier in COMP_PATTERNS:
        for m in pattern.finditer(text or ""):
            comp_min = int(m.group(1).replace(",", "")) * multiplier
            comp_max = int(m.group(2).replace(",", "")) * multiplier
            if MIN_PLAUSIBLE_COMP <= comp_min <= comp_max <= MAX_PLAUSIBLE_COMP:
                return CompRange(comp_min=comp_min, comp_max=comp_max, label=format_comp_range(comp_min, comp_max))
    return None
