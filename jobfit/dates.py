"""Period detection in free text and duration estimation for claims."""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date

MONTHS: dict[str, int] = {
    "jan": 1, "january": 1, "feb": 2, "february": 2, "mar": 3, "march": 3,
    "apr": 4, "april": 4, "may": 5, "jun": 6, "june": 6,
    "jul": 7, "july": 7, "aug": 8, "august": 8, "sep": 9, "sept": 9,
    "september": 9, "oct": 10, "october": 10, "nov": 11, "november": 11,
    "dec": 12, "december": 12,
}

_MONTH = (
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?"
    r"|aug(?:ust)?|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)\.?"
)
_YEAR = r"(?:19|20)\d{2}"
_ONGOING = r"(?:present|current|now|today)"
_SEP = r"\s*(?:[-–—]|\bto\b)\s*"

# Tried in order; the first pattern that matches anywhere in the line wins.
PERIOD_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(
        rf"\b(?P<start>{_MONTH}\s+{_YEAR})\b{_SEP}"
        rf"(?P<end>{_MONTH}\s+{_YEAR}\b|{_YEAR}\b|{_ONGOING}\b)",
        re.IGNORECASE,
    ),
    re.compile(
        rf"(?<![\d/])(?P<start>\d{{1,2}}/{_YEAR}){_SEP}"
        rf"(?P<end>\d{{1,2}}/{_YEAR}\b|{_ONGOING}\b)",
        re.IGNORECASE,
    ),
    re.compile(
        rf"(?<![\d/$])(?P<start>{_YEAR}){_SEP}(?P<end>{_YEAR}(?!\d)|{_ONGOING}\b)",
        re.IGNORECASE,
    ),
    re.compile(rf"\((?P<start>(?:{_MONTH}\s+)?{_YEAR})\)", re.IGNORECASE),
)

_ONGOING_RE = re.compile(rf"^{_ONGOING}$", re.IGNORECASE)
_MONTH_YEAR_RE = re.compile(rf"^({_MONTH})\s+({_YEAR})$", re.IGNORECASE)
_NUMERIC_RE = re.compile(rf"^(\d{{1,2}})/({_YEAR})$")
_BARE_YEAR_RE = re.compile(rf"^({_YEAR})$")
_EDGE_NOISE_RE = re.compile(r"^[\s,|·•:;\-–—]+|[\s,|·•:;\-–—]+$")


@dataclass(frozen=True)
class DateRange:
    start: str
    end: str  # empty = ongoing
    span: tuple[int, int]


def _clean_label(label: str) -> str:
    return re.sub(r"\s+", " ", label).strip()


def find_date_range(text: str) -> DateRange | None:
    """Return the first period found in *text*, or None."""
    for pattern in PERIOD_PATTERNS:
        m = pattern.search(text or "")
        if not m:
            continue
        start = _clean_label(m.group("start"))
        end_raw = m.groupdict().get("end")
        if end_raw is None:
            end = start
        elif _ONGOING_RE.match(end_raw.strip()):
            end = ""
        else:
            end = _clean_label(end_raw)
        return DateRange(start=start, end=end, span=m.span())
    return None


def strip_date_range(text: str, rng: DateRange) -> str:
    """Remove the period span and the separators it leaves behind."""
    residual = text[: rng.span[0]] + " " + text[rng.span[1]:]
    residual = re.sub(r"\(\s*\)", " ", residual)
    residual = re.sub(r"\s+", " ", residual)
    return _EDGE_NOISE_RE.sub("", residual).strip()


def is_ongoing(label: str) -> bool:
    return not label.strip() or bool(_ONGOING_RE.match(label.strip()))


def parse_period(label: str) -> date | None:
    """Parse "Month Year", "MM/YYYY" or a bare year; None when unparsable."""
    text = (label or "").strip()
    m = _MONTH_YEAR_RE.match(text)
    if m:
        month = MONTHS.get(m.group(1).lower().rstrip("."))
        if month:
            return date(int(m.group(2)), month, 1)
        return None
    m = _NUMERIC_RE.match(text)
    if m:
        month = int(m.group(1))
        if 1 <= month <= 12:
            return date(int(m.group(2)), month, 1)
        return None
    m = _BARE_YEAR_RE.match(text)
    if m:
        return date(int(m.group(1)), 1, 1)
    return None


def estimate_years(start: str, end: str = "", as_of: date | None = None) -> int:
    """Whole years between two period labels, rounded half-up.

    An empty or "Present" end means *as_of* (today by default). Any
    unparsable label yields 0.
    """
    start_date = parse_period(start)
    if start_date is None:
        return 0
    if is_ongoing(end):
        end_date = as_of or date.today()
    else:
        end_date = parse_period(end)
        if end_date is None:
            return 0
    years = (end_date - start_date).days / 365.25
    return max(0, int(years + 0.5))
