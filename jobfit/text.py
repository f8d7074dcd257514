"""Shared text helpers: cleanup, tokenizing, similarity and term matching."""
from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable

_ZERO_WIDTH_RE = re.compile("[\u0000\u200b\u200c\u200d\u2060\ufeff]")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")
_SPACE_RE = re.compile(r"\s+")

# Ornamental glyphs may hug the text; dashes and asterisks need a space after
# them so "-5% churn" or "—Present" are not read as bullets.
BULLET_RE = re.compile(r"^\s*(?:[•●◦▪▫‣⁃✅✔➤➔▸►➢∙]\s*|[-–—*]\s+)")
BULLET_ONLY_RE = re.compile(r"^\s*[•●◦▪▫‣⁃\-–—*✅✔➤➔▸►➢∙]+\s*$")

STOP_WORDS: frozenset[str] = frozenset({
    "the", "and", "for", "with", "from", "that", "this", "into", "over",
    "under", "through", "across", "built", "led", "managed",
})


def strip_invisible(text: str) -> str:
    return _ZERO_WIDTH_RE.sub("", text or "")


def normalize_whitespace(text: str) -> str:
    return _SPACE_RE.sub(" ", text or "").strip()


def normalize_text(text: str) -> str:
    """Lowercase, punctuation to spaces, collapsed whitespace."""
    lowered = strip_invisible(text).lower()
    return normalize_whitespace(_NON_ALNUM_RE.sub(" ", lowered))


def is_bullet(line: str) -> bool:
    return bool(BULLET_RE.match(line))


def strip_bullet(line: str) -> str:
    return BULLET_RE.sub("", line, count=1).strip()


def tokenize(text: str) -> set[str]:
    return {
        tok for tok in normalize_text(text).split(" ")
        if len(tok) > 2 and tok not in STOP_WORDS
    }


def jaccard_similarity(a: str, b: str) -> float:
    """Token Jaccard on stop-word-filtered tokens; 0 when either side is empty."""
    set_a = tokenize(a)
    set_b = tokenize(b)
    if not set_a or not set_b:
        return 0.0
    inter = len(set_a & set_b)
    union = len(set_a) + len(set_b) - inter
    return inter / union if union else 0.0


def dedupe_preserving_order(items: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for item in items:
        key = normalize_text(item)
        if not key or key in seen:
            continue
        seen.add(key)
        out.append(item)
    return out


def capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


@lru_cache(maxsize=1024)
def term_pattern(term: str) -> re.Pattern[str]:
    """Case-insensitive pattern matching *term* only on word boundaries."""
    return re.compile(
        r"(?<![A-Za-z0-9])" + re.escape(term) + r"(?![A-Za-z0-9])",
        re.IGNORECASE,
    )


def contains_term(text: str, term: str) -> bool:
    return bool(term and term_pattern(term).search(text or ""))
