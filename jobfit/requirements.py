"""Turn job-posting text into a prioritised, typed list of requirements.

Lines are read top to bottom. ``current_priority`` starts at Must and flips
on section headers ("Nice to have:", "Requirements"); a line can override it
locally with its own must/preferred wording. Each remaining line is scanned
independently for years-of-experience, tools, skills, education and
certifications.
"""
from __future__ import annotations

import re
from datetime import date
from typing import Sequence

from jobfit.lexicon import DEFAULT_LEXICON, Lexicon
from jobfit.log import get_logger
from jobfit.matcher import match_requirements
from jobfit.models import MUST, PREFERRED, REQUIREMENT_TYPES, Claim, Requirement
from jobfit.text import (
    capitalize_first,
    is_bullet,
    jaccard_similarity,
    normalize_text,
    normalize_whitespace,
    strip_bullet,
)

log = get_logger(__name__)

# Calibration constants: near-duplicate thresholds per requirement type.
EXPERIENCE_DUP_SIMILARITY = 0.6
SKILL_DUP_SIMILARITY = 0.7
EXPERIENCE_DUP_YEARS = 2

MAX_YEARS = 30
MAX_DESCRIPTION = 120
MAX_JD_EVIDENCE = 160
MAX_HEADER_WORDS = 8
FALLBACK_EXPERIENCE = "Relevant experience"

PREFERRED_HEADER_RE = re.compile(
    r"(?:preferred(?:\s+(?:qualifications|skills|experience))?|nice[\s-]to[\s-]haves?"
    r"|bonus(?:\s+points)?|(?:additional|desired)\s+qualifications|what sets you apart"
    r"|pluses|desirable|it['’]?s a plus)",
    re.IGNORECASE,
)
MUST_HEADER_RE = re.compile(
    r"(?:requirements|required(?:\s+(?:qualifications|skills|experience))?"
    r"|(?:minimum|basic)\s+qualifications|qualifications|must[\s-]haves?"
    r"|what you(?:['’]ll)?\s+need|what we(?:['’]re)?\s+looking for|essential(?:\s+skills)?|who you are)",
    re.IGNORECASE,
)
PREFERRED_TERMS_RE = re.compile(
    r"\b(?:preferred|nice[\s-]to[\s-]have|bonus|a plus|desirable|ideally)\b", re.IGNORECASE,
)
MUST_TERMS_RE = re.compile(r"\b(?:required|must|essential|mandatory)\b", re.IGNORECASE)
_HEADER_MUST_TERMS_RE = re.compile(r"\b(?:required|requirements?|must|essential|mandatory|minimum)\b", re.IGNORECASE)

_YEARS = r"(?:years?|yrs?)"
_AFTER_YEARS = r"(?:\s+(?:of|in|with|as(?:\s+an?)?)\b)?"
YEARS_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(rf"\b(\d{{1,2}})\s*(?:[-–—]|to)\s*\d{{1,2}}\+?\s*{_YEARS}\b{_AFTER_YEARS}\s*(.*)", re.IGNORECASE),
    re.compile(rf"\b(?:minimum(?:\s+of)?|at\s+least|min\.?)\s+(\d{{1,2}})\+?\s*{_YEARS}\b{_AFTER_YEARS}\s*(.*)", re.IGNORECASE),
    re.compile(rf"\b(\d{{1,2}})\+?\s*{_YEARS}\b{_AFTER_YEARS}\s*(.*)", re.IGNORECASE),
)
_EXPERIENCE_LEAD_RE = re.compile(
    r"^(?:(?:professional|relevant|progressive|proven|hands-on|direct)\s+)*"
    r"(?:work\s+)?experience\b\s*(?:in|with|as|leading|running|owning|across|of)?\s*",
    re.IGNORECASE,
)
_EXPERIENCE_TAIL_RE = re.compile(r"\s+(?:work\s+)?experience$", re.IGNORECASE)
_TRAILING_PUNCT_RE = re.compile(r"[\s,;.:]+$")
# "founded 12 years ago", "a 20 year old brand"
_NOT_A_REQUIREMENT_RE = re.compile(r"(?:ago|old|running|(?:in\s+)?a\s+row)\b", re.IGNORECASE)

EDUCATION_RE = re.compile(
    r"\bbachelor['’]?s?\b|(?<!scrum )\bmaster['’]?s?\b|\bmba\b|\bph\.?\s?d\b|\bdegree\b", re.IGNORECASE,
)
CERTIFICATION_RE = re.compile(r"\bcertified\b|\bcertifications?\b|\blicen[sc]ed?\b", re.IGNORECASE)

_TYPE_ORDER = {name: index for index, name in enumerate(REQUIREMENT_TYPES)}


# ── Priority state ───────────────────────────────────────────────────────


def header_priority(line: str, lexicon: Lexicon = DEFAULT_LEXICON) -> str | None:
    """Priority a section header switches to, or None for ordinary lines.

    A short line ending in ":" only counts as a header when it names no
    years, tool or skill of its own.
    """
    if is_bullet(line):
        return None
    stripped = line.strip().lstrip("#").strip()
    cleaned = _TRAILING_PUNCT_RE.sub("", stripped)
    if not cleaned:
        return None
    if PREFERRED_HEADER_RE.fullmatch(cleaned):
        return PREFERRED
    if MUST_HEADER_RE.fullmatch(cleaned):
        return MUST
    if stripped.endswith(":") and len(cleaned.split()) <= MAX_HEADER_WORDS:
        if _has_requirement_signal(cleaned, lexicon):
            return None
        if PREFERRED_TERMS_RE.search(cleaned):
            return PREFERRED
        if _HEADER_MUST_TERMS_RE.search(cleaned):
            return MUST
    return None


def _has_requirement_signal(text: str, lexicon: Lexicon) -> bool:
    return bool(
        parse_years_requirement(text)
        or lexicon.detect_tools(text)
        or lexicon.detect_skills(text, limit=1)
    )


def line_priority(line: str, current: str) -> str:
    priority = current
    if PREFERRED_TERMS_RE.search(line):
        priority = PREFERRED
    if MUST_TERMS_RE.search(line):
        priority = MUST
    return priority


# ── Per-line scanners ────────────────────────────────────────────────────


def clean_experience_description(raw: str) -> str:
    desc = re.split(r"[;(]", raw, maxsplit=1)[0]
    desc = normalize_whitespace(_EXPERIENCE_LEAD_RE.sub("", desc.strip()))
    desc = _EXPERIENCE_TAIL_RE.sub("", _TRAILING_PUNCT_RE.sub("", desc))
    desc = _TRAILING_PUNCT_RE.sub("", desc)
    if not desc:
        return FALLBACK_EXPERIENCE
    return capitalize_first(desc[:MAX_DESCRIPTION].rstrip())


def parse_years_requirement(line: str) -> tuple[int, str] | None:
    """(years, description) for lines like "5+ years of lifecycle marketing"."""
    for pattern in YEARS_PATTERNS:
        m = pattern.search(line)
        if not m:
            continue
        years = int(m.group(1))
        if years < 1 or years > MAX_YEARS or _NOT_A_REQUIREMENT_RE.match(m.group(2)):
            return None
        return years, clean_experience_description(m.group(2))
    return None


def _is_duplicate_experience(years: int, description: str, existing: Sequence[Requirement]) -> bool:
    for req in existing:
        if req.type != "experience" or req.years_needed is None:
            continue
        if abs(req.years_needed - years) > EXPERIENCE_DUP_YEARS:
            continue
        if jaccard_similarity(req.description, description) >= EXPERIENCE_DUP_SIMILARITY:
            return True
    return False


def _is_duplicate_skill(name: str, existing: Sequence[Requirement]) -> bool:
    for req in existing:
        if req.type != "skill":
            continue
        if normalize_text(req.description) == normalize_text(name):
            return True
        if jaccard_similarity(req.description, name) >= SKILL_DUP_SIMILARITY:
            return True
    return False


def _is_duplicate_text(kind: str, description: str, existing: Sequence[Requirement]) -> bool:
    key = normalize_text(description)
    return any(req.type == kind and normalize_text(req.description) == key for req in existing)


def sort_requirements(reqs: Sequence[Requirement]) -> list[Requirement]:
    """Must before Preferred, then by type order; stable within a group."""
    return sorted(reqs, key=lambda r: (r.priority != MUST, _TYPE_ORDER.get(r.type, len(_TYPE_ORDER))))


# ── Entry point ──────────────────────────────────────────────────────────


def extract_requirements(
    text: str,
    claims: Sequence[Claim] | None = None,
    lexicon: Lexicon = DEFAULT_LEXICON,
    as_of: date | None = None,
) -> list[Requirement]:
    reqs: list[Requirement] = []
    seen_tools: set[str] = set()
    current_priority = MUST

    for raw_line in (text or "").splitlines():
        line = raw_line.strip()
        if not line:
            continue

        switched = header_priority(line, lexicon)
        if switched:
            current_priority = switched
            continue

        priority = line_priority(line, current_priority)
        body = strip_bullet(line) if is_bullet(line) else line
        jd_evidence = body[:MAX_JD_EVIDENCE]

        years_req = parse_years_requirement(body)
        if years_req:
            years, description = years_req
            if not _is_duplicate_experience(years, description, reqs):
                reqs.append(Requirement(
                    type="experience", description=description, priority=priority,
                    years_needed=years, jd_evidence=jd_evidence,
                ))

        for tool in lexicon.detect_tools(body):
            if tool in seen_tools:
                continue
            seen_tools.add(tool)
            reqs.append(Requirement(type="tool", description=tool, priority=priority, jd_evidence=jd_evidence))

        for skill in lexicon.detect_skills(body, limit=len(lexicon.skills)):
            if not _is_duplicate_skill(skill, reqs):
                reqs.append(Requirement(type="skill", description=skill, priority=priority, jd_evidence=jd_evidence))

        description = body[:MAX_DESCRIPTION].rstrip()
        if EDUCATION_RE.search(body) and not _is_duplicate_text("education", description, reqs):
            reqs.append(Requirement(type="education", description=description, priority=priority, jd_evidence=jd_evidence))
        if CERTIFICATION_RE.search(body) and not _is_duplicate_text("certification", description, reqs):
            reqs.append(Requirement(
                type="certification", description=description, priority=priority, jd_evidence=jd_evidence,
            ))

    matched = match_requirements(sort_requirements(reqs), claims or [], lexicon=lexicon, as_of=as_of)
    log.debug(
        "Extracted %d requirements (%d must, %d preferred)",
        len(matched),
        sum(1 for r in matched if r.priority == MUST),
        sum(1 for r in matched if r.priority == PREFERRED),
    )
    return matched
