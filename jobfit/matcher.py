"""Match extracted requirements against a candidate's claims."""
from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from jobfit.dates import estimate_years
from jobfit.lexicon import DEFAULT_LEXICON, Lexicon
from jobfit.log import get_logger
from jobfit.models import MET, MISSING, MUST, PARTIAL, Claim, Requirement
from jobfit.text import STOP_WORDS, contains_term, normalize_text

log = get_logger(__name__)

RELEVANCE_RATIO = 0.4
PARTIAL_YEARS_RATIO = 0.6
TOOL_BOOST = 0.25

# Words every experience requirement carries; they say nothing about the field.
_GENERIC_WORDS = frozenset({
    "experience", "experiences", "years", "year", "relevant", "professional",
    "proven", "track", "record", "work", "working", "strong", "related",
    "including", "similar", "role", "roles", "plus",
})

MatchResult = tuple[str, Optional[str]]


def included_claims(claims: Sequence[Claim]) -> list[Claim]:
    return [c for c in claims if c.included]


def gap_severity(match: str, priority: str) -> str | None:
    if match == MET:
        return None
    if match == PARTIAL:
        return "Medium" if priority == MUST else "Low"
    return "High" if priority == MUST else "Medium"


# ── Tools / skills ───────────────────────────────────────────────────────


def match_tool(tool: str, claims: Sequence[Claim]) -> MatchResult:
    wanted = tool.lower()
    for claim in included_claims(claims):
        if any(t.lower() == wanted for t in claim.tools):
            return MET, f"Used at {claim.company} ({claim.role})"
        if contains_term(" ".join(claim.evidence_lines()), tool):
            return MET, f"Referenced in {claim.role} at {claim.company}"
    return MISSING, None


def match_skill(skill: str, claims: Sequence[Claim], lexicon: Lexicon = DEFAULT_LEXICON) -> MatchResult:
    pattern = lexicon.skill_pattern(skill)
    wanted = skill.lower()
    for claim in included_claims(claims):
        if any(s.lower() == wanted for s in claim.skills):
            return MET, f"Shown in {claim.role} at {claim.company}"
        if pattern is not None and pattern.search(claim.text()):
            return MET, f"Shown in {claim.role} at {claim.company}"
        if pattern is None and contains_term(claim.text(), skill):
            return MET, f"Shown in {claim.role} at {claim.company}"
    return MISSING, None


# ── Experience ───────────────────────────────────────────────────────────


def keyword_weights(description: str) -> dict[str, int]:
    """Description tokens weighted max(1, len - 3) so specific words dominate."""
    weights: dict[str, int] = {}
    for token in normalize_text(description).split(" "):
        if len(token) <= 2 or token in STOP_WORDS or token in _GENERIC_WORDS:
            continue
        weights[token] = max(1, len(token) - 3)
    return weights


def _claim_tokens(claim: Claim) -> set[str]:
    return set(normalize_text(" ".join([claim.text(), *claim.tools])).split(" "))


def _token_present(token: str, tokens: set[str]) -> bool:
    if token in tokens or f"{token}s" in tokens:
        return True
    return token.endswith("s") and token[:-1] in tokens


def relevance(weights: dict[str, int], claim: Claim, description_tools: Sequence[str] = ()) -> float:
    """Weighted share of description keywords present in the claim, plus a tool boost."""
    total = sum(weights.values())
    if not total:
        ratio = 0.0
    else:
        tokens = _claim_tokens(claim)
        ratio = sum(w for token, w in weights.items() if _token_present(token, tokens)) / total
    claim_tools = {t.lower() for t in claim.tools}
    if any(tool.lower() in claim_tools for tool in description_tools):
        ratio += TOOL_BOOST
    return ratio


def match_experience(
    years_needed: int,
    description: str,
    claims: Sequence[Claim],
    lexicon: Lexicon = DEFAULT_LEXICON,
    as_of: date | None = None,
) -> MatchResult:
    usable = included_claims(claims)
    if not usable:
        return MISSING, None

    weights = keyword_weights(description)
    description_tools = lexicon.detect_tools(description)

    for claim in usable:
        if relevance(weights, claim, description_tools) < RELEVANCE_RATIO:
            continue
        years = estimate_years(claim.start_date, claim.end_date, as_of)
        if years >= years_needed:
            return MET, f"{claim.role} at {claim.company} ({years}+ yrs)"
        if years >= years_needed * PARTIAL_YEARS_RATIO:
            return PARTIAL, f"{claim.role} at {claim.company} ({years} yrs, need {years_needed})"

    total = sum(estimate_years(c.start_date, c.end_date, as_of) for c in usable)
    if total and total >= years_needed:
        roles = "role" if len(usable) == 1 else "roles"
        return PARTIAL, f"{total} total years across {len(usable)} {roles}"
    return MISSING, None


# ── Requirements ─────────────────────────────────────────────────────────


def match_requirement(
    req: Requirement,
    claims: Sequence[Claim],
    lexicon: Lexicon = DEFAULT_LEXICON,
    as_of: date | None = None,
) -> Requirement:
    if req.type == "tool":
        match, evidence = match_tool(req.description, claims)
    elif req.type == "skill":
        match, evidence = match_skill(req.description, claims, lexicon)
    elif req.type == "experience" and req.years_needed:
        match, evidence = match_experience(req.years_needed, req.description, claims, lexicon, as_of)
    else:
        # Education and certifications need manual verification
        match, evidence = MISSING, None
    return replace(req, match=match, evidence=evidence, gap_severity=gap_severity(match, req.priority))


def match_requirements(
    reqs: Sequence[Requirement],
    claims: Sequence[Claim],
    lexicon: Lexicon = DEFAULT_LEXICON,
    as_of: date | None = None,
) -> list[Requirement]:
    matched = [match_requirement(r, claims, lexicon, as_of) for r in reqs]
    if claims:
        log.debug(
            "Matched %d requirements against %d claims: %d met, %d partial",
            len(matched), len(claims),
            sum(1 for r in matched if r.match == MET),
            sum(1 for r in matched if r.match == PARTIAL),
        )
    return matched
