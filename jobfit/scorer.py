"""Deterministic 0-100 fit score for a job against a profile and claims."""
from __future__ import annotations

import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional, Sequence

from jobfit.compensation import parse_comp_from_text
from jobfit.lexicon import DEFAULT_LEXICON, Lexicon
from jobfit.log import get_logger
from jobfit.models import (
    MET,
    MUST,
    Claim,
    Job,
    Profile,
    ScoreBreakdown,
    ScoringResult,
    summarize_location_preferences,
)
from jobfit.requirements import extract_requirements
from jobfit.text import normalize_text

log = get_logger(__name__)

PURSUE_THRESHOLD = 65
MAYBE_THRESHOLD = 40

ROLE_SCOPE_CAP = 30
COMPENSATION_CAP = 25
COMPANY_STAGE_CAP = 20
DOMAIN_FIT_CAP = 15
RISK_PENALTY_CAP = 10
DEFAULT_STAGE_SCORE = 8

EMPLOYMENT_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("Contract", re.compile(
        r"\bcontract(?:[\s-]to[\s-]hire)?\s+(?:role|position|basis|opportunity|assignment|engagement)\b"
        r"|\b\d+[\s-]month\s+contract\b|\b1099\b|\bcorp[\s-]to[\s-]corp\b|\bc2c\b"
        r"|\bemployment type:\s*contract\b",
        re.IGNORECASE,
    )),
    ("Freelance", re.compile(r"\bfreelance\b", re.IGNORECASE)),
    ("Part-time", re.compile(
        r"\bpart[\s-]time\s+(?:role|position|basis|opportunity)\b|\bemployment type:\s*part[\s-]time\b",
        re.IGNORECASE,
    )),
    ("Full-time", re.compile(r"\bfull[\s-]time\b", re.IGNORECASE)),
)
EXCLUDED_EMPLOYMENT = {
    "ft_only": ("Contract", "Freelance", "Part-time"),
    "exclude_contract": ("Contract", "Freelance"),
}

NO_SPONSORSHIP_RE = re.compile(
    r"\b(?:no|not|unable to|cannot|can't|will not|won't|does not|do not)\s+(?:\w+\s+){0,3}?"
    r"(?:sponsor|sponsorship)\b"
    r"|\bsponsorship\s+(?:is\s+)?(?:not\s+available|unavailable)\b"
    r"|\bwithout\s+(?:the\s+)?(?:need\s+for\s+)?(?:visa\s+)?sponsorship\b",
    re.IGNORECASE,
)
TRAVEL_RE = re.compile(
    r"(\d{1,3})\s*%\s*(?:travel|of\s+(?:the\s+)?time\s+travel)"
    r"|travel(?:ing|\s+required)?\s*(?:up\s+to|of|:)?\s*(\d{1,3})\s*%",
    re.IGNORECASE,
)
ONSITE_DAYS_RE = re.compile(
    r"\b([1-5])\s*(?:days?|x)\s*(?:a|per|/)?\s*week\s*(?:in[\s-](?:the[\s-])?office|on[\s-]?site)"
    r"|(?:in[\s-](?:the[\s-])?office|on[\s-]?site)\s*([1-5])\s*days?",
    re.IGNORECASE,
)

_LOCATION_TYPES = {
    "remote": "Remote",
    "hybrid": "Hybrid",
    "in-person": "In-person",
    "in person": "In-person",
    "onsite": "In-person",
    "on-site": "In-person",
    "office": "In-person",
}


@dataclass(frozen=True)
class JobView:
    """Lower-cased, comp-filled view of a job that the checks read."""

    title: str
    jd: str
    comp_range: str
    comp_min: int | None
    comp_max: int | None
    location: str
    location_type: str
    employment_type: str


def fit_label(score: int) -> str:
    if score >= PURSUE_THRESHOLD:
        return "Pursue"
    if score >= MAYBE_THRESHOLD:
        return "Maybe"
    return "Pass"


def normalize_location_type(value: str) -> str:
    return _LOCATION_TYPES.get((value or "").strip().lower(), "Unknown")


def infer_employment_type(text: str) -> str:
    for kind, pattern in EMPLOYMENT_PATTERNS:
        if pattern.search(text):
            return kind
    return "Unknown"


def job_view(job: Job) -> JobView:
    comp_min, comp_max = job.comp_min, job.comp_max
    if comp_min is None and comp_max is None:
        parsed = parse_comp_from_text(f"{job.comp_range}\n{job.description}")
        if parsed:
            comp_min, comp_max = parsed.comp_min, parsed.comp_max
    employment = job.employment_type if job.employment_type and job.employment_type != "Unknown" else (
        infer_employment_type(f"{job.title}\n{job.description}")
    )
    return JobView(
        title=(job.title or "").lower(),
        jd=(job.description or "").lower(),
        comp_range=(job.comp_range or "").lower(),
        comp_min=comp_min,
        comp_max=comp_max,
        location=job.location or "",
        location_type=normalize_location_type(job.location_type),
        employment_type=employment,
    )


# ── Hard disqualifiers ───────────────────────────────────────────────────


def _paid_media_operator(view: JobView, profile: Profile, lexicon: Lexicon) -> str | None:
    is_operator = any(
        kw in view.title or f"{kw} role" in view.jd or f"hands-on {kw}" in view.jd
        for kw in lexicon.paid_media_keywords
    )
    runs_paid = any(p in view.jd for p in ("manage paid", "run paid", "execute paid"))
    hands_on = any(p in view.jd for p in ("day-to-day", "hands-on", "in-platform"))
    if is_operator or (runs_paid and hands_on):
        return "Role appears to require hands-on paid media account management as core function"
    return None


def _seed_stage(view: JobView, profile: Profile, lexicon: Lexicon) -> str | None:
    if any(kw in view.jd for kw in lexicon.seed_stage_keywords) or "seed" in view.comp_range:
        return "Company appears to be seed-stage"
    return None


def _comp_below_floor(view: JobView, profile: Profile, lexicon: Lexicon) -> str | None:
    floor = max(profile.comp_floor, profile.hard_filters.min_base_salary)
    if view.comp_max and floor and view.comp_max < floor:
        return f"Max compensation (${view.comp_max:,}) is below floor (${floor:,})"
    return None


def _employment_excluded(view: JobView, profile: Profile, lexicon: Lexicon) -> str | None:
    excluded = EXCLUDED_EMPLOYMENT.get(profile.hard_filters.employment_type, ())
    if view.employment_type in excluded:
        return f"Employment type ({view.employment_type}) is excluded by your hard filters"
    return None


def _no_visa_sponsorship(view: JobView, profile: Profile, lexicon: Lexicon) -> str | None:
    if profile.hard_filters.requires_visa_sponsorship and NO_SPONSORSHIP_RE.search(view.jd):
        return "Role does not offer visa sponsorship"
    return None


def travel_percent(jd: str) -> int | None:
    values = [int(a or b) for a, b in TRAVEL_RE.findall(jd)]
    return max(values) if values else None


def onsite_days(view: JobView) -> int | None:
    if view.location_type == "In-person":
        return 5
    values = [int(a or b) for a, b in ONSITE_DAYS_RE.findall(view.jd)]
    return max(values) if values else None


def _travel_or_onsite(view: JobView, profile: Profile, lexicon: Lexicon) -> str | None:
    filters = profile.hard_filters
    problems: list[str] = []
    travel = travel_percent(view.jd)
    if travel is not None and travel > filters.max_travel_percent:
        problems.append(f"Travel requirement ({travel}%) exceeds your limit ({filters.max_travel_percent}%)")
    days = onsite_days(view)
    if days is not None and days > filters.max_onsite_days_per_week:
        problems.append(
            f"Onsite requirement ({days} days/week) exceeds your limit ({filters.max_onsite_days_per_week})"
        )
    return "; ".join(problems) or None


def _city_matches(city: str, location: str) -> bool:
    wanted = normalize_text(city.split(",")[0])
    return bool(wanted) and wanted in normalize_text(location)


def _location_mismatch(view: JobView, profile: Profile, lexicon: Lexicon) -> str | None:
    prefs = profile.location_preferences
    if not prefs or view.location_type in ("Remote", "Unknown"):
        return None
    for pref in prefs:
        if pref.type == "Remote":
            continue
        if pref.willing_to_relocate or not pref.city or _city_matches(pref.city, view.location):
            return None
    where = view.location or view.location_type
    return f"Location ({where}, {view.location_type}) does not match your preferences ({summarize_location_preferences(prefs)})"


DisqualifierCheck = Callable[[JobView, Profile, Lexicon], Optional[str]]

DISQUALIFIER_CHECKS: tuple[DisqualifierCheck, ...] = (
    _paid_media_operator,
    _seed_stage,
    _comp_below_floor,
    _employment_excluded,
    _no_visa_sponsorship,
    _travel_or_onsite,
    _location_mismatch,
)


def _disqualifiers(view: JobView, profile: Profile, lexicon: Lexicon) -> list[str]:
    found = [check(view, profile, lexicon) for check in DISQUALIFIER_CHECKS]
    return [reason for reason in found if reason]


def find_disqualifiers(job: Job, profile: Profile, lexicon: Lexicon = DEFAULT_LEXICON) -> list[str]:
    return _disqualifiers(job_view(job), profile, lexicon)


# ── Sub-scores ───────────────────────────────────────────────────────────


def _count(text: str, signals: Sequence[str]) -> int:
    return sum(1 for s in signals if s in text)


def role_scope_score(view: JobView, lexicon: Lexicon, pursue: list[str], passes: list[str]) -> int:
    score = 0
    if any(t in view.title for t in lexicon.senior_titles):
        score += 12
        pursue.append("Senior leadership title")
    else:
        score += 4
        passes.append("Title may not indicate senior leadership")

    strategy = _count(view.jd, lexicon.strategy_signals)
    if strategy >= 3:
        score += 12
        pursue.append("Strong strategic ownership signals")
    elif strategy >= 1:
        score += 7
        pursue.append("Some strategic scope indicated")
    else:
        score += 2
        passes.append("Limited strategic scope signals in JD")

    if _count(view.jd, lexicon.team_signals):
        score += 6
        pursue.append("People management / team leadership")
    else:
        score += 2
    return min(score, ROLE_SCOPE_CAP)


def compensation_score(view: JobView, profile: Profile, lexicon: Lexicon, pursue: list[str], passes: list[str]) -> int:
    score = 0
    if view.comp_min and view.comp_min >= profile.comp_target:
        score += 15
        pursue.append(f"Comp min (${view.comp_min:,}) meets or exceeds target")
    elif view.comp_min and view.comp_min >= profile.comp_floor:
        score += 10
        pursue.append(f"Comp min (${view.comp_min:,}) meets floor")
    elif not view.comp_min and not view.comp_max:
        score += 7  # unknown is neutral
    else:
        score += 3
        passes.append("Compensation may be below target")

    benefits = _count(view.jd, lexicon.benefit_signals)
    score += min(benefits * 2, 10)
    if benefits >= 3:
        pursue.append("Strong benefits package indicated")
    return min(score, COMPENSATION_CAP)


def company_stage_score(view: JobView, lexicon: Lexicon, pursue: list[str]) -> int:
    best = DEFAULT_STAGE_SCORE
    for signal, value in lexicon.stage_signals:
        if signal in view.jd:
            best = max(best, value)
    score = min(best, COMPANY_STAGE_CAP)
    if score >= 15:
        pursue.append("Company stage suggests ability to pay")
    return score


def domain_fit_score(view: JobView, lexicon: Lexicon, pursue: list[str]) -> int:
    matched = _count(view.jd, lexicon.domain_signals)
    if matched >= 4:
        pursue.append("Strong domain alignment (growth/lifecycle/GTM)")
    elif matched >= 2:
        pursue.append("Moderate domain alignment")
    return min(int(matched * 2.5 + 0.5), DOMAIN_FIT_CAP)


def risk_penalty(view: JobView, lexicon: Lexicon, red_flags: list[str]) -> int:
    penalty = 0
    for phrase, weight, flag in lexicon.risk_signals:
        if weight > 0 and phrase in view.jd:
            penalty += weight
            if flag:
                red_flags.append(flag)
    return min(penalty, RISK_PENALTY_CAP)


# ── Rationale only (no score effect) ─────────────────────────────────────


def _word_overlap_ratio(role: str, text: str) -> float:
    """Fraction of words in *role* that appear in *text* (needs 2+ shared words)."""
    role_words = set(role.lower().split())
    text_words = set(text.lower().split())
    overlap = role_words & text_words
    if not role_words or (len(overlap) < 2 and len(role_words) > 1):
        return 0.0
    return len(overlap) / len(role_words)


def target_role_match(title: str, target_roles: Sequence[str]) -> str | None:
    for role in target_roles:
        if role and (role.lower() in title or _word_overlap_ratio(role, title) >= 0.6):
            return role
    return None


def _benefit_rationale(view: JobView, profile: Profile, pursue: list[str], passes: list[str]) -> None:
    missing = [b for b in profile.required_benefits if b and b.lower() not in view.jd]
    for benefit in missing:
        passes.append(f"Required benefit not mentioned: {benefit}")
    offered = [b for b in profile.preferred_benefits if b and b.lower() in view.jd]
    if offered:
        pursue.append(f"Preferred benefits mentioned: {', '.join(offered)}")


# ── Entry points ─────────────────────────────────────────────────────────


def score_job(
    job: Job,
    profile: Profile,
    claims: Sequence[Claim] | None = None,
    lexicon: Lexicon = DEFAULT_LEXICON,
    as_of: date | None = None,
) -> ScoringResult:
    view = job_view(job)
    disqualifiers = _disqualifiers(view, profile, lexicon)
    if disqualifiers:
        log.debug("Disqualified %r: %s", job.title, "; ".join(disqualifiers))
        return ScoringResult(
            fit_score=0,
            fit_label="Pass",
            disqualifiers=tuple(disqualifiers),
            reasons_to_pass=tuple(disqualifiers),
        )

    pursue: list[str] = []
    passes: list[str] = []
    red_flags: list[str] = []

    matched_role = target_role_match(view.title, profile.target_roles)
    if matched_role:
        pursue.append(f"Title matches target role: {matched_role}")

    breakdown = ScoreBreakdown(
        role_scope_authority=role_scope_score(view, lexicon, pursue, passes),
        compensation_benefits=compensation_score(view, profile, lexicon, pursue, passes),
        company_stage_ability=company_stage_score(view, lexicon, pursue),
        domain_fit=domain_fit_score(view, lexicon, pursue),
        risk_penalty=risk_penalty(view, lexicon, red_flags),
    )
    _benefit_rationale(view, profile, pursue, passes)

    requirements = extract_requirements(job.description, claims, lexicon=lexicon, as_of=as_of)
    if claims:
        unmet = sum(1 for r in requirements if r.priority == MUST and r.match != MET)
        if unmet:
            passes.append(f"{unmet} must-have requirement(s) not fully evidenced by your claims")

    score = breakdown.total
    log.debug("Scored %r: %d (%s)", job.title, score, fit_label(score))
    return ScoringResult(
        fit_score=score,
        fit_label=fit_label(score),
        disqualifiers=(),
        reasons_to_pursue=tuple(pursue),
        reasons_to_pass=tuple(passes),
        red_flags=tuple(red_flags),
        requirements_extracted=tuple(requirements),
        breakdown=breakdown,
    )


def rank_jobs(
    jobs: Sequence[Job],
    profile: Profile,
    claims: Sequence[Claim] | None = None,
    max_workers: int = 4,
    lexicon: Lexicon = DEFAULT_LEXICON,
    as_of: date | None = None,
) -> list[tuple[Job, ScoringResult]]:
    """Score many jobs against one claim set in parallel, best first."""
    if not jobs:
        return []
    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(jobs)))) as pool:
        results = list(pool.map(lambda job: score_job(job, profile, claims, lexicon, as_of), jobs))
    ranked = sorted(zip(jobs, results), key=lambda pair: -pair[1].fit_score)
    pursue = sum(1 for _, r in ranked if r.fit_label == "Pursue")
    log.info("Scored %d jobs → %d to pursue", len(jobs), pursue)
    return ranked
