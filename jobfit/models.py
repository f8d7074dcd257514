"""Data models for claims, requirements, jobs, profiles and fit results."""
from __future__ import annotations

from dataclasses import dataclass, field

APPROVED = "Approved"
REVIEW_NEEDED = "Review Needed"

MUST = "Must"
PREFERRED = "Preferred"

MET = "Met"
PARTIAL = "Partial"
MISSING = "Missing"

REQUIREMENT_TYPES: tuple[str, ...] = (
    "experience", "skill", "tool", "education", "certification", "other",
)


@dataclass(frozen=True)
class Outcome:
    description: str
    metric: str | None = None
    is_numeric: bool = False


@dataclass
class Claim:
    """One work-history entry extracted from free text."""

    company: str
    role: str
    start_date: str = ""
    end_date: str = ""  # empty = ongoing
    responsibilities: list[str] = field(default_factory=list)
    outcomes: list[Outcome] = field(default_factory=list)
    tools: list[str] = field(default_factory=list)
    skills: list[str] = field(default_factory=list)
    confidence: float = 0.0
    review_status: str = REVIEW_NEEDED
    included: bool = True

    @property
    def evidence_count(self) -> int:
        return len(self.responsibilities) + len(self.outcomes)

    def evidence_lines(self) -> list[str]:
        return [o.description for o in self.outcomes] + list(self.responsibilities)

    def text(self) -> str:
        """Role plus every evidence line, space-joined."""
        return " ".join([self.role, *self.responsibilities, *(o.description for o in self.outcomes)])


@dataclass(frozen=True)
class Requirement:
    type: str
    description: str
    priority: str = MUST
    years_needed: int | None = None
    match: str = MISSING
    evidence: str | None = None
    jd_evidence: str = ""
    gap_severity: str | None = None


@dataclass(frozen=True)
class ScoreBreakdown:
    role_scope_authority: int = 0
    compensation_benefits: int = 0
    company_stage_ability: int = 0
    domain_fit: int = 0
    risk_penalty: int = 0

    @property
    def total(self) -> int:
        raw = (
            self.role_scope_authority
            + self.compensation_benefits
            + self.company_stage_ability
            + self.domain_fit
            - self.risk_penalty
        )
        return max(0, min(100, raw))


@dataclass(frozen=True)
class ScoringResult:
    fit_score: int
    fit_label: str
    disqualifiers: tuple[str, ...] = ()
    reasons_to_pursue: tuple[str, ...] = ()
    reasons_to_pass: tuple[str, ...] = ()
    red_flags: tuple[str, ...] = ()
    requirements_extracted: tuple[Requirement, ...] = ()
    breakdown: ScoreBreakdown = field(default_factory=ScoreBreakdown)


@dataclass(frozen=True)
class CompRange:
    comp_min: int
    comp_max: int
    label: str


@dataclass
class LocationPreference:
    type: str = "Remote"  # Remote | Hybrid | Onsite
    city: str = ""
    radius_miles: int | None = None
    willing_to_relocate: bool = False


def summarize_location_preferences(prefs: list[LocationPreference]) -> str:
    """Summary such as "Remote; Hybrid in Austin, TX (30 mi)"."""
    parts: list[str] = []
    for pref in prefs:
        if pref.type == "Remote":
            parts.append("Remote")
            continue
        radius = f"{pref.radius_miles} mi" if pref.radius_miles else ""
        if pref.city and radius:
            parts.append(f"{pref.type} in {pref.city} ({radius})")
        elif pref.city:
            parts.append(f"{pref.type} in {pref.city}")
        else:
            parts.append(pref.type)
    return "; ".join(parts)


@dataclass
class HardFilters:
    requires_visa_sponsorship: bool = False
    min_base_salary: int = 0
    max_onsite_days_per_week: int = 5
    max_travel_percent: int = 100
    employment_type: str = "exclude_contract"  # exclude_contract | ft_only


@dataclass
class Profile:
    name: str = ""
    target_roles: list[str] = field(default_factory=list)
    comp_floor: int = 0
    comp_target: int = 0
    required_benefits: list[str] = field(default_factory=list)
    preferred_benefits: list[str] = field(default_factory=list)
    location_preference: str = ""
    location_preferences: list[LocationPreference] = field(default_factory=list)
    hard_filters: HardFilters = field(default_factory=HardFilters)


@dataclass
class Job:
    title: str = ""
    company: str = ""
    description: str = ""
    comp_range: str = ""
    comp_min: int | None = None
    comp_max: int | None = None
    location: str = ""
    location_type: str = "Unknown"  # Remote | Hybrid | In-person | Unknown
    employment_type: str = "Unknown"  # Full-time | Contract | Part-time | Freelance | Unknown
