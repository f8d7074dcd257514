"""Turn pasted resume / profile text into structured work-history claims.

The text is split into experience segments, each segment yields at most one
claim (role, company, period, evidence lines), and fragments describing the
same role are merged back together. Nothing here raises on odd input: text
without a recognisable header simply produces no claims.
"""
from __future__ import annotations

import re
from typing import Callable, Iterable, Sequence

from jobfit.dates import DateRange, find_date_range, strip_date_range
from jobfit.lexicon import DEFAULT_LEXICON, Lexicon
from jobfit.log import get_logger
from jobfit.models import APPROVED, REVIEW_NEEDED, Claim, Outcome
from jobfit.text import (
    BULLET_ONLY_RE,
    is_bullet,
    jaccard_similarity,
    normalize_text,
    normalize_whitespace,
    strip_bullet,
    strip_invisible,
    dedupe_preserving_order,
)

log = get_logger(__name__)

MAX_HEADER_LINES = 3
MAX_SKILLS = 8
ROLE_MERGE_SIMILARITY = 0.6
APPROVAL_CONFIDENCE = 0.9
INCLUDE_CONFIDENCE = 0.4

CONFIDENCE_WEIGHTS: dict[str, float] = {
    "role": 0.24,
    "company": 0.18,
    "start_date": 0.10,
    "any_date": 0.03,
    "responsibilities": 0.12,
    "tools": 0.07,
    "skills": 0.06,
    "outcomes": 0.08,
    "metric_outcome": 0.10,
}
MISSING_IDENTITY_PENALTY = 0.08
MISSING_EVIDENCE_PENALTY = 0.06

NUMERIC_SIGNAL_RE = re.compile(
    r"\$\s?\d[\d,.]*\s*(?:[kmb]\b|million\b|billion\b)?"
    r"|\d[\d,.]*\s*%"
    r"|\b\d+(?:\.\d+)?\s*x\b"
    r"|\b\d[\d,.]*\+",
    re.IGNORECASE,
)

_LABEL_RE = re.compile(
    r"^(?P<label>role|title|job title|position|company|employer|organi[sz]ation)\s*:\s*(?P<value>.*)$",
    re.IGNORECASE,
)
_ROLE_LABELS = ("role", "title", "job title", "position")
_AT_RE = re.compile(r"^(?P<left>.+?)\s+(?:at|@)\s+(?P<right>.+)$")
_AT_SIGN_RE = re.compile(r"^(?P<left>.+?)\s*@\s*(?P<right>.+)$")
_DELIMITERS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("pipe", re.compile(r"\s*\|\s*")),
    ("dash", re.compile(r"\s+[-–—]\s+")),
    ("comma", re.compile(r"\s*,\s+")),
)
_STATE_RE = re.compile(r"^[A-Z]{2}$")
_LOCATION_WORDS_RE = re.compile(r"^(?:remote|hybrid|on-?site|in-person|usa?|united states)$", re.IGNORECASE)
_PAREN_NOTE_RE = re.compile(r"\s*\((?:remote|hybrid|on-?site|contract|full[- ]time|part[- ]time)[^)]*\)\s*$", re.IGNORECASE)
_TRAILING_FIELD_RE = re.compile(r"\s*\|\s*|\s+[-–—]\s+")
_CONTINUATION_RE = re.compile(r"^\s*[+%(|\[a-z]")
_ALL_CAPS_RE = re.compile(r"^[A-Z][A-Z\s&]{4,}$")
_FIRST_PERSON = ("i", "i'm", "i've", "we", "my", "our")

EXPERIENCE_HEADINGS = frozenset({
    "experience", "work experience", "work history", "professional experience",
    "employment history", "employment", "career history", "relevant experience",
    "volunteer experience", "leadership experience",
})

OTHER_HEADINGS = frozenset({
    "education", "skills", "technical skills", "core competencies", "competencies",
    "summary", "professional summary", "executive summary", "objective",
    "career objective", "certifications", "certificates", "licenses",
    "licenses & certifications", "honors", "awards", "honors & awards",
    "publications", "volunteer", "interests", "references", "projects",
    "personal projects", "languages", "affiliations", "professional affiliations",
    "additional information", "about", "about me", "profile", "contact",
    "tools", "technologies", "tools & technologies",
})


# ── Input cleanup ────────────────────────────────────────────────────────


def section_heading(line: str) -> str | None:
    """"experience" / "other" when *line* is a résumé section heading."""
    cleaned = re.sub(r"^[\d.)\-–—*#|:=\s]+", "", line.strip())
    cleaned = re.sub(r"[\-–—*#|:=\s]+$", "", cleaned).lower()
    if cleaned in EXPERIENCE_HEADINGS:
        return "experience"
    if cleaned in OTHER_HEADINGS:
        return "other"
    return None


def _looks_like_boundary(line: str) -> bool:
    stripped = line.strip()
    if not stripped:
        return True
    return bool(
        section_heading(stripped)
        or find_date_range(stripped)
        or _ALL_CAPS_RE.match(stripped)
    )


def _merge_colon_continuations(lines: list[str]) -> list[str]:
    merged: list[str] = []
    for line in lines:
        stripped = line.strip()
        if stripped.startswith(":") and merged and merged[-1].strip():
            merged[-1] = f"{merged[-1].rstrip()} {stripped.lstrip(':').strip()}".rstrip()
            continue
        merged.append(line)
    return merged


def _merge_bullet_continuations(lines: list[str]) -> list[str]:
    merged: list[str] = []
    i = 0
    while i < len(lines):
        current = lines[i].strip()
        following = lines[i + 1].strip() if i + 1 < len(lines) else ""
        if BULLET_ONLY_RE.match(current) and following and not _looks_like_boundary(following):
            merged.append(f"- {following}")
            i += 2
            continue
        if (
            merged
            and current
            and is_bullet(merged[-1])
            and not is_bullet(current)
            and _CONTINUATION_RE.match(current)
            and not _looks_like_boundary(current)
        ):
            merged[-1] = normalize_whitespace(f"{merged[-1]} {current}")
            i += 1
            continue
        merged.append(lines[i])
        i += 1
    return merged


def prepare_lines(text: str) -> list[str]:
    """Normalize newlines, drop invisible characters and rejoin wrapped lines."""
    cleaned = strip_invisible((text or "").replace("\r\n", "\n").replace("\r", "\n"))
    lines = [line.rstrip() for line in cleaned.split("\n")]
    return _merge_bullet_continuations(_merge_colon_continuations(lines))


# ── Segmentation ─────────────────────────────────────────────────────────


def _blocks(lines: Iterable[str]) -> list[tuple[str | None, list[str]]]:
    """Blank-line separated blocks; a heading is emitted as its own entry."""
    out: list[tuple[str | None, list[str]]] = []
    current: list[str] = []
    for line in lines:
        stripped = line.strip()
        heading = section_heading(stripped) if stripped else None
        if not stripped or heading:
            if current:
                out.append((None, current))
                current = []
            if heading:
                out.append((heading, []))
            continue
        current.append(stripped)
    if current:
        out.append((None, current))
    return out


def is_narrative(line: str, lexicon: Lexicon = DEFAULT_LEXICON) -> bool:
    """Long sentences and first-person / action-verb lines are evidence, not headers."""
    words = line.split()
    if len(words) > 14 or len(line) > 110:
        return True
    if len(words) >= 5:
        first = words[0].lower().strip(",.;:")
        return first in _FIRST_PERSON or lexicon.starts_with_action_verb(line)
    return False


def _date_only(line: str) -> bool:
    rng = find_date_range(line)
    return rng is not None and not strip_date_range(line, rng)


def _starts_new_entry(lines: Sequence[str], index: int, lexicon: Lexicon) -> bool:
    line = lines[index]
    if is_bullet(line) or is_narrative(line, lexicon):
        return False
    if _LABEL_RE.match(line):
        return True
    rng = find_date_range(line)
    if rng is not None:
        residual = strip_date_range(line, rng)
        if residual and (
            lexicon.looks_like_role(residual)
            or lexicon.has_company_suffix(residual)
            or "|" in residual
            or _AT_RE.match(residual)
        ):
            return True
        return False
    # Stacked header: short lines followed closely by a bare period line
    if len(line) > 80:
        return False
    for offset in (1, 2):
        j = index + offset
        if j >= len(lines) or is_bullet(lines[j]):
            return False
        if _date_only(lines[j]):
            return True
        if is_narrative(lines[j], lexicon):
            return False
    return False


def _has_evidence(line: str, lexicon: Lexicon) -> bool:
    return is_bullet(line) or is_narrative(line, lexicon) or is_outcome_line(line, lexicon)


def split_segments(lines: Sequence[str], lexicon: Lexicon = DEFAULT_LEXICON) -> list[list[str]]:
    """Split one block wherever a new entry header follows collected evidence."""
    segments: list[list[str]] = []
    current: list[str] = []
    has_evidence = False
    for index, line in enumerate(lines):
        if current and has_evidence and _starts_new_entry(lines, index, lexicon):
            segments.append(current)
            current, has_evidence = [], False
        current.append(line)
        if _has_evidence(line, lexicon):
            has_evidence = True
    if current:
        segments.append(current)
    return segments


def segment_sections(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> list[list[list[str]]]:
    """Experience segments of *text*, grouped by résumé section.

    Blocks after a non-experience heading (Skills, Education, …) are skipped
    until an experience heading or a block carrying a period shows up.
    """
    sections: list[list[list[str]]] = [[]]
    skipping = False
    for heading, block in _blocks(prepare_lines(text)):
        if heading:
            skipping = heading == "other"
            if sections[-1]:
                sections.append([])
            continue
        if skipping:
            if not any(find_date_range(line) for line in block if not is_bullet(line)):
                continue
            skipping = False
        sections[-1].extend(split_segments(block, lexicon))
    return [section for section in sections if section]


def segment_text(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> list[list[str]]:
    return [segment for section in segment_sections(text, lexicon) for segment in section]


# ── Header inference ─────────────────────────────────────────────────────


def looks_like_skill_list(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> bool:
    parts = [p for p in re.split(r"[,;|•·]", text) if p.strip()]
    if len(parts) >= 3:
        return True
    return len(lexicon.detect_tools(text)) >= 2


def clean_company(company: str, lexicon: Lexicon = DEFAULT_LEXICON) -> str:
    """Drop trailing location noise: "Pepper, New York, NY" -> "Pepper"."""
    company = _PAREN_NOTE_RE.sub("", company.strip(" \t|-–—"))
    company = _TRAILING_FIELD_RE.split(company, maxsplit=1)[0]
    parts = [p.strip() for p in company.split(",")]
    kept = [parts[0]]
    for part in parts[1:]:
        if part and lexicon.has_company_suffix(f"x {part}"):
            kept.append(part)
        else:
            break
    return ", ".join(kept).strip(" \t,;:|-–—")


def _from_labels(lines: Sequence[str], lexicon: Lexicon) -> tuple[str, str] | None:
    role = company = ""
    for line in lines:
        m = _LABEL_RE.match(line)
        if not m:
            continue
        value = m.group("value").strip()
        if m.group("label").lower() in _ROLE_LABELS:
            role = role or value
        else:
            company = company or clean_company(value, lexicon)
    if role and company:
        return role, company
    return None


def _from_at(lines: Sequence[str], lexicon: Lexicon) -> tuple[str, str] | None:
    for line in lines:
        m = _AT_RE.match(line) or _AT_SIGN_RE.match(line)
        if not m:
            continue
        left, right = m.group("left").strip(), m.group("right").strip()
        if lexicon.looks_like_role(left) and not looks_like_skill_list(left, lexicon):
            return left, clean_company(right, lexicon)
    return None


def _pick_pair(left: str, right: str, lexicon: Lexicon) -> tuple[str, str] | None:
    left_role = lexicon.looks_like_role(left)
    right_role = lexicon.looks_like_role(right)
    if left_role and not right_role:
        return left, right
    if right_role and not left_role:
        return right, left
    if left_role and right_role:
        left_co = lexicon.has_company_suffix(left)
        right_co = lexicon.has_company_suffix(right)
        if right_co and not left_co:
            return left, right
        if left_co and not right_co:
            return right, left
    return None


def _from_delimited(lines: Sequence[str], lexicon: Lexicon) -> tuple[str, str] | None:
    for line in lines:
        for kind, splitter in _DELIMITERS:
            parts = [p.strip() for p in splitter.split(line) if p.strip()]
            if len(parts) < 2:
                continue
            left, right = parts[0], parts[1]
            # "Senior Director, Growth Marketing" is one title
            if lexicon.is_functional_area(right) and lexicon.looks_like_role(left):
                break
            if kind == "comma" and _STATE_RE.match(right):
                break
            pair = _pick_pair(left, right, lexicon)
            if pair is None:
                continue
            role, company = pair
            return role, clean_company(company, lexicon)
    return None


def _from_stacked(lines: Sequence[str], lexicon: Lexicon) -> tuple[str, str] | None:
    roles = [l for l in lines if lexicon.looks_like_role(l) and not looks_like_skill_list(l, lexicon)]
    others = [
        l for l in lines
        if not lexicon.looks_like_role(l) and not _LOCATION_WORDS_RE.match(l) and not _LABEL_RE.match(l)
    ]
    if roles and others:
        return roles[0], clean_company(others[0], lexicon)
    return None


HEADER_STRATEGIES: tuple[Callable[[Sequence[str], Lexicon], tuple[str, str] | None], ...] = (
    _from_labels,
    _from_at,
    _from_delimited,
    _from_stacked,
)


def infer_role_company(lines: Sequence[str], lexicon: Lexicon = DEFAULT_LEXICON) -> tuple[str, str]:
    """First strategy that yields a (role, company) pair wins; ("", "") otherwise."""
    for strategy in HEADER_STRATEGIES:
        found = strategy(lines, lexicon)
        if found:
            role, company = (normalize_whitespace(v).strip(" ,;:|-–—") for v in found)
            return role, company
    return "", ""


# ── Evidence ─────────────────────────────────────────────────────────────


def metric_label(line: str) -> str | None:
    m = NUMERIC_SIGNAL_RE.search(line)
    if not m:
        return None
    return m.group(0).strip().rstrip(".,")


def is_outcome_line(line: str, lexicon: Lexicon = DEFAULT_LEXICON) -> bool:
    return lexicon.has_outcome_verb(line) and NUMERIC_SIGNAL_RE.search(line) is not None


def _dedupe_outcomes(outcomes: Iterable[Outcome]) -> list[Outcome]:
    seen: set[str] = set()
    out: list[Outcome] = []
    for outcome in outcomes:
        key = normalize_text(outcome.description)
        if not key or key in seen:
            continue
        seen.add(key)
        out.append(outcome)
    return out


def compute_confidence(
    *,
    role: str,
    company: str,
    start_date: str,
    end_date: str,
    responsibilities: Sequence[str],
    outcomes: Sequence[Outcome],
    tools: Sequence[str],
    skills: Sequence[str],
) -> float:
    w = CONFIDENCE_WEIGHTS
    score = 0.0
    if role:
        score += w["role"]
    if company:
        score += w["company"]
    if start_date:
        score += w["start_date"]
    if start_date or end_date:
        score += w["any_date"]
    if responsibilities:
        score += w["responsibilities"]
    if tools:
        score += w["tools"]
    if skills:
        score += w["skills"]
    if outcomes:
        score += w["outcomes"]
    if any(o.metric for o in outcomes):
        score += w["metric_outcome"]
    if not role or not company:
        score -= MISSING_IDENTITY_PENALTY
    if not responsibilities and not outcomes:
        score -= MISSING_EVIDENCE_PENALTY
    return round(min(0.99, max(0.05, score)), 2)


def review_status_for(confidence: float, role: str, company: str, evidence_count: int) -> str:
    if confidence >= APPROVAL_CONFIDENCE and role and company and evidence_count >= 2:
        return APPROVED
    return REVIEW_NEEDED


def assemble_claim(
    *,
    role: str,
    company: str,
    start_date: str = "",
    end_date: str = "",
    responsibilities: Sequence[str] = (),
    outcomes: Sequence[Outcome] = (),
    tools: Sequence[str] = (),
    skills: Sequence[str] = (),
) -> Claim:
    """Create a Claim from already-classified parts, scoring confidence and status."""
    resp = dedupe_preserving_order(responsibilities)
    outs = _dedupe_outcomes(outcomes)
    tool_list = list(dict.fromkeys(tools))
    skill_list = list(dict.fromkeys(skills))[:MAX_SKILLS]
    confidence = compute_confidence(
        role=role, company=company, start_date=start_date, end_date=end_date,
        responsibilities=resp, outcomes=outs, tools=tool_list, skills=skill_list,
    )
    return Claim(
        company=company,
        role=role,
        start_date=start_date,
        end_date=end_date,
        responsibilities=resp,
        outcomes=outs,
        tools=tool_list,
        skills=skill_list,
        confidence=confidence,
        review_status=review_status_for(confidence, role, company, len(resp) + len(outs)),
        included=confidence >= INCLUDE_CONFIDENCE,
    )


def build_claim(
    role: str,
    company: str,
    start_date: str = "",
    end_date: str = "",
    evidence: Sequence[str] = (),
    lexicon: Lexicon = DEFAULT_LEXICON,
) -> Claim:
    """Classify evidence lines into outcomes / responsibilities and assemble a claim."""
    responsibilities: list[str] = []
    outcomes: list[Outcome] = []
    tools: list[str] = []
    for line in evidence:
        tools.extend(lexicon.detect_tools(line))
        if is_outcome_line(line, lexicon):
            outcomes.append(Outcome(description=line, metric=metric_label(line), is_numeric=True))
        else:
            responsibilities.append(line)
    skills = lexicon.detect_skills(" ".join([role, *evidence]), limit=MAX_SKILLS)
    return assemble_claim(
        role=role, company=company, start_date=start_date, end_date=end_date,
        responsibilities=responsibilities, outcomes=outcomes, tools=tools, skills=skills,
    )


def is_acceptable(claim: Claim, lexicon: Lexicon = DEFAULT_LEXICON) -> bool:
    role, company = claim.role.strip(), claim.company.strip()
    if not role or not company:
        return False
    if len(role) > 120 or len(company) > 80:
        return False
    if not lexicon.looks_like_role(role) or looks_like_skill_list(role, lexicon):
        return False
    if normalize_text(role) == normalize_text(company):
        return False
    return bool(claim.start_date or claim.end_date or claim.evidence_count)


def parse_segment(
    lines: Sequence[str],
    lexicon: Lexicon = DEFAULT_LEXICON,
    default_company: str = "",
) -> Claim | None:
    """One segment -> one claim, or None when no acceptable header is found.

    *default_company* is the employer of the preceding entry in the same
    section; a segment whose header names only a role is filed under it.
    """
    period: DateRange | None = None
    headers: list[str] = []
    evidence: list[str] = []
    for raw in lines:
        if is_bullet(raw):
            text = strip_bullet(raw)
            if text:
                evidence.append(text)
            continue
        line = raw
        if evidence or is_narrative(line, lexicon):
            evidence.append(line)
            continue
        if period is None:
            rng = find_date_range(line)
            if rng is not None:
                period = rng
                line = strip_date_range(line, rng)
                if not line:
                    continue
        if len(headers) < MAX_HEADER_LINES:
            headers.append(line)
        else:
            evidence.append(line)

    role, company = infer_role_company(headers, lexicon)
    if not role and default_company:
        role = next(
            (h for h in headers if lexicon.looks_like_role(h) and not looks_like_skill_list(h, lexicon)),
            "",
        )
        company = default_company if role else ""
    claim = build_claim(
        role,
        company,
        period.start if period else "",
        period.end if period else "",
        evidence,
        lexicon,
    )
    if not is_acceptable(claim, lexicon):
        log.debug("Rejected segment %r (role=%r company=%r)", headers[:1], role, company)
        return None
    return claim


# ── Fragment merging ─────────────────────────────────────────────────────


def same_entry(a: Claim, b: Claim) -> bool:
    if normalize_text(a.company) != normalize_text(b.company):
        return False
    if normalize_text(a.role) != normalize_text(b.role):
        if jaccard_similarity(a.role, b.role) < ROLE_MERGE_SIMILARITY:
            return False
    if a.start_date and b.start_date and normalize_text(a.start_date) != normalize_text(b.start_date):
        return False
    if a.end_date and b.end_date and normalize_text(a.end_date) != normalize_text(b.end_date):
        return False
    return True


def combine_claims(a: Claim, b: Claim) -> Claim:
    """Union *b*'s evidence into *a*; *a* keeps its role wording."""
    if a.start_date:
        start, end = a.start_date, a.end_date
    elif b.start_date:
        start, end = b.start_date, b.end_date
    else:
        start, end = "", a.end_date or b.end_date
    return assemble_claim(
        role=a.role,
        company=a.company,
        start_date=start,
        end_date=end,
        responsibilities=[*a.responsibilities, *b.responsibilities],
        outcomes=[*a.outcomes, *b.outcomes],
        tools=[*a.tools, *b.tools],
        skills=[*a.skills, *b.skills],
    )


def merge_fragments(claims: Sequence[Claim]) -> list[Claim]:
    """Left-to-right merge of claims describing the same company + role window."""
    merged: list[Claim] = []
    for claim in claims:
        target = next((i for i, existing in enumerate(merged) if same_entry(existing, claim)), None)
        if target is None:
            merged.append(claim)
        else:
            merged[target] = combine_claims(merged[target], claim)
    return merged


def extract_claims(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> list[Claim]:
    """Segment *text* and return the merged, validated claims in document order."""
    parsed: list[Claim] = []
    segment_count = 0
    for section in segment_sections(text, lexicon):
        company = ""
        for segment in section:
            segment_count += 1
            claim = parse_segment(segment, lexicon, default_company=company)
            if claim:
                parsed.append(claim)
                company = claim.company
    claims = merge_fragments(parsed)
    log.info(
        "Extracted %d claims from %d segments (%d merged)",
        len(claims), segment_count, len(parsed) - len(claims),
    )
    return claims
