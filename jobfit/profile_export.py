"""Claims from exported profile text (LinkedIn "Save to PDF" style).

Exported profiles lose most line structure: an experience section reads as
one long run of "<Company> <Role> <Month YYYY> - <Present|Month YYYY>
(<duration>)" headers, each followed by its body text. Entries are found by
their period, the header is split at the earliest role word, and the body is
cut into bullet-sized chunks.
"""
from __future__ import annotations

import re

from jobfit.claim_extractor import assemble_claim, is_acceptable, MAX_SKILLS
from jobfit.lexicon import DEFAULT_LEXICON, Lexicon
from jobfit.log import get_logger
from jobfit.models import Claim, Outcome
from jobfit.text import normalize_text, normalize_whitespace

log = get_logger(__name__)

ROLE_HINTS: tuple[str, ...] = (
    "marketing operations manager", "operations manager", "growth manager",
    "product manager", "account manager", "team lead", "vice president", "vp",
    "chief", "head", "director", "owner", "founder", "co-founder", "manager",
    "lead", "consultant", "specialist", "officer", "engineer", "architect",
)

_MONTH = (
    r"(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|Jun(?:e)?|Jul(?:y)?"
    r"|Aug(?:ust)?|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)"
)
ENTRY_RE = re.compile(
    rf"([A-Z][A-Za-z0-9&'.,/()+\-\s]{{4,180}}?)\s+({_MONTH}\s+\d{{4}})\s*-\s*"
    rf"(Present|{_MONTH}\s+\d{{4}})\s*(?:\([^)]{{2,50}}\))?"
)
NUMERIC_SIGNAL_RE = re.compile(
    r"\$[\d,.]+[kmb]?|[\d,.]+\s*%|[\d,.]+\s*x\b|[\d,.]+\+"
    r"|\b[\d,.]+\s*(?:days|months|years|users|customers|leads|activations)\b",
    re.IGNORECASE,
)
_HEADER_NOISE_RE = re.compile(r"\bPage\s+\d+\s+of\s+\d+\b|\bRole:|\bAccountabilities?:|\bAchievements?:", re.IGNORECASE)
_BODY_MARKER_RE = re.compile(r"\s+[•▪◦●]\s+|\bAccountabilities?:|\bAchievements?:|\bRole:", re.IGNORECASE)
_COMPANY_TOKEN_RE = re.compile(r"^[A-Z0-9][A-Za-z0-9&'.+-]*$")

MAX_OUTCOMES = 5
MAX_RESPONSIBILITIES = 6
MAX_BULLETS = 20
MIN_BULLET_CHARS = 20
SENIORITY_WORDS = frozenset({"senior", "sr", "junior", "jr", "associate", "principal", "lead"})


def experience_section(text: str) -> str:
    lower = text.lower()
    start = lower.find("experience")
    if start == -1:
        return text
    after = text[start + len("experience"):]
    end = after.lower().find("education")
    return after if end == -1 else after[:end]


def refine_company_name(company: str) -> str:
    """Keep the trailing capitalized run of a long header ("... Acme Labs" -> "Acme Labs")."""
    cleaned = normalize_whitespace(company)
    words = cleaned.split(" ") if cleaned else []
    if len(words) <= 5:
        return cleaned
    start = len(words) - 1
    while start >= 0 and _COMPANY_TOKEN_RE.match(words[start]):
        start -= 1
    trailing = words[start + 1:]
    if 1 <= len(trailing) <= 5:
        return " ".join(trailing)
    return " ".join(words[-4:])


def _extend_role_start(tail: str, split_at: int, lexicon: Lexicon) -> int:
    """Pull functional-area words ("Marketing" Manager) into the role, keeping one company word."""
    words = tail[:split_at].split()
    keep = len(words)
    while keep > 1:
        word = words[keep - 1]
        if not (lexicon.is_functional_area(word) or word.lower().rstrip(".") in SENIORITY_WORDS):
            break
        keep -= 1
    if keep == len(words):
        return split_at
    return len(" ".join(words[:keep])) + 1


def split_company_and_role(header: str, lexicon: Lexicon = DEFAULT_LEXICON) -> tuple[str, str]:
    """(company, role) from an export header; company may be empty."""
    cleaned = normalize_whitespace(_HEADER_NOISE_RE.sub(" ", header))
    cleaned = re.sub(r"^[^\w]+", "", cleaned)
    fragments = [normalize_whitespace(f) for f in re.split(r"[.!?]", cleaned)]
    tail = next((f for f in reversed(fragments) if f), cleaned)

    lower = tail.lower()
    split_at = -1
    for hint in ROLE_HINTS:
        m = re.search(rf"\b{re.escape(hint)}\b", lower)
        if m and (split_at == -1 or m.start() < split_at):
            split_at = m.start()

    if split_at == -1:
        if " - " in tail:
            role, _, company = tail.partition(" - ")
            return refine_company_name(company), normalize_whitespace(role)
        return "", tail
    split_at = _extend_role_start(tail, split_at, lexicon)
    return refine_company_name(tail[:split_at]), normalize_whitespace(tail[split_at:])


def split_body(body: str) -> list[str]:
    normalized = _BODY_MARKER_RE.sub(" • ", normalize_whitespace(body))
    chunks = [normalize_whitespace(chunk) for chunk in normalized.split("•")]
    return [chunk for chunk in chunks if len(chunk) >= MIN_BULLET_CHARS][:MAX_BULLETS]


def parse_profile_export(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> list[Claim]:
    section = normalize_whitespace(experience_section(text or ""))
    matches = list(ENTRY_RE.finditer(section))
    claims: list[Claim] = []
    seen: set[str] = set()

    for index, m in enumerate(matches):
        header = normalize_whitespace(m.group(1))
        start_date = normalize_whitespace(m.group(2))
        end_raw = normalize_whitespace(m.group(3))
        if not header or not start_date:
            continue

        body_end = matches[index + 1].start() if index + 1 < len(matches) else len(section)
        body = section[m.end():body_end]
        company, role = split_company_and_role(header, lexicon)
        if not role or len(role) > 140:
            continue

        bullets = split_body(body)
        outcomes = [
            Outcome(description=b, metric=NUMERIC_SIGNAL_RE.search(b).group(0), is_numeric=True)
            for b in bullets if NUMERIC_SIGNAL_RE.search(b)
        ][:MAX_OUTCOMES]
        responsibilities = [b for b in bullets if not NUMERIC_SIGNAL_RE.search(b)][:MAX_RESPONSIBILITIES]
        if not outcomes and not responsibilities:
            first_sentence = normalize_whitespace(re.split(r"[.!?]", body)[0])[:220]
            responsibilities = [first_sentence] if first_sentence else []

        end_date = "" if end_raw.lower() == "present" else end_raw
        key = normalize_text(f"{company}|{role}|{start_date}|{end_date}")
        if key in seen:
            continue

        claim = assemble_claim(
            role=role,
            company=company,
            start_date=start_date,
            end_date=end_date,
            responsibilities=responsibilities,
            outcomes=outcomes,
            tools=lexicon.detect_tools(f"{header} {body}"),
            skills=lexicon.detect_skills(f"{role} {body}", limit=MAX_SKILLS),
        )
        if not is_acceptable(claim, lexicon):
            log.debug("Skipped export entry %r", header[:60])
            continue
        seen.add(key)
        claims.append(claim)

    log.debug("Profile export parser found %d of %d entries", len(claims), len(matches))
    return claims
