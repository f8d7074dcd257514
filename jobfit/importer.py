"""Import pasted career history: pick the best parser, then dedupe and label."""
from __future__ import annotations

from pathlib import Path
from typing import Sequence

from jobfit.claim_dedup import ImportResult, prepare_claims
from jobfit.claim_extractor import extract_claims
from jobfit.lexicon import DEFAULT_LEXICON, Lexicon
from jobfit.log import get_logger
from jobfit.models import Claim
from jobfit.profile_export import parse_profile_export

log = get_logger(__name__)

TEXT_SUFFIXES = (".txt", ".md", ".text")


def read_text_file(path: Path) -> str:
    """Plain-text résumé / profile dump. Binary formats must be converted upstream."""
    suffix = path.suffix.lower()
    if suffix not in TEXT_SUFFIXES:
        raise ValueError(f"Unsupported text format: {suffix or path.name} (convert to .txt first)")
    return path.read_text(encoding="utf-8", errors="ignore")


def claim_quality_score(claims: Sequence[Claim]) -> int:
    score = 0
    for claim in claims:
        if claim.company.strip():
            score += 3
        if claim.role.strip() and len(claim.role.strip()) <= 120:
            score += 2
        if claim.outcomes or claim.responsibilities:
            score += 1
    return score


def extract_claims_for_import(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> list[Claim]:
    """Run the résumé and profile-export parsers; keep the higher-quality result."""
    resume_claims = extract_claims(text, lexicon)
    export_claims = parse_profile_export(text, lexicon)
    resume_score = claim_quality_score(resume_claims)
    export_score = claim_quality_score(export_claims)
    if export_score > resume_score:
        log.info("Using profile-export parser (%d vs %d)", export_score, resume_score)
        return export_claims
    return resume_claims


def import_claims(
    text: str,
    source: str = "pasted text",
    imported_at: str | None = None,
    lexicon: Lexicon = DEFAULT_LEXICON,
) -> ImportResult:
    claims = extract_claims_for_import(text, lexicon)
    return prepare_claims(claims, source=source, imported_at=imported_at)


def import_file(path: Path | str, imported_at: str | None = None, lexicon: Lexicon = DEFAULT_LEXICON) -> ImportResult:
    file_path = Path(path)
    return import_claims(read_text_file(file_path), source=file_path.name, imported_at=imported_at, lexicon=lexicon)
