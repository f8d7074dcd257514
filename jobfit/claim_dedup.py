"""Batch-level duplicate absorption and metric conflict labelling for claims."""
from __future__ import annotations

import re
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Iterable, Sequence

from jobfit.log import get_logger
from jobfit.models import Claim
from jobfit.text import jaccard_similarity, normalize_text

log = get_logger(__name__)

# Calibration constant: token Jaccard at or above this marks two claim texts as the same claim.
CLAIM_DUPLICATE_SIMILARITY = 0.5
USABLE_CONFIDENCE = 0.4

ACTIVE = "active"
NEEDS_REVIEW = "needs_review"
CONFLICT = "conflict"

METRIC_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\$([\d,.]+)\s*(?:([kmb])(?![a-z]))?", re.IGNORECASE), "$"),
    (re.compile(r"([\d,.]+)\s*%"), "%"),
    (re.compile(r"([\d,.]+)\s*x\b", re.IGNORECASE), "x"),
    (re.compile(r"\b(\d{2,})\b"), "count"),
)

METRIC_TYPE_HINTS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("revenue", ("revenue", "arr", "mrr", "bookings", "pipeline")),
    ("conversion", ("conversion", "cvr", "signup", "activation")),
    ("efficiency", ("cac", "cpa", "cost", "efficiency")),
    ("retention", ("retention", "churn", "renewal")),
    ("growth", ("growth", "increase", "improved", "scaled", "boosted")),
    ("engagement", ("engagement", "ctr", "open rate", "response rate")),
)

_SUFFIX_MULTIPLIER = {"k": 1_000, "m": 1_000_000, "b": 1_000_000_000}
_LEADING_NUMBER_RE = re.compile(r"\d+(?:\.\d+)?")


@dataclass(frozen=True)
class ClaimMetric:
    metric_type: str
    value: float
    unit: str
    raw: str


@dataclass(frozen=True)
class ClaimRecord:
    """A claim as it sits in an import batch, with dedup/conflict bookkeeping."""

    claim: Claim
    claim_text: str
    metrics: tuple[ClaimMetric, ...]
    status: str
    draft_key: str
    conflict_key: str = ""
    source: str = ""
    imported_at: str = ""
    duplicates_absorbed: int = 0

    @property
    def timeframe(self) -> str:
        return timeframe_label(self.claim.start_date, self.claim.end_date)

    @property
    def auto_usable(self) -> bool:
        return self.status == ACTIVE


@dataclass(frozen=True)
class ImportResult:
    records: tuple[ClaimRecord, ...]
    input_count: int
    deduped_count: int
    conflict_count: int
    needs_review_count: int


@dataclass(frozen=True)
class ClaimsHealth:
    total: int
    active: int
    conflict: int
    needs_review: int
    top_preview: tuple[tuple[str, str, str, str], ...] = ()  # (company, role, text, status)
    conflicts: tuple[tuple[str, str, str, str], ...] = ()  # (company, role, text, conflict key)
    last_import_timestamp: str | None = None
    sources: tuple[str, ...] = ()


# ── Metrics ──────────────────────────────────────────────────────────────


def _to_number(raw: str, suffix: str | None = None) -> float:
    m = _LEADING_NUMBER_RE.match(raw.replace(",", ""))
    if not m:
        return 0.0
    value = float(m.group(0))
    if suffix:
        value *= _SUFFIX_MULTIPLIER.get(suffix.lower(), 1)
    return value


def infer_metric_type(line: str) -> str:
    lower = line.lower()
    for metric_type, keywords in METRIC_TYPE_HINTS:
        if any(keyword in lower for keyword in keywords):
            return metric_type
    return "generic"


def extract_metrics(line: str) -> list[ClaimMetric]:
    metric_type = infer_metric_type(line)
    metrics: list[ClaimMetric] = []
    for pattern, unit in METRIC_PATTERNS:
        for m in pattern.finditer(line):
            suffix = m.group(2) if unit == "$" else None
            value = _to_number(m.group(1), suffix)
            if value > 0:
                metrics.append(ClaimMetric(metric_type=metric_type, value=value, unit=unit, raw=m.group(0)))
    return metrics


def _format_value(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else repr(value)


def metric_signature(metrics: Iterable[ClaimMetric]) -> str:
    return "|".join(sorted(
        f"{normalize_text(m.metric_type)}:{m.unit}:{_format_value(m.value)}" for m in metrics
    ))


def timeframe_label(start_date: str, end_date: str) -> str:
    return f"{start_date or 'unknown'} -> {end_date or 'present'}"


# ── Records ──────────────────────────────────────────────────────────────


def default_claim_text(claim: Claim) -> str:
    if claim.outcomes and claim.outcomes[0].description:
        return claim.outcomes[0].description
    if claim.responsibilities:
        return claim.responsibilities[0]
    return f"{claim.role} at {claim.company}".strip()


def draft_key(claim: Claim) -> str:
    return normalize_text("|".join([claim.company, claim.role, claim.start_date, claim.end_date]))


def build_record(claim: Claim, source: str = "", imported_at: str = "") -> ClaimRecord:
    metrics = tuple(m for line in claim.evidence_lines() for m in extract_metrics(line))
    usable = bool(claim.company and claim.role) and claim.included and claim.confidence >= USABLE_CONFIDENCE
    return ClaimRecord(
        claim=claim,
        claim_text=default_claim_text(claim),
        metrics=metrics,
        status=ACTIVE if usable else NEEDS_REVIEW,
        draft_key=draft_key(claim),
        source=source,
        imported_at=imported_at,
    )


def build_records(
    claims: Iterable[Claim],
    source: str = "",
    imported_at: str | None = None,
) -> list[ClaimRecord]:
    stamp = imported_at or datetime.now(timezone.utc).isoformat()
    return [build_record(claim, source, stamp) for claim in claims]


def richness(record: ClaimRecord) -> float:
    claim = record.claim
    return (
        len(record.metrics) * 5
        + len(claim.outcomes) * 2
        + len(claim.responsibilities)
        + len(claim.tools)
        + min(len(record.claim_text) / 80, 5)
    )


# ── Duplicates ───────────────────────────────────────────────────────────


def _same_identity(a: Claim, b: Claim) -> bool:
    return (
        normalize_text(a.company) == normalize_text(b.company)
        and normalize_text(a.role) == normalize_text(b.role)
        and timeframe_label(a.start_date, a.end_date) == timeframe_label(b.start_date, b.end_date)
    )


def is_duplicate(a: ClaimRecord, b: ClaimRecord) -> bool:
    if not _same_identity(a.claim, b.claim):
        return False
    if metric_signature(a.metrics) != metric_signature(b.metrics):
        return False
    return jaccard_similarity(a.claim_text, b.claim_text) >= CLAIM_DUPLICATE_SIMILARITY


def _dedupe_pass(records: Sequence[ClaimRecord]) -> list[ClaimRecord]:
    survivors: list[ClaimRecord] = []
    for candidate in records:
        index = next((i for i, existing in enumerate(survivors) if is_duplicate(existing, candidate)), None)
        if index is None:
            survivors.append(candidate)
            continue
        existing = survivors[index]
        # Ties keep the earlier record
        if richness(candidate) > richness(existing):
            winner, loser = candidate, existing
        else:
            winner, loser = existing, candidate
        survivors[index] = replace(
            winner, duplicates_absorbed=winner.duplicates_absorbed + loser.duplicates_absorbed + 1,
        )
    return survivors


def dedupe_claims(records: Sequence[ClaimRecord]) -> list[ClaimRecord]:
    """Absorb duplicates left to right until a pass changes nothing."""
    current = list(records)
    while True:
        reduced = _dedupe_pass(current)
        if len(reduced) == len(current):
            return reduced
        current = reduced


def is_likely_duplicate(candidate: Claim | ClaimRecord, existing: Claim | ClaimRecord) -> bool:
    """Would *candidate* duplicate a claim already on file?"""
    a = candidate if isinstance(candidate, ClaimRecord) else build_record(candidate)
    b = existing if isinstance(existing, ClaimRecord) else build_record(existing)
    return is_duplicate(b, a)


# ── Conflicts ────────────────────────────────────────────────────────────


def apply_conflict_labels(records: Sequence[ClaimRecord]) -> list[ClaimRecord]:
    """Mark active claims whose same-type metrics disagree across drafts."""
    groups: dict[str, list[int]] = {}
    for index, record in enumerate(records):
        if not record.claim.company or record.status != ACTIVE:
            continue
        company = normalize_text(record.claim.company)
        for metric in record.metrics:
            members = groups.setdefault(f"{company}|{metric.metric_type}", [])
            if index not in members:
                members.append(index)

    conflict_keys: dict[int, str] = {}
    for key, members in groups.items():
        metric_type = key.rsplit("|", 1)[1]
        drafts: set[str] = set()
        signatures: set[str] = set()
        timeframes: set[str] = set()
        for index in members:
            record = records[index]
            drafts.add(record.draft_key)
            values = ",".join(sorted(
                f"{m.unit}:{_format_value(m.value)}" for m in record.metrics if m.metric_type == metric_type
            ))
            if values:
                signatures.add(values)
            timeframes.add(record.timeframe)
        if len(drafts) > 1 and (len(signatures) > 1 or len(timeframes) > 1):
            for index in members:
                conflict_keys.setdefault(index, key)

    labelled: list[ClaimRecord] = []
    for index, record in enumerate(records):
        key = conflict_keys.get(index)
        if key and record.status == ACTIVE:
            labelled.append(replace(record, status=CONFLICT, conflict_key=key))
        else:
            labelled.append(record)
    return labelled


def prepare_claims(
    claims: Sequence[Claim],
    source: str = "",
    imported_at: str | None = None,
) -> ImportResult:
    """Records -> dedupe -> conflict labels, with batch counts."""
    records = build_records(claims, source, imported_at)
    labelled = apply_conflict_labels(dedupe_claims(records))
    result = ImportResult(
        records=tuple(labelled),
        input_count=len(claims),
        deduped_count=len(labelled),
        conflict_count=sum(1 for r in labelled if r.status == CONFLICT),
        needs_review_count=sum(1 for r in labelled if r.status == NEEDS_REVIEW),
    )
    log.info(
        "Prepared %d claims → %d after dedupe (%d conflict, %d need review)",
        result.input_count, result.deduped_count, result.conflict_count, result.needs_review_count,
    )
    return result


# ── Views ────────────────────────────────────────────────────────────────


def auto_usable(records: Iterable[ClaimRecord]) -> list[Claim]:
    return [record.claim for record in records if record.auto_usable]


def review_queue(records: Iterable[ClaimRecord]) -> list[ClaimRecord]:
    """Records that need a human decision, least confident first."""
    pending = [r for r in records if r.status != ACTIVE]
    return sorted(pending, key=lambda r: r.claim.confidence)


def summarize_claims_health(records: Sequence[ClaimRecord]) -> ClaimsHealth:
    latest = max((r.imported_at for r in records if r.imported_at), default=None)
    preview = tuple(
        (r.claim.company, r.claim.role, r.claim_text, r.status)
        for r in records if r.status != CONFLICT
    )[:5]
    conflicts = tuple(
        (r.claim.company, r.claim.role, r.claim_text, r.conflict_key or CONFLICT)
        for r in records if r.status == CONFLICT
    )[:10]
    return ClaimsHealth(
        total=len(records),
        active=sum(1 for r in records if r.status == ACTIVE),
        conflict=sum(1 for r in records if r.status == CONFLICT),
        needs_review=sum(1 for r in records if r.status == NEEDS_REVIEW),
        top_preview=preview,
        conflicts=conflicts,
        last_import_timestamp=latest,
        sources=tuple(dict.fromkeys(r.source for r in records if r.source)),
    )
