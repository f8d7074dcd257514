from __future__ import annotations

from jobfit.claim_dedup import (
    ACTIVE,
    CONFLICT,
    NEEDS_REVIEW,
    auto_usable,
    build_record,
    dedupe_claims,
    extract_metrics,
    infer_metric_type,
    is_likely_duplicate,
    metric_signature,
    prepare_claims,
    review_queue,
    summarize_claims_health,
    timeframe_label,
)
from jobfit.claim_extractor import assemble_claim
from jobfit.models import Outcome

STAMP = "2024-01-01T00:00:00+00:00"


def _claim(outcome: str = "Grew revenue by 40% in two years", **kwargs):
    fields = dict(role="VP Growth", company="Acme", start_date="Jan 2019", end_date="Dec 2020")
    fields.update(kwargs)
    return assemble_claim(outcomes=[Outcome(outcome, "40%", True)], **fields)


class TestMetrics:
    def test_metric_type_from_keywords(self):
        assert infer_metric_type("Cut CAC by 20%") == "efficiency"
        assert infer_metric_type("Reduced churn to 3%") == "retention"
        assert infer_metric_type("Shipped 14 features") == "generic"

    def test_dollar_suffix_scales_value(self):
        [metric] = [m for m in extract_metrics("Added $2.5M in ARR") if m.unit == "$"]
        assert metric.value == 2_500_000
        assert metric.metric_type == "revenue"

    def test_signature_is_order_independent(self):
        a = extract_metrics("Grew revenue 40% and hit 3x pipeline")
        assert metric_signature(a) == metric_signature(list(reversed(a)))

    def test_timeframe_label(self):
        assert timeframe_label("", "") == "unknown -> present"
        assert timeframe_label("Jan 2019", "Dec 2020") == "Jan 2019 -> Dec 2020"


class TestRecords:
    def test_usable_claim_is_active(self):
        record = build_record(_claim())
        assert record.status == ACTIVE
        assert record.claim_text == "Grew revenue by 40% in two years"

    def test_claim_without_company_needs_review(self):
        record = build_record(assemble_claim(role="Director of Growth", company="", start_date="2020"))
        assert record.status == NEEDS_REVIEW


class TestDedupe:
    def test_identical_claims_collapse(self):
        result = prepare_claims([_claim(), _claim()], source="resume.txt", imported_at=STAMP)
        assert result.input_count == 2
        assert result.deduped_count == 1
        assert result.records[0].duplicates_absorbed == 1
        assert result.conflict_count == 0

    def test_dedupe_is_idempotent(self):
        once = dedupe_claims([build_record(_claim()) for _ in range(3)])
        assert dedupe_claims(once) == once
        assert once[0].duplicates_absorbed == 2

    def test_different_metric_is_not_a_duplicate(self):
        a = build_record(_claim())
        b = build_record(_claim("Grew revenue by 55% in two years"))
        assert dedupe_claims([a, b]) == [a, b]

    def test_richer_record_survives(self):
        plain = _claim()
        rich = assemble_claim(
            role="VP Growth", company="Acme", start_date="Jan 2019", end_date="Dec 2020",
            outcomes=[Outcome("Grew revenue by 40% in two years", "40%", True)],
            responsibilities=["Owned the lifecycle roadmap"],
            tools=["HubSpot"],
        )
        [survivor] = dedupe_claims([build_record(plain), build_record(rich)])
        assert survivor.claim is rich

    def test_is_likely_duplicate_accepts_claims(self):
        assert is_likely_duplicate(_claim(), _claim())
        assert not is_likely_duplicate(_claim(), _claim(company="Beta"))


class TestConflicts:
    def test_disagreeing_revenue_claims(self, acme_revenue_claims):
        result = prepare_claims(acme_revenue_claims, imported_at=STAMP)
        assert result.conflict_count == 2
        assert {r.status for r in result.records} == {CONFLICT}
        assert {r.conflict_key for r in result.records} == {"acme|revenue"}
        assert auto_usable(result.records) == []

    def test_other_companies_do_not_conflict(self, acme_revenue_claims):
        first, second = acme_revenue_claims
        moved = assemble_claim(
            role=second.role, company="Beta", start_date=second.start_date, outcomes=second.outcomes,
        )
        result = prepare_claims([first, moved], imported_at=STAMP)
        assert result.conflict_count == 0


class TestHealth:
    def test_summary_counts(self, acme_revenue_claims):
        records = list(prepare_claims(acme_revenue_claims, source="resume.txt", imported_at=STAMP).records)
        records.append(build_record(assemble_claim(role="Advisor", company="", start_date="2019"), "notes", STAMP))
        health = summarize_claims_health(records)
        assert (health.total, health.active, health.conflict, health.needs_review) == (3, 0, 2, 1)
        assert health.last_import_timestamp == STAMP
        assert health.sources == ("resume.txt", "notes")
        assert len(health.conflicts) == 2
        assert [r.claim.role for r in review_queue(records)][0] == "Advisor"
