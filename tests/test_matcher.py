from __future__ import annotations

from dataclasses import replace

import pytest

from jobfit.claim_extractor import assemble_claim
from jobfit.matcher import (
    gap_severity,
    keyword_weights,
    match_experience,
    match_requirement,
    match_skill,
    match_tool,
    relevance,
)
from jobfit.models import MET, MISSING, MUST, PARTIAL, PREFERRED, Requirement


@pytest.fixture
def lifecycle_manager():
    return assemble_claim(
        role="Lifecycle Marketing Manager",
        company="Beta",
        start_date="Jan 2019",
        end_date="Jan 2023",
        responsibilities=["Ran onboarding and retention email programs"],
    )


@pytest.fixture
def sales_director():
    return assemble_claim(
        role="Sales Director",
        company="Gamma",
        start_date="Jan 2010",
        end_date="Jan 2016",
        responsibilities=["Closed enterprise accounts"],
    )


class TestGapSeverity:
    @pytest.mark.parametrize("match, priority, expected", [
        (MET, MUST, None),
        (MET, PREFERRED, None),
        (PARTIAL, MUST, "Medium"),
        (PARTIAL, PREFERRED, "Low"),
        (MISSING, MUST, "High"),
        (MISSING, PREFERRED, "Medium"),
    ])
    def test_table(self, match, priority, expected):
        assert gap_severity(match, priority) == expected


class TestToolsAndSkills:
    def test_tool_listed_on_claim(self, nimbus_claim):
        assert match_tool("hubspot", [nimbus_claim]) == (MET, "Used at Nimbus Labs (Lifecycle Marketing Director)")

    def test_tool_mentioned_in_evidence(self):
        claim = assemble_claim(
            role="Growth Lead", company="Acme", start_date="2020",
            responsibilities=["Built Salesforce dashboards for the sales team"],
        )
        assert match_tool("Salesforce", [claim]) == (MET, "Referenced in Growth Lead at Acme")

    def test_excluded_claims_are_ignored(self, nimbus_claim):
        hidden = replace(nimbus_claim, included=False)
        assert match_tool("HubSpot", [hidden]) == (MISSING, None)

    def test_skill_found_in_text(self, nimbus_claim):
        assert match_skill("Lifecycle Marketing", [nimbus_claim]) == (
            MET, "Shown in Lifecycle Marketing Director at Nimbus Labs",
        )

    def test_unknown_skill_falls_back_to_term_search(self, nimbus_claim):
        assert match_skill("Push", [nimbus_claim])[0] == MET
        assert match_skill("Pricing", [nimbus_claim]) == (MISSING, None)


class TestRelevance:
    def test_keyword_weights_skip_generic_words(self):
        assert keyword_weights("lifecycle marketing experience") == {"lifecycle": 6, "marketing": 6}

    def test_tool_boost(self):
        claim = assemble_claim(
            role="Ops Lead", company="Acme", responsibilities=["Ran Salesforce reports"], tools=["Salesforce"],
        )
        weights = keyword_weights("Salesforce administration")
        assert relevance(weights, claim) == pytest.approx(7 / 18)
        assert relevance(weights, claim, ["Salesforce"]) == pytest.approx(7 / 18 + 0.25)

    def test_plural_tolerant(self):
        claim = assemble_claim(role="Growth Lead", company="Acme", responsibilities=["Ran a paid campaign"])
        assert relevance({"campaigns": 6}, claim) == 1.0


class TestExperience:
    def test_met(self, nimbus_claim, as_of):
        assert match_experience(10, "Lifecycle marketing", [nimbus_claim], as_of=as_of) == (
            MET, "Lifecycle Marketing Director at Nimbus Labs (12+ yrs)",
        )

    def test_partial_when_close(self, lifecycle_manager, as_of):
        assert match_experience(6, "Lifecycle marketing", [lifecycle_manager], as_of=as_of) == (
            PARTIAL, "Lifecycle Marketing Manager at Beta (4 yrs, need 6)",
        )

    def test_first_close_claim_wins(self, lifecycle_manager, nimbus_claim, as_of):
        claims = [lifecycle_manager, nimbus_claim]
        assert match_experience(6, "Lifecycle marketing", claims, as_of=as_of) == (
            PARTIAL, "Lifecycle Marketing Manager at Beta (4 yrs, need 6)",
        )
        assert match_experience(6, "Lifecycle marketing", claims[::-1], as_of=as_of)[0] == MET

    def test_aggregate_years_across_unrelated_roles(self, sales_director, as_of):
        assert match_experience(5, "Data engineering", [sales_director], as_of=as_of) == (
            PARTIAL, "6 total years across 1 role",
        )
        assert match_experience(8, "Data engineering", [sales_director], as_of=as_of) == (MISSING, None)

    def test_no_claims(self):
        assert match_experience(3, "Lifecycle marketing", []) == (MISSING, None)


class TestMatchRequirement:
    def test_education_needs_manual_check(self, nimbus_claim):
        req = Requirement(type="education", description="Bachelor's degree", priority=PREFERRED)
        matched = match_requirement(req, [nimbus_claim])
        assert (matched.match, matched.evidence, matched.gap_severity) == (MISSING, None, "Medium")

    def test_original_is_not_mutated(self, nimbus_claim):
        req = Requirement(type="tool", description="HubSpot")
        matched = match_requirement(req, [nimbus_claim])
        assert matched.match == MET
        assert req.match == MISSING
