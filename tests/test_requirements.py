from __future__ import annotations

import pytest

from jobfit.lexicon import DEFAULT_LEXICON
from jobfit.models import MET, MISSING, MUST, PREFERRED
from jobfit.requirements import (
    extract_requirements,
    header_priority,
    line_priority,
    parse_years_requirement,
)

JD = (
    "Requirements:\n"
    "- 10+ years of lifecycle marketing experience\n"
    "- Experience with Salesforce and HubSpot\n"
    "- Ability to analyze customer segments\n"
    "Nice to have:\n"
    "- MBA preferred\n"
    "- Bachelor's degree in Marketing"
)


def _summary(reqs):
    return [(r.type, r.description, r.priority) for r in reqs]


class TestExtraction:
    def test_typed_and_ordered(self):
        reqs = extract_requirements(JD)
        assert _summary(reqs) == [
            ("experience", "Lifecycle marketing", MUST),
            ("skill", "Lifecycle Marketing", MUST),
            ("tool", "Salesforce", MUST),
            ("tool", "HubSpot", MUST),
            ("education", "MBA preferred", PREFERRED),
            ("education", "Bachelor's degree in Marketing", PREFERRED),
        ]
        assert reqs[0].years_needed == 10

    def test_word_inside_plural_is_not_a_tool(self):
        assert "Segment" not in [r.description for r in extract_requirements(JD)]

    def test_jd_evidence_is_the_source_line(self):
        salesforce = next(r for r in extract_requirements(JD) if r.description == "Salesforce")
        assert salesforce.jd_evidence == "Experience with Salesforce and HubSpot"

    def test_without_claims_everything_is_missing(self):
        reqs = extract_requirements(JD)
        assert {r.match for r in reqs} == {MISSING}
        assert [r.gap_severity for r in reqs] == ["High"] * 4 + ["Medium"] * 2

    def test_matched_against_claims(self, nimbus_claim, as_of):
        reqs = {r.description: r for r in extract_requirements(JD, [nimbus_claim], as_of=as_of)}

        experience = reqs["Lifecycle marketing"]
        assert experience.match == MET
        assert experience.evidence == "Lifecycle Marketing Director at Nimbus Labs (12+ yrs)"
        assert experience.gap_severity is None

        assert reqs["HubSpot"].match == MET
        assert reqs["HubSpot"].evidence == "Used at Nimbus Labs (Lifecycle Marketing Director)"
        assert reqs["Lifecycle Marketing"].match == MET

        assert reqs["Salesforce"].match == MISSING
        assert reqs["Salesforce"].gap_severity == "High"
        assert reqs["MBA preferred"].match == MISSING
        assert reqs["MBA preferred"].gap_severity == "Medium"

    def test_near_duplicate_experience_collapses(self):
        reqs = extract_requirements(
            "- 5+ years of lifecycle marketing\n- At least 6 years lifecycle marketing experience"
        )
        experience = [r for r in reqs if r.type == "experience"]
        assert len(experience) == 1
        assert experience[0].years_needed == 5

    def test_tool_reported_once(self):
        reqs = extract_requirements("- HubSpot expertise\n- Advanced HubSpot workflows")
        assert [r.description for r in reqs if r.type == "tool"] == ["HubSpot"]

    def test_inline_wording_overrides_section(self):
        reqs = extract_requirements("Requirements:\n- Experience with Looker is a plus")
        [looker] = [r for r in reqs if r.type == "tool"]
        assert looker.priority == PREFERRED

    def test_repeated_skill_reported_once(self):
        reqs = extract_requirements("- Lifecycle programs for new users\n- Own lifecycle experiments")
        assert [r.description for r in reqs if r.type == "skill"] == ["Lifecycle Marketing", "Experimentation"]

    def test_near_duplicate_skill_names_collapse(self):
        close = DEFAULT_LEXICON.extend(skills={
            "Referral Marketing Programs": r"\breferral\b",
            "Referral Marketing Programs Design": r"\breferral design\b",
        })
        distinct = DEFAULT_LEXICON.extend(skills={
            "Referral Marketing": r"\breferral\b",
            "Referral Marketing Programs Design": r"\breferral design\b",
        })
        line = "- Referral design for the growth team"
        assert [r.description for r in extract_requirements(line, lexicon=close) if r.type == "skill"] == [
            "Referral Marketing Programs",
        ]
        assert [r.description for r in extract_requirements(line, lexicon=distinct) if r.type == "skill"] == [
            "Referral Marketing", "Referral Marketing Programs Design",
        ]

    def test_education_repeats_dropped_distinct_kept(self):
        reqs = extract_requirements(
            "- Bachelor's degree in Marketing\n"
            "- bachelor's degree in marketing.\n"
            "- Master's degree in Business"
        )
        assert [r.description for r in reqs if r.type == "education"] == [
            "Bachelor's degree in Marketing",
            "Master's degree in Business",
        ]

    def test_scrum_master_is_a_certification_only(self):
        reqs = extract_requirements("- Certified Scrum Master")
        assert [r.type for r in reqs] == ["certification"]

    def test_requirement_ending_in_colon_is_not_a_header(self):
        reqs = extract_requirements("Nice to have:\nMust have 5+ years of lifecycle marketing:")
        experience = [r for r in reqs if r.type == "experience"]
        assert [(r.description, r.priority, r.years_needed) for r in experience] == [
            ("Lifecycle marketing", MUST, 5),
        ]

    def test_certification(self):
        [cert] = [r for r in extract_requirements("- PMP certification required") if r.type == "certification"]
        assert cert.priority == MUST
        assert cert.match == MISSING

    def test_empty_text(self):
        assert extract_requirements("") == []


class TestYears:
    @pytest.mark.parametrize("line, expected", [
        ("10+ years of lifecycle marketing experience", (10, "Lifecycle marketing")),
        ("3-5 years of B2B SaaS marketing", (3, "B2B SaaS marketing")),
        ("Minimum of 7 years experience in product marketing", (7, "Product marketing")),
        ("5+ years of experience", (5, "Relevant experience")),
        ("7+ years in lifecycle or growth marketing", (7, "Lifecycle or growth marketing")),
        ("5 years as a growth leader", (5, "Growth leader")),
        ("10 years inbound marketing", (10, "Inbound marketing")),
        ("Profitable 3 years in a row", None),
        ("Founded 12 years ago", None),
        ("A 20 year old brand", None),
        ("40+ years of experience", None),
        ("No numbers here", None),
    ])
    def test_parse(self, line, expected):
        assert parse_years_requirement(line) == expected


class TestPriority:
    @pytest.mark.parametrize("line, expected", [
        ("Nice to have:", PREFERRED),
        ("Requirements", MUST),
        ("What you’ll need:", MUST),
        ("## Preferred Qualifications", PREFERRED),
        ("Bonus points if you have:", PREFERRED),
        ("Must-have skills:", MUST),
        ("- Requirements:", None),
        ("About the role:", None),
        ("Experience with Salesforce", None),
        ("Must have 5+ years of lifecycle marketing:", None),
        ("Required HubSpot skills:", None),
    ])
    def test_header_priority(self, line, expected):
        assert header_priority(line) == expected

    @pytest.mark.parametrize("line, current, expected", [
        ("SQL experience is a plus", MUST, PREFERRED),
        ("Python required", PREFERRED, MUST),
        ("Required: SQL, ideally Python", PREFERRED, MUST),
        ("Salesforce administration", PREFERRED, PREFERRED),
    ])
    def test_line_priority(self, line, current, expected):
        assert line_priority(line, current) == expected
