from __future__ import annotations

import re

import pytest

from jobfit.claim_extractor import is_outcome_line
from jobfit.lexicon import DEFAULT_LEXICON, Lexicon, detect_skills, detect_tools


class TestDetectTools:
    def test_alias_maps_to_canonical_name(self):
        assert detect_tools("We use HubSpot and sfdc") == ["HubSpot", "Salesforce"]

    def test_everyday_words_need_exact_capitalization(self):
        assert detect_tools("make sure to drift less") == []
        assert set(detect_tools("Automated with Make and Zapier")) == {"Make", "Zapier"}

    def test_sql_as_lead_stage_is_not_a_tool(self):
        assert detect_tools("Increased SQL conversion by 34%") == []

    def test_sql_with_warehouse_context_is_a_tool(self):
        assert set(detect_tools("Wrote SQL queries against Snowflake")) == {"SQL", "Snowflake"}

    def test_plural_sqls_is_an_outcome_not_a_tool(self):
        line = "Drove 120% increase in SQLs"
        assert detect_tools(line) == []
        assert is_outcome_line(line)


class TestDetectSkills:
    def test_lexicon_order_and_limit(self):
        text = "Owned lifecycle email campaigns and onboarding"
        assert detect_skills(text) == ["Lifecycle Marketing", "Onboarding", "Email Marketing"]
        assert detect_skills(text, limit=2) == ["Lifecycle Marketing", "Onboarding"]

    def test_skill_pattern_lookup_is_case_insensitive(self):
        assert DEFAULT_LEXICON.skill_pattern("lifecycle marketing") is not None
        assert DEFAULT_LEXICON.skill_pattern("Underwater Basket Weaving") is None


class TestVocabulary:
    def test_role_and_company_words(self):
        assert DEFAULT_LEXICON.looks_like_role("VP Marketing")
        assert not DEFAULT_LEXICON.looks_like_role("Acme Corp")
        assert DEFAULT_LEXICON.has_company_suffix("Beta LLC")
        assert not DEFAULT_LEXICON.has_company_suffix("Beta")

    @pytest.mark.parametrize("text, expected", [
        ("Growth Marketing", True),
        ("Sales & Operations", True),
        ("Acme Corp", False),
        ("", False),
    ])
    def test_functional_area(self, text, expected):
        assert DEFAULT_LEXICON.is_functional_area(text) is expected

    def test_action_verb_opening(self):
        assert DEFAULT_LEXICON.starts_with_action_verb("Owned the lifecycle roadmap")
        assert not DEFAULT_LEXICON.starts_with_action_verb("Lifecycle roadmap owner")


class TestExtend:
    def test_extra_tools_and_aliases(self):
        lexicon = Lexicon().extend(tools=["Hightouch"], aliases={"customerio": "Customer.io"})
        assert lexicon.detect_tools("Synced via Hightouch and customerio") == ["Hightouch", "Customer.io"]

    def test_default_lexicon_is_untouched(self):
        DEFAULT_LEXICON.extend(tools=["Hightouch"])
        assert "Hightouch" not in DEFAULT_LEXICON.tools

    def test_extra_skill(self):
        lexicon = DEFAULT_LEXICON.extend(skills={"Pricing Strategy": r"\bpricing\b"})
        assert "Pricing Strategy" in lexicon.detect_skills("Reworked pricing and packaging")

    def test_bad_skill_pattern_raises(self):
        with pytest.raises(re.error):
            DEFAULT_LEXICON.extend(skills={"Broken": "("})
