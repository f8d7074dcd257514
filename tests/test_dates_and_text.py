from __future__ import annotations

from datetime import date

import pytest

from jobfit.dates import estimate_years, find_date_range, parse_period, strip_date_range
from jobfit.text import (
    contains_term,
    dedupe_preserving_order,
    is_bullet,
    jaccard_similarity,
    normalize_text,
    strip_bullet,
    strip_invisible,
    tokenize,
)


class TestFindDateRange:
    @pytest.mark.parametrize("text, start, end", [
        ("Jan 2020 - Present", "Jan 2020", ""),
        ("March 2016 – December 2019", "March 2016", "December 2019"),
        ("03/2018 - 06/2020", "03/2018", "06/2020"),
        ("2016 — 2021", "2016", "2021"),
        ("2019 to current", "2019", ""),
        ("Advisor (2019)", "2019", "2019"),
    ])
    def test_period_forms(self, text, start, end):
        rng = find_date_range(text)
        assert rng is not None
        assert (rng.start, rng.end) == (start, end)

    def test_no_period(self):
        assert find_date_range("Director of Growth at Acme Corp") is None

    def test_strip_leaves_header(self):
        line = "Director of Growth | Acme Corp | Jan 2020 - Present"
        rng = find_date_range(line)
        assert strip_date_range(line, rng) == "Director of Growth | Acme Corp"

    def test_strip_parenthesised_period(self):
        line = "Advisor, Beta LLC (2019)"
        rng = find_date_range(line)
        assert strip_date_range(line, rng) == "Advisor, Beta LLC"


class TestEstimateYears:
    def test_closed_range(self):
        assert estimate_years("Jan 2020", "Jan 2023") == 3

    def test_bare_years(self):
        assert estimate_years("2015", "2021") == 6

    def test_ongoing_uses_as_of(self):
        assert estimate_years("Jan 2020", "", as_of=date(2024, 1, 1)) == 4
        assert estimate_years("Jan 2020", "Present", as_of=date(2022, 1, 1)) == 2

    def test_unparsable_is_zero(self):
        assert estimate_years("sometime", "2020") == 0
        assert estimate_years("2019", "later") == 0
        assert estimate_years("", "") == 0

    def test_parse_period_forms(self):
        assert parse_period("Sept 2019") == date(2019, 9, 1)
        assert parse_period("11/2021") == date(2021, 11, 1)
        assert parse_period("2010") == date(2010, 1, 1)
        assert parse_period("13/2021") is None


class TestText:
    def test_invisible_characters_removed(self):
        assert strip_invisible("Hub\u200bSpot\ufeff") == "HubSpot"

    @pytest.mark.parametrize("line, expected", [
        ("• Grew revenue", True),
        ("- Grew revenue", True),
        ("✅Shipped onboarding", True),
        ("-5% churn", False),
        ("Grew revenue", False),
    ])
    def test_is_bullet(self, line, expected):
        assert is_bullet(line) is expected

    def test_strip_bullet(self):
        assert strip_bullet("  ➤ Launched lifecycle program") == "Launched lifecycle program"

    def test_normalize_text(self):
        assert normalize_text("  Acme, Corp.  ") == "acme corp"

    def test_tokenize_drops_stop_words_and_short_tokens(self):
        assert tokenize("Led the growth team for EU") == {"growth", "team"}

    def test_jaccard(self):
        assert jaccard_similarity("grew revenue fast", "grew revenue fast") == 1.0
        assert jaccard_similarity("grew revenue", "") == 0.0
        assert jaccard_similarity("pipeline generation", "demand generation") == pytest.approx(1 / 3)

    def test_contains_term_respects_word_boundaries(self):
        assert contains_term("Wrote SQL daily", "SQL")
        assert not contains_term("Drove SQLs", "SQL")
        assert not contains_term("customer segments", "Segment")

    def test_dedupe_preserving_order(self):
        assert dedupe_preserving_order(["Ran email", "ran email.", "Ran SMS"]) == ["Ran email", "Ran SMS"]
