from __future__ import annotations

import pytest

from jobfit.compensation import format_comp_range, parse_comp_from_text


@pytest.mark.parametrize("text, expected", [
    ("Base: $150,000 - $200,000", (150_000, 200_000)),
    ("Salary $150k-$200k plus equity", (150_000, 200_000)),
    ("$180K to $220K", (180_000, 220_000)),
    ("Base salary 150,000 to 200,000 USD", (150_000, 200_000)),
    ("$165000 – $190000 DOE", (165_000, 190_000)),
])
def test_parses_ranges(text, expected):
    comp = parse_comp_from_text(text)
    assert comp is not None
    assert (comp.comp_min, comp.comp_max) == expected
    assert comp.label == format_comp_range(*expected)


@pytest.mark.parametrize("text", [
    "No salary listed",
    "$40,000 - $45,000",
    "$250,000 - $180,000",
    "$1,200,000 - $1,500,000",
    "",
])
def test_implausible_or_absent(text):
    assert parse_comp_from_text(text) is None


def test_first_plausible_range_wins():
    text = "Hourly $20-$30 for interns. Full-time base $140,000 - $160,000."
    comp = parse_comp_from_text(text)
    assert (comp.comp_min, comp.comp_max) == (140_000, 160_000)


def test_format():
    assert format_comp_range(150_000, 200_000) == "$150,000 - $200,000"
