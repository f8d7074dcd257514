from __future__ import annotations

from datetime import date

import pytest

from jobfit.claim_extractor import assemble_claim
from jobfit.models import Claim, Outcome, Profile

AS_OF = date(2024, 1, 1)

DIRECTOR_OF_GROWTH = (
    "Director of Growth at Acme Corp\n"
    "Jan 2020 - Present\n"
    "- Grew pipeline revenue by 150% YoY\n"
    "- Implemented HubSpot marketing automation"
)


@pytest.fixture
def as_of() -> date:
    return AS_OF


@pytest.fixture
def profile() -> Profile:
    return Profile(
        name="Jordan Example",
        target_roles=["VP of Growth", "Director of Growth"],
        comp_floor=150_000,
        comp_target=200_000,
    )


@pytest.fixture
def nimbus_claim() -> Claim:
    return assemble_claim(
        role="Lifecycle Marketing Director",
        company="Nimbus Labs",
        start_date="Jan 2012",
        end_date="Dec 2023",
        responsibilities=["Owned lifecycle marketing programs across email and push"],
        tools=["HubSpot"],
    )


@pytest.fixture
def acme_revenue_claims() -> list[Claim]:
    """Two Acme drafts reporting different revenue numbers."""
    return [
        assemble_claim(
            role="VP Growth",
            company="Acme",
            start_date="Jan 2019",
            end_date="Dec 2020",
            outcomes=[Outcome("Grew revenue by 40% in two years", "40%", True)],
        ),
        assemble_claim(
            role="Head of Growth",
            company="Acme",
            start_date="Jan 2020",
            outcomes=[Outcome("Grew revenue by 65% after the relaunch", "65%", True)],
        ),
    ]
