"""Keyword tables the fit scorer reads from job descriptions."""
from __future__ import annotations

PAID_MEDIA_KEYWORDS: tuple[str, ...] = (
    "paid media manager",
    "paid social manager",
    "ppc manager",
    "performance marketing manager",
    "paid acquisition manager",
    "sem manager",
    "paid search manager",
    "media buyer",
)

SEED_STAGE_KEYWORDS: tuple[str, ...] = (
    "seed stage",
    "seed-stage",
    "pre-seed",
    "seed funded",
    "seed round",
    "angel funded",
    "bootstrapped startup",
)

SENIOR_TITLES: tuple[str, ...] = (
    "vp", "vice president", "head of", "director", "chief", "svp",
    "senior vice president",
)

STRATEGY_SIGNALS: tuple[str, ...] = (
    "strategy", "strategic", "roadmap", "vision", "build the team",
    "lead the team", "cross-functional", "p&l", "budget ownership",
)

TEAM_SIGNALS: tuple[str, ...] = (
    "manage a team", "direct reports", "build a team", "lead a team",
)

BENEFIT_SIGNALS: tuple[str, ...] = (
    "medical", "dental", "401k", "401(k)", "equity", "stock", "bonus", "rsu",
    "shares",
)

# (keyword, stage score); unknown stage scores 8
STAGE_SIGNALS: tuple[tuple[str, int], ...] = (
    ("series c", 18),
    ("series d", 19),
    ("series b", 15),
    ("series a", 10),
    ("public", 18),
    ("ipo", 18),
    ("profitable", 17),
    ("fortune 500", 20),
    ("enterprise", 14),
)

DOMAIN_SIGNALS: tuple[str, ...] = (
    "growth", "lifecycle", "gtm", "go-to-market", "revenue", "demand gen",
    "acquisition", "retention", "conversion", "funnel", "marketing ops",
    "ecommerce", "e-commerce", "b2c", "dtc", "direct-to-consumer",
    "martech", "analytics", "attribution", "experimentation",
)

# (phrase, penalty, red flag)
RISK_SIGNALS: tuple[tuple[str, int, str], ...] = (
    ("miracle", 3, 'JD implies "miracle needed" expectations'),
    ("wear many hats", 2, "Wear-many-hats language (resource constrained)"),
    ("startup mentality", 1, "Startup mentality language"),
    ("unicorn", 2, 'Looking for a "unicorn" (unrealistic expectations)'),
    ("do it all", 3, 'Expects one person to "do it all"'),
)
