"""Skill phrases and the role/company vocabulary used by header parsing."""
from __future__ import annotations

# (skill name, case-insensitive regex)
SKILL_PATTERNS: tuple[tuple[str, str], ...] = (
    ("Lifecycle Marketing", r"\blifecycle\b"),
    ("Demand Generation", r"\bdemand[\s-]gen(?:eration)?\b"),
    ("GTM Strategy", r"\b(?:gtm|go[\s-]to[\s-]market)\b"),
    ("Marketing Automation", r"\bmarketing automation\b"),
    ("Pipeline Generation", r"\bpipeline\b"),
    ("Retention", r"\bretention\b|\bchurn\b"),
    ("Experimentation", r"\bexperiment(?:s|ation)?\b|\ba/b test"),
    ("Attribution", r"\battribution\b"),
    ("SEO", r"\bseo\b"),
    ("Analytics", r"\banalytics\b"),
    ("Team Leadership", r"\b(?:led|lead|managed|manage|built|build|grew)\s+(?:a\s+)?(?:\d+[-\s]person\s+)?(?:team|org)\b|\bdirect reports\b"),
    ("Budget Ownership", r"\bbudget\b|\bp&l\b"),
    ("Onboarding", r"\bonboarding\b"),
    ("Cross-functional Leadership", r"\bcross[\s-]functional\b"),
    ("Product Marketing", r"\bproduct marketing\b"),
    ("Customer Acquisition", r"\b(?:customer|user) acquisition\b"),
    ("Email Marketing", r"\bemail (?:marketing|programs?|campaigns?)\b"),
    ("Content Marketing", r"\bcontent (?:marketing|strategy)\b"),
    ("Brand Strategy", r"\bbrand (?:strategy|positioning)\b"),
    ("Partnerships", r"\bpartnerships?\b"),
)

ROLE_KEYWORDS: tuple[str, ...] = (
    "director", "manager", "engineer", "developer", "lead", "head", "chief",
    "vp", "svp", "evp", "avp", "vice president", "president", "analyst",
    "coordinator", "specialist", "consultant", "architect", "designer",
    "scientist", "officer", "associate", "senior", "sr", "junior", "jr",
    "principal", "staff", "intern", "founder", "co-founder", "owner",
    "strategist", "marketer", "administrator", "advisor", "executive",
    "representative", "supervisor", "recruiter", "researcher", "producer",
    "editor", "writer", "accountant", "controller",
    "ceo", "cto", "cfo", "coo", "cmo", "cro", "cpo",
)

COMPANY_SUFFIXES: tuple[str, ...] = (
    "Inc", "LLC", "Corp", "Corporation", "Ltd", "Co", "Company", "Group",
    "Holdings", "Labs", "Technologies", "Partners", "GmbH", "PLC", "LLP",
    "Systems", "Solutions", "Agency", "Studios", "Ventures",
)

# Words that name a function rather than an employer ("Growth Marketing").
FUNCTIONAL_AREAS: tuple[str, ...] = (
    "growth", "marketing", "product", "engineering", "sales", "operations",
    "ops", "finance", "design", "data", "analytics", "lifecycle", "brand",
    "content", "demand", "generation", "gen", "revenue", "partnerships",
    "strategy", "people", "hr", "customer", "success", "experience",
    "communications", "digital", "performance", "acquisition", "retention",
    "crm", "ecommerce", "e-commerce", "commerce", "research", "security",
    "infrastructure", "platform", "business", "development", "gtm",
    "go-to-market", "and", "&", "of", "the", "emea", "americas", "apac",
    "north", "america", "global", "international", "enterprise", "smb",
)

OUTCOME_VERBS: tuple[str, ...] = (
    "increased", "increase", "grew", "grow", "reduced", "reduce", "improved",
    "improve", "generated", "generate", "drove", "drive", "boosted", "scaled",
    "launched", "saved", "achieved", "delivered", "exceeded", "surpassed",
    "doubled", "tripled", "cut", "lifted", "accelerated", "expanded",
    "raised", "decreased", "lowered", "won", "closed", "captured", "added",
    "produced", "sourced", "built", "led",
)

# Past-tense action verbs that open narrative sentences.
ACTION_VERBS: tuple[str, ...] = OUTCOME_VERBS + (
    "managed", "owned", "oversaw", "created", "designed", "developed",
    "implemented", "established", "partnered", "spearheaded", "directed",
    "ran", "hired", "coached", "mentored", "rebuilt", "introduced",
    "translated", "executed", "orchestrated", "championed", "defined",
)
