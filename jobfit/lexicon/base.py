"""Immutable lexicon shared by the extractors, matcher and scorer."""
from __future__ import annotations

import re
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Mapping

from jobfit.lexicon import signals as _signals
from jobfit.lexicon import skills as _skills
from jobfit.lexicon import tools as _tools
from jobfit.text import term_pattern


@dataclass(frozen=True)
class Lexicon:
    tools: tuple[str, ...] = _tools.KNOWN_TOOLS
    case_sensitive_tools: tuple[str, ...] = _tools.CASE_SENSITIVE_TOOLS
    tool_aliases: tuple[tuple[str, str], ...] = _tools.TOOL_ALIASES
    sql_funnel_context: tuple[str, ...] = _tools.SQL_FUNNEL_CONTEXT
    sql_analytics_context: tuple[str, ...] = _tools.SQL_ANALYTICS_CONTEXT
    skills: tuple[tuple[str, str], ...] = _skills.SKILL_PATTERNS
    role_keywords: tuple[str, ...] = _skills.ROLE_KEYWORDS
    company_suffixes: tuple[str, ...] = _skills.COMPANY_SUFFIXES
    functional_areas: tuple[str, ...] = _skills.FUNCTIONAL_AREAS
    outcome_verbs: tuple[str, ...] = _skills.OUTCOME_VERBS
    action_verbs: tuple[str, ...] = _skills.ACTION_VERBS
    paid_media_keywords: tuple[str, ...] = _signals.PAID_MEDIA_KEYWORDS
    seed_stage_keywords: tuple[str, ...] = _signals.SEED_STAGE_KEYWORDS
    senior_titles: tuple[str, ...] = _signals.SENIOR_TITLES
    strategy_signals: tuple[str, ...] = _signals.STRATEGY_SIGNALS
    team_signals: tuple[str, ...] = _signals.TEAM_SIGNALS
    benefit_signals: tuple[str, ...] = _signals.BENEFIT_SIGNALS
    stage_signals: tuple[tuple[str, int], ...] = _signals.STAGE_SIGNALS
    domain_signals: tuple[str, ...] = _signals.DOMAIN_SIGNALS
    risk_signals: tuple[tuple[str, int, str], ...] = _signals.RISK_SIGNALS

    def extend(
        self,
        *,
        tools: tuple[str, ...] | list[str] = (),
        aliases: Mapping[str, str] | None = None,
        skills: Mapping[str, str] | None = None,
    ) -> "Lexicon":
        """Return a new lexicon with extra tools, aliases and skill patterns."""
        new_tools = self.tools + tuple(t for t in tools if t and t not in self.tools)
        new_aliases = self.tool_aliases + tuple(
            (alias.lower(), canonical) for alias, canonical in (aliases or {}).items()
        )
        known_skills = {name for name, _ in self.skills}
        new_skills = self.skills + tuple(
            (name, pattern) for name, pattern in (skills or {}).items()
            if name not in known_skills
        )
        for _, pattern in new_skills:
            re.compile(pattern)  # surface bad overrides at load time
        return replace(self, tools=new_tools, tool_aliases=new_aliases, skills=new_skills)

    # ── Tools ────────────────────────────────────────────────────────────

    def detect_tools(self, text: str) -> list[str]:
        """Canonical tool names mentioned in *text*, in lexicon order."""
        text = text or ""
        found: list[str] = []
        for tool in self.tools:
            if tool in found:
                continue
            if tool in self.case_sensitive_tools:
                hit = _exact_pattern(tool).search(text)
            else:
                hit = term_pattern(tool).search(text)
            if hit:
                found.append(tool)
        for alias, canonical in self.tool_aliases:
            if canonical not in found and term_pattern(alias).search(text):
                found.append(canonical)
        if "SQL" in found and self._sql_means_leads(text):
            found.remove("SQL")
        return found

    def _sql_means_leads(self, text: str) -> bool:
        if not _any_term(self.sql_funnel_context).search(text):
            return False
        return not _any_term(self.sql_analytics_context).search(text)

    # ── Skills ───────────────────────────────────────────────────────────

    def detect_skills(self, text: str, limit: int = 8) -> list[str]:
        found = [name for name, pattern in _compiled_skills(self.skills) if pattern.search(text or "")]
        return found[:limit]

    def skill_pattern(self, name: str) -> re.Pattern[str] | None:
        for skill_name, pattern in _compiled_skills(self.skills):
            if skill_name.lower() == name.lower():
                return pattern
        return None

    # ── Role / company vocabulary ────────────────────────────────────────

    def looks_like_role(self, text: str) -> bool:
        return bool(_any_term(self.role_keywords).search(text or ""))

    def has_company_suffix(self, text: str) -> bool:
        return bool(_suffix_pattern(self.company_suffixes).search((text or "").strip()))

    def is_functional_area(self, text: str) -> bool:
        words = [w for w in re.split(r"[\s/,]+", (text or "").lower()) if w]
        areas = set(self.functional_areas)
        return bool(words) and all(w in areas for w in words)

    def has_outcome_verb(self, text: str) -> bool:
        return bool(_any_term(self.outcome_verbs).search(text or ""))

    def starts_with_action_verb(self, text: str) -> bool:
        first = (text or "").strip().split(" ", 1)[0].lower().strip(",.;:")
        return first in self.action_verbs


@lru_cache(maxsize=64)
def _any_term(terms: tuple[str, ...]) -> re.Pattern[str]:
    alternation = "|".join(re.escape(t) for t in sorted(terms, key=len, reverse=True))
    return re.compile(r"(?<![A-Za-z0-9])(?:" + alternation + r")(?![A-Za-z0-9])", re.IGNORECASE)


@lru_cache(maxsize=256)
def _exact_pattern(term: str) -> re.Pattern[str]:
    return re.compile(r"(?<![A-Za-z0-9])" + re.escape(term) + r"(?![A-Za-z0-9])")


@lru_cache(maxsize=16)
def _suffix_pattern(suffixes: tuple[str, ...]) -> re.Pattern[str]:
    alternation = "|".join(re.escape(s) for s in suffixes)
    return re.compile(r"[\s,](?:" + alternation + r")\.?$", re.IGNORECASE)


@lru_cache(maxsize=16)
def _compiled_skills(entries: tuple[tuple[str, str], ...]) -> tuple[tuple[str, re.Pattern[str]], ...]:
    return tuple((name, re.compile(pattern, re.IGNORECASE)) for name, pattern in entries)


DEFAULT_LEXICON = Lexicon()


def detect_tools(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> list[str]:
    return lexicon.detect_tools(text)


def detect_skills(text: str, lexicon: Lexicon = DEFAULT_LEXICON, limit: int = 8) -> list[str]:
    return lexicon.detect_skills(text, limit=limit)
