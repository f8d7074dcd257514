from .base import DEFAULT_LEXICON, Lexicon, detect_skills, detect_tools
from .skills import COMPANY_SUFFIXES, ROLE_KEYWORDS, SKILL_PATTERNS
from .tools import KNOWN_TOOLS, TOOL_ALIASES

__all__ = [
    "DEFAULT_LEXICON", "Lexicon", "detect_skills", "detect_tools",
    "COMPANY_SUFFIXES", "ROLE_KEYWORDS", "SKILL_PATTERNS",
    "KNOWN_TOOLS", "TOOL_ALIASES",
]
