"""Load profile, lexicon overrides and env configuration."""
from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from jobfit.lexicon import DEFAULT_LEXICON, Lexicon
from jobfit.log import get_logger
from jobfit.models import HardFilters, Job, LocationPreference, Profile, summarize_location_preferences

log = get_logger(__name__)

load_dotenv()

LOCATION_TYPES = ("Remote", "Hybrid", "Onsite")
EMPLOYMENT_FILTERS = ("exclude_contract", "ft_only")


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


CONFIG_DIR: Path = Path(__file__).resolve().parent.parent / "config"
PROFILE_PATH: Path = Path(get_env("JOBFIT_PROFILE") or CONFIG_DIR / "profile.yaml")
LEXICON_PATH: Path = Path(get_env("JOBFIT_LEXICON") or CONFIG_DIR / "lexicon.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a YAML mapping, got {type(data).__name__}")
    return data


# ── Profile ──────────────────────────────────────────────────────────────


def load_profile(path: Path | str | None = None) -> Profile:
    profile_path = Path(path) if path else PROFILE_PATH
    data = _read_yaml(profile_path)
    log.debug("Loaded profile from %s", profile_path)
    return profile_from_dict(data)


def profile_from_dict(data: dict[str, Any]) -> Profile:
    data = dict(data)

    # Backward compat: older profiles called these preferred_roles
    if "preferred_roles" in data and "target_roles" not in data:
        data["target_roles"] = data.pop("preferred_roles")

    raw_prefs = data.get("location_preferences")
    summary = str(data.get("location_preference") or "")
    if raw_prefs:
        prefs = sanitize_location_preferences(raw_prefs)
    elif summary:
        # Backward compat: a single free-text preference string
        prefs = [location_preference_from_hint(part) for part in summary.split(";") if part.strip()]
    else:
        prefs = []

    return Profile(
        name=str(data.get("name") or ""),
        target_roles=[str(r) for r in data.get("target_roles") or []],
        comp_floor=_as_int(data.get("comp_floor"), 0),
        comp_target=_as_int(data.get("comp_target"), 0),
        required_benefits=[str(b) for b in data.get("required_benefits") or []],
        preferred_benefits=[str(b) for b in data.get("preferred_benefits") or []],
        location_preference=summary or summarize_location_preferences(prefs),
        location_preferences=prefs,
        hard_filters=sanitize_hard_filters(data.get("hard_filters")),
    )


def sanitize_hard_filters(raw: dict[str, Any] | None) -> HardFilters:
    src = raw or {}
    defaults = HardFilters()
    employment = src.get("employment_type")
    return HardFilters(
        requires_visa_sponsorship=bool(src.get("requires_visa_sponsorship", False)),
        min_base_salary=_clamp(src.get("min_base_salary"), 0, 2_000_000, defaults.min_base_salary),
        max_onsite_days_per_week=_clamp(
            src.get("max_onsite_days_per_week"), 0, 5, defaults.max_onsite_days_per_week,
        ),
        max_travel_percent=_clamp(src.get("max_travel_percent"), 0, 100, defaults.max_travel_percent),
        employment_type=employment if employment in EMPLOYMENT_FILTERS else defaults.employment_type,
    )


def sanitize_location_preferences(raw: list[dict[str, Any]]) -> list[LocationPreference]:
    prefs: list[LocationPreference] = []
    for item in raw:
        kind = str(item.get("type") or "Remote").strip().title()
        if kind not in LOCATION_TYPES:
            log.warning("Ignoring unknown location preference type %r", item.get("type"))
            continue
        radius = item.get("radius_miles")
        prefs.append(LocationPreference(
            type=kind,
            city="" if kind == "Remote" else str(item.get("city") or "").strip(),
            radius_miles=None if kind == "Remote" or radius is None else _clamp(radius, 1, 500, 25),
            willing_to_relocate=bool(item.get("willing_to_relocate", False)),
        ))
    return prefs


def location_preference_from_hint(hint: str) -> LocationPreference:
    lowered = hint.lower()
    kind = "Remote"
    if "hybrid" in lowered:
        kind = "Hybrid"
    if "onsite" in lowered or "on-site" in lowered or "in-person" in lowered:
        kind = "Onsite"
    if kind == "Remote":
        return LocationPreference(type="Remote")
    city = re.sub(r"\b(?:hybrid|onsite|on-site|in-person|in|near)\b", " ", hint, flags=re.IGNORECASE)
    city = re.sub(r"^[\s,:\-–]+|[\s,:\-–]+$", "", re.sub(r"\s+", " ", city))
    return LocationPreference(type=kind, city=city, radius_miles=25)


def job_from_dict(data: dict[str, Any]) -> Job:
    return Job(
        title=str(data.get("title") or ""),
        company=str(data.get("company") or ""),
        description=str(data.get("description") or data.get("job_description") or ""),
        comp_range=str(data.get("comp_range") or ""),
        comp_min=_as_int(data.get("comp_min"), None),
        comp_max=_as_int(data.get("comp_max"), None),
        location=str(data.get("location") or ""),
        location_type=str(data.get("location_type") or "Unknown"),
        employment_type=str(data.get("employment_type") or "Unknown"),
    )


# ── Lexicon overrides ────────────────────────────────────────────────────


def load_lexicon(path: Path | str | None = None) -> Lexicon:
    """Default lexicon extended with tools, aliases and skills from YAML."""
    lexicon_path = Path(path) if path else LEXICON_PATH
    if not lexicon_path.exists():
        log.debug("No lexicon overrides at %s, using defaults", lexicon_path)
        return DEFAULT_LEXICON
    data = _read_yaml(lexicon_path)
    tools = data.get("extra_tools") or []
    aliases = data.get("tool_aliases") or {}
    skills = data.get("skills") or {}
    if not isinstance(tools, list) or not isinstance(aliases, dict) or not isinstance(skills, dict):
        raise ValueError(
            f"{lexicon_path}: extra_tools must be a list; tool_aliases and skills must be mappings"
        )
    lexicon = DEFAULT_LEXICON.extend(
        tools=[str(t) for t in tools],
        aliases={str(k): str(v) for k, v in aliases.items()},
        skills={str(k): str(v) for k, v in skills.items()},
    )
    log.info(
        "Loaded lexicon overrides from %s (%d tools, %d aliases, %d skills)",
        lexicon_path, len(tools), len(aliases), len(skills),
    )
    return lexicon


def _as_int(value: Any, default: int | None) -> int | None:
    if value is None or value == "":
        return default
    try:
        return int(round(float(value)))
    except (TypeError, ValueError):
        log.warning("Expected a number, got %r", value)
        return default


def _clamp(value: Any, low: int, high: int, default: int) -> int:
    number = _as_int(value, None)
    if number is None:
        return default
    return min(high, max(low, number))
