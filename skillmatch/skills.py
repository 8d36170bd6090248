"""Skill dictionary, keyword extraction and weighted skill matching."""
from __future__ import annotations

import math
import re
from collections.abc import Iterable, Iterator, Sequence
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from skillmatch.config import DEFAULT_SKILLS_PATH
from skillmatch.log import get_logger
from skillmatch.models import SkillCategory, SkillDefinition, SkillMatchResult

log = get_logger(__name__)


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (67.5 -> 68)."""
    return int(math.floor(value + 0.5))


def _word_pattern(term: str) -> re.Pattern[str]:
    # ASCII word boundaries: "java" must not match inside "javascript"
    return re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE | re.ASCII)


# ── Dictionary ───────────────────────────────────────────────────────────


class SkillDictionary:
    """Immutable table of known skills, in declaration order."""

    def __init__(self, definitions: Iterable[SkillDefinition]) -> None:
        defs: list[SkillDefinition] = []
        by_name: dict[str, SkillDefinition] = {}
        for d in definitions:
            d = _normalized(d)
            if d.name in by_name:
                raise ValueError(f"Duplicate skill name: {d.name!r}")
            by_name[d.name] = d
            defs.append(d)

        self._definitions: tuple[SkillDefinition, ...] = tuple(defs)
        self._by_name = by_name
        self._surface: dict[str, str] = {}
        for d in defs:
            for alias in d.aliases:
                self._surface.setdefault(alias, d.name)
        for d in defs:
            self._surface[d.name] = d.name
        self._patterns: tuple[tuple[SkillDefinition, tuple[re.Pattern[str], ...]], ...] = tuple(
            (d, tuple(_word_pattern(term) for term in (d.name, *d.aliases)))
            for d in defs
        )

    @classmethod
    def from_yaml(cls, path: Path) -> SkillDictionary:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        entries = data.get("skills") if isinstance(data, dict) else data
        if not isinstance(entries, list):
            raise ValueError(f"{path.name}: expected a 'skills' list")
        dictionary = cls(definition_from_dict(e) for e in entries)
        log.debug("Loaded %d skill definitions from %s", len(dictionary), path.name)
        return dictionary

    def __len__(self) -> int:
        return len(self._definitions)

    def __iter__(self) -> Iterator[SkillDefinition]:
        return iter(self._definitions)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip().lower() in self._by_name

    @property
    def names(self) -> list[str]:
        return [d.name for d in self._definitions]

    def get(self, name: str) -> SkillDefinition | None:
        return self._by_name.get((name or "").strip().lower())

    def resolve(self, surface: str) -> str | None:
        """Canonical name for a canonical name or alias, any case."""
        return self._surface.get((surface or "").strip().lower())

    def in_category(self, category: SkillCategory) -> list[SkillDefinition]:
        return [d for d in self._definitions if d.category is category]

    def patterns(self) -> Iterator[tuple[SkillDefinition, tuple[re.Pattern[str], ...]]]:
        """Each definition with its compiled name-then-alias patterns."""
        return iter(self._patterns)


def _normalized(d: SkillDefinition) -> SkillDefinition:
    name = (d.name or "").strip().lower()
    if not name:
        raise ValueError("Skill definition with empty name")
    if not isinstance(d.category, SkillCategory):
        raise ValueError(f"Skill {name!r}: unknown category {d.category!r}")
    if not d.weight or d.weight <= 0:
        raise ValueError(f"Skill {name!r}: weight must be positive, got {d.weight!r}")
    aliases = tuple(a.strip().lower() for a in d.aliases if a and a.strip())
    return SkillDefinition(name=name, category=d.category, weight=float(d.weight), aliases=aliases)


def definition_from_dict(data: dict[str, Any]) -> SkillDefinition:
    try:
        category = SkillCategory(str(data.get("category", "")).strip().lower())
    except ValueError:
        raise ValueError(
            f"Skill {data.get('name')!r}: unknown category {data.get('category')!r}"
        ) from None
    try:
        weight = float(data.get("weight", 0))
    except (TypeError, ValueError):
        raise ValueError(f"Skill {data.get('name')!r}: weight is not a number") from None
    return SkillDefinition(
        name=str(data.get("name", "")),
        category=category,
        weight=weight,
        aliases=tuple(str(a) for a in data.get("aliases") or ()),
    )


@lru_cache(maxsize=8)
def _load_cached(path: str) -> SkillDictionary:
    return SkillDictionary.from_yaml(Path(path))


def load_skill_dictionary(path: Path | None = None) -> SkillDictionary:
    """Load (and memoize) a dictionary file; defaults to the bundled one."""
    return _load_cached(str((path or DEFAULT_SKILLS_PATH).resolve()))


# ── Extraction ───────────────────────────────────────────────────────────


def extract_skills(text: str | None, dictionary: SkillDictionary) -> list[str]:
    """Canonical names of dictionary skills mentioned in *text*.

    The canonical name is tried first, then each alias in declaration order;
    the first whole-word hit records the canonical name. Result follows
    dictionary order and holds no duplicates.
    """
    if not text:
        return []
    normalized = text.lower()
    found: list[str] = []
    for definition, patterns in dictionary.patterns():
        if any(p.search(normalized) for p in patterns):
            found.append(definition.name)
    return found


# ── Matching ─────────────────────────────────────────────────────────────


def calculate_skill_match(
    candidate_skills: Iterable[str],
    required_skills: Sequence[str],
    dictionary: SkillDictionary,
) -> SkillMatchResult:
    """Weighted overlap of *required_skills* covered by *candidate_skills*.

    Required skills missing from the dictionary are ignored. The score is
    matched weight over total weight of recognized skills, as a rounded
    percentage, and 0 when nothing is recognized.
    """
    candidates = {(s or "").strip().lower() for s in candidate_skills}
    matched: list[str] = []
    missing: list[str] = []
    by_category: dict[SkillCategory, list[str]] = {c: [] for c in SkillCategory}
    total_weight = 0.0
    matched_weight = 0.0

    for skill in required_skills:
        definition = dictionary.get(skill)
        if definition is None:
            continue
        total_weight += definition.weight
        if definition.name in candidates:
            matched.append(definition.name)
            by_category[definition.category].append(definition.name)
            matched_weight += definition.weight
        else:
            missing.append(definition.name)

    score = round_half_up(matched_weight / total_weight * 100) if total_weight else 0
    return SkillMatchResult(
        matched=matched,
        missing=missing,
        score=score,
        matched_by_category=by_category,
    )


# ── Suggestions ──────────────────────────────────────────────────────────

ROLE_RECOMMENDED_SKILLS: dict[str, list[str]] = {
    "frontend": ["react", "typescript", "javascript"],
    "backend": ["node.js", "express", "postgresql"],
    "fullstack": ["react", "node.js", "typescript", "postgresql"],
    "mobile": ["react native", "typescript", "swift", "kotlin"],
    "devops": ["docker", "kubernetes", "aws", "azure"],
}
_DEFAULT_ROLE = "fullstack"


def recommended_skills_for_role(role: str | None) -> list[str]:
    key = (role or "").strip().lower().replace(" ", "").replace("-", "")
    return list(ROLE_RECOMMENDED_SKILLS.get(key, ROLE_RECOMMENDED_SKILLS[_DEFAULT_ROLE]))


def suggest_skill_improvements(
    current_skills: Iterable[str],
    target_role: str | None,
    dictionary: SkillDictionary,
) -> list[str]:
    """One hint per category where the role's recommended skills are lacking."""
    have = {(s or "").strip().lower() for s in current_skills}
    recommended = recommended_skills_for_role(target_role)
    suggestions: list[str] = []
    for category in SkillCategory:
        lacking = [
            name for name in recommended
            if name not in have
            and (d := dictionary.get(name)) is not None
            and d.category is category
        ]
        if lacking:
            suggestions.append(f"Consider adding {category.value} skills: {', '.join(lacking)}")
    return suggestions
