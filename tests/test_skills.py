from __future__ import annotations

import pytest

from skillmatch.models import SkillCategory, SkillDefinition
from skillmatch.skills import (
    SkillDictionary,
    calculate_skill_match,
    extract_skills,
    recommended_skills_for_role,
    round_half_up,
    suggest_skill_improvements,
)

# Names that contain another entry's name or alias as a whole word
OVERLAPPING = {"react native", "node.js", "next.js"}


# ── Dictionary ───────────────────────────────────────────────────────────


def test_bundled_dictionary_loads(dictionary):
    assert len(dictionary) == 29
    assert dictionary.names[:3] == ["javascript", "typescript", "python"]
    react = dictionary.get("react")
    assert react.category is SkillCategory.FRAMEWORKS
    assert react.weight == 1.3
    assert dictionary.get("node.js").aliases == ("nodejs", "node")
    assert all(d.weight > 0 for d in dictionary)


def test_resolve_accepts_aliases_in_any_case(dictionary):
    assert dictionary.resolve("K8s") == "kubernetes"
    assert dictionary.resolve(" Node.js ") == "node.js"
    assert dictionary.resolve("Redux") is None
    assert "Postgresql" in dictionary


def test_duplicate_names_rejected():
    with pytest.raises(ValueError, match="Duplicate"):
        SkillDictionary([
            SkillDefinition("Go", SkillCategory.CORE_LANGUAGES, 1.0),
            SkillDefinition("go", SkillCategory.CORE_LANGUAGES, 1.2),
        ])


@pytest.mark.parametrize("weight", [0, -1.5])
def test_non_positive_weight_rejected(weight):
    with pytest.raises(ValueError, match="weight"):
        SkillDictionary([SkillDefinition("go", SkillCategory.CORE_LANGUAGES, weight)])


def test_from_yaml_rejects_unknown_category(tmp_path):
    path = tmp_path / "skills.yaml"
    path.write_text("skills:\n  - {name: go, category: languages, weight: 1}\n")
    with pytest.raises(ValueError, match="unknown category"):
        SkillDictionary.from_yaml(path)


def test_from_yaml_normalizes_case(tmp_path):
    path = tmp_path / "skills.yaml"
    path.write_text("skills:\n  - {name: Go, category: core_languages, aliases: [Golang], weight: 2}\n")
    d = SkillDictionary.from_yaml(path)
    assert d.names == ["go"]
    assert extract_skills("Shipped services in GOLANG", d) == ["go"]


# ── Extraction ───────────────────────────────────────────────────────────


def test_every_skill_name_extracts_itself(dictionary):
    for name in dictionary.names:
        found = extract_skills(name, dictionary)
        assert name in found
        if name not in OVERLAPPING:
            assert found == [name]


def test_every_alias_extracts_its_canonical_name(dictionary):
    for definition in dictionary:
        for alias in definition.aliases:
            assert extract_skills(alias, dictionary) == [definition.name]


def test_overlapping_names_follow_whole_word_rule(dictionary):
    assert extract_skills("react native", dictionary) == ["react", "react native"]
    assert extract_skills("next.js", dictionary) == ["javascript", "next.js"]


def test_word_boundaries(dictionary):
    assert extract_skills("javascript", dictionary) == ["javascript"]
    assert "java" not in extract_skills("JavaScript and TypeScript", dictionary)
    assert extract_skills("mysql", dictionary) == ["mysql"]
    assert extract_skills("github", dictionary) == ["github"]


def test_punctuation_is_matched_literally(dictionary):
    assert extract_skills("I use nodexjs daily", dictionary) == []
    assert extract_skills("Built APIs in Node.js", dictionary) == ["javascript", "node.js"]


def test_extraction_dedupes_and_keeps_dictionary_order(dictionary):
    text = "Docker, docker, DOCKER. Python on AWS with Postgres and k8s. Python again."
    assert extract_skills(text, dictionary) == ["python", "postgresql", "aws", "docker", "kubernetes"]


def test_alias_records_canonical_name(dictionary):
    assert extract_skills("Strong in ES: js and ecmascript", dictionary) == ["javascript"]
    assert extract_skills("Deployed to Google Cloud", dictionary) == ["gcp"]


@pytest.mark.parametrize("text", ["", None, "Cooking, gardening, woodwork"])
def test_no_skills(dictionary, text):
    assert extract_skills(text, dictionary) == []


# ── Matching ─────────────────────────────────────────────────────────────


def test_weighted_score_example(dictionary):
    result = calculate_skill_match({"react", "node.js"}, ["react", "node.js", "mongodb"], dictionary)
    assert result.matched == ["react", "node.js"]
    assert result.missing == ["mongodb"]
    assert result.score == 68
    assert result.matched_by_category[SkillCategory.FRAMEWORKS] == ["react", "node.js"]
    assert result.matched_by_category[SkillCategory.DATABASES] == []


def test_empty_required_list(dictionary):
    result = calculate_skill_match({"react"}, [], dictionary)
    assert result.score == 0
    assert result.matched == []
    assert result.missing == []
    assert set(result.matched_by_category) == set(SkillCategory)


def test_full_overlap_scores_100(dictionary):
    skills = ["python", "aws", "graphql", "redis"]
    assert calculate_skill_match(skills, skills, dictionary).score == 100


def test_unknown_required_skills_are_ignored(dictionary):
    result = calculate_skill_match(["redux"], ["redux", "react", "webpack"], dictionary)
    assert result.matched == []
    assert result.missing == ["react"]
    assert result.score == 0

    only_unknown = calculate_skill_match(["redux"], ["redux"], dictionary)
    assert only_unknown.score == 0
    assert only_unknown.missing == []


def test_matched_and_missing_partition_recognized_required(dictionary):
    candidate = {"python", "docker", "git"}
    required = ["python", "java", "docker", "kubernetes", "scala", "git", "jira"]
    result = calculate_skill_match(candidate, required, dictionary)
    recognized = {s for s in required if s in dictionary}
    assert set(result.matched) | set(result.missing) == recognized
    assert not set(result.matched) & set(result.missing)


def test_match_is_deterministic(dictionary):
    args = ({"aws", "azure"}, ["aws", "gcp", "azure"], dictionary)
    assert calculate_skill_match(*args) == calculate_skill_match(*args)


def test_round_half_up():
    assert round_half_up(67.5) == 68
    assert round_half_up(0.5) == 1
    assert round_half_up(2.4999) == 2


# ── Suggestions ──────────────────────────────────────────────────────────


def test_recommended_skills_fall_back_to_fullstack():
    assert recommended_skills_for_role("DevOps") == ["docker", "kubernetes", "aws", "azure"]
    assert recommended_skills_for_role("Full Stack") == ["react", "node.js", "typescript", "postgresql"]
    assert recommended_skills_for_role("astronaut") == recommended_skills_for_role("fullstack")
    assert recommended_skills_for_role(None) == recommended_skills_for_role("fullstack")


def test_suggestions_grouped_by_category(dictionary):
    suggestions = suggest_skill_improvements(["swift"], "mobile", dictionary)
    assert suggestions == [
        "Consider adding core_languages skills: typescript, kotlin",
        "Consider adding frameworks skills: react native",
    ]


def test_no_suggestions_when_covered(dictionary):
    assert suggest_skill_improvements(["React", "TypeScript", "JavaScript"], "frontend", dictionary) == []
