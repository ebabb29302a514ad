"""Tests for radar prompt construction."""

from tech_radar.ai.prompts import RADAR_JSON_SCHEMA, SEARCH_PREAMBLE, build_radar_prompt


def test_prompt_embeds_cv_and_role_last():
    prompt = build_radar_prompt("Python, SQL, Excel", "Data Analyst")

    assert "CV:\nPython, SQL, Excel" in prompt
    assert prompt.endswith("Target Role:\nData Analyst")
    assert prompt.index("CV:") < prompt.index("Target Role:")


def test_prompt_asks_for_bare_json():
    prompt = build_radar_prompt("cv", "role")

    assert "Return ONLY valid JSON" in prompt
    assert RADAR_JSON_SCHEMA in prompt
    assert "- Do not include markdown fences." in prompt
    assert "- Recommend 6 to 8 technologies." in prompt


def test_search_instructions_follow_grounding_flag():
    grounded = build_radar_prompt("cv", "role", use_search=True)
    plain = build_radar_prompt("cv", "role", use_search=False)

    assert grounded.startswith(SEARCH_PREAMBLE)
    assert "Google Search" in grounded
    assert "Google Search" not in plain
