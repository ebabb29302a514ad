"""Prompt construction for technology radar analysis."""

RADAR_JSON_SCHEMA = """{
  "run_date": "ISO string",
  "current_profile_summary": "string",
  "recommended_technologies": [
    {
      "technology_name": "string",
      "category": "AI Analytics|BI|Data Engineering|Governance|Cloud|Orchestration|Data Quality|Semantic Layer",
      "short_description": "string",
      "why_relevant_for_me": "string",
      "priority": "High|Medium|Low",
      "learning_difficulty": "Easy|Medium|Hard",
      "market_signal": "High|Medium|Low",
      "project_idea": "string",
      "sources": ["https://example.com"]
    }
  ],
  "top_5_next_skills": ["string"]
}"""

SEARCH_PREAMBLE = (
    "Use Google Search grounding to scan the internet and find the latest, "
    "most relevant skills and technologies!"
)

RADAR_RULES = [
    "Recommend 6 to 8 technologies.",
    "Sort technologies by priority: High first, then Medium, then Low.",
    "Prioritize practical enterprise adoption (BI, analytics engineering, product analytics, "
    "governance, data quality, cloud data stack, AI automation for analysts).",
    "Tailor to the CV and target role.",
    "Include real source URLs.",
    "Do not include markdown fences.",
]


def build_radar_prompt(cv_content: str, target_role: str, use_search: bool = True) -> str:
    """Build the instruction sent to the model for one job.

    Args:
        cv_content: Raw CV text
        target_role: Role the candidate is aiming for
        use_search: Whether the model has a search tool to ground market signals

    Returns:
        Prompt text asking for a single JSON object without markdown fences
    """
    rules = list(RADAR_RULES)
    if use_search:
        rules.insert(2, "Search the internet using Google Search to ensure the market signals are current.")

    sections = []
    if use_search:
        sections.append(SEARCH_PREAMBLE)
    sections.append(
        "Return ONLY valid JSON (no markdown) in this exact structure:\n" + RADAR_JSON_SCHEMA
    )
    sections.append("Rules:\n" + "\n".join(f"- {rule}" for rule in rules))
    sections.append(f"CV:\n{cv_content}")
    sections.append(f"Target Role:\n{target_role}")

    return "\n\n".join(sections).strip()
