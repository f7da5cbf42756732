"""Evaluation prompt construction and model output extraction."""

from __future__ import annotations

import json
import re
from typing import Any

from ..errors import MalformedAIResponse
from ..schemas import LIKELIHOOD_BANDS, ApplicantProfile, RequirementTuple
from .evaluators.rules import RuleConfig
from .vector import DIMENSION_MAXIMA, NOMINAL_CEILING

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


def build_evaluation_prompt(
    *,
    profile: ApplicantProfile,
    requirements: RequirementTuple,
    document_count: int,
    rules: RuleConfig | None = None,
) -> str:
    """Construct the structured evaluation prompt sent to the model."""

    rules = rules or RuleConfig()
    salary = (
        f"{profile.current_salary:,.0f}" if profile.current_salary is not None else "not provided"
    )
    awards = ", ".join(
        f"{award.title or 'untitled'} ({award.organization or 'unknown organization'})"
        for award in profile.awards
    ) or "none listed"
    accepted = ", ".join(level.value for level in requirements.accepted_education_ordered())
    special = ", ".join(sorted(requirements.special_requirements)) or "none"
    score_lines = ",\n".join(
        f'    "{name}": <number 0-{maximum:g}>' for name, maximum in DIMENSION_MAXIMA.items()
    )
    bands = "|".join(LIKELIHOOD_BANDS)
    boost_percent = round((rules.employer_boost - 1) * 100)

    return f"""You are an expert immigration consultant evaluating a visa application for {requirements.visa_category} in {requirements.country}.

APPLICANT PROFILE:
- Education Level: {profile.education_level.value}
- Years of Experience: {profile.experience_years}
- Annual Salary: {salary}
- Language Proficiency: {profile.language_proficiency.value}
- Has Professional Awards: {"Yes" if profile.has_awards else "No"} ({awards})
- Has Recognized Employer: {"Yes" if profile.has_recognized_employer else "No"}
- Documents Submitted: {document_count} of {requirements.required_document_count} required

VISA REQUIREMENTS:
- Minimum Salary: {requirements.min_salary:,.0f}
- Accepted Education: {accepted}
- Minimum Experience: {requirements.min_experience_years} years
- Required Documents: {", ".join(requirements.required_documents) or "none"}
- Special Requirements: {special}

Respond with ONLY a JSON object in this exact shape:

{{
  "overallScore": <number 0-{NOMINAL_CEILING:g}>,
  "likelihood": "<{bands}>",
  "scores": {{
{score_lines}
  }},
  "summary": "<2-3 sentence summary of the evaluation>",
  "recommendations": [
    {{"category": "<category>", "priority": "<High|Medium|Low>", "suggestion": "<actionable suggestion>"}}
  ]
}}

RULES:
- If education does not meet the accepted levels: maximum overall score {rules.education_ceiling:g}.
- If experience is below the minimum: maximum overall score {rules.experience_ceiling:g}.
- If salary is below the minimum: maximum overall score {rules.salary_ceiling:g}.
- A recognized sponsor boosts the overall score by {boost_percent}%.
- No overall score may exceed {rules.absolute_cap:g}, even for perfect candidates.

Be strict and realistic. Most applications should score between 30 and 60.
"""


def extract_json_object(text: str | None) -> dict[str, Any]:
    """Pull the outermost JSON object out of free-form model text."""

    if not text:
        raise MalformedAIResponse("Empty model response")
    match = _JSON_OBJECT.search(text)
    if not match:
        raise MalformedAIResponse("No JSON object found in model response")
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        raise MalformedAIResponse(f"Invalid JSON in model response: {exc}") from exc
    if not isinstance(data, dict):
        raise MalformedAIResponse("Model response JSON must be an object")
    return data


__all__ = ["build_evaluation_prompt", "extract_json_object"]
