from __future__ import annotations

import json

import pytest

from visaeval.core import AIEvaluator, AIServiceUnavailable, RequirementsCatalog
from visaeval.schemas import ApplicantProfile, EducationLevel


class StubClient:
    def __init__(self, text: str | None = None, error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.prompts: list[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text or ""


class UnconfiguredClient(StubClient):
    configured = False


def build_response(**overrides) -> dict:
    payload = {
        "overallScore": 62,
        "likelihood": "Good",
        "scores": {
            "education": 30,
            "experience": 20,
            "salary": 16,
            "documents": 3,
            "awards": 1,
            "language": 2.5,
            "employer": 3,
        },
        "summary": "Solid profile for a specialty occupation.",
        "recommendations": [
            {"category": "Documents", "priority": "High", "suggestion": "Upload your transcripts."}
        ],
    }
    payload.update(overrides)
    return payload


@pytest.fixture(scope="module")
def requirements():
    return RequirementsCatalog.load().lookup("United States", "H-1B")


@pytest.fixture
def profile() -> ApplicantProfile:
    return ApplicantProfile(
        education_level=EducationLevel.MASTER,
        experience_years=6,
        current_salary=75_000.0,
        document_count=2,
    )


def test_valid_response_yields_vector(requirements, profile):
    client = StubClient(json.dumps(build_response()))
    evaluator = AIEvaluator(client)

    attempt = evaluator.evaluate(profile, requirements, 2)

    assert attempt.ok
    assert attempt.failure is None
    assert attempt.vector.education == 30.0
    assert attempt.vector.language == 2.5
    assert attempt.response.overall_score == 62.0
    assert "H-1B" in client.prompts[0]
    assert "Documents Submitted: 2 of 3 required" in client.prompts[0]


def test_json_inside_prose_is_extracted(requirements, profile):
    text = "Here is the evaluation:\n```json\n" + json.dumps(build_response()) + "\n```"
    attempt = AIEvaluator(StubClient(text)).evaluate(profile, requirements, 2)

    assert attempt.ok


def test_missing_client_is_not_configured(requirements, profile):
    assert AIEvaluator().evaluate(profile, requirements, 2).failure == "not_configured"
    unconfigured = UnconfiguredClient(json.dumps(build_response()))
    attempt = AIEvaluator(unconfigured).evaluate(profile, requirements, 2)
    assert attempt.failure == "not_configured"
    assert unconfigured.prompts == []


@pytest.mark.parametrize(
    ("text", "failure"),
    [
        ("I cannot evaluate this application.", "malformed"),
        ("{not json}", "malformed"),
        (json.dumps({"overallScore": 50}), "malformed"),
        (json.dumps(build_response(likelihood="Maybe")), "malformed"),
        (
            json.dumps(build_response(scores={**build_response()["scores"], "charisma": 4})),
            "malformed",
        ),
        (
            '{"overallScore": 50, "likelihood": "Fair", "scores": {"education": NaN, '
            '"experience": 1, "salary": 1, "documents": 1, "awards": 1, "language": 1, '
            '"employer": 1}, "summary": "", "recommendations": []}',
            "malformed",
        ),
        (
            json.dumps(build_response(scores={**build_response()["scores"], "education": 40})),
            "out_of_bounds",
        ),
        (
            json.dumps(build_response(scores={**build_response()["scores"], "employer": -1})),
            "out_of_bounds",
        ),
        (json.dumps(build_response(overallScore=120)), "out_of_bounds"),
    ],
)
def test_invalid_responses_are_typed_failures(requirements, profile, text, failure):
    attempt = AIEvaluator(StubClient(text)).evaluate(profile, requirements, 2)

    assert not attempt.ok
    assert attempt.vector is None
    assert attempt.failure == failure


@pytest.mark.parametrize(
    ("error", "failure"),
    [
        (AIServiceUnavailable("timeout", "timed out"), "timeout"),
        (AIServiceUnavailable("unavailable", "connection refused"), "unavailable"),
        (RuntimeError("boom"), "unavailable"),
    ],
)
def test_transport_errors_never_raise(requirements, profile, error, failure):
    attempt = AIEvaluator(StubClient(error=error)).evaluate(profile, requirements, 2)

    assert attempt.failure == failure
    assert attempt.detail
