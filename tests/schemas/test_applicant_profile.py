from __future__ import annotations

import pytest
from pydantic import ValidationError

from visaeval.schemas import (
    AIEvaluationResponse,
    ApplicantProfile,
    DocumentMetadata,
    EducationLevel,
    EvaluationRequest,
    LanguageProficiency,
)


def test_profile_defaults_are_neutral():
    profile = ApplicantProfile(education_level="Master")

    assert profile.education_level is EducationLevel.MASTER
    assert profile.experience_years == 0
    assert profile.current_salary is None
    assert profile.language_proficiency is LanguageProficiency.INTERMEDIATE
    assert profile.awards == ()
    assert profile.document_count == 0


def test_profile_is_frozen_and_strict():
    profile = ApplicantProfile(education_level=EducationLevel.BACHELOR)

    with pytest.raises(ValidationError):
        profile.experience_years = 4
    with pytest.raises(ValidationError):
        ApplicantProfile(education_level=EducationLevel.BACHELOR, nickname="Sam")
    with pytest.raises(ValidationError):
        ApplicantProfile(education_level=EducationLevel.BACHELOR, experience_years=-1)
    with pytest.raises(ValidationError):
        ApplicantProfile(education_level="Kindergarten")


def test_declared_document_types_are_normalized():
    profile = ApplicantProfile(
        education_level=EducationLevel.PHD,
        documents=(
            DocumentMetadata(declared_type="  Résumé "),
            DocumentMetadata(declared_type="POLICE REPORT"),
            DocumentMetadata(declared_type="   "),
            DocumentMetadata(filename="scan.pdf"),
        ),
    )

    assert profile.declared_document_types() == {"résumé", "police report"}


def test_request_rejects_out_of_range_partner_cap():
    profile = ApplicantProfile(education_level=EducationLevel.PHD)

    with pytest.raises(ValidationError):
        EvaluationRequest(
            profile=profile, country="Germany", visa_category="EU Blue Card", partner_score_cap=120
        )


def test_ai_response_accepts_alias_and_ignores_extra_keys():
    response = AIEvaluationResponse.model_validate(
        {
            "overallScore": 48.5,
            "likelihood": "Fair",
            "scores": {
                "education": 25,
                "experience": 15,
                "salary": 12,
                "documents": 3,
                "awards": 0,
                "language": 2.5,
                "employer": 3,
            },
            "summary": "Meets the baseline requirements.",
            "recommendations": [],
            "confidence": "high",
        }
    )

    assert response.overall_score == 48.5
    assert response.scores.language == 2.5
