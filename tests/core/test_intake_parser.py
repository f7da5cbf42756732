from __future__ import annotations

import json

import pytest

from visaeval.intake import ApplicationParser
from visaeval.schemas import EducationLevel, LanguageProficiency


def build_form(**overrides) -> dict:
    form = {
        "country": "United States",
        "visaType": "H-1B",
        "educationLevel": "Ph.D.",
        "experienceYears": "8",
        "currentSalary": "$120,000",
        "languageProficiency": "fluent",
        "hasAwards": "true",
        "awards": json.dumps([{"title": "Best Paper", "organization": "International Society"}]),
        "hasRecognizedEmployer": "yes",
        "uploadedDocuments": [{"type": "Résumé", "originalName": "cv.pdf"}],
        "reference": "APP-1",
    }
    form.update(overrides)
    return form


def test_parses_form_encoded_submission():
    parsed = ApplicationParser().parse(build_form())
    request = parsed.request
    profile = request.profile

    assert parsed.issues == []
    assert request.country == "United States"
    assert request.visa_category == "H-1B"
    assert request.reference == "APP-1"
    assert request.partner_score_cap is None
    assert profile.education_level is EducationLevel.PHD
    assert profile.experience_years == 8
    assert profile.current_salary == 120_000.0
    assert profile.language_proficiency is LanguageProficiency.FLUENT
    assert profile.has_awards is True
    assert profile.awards[0].organization == "International Society"
    assert profile.has_recognized_employer is True
    assert profile.documents[0].declared_type == "Résumé"
    assert profile.documents[0].filename == "cv.pdf"
    assert profile.document_count == 1


def test_accepts_payload_wrapper_and_json_text():
    raw = json.dumps({"payload": build_form(reference=None)})

    parsed = ApplicationParser().parse(raw)

    assert parsed.request.profile.education_level is EducationLevel.PHD
    assert parsed.request.reference is None


def test_invalid_fields_fall_back_to_neutral_defaults():
    form = build_form(
        educationLevel="Wizardry",
        experienceYears="-3",
        currentSalary="lots",
        hasAwards="maybe",
        awards="[not json",
    )
    del form["languageProficiency"]

    parsed = ApplicationParser().parse(form)
    profile = parsed.request.profile
    issues = {issue.field: issue for issue in parsed.issues}

    assert profile.education_level is EducationLevel.HIGH_SCHOOL
    assert profile.experience_years == 0
    assert profile.current_salary is None
    assert profile.language_proficiency is LanguageProficiency.INTERMEDIATE
    assert profile.has_awards is False
    assert profile.awards == ()
    assert set(issues) == {
        "education_level",
        "experience_years",
        "current_salary",
        "language_proficiency",
        "has_awards",
        "awards",
    }
    assert issues["experience_years"].reason == "negative"
    assert issues["language_proficiency"].reason == "missing"
    assert issues["awards"].reason == "invalid JSON"
    assert issues["education_level"].default is EducationLevel.HIGH_SCHOOL


def test_missing_optional_fields_use_defaults():
    parsed = ApplicationParser().parse(
        {
            "country": "Germany",
            "visaType": "EU Blue Card",
            "educationLevel": "Master",
            "languageProficiency": "Advanced",
        }
    )
    profile = parsed.request.profile

    assert profile.experience_years == 0
    assert profile.current_salary is None
    assert profile.has_awards is False
    assert profile.has_recognized_employer is False
    assert profile.documents == ()
    assert profile.document_count == 0
    assert {issue.field for issue in parsed.issues} == {"experience_years", "current_salary"}


def test_fuzzy_education_and_language_matching():
    parsed = ApplicationParser().parse(
        build_form(educationLevel="Bachelor's degree", languageProficiency="Native speaker")
    )

    assert parsed.request.profile.education_level is EducationLevel.BACHELOR
    assert parsed.request.profile.language_proficiency is LanguageProficiency.NATIVE


def test_explicit_document_count_and_partner_cap():
    parsed = ApplicationParser().parse(
        build_form(uploadedDocuments=[], documentCount="2", partnerScoreCap="150")
    )

    assert parsed.request.profile.document_count == 2
    assert parsed.request.partner_score_cap == 100.0


@pytest.mark.parametrize(
    "awards",
    [
        [42],
        [{"title": "Prize", "organization": 7}],
    ],
)
def test_bad_award_entries_are_recovered(awards):
    parsed = ApplicationParser().parse(build_form(awards=awards))

    assert parsed.request.profile.awards == ()
    assert [issue.field for issue in parsed.issues] == ["awards"]


@pytest.mark.parametrize("raw", ["{invalid", "[1, 2]", b"42", {"payload": "text"}])
def test_rejects_non_object_payloads(raw):
    with pytest.raises(ValueError):
        ApplicationParser().parse(raw)


@pytest.mark.parametrize(
    ("salary", "expected"),
    [("1e5", 100_000.0), ("$1,200", 1_200.0), ("EUR 70 000", 70_000.0), (" 85000.50 ", 85_000.5)],
)
def test_salary_strings_are_parsed(salary, expected):
    parsed = ApplicationParser().parse(build_form(currentSalary=salary))

    assert parsed.request.profile.current_salary == expected
    assert parsed.issues == []


@pytest.mark.parametrize("salary", [int("9" * 400), "9" * 400, "inf"])
def test_unrepresentable_salary_is_recovered(salary):
    parsed = ApplicationParser().parse(build_form(currentSalary=salary))

    assert parsed.request.profile.current_salary is None
    assert [(issue.field, issue.reason) for issue in parsed.issues] == [
        ("current_salary", "not a finite number")
    ]
