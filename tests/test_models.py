"""Tests for resume record parsing."""

from __future__ import annotations

import pytest

from folio.resume import Resume, parse_resume
from folio.shared import InvalidResumeError


class TestInputShapes:
    """The accepted resume layouts normalize to one model."""

    def test_flat_contact_fields(self) -> None:
        resume = parse_resume({"name": "Ana Lee", "email": "a@x.io", "languages": ["English"]})
        assert resume.basicInfo.name == "Ana Lee"
        assert resume.basicInfo.email == "a@x.io"
        assert resume.basicInfo.languages == ["English"]

    def test_nested_basic_info(self) -> None:
        resume = parse_resume({"basicInfo": {"name": "李明", "phone": "+86 138"}})
        assert resume.name == "李明"
        assert resume.basicInfo.phone == "+86 138"

    def test_content_envelope(self) -> None:
        resume = parse_resume(
            {
                "basicInfo": {"name": "Ana"},
                "content": {
                    "summary": "Builder",
                    "skills": [{"name": "Go", "category": "Languages"}],
                },
            }
        )
        assert resume.summary == "Builder"
        assert resume.skills[0].category == "Languages"

    def test_unknown_keys_ignored(self) -> None:
        resume = parse_resume({"name": "Ana", "theme": "dark", "meta": {"v": 1}})
        assert resume.name == "Ana"

    def test_bare_skill_strings(self) -> None:
        resume = parse_resume({"skills": ["Python", {"name": "Rust", "level": "Advanced"}]})
        assert [s.name for s in resume.skills] == ["Python", "Rust"]
        assert resume.skills[1].level == "Advanced"

    def test_numeric_years(self) -> None:
        resume = parse_resume({"education": [{"institution": "MIT", "endDate": 2019}]})
        assert resume.education[0].endDate == "2019"

    def test_blank_email_allowed(self) -> None:
        assert parse_resume({"name": "Ana", "email": ""}).basicInfo.email is None

    def test_model_passthrough(self) -> None:
        resume = Resume()
        assert parse_resume(resume) is resume


class TestInvalid:
    """Invalid records are rejected before any drawing."""

    def test_bad_email(self) -> None:
        with pytest.raises(InvalidResumeError) as exc_info:
            parse_resume({"name": "Ana", "email": "not-an-email"})
        assert any("email" in d for d in exc_info.value.details)

    def test_wrong_type(self) -> None:
        with pytest.raises(InvalidResumeError) as exc_info:
            parse_resume({"experience": "lots"})
        assert exc_info.value.details[0].startswith("experience")

    def test_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_resume({"skills": [{"category": "no name"}]})


def test_all_text_collects_nested_strings() -> None:
    resume = parse_resume(
        {"name": "张伟", "experience": [{"title": "工程师", "highlights": ["提升 30%"]}]}
    )
    texts = resume.all_text()
    assert "张伟" in texts
    assert "工程师" in texts
    assert "提升 30%" in texts
