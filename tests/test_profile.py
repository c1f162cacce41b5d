"""Tests for profile fallback and localized section titles."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from folio.resume import apply_profile, load_profile, parse_resume
from folio.resume.profile import Profile, locale_for, section_titles
from folio.shared import InvalidResumeError


class TestLoadProfile:
    """Tests for load_profile."""

    def test_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "profile.yaml"
        path.write_text(
            "name: Ana Lee\nemail: a@x.io\nlanguages: [Chinese, English]\n"
            "education:\n  - institution: Tsinghua\n    degree: BSc\n",
            encoding="utf-8",
        )
        profile = load_profile(path)

        assert profile.name == "Ana Lee"
        assert profile.languages == ["Chinese", "English"]
        assert profile.education[0].institution == "Tsinghua"

    def test_json_with_basic_info(self, tmp_path: Path) -> None:
        path = tmp_path / "profile.json"
        path.write_text(json.dumps({"basicInfo": {"name": "Ana", "phone": "555"}}))

        profile = load_profile(path)

        assert profile.name == "Ana"
        assert profile.phone == "555"

    def test_invalid(self, tmp_path: Path) -> None:
        path = tmp_path / "profile.json"
        path.write_text(json.dumps({"languages": "English"}))

        with pytest.raises(InvalidResumeError):
            load_profile(path)


class TestApplyProfile:
    """Profile values only fill what the resume leaves empty."""

    def test_fills_missing_fields(self) -> None:
        resume = parse_resume({"name": "Ana"})
        profile = Profile(
            name="Someone Else",
            email="ana@x.io",
            languages=["Chinese"],
            education=[{"institution": "PKU"}],
        )

        merged = apply_profile(resume, profile)

        assert merged.basicInfo.name == "Ana"
        assert merged.basicInfo.email == "ana@x.io"
        assert merged.basicInfo.languages == ["Chinese"]
        assert merged.education[0].institution == "PKU"

    def test_resume_education_wins(self) -> None:
        resume = parse_resume({"education": [{"institution": "MIT"}]})
        merged = apply_profile(resume, Profile(education=[{"institution": "PKU"}]))
        assert [e.institution for e in merged.education] == ["MIT"]

    def test_original_untouched(self) -> None:
        resume = parse_resume({"name": "Ana"})
        apply_profile(resume, Profile(email="ana@x.io"))
        assert resume.basicInfo.email is None

    def test_none_profile(self) -> None:
        resume = parse_resume({"name": "Ana"})
        assert apply_profile(resume, None) is resume


class TestSectionTitles:
    """Tests for locale selection."""

    @pytest.mark.parametrize(
        ("languages", "locale"),
        [
            (None, "en"),
            ([], "en"),
            (["English", "Chinese"], "en"),
            (["Chinese"], "zh"),
            (["Mandarin"], "zh"),
            (["中文"], "zh"),
            (["Traditional Chinese"], "zh-TW"),
            (["Cantonese"], "zh-TW"),
            (["繁體中文"], "zh-TW"),
        ],
    )
    def test_locale_for(self, languages: list[str] | None, locale: str) -> None:
        assert locale_for(languages) == locale

    def test_titles(self) -> None:
        assert section_titles(["Chinese"])["experience"] == "工作经历"
        assert section_titles(["Cantonese"])["projects"] == "專案經驗"
        assert section_titles(None)["now"] == "Now"
