"""User profile fallback data and localized section titles."""

import json
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, EmailStr, ValidationError

from folio.resume.models import BasicInfo, Education, Resume, describe_errors
from folio.shared import InvalidResumeError


class Profile(BaseModel):
    """Stored personal details used when a resume leaves them out."""

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    languages: list[str] = []
    githubUrl: Optional[str] = None
    linkedinUrl: Optional[str] = None
    portfolioUrl: Optional[str] = None
    education: list[Education] = []


def load_profile(path: Path) -> Profile:
    """Load a profile from a JSON or YAML file."""
    content = path.read_text(encoding="utf-8")

    if path.suffix.lower() in (".yaml", ".yml"):
        data: Any = yaml.safe_load(content) or {}
    else:
        data = json.loads(content)

    if isinstance(data, dict) and isinstance(data.get("basicInfo"), dict):
        data = {**data["basicInfo"], **{k: v for k, v in data.items() if k != "basicInfo"}}

    try:
        return Profile.model_validate(data)
    except ValidationError as e:
        raise InvalidResumeError(describe_errors(e)) from e


def apply_profile(resume: Resume, profile: Profile | None) -> Resume:
    """Fill empty basic info fields and education from ``profile``.

    Values present in the resume always win.
    """
    if profile is None:
        return resume

    basic = resume.basicInfo.model_dump()
    for field in BasicInfo.model_fields:
        if not basic.get(field):
            value = getattr(profile, field, None)
            if value:
                basic[field] = value

    update: dict[str, Any] = {"basicInfo": BasicInfo.model_validate(basic)}
    if not resume.education and profile.education:
        update["education"] = list(profile.education)
    return resume.model_copy(update=update)


SECTION_TITLES: dict[str, dict[str, str]] = {
    "en": {
        "summary": "Professional Summary",
        "experience": "Work Experience",
        "projects": "Projects",
        "education": "Education",
        "skills": "Skills",
        "technologies": "Technologies",
        "now": "Now",
        "other": "Other",
        "gpa": "GPA",
    },
    "zh": {
        "summary": "专业概述",
        "experience": "工作经历",
        "projects": "项目经验",
        "education": "教育背景",
        "skills": "技能",
        "technologies": "技术栈",
        "now": "至今",
        "other": "其他",
        "gpa": "绩点",
    },
    "zh-TW": {
        "summary": "專業概述",
        "experience": "工作經歷",
        "projects": "專案經驗",
        "education": "教育背景",
        "skills": "技能",
        "technologies": "技術棧",
        "now": "至今",
        "other": "其他",
        "gpa": "績點",
    },
}

TRADITIONAL_MARKERS = ("cantonese", "traditional", "繁體", "繁体", "zh-tw", "zh-hk")
SIMPLIFIED_MARKERS = ("chinese", "mandarin", "中文", "简体", "zh")


def locale_for(languages: list[str] | None) -> str:
    """Pick a title locale from the first listed language."""
    if not languages:
        return "en"

    primary = languages[0].strip().lower()
    if any(marker in primary for marker in TRADITIONAL_MARKERS):
        return "zh-TW"
    if any(marker in primary for marker in SIMPLIFIED_MARKERS):
        return "zh"
    return "en"


def section_titles(languages: list[str] | None) -> dict[str, str]:
    return SECTION_TITLES[locale_for(languages)]
