"""Pydantic models for the resume record.

Accepts the nested ``basicInfo`` layout, flat top-level contact fields,
and the ``content`` envelope used by stored resume files.
"""

from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    ValidationError,
    field_validator,
    model_validator,
)


BASIC_INFO_FIELDS = ("name", "email", "phone", "location", "languages")
CONTENT_FIELDS = ("summary", "experience", "projects", "skills", "education")


class BasicInfo(BaseModel):
    """Core biographical information."""

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    languages: list[str] = []
    githubUrl: Optional[str] = None
    linkedinUrl: Optional[str] = None
    portfolioUrl: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def blank_email(cls, value: Any) -> Any:
        return value or None


class Experience(BaseModel):
    """Work experience entry."""

    model_config = ConfigDict(extra="ignore")

    title: str = ""
    company: str = ""
    location: Optional[str] = None
    startDate: Optional[str] = None
    endDate: Optional[str] = None
    current: bool = False
    description: Optional[str] = None
    highlights: list[str] = []
    technologies: list[str] = []


class Project(BaseModel):
    """Personal or professional project."""

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    role: Optional[str] = None
    description: Optional[str] = None
    startDate: Optional[str] = None
    endDate: Optional[str] = None
    current: bool = False
    url: Optional[str] = None
    highlights: list[str] = []
    technologies: list[str] = []


class Skill(BaseModel):
    """A single skill, optionally grouped by category."""

    model_config = ConfigDict(extra="ignore")

    name: str
    category: Optional[str] = None
    level: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def from_string(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"name": data}
        return data


class Education(BaseModel):
    """Education entry."""

    model_config = ConfigDict(extra="ignore")

    degree: Optional[str] = None
    field: Optional[str] = None
    institution: str = ""
    location: Optional[str] = None
    startDate: Optional[str] = None
    endDate: Optional[str] = None
    current: bool = False
    gpa: Optional[float | str] = None
    highlights: list[str] = []

    @field_validator("startDate", "endDate", mode="before")
    @classmethod
    def year_to_string(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value


class Resume(BaseModel):
    """Root resume record."""

    model_config = ConfigDict(extra="ignore")

    basicInfo: BasicInfo = BasicInfo()
    summary: Optional[str] = None
    experience: list[Experience] = []
    projects: list[Project] = []
    skills: list[Skill] = []
    education: list[Education] = []

    @model_validator(mode="before")
    @classmethod
    def normalize_layout(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        data = dict(data)
        content = data.pop("content", None)
        if isinstance(content, dict):
            for key in CONTENT_FIELDS:
                if key in content and key not in data:
                    data[key] = content[key]

        flat = {key: data.pop(key) for key in BASIC_INFO_FIELDS if key in data}
        if flat:
            basic = data.get("basicInfo") or data.get("header") or {}
            if isinstance(basic, dict):
                data["basicInfo"] = {**flat, **basic}
        elif "header" in data and "basicInfo" not in data:
            data["basicInfo"] = data.pop("header")
        return data

    @property
    def name(self) -> str:
        return self.basicInfo.name

    def all_text(self) -> list[str]:
        """Every string in the record, for charset extraction."""
        texts: list[str] = []

        def collect(value: Any) -> None:
            if isinstance(value, str):
                texts.append(value)
            elif isinstance(value, dict):
                for item in value.values():
                    collect(item)
            elif isinstance(value, list):
                for item in value:
                    collect(item)

        collect(self.model_dump(mode="json"))
        return texts


def describe_errors(error: ValidationError) -> list[str]:
    """One ``field -> subfield: message`` line per validation error."""
    return [
        f"{' -> '.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in error.errors()
    ]
