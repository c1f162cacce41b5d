"""Resume rendering entry point.

Validates the record and theme, builds a fresh font resolver, canvas and
layout cursor for every render, and hands the laid-out pages to the
document assembler.
"""

from pathlib import Path
from typing import Any

from pydantic import ValidationError

from folio.resume.config import RenderConfig
from folio.resume.document import Document, DocumentAssembler, DocumentMetadata
from folio.resume.layout import LayoutEngine
from folio.resume.mixed import MixedScriptRenderer
from folio.resume.models import Resume, describe_errors
from folio.resume.profile import Profile, apply_profile
from folio.resume.script import unique_characters
from folio.resume.themes import ThemeConfig, ThemeName, get_theme
from folio.shared import Color, InvalidResumeError, echo


def parse_resume(data: Resume | dict[str, Any]) -> Resume:
    """Validate raw resume data, raising InvalidResumeError with every problem."""
    if isinstance(data, Resume):
        return data
    try:
        return Resume.model_validate(data)
    except ValidationError as e:
        raise InvalidResumeError(describe_errors(e)) from e


class ResumeGenerator:
    """Generates PDF resumes from validated Resume models."""

    def __init__(self, config: RenderConfig | None = None):
        self.config = config or RenderConfig()
        self.assembler = DocumentAssembler()

    def render(
        self,
        resume: Resume | dict[str, Any],
        theme: str | ThemeName | ThemeConfig = ThemeName.MODERN,
        profile: Profile | None = None,
    ) -> Document:
        """Lay out ``resume`` into an immutable Document."""
        theme_config = theme if isinstance(theme, ThemeConfig) else get_theme(theme)
        resume = apply_profile(parse_resume(resume), profile)

        config = self.config
        charset = unique_characters(*resume.all_text()) if config.subset_fonts else None
        resolver = config.build_resolver(charset)
        family = config.font_family or theme_config.font_family
        renderer = MixedScriptRenderer(resolver, config.build_measurer(), family)

        if config.verbose:
            echo(
                f"Rendering {resume.name or 'resume'} with theme {theme_config.name.value} "
                f"on {config.paper_size.name}",
                Color.INFO,
            )

        engine = LayoutEngine(renderer, theme_config, config.paper_size)
        pages = engine.layout(resume)
        metadata = DocumentMetadata.for_resume(resume.name, keywords=config.keywords)
        return self.assembler.assemble(pages, metadata)

    def render_bytes(
        self,
        resume: Resume | dict[str, Any],
        theme: str | ThemeName | ThemeConfig = ThemeName.MODERN,
        profile: Profile | None = None,
    ) -> bytes:
        return self.assembler.to_bytes(self.render(resume, theme, profile))

    def generate(
        self,
        resume: Resume | dict[str, Any],
        output_path: Path,
        theme: str | ThemeName | ThemeConfig = ThemeName.MODERN,
        profile: Profile | None = None,
    ) -> Path:
        """Render ``resume`` and write the PDF to ``output_path``."""
        document = self.render(resume, theme, profile)
        path = self.assembler.write(document, output_path)

        if self.config.verbose:
            echo(f"Wrote {document.page_count} page(s) to {path}", Color.INFO)
        return path
