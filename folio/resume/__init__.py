"""Resume to PDF rendering.

Lays out JSON/YAML resume records with mixed Latin and CJK text into
paginated PDF documents, resolving fonts through a fallback chain.
"""

from folio.resume.config import RenderConfig
from folio.resume.document import Document, DocumentAssembler, DocumentMetadata
from folio.resume.fonts import FontResolver, ResolvedFont, Weight
from folio.resume.generator import ResumeGenerator, parse_resume
from folio.resume.models import Resume
from folio.resume.profile import Profile, apply_profile, load_profile
from folio.resume.themes import THEMES, ThemeConfig, ThemeName, get_theme

__all__ = [
    "Document",
    "DocumentAssembler",
    "DocumentMetadata",
    "FontResolver",
    "Profile",
    "RenderConfig",
    "ResolvedFont",
    "Resume",
    "ResumeGenerator",
    "THEMES",
    "ThemeConfig",
    "ThemeName",
    "Weight",
    "apply_profile",
    "get_theme",
    "load_profile",
    "parse_resume",
]
