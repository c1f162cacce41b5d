from __future__ import annotations

import shutil
from pathlib import Path

import pytest
import reportlab

from folio.resume import RenderConfig, ResumeGenerator, fonts
from folio.resume.cache import FontCache
from folio.resume.fonts import FontResolver
from folio.resume.script import Script


REPORTLAB_FONTS = Path(reportlab.__file__).parent / "fonts"


@pytest.fixture
def vera_path() -> Path:
    return REPORTLAB_FONTS / "Vera.ttf"


@pytest.fixture
def vera_bytes(vera_path: Path) -> bytes:
    return vera_path.read_bytes()


@pytest.fixture
def fake_cjk_font(tmp_path: Path, vera_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A system-named TrueType file whose cmap is reported as covering every script.

    reportlab ships no CJK font, so the coverage read from the cmap is
    widened for fonts loaded while this fixture is active.
    """
    target = tmp_path / "system" / "NotoSansCJK-Regular.ttf"
    target.parent.mkdir()
    shutil.copy(vera_path, target)
    monkeypatch.setattr(fonts, "coverage_of", lambda char_to_glyph: frozenset(Script))
    return target


@pytest.fixture
def latin_only_system_font(tmp_path: Path, vera_path: Path) -> Path:
    """A file named like a CJK system font that only has Latin glyphs."""
    target = tmp_path / "windows" / "msyh.ttf"
    target.parent.mkdir()
    shutil.copy(vera_path, target)
    return target


@pytest.fixture
def cache(tmp_path: Path) -> FontCache:
    return FontCache(tmp_path / "cache")


@pytest.fixture
def offline_resolver(cache: FontCache) -> FontResolver:
    return FontResolver(cache, font_dirs=[], system_paths=[], offline=True)


@pytest.fixture
def offline_config(tmp_path: Path) -> RenderConfig:
    """Render configuration that never touches the network or system fonts."""
    return RenderConfig(
        cache_dir=tmp_path / "cache",
        offline=True,
        font_dirs=[],
        system_font_paths=[],
    )


@pytest.fixture
def generator(offline_config: RenderConfig) -> ResumeGenerator:
    return ResumeGenerator(offline_config)


@pytest.fixture
def ana_lee() -> dict:
    return {
        "name": "Ana Lee",
        "email": "a@x.io",
        "experience": [
            {
                "title": "Engineer",
                "company": "Acme",
                "startDate": "2020-01",
                "current": True,
                "highlights": ["Built X"],
            }
        ],
    }
