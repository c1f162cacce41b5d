"""Engine configuration passed explicitly to every render."""

from dataclasses import dataclass, field
from pathlib import Path

from folio.resume.cache import FOLIO_FONTS_DIR, FontCache
from folio.resume.fonts import DEFAULT_TIMEOUT, Fetcher, FontResolver
from folio.resume.text import CJK_DIGIT_FACTOR, TextMeasurer
from folio.shared import PaperSize


@dataclass
class RenderConfig:
    paper_size: PaperSize = PaperSize.A4
    font_family: str | None = None
    cache_dir: Path = FOLIO_FONTS_DIR
    offline: bool = False
    timeout: float = DEFAULT_TIMEOUT
    subset_fonts: bool = False
    font_dirs: list[Path] | None = None
    system_font_paths: list[Path] | None = None
    fetcher: Fetcher | None = None
    cjk_digit_factor: float = CJK_DIGIT_FACTOR
    verbose: bool = False
    keywords: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if isinstance(self.paper_size, str):
            self.paper_size = PaperSize.from_string(self.paper_size)
        self.cache_dir = Path(self.cache_dir).expanduser()

    def build_cache(self) -> FontCache:
        return FontCache(self.cache_dir, verbose=self.verbose)

    def build_resolver(self, charset: frozenset[str] | None = None) -> FontResolver:
        """A fresh resolver; ``charset`` only qualifies cache keys when subsetting."""
        return FontResolver(
            cache=self.build_cache(),
            font_dirs=self.font_dirs,
            system_paths=self.system_font_paths,
            fetcher=self.fetcher,
            offline=self.offline,
            timeout=self.timeout,
            charset=charset if self.subset_fonts else None,
            verbose=self.verbose,
        )

    def build_measurer(self) -> TextMeasurer:
        return TextMeasurer(self.cjk_digit_factor)
