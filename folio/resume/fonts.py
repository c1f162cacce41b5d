"""Font discovery, download and the font resolution chain.

Fonts are looked up in bundled and local font directories, then the
on-disk cache, then well-known system CJK font paths, then downloaded
(direct URL or the Google Fonts CSS2 API). When all of that fails the
built-in Helvetica is used, so resolution always yields a usable font.
"""

import http.client
import io
import platform
import re
import time
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable

import reportlab
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from tqdm import tqdm

from folio.resume.cache import FontCache
from folio.resume.script import CJK_SCRIPTS, Script, needs_cjk
from folio.shared import (
    Color,
    FontDownloadError,
    FontLoadError,
    FontNotFoundError,
    echo,
    hash_bytes,
    slugify,
)


MODULE_DIR = Path(__file__).parent
BUNDLED_FONT_DIRS = [
    MODULE_DIR / "assets",
    Path(reportlab.__file__).parent / "fonts",
]

DEFAULT_FAMILY = "vera"
DEFAULT_TIMEOUT = 20.0
GOOGLE_FONTS_CSS = "https://fonts.googleapis.com/css2"
CSS_USER_AGENT = "Safari/5.0"
BROWSER_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
FONTSOURCE_CDN = "https://cdn.jsdelivr.net/fontsource/fonts"

Fetcher = Callable[[str, float], bytes]


class Weight(str, Enum):
    REGULAR = "regular"
    BOLD = "bold"

    @staticmethod
    def of(bold: bool) -> "Weight":
        return Weight.BOLD if bold else Weight.REGULAR


class FontSource(str, Enum):
    BUNDLED = "bundled"
    CACHE = "cache"
    SYSTEM = "system"
    REMOTE = "remote"
    STANDARD = "standard"


LATIN_SCRIPTS = frozenset({Script.LATIN, Script.OTHER})

# Failures a chain step reports on its own; anything else is a bug.
STEP_FAILURES = (FontNotFoundError, FontDownloadError, FontLoadError)

STANDARD_FONTS = {
    Weight.REGULAR: "Helvetica",
    Weight.BOLD: "Helvetica-Bold",
}

# Character used to test whether a font's cmap covers a script.
COVERAGE_PROBES = {
    Script.LATIN: "A",
    Script.CJK: "\u4e2d",
    Script.KANA: "\u3042",
    Script.HANGUL: "\ud55c",
}


@dataclass(frozen=True)
class FontFamilySpec:
    """A selectable typeface: bundled file names plus optional download URLs."""

    name: str
    display_name: str
    regular: str
    bold: str
    regular_url: str | None = None
    bold_url: str | None = None
    scripts: frozenset[Script] = LATIN_SCRIPTS

    def source(self, weight: Weight) -> str:
        return self.bold if weight is Weight.BOLD else self.regular

    def url(self, weight: Weight) -> str | None:
        return self.bold_url if weight is Weight.BOLD else self.regular_url

    def covers(self, script: Script) -> bool:
        return script in self.scripts

    @property
    def is_cjk(self) -> bool:
        return bool(self.scripts & CJK_SCRIPTS)


def _fontsource(package: str, subset: str) -> tuple[str, str]:
    return (
        f"{FONTSOURCE_CDN}/{package}@latest/{subset}-400-normal.ttf",
        f"{FONTSOURCE_CDN}/{package}@latest/{subset}-700-normal.ttf",
    )


FONT_FAMILIES: dict[str, FontFamilySpec] = {
    spec.name: spec
    for spec in (
        FontFamilySpec("vera", "Bitstream Vera Sans", "Vera.ttf", "VeraBd.ttf"),
        FontFamilySpec(
            "roboto",
            "Roboto",
            "Roboto-Regular.ttf",
            "Roboto-Bold.ttf",
            *_fontsource("roboto", "latin"),
        ),
        FontFamilySpec(
            "open-sans",
            "Open Sans",
            "OpenSans-Regular.ttf",
            "OpenSans-Bold.ttf",
            *_fontsource("open-sans", "latin"),
        ),
        FontFamilySpec(
            "lato",
            "Lato",
            "Lato-Regular.ttf",
            "Lato-Bold.ttf",
            *_fontsource("lato", "latin"),
        ),
        FontFamilySpec(
            "noto-sans-sc",
            "Noto Sans SC",
            "NotoSansSC-Regular.ttf",
            "NotoSansSC-Bold.ttf",
            *_fontsource("noto-sans-sc", "chinese-simplified"),
            scripts=LATIN_SCRIPTS | {Script.CJK},
        ),
        FontFamilySpec(
            "noto-sans-jp",
            "Noto Sans JP",
            "NotoSansJP-Regular.ttf",
            "NotoSansJP-Bold.ttf",
            *_fontsource("noto-sans-jp", "japanese"),
            scripts=LATIN_SCRIPTS | {Script.CJK, Script.KANA},
        ),
        FontFamilySpec(
            "noto-sans-kr",
            "Noto Sans KR",
            "NotoSansKR-Regular.ttf",
            "NotoSansKR-Bold.ttf",
            *_fontsource("noto-sans-kr", "korean"),
            scripts=LATIN_SCRIPTS | {Script.HANGUL},
        ),
    )
}

SCRIPT_FAMILIES = {
    Script.CJK: "noto-sans-sc",
    Script.KANA: "noto-sans-jp",
    Script.HANGUL: "noto-sans-kr",
}

SYSTEM_CJK_FONT_PATHS: dict[str, list[str]] = {
    "Darwin": [
        "/Library/Fonts/Arial Unicode.ttf",
        "/System/Library/Fonts/PingFang.ttc",
        "/System/Library/Fonts/STHeiti Light.ttc",
        "/System/Library/Fonts/STHeiti Medium.ttc",
        "/System/Library/Fonts/Hiragino Sans GB.ttc",
        "/System/Library/Fonts/AppleSDGothicNeo.ttc",
    ],
    "Linux": [
        "/usr/share/fonts/truetype/wqy/wqy-microhei.ttc",
        "/usr/share/fonts/truetype/wqy/wqy-zenhei.ttc",
        "/usr/share/fonts/truetype/droid/DroidSansFallbackFull.ttf",
        "/usr/share/fonts/truetype/arphic/uming.ttc",
        "/usr/share/fonts/truetype/nanum/NanumGothic.ttf",
        "/usr/share/fonts/truetype/nanum/NanumGothicBold.ttf",
        "/usr/share/fonts/wenquanyi/wqy-microhei/wqy-microhei.ttc",
        "/usr/share/fonts/opentype/noto/NotoSansCJK-Regular.ttc",
        "/usr/share/fonts/opentype/noto/NotoSansCJK-Bold.ttc",
    ],
    "Windows": [
        "C:/Windows/Fonts/msyh.ttc",
        "C:/Windows/Fonts/msyhbd.ttc",
        "C:/Windows/Fonts/simhei.ttf",
        "C:/Windows/Fonts/simsun.ttc",
        "C:/Windows/Fonts/malgun.ttf",
        "C:/Windows/Fonts/YuGothR.ttc",
    ],
}

WSL_CJK_FONT_PATHS = [
    "/mnt/c/Windows/Fonts/msyh.ttc",
    "/mnt/c/Windows/Fonts/msyhbd.ttc",
    "/mnt/c/Windows/Fonts/simhei.ttf",
    "/mnt/c/Windows/Fonts/simsun.ttc",
]

CJK_FONT_NAME = re.compile(
    r"cjk|chinese|pingfang|heiti|songti|kaiti|yahei|msyh|simsun|simhei|wenquanyi|wqy"
    r"|droidsansfallback|hiragino|yugoth|meiryo|malgun|nanum|arialunicode|unifont"
    r"|notosans(sc|tc|hk|jp|kr)|notoserif(sc|tc|jp|kr)|uming|ukai"
)
BOLD_FONT_NAME = re.compile(r"bold|heavy|black|bd\.")
FONT_SUFFIXES = {".ttf", ".ttc", ".otf"}


@dataclass(frozen=True)
class ResolvedFont:
    """A font registered with reportlab and ready for measuring and drawing."""

    name: str
    family: str
    weight: Weight
    data: bytes | None
    coverage: frozenset[Script]
    source: FontSource

    def covers(self, script: Script) -> bool:
        return script in self.coverage

    @property
    def degraded(self) -> bool:
        return self.source is FontSource.STANDARD


@dataclass
class FontPaths:
    """Paths to the regular and bold variants of a locally installed font."""

    regular: Path
    bold: Path | None = None


def get_system_font_dirs() -> list[Path]:
    """Return platform-specific system font directories."""
    system = platform.system()

    if system == "Darwin":
        return [
            Path("/Library/Fonts"),
            Path.home() / "Library" / "Fonts",
            Path("/System/Library/Fonts"),
        ]
    elif system == "Linux":
        return [
            Path("/usr/share/fonts"),
            Path("/usr/local/share/fonts"),
            Path.home() / ".local" / "share" / "fonts",
            Path.home() / ".fonts",
        ]
    elif system == "Windows":
        return [Path("C:/Windows/Fonts")]
    else:
        return []


def get_system_cjk_font_paths() -> list[Path]:
    """Fixed, platform-specific locations of common CJK-capable fonts."""
    system = platform.system()
    paths = list(SYSTEM_CJK_FONT_PATHS.get(system, []))
    if system == "Linux":
        paths.extend(WSL_CJK_FONT_PATHS)
    return [Path(p) for p in paths]


def is_cjk_font_name(file_name: str) -> bool:
    return CJK_FONT_NAME.search(file_name.lower().replace(" ", "").replace("-", "")) is not None


def find_cjk_fonts_in_dirs(dirs: list[Path]) -> list[Path]:
    """Font files under ``dirs`` whose names identify them as CJK-capable."""
    found = []
    for font_dir in dirs:
        if not font_dir.is_dir():
            continue
        for font_file in sorted(font_dir.rglob("*")):
            if font_file.suffix.lower() in FONT_SUFFIXES and is_cjk_font_name(font_file.name):
                found.append(font_file)
    return found


def find_font_in_dirs(font_name: str, dirs: list[Path]) -> FontPaths | None:
    """Search directories for font files matching the given name.

    Looks for variations like FontName-Regular.ttf, FontName-Bold.ttf, etc.
    """
    name_lower = font_name.lower().replace(" ", "")
    variants = {
        "regular": ["-regular", "-roman", ""],
        "bold": ["-bold", "-semibold", "-medium"],
    }

    found: dict[str, Path | None] = {"regular": None, "bold": None}

    for font_dir in dirs:
        if not font_dir.is_dir():
            continue

        for ttf_file in font_dir.rglob("*.ttf"):
            file_lower = ttf_file.stem.lower().replace(" ", "")

            if not file_lower.startswith(name_lower):
                continue

            suffix = file_lower[len(name_lower) :]

            for variant, suffixes in variants.items():
                if suffix in suffixes and found[variant] is None:
                    found[variant] = ttf_file
                    break

    if found["regular"] is None:
        return None

    return FontPaths(regular=found["regular"], bold=found["bold"])


def download_font(url: str, timeout: float = DEFAULT_TIMEOUT, verbose: bool = False) -> bytes:
    """Download a URL, following redirects, within ``timeout`` seconds overall."""
    user_agent = CSS_USER_AGENT if url.startswith(GOOGLE_FONTS_CSS) else BROWSER_USER_AGENT
    req = urllib.request.Request(url, headers={"User-Agent": user_agent})
    deadline = time.monotonic() + timeout
    name = Path(urllib.parse.urlparse(url).path).name or url

    chunks: list[bytes] = []
    try:
        with urllib.request.urlopen(req, timeout=timeout) as response:
            total = int(response.headers.get("Content-Length") or 0)
            with tqdm(
                total=total or None,
                unit="B",
                unit_scale=True,
                desc=f"Downloading {name}",
                disable=not verbose,
            ) as progress:
                for chunk in iter(lambda: response.read(64 * 1024), b""):
                    if time.monotonic() > deadline:
                        raise FontDownloadError(name, f"timed out after {timeout}s")
                    chunks.append(chunk)
                    progress.update(len(chunk))
    except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as e:
        raise FontDownloadError(name, str(e)) from e

    return b"".join(chunks)


def _extract_font_faces(css_content: str) -> list[tuple[Weight, str]]:
    """Extract (weight, url) pairs from a Google Fonts CSS response.

    Italic faces are skipped.
    """
    results = []
    blocks = re.findall(r"@font-face\s*\{([^}]+)\}", css_content)

    for block in blocks:
        url_match = re.search(r"url\((https://fonts\.gstatic\.com/[^)]+)\)", block)
        weight_match = re.search(r"font-weight:\s*(\d+)", block)
        style_match = re.search(r"font-style:\s*(\w+)", block)

        if not url_match:
            continue
        if style_match and style_match.group(1) == "italic":
            continue

        weight = weight_match.group(1) if weight_match else "400"
        is_bold = weight in ("700", "600", "800", "900")
        results.append((Weight.of(is_bold), url_match.group(1)))

    return results


def google_font_url(display_name: str, weight: Weight, fetcher: Fetcher, timeout: float) -> str:
    """Ask the Google Fonts CSS2 API where a TrueType file for the weight lives."""
    family_encoded = display_name.replace(" ", "+")
    css_url = f"{GOOGLE_FONTS_CSS}?family={family_encoded}:wght@400;700"
    css_content = fetcher(css_url, timeout).decode("utf-8", errors="replace")

    for face_weight, url in _extract_font_faces(css_content):
        if face_weight is weight:
            return url
    raise FontDownloadError(display_name, "No font URLs found in CSS response")


def coverage_of(char_to_glyph: dict[int, int]) -> frozenset[Script]:
    covered = {script for script, ch in COVERAGE_PROBES.items() if ord(ch) in char_to_glyph}
    if Script.LATIN in covered:
        covered.add(Script.OTHER)
    return frozenset(covered)


def lookup_family(family: str | None) -> FontFamilySpec:
    """Registry entry for ``family``, or an ad-hoc spec for any other installed font."""
    if not family:
        return FONT_FAMILIES[DEFAULT_FAMILY]

    key = slugify(family)
    if key in FONT_FAMILIES:
        return FONT_FAMILIES[key]

    base = family.replace(" ", "")
    return FontFamilySpec(key, family, f"{base}-Regular.ttf", f"{base}-Bold.ttf")


class FontResolver:
    """Turns (family, weight, script) requests into registered fonts.

    Never raises: every failure advances to the next step of the chain, and
    a step that failed once is not retried by the same resolver.
    """

    def __init__(
        self,
        cache: FontCache,
        font_dirs: list[Path] | None = None,
        system_paths: list[Path] | None = None,
        fetcher: Fetcher | None = None,
        offline: bool = False,
        timeout: float = DEFAULT_TIMEOUT,
        charset: frozenset[str] | None = None,
        verbose: bool = False,
    ):
        self.cache = cache
        self.font_dirs = get_system_font_dirs() if font_dirs is None else list(font_dirs)
        self.system_paths = None if system_paths is None else list(system_paths)
        self.fetcher = fetcher
        self.offline = offline
        self.timeout = timeout
        self.charset = charset
        self.verbose = verbose
        self._resolved: dict[tuple[str, Weight, bool], ResolvedFont] = {}
        self._failed: set[tuple[FontSource, str, Weight]] = set()
        self._scanned: list[Path] | None = None

    def family_for(self, family: str | None, script: Script) -> FontFamilySpec:
        spec = lookup_family(family)
        if needs_cjk(script) and not spec.covers(script):
            return FONT_FAMILIES[SCRIPT_FAMILIES[script]]
        return spec

    def resolve(
        self,
        family: str | None,
        weight: Weight | str = Weight.REGULAR,
        script_hint: Script = Script.LATIN,
    ) -> ResolvedFont:
        weight = Weight(weight)
        spec = self.family_for(family, script_hint)
        cjk = needs_cjk(script_hint)

        memo_key = (spec.name, weight, cjk)
        if memo_key not in self._resolved:
            self._resolved[memo_key] = self._run_chain(spec, weight, cjk)
        return self._resolved[memo_key]

    def _run_chain(self, spec: FontFamilySpec, weight: Weight, cjk: bool) -> ResolvedFont:
        steps: list[tuple[FontSource, Callable[[FontFamilySpec, Weight], ResolvedFont]]] = [
            (FontSource.BUNDLED, self._from_bundled),
            (FontSource.CACHE, self._from_cache),
        ]
        if cjk or spec.is_cjk:
            steps.append((FontSource.SYSTEM, self._from_system))
        if not self.offline:
            steps.append((FontSource.REMOTE, self._from_remote))

        for source, step in steps:
            font = self._attempt(source, step, spec, weight)
            if font is not None:
                return font

        if not cjk and spec.name != DEFAULT_FAMILY:
            default = FONT_FAMILIES[DEFAULT_FAMILY]
            font = self._attempt(FontSource.BUNDLED, self._from_bundled, default, weight)
            if font is not None:
                return font

        if cjk:
            echo(
                f"No CJK-capable font available for {spec.display_name}; "
                "CJK text will not display correctly",
                Color.WARNING,
            )
        return standard_font(weight)

    def _attempt(
        self,
        source: FontSource,
        step: Callable[[FontFamilySpec, Weight], ResolvedFont],
        spec: FontFamilySpec,
        weight: Weight,
    ) -> ResolvedFont | None:
        marker = (source, spec.name, weight)
        if marker in self._failed:
            return None

        try:
            font = step(spec, weight)
        except STEP_FAILURES as e:
            self._failed.add(marker)
            if self.verbose:
                echo(f"  {source.value}: {e}", Color.WARNING)
            return None
        except Exception as e:
            self._failed.add(marker)
            echo(
                f"Unexpected error in {source.value} font lookup for "
                f"{spec.display_name}: {type(e).__name__}: {e}",
                Color.WARNING,
            )
            return None

        if self.verbose:
            echo(f"Using {source.value} font for {spec.display_name} ({weight.value})", Color.INFO)
        return font

    def _cache_key(self, spec: FontFamilySpec, weight: Weight) -> str:
        return FontCache.key(spec.name, weight.value, self.charset)

    def _from_bundled(self, spec: FontFamilySpec, weight: Weight) -> ResolvedFont:
        for font_dir in BUNDLED_FONT_DIRS:
            path = font_dir / spec.source(weight)
            if path.is_file():
                return self._load(spec, weight, path.read_bytes(), FontSource.BUNDLED)

        paths = find_font_in_dirs(spec.display_name, self.font_dirs)
        if paths is None:
            raise FontNotFoundError(spec.display_name, "bundled")

        path = paths.bold if weight is Weight.BOLD and paths.bold else paths.regular
        return self._load(spec, weight, path.read_bytes(), FontSource.BUNDLED)

    def _from_cache(self, spec: FontFamilySpec, weight: Weight) -> ResolvedFont:
        data = self.cache.get(self._cache_key(spec, weight))
        if data is None:
            raise FontNotFoundError(spec.display_name, "cache")
        return self._check_coverage(spec, self._load(spec, weight, data, FontSource.CACHE))

    @staticmethod
    def _check_coverage(spec: FontFamilySpec, font: ResolvedFont) -> ResolvedFont:
        """Reject a font lacking any CJK script its family is meant to cover."""
        missing = sorted(s.value for s in spec.scripts & CJK_SCRIPTS if not font.covers(s))
        if missing:
            raise FontLoadError(spec.display_name, f"no glyphs for {', '.join(missing)}")
        return font

    def _system_candidates(self, weight: Weight) -> list[Path]:
        if self.system_paths is not None:
            candidates = self.system_paths
        else:
            if self._scanned is None:
                self._scanned = find_cjk_fonts_in_dirs(self.font_dirs)
            candidates = get_system_cjk_font_paths() + self._scanned

        def is_bold(path: Path) -> bool:
            return BOLD_FONT_NAME.search(path.name.lower()) is not None

        # Prefer the matching weight; a regular face still serves for bold.
        return sorted(candidates, key=lambda p: is_bold(p) != (weight is Weight.BOLD))

    def _from_system(self, spec: FontFamilySpec, weight: Weight) -> ResolvedFont:
        for path in self._system_candidates(weight):
            try:
                data = path.read_bytes()
                font = self._check_coverage(
                    spec, self._load(spec, weight, data, FontSource.SYSTEM)
                )
            except (OSError, FontLoadError) as e:
                if self.verbose:
                    echo(f"  skipping {path}: {e}", Color.WARNING)
                continue

            if self.verbose:
                echo(f"Found CJK font: {path}", Color.SUCCESS)
            self.cache.put(self._cache_key(spec, weight), data)
            return font

        raise FontNotFoundError(spec.display_name, "system")

    def _fetch(self, url: str, timeout: float | None = None) -> bytes:
        timeout = timeout or self.timeout
        if self.fetcher is not None:
            return self.fetcher(url, timeout)
        return download_font(url, timeout, self.verbose)

    def _from_remote(self, spec: FontFamilySpec, weight: Weight) -> ResolvedFont:
        locators = [
            lambda: spec.url(weight),
            lambda: google_font_url(spec.display_name, weight, self._fetch, self.timeout),
        ]
        errors = []
        for locate in locators:
            try:
                url = locate()
                if not url:
                    continue
                data = self._fetch(url)
                font = self._check_coverage(
                    spec, self._load(spec, weight, data, FontSource.REMOTE)
                )
            except (FontDownloadError, FontLoadError, UnicodeError) as e:
                errors.append(str(e))
                continue

            self.cache.put(self._cache_key(spec, weight), data)
            return font

        raise FontDownloadError(spec.display_name, "; ".join(errors) or "no source URL")

    def _load(
        self, spec: FontFamilySpec, weight: Weight, data: bytes, source: FontSource
    ) -> ResolvedFont:
        if not data:
            raise FontLoadError(spec.display_name, "empty font program")

        name = f"{spec.name}-{weight.value}-{hash_bytes(data)[:12]}"
        try:
            if name not in pdfmetrics.getRegisteredFontNames():
                pdfmetrics.registerFont(TTFont(name, io.BytesIO(data)))
            face = pdfmetrics.getFont(name).face
        except Exception as e:
            raise FontLoadError(spec.display_name, str(e)) from e

        return ResolvedFont(
            name=name,
            family=spec.name,
            weight=weight,
            data=data,
            coverage=coverage_of(face.charToGlyph),
            source=source,
        )


def standard_font(weight: Weight) -> ResolvedFont:
    """The built-in Helvetica face: always available, Latin only."""
    return ResolvedFont(
        name=STANDARD_FONTS[weight],
        family="standard",
        weight=weight,
        data=None,
        coverage=LATIN_SCRIPTS,
        source=FontSource.STANDARD,
    )
