"""Text measurement and script-aware line wrapping."""

from typing import Callable

from reportlab.pdfbase.pdfmetrics import stringWidth

from folio.resume.fonts import ResolvedFont
from folio.resume.script import CJK_SCRIPTS, has_cjk, has_ideographs


CJK_DIGIT_FACTOR = 0.95
ESTIMATE_FACTOR = 0.5


class TextMeasurer:
    """Width-of-string queries against resolved fonts."""

    def __init__(self, cjk_digit_factor: float = CJK_DIGIT_FACTOR):
        self.cjk_digit_factor = cjk_digit_factor

    def width(self, text: str, font: ResolvedFont, size: float) -> float:
        if not text:
            return 0.0

        try:
            width = stringWidth(text, font.name, size)
        except Exception:
            return estimate_width(text, size)

        # CJK fonts set digits on wide advances next to ideographs.
        if (
            font.coverage & CJK_SCRIPTS
            and has_ideographs(text)
            and any(ch.isdigit() for ch in text)
        ):
            width *= self.cjk_digit_factor
        return width


def estimate_width(text: str, size: float) -> float:
    return len(text) * size * ESTIMATE_FACTOR


def wrap_lines(text: str, max_width: float, width_of: Callable[[str], float]) -> list[str]:
    """Greedily break ``text`` into lines no wider than ``max_width``.

    Each hard newline starts a new paragraph. Paragraphs containing CJK
    wrap between any two codepoints, others between whitespace-separated
    words. A unit wider than ``max_width`` on its own is kept whole on a
    line of its own.
    """
    lines: list[str] = []
    for paragraph in text.splitlines():
        if has_cjk(paragraph):
            lines.extend(_wrap_units(list(paragraph), "", max_width, width_of))
        else:
            lines.extend(_wrap_units(paragraph.split(), " ", max_width, width_of))
    return lines


def _wrap_units(
    units: list[str], joiner: str, max_width: float, width_of: Callable[[str], float]
) -> list[str]:
    lines = []
    current = ""
    for unit in units:
        if not current:
            if unit.isspace():
                continue
            current = unit
            continue

        candidate = f"{current}{joiner}{unit}"
        if width_of(candidate) > max_width:
            lines.append(current.rstrip())
            current = "" if unit.isspace() else unit
        else:
            current = candidate

    if current.strip():
        lines.append(current.rstrip())
    return lines


class LineWrapper:
    """Wraps text against a single resolved font."""

    def __init__(self, measurer: TextMeasurer | None = None):
        self.measurer = measurer or TextMeasurer()

    def wrap(self, text: str, max_width: float, font: ResolvedFont, size: float) -> list[str]:
        return wrap_lines(text, max_width, lambda s: self.measurer.width(s, font, size))
