"""Drawing and measuring strings that mix Latin and CJK scripts.

Each script run is set in a font resolved for that script, and runs are
placed left to right at the cumulative width of the runs before them.
"""

from dataclasses import dataclass

from folio.resume.canvas import PageCanvas, RGB
from folio.resume.fonts import FontResolver, ResolvedFont, Weight
from folio.resume.script import Script, ScriptRun, segment
from folio.resume.text import TextMeasurer, wrap_lines


@dataclass(frozen=True)
class FontRun:
    run: ScriptRun
    font: ResolvedFont


class MixedScriptRenderer:
    def __init__(
        self,
        resolver: FontResolver,
        measurer: TextMeasurer | None = None,
        family: str | None = None,
    ):
        self.resolver = resolver
        self.measurer = measurer or TextMeasurer()
        self.family = family

    def font_for(self, script: Script, bold: bool = False) -> ResolvedFont:
        return self.resolver.resolve(self.family, Weight.of(bold), script)

    def runs(self, text: str, bold: bool = False) -> list[FontRun]:
        return [FontRun(run, self.font_for(run.script, bold)) for run in segment(text)]

    def width(self, text: str, size: float, bold: bool = False) -> float:
        return sum(
            self.measurer.width(fr.run.text, fr.font, size) for fr in self.runs(text, bold)
        )

    def wrap(self, text: str, max_width: float, size: float, bold: bool = False) -> list[str]:
        return wrap_lines(text, max_width, lambda s: self.width(s, size, bold))

    def draw(
        self,
        canvas: PageCanvas,
        text: str,
        x: float,
        y: float,
        size: float,
        color: RGB,
        bold: bool = False,
    ) -> float:
        """Draw ``text`` with its baseline at ``y``; returns the drawn width."""
        offset = 0.0
        for fr in self.runs(text, bold):
            canvas.text(x + offset, y, fr.run.text, fr.font.name, size, color)
            offset += self.measurer.width(fr.run.text, fr.font, size)
        return offset

    def draw_right_aligned(
        self,
        canvas: PageCanvas,
        text: str,
        right: float,
        y: float,
        size: float,
        color: RGB,
        bold: bool = False,
    ) -> float:
        width = self.width(text, size, bold)
        self.draw(canvas, text, right - width, y, size, color, bold)
        return width

    def draw_centered(
        self,
        canvas: PageCanvas,
        text: str,
        center: float,
        y: float,
        size: float,
        color: RGB,
        bold: bool = False,
    ) -> float:
        width = self.width(text, size, bold)
        self.draw(canvas, text, center - width / 2, y, size, color, bold)
        return width
