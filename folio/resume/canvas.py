"""Page-level drawing primitives.

A PageCanvas records draw operations into fixed-size pages; nothing is
rasterized or serialized here. Coordinates are PDF points with the origin
at the bottom-left corner of the page.
"""

from dataclasses import dataclass

from folio.shared import PaperSize


RGB = tuple[float, float, float]


@dataclass(frozen=True)
class TextOp:
    x: float
    y: float
    text: str
    font: str
    size: float
    color: RGB


@dataclass(frozen=True)
class LineOp:
    x1: float
    y1: float
    x2: float
    y2: float
    color: RGB
    width: float = 1.0
    opacity: float = 1.0


@dataclass(frozen=True)
class RectOp:
    x: float
    y: float
    width: float
    height: float
    fill: RGB
    stroke: RGB | None = None
    stroke_width: float = 0.5
    opacity: float = 1.0


@dataclass(frozen=True)
class CircleOp:
    x: float
    y: float
    radius: float
    fill: RGB
    opacity: float = 1.0


DrawOp = TextOp | LineOp | RectOp | CircleOp


@dataclass(frozen=True)
class Page:
    number: int
    width: float
    height: float
    ops: tuple[DrawOp, ...] = ()

    def texts(self) -> list[str]:
        return [op.text for op in self.ops if isinstance(op, TextOp)]


class PageCanvas:
    """Accumulates draw operations page by page."""

    def __init__(self, paper_size: PaperSize = PaperSize.A4):
        self.paper_size = paper_size
        self._pages: list[list[DrawOp]] = [[]]

    @property
    def width(self) -> float:
        return self.paper_size.width

    @property
    def height(self) -> float:
        return self.paper_size.height

    @property
    def page_count(self) -> int:
        return len(self._pages)

    def new_page(self) -> int:
        self._pages.append([])
        return len(self._pages)

    def text(self, x: float, y: float, text: str, font: str, size: float, color: RGB) -> None:
        if text:
            self._pages[-1].append(TextOp(x, y, text, font, size, color))

    def line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        color: RGB,
        width: float = 1.0,
        opacity: float = 1.0,
    ) -> None:
        self._pages[-1].append(LineOp(x1, y1, x2, y2, color, width, opacity))

    def rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        fill: RGB,
        stroke: RGB | None = None,
        stroke_width: float = 0.5,
        opacity: float = 1.0,
    ) -> None:
        self._pages[-1].append(RectOp(x, y, width, height, fill, stroke, stroke_width, opacity))

    def circle(self, x: float, y: float, radius: float, fill: RGB, opacity: float = 1.0) -> None:
        self._pages[-1].append(CircleOp(x, y, radius, fill, opacity))

    def finish(self) -> tuple[Page, ...]:
        return tuple(
            Page(number=i + 1, width=self.width, height=self.height, ops=tuple(ops))
            for i, ops in enumerate(self._pages)
        )
