"""Theme decorations drawn around section titles, items and the header.

Which variant a theme uses is data (``ThemeConfig.decoration``); the
layout engine only calls the hooks below.
"""

from folio.resume.canvas import PageCanvas, RGB
from folio.resume.themes import Decoration, HeaderStyle, ThemeConfig


WHITE: RGB = (1.0, 1.0, 1.0)


class PlainDecoration:
    """No ornaments at all."""

    indent = 0.0
    summary_card = False

    def __init__(self, theme: ThemeConfig):
        self.theme = theme

    def section_title(
        self, canvas: PageCanvas, x: float, y: float, right: float, title_width: float
    ) -> None:
        pass

    def item_title(self, canvas: PageCanvas, x: float, y: float, right: float, size: float) -> None:
        pass

    def card(self, canvas: PageCanvas, x: float, top: float, right: float, height: float) -> None:
        if not self.summary_card:
            return
        pad = 6.0
        canvas.rect(
            x - pad,
            top - height - pad,
            right - x + 2 * pad,
            height + 2 * pad,
            fill=self.theme.light,
        )


class TimelineDecoration(PlainDecoration):
    """Accent bar under titles and a dot in front of every item."""

    indent = 14.0
    summary_card = True

    def section_title(self, canvas, x, y, right, title_width):
        canvas.rect(x, y - 5, title_width, 2, fill=self.theme.accent, opacity=0.6)

    def item_title(self, canvas, x, y, right, size):
        canvas.circle(x + 4, y + size * 0.35, 3, fill=self.theme.accent)


class UnderlineDecoration(PlainDecoration):
    """Full-width rule under every section title."""

    def section_title(self, canvas, x, y, right, title_width):
        canvas.line(x, y - 5, right, y - 5, color=self.theme.primary, width=1.0, opacity=0.3)


class CardDecoration(PlainDecoration):
    """Light band behind each item title; the summary sits on a card."""

    summary_card = True

    def section_title(self, canvas, x, y, right, title_width):
        canvas.rect(x, y - 5, 24, 2, fill=self.theme.primary)

    def item_title(self, canvas, x, y, right, size):
        canvas.rect(x - 4, y - size * 0.4, right - x + 8, size * 1.5, fill=self.theme.light)


DECORATIONS: dict[Decoration, type[PlainDecoration]] = {
    Decoration.NONE: PlainDecoration,
    Decoration.TIMELINE: TimelineDecoration,
    Decoration.UNDERLINE: UnderlineDecoration,
    Decoration.CARD: CardDecoration,
}


def decoration_for(theme: ThemeConfig) -> PlainDecoration:
    return DECORATIONS[theme.decoration](theme)


def draw_header_background(
    canvas: PageCanvas, theme: ThemeConfig, bottom: float, left: float, right: float
) -> tuple[RGB, RGB]:
    """Draw the header backdrop; returns (name color, contact color) to use on it.

    ``bottom`` is the lowest y the header text reaches.
    """
    if theme.header_style is HeaderStyle.BAND:
        band_bottom = bottom - theme.margin * 0.4
        canvas.rect(0, band_bottom, canvas.width, canvas.height - band_bottom, fill=theme.primary)
        return WHITE, theme.light

    if theme.header_style is HeaderStyle.RULE:
        canvas.line(left, bottom - 8, right, bottom - 8, color=theme.primary, width=1.5)
    return theme.primary, theme.secondary
