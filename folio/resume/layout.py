"""Deterministic multi-page layout of a resume onto PageCanvas pages.

Sections are visited in one canonical order for every theme. A cursor
``y`` walks down the page; whenever the next atomic piece does not fit
above the bottom margin a new page is started and ``y`` returns to the
top margin.
"""

from dataclasses import dataclass
from enum import Enum

from folio.resume.canvas import Page, PageCanvas
from folio.resume.decorations import decoration_for, draw_header_background
from folio.resume.mixed import MixedScriptRenderer
from folio.resume.models import Resume
from folio.resume.profile import section_titles
from folio.resume.themes import HeaderStyle, ThemeConfig
from folio.shared import PaperSize


MAX_HIGHLIGHTS = 3
MAX_SKILLS_PER_CATEGORY = 8
CONTACT_SEPARATOR = " | "
DATE_GAP = 12.0
WHITE = (1.0, 1.0, 1.0)


class Section(Enum):
    HEADER = "header"
    SUMMARY = "summary"
    EDUCATION = "education"
    EXPERIENCE = "experience"
    PROJECTS = "projects"
    SKILLS = "skills"
    DONE = "done"


TRANSITIONS = {
    Section.HEADER: Section.SUMMARY,
    Section.SUMMARY: Section.EDUCATION,
    Section.EDUCATION: Section.EXPERIENCE,
    Section.EXPERIENCE: Section.PROJECTS,
    Section.PROJECTS: Section.SKILLS,
    Section.SKILLS: Section.DONE,
}


@dataclass(frozen=True)
class Entry:
    """A section item reduced to the parts every item section draws."""

    title: str
    dates: str = ""
    subtitle: str = ""
    description: str = ""
    highlights: tuple[str, ...] = ()
    technologies: tuple[str, ...] = ()


def date_range(start: str | None, end: str | None, current: bool, now: str = "Now") -> str:
    """Format ``start - end``; a current item ends at ``now``."""
    finish = now if current else (end or "")
    if start and finish:
        return f"{start} - {finish}"
    return start or finish


def _joined(separator: str, *parts: object) -> str:
    return separator.join(str(p) for p in parts if p)


class LayoutEngine:
    def __init__(
        self,
        renderer: MixedScriptRenderer,
        theme: ThemeConfig,
        paper_size: PaperSize = PaperSize.A4,
        titles: dict[str, str] | None = None,
    ):
        self.renderer = renderer
        self.theme = theme
        self.paper_size = paper_size
        self.titles = titles
        self.decoration = decoration_for(theme)

        self.left = theme.margin
        self.right = paper_size.width - theme.margin
        self.top = paper_size.height - theme.margin
        self.bottom = theme.margin

        self.canvas = PageCanvas(paper_size)
        self.y = self.top
        self._titles: dict[str, str] = {}

    @property
    def content_width(self) -> float:
        return self.right - self.left

    def layout(self, resume: Resume) -> tuple[Page, ...]:
        """Lay out ``resume`` and return the finished pages."""
        self.canvas = PageCanvas(self.paper_size)
        self.y = self.top
        self._titles = self.titles or section_titles(resume.basicInfo.languages)
        self._paint_background()

        handlers = {
            Section.HEADER: self._header,
            Section.SUMMARY: self._summary,
            Section.EDUCATION: self._education,
            Section.EXPERIENCE: self._experience,
            Section.PROJECTS: self._projects,
            Section.SKILLS: self._skills,
        }

        state = Section.HEADER
        while state is not Section.DONE:
            handlers[state](resume)
            state = TRANSITIONS[state]

        return self.canvas.finish()

    # Cursor management

    def _paint_background(self) -> None:
        if self.theme.background != WHITE:
            self.canvas.rect(
                0, 0, self.canvas.width, self.canvas.height, fill=self.theme.background
            )

    def _new_page(self) -> None:
        self.canvas.new_page()
        self.y = self.top
        self._paint_background()

    def _ensure_space(self, needed: float) -> None:
        # A fresh page takes whatever comes, even if it overflows.
        if self.y - needed < self.bottom and self.y < self.top:
            self._new_page()

    def _line(self, size: float) -> float:
        return self.theme.line_height(size)

    def _next_line(self, size: float) -> float:
        """Reserve one line of ``size``; returns its baseline."""
        height = self._line(size)
        self._ensure_space(height)
        baseline = self.y - size
        self.y -= height
        return baseline

    # Sections

    def _header(self, resume: Resume) -> None:
        info = resume.basicInfo
        theme = self.theme
        render = self.renderer

        contact_lines: list[str] = []
        for parts in (
            (info.email, info.phone, info.location),
            (info.githubUrl, info.linkedinUrl, info.portfolioUrl),
        ):
            text = _joined(CONTACT_SEPARATOR, *parts)
            if text:
                contact_lines.extend(render.wrap(text, self.content_width, theme.contact_size))

        if not info.name and not contact_lines:
            return

        # Positions first, so the backdrop can be drawn beneath the text.
        y = self.top
        name_baseline = None
        if info.name:
            y -= theme.name_size
            name_baseline = y
            y -= theme.name_size * 0.4
        contact_baselines = []
        for _ in contact_lines:
            y -= self._line(theme.contact_size)
            contact_baselines.append(y)

        text_bottom = y - theme.contact_size * 0.3
        name_color, contact_color = draw_header_background(
            self.canvas, theme, text_bottom, self.left, self.right
        )

        center = self.canvas.width / 2
        if name_baseline is not None:
            if theme.header_centered:
                render.draw_centered(
                    self.canvas, info.name, center, name_baseline, theme.name_size, name_color, True
                )
            else:
                render.draw(
                    self.canvas, info.name, self.left, name_baseline, theme.name_size, name_color, True
                )

        for line, baseline in zip(contact_lines, contact_baselines):
            if theme.header_centered:
                render.draw_centered(
                    self.canvas, line, center, baseline, theme.contact_size, contact_color
                )
            else:
                render.draw(self.canvas, line, self.left, baseline, theme.contact_size, contact_color)

        self.y = text_bottom - theme.section_gap
        if theme.header_style is HeaderStyle.BAND:
            self.y -= theme.margin * 0.4

    def _section_title(self, title: str, follow: float) -> None:
        """Draw a section title, kept on one page with ``follow`` points after it."""
        theme = self.theme
        self._ensure_space(self._line(theme.section_size) + 6 + follow)

        text = title.upper() if theme.uppercase_titles else title
        baseline = self._next_line(theme.section_size)
        width = self.renderer.draw(
            self.canvas, text, self.left, baseline, theme.section_size, theme.primary, bold=True
        )
        self.decoration.section_title(self.canvas, self.left, baseline, self.right, width)
        self.y -= 6

    def _summary(self, resume: Resume) -> None:
        if not resume.summary or not resume.summary.strip():
            return

        theme = self.theme
        size = theme.body_size
        lines = self.renderer.wrap(resume.summary, self.content_width, size)
        self._section_title(self._titles["summary"], self._line(size))

        height = len(lines) * self._line(size)
        if self.y - height >= self.bottom:
            self.decoration.card(self.canvas, self.left, self.y, self.right, height)

        for line in lines:
            baseline = self._next_line(size)
            self.renderer.draw(self.canvas, line, self.left, baseline, size, theme.text)
        self.y -= theme.section_gap

    def _education(self, resume: Resume) -> None:
        gpa = self._titles["gpa"]
        entries = [
            Entry(
                title=_joined(", ", edu.degree, edu.institution),
                dates=date_range(edu.startDate, edu.endDate, edu.current, self._titles["now"]),
                subtitle=_joined(
                    CONTACT_SEPARATOR,
                    edu.field,
                    edu.location,
                    f"{gpa}: {edu.gpa}" if edu.gpa else None,
                ),
                highlights=tuple(edu.highlights),
            )
            for edu in resume.education
        ]
        self._entries(self._titles["education"], entries)

    def _experience(self, resume: Resume) -> None:
        entries = [
            Entry(
                title=_joined(", ", exp.title, exp.company),
                dates=date_range(exp.startDate, exp.endDate, exp.current, self._titles["now"]),
                subtitle=exp.location or "",
                description=exp.description or "",
                highlights=tuple(exp.highlights),
                technologies=tuple(exp.technologies),
            )
            for exp in resume.experience
        ]
        self._entries(self._titles["experience"], entries)

    def _projects(self, resume: Resume) -> None:
        entries = [
            Entry(
                title=project.name,
                dates=date_range(
                    project.startDate, project.endDate, project.current, self._titles["now"]
                ),
                subtitle=_joined(CONTACT_SEPARATOR, project.role, project.url),
                description=project.description or "",
                highlights=tuple(project.highlights),
                technologies=tuple(project.technologies),
            )
            for project in resume.projects
        ]
        self._entries(self._titles["projects"], entries)

    def _entries(self, title: str, entries: list[Entry]) -> None:
        entries = [e for e in entries if e.title or e.description]
        if not entries:
            return

        first_title = self._title_lines(entries[0])
        self._section_title(title, len(first_title) * self._line(self.theme.title_size))
        for entry in entries:
            self._entry(entry)
        self.y -= self.theme.section_gap - self.theme.item_gap

    def _title_lines(self, entry: Entry) -> list[str]:
        """Wrap an item title into the room left of its right-aligned dates."""
        theme = self.theme
        width = self.right - self.left - self.decoration.indent
        if entry.dates:
            width -= self.renderer.width(entry.dates, theme.small_size) + DATE_GAP
        return self.renderer.wrap(entry.title, width, theme.title_size, bold=True) or [""]

    def _entry(self, entry: Entry) -> None:
        theme = self.theme
        render = self.renderer
        canvas = self.canvas
        x = self.left + self.decoration.indent
        width = self.right - x

        # The whole title block moves to the next page together.
        title_lines = self._title_lines(entry)
        self._ensure_space(len(title_lines) * self._line(theme.title_size))
        for i, line in enumerate(title_lines):
            baseline = self._next_line(theme.title_size)
            if i == 0:
                self.decoration.item_title(canvas, self.left, baseline, self.right, theme.title_size)
                if entry.dates:
                    render.draw_right_aligned(
                        canvas, entry.dates, self.right, baseline, theme.small_size, theme.secondary
                    )
            render.draw(canvas, line, x, baseline, theme.title_size, theme.text, bold=True)

        if entry.subtitle:
            for line in render.wrap(entry.subtitle, width, theme.small_size):
                baseline = self._next_line(theme.small_size)
                render.draw(canvas, line, x, baseline, theme.small_size, theme.secondary)

        if entry.description:
            for line in render.wrap(entry.description, width, theme.body_size):
                baseline = self._next_line(theme.body_size)
                render.draw(canvas, line, x, baseline, theme.body_size, theme.text)

        bullet_width = render.width(f"{theme.bullet} ", theme.body_size)
        for highlight in entry.highlights[:MAX_HIGHLIGHTS]:
            lines = render.wrap(highlight, width - bullet_width, theme.body_size)
            for i, line in enumerate(lines):
                baseline = self._next_line(theme.body_size)
                if i == 0:
                    render.draw(canvas, theme.bullet, x, baseline, theme.body_size, theme.accent)
                render.draw(canvas, line, x + bullet_width, baseline, theme.body_size, theme.text)

        if entry.technologies:
            text = f"{self._titles['technologies']}: {', '.join(entry.technologies)}"
            for line in render.wrap(text, width, theme.small_size):
                baseline = self._next_line(theme.small_size)
                render.draw(canvas, line, x, baseline, theme.small_size, theme.secondary)

        self.y -= theme.item_gap

    def _skills(self, resume: Resume) -> None:
        if not resume.skills:
            return

        groups: dict[str | None, list[str]] = {}
        for skill in resume.skills:
            name = f"{skill.name} ({skill.level})" if skill.level else skill.name
            groups.setdefault(skill.category or None, []).append(name)

        theme = self.theme
        size = theme.body_size
        render = self.renderer
        self._section_title(self._titles["skills"], self._line(size))

        labelled = len(groups) > 1 or None not in groups
        for category, names in groups.items():
            label = f"{category or self._titles['other']}:" if labelled else ""
            label_width = render.width(label, size, bold=True) + 6 if label else 0.0

            text = ", ".join(names[:MAX_SKILLS_PER_CATEGORY])
            for i, line in enumerate(render.wrap(text, self.content_width - label_width, size)):
                baseline = self._next_line(size)
                if i == 0 and label:
                    render.draw(self.canvas, label, self.left, baseline, size, theme.primary, True)
                render.draw(
                    self.canvas, line, self.left + label_width, baseline, size, theme.text
                )

        self.y -= theme.section_gap
