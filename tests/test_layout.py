"""Tests for the layout engine, driven through offline renders."""

from __future__ import annotations

import pytest

from folio.resume import ResumeGenerator, get_theme, parse_resume
from folio.resume.canvas import CircleOp, LineOp, RectOp, TextOp
from folio.resume.layout import LayoutEngine, date_range
from folio.resume.mixed import MixedScriptRenderer
from folio.resume.script import has_cjk
from folio.resume.themes import theme_names
from folio.shared import PaperSize


def _experience(i: int, lines: int = 4) -> dict:
    sentence = "Maintained services and pipelines across several regions for many teams. "
    return {
        "title": f"Engineer {i}",
        "company": f"Co {i}",
        "startDate": f"{2000 + i}-01",
        "endDate": f"{2001 + i}-01",
        "description": sentence * lines,
        "highlights": [f"Highlight {i}.{n}" for n in range(5)],
        "technologies": ["Python", "Go"],
    }


def _page_of(document, text: str) -> int:
    for page in document.pages:
        if text in page.texts():
            return page.number
    raise AssertionError(f"{text!r} not drawn")


class TestDateRange:
    """Tests for date_range."""

    def test_current(self) -> None:
        assert date_range("2020-01", None, True) == "2020-01 - Now"

    def test_closed(self) -> None:
        assert date_range("2018", "2020", False) == "2018 - 2020"

    def test_localized_now(self) -> None:
        assert date_range("2020-01", "2021-01", True, "至今") == "2020-01 - 至今"

    def test_partial(self) -> None:
        assert date_range(None, "2020", False) == "2020"
        assert date_range("2020", None, False) == "2020"
        assert date_range(None, None, False) == ""


class TestScenarios:
    """End-to-end layout scenarios."""

    def test_ana_lee(self, generator: ResumeGenerator, ana_lee: dict) -> None:
        document = generator.render(ana_lee, "modern")
        texts = document.texts()

        assert document.page_count == 1
        assert "Ana Lee" in texts
        assert "Engineer, Acme" in texts
        assert "2020-01 - Now" in texts
        assert "Built X" in texts

    @pytest.mark.parametrize("theme", theme_names())
    def test_minimal_resume_every_theme(self, generator: ResumeGenerator, theme: str) -> None:
        document = generator.render({"name": "X", "email": "x@x.io"}, theme)

        assert document.page_count == 1
        assert document.texts() == ["X", "x@x.io"]

    def test_empty_resume(self, generator: ResumeGenerator) -> None:
        document = generator.render({}, "minimalist")
        assert document.page_count == 1
        assert document.texts() == []

    def test_empty_sections_skipped(self, generator: ResumeGenerator, ana_lee: dict) -> None:
        texts = generator.render(ana_lee, "modern").texts()

        assert "WORK EXPERIENCE" in texts
        for title in ("EDUCATION", "PROJECTS", "SKILLS", "PROFESSIONAL SUMMARY"):
            assert title not in texts

    def test_canonical_section_order(self, generator: ResumeGenerator) -> None:
        resume = {
            "name": "Ana",
            "skills": ["Go"],
            "projects": [{"name": "Folio"}],
            "experience": [{"title": "Engineer", "company": "Acme"}],
            "education": [{"degree": "BSc", "institution": "MIT"}],
            "summary": "Builder.",
        }
        for theme in ("modern", "professional", "chinese"):
            texts = generator.render(resume, theme).texts()
            positions = [
                texts.index(t)
                for t in (
                    "PROFESSIONAL SUMMARY",
                    "EDUCATION",
                    "WORK EXPERIENCE",
                    "PROJECTS",
                    "SKILLS",
                )
            ]
            assert positions == sorted(positions)

    def test_at_most_three_highlights(self, generator: ResumeGenerator) -> None:
        texts = generator.render({"experience": [_experience(1, lines=1)]}).texts()

        assert "Highlight 1.2" in texts
        assert "Highlight 1.3" not in texts
        assert "Technologies: Python, Go" in texts

    def test_skills_grouped_and_capped(self, generator: ResumeGenerator) -> None:
        skills = [{"name": f"Lang{i}", "category": "Languages"} for i in range(10)]
        skills.append({"name": "Docker", "category": "Tools"})
        texts = generator.render({"skills": skills}, "minimalist").texts()

        assert "Languages:" in texts
        assert "Tools:" in texts
        joined = " ".join(texts)
        assert "Lang7" in joined
        assert "Lang8" not in joined

    def test_localized_titles(self, generator: ResumeGenerator) -> None:
        resume = {
            "name": "Ana",
            "languages": ["Chinese"],
            "experience": [{"title": "Engineer", "company": "Acme", "startDate": "2021", "current": True}],
        }
        texts = generator.render(resume, "modern").texts()

        assert "工作经历" in texts
        assert any("至今" in t for t in texts)

    def test_letter_paper(self, offline_config) -> None:
        offline_config.paper_size = PaperSize.LETTER
        document = ResumeGenerator(offline_config).render({"name": "Ana"})
        assert (document.pages[0].width, document.pages[0].height) == (612, 792)


class TestPagination:
    """Cursor and page-break behavior."""

    def test_long_resume_spans_pages(self, generator: ResumeGenerator) -> None:
        resume = {"name": "Ana", "experience": [_experience(i) for i in range(12)]}
        document = generator.render(resume, "professional")
        theme = get_theme("professional")

        assert document.page_count > 1
        for page in document.pages:
            for op in page.ops:
                if isinstance(op, TextOp):
                    assert op.y >= theme.margin

    def test_exact_page_count_for_known_item_heights(self, offline_resolver) -> None:
        theme = get_theme("minimalist")
        engine = LayoutEngine(MixedScriptRenderer(offline_resolver), theme)
        item = theme.line_height(theme.title_size)
        step = item + theme.item_gap

        def fitting(available: float) -> int:
            return int((available - item) // step) + 1

        page_height = engine.top - engine.bottom
        first = fitting(page_height - theme.line_height(theme.section_size) - 6)
        per_page = fitting(page_height)
        count = first + per_page + 1
        resume = parse_resume({"experience": [{"title": f"Item {i}"} for i in range(count)]})

        pages = engine.layout(resume)

        assert len(pages) == 3
        assert pages[0].texts()[-1] == f"Item {first - 1}"
        assert pages[1].texts()[0] == f"Item {first}"
        assert pages[2].texts() == [f"Item {count - 1}"]

    def test_title_line_atomic(self, generator: ResumeGenerator) -> None:
        resume = {"name": "Ana", "experience": [_experience(i) for i in range(12)]}
        document = generator.render(resume, "modern")

        for i in range(12):
            title_page = _page_of(document, f"Engineer {i}, Co {i}")
            assert title_page == _page_of(document, f"{2000 + i}-01 - {2001 + i}-01")

    def test_section_title_kept_with_first_item(self, generator: ResumeGenerator) -> None:
        resume = {
            "name": "Ana",
            "experience": [_experience(i) for i in range(6)],
            "projects": [{"name": f"Project {i}", "description": "x " * 200} for i in range(6)],
        }
        document = generator.render(resume, "modern")

        assert _page_of(document, "PROJECTS") == _page_of(document, "Project 0")
        for page in document.pages:
            texts = page.texts()
            assert texts[-1] not in ("WORK EXPERIENCE", "PROJECTS")

    def test_long_cjk_summary(self, generator: ResumeGenerator) -> None:
        summary = ("负责核心交易系统的架构设计与性能优化，带领团队完成服务拆分。" * 70)[:2000]
        document = generator.render({"name": "李明", "summary": summary}, "modern")
        theme = get_theme("modern")

        assert document.page_count >= 1
        drawn = "".join(t for t in document.texts() if has_cjk(t) and t != "李明")
        assert drawn == summary
        for page in document.pages:
            for op in page.ops:
                if isinstance(op, TextOp):
                    assert op.y >= theme.margin


class TestDecorations:
    """Each theme's decoration variant shows up as draw operations."""

    def _ops(self, generator: ResumeGenerator, theme: str) -> list:
        resume = {
            "name": "Ana",
            "summary": "Builder.",
            "experience": [{"title": "Engineer", "company": "Acme"}],
        }
        return list(generator.render(resume, theme).pages[0].ops)

    def test_timeline_dots(self, generator: ResumeGenerator) -> None:
        assert any(isinstance(op, CircleOp) for op in self._ops(generator, "modern"))

    def test_underline_rules(self, generator: ResumeGenerator) -> None:
        ops = self._ops(generator, "professional")
        assert any(isinstance(op, LineOp) for op in ops)
        assert not any(isinstance(op, CircleOp) for op in ops)

    def test_card_backgrounds(self, generator: ResumeGenerator) -> None:
        theme = get_theme("chinese")
        ops = self._ops(generator, "chinese")
        assert any(isinstance(op, RectOp) and op.fill == theme.light for op in ops)

    def test_minimalist_has_no_shapes(self, generator: ResumeGenerator) -> None:
        ops = self._ops(generator, "minimalist")
        assert all(isinstance(op, TextOp) for op in ops)


def test_engine_used_directly(offline_resolver) -> None:
    engine = LayoutEngine(
        MixedScriptRenderer(offline_resolver),
        get_theme("professional"),
        PaperSize.LETTER,
        titles={
            "summary": "About",
            "experience": "Jobs",
            "projects": "Projects",
            "education": "School",
            "skills": "Skills",
            "technologies": "Stack",
            "now": "present",
            "other": "Other",
            "gpa": "GPA",
        },
    )
    resume = parse_resume({"experience": [{"title": "Dev", "current": True, "startDate": "2022"}]})
    pages = engine.layout(resume)

    texts = pages[0].texts()
    assert "JOBS" in texts
    assert "2022 - present" in texts
    assert engine.layout(parse_resume({}))[0].texts() == []


class TestItemLines:
    """Item title, dates and subtitle stay inside their columns."""

    LONG_TITLE = "Distributed real-time collaborative document editing platform for enterprises"

    def _layout(self, offline_resolver, project: dict):
        engine = LayoutEngine(MixedScriptRenderer(offline_resolver), get_theme("minimalist"))
        pages = engine.layout(parse_resume({"projects": [project]}))
        ops = [op for op in pages[0].ops if isinstance(op, TextOp)]
        return engine, ops

    def test_long_title_wraps_clear_of_dates(self, offline_resolver) -> None:
        project = {"name": self.LONG_TITLE, "startDate": "2020-01", "endDate": "2021-06"}
        engine, ops = self._layout(offline_resolver, project)

        dates = next(op for op in ops if op.text == "2020-01 - 2021-06")
        title = [op for op in ops if op.text in self.LONG_TITLE]

        assert len(title) > 1
        assert " ".join(op.text for op in title) == self.LONG_TITLE
        assert title[0].y == dates.y
        for op in title:
            right_edge = op.x + engine.renderer.width(op.text, op.size, bold=True)
            assert right_edge <= dates.x

    def test_long_subtitle_wraps_inside_margin(self, offline_resolver) -> None:
        project = {
            "name": "Folio",
            "role": "Lead maintainer and release manager for the community edition",
            "url": "https://example.com/folio/community/releases",
        }
        engine, ops = self._layout(offline_resolver, project)
        small = engine.theme.small_size

        subtitle = [op for op in ops if op.size == small]

        assert len(subtitle) > 1
        for op in subtitle:
            assert op.x + engine.renderer.width(op.text, small) <= engine.right + 0.01
