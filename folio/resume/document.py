"""Turning laid-out pages into a PDF file."""

import io
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from reportlab.pdfgen import canvas

from folio.resume.canvas import CircleOp, LineOp, Page, RectOp, TextOp


CREATOR = "folio"


@dataclass(frozen=True)
class DocumentMetadata:
    title: str = "Resume"
    author: str = ""
    subject: str = "Resume"
    creator: str = CREATOR
    keywords: tuple[str, ...] = ()
    created: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    modified: datetime | None = None

    @classmethod
    def for_resume(cls, name: str, keywords: tuple[str, ...] = ()) -> "DocumentMetadata":
        title = f"{name} - Resume" if name else "Resume"
        return cls(title=title, author=name, subject="Resume", keywords=keywords)


@dataclass(frozen=True)
class Document:
    pages: tuple[Page, ...]
    metadata: DocumentMetadata

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def texts(self) -> list[str]:
        return [text for page in self.pages for text in page.texts()]


class DocumentAssembler:
    """Replays page draw operations onto a reportlab canvas."""

    def assemble(self, pages: tuple[Page, ...], metadata: DocumentMetadata) -> Document:
        return Document(pages=tuple(pages), metadata=metadata)

    def to_bytes(self, document: Document) -> bytes:
        buffer = io.BytesIO()
        first = document.pages[0] if document.pages else None
        pagesize = (first.width, first.height) if first else (595, 842)

        c = canvas.Canvas(buffer, pagesize=pagesize, pageCompression=1)
        meta = document.metadata
        c.setTitle(meta.title)
        c.setAuthor(meta.author)
        c.setSubject(meta.subject)
        c.setCreator(meta.creator)
        c.setProducer(meta.creator)
        if meta.keywords:
            c.setKeywords(", ".join(meta.keywords))
        c.setDateFormatter(lambda *args: self._pdf_date(meta))

        for page in document.pages:
            c.setPageSize((page.width, page.height))
            for op in page.ops:
                self._replay(c, op)
            c.showPage()

        c.save()
        return buffer.getvalue()

    def write(self, document: Document, path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.to_bytes(document))
        return path

    @staticmethod
    def _pdf_date(meta: DocumentMetadata) -> str:
        stamp = meta.modified or meta.created
        return stamp.strftime("D:%Y%m%d%H%M%S+00'00'")

    def _replay(self, c: canvas.Canvas, op) -> None:
        if isinstance(op, TextOp):
            c.setFillColorRGB(*op.color)
            c.setFont(op.font, op.size)
            c.drawString(op.x, op.y, op.text)
        elif isinstance(op, LineOp):
            c.saveState()
            c.setStrokeColorRGB(*op.color)
            c.setStrokeAlpha(op.opacity)
            c.setLineWidth(op.width)
            c.line(op.x1, op.y1, op.x2, op.y2)
            c.restoreState()
        elif isinstance(op, RectOp):
            c.saveState()
            c.setFillColorRGB(*op.fill)
            c.setFillAlpha(op.opacity)
            if op.stroke is not None:
                c.setStrokeColorRGB(*op.stroke)
                c.setLineWidth(op.stroke_width)
            c.rect(op.x, op.y, op.width, op.height, fill=1, stroke=int(op.stroke is not None))
            c.restoreState()
        elif isinstance(op, CircleOp):
            c.saveState()
            c.setFillColorRGB(*op.fill)
            c.setFillAlpha(op.opacity)
            c.circle(op.x, op.y, op.radius, fill=1, stroke=0)
            c.restoreState()
        else:
            raise TypeError(f"Unknown draw operation: {op!r}")
