"""PDF rendering of the record history using ReportLab."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from xml.sax.saxutils import escape

from .export import to_printable_blocks
from .models import Record


def generate_pdf(
    records: Iterable[Record],
    output_path: str | Path,
    *,
    title: str = "Egg Label History",
    author: str = "User",
) -> Path:
    """Generate a PDF file listing the given records.

    Args:
        records: Records to render, in the order they should appear.
        output_path: Where to save the PDF file.
        title: Heading and document title.
        author: Document author metadata.

    Returns:
        Path to the generated PDF file.

    Raises:
        ImportError: If reportlab is not installed.
    """
    try:
        from reportlab.lib import colors
        from reportlab.lib.pagesizes import letter
        from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
        from reportlab.lib.units import mm
        from reportlab.platypus import (
            KeepTogether,
            Paragraph,
            SimpleDocTemplate,
            Spacer,
        )
    except ImportError:
        raise ImportError("reportlab is required: pip install reportlab")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    doc = SimpleDocTemplate(
        str(output_path),
        pagesize=letter,
        leftMargin=20,
        rightMargin=20,
        topMargin=20,
        bottomMargin=20,
        title=title,
        author=author,
        creator="EggLabel",
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        "HistoryTitle",
        parent=styles["Title"],
        fontName="Helvetica-Bold",
        fontSize=18,
        leading=24,
        alignment=0,
    )
    body_style = ParagraphStyle(
        "HistoryBody",
        parent=styles["Normal"],
        fontName="Helvetica",
        fontSize=12,
        leading=15,
        textColor=colors.black,
    )

    elements: list = [Paragraph(escape(title), title_style), Spacer(1, 6 * mm)]

    blocks = to_printable_blocks(records)
    if not blocks:
        elements.append(Paragraph("No eggs decoded yet.", body_style))

    for block in blocks:
        # Trailing blank line becomes vertical space
        paragraphs: list = [
            Paragraph(escape(line), body_style) for line in block.lines if line
        ]
        paragraphs.append(Spacer(1, 20))
        if block.keep_together:
            elements.append(KeepTogether(paragraphs))
        else:
            elements.extend(paragraphs)

    doc.build(elements)
    return output_path
