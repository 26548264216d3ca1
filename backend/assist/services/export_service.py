# /assist/services/export_service.py

import logging
import textwrap
from datetime import date
from pathlib import Path
from typing import List, Optional, Tuple
from fpdf import FPDF

from assist.config import strings
from assist.config.settings import settings
from assist.models.document import ApplicationDocument, DocumentPage, LineStyle
from assist.models.form import ApplicationState, FormField, UserRole
from assist.utils.metrics import exports_counter
from assist.workflows.questions import format_currency, format_field_value, format_long_date
from assist.workflows.validator import MONTHLY_INCOME_FIELD

logger = logging.getLogger(__name__)

# This service turns a finished application into a paginated document for the
# applicant's records. It only formats already-validated values.

APPLICANT_TYPES = {
    UserRole.SELF: strings.EXPORT_APPLICANT_SELF,
    UserRole.ON_BEHALF_OF_PARENT: strings.EXPORT_APPLICANT_PARENT,
}

BULLET = "•"

StyledLine = Tuple[LineStyle, str]

# PDF geometry, in millimetres on an A4 page
PAGE_FORMAT = "A4"
PAGE_HEIGHT = 297.0
MARGIN = 20.0
FOOTER_SPACE = 12.0

# (family style, size in points) per line style
PDF_FONTS = {
    LineStyle.TITLE: ("B", 20),
    LineStyle.SUBTITLE: ("", 12),
    LineStyle.HEADING: ("B", 14),
    LineStyle.FIELD: ("", 10),
    LineStyle.BODY: ("", 10),
    LineStyle.FOOTER: ("I", 8),
}
PDF_FONT_FAMILY = "helvetica"


def pdf_safe(text: str) -> str:
    """The core PDF fonts only cover latin-1."""
    return text.replace(BULLET, "-").encode("latin-1", "replace").decode("latin-1")


class ExportService:
    def __init__(self, lines_per_page: Optional[int] = None, line_width: Optional[int] = None):
        self.lines_per_page = lines_per_page or settings.export_lines_per_page
        self.line_width = line_width or settings.export_line_width

    @staticmethod
    def format_export_value(field: FormField) -> str:
        """Like the chat confirmation, plus currency formatting for income."""
        if field.id == MONTHLY_INCOME_FIELD and isinstance(field.value, (int, float)) \
                and not isinstance(field.value, bool):
            return format_currency(field.value)
        return format_field_value(field, field.value)

    def _wrap(self, text: str, first_style: LineStyle, indent: str = "") -> List[StyledLine]:
        wrapped = textwrap.wrap(text, width=self.line_width, subsequent_indent=indent) or [""]
        return [(first_style if i == 0 else LineStyle.BODY, line) for i, line in enumerate(wrapped)]

    def _build_blocks(self, state: ApplicationState, generated_on: date) -> List[List[StyledLine]]:
        """
        Groups the document into blocks that are kept on one page when they fit.
        A section heading always travels with its first field.
        """
        blank = (LineStyle.BLANK, "")
        divider = (LineStyle.DIVIDER, "-" * self.line_width)
        blocks: List[List[StyledLine]] = [[
            (LineStyle.TITLE, strings.EXPORT_TITLE),
            (LineStyle.SUBTITLE, strings.EXPORT_SUBTITLE),
            blank,
            (LineStyle.FIELD, strings.EXPORT_APPLICATION_DATE.format(
                date=format_long_date(generated_on.isoformat())
            )),
            (LineStyle.FIELD, strings.EXPORT_APPLICANT_TYPE.format(
                applicant_type=APPLICANT_TYPES.get(state.user_role, strings.NOT_PROVIDED)
            )),
            blank,
        ]]

        for section in state.sections:
            heading = [(LineStyle.HEADING, section.title), divider]
            if not section.fields:
                blocks.append(heading + [blank])
                continue
            for position, field in enumerate(section.fields):
                lines = self._wrap(
                    f"{field.label}: {self.format_export_value(field)}", LineStyle.FIELD, indent="    "
                )
                if position == 0:
                    lines = heading + lines
                if position == len(section.fields) - 1:
                    lines = lines + [blank]
                blocks.append(lines)

        benefits = list(state.eligibility.values())
        if benefits:
            blocks.append([
                (LineStyle.HEADING, strings.EXPORT_BENEFITS_HEADING),
                divider,
                (LineStyle.BODY, f"{BULLET} {benefits[0].program}"),
            ])
            for benefit in benefits[1:]:
                blocks.append([(LineStyle.BODY, f"{BULLET} {benefit.program}")])
            blocks.append([blank])

        footer = textwrap.wrap(strings.EXPORT_FOOTER, width=self.line_width)
        blocks.append([(LineStyle.FOOTER, line) for line in footer])
        return blocks

    def _paginate(self, blocks: List[List[StyledLine]]) -> List[DocumentPage]:
        pages: List[List[StyledLine]] = [[]]
        for block in blocks:
            current = pages[-1]
            if current and len(current) + len(block) > self.lines_per_page:
                # Blank lines at a page boundary are dropped
                while current and not current[-1][1]:
                    current.pop()
                pages.append([])
            for style, line in block:
                if len(pages[-1]) >= self.lines_per_page:
                    pages.append([])
                if not pages[-1] and not line:
                    continue
                pages[-1].append((style, line))

        return [
            DocumentPage(
                number=i + 1,
                lines=[line for _style, line in styled],
                styles=[style for style, _line in styled],
            )
            for i, styled in enumerate(pages)
        ]

    def build_document(self, state: ApplicationState, generated_on: Optional[date] = None) -> ApplicationDocument:
        """
        Build the paginated application document.

        Args:
            state: The application state to export (normally a completed one)
            generated_on: The application date to print; defaults to today

        Returns:
            ApplicationDocument whose pages never exceed `lines_per_page` lines
        """
        generated_on = generated_on or date.today()
        document = ApplicationDocument(
            title=strings.EXPORT_TITLE,
            subtitle=strings.EXPORT_SUBTITLE,
            generated_on=generated_on,
            pages=self._paginate(self._build_blocks(state, generated_on)),
        )
        logger.info(f"Built application document with {document.page_count} page(s).")
        return document

    def render_text(self, document: ApplicationDocument) -> str:
        """Plain-text rendering; pages are separated by form feeds."""
        rendered_pages = []
        for page in document.pages:
            footer = strings.EXPORT_PAGE_NUMBER.format(
                number=page.number, count=document.page_count
            ).rjust(self.line_width)
            rendered_pages.append("\n".join(page.lines + ["", footer]))
        return "\n\f\n".join(rendered_pages) + "\n"

    def build_pdf(self, document: ApplicationDocument) -> FPDF:
        """Lays out each document page on its own PDF page."""
        pdf = FPDF(orientation="P", unit="mm", format=PAGE_FORMAT)
        pdf.set_auto_page_break(False)
        pdf.set_title(pdf_safe(f"{document.title} - {document.subtitle}"))

        left = MARGIN
        right = pdf.w - MARGIN
        line_height = (PAGE_HEIGHT - 2 * MARGIN - FOOTER_SPACE) / self.lines_per_page

        for page in document.pages:
            pdf.add_page()
            y = MARGIN + line_height
            for style, line in zip(page.styles, page.lines):
                if style == LineStyle.DIVIDER:
                    pdf.set_line_width(0.5)
                    pdf.line(left, y - line_height / 2, right, y - line_height / 2)
                elif style == LineStyle.FIELD and ": " in line:
                    label, _sep, value = line.partition(": ")
                    pdf.set_font(PDF_FONT_FAMILY, "B", 10)
                    label = pdf_safe(f"{label}: ")
                    pdf.text(left, y, label)
                    value_x = left + pdf.get_string_width(label)
                    pdf.set_font(PDF_FONT_FAMILY, "", 10)
                    pdf.text(value_x, y, pdf_safe(value))
                elif style != LineStyle.BLANK:
                    font_style, size = PDF_FONTS[style]
                    pdf.set_font(PDF_FONT_FAMILY, font_style, size)
                    pdf.text(left, y, pdf_safe(line))
                y += line_height

            page_label = strings.EXPORT_PAGE_NUMBER.format(number=page.number, count=document.page_count)
            pdf.set_font(PDF_FONT_FAMILY, "I", 8)
            pdf.text(right - pdf.get_string_width(page_label), PAGE_HEIGHT - MARGIN, page_label)

        return pdf

    def render_pdf(self, document: ApplicationDocument) -> bytes:
        return bytes(self.build_pdf(document).output())

    def save(self, state: ApplicationState, directory: Path, generated_on: Optional[date] = None) -> Path:
        """Writes the document as a PDF into `directory` and returns its path."""
        document = self.build_document(state, generated_on)
        path = Path(directory) / strings.EXPORT_FILENAME.format(date=document.generated_on.isoformat())
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(self.render_pdf(document))
        except OSError as e:
            exports_counter.labels(status="error").inc()
            logger.error(f"Failed to write application document to {path}: {e}", exc_info=True)
            raise
        exports_counter.labels(status="success").inc()
        logger.info(f"Saved application document to {path} ({document.page_count} page(s)).")
        return path


# Globally accessible instance
export_service = ExportService()
