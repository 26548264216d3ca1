# backend/tests/unit/test_export_service.py

import re
import pytest
from datetime import date

from assist.models.document import LineStyle
from assist.models.form import FormField, FieldType, UserRole
from assist.services.export_service import ExportService
from assist.workflows.engine import create_application_state, process_user_input

EXPORT_DATE = date(2026, 10, 19)

# Page objects in the PDF body, not the /Pages tree node
PDF_PAGE_RE = re.compile(rb"/Type\s*/Page(?!s)")


@pytest.fixture
def completed_state(fresh_state, valid_answers):
    state = fresh_state
    for _field_id, text in valid_answers:
        state = process_user_input(text, state)["updated_state"]
    return state


def all_lines(document):
    return [line for page in document.pages for line in page.lines]


class TestBuildDocument:

    def test_title_block(self, completed_state):
        document = ExportService().build_document(completed_state, EXPORT_DATE)
        first_page = document.pages[0].lines

        assert first_page[:2] == ["Delaware Benefits Assistance", "SNAP & WIC Application"]
        assert "Application Date: October 19, 2026" in first_page
        assert "Applicant Type: Self Application" in first_page

    def test_parent_applicant_type(self, parent_state):
        document = ExportService().build_document(parent_state, EXPORT_DATE)
        assert "Applicant Type: Application on Behalf of Parent" in all_lines(document)

    def test_field_values_formatted(self, completed_state):
        lines = all_lines(ExportService().build_document(completed_state, EXPORT_DATE))

        assert "Date of Birth: January 15, 1980" in lines
        assert "Monthly Household Income: $1,234.50" in lines
        assert "Income Sources: Wages, Child Support" in lines
        assert "Household Size: 4" in lines

    def test_sections_in_catalog_order(self, completed_state):
        lines = all_lines(ExportService().build_document(completed_state, EXPORT_DATE))
        positions = [lines.index(section.title) for section in completed_state.sections]
        assert positions == sorted(positions)

    def test_selected_benefits_listed(self, completed_state):
        lines = all_lines(ExportService().build_document(completed_state, EXPORT_DATE))
        heading = lines.index("Selected Benefits")
        assert lines[heading + 2:heading + 4] == [
            "• Food Assistance (SNAP)",
            "• Special Supplemental Nutrition (WIC)",
        ]

    def test_no_benefits_heading_without_selection(self, fresh_state):
        lines = all_lines(ExportService().build_document(fresh_state, EXPORT_DATE))
        assert "Selected Benefits" not in lines

    def test_unanswered_fields(self, fresh_state):
        lines = all_lines(ExportService().build_document(fresh_state, EXPORT_DATE))
        assert "First Name: Not provided" in lines

    def test_lines_carry_styles(self, completed_state):
        page = ExportService().build_document(completed_state, EXPORT_DATE).pages[0]

        assert len(page.styles) == len(page.lines)
        assert page.styles[:2] == [LineStyle.TITLE, LineStyle.SUBTITLE]
        heading = page.lines.index(completed_state.sections[0].title)
        assert page.styles[heading] == LineStyle.HEADING
        assert page.styles[heading + 1] == LineStyle.DIVIDER
        assert page.styles[heading + 2] == LineStyle.FIELD

    def test_footer_on_last_page(self, completed_state):
        document = ExportService().build_document(completed_state, EXPORT_DATE)
        last_page_text = " ".join(document.pages[-1].lines)
        assert "This is an unofficial copy for your records." in last_page_text


class TestPagination:

    def test_pages_respect_line_limit(self, completed_state):
        service = ExportService(lines_per_page=12, line_width=60)
        document = service.build_document(completed_state, EXPORT_DATE)

        assert document.page_count > 1
        assert all(len(page.lines) <= 12 for page in document.pages)
        assert [page.number for page in document.pages] == list(range(1, document.page_count + 1))

    def test_section_heading_kept_with_first_field(self, completed_state):
        service = ExportService(lines_per_page=12, line_width=60)
        document = service.build_document(completed_state, EXPORT_DATE)
        titles = {section.title for section in completed_state.sections}

        for page in document.pages:
            if page.lines and page.lines[-1] in titles:
                pytest.fail(f"Section heading '{page.lines[-1]}' left alone at the bottom of page {page.number}")

    def test_long_values_wrap(self):
        catalog = [{
            "id": "notes",
            "title": "Notes",
            "fields": [{"id": "notes", "label": "Notes", "type": "text", "required": False}],
        }]
        state = create_application_state(UserRole.SELF, catalog=catalog)
        state = process_user_input("word " * 19 + "end", state)["updated_state"]

        service = ExportService(lines_per_page=20, line_width=40)
        lines = all_lines(service.build_document(state, EXPORT_DATE))
        assert all(len(line) <= 40 for line in lines)


class TestRenderAndSave:

    def test_render_text_numbers_pages(self, completed_state):
        service = ExportService(lines_per_page=12, line_width=60)
        document = service.build_document(completed_state, EXPORT_DATE)
        text = service.render_text(document)

        assert f"Page 1 of {document.page_count}" in text
        assert text.count("\f") == document.page_count - 1

    def test_save_writes_dated_pdf(self, completed_state, tmp_path):
        service = ExportService(lines_per_page=12, line_width=60)
        path = service.save(completed_state, tmp_path, EXPORT_DATE)

        assert path.name == "Delaware_Benefits_Application_2026-10-19.pdf"
        content = path.read_bytes()
        assert content.startswith(b"%PDF-")
        expected_pages = service.build_document(completed_state, EXPORT_DATE).page_count
        assert expected_pages > 1
        assert len(PDF_PAGE_RE.findall(content)) == expected_pages

    def test_pdf_has_one_page_per_document_page(self, completed_state):
        service = ExportService(lines_per_page=12, line_width=60)
        document = service.build_document(completed_state, EXPORT_DATE)
        assert service.build_pdf(document).page_no() == document.page_count

    def test_bullets_survive_core_font_encoding(self, completed_state):
        service = ExportService()
        document = service.build_document(completed_state, EXPORT_DATE)
        assert service.render_pdf(document).startswith(b"%PDF-")

    def test_save_propagates_write_errors(self, completed_state, tmp_path, mocker):
        mocker.patch("assist.services.export_service.Path.write_bytes", side_effect=PermissionError("denied"))
        with pytest.raises(PermissionError):
            ExportService().save(completed_state, tmp_path, EXPORT_DATE)


def test_currency_only_for_income_field():
    field = FormField(id="household-size", label="Household Size", type=FieldType.NUMBER, value=4)
    assert ExportService.format_export_value(field) == "4"
    income = FormField(id="monthly-income", label="Monthly Household Income", type=FieldType.NUMBER, value=0)
    assert ExportService.format_export_value(income) == "$0.00"
