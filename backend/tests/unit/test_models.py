# backend/tests/unit/test_models.py

import logging
import pytest
import structlog
from pydantic import ValidationError

from assist.config.settings import Settings
from assist.models.form import FormField, FieldType, ApplicationState
from assist.utils.logging import setup_logging
from assist.workflows.definitions import DELAWARE_ASSIST_SECTIONS
from assist.workflows.questions import FIELD_QUESTIONS


class TestFormField:

    def test_checkbox_value_must_be_option_list(self):
        with pytest.raises(ValidationError):
            FormField(id="b", label="B", type=FieldType.CHECKBOX, options=["SNAP"], value="SNAP")
        with pytest.raises(ValidationError):
            FormField(id="b", label="B", type=FieldType.CHECKBOX, options=["SNAP"], value=["TANF"])

    def test_select_value_must_be_an_option(self):
        with pytest.raises(ValidationError):
            FormField(id="m", label="M", type=FieldType.SELECT, options=["Single"], value="Married")
        field = FormField(id="m", label="M", type=FieldType.SELECT, options=["Single"], value="Single")
        assert field.value == "Single"

    def test_number_rejects_text(self):
        with pytest.raises(ValidationError):
            FormField(id="n", label="N", type=FieldType.NUMBER, value="four")
        assert FormField(id="n", label="N", type=FieldType.NUMBER, value=2.5).value == 2.5

    def test_fields_are_frozen(self):
        field = FormField(id="t", label="T", type=FieldType.TEXT)
        with pytest.raises(ValidationError):
            field.value = "changed"

    def test_state_rejects_negative_index(self):
        with pytest.raises(ValidationError):
            ApplicationState(current_section_id="basic-info", current_field_index=-1)


class TestCatalog:

    def test_field_ids_are_unique(self):
        ids = [field["id"] for section in DELAWARE_ASSIST_SECTIONS for field in section["fields"]]
        assert len(ids) == len(set(ids))

    def test_every_field_has_a_tailored_question(self):
        for section in DELAWARE_ASSIST_SECTIONS:
            for field in section["fields"]:
                assert field["id"] in FIELD_QUESTIONS

    def test_choice_fields_have_options(self):
        for section in DELAWARE_ASSIST_SECTIONS:
            assert section["fields"], f"Section {section['id']} has no fields"
            for field in section["fields"]:
                if field["type"] in ("select", "radio", "checkbox"):
                    assert field.get("options")


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("ASSIST_RESPONSE_DELAY_SECONDS", raising=False)
        monkeypatch.delenv("ASSIST_CONFIGURE_LOGGING", raising=False)
        s = Settings(_env_file=None)
        assert s.response_delay_seconds == 0.0
        assert s.benefit_field_id == "benefit-types"
        assert s.configure_logging is False

    def test_environment_prefix(self, monkeypatch):
        monkeypatch.setenv("ASSIST_RESPONSE_DELAY_SECONDS", "0.25")
        monkeypatch.setenv("ASSIST_LOG_LEVEL", "debug")
        s = Settings(_env_file=None)
        assert s.response_delay_seconds == 0.25
        assert s.log_level == "DEBUG"

    def test_negative_delay_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, response_delay_seconds=-1)

    def test_tiny_pages_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, export_lines_per_page=3)


def test_setup_logging_installs_single_structlog_handler():
    setup_logging()
    setup_logging()

    handlers = [
        h for h in logging.getLogger().handlers
        if isinstance(h.formatter, structlog.stdlib.ProcessorFormatter)
    ]
    assert len(handlers) == 1


def test_setup_logging_level_override():
    handler = setup_logging("debug")

    assert handler in logging.getLogger().handlers
    assert logging.getLogger().level == logging.DEBUG
    setup_logging()
    assert handler not in logging.getLogger().handlers
