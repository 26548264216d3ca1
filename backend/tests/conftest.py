import pytest
from pathlib import Path
from dotenv import load_dotenv

# Load test environment variables FIRST, before any assist imports, so that
# the module-level Settings instance picks them up.
load_dotenv(dotenv_path=Path(__file__).resolve().parent.parent / ".env.test")

from assist.models.form import UserRole  # noqa: E402
from assist.workflows.engine import create_application_state  # noqa: E402

# One valid answer per field of the default catalog, in catalog order
VALID_ANSWERS = [
    ("first-name", "Maria"),
    ("last-name", "Lopez"),
    ("date-of-birth", "01/15/1980"),
    ("marital-status", "married"),
    ("household-size", "4"),
    ("has-dependents", "yes"),
    ("pregnant", "no"),
    ("housing-status", "rent"),
    ("employment-status", "part-time"),
    ("income-sources", "wages and child support"),
    ("monthly-income", "$1,234.50"),
    ("has-disability", "no"),
    ("benefit-types", "snap, wic"),
]


@pytest.fixture
def fresh_state():
    """A new application for someone applying for themselves."""
    return create_application_state(user_role=UserRole.SELF)


@pytest.fixture
def parent_state():
    return create_application_state(user_role=UserRole.ON_BEHALF_OF_PARENT)


@pytest.fixture
def valid_answers():
    return list(VALID_ANSWERS)


@pytest.fixture
def small_catalog():
    """Two tiny sections with an empty section between them."""
    return [
        {
            "id": "first",
            "title": "First Section",
            "fields": [
                {"id": "first-name", "label": "First Name", "type": "text", "required": True},
            ],
        },
        {"id": "empty", "title": "Empty Section", "fields": []},
        {
            "id": "last",
            "title": "Last Section",
            "fields": [
                {"id": "nickname", "label": "Nickname", "type": "text", "required": False},
                {
                    "id": "benefit-types",
                    "label": "Benefits Requested",
                    "type": "checkbox",
                    "options": ["SNAP", "WIC", "TANF"],
                    "required": True,
                },
            ],
        },
    ]
