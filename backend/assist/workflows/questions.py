# /assist/workflows/questions.py

"""
Natural-language prompts and confirmations for form fields.

Questions are table-driven by field id with type-based fallbacks. The role only
changes pronouns; it never changes which field is asked or how it is validated.
"""

from datetime import date
from typing import Any, Dict, Optional

from assist.config import strings
from assist.models.form import FormField, FieldType, UserRole

PRONOUNS: Dict[UserRole, Dict[str, str]] = {
    UserRole.SELF: {"pronoun": "your", "subject": "you", "reflexive": "yourself"},
    UserRole.ON_BEHALF_OF_PARENT: {"pronoun": "their", "subject": "they", "reflexive": "themselves"},
}

# Question templates keyed by field id. Placeholders: pronoun, subject,
# reflexive, options.
FIELD_QUESTIONS: Dict[str, str] = {
    "first-name": "What is {pronoun} first name?",
    "last-name": "What is {pronoun} last name?",
    "household-size": "How many people live in {pronoun} household, including {reflexive}?",
    "monthly-income": (
        "What is the total monthly household income? Please include all sources such as wages, "
        "social security, disability benefits, unemployment, and other income."
    ),
    "date-of-birth": "What is {pronoun} date of birth? (You can use formats like 01/15/1980 or January 15, 1980)",
    "marital-status": "What is {pronoun} marital status? Available options: {options}",
    "employment-status": "What is {pronoun} current employment status? You can choose from: {options}",
    "housing-status": "What is {pronoun} current housing status? Options: {options}",
    "has-dependents": "Do {subject} have any dependents? (Yes or No)",
    "has-disability": "Do {subject} or anyone in the household have a disability? (Yes or No)",
    "pregnant": "Is anyone in the household currently pregnant? (Yes or No)",
    "income-sources": (
        "What are {pronoun} sources of income? You can list multiple, separated by commas. "
        "Available options: {options}"
    ),
    "benefit-types": (
        "Which benefits would {subject} like to apply for? You can select multiple by separating "
        "them with commas. Available: {options}"
    ),
}


def _type_fallback(field: FormField) -> str:
    options_text = ", ".join(field.options or [])
    if field.type in (FieldType.SELECT, FieldType.RADIO) and field.options:
        return f"{field.label}? Options: {options_text}"
    if field.type == FieldType.CHECKBOX:
        return f"{field.label}? You can select multiple by separating them with commas: {options_text}"
    return f"{field.label}?"


def generate_question_for_field(field: FormField, user_role: Optional[UserRole]) -> str:
    """Returns the prompt for `field`, phrased for the applicant's role."""
    words = PRONOUNS.get(user_role, PRONOUNS[UserRole.SELF])
    template = FIELD_QUESTIONS.get(field.id)
    if template is None:
        return _type_fallback(field)
    return template.format(options=", ".join(field.options or []), **words)


def format_long_date(iso_value: str) -> str:
    """'1980-01-15' -> 'January 15, 1980'. Unparseable values are returned as-is."""
    try:
        parsed = date.fromisoformat(iso_value)
    except ValueError:
        return iso_value
    return f"{parsed.strftime('%B')} {parsed.day}, {parsed.year}"


def format_currency(amount: float) -> str:
    return f"${amount:,.2f}"


def format_field_value(field: FormField, value: Any) -> str:
    """Formats a parsed value for display."""
    if value is None or value == "" or value == []:
        return strings.NOT_PROVIDED
    if isinstance(value, list):
        return ", ".join(value)
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if field.type == FieldType.DATE and isinstance(value, str):
        return format_long_date(value)
    return str(value)


def generate_confirmation_message(field: FormField, value: Any) -> str:
    return strings.CONFIRMATION.format(label=field.label, value=format_field_value(field, value))


def generate_welcome_message(user_role: UserRole) -> str:
    if user_role == UserRole.ON_BEHALF_OF_PARENT:
        return strings.WELCOME_ON_BEHALF_OF_PARENT
    return strings.WELCOME_SELF
