# /assist/workflows/validator.py

"""
Pure validation functions for form answers.

This module turns the raw text a user typed into a typed field value, or into
an actionable error message explaining what is expected.

All functions are:
- Pure (no side effects)
- Deterministic for a given date (same input = same output)
- Total: every input yields a ValidationResult, nothing is raised to callers
- No logging
- No state mutation
"""

import math
import re
from datetime import date, datetime
from typing import Optional, Any, List, TypedDict
from dateutil import parser as date_parser

from assist.config import strings
from assist.config.settings import settings
from assist.models.form import FormField, FieldType
from assist.workflows.matcher import fuzzy_match_option, closest_option

# Field identities with extra policies
HOUSEHOLD_SIZE_FIELD = "household-size"
MONTHLY_INCOME_FIELD = "monthly-income"
DATE_OF_BIRTH_FIELD = "date-of-birth"

MIN_HOUSEHOLD_SIZE = 1
MAX_HOUSEHOLD_SIZE = 20
MAX_MONTHLY_INCOME = 999_999
MAX_AGE_YEARS = 120

# MM/DD/YYYY or MM-DD-YYYY
MONTH_FIRST_RE = re.compile(r"^([0-9]{1,2})[/\-]([0-9]{1,2})[/\-]([0-9]{4})$")
# YYYY-MM-DD or YYYY/MM/DD
YEAR_FIRST_RE = re.compile(r"^([0-9]{4})[/\-]([0-9]{1,2})[/\-]([0-9]{1,2})$")

# Checkbox answers may be separated by commas, the word "and", or line breaks
SELECTION_SPLIT_RE = re.compile(r",|\band\b|\n")

# ASCII digits only, optional sign and decimal point ("1_0" and "１２" are not numbers)
NUMBER_RE = re.compile(r"^[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)$")

# Two distinct fallbacks for the natural-language parser. A date that comes out
# differently under each one was missing a year, month or day.
DATE_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


class ValidationResult(TypedDict):
    """Result of validating one answer."""
    is_valid: bool
    error_code: Optional[str]
    message: Optional[str]
    parsed_value: Any


class FieldValidationError(ValueError):
    """Raised by the typed parsers; carries a user-facing message and an error code."""

    def __init__(self, message: str, error_code: str):
        super().__init__(message)
        self.message = message
        self.error_code = error_code


def _valid(value: Any) -> ValidationResult:
    return {
        "is_valid": True,
        "error_code": None,
        "message": None,
        "parsed_value": value
    }


def _invalid(error_code: str, message: str) -> ValidationResult:
    return {
        "is_valid": False,
        "error_code": error_code,
        "message": message,
        "parsed_value": None
    }


def empty_value_for(field: FormField) -> Any:
    """The value stored when an optional field is skipped."""
    return [] if field.type == FieldType.CHECKBOX else ""


def validate_field_input(field: FormField, user_input: str) -> ValidationResult:
    """
    Validate a raw answer against a field and convert it to the field's type.

    Args:
        field: The field being answered
        user_input: Raw text typed by the user

    Returns:
        ValidationResult with parsed_value set when is_valid is True
    """
    trimmed = (user_input or "").strip()

    if not trimmed:
        if field.required:
            return _invalid("REQUIRED", strings.REQUIRED_FIELD)
        return _valid(empty_value_for(field))

    try:
        if field.type == FieldType.TEXT:
            return _valid(parse_text(trimmed))
        if field.type == FieldType.NUMBER:
            return _valid(parse_number(trimmed, field.id))
        if field.type == FieldType.DATE:
            return _valid(parse_date_answer(trimmed, field.id))
        if field.type in (FieldType.SELECT, FieldType.RADIO):
            return _valid(parse_single_option(trimmed, field.options))
        if field.type == FieldType.CHECKBOX:
            return _valid(parse_multiple_options(trimmed, field.options))
    except FieldValidationError as e:
        return _invalid(e.error_code, e.message)

    return _invalid("UNKNOWN_FIELD_TYPE", strings.UNKNOWN_FIELD_TYPE)


def parse_text(text: str) -> str:
    if len(text) < 1:
        raise FieldValidationError(strings.TEXT_EMPTY, "TEXT_EMPTY")
    if len(text) > settings.text_max_length:
        raise FieldValidationError(
            strings.TEXT_TOO_LONG.format(max_length=settings.text_max_length),
            "TEXT_TOO_LONG"
        )
    return text


def parse_number(text: str, field_id: str):
    """Parses a real number and applies the field's numeric policy."""
    cleaned = text.replace(",", "")
    if cleaned.startswith("$"):
        cleaned = cleaned[1:].strip()

    if not NUMBER_RE.match(cleaned):
        raise FieldValidationError(strings.INVALID_NUMBER, "INVALID_NUMBER")

    number = float(cleaned)
    if not math.isfinite(number):
        raise FieldValidationError(strings.INVALID_NUMBER, "INVALID_NUMBER")

    if field_id == HOUSEHOLD_SIZE_FIELD:
        if not number.is_integer() or not MIN_HOUSEHOLD_SIZE <= number <= MAX_HOUSEHOLD_SIZE:
            raise FieldValidationError(strings.INVALID_HOUSEHOLD_SIZE, "INVALID_HOUSEHOLD_SIZE")

    if field_id == MONTHLY_INCOME_FIELD:
        if number < 0:
            raise FieldValidationError(strings.NEGATIVE_INCOME, "NEGATIVE_INCOME")
        if number > MAX_MONTHLY_INCOME:
            raise FieldValidationError(strings.UNREALISTIC_INCOME, "UNREALISTIC_INCOME")

    return int(number) if number.is_integer() else number


def _calendar_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        # Day or month out of range, e.g. 02/30
        return None


def parse_date(text: str) -> Optional[date]:
    """
    Parses a date using three strategies, first calendar-consistent hit wins:
    1. MM/DD/YYYY or MM-DD-YYYY
    2. YYYY-MM-DD or YYYY/MM/DD
    3. Natural language ("January 15, 1980")
    """
    month_first = MONTH_FIRST_RE.match(text)
    if month_first:
        month, day, year = (int(part) for part in month_first.groups())
        parsed = _calendar_date(year, month, day)
        if parsed:
            return parsed

    year_first = YEAR_FIRST_RE.match(text)
    if year_first:
        year, month, day = (int(part) for part in year_first.groups())
        parsed = _calendar_date(year, month, day)
        if parsed:
            return parsed

    # Numeric dates that failed the calendar check are not retried as natural
    # language, where "13/01/1980" would be read day-first.
    if month_first or year_first:
        return None

    try:
        first, second = (date_parser.parse(text, default=default).date() for default in DATE_DEFAULTS)
    except (ValueError, OverflowError):
        return None

    # "10:30" or "1980" alone would otherwise be completed from the defaults
    if first != second:
        return None
    return first


def parse_date_answer(text: str, field_id: str, today: Optional[date] = None) -> str:
    """Parses a date answer and returns it normalized to YYYY-MM-DD."""
    parsed = parse_date(text)
    if parsed is None:
        raise FieldValidationError(strings.INVALID_DATE, "INVALID_DATE")

    if field_id == DATE_OF_BIRTH_FIELD:
        today = today or date.today()
        if parsed > today:
            raise FieldValidationError(strings.FUTURE_BIRTH_DATE, "FUTURE_BIRTH_DATE")
        age = today.year - parsed.year
        if age < 0 or age > MAX_AGE_YEARS:
            raise FieldValidationError(strings.UNREALISTIC_BIRTH_DATE, "UNREALISTIC_BIRTH_DATE")

    return parsed.isoformat()


def parse_single_option(text: str, options: Optional[List[str]]) -> str:
    if not options:
        raise FieldValidationError(strings.NO_OPTIONS, "NO_OPTIONS")

    match = fuzzy_match_option(text, options)
    if match is None:
        message = strings.UNRECOGNIZED_OPTION.format(options=", ".join(options))
        suggestion = closest_option(text, options)
        if suggestion:
            message += strings.DID_YOU_MEAN.format(suggestion=suggestion)
        raise FieldValidationError(message, "UNRECOGNIZED_OPTION")
    return match


def parse_multiple_options(text: str, options: Optional[List[str]]) -> List[str]:
    """
    Resolves a list of selections. All-or-nothing: one unrecognized part
    rejects the whole answer.
    """
    if not options:
        raise FieldValidationError(strings.NO_OPTIONS, "NO_OPTIONS")

    parts = [part.strip() for part in SELECTION_SPLIT_RE.split(text)]
    parts = [part for part in parts if part]
    if not parts:
        raise FieldValidationError(strings.NO_SELECTION, "NO_SELECTION")

    matches: List[str] = []
    unmatched: List[str] = []
    for part in parts:
        match = fuzzy_match_option(part, options)
        if match is None:
            unmatched.append(part)
        elif match not in matches:
            matches.append(match)

    if unmatched:
        raise FieldValidationError(
            strings.UNRECOGNIZED_SELECTIONS.format(
                unmatched=", ".join(unmatched),
                options=", ".join(options)
            ),
            "UNRECOGNIZED_SELECTIONS"
        )

    return matches
