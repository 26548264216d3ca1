# /assist/workflows/engine.py

"""
Pure form-flow execution engine.

This module drives the conversational application one answer at a time:
- Resolves the cursor (active section, active field) from the application state
- Validates the raw answer against the active field
- Writes the parsed value and advances the cursor only when validation passes
- Marks sections completed and crosses section boundaries in catalog order
- Composes the confirmation, transition and next-question texts

All functions are:
- Pure (the incoming state is never mutated; a new snapshot is returned)
- Deterministic (same input = same output)
- No I/O
- No logging
- Pure business logic only

Flow positions are derived, never stored:
- AwaitingField: the active section has a field at the cursor
- SectionBoundary: the active section is exhausted and more sections remain
- Complete: every section is completed (or the cursor points nowhere)
"""

from typing import Dict, List, Optional, Any, TypedDict

from assist.config import strings
from assist.config.settings import settings
from assist.models.form import (
    ApplicationState,
    ConversationPhase,
    EligibilityInfo,
    FieldValue,
    FormField,
    FormSection,
    UserRole,
)
from assist.workflows.definitions import DELAWARE_ASSIST_SECTIONS, SectionDefinition
from assist.workflows.questions import generate_question_for_field, generate_confirmation_message
from assist.workflows.validator import ValidationResult, validate_field_input


class FlowState(TypedDict):
    """Current position in the flow."""
    current_section: Optional[FormSection]
    current_field: Optional[FormField]
    next_question: Optional[str]
    is_complete: bool


class ProcessResult(TypedDict):
    """Result of processing one user answer."""
    validation: ValidationResult
    updated_state: ApplicationState
    response_message: str
    next_question: Optional[str]


class RoleAlreadySelectedError(ValueError):
    """Raised when a different role is chosen after the role was set."""


def create_application_state(
    user_role: Optional[UserRole] = None,
    catalog: Optional[List[SectionDefinition]] = None
) -> ApplicationState:
    """
    Build a fresh application state from a section catalog.

    Args:
        user_role: The applicant's role, if already chosen
        catalog: Section definitions; defaults to the Delaware ASSIST catalog

    Returns:
        ApplicationState with every field empty and the cursor on the first field
    """
    if catalog is None:
        catalog = DELAWARE_ASSIST_SECTIONS

    sections = [
        FormSection(
            id=section["id"],
            title=section["title"],
            description=section.get("description", ""),
            fields=[FormField(**field) for field in section.get("fields", [])],
        )
        for section in catalog
    ]

    return ApplicationState(
        user_role=user_role,
        current_section_id=sections[0].id if sections else "",
        current_field_index=0,
        sections=sections,
    )


def select_role(state: ApplicationState, user_role: UserRole) -> ApplicationState:
    """Set the applicant's role. Once chosen, the role cannot change."""
    if state.user_role is not None:
        if state.user_role == user_role:
            return state
        raise RoleAlreadySelectedError(
            f"Role is already '{state.user_role.value}' and cannot be changed to '{UserRole(user_role).value}'"
        )
    return state.model_copy(update={"user_role": UserRole(user_role)})


def _section_index(state: ApplicationState, section_id: str) -> Optional[int]:
    for index, section in enumerate(state.sections):
        if section.id == section_id:
            return index
    return None


def _settle_cursor(state: ApplicationState) -> ApplicationState:
    """
    Move the cursor past exhausted sections.

    An exhausted section (including one with no fields) is marked completed and
    the cursor moves to the next section's first field. After the last section
    the cursor is left dangling, which signals overall completion.
    """
    section_idx = _section_index(state, state.current_section_id)

    while section_idx is not None:
        section = state.sections[section_idx]
        if state.current_field_index < len(section.fields):
            return state

        update: Dict[str, Any] = {}
        if not section.completed:
            sections = list(state.sections)
            sections[section_idx] = section.model_copy(update={"completed": True})
            update["sections"] = sections

        next_idx = section_idx + 1
        if next_idx >= len(state.sections):
            return state.model_copy(update=update) if update else state

        update["current_section_id"] = state.sections[next_idx].id
        update["current_field_index"] = 0
        state = state.model_copy(update=update)
        section_idx = next_idx

    return state


def get_current_flow_state(state: ApplicationState) -> FlowState:
    """Resolve the active section, active field and the question to ask."""
    state = _settle_cursor(state)

    section_idx = _section_index(state, state.current_section_id)
    if section_idx is None:
        return {
            "current_section": None,
            "current_field": None,
            "next_question": None,
            "is_complete": True
        }

    section = state.sections[section_idx]
    if state.current_field_index >= len(section.fields):
        # Settled and still exhausted: this is the last section
        return {
            "current_section": section,
            "current_field": None,
            "next_question": strings.APPLICATION_COMPLETE_SHORT,
            "is_complete": True
        }

    field = section.fields[state.current_field_index]
    return {
        "current_section": section,
        "current_field": field,
        "next_question": generate_question_for_field(field, state.user_role),
        "is_complete": False
    }


def _eligibility_for(value: FieldValue) -> Dict[str, EligibilityInfo]:
    """One pending placeholder entry per selected benefit. No determination is made."""
    if isinstance(value, list):
        selected = value
    else:
        selected = [value] if value else []

    return {
        program: EligibilityInfo(program=program, eligible=None, reason=strings.ELIGIBILITY_PENDING)
        for program in selected
    }


def process_user_input(user_input: str, state: ApplicationState) -> ProcessResult:
    """
    Apply one raw user answer to the application.

    This function:
    1. Resolves the active field (a finished application is a no-op)
    2. Validates the answer; on failure keeps the cursor and re-asks the same question
    3. On success writes the value into a new snapshot and advances the cursor
    4. Marks the section completed when its last field is answered
    5. Composes confirmation + transition/completion + next question

    Args:
        user_input: Raw text typed by the user
        state: Current application state (never mutated)

    Returns:
        ProcessResult with the validation outcome and the new state
    """
    state = _settle_cursor(state)
    flow_state = get_current_flow_state(state)
    field = flow_state["current_field"]

    if field is None:
        return {
            "validation": {
                "is_valid": False,
                "error_code": "NO_ACTIVE_FIELD",
                "message": strings.NO_ACTIVE_FIELD,
                "parsed_value": None
            },
            "updated_state": state,
            "response_message": strings.NOTHING_MORE_TO_DO,
            "next_question": None
        }

    validation = validate_field_input(field, user_input)

    if not validation["is_valid"]:
        return {
            "validation": validation,
            "updated_state": state.model_copy(update={
                "last_validation_error": validation["message"],
                "conversation_state": ConversationPhase.AWAITING_INPUT
            }),
            "response_message": validation["message"],
            "next_question": flow_state["next_question"]
        }

    parsed_value = validation["parsed_value"]

    # Copy-on-write: only the answered field and its section are replaced
    section_idx = _section_index(state, state.current_section_id)
    section = state.sections[section_idx]
    fields = list(section.fields)
    fields[state.current_field_index] = field.model_copy(update={"value": parsed_value})

    next_index = state.current_field_index + 1
    section_completed = next_index >= len(fields)

    sections = list(state.sections)
    sections[section_idx] = section.model_copy(update={
        "fields": fields,
        "completed": section.completed or section_completed
    })

    next_section_id = state.current_section_id
    if section_completed and section_idx + 1 < len(sections):
        next_section_id = sections[section_idx + 1].id
        next_index = 0

    update: Dict[str, Any] = {
        "sections": sections,
        "current_section_id": next_section_id,
        "current_field_index": next_index,
        "current_field_id": field.id,
        "last_validation_error": None,
        "conversation_state": ConversationPhase.PROCESSING
    }
    if field.id == settings.benefit_field_id:
        update["eligibility"] = _eligibility_for(parsed_value)

    updated_state = _settle_cursor(state.model_copy(update=update))

    next_flow_state = get_current_flow_state(updated_state)
    response_message = generate_confirmation_message(field, parsed_value)
    next_question = next_flow_state["next_question"]

    if section_completed and not next_flow_state["is_complete"]:
        response_message += "\n\n" + strings.SECTION_TRANSITION.format(
            completed=section.title,
            upcoming=next_flow_state["current_section"].title
        )

    if next_flow_state["is_complete"]:
        response_message += "\n\n" + strings.APPLICATION_COMPLETE
        next_question = None

    return {
        "validation": validation,
        "updated_state": updated_state,
        "response_message": response_message,
        "next_question": next_question
    }


def initialize_flow(state: ApplicationState) -> str:
    """Return the first question to ask for `state`."""
    flow_state = get_current_flow_state(state)
    return flow_state["next_question"] or strings.READY_TO_START


def get_progress_percentage(state: ApplicationState) -> int:
    total_sections = len(state.sections)
    if total_sections == 0:
        return 0
    completed_sections = sum(1 for section in state.sections if section.completed)
    return round(completed_sections / total_sections * 100)


def is_application_complete(state: ApplicationState) -> bool:
    return all(section.completed for section in state.sections)


def get_selected_benefits(state: ApplicationState) -> List[EligibilityInfo]:
    return list(state.eligibility.values())


def get_field_values(state: ApplicationState) -> Dict[str, FieldValue]:
    """Flatten every field's current value, keyed by field id."""
    return {
        field.id: field.value
        for section in state.sections
        for field in section.fields
    }
