# /assist/models/form.py

from enum import Enum
from typing import Optional, List, Dict, Union
from pydantic import BaseModel, Field, ConfigDict, model_validator

# This file defines the application's form models. They are frozen: every change
# made by the flow engine produces a new copy, so earlier snapshots stay intact.

FieldValue = Union[None, str, int, float, List[str]]


class FieldType(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    SELECT = "select"
    RADIO = "radio"
    CHECKBOX = "checkbox"


class UserRole(str, Enum):
    SELF = "self"
    ON_BEHALF_OF_PARENT = "on-behalf-of-parent"


class ConversationPhase(str, Enum):
    AWAITING_INPUT = "awaiting_input"
    VALIDATING = "validating"
    PROCESSING = "processing"


class FormField(BaseModel):
    """One elicited, typed datum in the application."""
    id: str = Field(..., description="Stable field identifier")
    label: str = Field(..., description="Display label")
    type: FieldType = Field(..., description="Field type tag")
    value: FieldValue = Field(default=None, description="Current value, None until answered")
    options: Optional[List[str]] = Field(default=None, description="Allowed options for select/radio/checkbox")
    required: bool = Field(default=True, description="Whether an empty answer is rejected")

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def value_matches_type(self):
        """Rejects values whose shape doesn't fit the field's type tag."""
        value = self.value
        if value is None:
            return self

        if self.type == FieldType.CHECKBOX:
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ValueError(f"Field '{self.id}' expects a list of options")
            unknown = [v for v in value if v not in (self.options or [])]
            if unknown:
                raise ValueError(f"Field '{self.id}' has values outside its options: {unknown}")
        elif self.type in (FieldType.SELECT, FieldType.RADIO):
            if not isinstance(value, str):
                raise ValueError(f"Field '{self.id}' expects a single option")
            if value and value not in (self.options or []):
                raise ValueError(f"Field '{self.id}' value '{value}' is not one of its options")
        elif self.type == FieldType.NUMBER:
            # "" marks a skipped optional answer
            if isinstance(value, list) or (isinstance(value, str) and value):
                raise ValueError(f"Field '{self.id}' expects a number")
        elif not isinstance(value, str):
            raise ValueError(f"Field '{self.id}' expects a text value")
        return self


class FormSection(BaseModel):
    """Ordered group of fields on one topic."""
    id: str
    title: str
    description: str = ""
    fields: List[FormField] = Field(default_factory=list)
    completed: bool = False

    model_config = ConfigDict(frozen=True)


class EligibilityInfo(BaseModel):
    """Placeholder eligibility record; `eligible` is None while unknown."""
    program: str
    eligible: Optional[bool] = None
    reason: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class ApplicationState(BaseModel):
    """
    The whole session snapshot.

    This is the single source of truth for field values, completion flags and
    the cursor. Flow positions and eligibility lists are derived from it.
    """
    user_role: Optional[UserRole] = Field(default=None, description="Chosen once, never changed")
    current_section_id: str = Field(..., description="Active section identifier")
    current_field_index: int = Field(default=0, ge=0, description="Active field index within the section")
    current_field_id: Optional[str] = Field(default=None, description="Most recently completed field")
    conversation_state: ConversationPhase = Field(default=ConversationPhase.AWAITING_INPUT)
    last_validation_error: Optional[str] = Field(default=None)
    sections: List[FormSection] = Field(default_factory=list)
    eligibility: Dict[str, EligibilityInfo] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)
