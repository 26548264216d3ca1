# /assist/services/session_service.py

import asyncio
import logging
import time
import uuid
from datetime import date
from pathlib import Path
from typing import List, Optional
import structlog

from assist.config.settings import settings
from assist.models.conversation import ChatMessage
from assist.models.document import ApplicationDocument
from assist.models.form import ApplicationState, ConversationPhase, EligibilityInfo, UserRole
from assist.services.export_service import ExportService, export_service
from assist.utils.logging import setup_logging
from assist.utils.metrics import (
    answers_counter,
    sections_completed_counter,
    applications_completed_counter,
    reply_time_histogram,
)
from assist.workflows.definitions import SectionDefinition
from assist.workflows.engine import (
    ProcessResult,
    create_application_state,
    get_current_flow_state,
    get_progress_percentage,
    get_selected_benefits,
    initialize_flow,
    is_application_complete,
    process_user_input,
    select_role,
)
from assist.workflows.questions import generate_welcome_message

logger = logging.getLogger(__name__)

# This service is the boundary a chat UI talks to. One instance holds one
# applicant's session: the current snapshot, every earlier snapshot (for undo)
# and the chat transcript. Nothing here is shared between sessions.


class RoleNotSelectedError(RuntimeError):
    """Raised when answers arrive before the applicant's role is chosen."""


class ApplicationSession:
    def __init__(
        self,
        catalog: Optional[List[SectionDefinition]] = None,
        response_delay_seconds: Optional[float] = None,
        exporter: Optional[ExportService] = None,
        configure_logging: Optional[bool] = None,
    ):
        if configure_logging is None:
            configure_logging = settings.configure_logging
        if configure_logging:
            setup_logging()

        self.session_id = uuid.uuid4().hex
        self._state = create_application_state(catalog=catalog)
        self._history: List[ApplicationState] = []
        self.messages: List[ChatMessage] = []
        self.response_delay_seconds = (
            settings.response_delay_seconds if response_delay_seconds is None else response_delay_seconds
        )
        self.exporter = exporter or export_service
        logger.info(f"Session {self.session_id} created with {len(self._state.sections)} section(s).")

    @property
    def state(self) -> ApplicationState:
        return self._state

    @property
    def history(self) -> List[ApplicationState]:
        """Earlier snapshots, oldest first."""
        return list(self._history)

    @property
    def is_complete(self) -> bool:
        return is_application_complete(self._state)

    def _record(self, role: str, content: str):
        self.messages.append(ChatMessage(role=role, content=content))

    def choose_role(self, user_role: UserRole) -> str:
        """
        Set the applicant's role and return the opening message, which ends
        with the first question.
        """
        self._state = select_role(self._state, user_role)
        opening = f"{generate_welcome_message(self._state.user_role)} {initialize_flow(self._state)}"
        self._record("assistant", opening)
        logger.info(f"Session {self.session_id} started as '{self._state.user_role.value}'.")
        return opening

    def current_question(self) -> Optional[str]:
        return get_current_flow_state(self._state)["next_question"]

    async def handle_message(self, user_input: str) -> ProcessResult:
        """
        Process one user message and record the assistant's reply.

        While the reply is pending the state is in the VALIDATING phase; the
        engine's result replaces it once the answer has been processed.

        Raises:
            RoleNotSelectedError: if `choose_role` has not been called yet
        """
        if self._state.user_role is None:
            raise RoleNotSelectedError("Choose a role before answering questions")

        start_time = time.perf_counter()
        self._record("user", user_input)

        previous = self._state
        field = get_current_flow_state(previous)["current_field"]
        result: Optional[ProcessResult] = None
        self._state = previous.model_copy(update={"conversation_state": ConversationPhase.VALIDATING})
        try:
            with structlog.contextvars.bound_contextvars(session_id=self.session_id):
                if self.response_delay_seconds > 0:
                    await asyncio.sleep(self.response_delay_seconds)
                result = process_user_input(user_input, previous)
        finally:
            # A cancelled reply leaves the session where it was
            self._state = result["updated_state"] if result else previous

        field_type = field.type.value if field else "none"
        if result["validation"]["is_valid"]:
            self._history.append(previous)
            answers_counter.labels(status="valid", field_type=field_type).inc()
            self._log_progress(previous, self._state)
        else:
            answers_counter.labels(status="invalid", field_type=field_type).inc()
            logger.info(
                f"Session {self.session_id}: answer for '{field.id if field else None}' rejected "
                f"({result['validation']['error_code']})."
            )

        reply = result["response_message"]
        if result["next_question"]:
            reply += "\n\n" + result["next_question"]
        self._record("assistant", reply)

        reply_time_histogram.observe(time.perf_counter() - start_time)
        return result

    def _log_progress(self, before: ApplicationState, after: ApplicationState):
        # Field values are never logged, only identifiers
        logger.info(f"Session {self.session_id}: field '{after.current_field_id}' answered.")
        for old, new in zip(before.sections, after.sections):
            if new.completed and not old.completed:
                sections_completed_counter.labels(section_id=new.id).inc()
                logger.info(f"Session {self.session_id}: section '{new.id}' completed.")
        if is_application_complete(after) and not is_application_complete(before):
            applications_completed_counter.labels(role=after.user_role.value).inc()
            logger.info(f"Session {self.session_id}: application complete.")

    def undo(self) -> ApplicationState:
        """Restore the snapshot taken before the last accepted answer."""
        if not self._history:
            logger.warning(f"Session {self.session_id}: nothing to undo.")
            return self._state
        self._state = self._history.pop()
        logger.info(f"Session {self.session_id}: last answer undone.")
        return self._state

    def progress(self) -> int:
        return get_progress_percentage(self._state)

    def selected_benefits(self) -> List[EligibilityInfo]:
        return get_selected_benefits(self._state)

    def build_document(self, generated_on: Optional[date] = None) -> ApplicationDocument:
        return self.exporter.build_document(self._state, generated_on)

    def export(self, directory: Path, generated_on: Optional[date] = None) -> Path:
        if not self.is_complete:
            logger.warning(f"Session {self.session_id}: exporting an incomplete application.")
        return self.exporter.save(self._state, directory, generated_on)
