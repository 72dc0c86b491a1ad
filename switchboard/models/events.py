"""AG-UI events emitted while a run streams back to the client."""

from enum import Enum

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class EventType(str, Enum):
    """Event types used by the run endpoint."""

    run_started = "RUN_STARTED"
    text_message_start = "TEXT_MESSAGE_START"
    text_message_content = "TEXT_MESSAGE_CONTENT"
    text_message_end = "TEXT_MESSAGE_END"
    run_finished = "RUN_FINISHED"
    run_error = "RUN_ERROR"


class AguiEvent(BaseModel):
    """A single server-sent event. Unset fields are left out of the frame."""

    model_config = {
        "extra": "forbid",
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    type: EventType
    thread_id: str | None = None
    run_id: str | None = None
    message_id: str | None = None
    role: str | None = None
    delta: str | None = None
    message: str | None = None
    code: str | None = None

    def encode(self) -> str:
        """Render as an SSE ``data:`` frame."""
        body = self.model_dump_json(by_alias=True, exclude_none=True)
        return f"data: {body}\n\n"
