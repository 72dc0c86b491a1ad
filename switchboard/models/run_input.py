"""Request body of the AG-UI run endpoint.

Field names are camelCase on the wire (``threadId``, ``forwardedProps``)
and snake_case in Python.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from switchboard.utils.identifiers import generate_run_id, generate_thread_id

# key inside forwardedProps that names the agent to run
BODY_AGENT_ID_KEY = "agentId"


class Message(BaseModel):
    """One conversation message as sent by the client."""

    model_config = {"extra": "ignore"}

    id: str | None = None
    role: Literal["user", "assistant", "system", "developer", "tool"]
    content: str | None = None


class RunAgentInput(BaseModel):
    """Input for a single agent run."""

    model_config = {
        "extra": "ignore",
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    thread_id: str = Field(default_factory=generate_thread_id)
    run_id: str = Field(default_factory=generate_run_id)
    messages: list[Message] = Field(default_factory=list)
    state: Any = None
    forwarded_props: dict[str, Any] = Field(default_factory=dict)

    def body_agent_id(self) -> str | None:
        """Agent id carried in ``forwardedProps.agentId``, if it is a string."""
        value = self.forwarded_props.get(BODY_AGENT_ID_KEY)
        return value if isinstance(value, str) else None
