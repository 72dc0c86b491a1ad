"""Core data models for switchboard."""

from switchboard.models.agent_spec import (
    AgentSpec,
    MemoryKind,
    ModelConfig,
    validate_agent_id,
)
from switchboard.models.events import AguiEvent, EventType
from switchboard.models.run_input import Message, RunAgentInput

__all__ = [
    # Agent specs
    "AgentSpec",
    "MemoryKind",
    "ModelConfig",
    "validate_agent_id",
    # AG-UI wire models
    "AguiEvent",
    "EventType",
    "Message",
    "RunAgentInput",
]
