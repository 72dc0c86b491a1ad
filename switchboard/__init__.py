"""Switchboard - host several conversational agents behind one service.

Agents are registered as lazy factories in an AgentRegistry; each request
is routed to one of them by the AgentResolver and RequestDispatcher.
"""

from switchboard.config import Settings
from switchboard.dispatcher import AgentRequest, AgentResponse, RequestDispatcher
from switchboard.errors import (
    AgentExecutionError,
    ConfigurationError,
    ConstructionError,
    DuplicateIdError,
    InvalidIdError,
    InvalidRequestError,
    MissingCredentialError,
    SwitchboardError,
    UnknownAgentError,
)
from switchboard.models.agent_spec import AgentSpec, MemoryKind, ModelConfig
from switchboard.registry import AgentFactory, AgentRegistry
from switchboard.resolver import AgentResolver, ResolutionContext

__all__ = [
    # Configuration
    "Settings",
    "AgentSpec",
    "MemoryKind",
    "ModelConfig",
    # Registry and routing
    "AgentFactory",
    "AgentRegistry",
    "AgentResolver",
    "ResolutionContext",
    "AgentRequest",
    "AgentResponse",
    "RequestDispatcher",
    # Errors
    "SwitchboardError",
    "ConfigurationError",
    "MissingCredentialError",
    "InvalidIdError",
    "DuplicateIdError",
    "UnknownAgentError",
    "ConstructionError",
    "AgentExecutionError",
    "InvalidRequestError",
]
