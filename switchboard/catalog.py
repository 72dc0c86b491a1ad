"""Built-in agents registered at service startup.

Clients pick one of them via:

- URL path: ``POST /agui/run/{agent_id}``
- header: ``X-Agent-Id: agent_id``
- request body: ``forwardedProps.agentId``
"""

import logging

from switchboard.config import Settings
from switchboard.factory import make_factory
from switchboard.models.agent_spec import AgentSpec, MemoryKind, ModelConfig
from switchboard.registry import AgentRegistry

logger = logging.getLogger(__name__)

DEFAULT_AGENT = AgentSpec(
    id="default",
    display_name="AG-UI Assistant",
    system_prompt=(
        "You are a helpful AI assistant served over the AG-UI protocol.\n"
        "You can help users with a variety of tasks, including weather lookups and calculations.\n"
        "Keep your replies concise and helpful."
    ),
    llm=ModelConfig(
        provider="dashscope",
        model_name="qwen-plus",
        streaming=True,
        extra_options={"enable_thinking": False},
    ),
    tools=frozenset({"get_weather", "calculate"}),
    memory_kind=MemoryKind.in_memory_transcript,
    max_iterations=10,
)

CHAT_AGENT = AgentSpec(
    id="chat",
    display_name="Chat Assistant",
    system_prompt=(
        "You are a friendly conversational assistant.\n"
        "Hold natural conversations and help users with general questions and discussion."
    ),
    llm=ModelConfig(provider="dashscope", model_name="qwen-plus", streaming=True),
    memory_kind=MemoryKind.in_memory_transcript,
    max_iterations=1,
)

CALCULATOR_AGENT = AgentSpec(
    id="calculator",
    display_name="Calculator Agent",
    system_prompt=(
        "You are a math assistant specialized in calculations.\n"
        "Use the calculation tool to perform mathematical operations.\n"
        "Always show your working and explain the result."
    ),
    llm=ModelConfig(provider="dashscope", model_name="qwen-plus", streaming=True),
    tools=frozenset({"calculate"}),
    memory_kind=MemoryKind.in_memory_transcript,
    max_iterations=5,
)

BUILTIN_AGENTS: tuple[AgentSpec, ...] = (DEFAULT_AGENT, CHAT_AGENT, CALCULATOR_AGENT)


def configure_agents(
    registry: AgentRegistry,
    settings: Settings,
    specs: tuple[AgentSpec, ...] = BUILTIN_AGENTS,
) -> dict[str, AgentSpec]:
    """Register a lazy factory for each spec and return the specs by id."""
    for spec in specs:
        registry.register_factory(spec.id, make_factory(spec, settings))

    registered = {spec.id: spec for spec in specs}
    logger.info("Registered agents: %s", ", ".join(registered))
    logger.info("Default agent: %s (override per request via path, %s header or forwardedProps.agentId)",
                settings.default_agent_id, settings.agent_id_header)
    if settings.default_agent_id not in registry:
        logger.warning("Default agent '%s' is not registered; requests without an agent id will fail",
                       settings.default_agent_id)
    return registered
