"""Request dispatch: resolve an agent id, fetch the agent, forward the request."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator

from switchboard.agents.base import BaseAgent
from switchboard.models.run_input import Message
from switchboard.registry import AgentRegistry
from switchboard.resolver import AgentResolver

logger = logging.getLogger(__name__)


@dataclass
class AgentRequest:
    """An inbound request: agent-id signals plus the conversation payload."""

    messages: list[Message] = field(default_factory=list)
    path_agent_id: str | None = None
    header_agent_id: str | None = None
    body_agent_id: str | None = None


@dataclass
class AgentResponse:
    """The resolved agent's reply, either complete or as a stream of deltas."""

    agent_id: str
    text: str | None = None
    stream: Iterator[str] | None = None

    def deltas(self) -> Iterator[str]:
        """Iterate reply text regardless of which form the reply took."""
        if self.stream is not None:
            yield from self.stream
        elif self.text:
            yield self.text


class RequestDispatcher:
    """Glue between the HTTP layer, the resolver and the registry."""

    def __init__(self, resolver: AgentResolver, registry: AgentRegistry) -> None:
        self.resolver = resolver
        self.registry = registry

    def select(self, request: AgentRequest) -> tuple[str, BaseAgent]:
        """Resolve the id for *request* and fetch its agent.

        Raises:
            UnknownAgentError: if the resolved id is not registered. There is
                no fallback to the default agent.
            ConstructionError: if the agent had to be built and its factory failed.
        """
        agent_id = self.resolver.resolve_signals(
            path=request.path_agent_id,
            header=request.header_agent_id,
            body=request.body_agent_id,
        )
        logger.debug(
            "Resolved agent '%s' (path=%r header=%r body=%r)",
            agent_id, request.path_agent_id, request.header_agent_id, request.body_agent_id,
        )
        return agent_id, self.registry.get(agent_id)

    def dispatch(self, request: AgentRequest) -> AgentResponse:
        """Forward *request* to its agent.

        Streaming agents return immediately with a lazy stream; the others
        run to completion here and may raise AgentExecutionError. Either kind
        raises InvalidRequestError here for a request it cannot use.
        """
        agent_id, agent = self.select(request)
        if agent.streaming:
            return AgentResponse(agent_id=agent_id, stream=agent.stream(request.messages))
        return AgentResponse(agent_id=agent_id, text=agent.call(request.messages))
