"""Abstract base class for agents served by the registry.

Every agent implements this interface so the dispatcher can forward
requests to any of them interchangeably.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterator

from switchboard.models.run_input import Message


class BaseAgent(ABC):
    """Common interface for conversational agents.

    Lifecycle:
        1. built once by its registry factory, on the first request for its id
        2. ``call`` or ``stream`` once per request, possibly from several
           threads at the same time
        3. dropped when the registry entry is removed, replaced or reset
    """

    agent_id: str = ""
    name: str = ""
    streaming: bool = False  # the dispatcher uses stream() when True

    @abstractmethod
    def call(self, messages: list[Message]) -> str:
        """Handle one request and return the complete reply text.

        Raises:
            InvalidRequestError: if the request has no new user message.
            AgentExecutionError: if the reason/act loop fails.
        """

    @abstractmethod
    def stream(self, messages: list[Message]) -> Iterator[str]:
        """Handle one request, yielding reply text as it is produced.

        The request is checked before the iterator is returned, so an
        unusable request raises InvalidRequestError here rather than
        mid-stream. Closing the iterator early abandons the turn without
        affecting the agent's availability for later requests.
        """
