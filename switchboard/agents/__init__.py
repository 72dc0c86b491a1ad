"""Agent implementations."""

from switchboard.agents.base import BaseAgent
from switchboard.agents.react import ReActAgent

__all__ = ["BaseAgent", "ReActAgent"]
