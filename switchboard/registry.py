"""Agent registry: maps agent ids to lazily built, cached agent instances.

Usage::

    registry = AgentRegistry()
    registry.register_factory("chat", make_factory(CHAT_AGENT, settings))

    agent = registry.get("chat")   # built on first use, reused afterwards

The registry is an ordinary object owned by whoever starts the service, so
tests can create as many independent registries as they like.

Locking: ``_lock`` guards the entry table only. Each entry carries its own
lock that serializes construction for that id, so a slow factory for one
agent never blocks lookups or construction of another.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from switchboard.errors import (
    ConstructionError,
    DuplicateIdError,
    SwitchboardError,
    UnknownAgentError,
)
from switchboard.models.agent_spec import validate_agent_id

if TYPE_CHECKING:
    from switchboard.agents.base import BaseAgent

logger = logging.getLogger(__name__)

AgentFactory = Callable[[], "BaseAgent"]


@dataclass
class _Entry:
    """One registered id: its factory and, once built, its instance."""

    factory: AgentFactory
    lock: threading.Lock = field(default_factory=threading.Lock)
    instance: BaseAgent | None = None


class AgentRegistry:
    """Thread-safe directory of agent factories with singleton-per-id instances."""

    def __init__(self, allow_overwrite: bool = False) -> None:
        """
        Args:
            allow_overwrite: if False (default), registering an id that is
                already present raises DuplicateIdError. If True, the new
                factory replaces the old one and any cached instance is dropped.
        """
        self.allow_overwrite = allow_overwrite
        self._entries: dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def register_factory(
        self,
        agent_id: str,
        factory: AgentFactory,
        replace: bool | None = None,
    ) -> None:
        """Register *factory* under *agent_id*.

        Args:
            agent_id: registry key, see ``validate_agent_id``
            factory: zero-argument callable returning a new agent
            replace: per-call override of ``allow_overwrite``

        Raises:
            InvalidIdError: if the id is malformed.
            DuplicateIdError: if the id is taken and overwrites are rejected.
        """
        validate_agent_id(agent_id)
        if not callable(factory):
            raise TypeError(f"factory for '{agent_id}' must be callable")

        overwrite = self.allow_overwrite if replace is None else replace
        with self._lock:
            existing = self._entries.get(agent_id)
            if existing is not None and not overwrite:
                raise DuplicateIdError(agent_id)
            # a fresh entry means a fresh lock and no cached instance; an
            # overwrite keeps the id's position in registration order
            self._entries[agent_id] = _Entry(factory=factory)

        if existing is not None:
            logger.info("Replaced factory for agent '%s'", agent_id)
        else:
            logger.debug("Registered agent '%s'", agent_id)

    def get(self, agent_id: str) -> BaseAgent:
        """Return the agent for *agent_id*, building it on first use.

        Concurrent first calls for the same id build exactly one instance;
        the others wait for it and receive the same object.

        Raises:
            UnknownAgentError: if nothing is registered under the id.
            ConstructionError: if the factory fails. Nothing is cached, so
                a later call retries the factory.
        """
        entry = self._lookup(agent_id)

        instance = entry.instance
        if instance is not None:
            return instance

        with entry.lock:
            if entry.instance is None:
                logger.info("Building agent '%s'", agent_id)
                try:
                    built = entry.factory()
                except ConstructionError:
                    raise
                except Exception as exc:
                    logger.error("Factory for agent '%s' failed: %s", agent_id, exc)
                    raise ConstructionError(agent_id, exc) from exc
                if built is None:
                    raise ConstructionError(agent_id, SwitchboardError("factory returned None"))
                entry.instance = built
            return entry.instance

    def list_ids(self) -> list[str]:
        """All registered ids in registration order."""
        with self._lock:
            return list(self._entries)

    def remove(self, agent_id: str) -> None:
        """Forget *agent_id* and its instance. Removing an absent id is a no-op."""
        with self._lock:
            removed = self._entries.pop(agent_id, None)
        if removed is not None:
            logger.info("Removed agent '%s'", agent_id)

    def reset(self, agent_id: str) -> bool:
        """Drop the cached instance for *agent_id* but keep its factory.

        The next ``get`` builds a fresh agent with empty memory.

        Returns:
            True if an instance was dropped, False if none had been built.

        Raises:
            UnknownAgentError: if nothing is registered under the id.
        """
        entry = self._lookup(agent_id)
        with entry.lock:
            dropped = entry.instance is not None
            entry.instance = None
        if dropped:
            logger.info("Reset agent '%s'", agent_id)
        return dropped

    def is_instantiated(self, agent_id: str) -> bool:
        """Whether an instance is currently cached for *agent_id*."""
        return self._lookup(agent_id).instance is not None

    def _lookup(self, agent_id: str) -> _Entry:
        with self._lock:
            entry = self._entries.get(agent_id)
            if entry is None:
                raise UnknownAgentError(agent_id, list(self._entries))
            return entry

    def __contains__(self, agent_id: object) -> bool:
        with self._lock:
            return agent_id in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __repr__(self) -> str:
        return f"AgentRegistry(ids={self.list_ids()!r}, allow_overwrite={self.allow_overwrite!r})"
