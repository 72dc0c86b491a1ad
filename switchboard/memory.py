"""Conversation memory for agents."""

import threading

from langchain_core.messages import BaseMessage

from switchboard.models.agent_spec import MemoryKind


class InMemoryTranscript:
    """Append-only message history kept for the lifetime of an agent instance.

    Safe to share between request threads. Readers get a copy, so a turn
    that is still running never sees a half-written history.
    """

    def __init__(self) -> None:
        self._messages: list[BaseMessage] = []
        self._lock = threading.Lock()

    def snapshot(self) -> list[BaseMessage]:
        with self._lock:
            return list(self._messages)

    def extend(self, messages: list[BaseMessage]) -> None:
        with self._lock:
            self._messages.extend(messages)

    def clear(self) -> None:
        with self._lock:
            self._messages.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)


def build_memory(kind: MemoryKind) -> InMemoryTranscript | None:
    """Create the memory object for *kind*; ``MemoryKind.none`` gives None."""
    if kind == MemoryKind.in_memory_transcript:
        return InMemoryTranscript()
    return None
