"""ReAct agent: a bounded reason/act loop over a langchain chat model.

Each step asks the model for a reply. If the reply requests tool calls the
tools run and their results go back to the model; otherwise the reply is
the answer. After ``max_iterations`` steps the model is asked to answer
with what it has, with tool calling switched off.
"""

from __future__ import annotations

import logging
from typing import Generator, Iterator, Sequence

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import (
    AIMessage,
    BaseMessage,
    HumanMessage,
    SystemMessage,
    ToolMessage,
)
from langchain_core.tools import BaseTool

from switchboard.agents.base import BaseAgent
from switchboard.errors import AgentExecutionError, InvalidRequestError
from switchboard.memory import InMemoryTranscript
from switchboard.models.agent_spec import AgentSpec
from switchboard.models.run_input import Message

logger = logging.getLogger(__name__)

FINAL_ANSWER_INSTRUCTION = (
    "You have reached the maximum number of reasoning steps. "
    "Answer the user now using the information gathered so far."
)


def _to_langchain(message: Message) -> BaseMessage | None:
    """Convert a client message; tool messages from the client are dropped."""
    content = message.content or ""
    if message.role == "user":
        return HumanMessage(content=content)
    if message.role == "assistant":
        return AIMessage(content=content)
    if message.role in ("system", "developer"):
        return SystemMessage(content=content)
    return None


def _text(message: BaseMessage | None) -> str:
    """Plain text of a message whose content may be a list of blocks."""
    if message is None:
        return ""
    content = message.content
    if isinstance(content, str):
        return content
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


def _drain(steps: Generator[str, None, str]) -> str:
    """Run a step generator to completion and return its result."""
    while True:
        try:
            next(steps)
        except StopIteration as stop:
            return stop.value


class ReActAgent(BaseAgent):
    """Conversational agent built from an AgentSpec."""

    def __init__(
        self,
        spec: AgentSpec,
        model: BaseChatModel,
        tools: Sequence[BaseTool] = (),
        memory: InMemoryTranscript | None = None,
    ) -> None:
        """
        Args:
            spec: the configuration this agent was built from
            model: chat model used for every step
            tools: tools the model may call (bound to the model when non-empty)
            memory: transcript kept across requests, or None for stateless
        """
        self.spec = spec
        self.agent_id = spec.id
        self.name = spec.display_name
        self.streaming = spec.llm.streaming
        self.max_iterations = spec.max_iterations
        self.memory = memory

        self._tools = {t.name: t for t in tools}
        if tools:
            self._model = model.bind_tools(list(tools))
            self._final_model = model.bind_tools(list(tools), tool_choice="none")
        else:
            self._model = model
            self._final_model = model

    def call(self, messages: list[Message]) -> str:
        context, turn = self._prepare(messages)
        answer = _drain(self._guarded(self._run(context, stream=False)))
        self._commit(turn, answer)
        return answer

    def stream(self, messages: list[Message]) -> Iterator[str]:
        context, turn = self._prepare(messages)
        return self._stream(context, turn)

    def _stream(self, context: list[BaseMessage], turn: list[BaseMessage]) -> Iterator[str]:
        # remember exactly what the client was sent, tool-step text included
        sent = []
        for delta in self._guarded(self._run(context, stream=True)):
            sent.append(delta)
            yield delta
        self._commit(turn, "".join(sent))

    def _prepare(self, messages: list[Message]) -> tuple[list[BaseMessage], list[BaseMessage]]:
        """Build the model context and pick out the new turn.

        With memory, only the messages after the client's last assistant
        message are new; earlier ones are already in the transcript.
        """
        incoming = [m for m in (_to_langchain(msg) for msg in messages) if m is not None]
        if self.memory is None:
            history: list[BaseMessage] = []
            turn = incoming
        else:
            history = self.memory.snapshot()
            last_reply = max(
                (i for i, m in enumerate(incoming) if isinstance(m, AIMessage)),
                default=-1,
            )
            turn = incoming[last_reply + 1:]

        if not any(isinstance(m, HumanMessage) for m in turn):
            raise InvalidRequestError(self.agent_id, "request carries no new user message")

        context = [SystemMessage(content=self.spec.system_prompt), *history, *turn]
        return context, turn

    def _commit(self, turn: list[BaseMessage], answer: str) -> None:
        if self.memory is not None:
            self.memory.extend([*turn, AIMessage(content=answer)])

    def _guarded(self, steps: Generator[str, None, str]) -> Generator[str, None, str]:
        """Re-raise loop failures as AgentExecutionError."""
        try:
            answer = yield from steps
        except AgentExecutionError:
            raise
        except Exception as exc:
            logger.error("Agent '%s' failed: %s", self.agent_id, exc)
            raise AgentExecutionError(self.agent_id, str(exc)) from exc
        return answer

    def _run(self, context: list[BaseMessage], stream: bool) -> Generator[str, None, str]:
        """The reason/act loop. Yields text deltas, returns the final answer."""
        for iteration in range(1, self.max_iterations + 1):
            response = yield from self._step(self._model, context, stream)
            context.append(response)
            if not response.tool_calls and not response.invalid_tool_calls:
                return _text(response)

            logger.debug(
                "Agent '%s' step %d: %d tool call(s), %d malformed",
                self.agent_id, iteration, len(response.tool_calls), len(response.invalid_tool_calls),
            )
            for tool_call in response.tool_calls:
                context.append(self._run_tool(tool_call))
            for bad_call in response.invalid_tool_calls:
                context.append(self._reject_tool_call(bad_call))

        logger.info(
            "Agent '%s' reached max_iterations=%d, asking for a final answer",
            self.agent_id, self.max_iterations,
        )
        context.append(HumanMessage(content=FINAL_ANSWER_INSTRUCTION))
        response = yield from self._step(self._final_model, context, stream)
        return _text(response)

    def _step(self, model, context: list[BaseMessage], stream: bool) -> Generator[str, None, AIMessage]:
        """One model call. When streaming, yields content deltas as they arrive."""
        if not stream:
            return model.invoke(context)

        aggregate = None
        for chunk in model.stream(context):
            aggregate = chunk if aggregate is None else aggregate + chunk
            delta = _text(chunk)
            if delta:
                yield delta
        if aggregate is None:
            return AIMessage(content="")
        return AIMessage(
            content=aggregate.content,
            tool_calls=aggregate.tool_calls,
            invalid_tool_calls=aggregate.invalid_tool_calls,
        )

    def _run_tool(self, tool_call: dict) -> ToolMessage:
        """Execute one requested tool call; failures go back to the model as text."""
        name = tool_call["name"]
        tool = self._tools.get(name)
        if tool is None:
            content = f"Error: unknown tool '{name}'"
        else:
            try:
                content = str(tool.invoke(tool_call.get("args") or {}))
            except Exception as exc:
                logger.warning("Tool '%s' failed for agent '%s': %s", name, self.agent_id, exc)
                content = f"Error: {exc}"
        return ToolMessage(content=content, tool_call_id=tool_call.get("id") or "", name=name)

    def _reject_tool_call(self, bad_call: dict) -> ToolMessage:
        """Answer a tool call whose arguments could not be parsed."""
        name = bad_call.get("name") or ""
        logger.warning("Agent '%s' produced a malformed call to tool '%s'", self.agent_id, name)
        detail = bad_call.get("error") or "arguments are not a valid JSON object"
        return ToolMessage(
            content=f"Error: malformed call to tool '{name}': {detail}",
            tool_call_id=bad_call.get("id") or "",
            name=name,
            status="error",
        )

    def __repr__(self) -> str:
        return f"ReActAgent(agent_id={self.agent_id!r}, tools={sorted(self._tools)!r})"
