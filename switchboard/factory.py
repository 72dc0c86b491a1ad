"""Turn AgentSpecs into live agents.

``build_agent`` is the pure builder; ``make_factory`` binds a spec to the
settings and returns the zero-argument callable the registry stores.
"""

from __future__ import annotations

import os
from typing import Callable

from langchain_openai import ChatOpenAI

from switchboard.agents.react import ReActAgent
from switchboard.config import Settings
from switchboard.errors import ConfigurationError, MissingCredentialError
from switchboard.memory import build_memory
from switchboard.models.agent_spec import AgentSpec, ModelConfig
from switchboard.tools import resolve_tools

# OpenAI-compatible endpoints per provider; None means the client default
PROVIDER_BASE_URLS: dict[str, str | None] = {
    "dashscope": "https://dashscope.aliyuncs.com/compatible-mode/v1",
    "openai": None,
}


def require_api_key(settings: Settings) -> str:
    """Read the model API key from the environment.

    Raises:
        MissingCredentialError: if the variable is unset or blank.
    """
    api_key = os.getenv(settings.api_key_env, "").strip()
    if not api_key:
        raise MissingCredentialError(settings.api_key_env)
    return api_key


def build_chat_model(config: ModelConfig, api_key: str, base_url_override: str | None = None) -> ChatOpenAI:
    """Create the chat model client described by *config*."""
    provider = config.provider.lower()
    if provider not in PROVIDER_BASE_URLS:
        supported = ", ".join(sorted(PROVIDER_BASE_URLS))
        raise ConfigurationError(f"Unsupported provider: {config.provider}. Supported: {supported}")

    params: dict = {
        "model": config.model_name,
        "api_key": api_key,
        "streaming": config.streaming,
    }
    base_url = config.base_url or base_url_override or PROVIDER_BASE_URLS[provider]
    if base_url:
        params["base_url"] = base_url
    if config.temperature is not None:
        params["temperature"] = config.temperature
    if config.extra_options:
        params["extra_body"] = dict(config.extra_options)
    return ChatOpenAI(**params)


def build_agent(spec: AgentSpec, api_key: str, settings: Settings | None = None) -> ReActAgent:
    """Build a new agent from *spec*."""
    model = build_chat_model(
        spec.llm,
        api_key,
        base_url_override=settings.model_base_url if settings else None,
    )
    return ReActAgent(
        spec=spec,
        model=model,
        tools=resolve_tools(spec.tools),
        memory=build_memory(spec.memory_kind),
    )


def make_factory(spec: AgentSpec, settings: Settings) -> Callable[[], ReActAgent]:
    """Return a zero-argument factory for *spec*.

    The API key is read when the factory runs, so a key supplied after a
    failed build is picked up on the next attempt.
    """

    def factory() -> ReActAgent:
        return build_agent(spec, require_api_key(settings), settings)

    factory.__name__ = f"build_{spec.id}"
    return factory
