"""Tests for settings, agent building and the built-in catalog."""

import pytest
from langchain_openai import ChatOpenAI

from switchboard.agents.react import ReActAgent
from switchboard.catalog import (
    BUILTIN_AGENTS,
    CALCULATOR_AGENT,
    CHAT_AGENT,
    DEFAULT_AGENT,
    configure_agents,
)
from switchboard.config import Settings
from switchboard.errors import (
    ConfigurationError,
    ConstructionError,
    DuplicateIdError,
    MissingCredentialError,
)
from switchboard.factory import (
    PROVIDER_BASE_URLS,
    build_agent,
    build_chat_model,
    make_factory,
    require_api_key,
)
from switchboard.models.agent_spec import ModelConfig
from switchboard.registry import AgentRegistry

TEST_KEY_ENV = "SWITCHBOARD_TEST_API_KEY"


@pytest.fixture
def settings(monkeypatch) -> Settings:
    monkeypatch.delenv(TEST_KEY_ENV, raising=False)
    return Settings(api_key_env=TEST_KEY_ENV)


class TestSettings:
    """Test environment-driven configuration."""

    def test_defaults(self, monkeypatch):
        for var in ["DEFAULT_AGENT_ID", "API_KEY_ENV", "AGENT_ID_HEADER",
                    "MODEL_PROVIDER_BASE_URL", "ALLOW_AGENT_OVERWRITE"]:
            monkeypatch.delenv(var, raising=False)

        settings = Settings.from_env()

        assert settings.default_agent_id == "default"
        assert settings.api_key_env == "DASHSCOPE_API_KEY"
        assert settings.agent_id_header == "X-Agent-Id"
        assert settings.model_base_url is None
        assert settings.allow_agent_overwrite is False

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_AGENT_ID", "chat")
        monkeypatch.setenv("ALLOW_AGENT_OVERWRITE", "TRUE")
        monkeypatch.setenv("MODEL_PROVIDER_BASE_URL", "http://localhost:9000/v1")

        settings = Settings.from_env()

        assert settings.default_agent_id == "chat"
        assert settings.allow_agent_overwrite is True
        assert settings.model_base_url == "http://localhost:9000/v1"

    def test_blank_default_agent_is_configuration_error(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_AGENT_ID", "   ")
        with pytest.raises(ConfigurationError):
            Settings.from_env()


class TestRequireApiKey:
    """Test the credential check."""

    def test_missing_key(self, settings):
        with pytest.raises(MissingCredentialError) as exc_info:
            require_api_key(settings)
        assert exc_info.value.env_var == TEST_KEY_ENV
        assert TEST_KEY_ENV in str(exc_info.value)

    def test_blank_key(self, settings, monkeypatch):
        monkeypatch.setenv(TEST_KEY_ENV, "  ")
        with pytest.raises(MissingCredentialError):
            require_api_key(settings)

    def test_present_key(self, settings, monkeypatch):
        monkeypatch.setenv(TEST_KEY_ENV, "sk-test")
        assert require_api_key(settings) == "sk-test"


class TestBuildChatModel:
    """Test model client construction (no network calls)."""

    def test_dashscope_endpoint(self):
        model = build_chat_model(DEFAULT_AGENT.llm, "sk-test")

        assert isinstance(model, ChatOpenAI)
        assert model.model_name == "qwen-plus"
        assert model.streaming is True
        assert model.openai_api_base == PROVIDER_BASE_URLS["dashscope"]
        assert model.extra_body == {"enable_thinking": False}

    def test_base_url_precedence(self):
        config = ModelConfig(base_url="http://spec-level/v1")
        assert build_chat_model(config, "sk-test", "http://override/v1").openai_api_base == "http://spec-level/v1"
        assert build_chat_model(ModelConfig(), "sk-test", "http://override/v1").openai_api_base == "http://override/v1"

    def test_temperature_passed_through(self):
        model = build_chat_model(ModelConfig(provider="openai", model_name="gpt-4o-mini", temperature=0.2), "sk-test")
        assert model.temperature == 0.2
        assert model.model_name == "gpt-4o-mini"

    def test_unsupported_provider(self):
        with pytest.raises(ConfigurationError):
            build_chat_model(ModelConfig(provider="nope"), "sk-test")


class TestBuildAgent:
    """Test building agents from the built-in specs."""

    @pytest.mark.parametrize("spec", BUILTIN_AGENTS, ids=lambda s: s.id)
    def test_builds_builtin_specs(self, spec):
        agent = build_agent(spec, "sk-test")

        assert isinstance(agent, ReActAgent)
        assert agent.agent_id == spec.id
        assert agent.name == spec.display_name
        assert agent.max_iterations == spec.max_iterations
        assert agent.memory is not None

    def test_builtin_tool_sets(self):
        assert DEFAULT_AGENT.tools == {"get_weather", "calculate"}
        assert CHAT_AGENT.tools == frozenset()
        assert CALCULATOR_AGENT.tools == {"calculate"}

    def test_factory_fails_without_key_then_recovers(self, settings, monkeypatch):
        """A missing key fails construction; once the key is set, get succeeds."""
        registry = AgentRegistry()
        registry.register_factory(CHAT_AGENT.id, make_factory(CHAT_AGENT, settings))

        with pytest.raises(ConstructionError) as exc_info:
            registry.get("chat")
        assert isinstance(exc_info.value.__cause__, MissingCredentialError)
        assert registry.is_instantiated("chat") is False

        monkeypatch.setenv(TEST_KEY_ENV, "sk-test")
        agent = registry.get("chat")
        assert isinstance(agent, ReActAgent)
        assert registry.get("chat") is agent

    def test_each_factory_call_builds_new_agent(self, settings, monkeypatch):
        monkeypatch.setenv(TEST_KEY_ENV, "sk-test")
        factory = make_factory(CALCULATOR_AGENT, settings)
        assert factory() is not factory()


class TestConfigureAgents:
    """Test registration of the built-in catalog."""

    def test_registers_builtins_lazily(self, settings):
        registry = AgentRegistry()

        specs = configure_agents(registry, settings)

        assert registry.list_ids() == ["default", "chat", "calculator"]
        assert list(specs) == ["default", "chat", "calculator"]
        assert not any(registry.is_instantiated(agent_id) for agent_id in registry.list_ids())

    def test_second_configuration_is_duplicate(self, settings):
        registry = AgentRegistry()
        configure_agents(registry, settings)
        with pytest.raises(DuplicateIdError):
            configure_agents(registry, settings)
