"""Service configuration read from the environment.

Variables (a ``.env`` file is honoured by the server entrypoint):

    DEFAULT_AGENT_ID         agent used when a request names none ("default")
    API_KEY_ENV              name of the variable holding the model API key
                             ("DASHSCOPE_API_KEY")
    AGENT_ID_HEADER          request header carrying an agent id ("X-Agent-Id")
    MODEL_PROVIDER_BASE_URL  override for every agent's model endpoint
    ALLOW_AGENT_OVERWRITE    "true" lets re-registration replace an agent
"""

import os

from pydantic import BaseModel, ValidationError, field_validator

from switchboard.errors import ConfigurationError


class Settings(BaseModel):
    """Process-wide configuration, fixed at startup."""

    model_config = {"extra": "forbid", "frozen": True}

    default_agent_id: str = "default"
    api_key_env: str = "DASHSCOPE_API_KEY"
    agent_id_header: str = "X-Agent-Id"
    model_base_url: str | None = None
    allow_agent_overwrite: bool = False

    @field_validator("default_agent_id", "api_key_env", "agent_id_header")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables.

        Raises:
            ConfigurationError: if a variable holds an invalid value.
        """
        values = {
            "default_agent_id": os.getenv("DEFAULT_AGENT_ID", "default"),
            "api_key_env": os.getenv("API_KEY_ENV", "DASHSCOPE_API_KEY"),
            "agent_id_header": os.getenv("AGENT_ID_HEADER", "X-Agent-Id"),
            "model_base_url": os.getenv("MODEL_PROVIDER_BASE_URL") or None,
            "allow_agent_overwrite": os.getenv("ALLOW_AGENT_OVERWRITE", "false").lower() == "true",
        }
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
