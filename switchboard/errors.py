"""Exception hierarchy for the agent registry, resolver and dispatcher."""


class SwitchboardError(Exception):
    """Base class for every error raised by switchboard."""
    pass


class ConfigurationError(SwitchboardError):
    """Raised when service configuration is invalid at startup."""
    pass


class MissingCredentialError(ConfigurationError):
    """Raised when a required secret is absent from the environment."""

    def __init__(self, env_var: str) -> None:
        self.env_var = env_var
        super().__init__(
            f"{env_var} environment variable is required. "
            "Please set it before starting the application."
        )


class InvalidIdError(SwitchboardError, ValueError):
    """Raised when an agent id is empty or uses characters outside the allowed set."""

    def __init__(self, agent_id: object, reason: str) -> None:
        self.agent_id = agent_id
        super().__init__(f"Invalid agent id {agent_id!r}: {reason}")


class DuplicateIdError(SwitchboardError):
    """Raised when registering an id that is taken and overwrites are rejected."""

    def __init__(self, agent_id: str) -> None:
        self.agent_id = agent_id
        super().__init__(f"Agent '{agent_id}' is already registered.")


class UnknownAgentError(SwitchboardError, LookupError):
    """Raised when no registry entry exists for the requested id."""

    def __init__(self, agent_id: str, available: list[str] | None = None) -> None:
        self.agent_id = agent_id
        self.available = list(available or [])
        listing = ", ".join(self.available) or "(none)"
        super().__init__(f"Unknown agent '{agent_id}'. Available: {listing}.")


class ConstructionError(SwitchboardError):
    """Raised when an agent factory fails. The original exception is the ``__cause__``."""

    def __init__(self, agent_id: str, cause: BaseException) -> None:
        self.agent_id = agent_id
        super().__init__(f"Failed to build agent '{agent_id}': {cause}")


class AgentExecutionError(SwitchboardError):
    """Raised when an agent's reason/act loop fails while handling a request."""

    def __init__(self, agent_id: str, message: str) -> None:
        self.agent_id = agent_id
        super().__init__(f"Agent '{agent_id}' failed: {message}")


class InvalidRequestError(SwitchboardError, ValueError):
    """Raised when a request is unusable as sent, e.g. it has no new user message."""

    def __init__(self, agent_id: str, message: str) -> None:
        self.agent_id = agent_id
        super().__init__(f"Invalid request for agent '{agent_id}': {message}")
