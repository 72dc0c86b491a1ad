"""Agent resolution: pick one agent id from the signals a request carries.

Precedence, highest first:

1. path segment (``POST /agui/run/{agent_id}``)
2. header (``X-Agent-Id``)
3. body field (``forwardedProps.agentId``)
4. the configured default

Resolution is a pure string decision. Whether the chosen id is registered
is the dispatcher's concern.
"""

from dataclasses import dataclass

from switchboard.errors import ConfigurationError


@dataclass(frozen=True)
class ResolutionContext:
    """Per-request agent-id signals plus the service default."""

    path_agent_id: str | None
    header_agent_id: str | None
    body_agent_id: str | None
    configured_default_id: str

    def candidates(self) -> tuple[str | None, ...]:
        """Signals in precedence order, default last."""
        return (
            self.path_agent_id,
            self.header_agent_id,
            self.body_agent_id,
            self.configured_default_id,
        )


def _present(value: str | None) -> str | None:
    """Normalize a signal. Only None and "" are absent.

    Surrounding whitespace is dropped, but a whitespace-only value is kept
    as-is so it fails lookup instead of falling through to a lower signal.
    """
    if value is None or value == "":
        return None
    return value.strip() or value


class AgentResolver:
    """Resolves agent ids against a fixed, validated default."""

    def __init__(self, default_agent_id: str) -> None:
        default = default_agent_id.strip() if isinstance(default_agent_id, str) else ""
        if not default:
            raise ConfigurationError("default agent id must be a non-empty string")
        self.default_agent_id = default

    def context(
        self,
        path: str | None = None,
        header: str | None = None,
        body: str | None = None,
    ) -> ResolutionContext:
        """Build a ResolutionContext carrying this resolver's default."""
        return ResolutionContext(
            path_agent_id=path,
            header_agent_id=header,
            body_agent_id=body,
            configured_default_id=self.default_agent_id,
        )

    @staticmethod
    def resolve(ctx: ResolutionContext) -> str:
        """Return the highest-precedence present signal."""
        for candidate in ctx.candidates():
            chosen = _present(candidate)
            if chosen is not None:
                return chosen
        # only reachable if a context was built by hand with a blank default
        raise ConfigurationError("resolution context has no usable default agent id")

    def resolve_signals(
        self,
        path: str | None = None,
        header: str | None = None,
        body: str | None = None,
    ) -> str:
        """Shortcut for ``resolve(context(...))``."""
        return self.resolve(self.context(path=path, header=header, body=body))
