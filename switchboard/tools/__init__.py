"""Tool catalog: every tool an AgentSpec may name."""

from langchain_core.tools import BaseTool

from switchboard.errors import ConfigurationError
from switchboard.tools.example_tools import calculate, evaluate_expression, get_weather

TOOL_CATALOG: dict[str, BaseTool] = {
    get_weather.name: get_weather,
    calculate.name: calculate,
}


def resolve_tools(names: frozenset[str] | set[str] | list[str]) -> list[BaseTool]:
    """Look up tools by name, sorted by name.

    Raises:
        ConfigurationError: if a name is not in the catalog.
    """
    unknown = sorted(set(names) - set(TOOL_CATALOG))
    if unknown:
        available = ", ".join(sorted(TOOL_CATALOG))
        raise ConfigurationError(f"Unknown tools: {', '.join(unknown)}. Available: {available}.")
    return [TOOL_CATALOG[name] for name in sorted(names)]


__all__ = [
    "TOOL_CATALOG",
    "calculate",
    "evaluate_expression",
    "get_weather",
    "resolve_tools",
]
