"""Tests for the example tools and the tool catalog."""

import pytest

from switchboard.errors import ConfigurationError
from switchboard.tools import TOOL_CATALOG, calculate, evaluate_expression, get_weather, resolve_tools


class TestCalculate:
    """Test the arithmetic tool."""

    @pytest.mark.parametrize(
        "expression,expected",
        [
            ("2 + 3", 5),
            ("(3 + 4) * 2 / 7", 2.0),
            ("-4 ** 2", -16),
            ("17 // 5", 3),
            ("17 % 5", 2),
            ("1.5 * 4", 6.0),
        ],
    )
    def test_evaluates_arithmetic(self, expression, expected):
        assert evaluate_expression(expression) == expected

    def test_tool_formats_result(self):
        assert calculate.invoke({"expression": "(3 + 4) * 2 / 7"}) == "(3 + 4) * 2 / 7 = 2"

    def test_division_by_zero(self):
        assert calculate.invoke({"expression": "1 / 0"}) == "Error: division by zero"

    @pytest.mark.parametrize(
        "expression",
        ["__import__('os').system('ls')", "abs(-1)", "x + 1", "[1, 2]", "True + 1"],
    )
    def test_rejects_non_arithmetic(self, expression):
        assert calculate.invoke({"expression": expression}).startswith("Error:")

    def test_syntax_error(self):
        assert calculate.invoke({"expression": "2 +"}).startswith("Error:")

    def test_exponent_bound(self):
        assert calculate.invoke({"expression": "9 ** 9 ** 9"}).startswith("Error:")


class TestGetWeather:
    """Test the weather tool."""

    def test_known_city(self):
        assert get_weather.invoke({"city": "Beijing"}) == "The weather in Beijing is sunny, 25°C."

    def test_unknown_city_gets_fallback(self):
        assert "Springfield" in get_weather.invoke({"city": "Springfield"})


class TestToolCatalog:
    """Test tool lookup by name."""

    def test_catalog_names(self):
        assert set(TOOL_CATALOG) == {"get_weather", "calculate"}

    def test_resolve_sorted(self):
        tools = resolve_tools({"get_weather", "calculate"})
        assert [t.name for t in tools] == ["calculate", "get_weather"]

    def test_resolve_empty(self):
        assert resolve_tools(frozenset()) == []

    def test_unknown_tool(self):
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_tools(["calculate", "launch_rocket"])
        assert "launch_rocket" in str(exc_info.value)
