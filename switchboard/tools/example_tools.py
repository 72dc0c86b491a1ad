"""
example tools exposed to the built-in agents
"""
import ast
import operator

from langchain_core.tools import tool

_BINARY_OPS = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
    ast.Pow: operator.pow,
}

_UNARY_OPS = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}

# keeps "9 ** 9 ** 9" from hanging a worker thread
MAX_EXPONENT = 100

_WEATHER = {
    "beijing": ("sunny", 25),
    "shanghai": ("cloudy", 22),
    "hangzhou": ("light rain", 20),
    "new york": ("partly cloudy", 18),
    "london": ("overcast", 14),
}


def _evaluate(node: ast.AST) -> float | int:
    if isinstance(node, ast.Expression):
        return _evaluate(node.body)
    if isinstance(node, ast.Constant) and isinstance(node.value, (int, float)) and not isinstance(node.value, bool):
        return node.value
    if isinstance(node, ast.BinOp) and type(node.op) in _BINARY_OPS:
        left = _evaluate(node.left)
        right = _evaluate(node.right)
        if isinstance(node.op, ast.Pow) and abs(right) > MAX_EXPONENT:
            raise ValueError(f"exponent larger than {MAX_EXPONENT}")
        return _BINARY_OPS[type(node.op)](left, right)
    if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY_OPS:
        return _UNARY_OPS[type(node.op)](_evaluate(node.operand))
    raise ValueError(f"unsupported expression element: {type(node).__name__}")


def evaluate_expression(expression: str) -> float | int:
    """Evaluate an arithmetic expression without calling eval().

    Supports numbers, parentheses, unary +/- and the operators
    ``+ - * / // % **``.
    """
    tree = ast.parse(expression.strip(), mode="eval")
    return _evaluate(tree)


@tool
def calculate(expression: str) -> str:
    """Evaluate an arithmetic expression such as "(3 + 4) * 2 / 7".

    Args:
        expression: The expression using numbers, parentheses and + - * / // % **

    Returns:
        The result, or an error description
    """
    try:
        result = evaluate_expression(expression)
    except ZeroDivisionError:
        return "Error: division by zero"
    except (SyntaxError, ValueError) as e:
        return f"Error: {e}"
    if isinstance(result, float) and result.is_integer():
        result = int(result)
    return f"{expression} = {result}"


@tool
def get_weather(city: str) -> str:
    """Get the current weather for a city.

    Args:
        city: City name, e.g. "Beijing"
    """
    condition, temperature = _WEATHER.get(city.strip().lower(), ("sunny", 24))
    return f"The weather in {city} is {condition}, {temperature}°C."
