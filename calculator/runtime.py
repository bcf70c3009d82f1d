import logging
import math

from calculator.errors import CalculatorError, EmptyExpression, NestingTooDeep
from calculator.parser import Parser
from calculator.tokenizer import Tokenizer

logger = logging.getLogger(__name__)


def evaluate(code: str) -> float:
    """Evaluates a single arithmetic expression.

    Each call builds its own tokenizer and parser, so nothing carries over
    between calls. Raises a ``CalculatorError`` subclass on any failure.
    """
    logger.debug("Evaluating %r", code)
    try:
        result = _evaluate(code)
    except CalculatorError as e:
        logger.debug("Evaluation of %r failed: %s", code, type(e).__name__)
        raise
    logger.debug("%r = %r", code, result)
    return result


def _evaluate(code: str) -> float:
    if not code.strip():
        raise EmptyExpression(code=code)
    try:
        return Parser(Tokenizer(code)).parse()
    except RecursionError as e:
        raise NestingTooDeep(code=code) from e


def format_value(value: float) -> str:
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value)


def calculate(code: str) -> str:
    try:
        return f"Result: {format_value(evaluate(code))}"
    except CalculatorError as e:
        return f"Error: {e}"
