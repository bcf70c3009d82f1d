from dataclasses import dataclass, field
from typing import Optional

from calculator.utils import render_error_location


@dataclass
class CalculatorError(Exception):
    """Base for every failure of a single evaluation.

    ``code`` is the evaluated source and ``error_char_idx`` the index of the
    offending character in it, when one can be pointed at.
    """

    code: str = field(default="", kw_only=True)
    error_char_idx: Optional[int] = field(default=None, kw_only=True)

    @property
    def message(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        lines = [self.message]
        if self.code and self.error_char_idx is not None:
            lines.extend(render_error_location(self.code, self.error_char_idx))
        return "\n".join(lines)


@dataclass
class InvalidCharacter(CalculatorError):
    char: str
    position: int

    def __post_init__(self) -> None:
        if self.error_char_idx is None:
            self.error_char_idx = self.position

    @property
    def message(self) -> str:
        return f"Invalid character {self.char!r} at position {self.position}"


@dataclass
class InvalidNumber(CalculatorError):
    lexeme: str

    @property
    def message(self) -> str:
        return f"Invalid number: {self.lexeme!r}"


@dataclass
class ExpressionSyntaxError(CalculatorError):
    description: str

    @property
    def message(self) -> str:
        return f"Syntax error: {self.description}"


@dataclass
class DivisionByZero(CalculatorError):
    @property
    def message(self) -> str:
        return "Division by zero"


@dataclass
class UnbalancedParentheses(CalculatorError):
    @property
    def message(self) -> str:
        return "Unbalanced parentheses"


@dataclass
class EmptyExpression(CalculatorError):
    @property
    def message(self) -> str:
        return "Empty expression"


@dataclass
class UnexpectedToken(CalculatorError):
    token: str

    @property
    def message(self) -> str:
        return f"Unexpected token: {self.token}"


@dataclass
class NestingTooDeep(CalculatorError):
    @property
    def message(self) -> str:
        return "Expression is nested too deeply"
