import enum
from dataclasses import dataclass
from typing import Optional

from calculator.errors import InvalidCharacter, InvalidNumber
from calculator.utils import PrintableEnum


class TokenType(PrintableEnum):
    NUMBER = enum.auto()
    PLUS = enum.auto()
    MINUS = enum.auto()
    STAR = enum.auto()
    SLASH = enum.auto()
    BRACKET_OPEN = enum.auto()
    BRACKET_CLOSE = enum.auto()
    EXPR_END = enum.auto()


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str
    position: int
    value: Optional[float] = None

    def __str__(self) -> str:
        return f"<{self.type}>{self.lexeme}"


def _is_valid_in_number(s: str) -> bool:
    return "0" <= s <= "9" or s == "."


SINGLE_CHAR_TOKENS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "(": TokenType.BRACKET_OPEN,
    ")": TokenType.BRACKET_CLOSE,
}


class Tokenizer:
    """Scans the source left to right, producing one token per ``next_token`` call.

    The cursor only moves forward. Once the end of the source is reached every
    further call returns an ``EXPR_END`` token.
    """

    def __init__(self, code: str) -> None:
        self.code = code
        self.pos = 0
        self.current_char: Optional[str] = code[0] if code else None

    def _advance(self) -> None:
        self.pos += 1
        self.current_char = self.code[self.pos] if self.pos < len(self.code) else None

    def _skip_whitespace(self) -> None:
        while self.current_char is not None and self.current_char.isspace():
            self._advance()

    def _number(self) -> Token:
        start_idx = self.pos
        while self.current_char is not None and _is_valid_in_number(self.current_char):
            self._advance()

        lexeme = self.code[start_idx : self.pos]
        if not lexeme or lexeme == "." or lexeme.count(".") > 1:
            raise InvalidNumber(lexeme, code=self.code, error_char_idx=start_idx)
        try:
            value = float(lexeme)
        except ValueError as e:
            raise InvalidNumber(lexeme, code=self.code, error_char_idx=start_idx) from e
        return Token(type=TokenType.NUMBER, lexeme=lexeme, position=start_idx, value=value)

    def next_token(self) -> Token:
        self._skip_whitespace()

        if self.current_char is None:
            return Token(type=TokenType.EXPR_END, lexeme="", position=self.pos)

        if _is_valid_in_number(self.current_char):
            return self._number()

        token_type = SINGLE_CHAR_TOKENS.get(self.current_char)
        if token_type is None:
            raise InvalidCharacter(self.current_char, self.pos, code=self.code)
        token = Token(type=token_type, lexeme=self.current_char, position=self.pos)
        self._advance()
        return token


def tokenize(code: str) -> list[Token]:
    tokenizer = Tokenizer(code)
    tokens: list[Token] = []
    while True:
        token = tokenizer.next_token()
        tokens.append(token)
        if token.type is TokenType.EXPR_END:
            return tokens
