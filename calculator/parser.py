"""Recursive descent parser evaluating the expression while it is parsed.

Grammar::

    expr   := term ((PLUS | MINUS) term)*
    term   := factor ((STAR | SLASH) factor)*
    factor := NUMBER | BRACKET_OPEN expr BRACKET_CLOSE | MINUS factor

Binary operators are left-associative, unary minus nests to the right.
No syntax tree is built: every rule returns the value of what it consumed.
"""
from typing import cast

from calculator.errors import DivisionByZero, ExpressionSyntaxError, UnbalancedParentheses, UnexpectedToken
from calculator.tokenizer import Token, Tokenizer, TokenType


class Parser:
    def __init__(self, tokenizer: Tokenizer) -> None:
        self.tokenizer = tokenizer
        self.current_token: Token = tokenizer.next_token()
        self.open_brackets = 0

    @property
    def code(self) -> str:
        return self.tokenizer.code

    def eat(self, token_type: TokenType) -> Token:
        """Consumes the lookahead token if it has the expected type and pulls the next one"""
        token = self.current_token
        if token.type is not token_type:
            raise ExpressionSyntaxError(
                f"expected {token_type}, found {token}",
                code=self.code,
                error_char_idx=token.position,
            )
        self.current_token = self.tokenizer.next_token()
        return token

    def parse(self) -> float:
        result = self._consume_expression()

        if self.current_token.type is not TokenType.EXPR_END:
            raise ExpressionSyntaxError(
                f"unexpected {self.current_token} after the end of expression",
                code=self.code,
                error_char_idx=self.current_token.position,
            )
        # every consumed bracket is closed inside _consume_factor, so this only guards the counter
        if self.open_brackets != 0:
            raise UnbalancedParentheses(code=self.code)

        return result

    def _consume_expression(self) -> float:
        result = self._consume_term()
        while self.current_token.type in (TokenType.PLUS, TokenType.MINUS):
            if self.eat(self.current_token.type).type is TokenType.PLUS:
                result += self._consume_term()
            else:
                result -= self._consume_term()
        return result

    def _consume_term(self) -> float:
        result = self._consume_factor()
        while self.current_token.type in (TokenType.STAR, TokenType.SLASH):
            operator_token = self.eat(self.current_token.type)
            if operator_token.type is TokenType.STAR:
                result *= self._consume_factor()
            else:
                divisor = self._consume_factor()
                if divisor == 0.0:
                    raise DivisionByZero(code=self.code, error_char_idx=operator_token.position)
                result /= divisor
        return result

    def _consume_factor(self) -> float:
        token = self.current_token
        if token.type is TokenType.NUMBER:
            self.eat(TokenType.NUMBER)
            return cast(float, token.value)
        elif token.type is TokenType.BRACKET_OPEN:
            self.open_brackets += 1
            self.eat(TokenType.BRACKET_OPEN)
            result = self._consume_expression()
            if self.current_token.type is TokenType.EXPR_END:
                raise UnbalancedParentheses(code=self.code, error_char_idx=token.position)
            self.eat(TokenType.BRACKET_CLOSE)
            self.open_brackets -= 1
            return result
        elif token.type is TokenType.MINUS:
            self.eat(TokenType.MINUS)
            return -self._consume_factor()
        else:
            raise UnexpectedToken(str(token), code=self.code, error_char_idx=token.position)
