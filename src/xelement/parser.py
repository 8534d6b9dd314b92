"""
Parser for element construction expressions.

    element   := '<' NAME attr* '/>'
    attr      := NAME ( '=' value )?
    value     := STRING | '{' literal '}'
    literal   := NUMBER | true | false | null | STRING | element
"""

from __future__ import annotations

from typing import List

from . import ast_nodes
from .errors import ParseError
from .lexer import Lexer, Token

_KEYWORD_LITERALS = {"true": True, "false": False, "null": None}


class Parser:
    def __init__(self, tokens: List[Token]) -> None:
        self.tokens = tokens
        self.position = 0

    @classmethod
    def from_source(cls, source: str) -> "Parser":
        return cls(Lexer(source).tokenize())

    def parse(self) -> ast_nodes.ElementExpr:
        element = self.parse_element()
        if not self.check("EOF"):
            raise self.error("Expected end of input after the element", self.peek())
        return element

    def parse_element(self) -> ast_nodes.ElementExpr:
        start = self.consume("LT")
        name_tok = self.consume("NAME")
        element = ast_nodes.ElementExpr(name=name_tok.value or "", span=self._span(start))
        seen: set[str] = set()
        while self.check("NAME"):
            attr = self.parse_attribute()
            if attr.name in seen:
                raise self.error(
                    f"Attribute '{attr.name}' is given more than once on <{element.name}>",
                    self.tokens[self.position - 1],
                )
            seen.add(attr.name)
            element.attributes.append(attr)
        if self.check("GT"):
            raise self.error(
                f"<{element.name}> must be self-closing ('/>'); child content is not supported",
                self.peek(),
            )
        self.consume("SLASH_GT")
        return element

    def parse_attribute(self) -> ast_nodes.AttributeExpr:
        name_tok = self.consume("NAME")
        span = self._span(name_tok)
        if not self.match("EQ"):
            return ast_nodes.AttributeExpr(
                name=name_tok.value or "",
                value=ast_nodes.Literal(True, span=span),
                span=span,
            )
        if self.check("STRING"):
            tok = self.advance()
            return ast_nodes.AttributeExpr(
                name=name_tok.value or "",
                value=ast_nodes.Literal(tok.value, span=self._span(tok)),
                span=span,
            )
        if self.check("LBRACE"):
            self.advance()
            value = self.parse_literal()
            self.consume("RBRACE")
            return ast_nodes.AttributeExpr(name=name_tok.value or "", value=value, span=span)
        raise self.error(
            f"Expected a quoted string or {{...}} value for attribute '{name_tok.value}'",
            self.peek(),
        )

    def parse_literal(self) -> ast_nodes.AttributeValue:
        token = self.peek()
        if token.type == "LT":
            return self.parse_element()
        if token.type == "STRING":
            self.advance()
            return ast_nodes.Literal(token.value, span=self._span(token))
        if token.type == "NUMBER":
            self.advance()
            text = token.value or ""
            number: int | float = float(text) if "." in text else int(text)
            return ast_nodes.Literal(number, span=self._span(token))
        if token.type == "NAME" and token.value in _KEYWORD_LITERALS:
            self.advance()
            return ast_nodes.Literal(_KEYWORD_LITERALS[token.value], span=self._span(token))
        raise self.error("Expected a number, true, false, null, string or element", token)

    def consume(self, token_type: str) -> Token:
        token = self.peek()
        if token.type != token_type:
            raise self.error(f"Expected {token_type}", token)
        self.advance()
        return token

    def match(self, token_type: str) -> bool:
        if self.check(token_type):
            self.advance()
            return True
        return False

    def check(self, token_type: str) -> bool:
        return self.peek().type == token_type

    def peek(self) -> Token:
        return self.tokens[self.position]

    def advance(self) -> Token:
        token = self.tokens[self.position]
        self.position = min(self.position + 1, len(self.tokens) - 1)
        return token

    def error(self, message: str, token: Token) -> ParseError:
        return ParseError(message, token.line, token.column)

    def _span(self, token: Token) -> ast_nodes.Span:
        return ast_nodes.Span(line=token.line, column=token.column)


def parse_element_source(source: str) -> ast_nodes.ElementExpr:
    """Parse helper for tests and tooling."""
    return Parser.from_source(source).parse()
