"""
Lexer for element construction expressions such as `<my-element b="hi" count={3} />`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .errors import LexError

_PUNCTUATION = {
    "=": "EQ",
    "{": "LBRACE",
    "}": "RBRACE",
    ">": "GT",
}

_ESCAPES = {'"': '"', "'": "'", "\\": "\\", "n": "\n", "t": "\t"}


@dataclass
class Token:
    type: str
    value: Optional[str]
    line: int
    column: int

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"Token({self.type}, {self.value}, {self.line}:{self.column})"


def _is_name_start(char: str) -> bool:
    return char.isalpha() or char == "_"


def _is_name_char(char: str) -> bool:
    return char.isalnum() or char in "_-:"


class Lexer:
    def __init__(self, source: str, filename: str = "<string>") -> None:
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1

    def tokenize(self) -> List[Token]:
        tokens: List[Token] = []
        while self.pos < len(self.source):
            char = self.source[self.pos]
            if char.isspace():
                self._advance()
                continue
            line, column = self.line, self.column
            if char == "<":
                self._advance()
                if self._peek() == "/":
                    self._advance()
                    tokens.append(Token("LT_SLASH", "</", line, column))
                else:
                    tokens.append(Token("LT", "<", line, column))
                continue
            if char == "/":
                self._advance()
                if self._peek() != ">":
                    raise LexError("Expected '>' after '/'", self.line, self.column)
                self._advance()
                tokens.append(Token("SLASH_GT", "/>", line, column))
                continue
            if char in _PUNCTUATION:
                self._advance()
                tokens.append(Token(_PUNCTUATION[char], char, line, column))
                continue
            if char in {'"', "'"}:
                tokens.append(Token("STRING", self._read_string(char), line, column))
                continue
            if char.isdigit() or (char == "-" and self._peek(1).isdigit()):
                tokens.append(Token("NUMBER", self._read_number(), line, column))
                continue
            if _is_name_start(char):
                start = self.pos
                while self.pos < len(self.source) and _is_name_char(self.source[self.pos]):
                    self._advance()
                tokens.append(Token("NAME", self.source[start : self.pos], line, column))
                continue
            raise LexError(f"Unexpected character '{char}'", line, column)
        tokens.append(Token("EOF", None, self.line, self.column))
        return tokens

    def _peek(self, offset: int = 0) -> str:
        idx = self.pos + offset
        return self.source[idx] if idx < len(self.source) else ""

    def _advance(self) -> str:
        char = self.source[self.pos]
        self.pos += 1
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return char

    def _read_string(self, quote: str) -> str:
        start_line, start_col = self.line, self.column
        self._advance()
        chars: List[str] = []
        while True:
            if self.pos >= len(self.source):
                raise LexError("Unterminated string literal", start_line, start_col)
            char = self._advance()
            if char == quote:
                return "".join(chars)
            if char == "\\":
                if self.pos >= len(self.source):
                    raise LexError("Unterminated string literal", start_line, start_col)
                escaped = self._advance()
                if escaped not in _ESCAPES:
                    raise LexError(f"Unknown escape sequence '\\{escaped}'", self.line, self.column - 2)
                chars.append(_ESCAPES[escaped])
                continue
            chars.append(char)

    def _read_number(self) -> str:
        start = self.pos
        if self._peek() == "-":
            self._advance()
        seen_dot = False
        while self.pos < len(self.source):
            char = self.source[self.pos]
            if char.isdigit():
                self._advance()
            elif char == "." and not seen_dot and self._peek(1).isdigit():
                seen_dot = True
                self._advance()
            else:
                break
        return self.source[start : self.pos]
