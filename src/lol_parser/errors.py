"""Exceptions raised while translating a LOLMark document.

Every failure is fatal to the document being translated. Errors carry the
zero-based character offset of the failure plus the one-based line and column
used in human-readable messages.
"""

from typing import FrozenSet, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .lexer import Token, TokenType


class TranslationError(Exception):
    """Base class for all lexing and parsing failures."""
    def __init__(self, message: str, position: int, line: int, column: int):
        self.message = message
        self.position = position
        self.line = line
        self.column = column
        super().__init__(f"{message} at line {line}, column {column}")


class LexerError(TranslationError):
    """Exception raised for lexical analysis errors."""


class ParseError(TranslationError):
    """Exception raised for parsing errors."""


class UnexpectedToken(ParseError):
    """A token (or end of input) that no alternative at this point accepts."""
    def __init__(self, expected: FrozenSet['TokenType'], found: Optional['Token'],
                 position: int, line: int, column: int):
        self.expected = frozenset(expected)
        self.found = found
        if self.expected:
            expected_desc = "one of [" + ", ".join(sorted(t.name for t in self.expected)) + "]"
        else:
            expected_desc = "end of input"
        found_desc = f"{found.type.name} '{found.value}'" if found else "end of input"
        super().__init__(f"Expected {expected_desc} but found {found_desc}",
                         position, line, column)


class UnterminatedFile(ParseError):
    """Input ended before the end-of-file directive."""
    def __init__(self, position: int, line: int, column: int):
        super().__init__("Unterminated file: missing #KTHXBYE", position, line, column)


class UnterminatedBlock(ParseError):
    """Input ended inside an open block; location is that of the opener."""
    def __init__(self, block: str, position: int, line: int, column: int):
        self.block = block
        super().__init__(f"Unterminated {block} block", position, line, column)


class UndefinedVariable(ParseError):
    """A variable access naming something not yet declared."""
    def __init__(self, name: str, position: int, line: int, column: int):
        self.name = name
        super().__init__(f"Undefined variable '{name}'", position, line, column)
