from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Generator, List, Optional, Tuple
import string

from .errors import LexerError

class TokenType(Enum):
    """Token types for LOLMark documents."""
    # File and comment delimiters
    FILE_BEGIN = auto()       # #HAI
    FILE_END = auto()         # #KTHXBYE
    COMMENT_BEGIN = auto()    # #OBTW
    COMMENT_END = auto()      # #TLDR

    # Block openers
    HEAD_BEGIN = auto()       # #MAEK HEAD
    TITLE_BEGIN = auto()      # #GIMMEH TITLE
    PARAGRAPH_BEGIN = auto()  # #MAEK PARAGRAF
    BOLD_BEGIN = auto()       # #GIMMEH BOLD
    ITALIC_BEGIN = auto()     # #GIMMEH ITALICS
    LIST_BEGIN = auto()       # #MAEK LIST
    ITEM_BEGIN = auto()       # #GIMMEH ITEM
    NEWLINE = auto()          # #GIMMEH NEWLINE
    SOUND_BEGIN = auto()      # #GIMMEH SOUNDZ
    VIDEO_BEGIN = auto()      # #GIMMEH VIDZ

    # Variables
    DECLARE_BEGIN = auto()    # #I HAZ
    DECLARE_MID = auto()      # #IT IZ
    ACCESS_BEGIN = auto()     # #LEMME SEE

    # Block closers
    BLOCK_END = auto()        # #OIC
    MKAY_END = auto()         # #MKAY

    # Media literals
    URL_ROOT = auto()         # http://www.
    YOUTUBE_ROOT = auto()     # http://www.youtube.com
    MP3_SUFFIX = auto()       # .mp3 / .MP3

    # Basic content
    PLAIN = auto()

# Uppercase spelling of every directive; the all-lowercase form is also accepted.
DIRECTIVES: Dict[str, TokenType] = {
    "#HAI": TokenType.FILE_BEGIN,
    "#KTHXBYE": TokenType.FILE_END,
    "#OBTW": TokenType.COMMENT_BEGIN,
    "#TLDR": TokenType.COMMENT_END,
    "#MAEK HEAD": TokenType.HEAD_BEGIN,
    "#GIMMEH TITLE": TokenType.TITLE_BEGIN,
    "#MAEK PARAGRAF": TokenType.PARAGRAPH_BEGIN,
    "#GIMMEH BOLD": TokenType.BOLD_BEGIN,
    "#GIMMEH ITALICS": TokenType.ITALIC_BEGIN,
    "#MAEK LIST": TokenType.LIST_BEGIN,
    "#GIMMEH ITEM": TokenType.ITEM_BEGIN,
    "#GIMMEH NEWLINE": TokenType.NEWLINE,
    "#GIMMEH SOUNDZ": TokenType.SOUND_BEGIN,
    "#GIMMEH VIDZ": TokenType.VIDEO_BEGIN,
    "#I HAZ": TokenType.DECLARE_BEGIN,
    "#IT IZ": TokenType.DECLARE_MID,
    "#LEMME SEE": TokenType.ACCESS_BEGIN,
    "#OIC": TokenType.BLOCK_END,
    "#MKAY": TokenType.MKAY_END,
}

def _longest_first(spellings: Dict[str, TokenType]) -> List[Tuple[str, TokenType]]:
    return sorted(spellings.items(), key=lambda item: len(item[0]), reverse=True)

DIRECTIVE_SPELLINGS = _longest_first({
    **DIRECTIVES,
    **{spelling.lower(): token_type for spelling, token_type in DIRECTIVES.items()},
})

ROOT_SPELLINGS = _longest_first({
    "http://www.youtube.com": TokenType.YOUTUBE_ROOT,
    "http://www.": TokenType.URL_ROOT,
})

MP3_SUFFIXES = (".mp3", ".MP3")

# Uppercase S through W are absent from the plain character set.
PLAIN_CHARS = frozenset(
    string.ascii_lowercase + "ABCDEFGHIJKLMNOPQR" + "XYZ" + string.digits + ',.":?%/!'
)
WHITESPACE = frozenset(" \t\r\n")

@dataclass(frozen=True)
class Token:
    """A lexical token with position information."""
    type: TokenType
    value: str
    position: int
    line: int
    column: int

    def __repr__(self) -> str:
        """Readable representation for debugging."""
        return f"Token({self.type.name}, '{self.value}', pos={self.position}, line={self.line}, col={self.column})"

class LolLexer:
    """
    Lexical analyzer for LOLMark documents.

    Directives and media roots are matched as whole lexemes, longest spelling
    first. Everything else must be plain text or whitespace.
    """

    def __init__(self):
        self.init("")

    def init(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 1
        self.pending: List[Token] = []
        self.current_char = self.text[self.pos] if self.pos < len(self.text) else None

    def _advance(self) -> None:
        if self.current_char == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        self.pos += 1
        self.current_char = self.text[self.pos] if self.pos < len(self.text) else None

    def _advance_n(self, n: int) -> None:
        for _ in range(n):
            if self.current_char is None: break
            self._advance()

    def _peek(self, offset: int = 0) -> Optional[str]:
        peek_pos = self.pos + offset
        return self.text[peek_pos] if peek_pos < len(self.text) else None

    def _error(self, message: str) -> LexerError:
        return LexerError(message, self.pos, self.line, self.column)

    def _skip_whitespace(self) -> None:
        while self.current_char is not None and self.current_char in WHITESPACE:
            self._advance()

    def _at_root(self) -> bool:
        return any(self.text.startswith(spelling, self.pos) for spelling, _ in ROOT_SPELLINGS)

    def _try_handle_directive(self, tok_pos: int, tok_line: int, tok_col: int) -> Optional[Token]:
        if self.current_char != '#':
            return None

        for spelling, token_type in DIRECTIVE_SPELLINGS:
            if not self.text.startswith(spelling, self.pos):
                continue
            following = self._peek(len(spelling))
            if following is not None and following.isascii() and following.isalnum():
                continue
            self._advance_n(len(spelling))
            return Token(token_type, spelling, tok_pos, tok_line, tok_col)

        end = self.pos + 1
        while end < len(self.text) and self.text[end] not in WHITESPACE and end - self.pos < 24:
            end += 1
        raise self._error(f"Unrecognized directive '{self.text[self.pos:end]}'")

    def _try_handle_media_url(self, tok_pos: int, tok_line: int, tok_col: int) -> Optional[Token]:
        for spelling, token_type in ROOT_SPELLINGS:
            if self.text.startswith(spelling, self.pos):
                self._advance_n(len(spelling))
                root = Token(token_type, spelling, tok_pos, tok_line, tok_col)
                self.pending.extend(self._read_url_body(split_suffix=token_type == TokenType.URL_ROOT))
                return root
        return None

    def _read_url_body(self, split_suffix: bool) -> List[Token]:
        start_pos, start_line, start_col = self.pos, self.line, self.column
        while self.current_char is not None and self.current_char in PLAIN_CHARS:
            self._advance()
        body = self.text[start_pos:self.pos]

        suffix = None
        if split_suffix:
            suffix = next((s for s in MP3_SUFFIXES if body.endswith(s)), None)
        path = body[:-len(suffix)] if suffix else body

        tokens = []
        if path:
            tokens.append(Token(TokenType.PLAIN, path, start_pos, start_line, start_col))
        if suffix:
            tokens.append(Token(TokenType.MP3_SUFFIX, suffix, start_pos + len(path),
                                start_line, start_col + len(path)))
        return tokens

    def _handle_plain(self, tok_pos: int, tok_line: int, tok_col: int) -> Token:
        while self.current_char is not None and self.current_char in PLAIN_CHARS:
            if self.pos > tok_pos and self._at_root():
                break
            self._advance()

        if self.pos == tok_pos:
            raise self._error(f"Unsupported character {self.current_char!r}")

        return Token(TokenType.PLAIN, self.text[tok_pos:self.pos], tok_pos, tok_line, tok_col)

    def get_next_token(self) -> Optional[Token]:
        if self.pending:
            return self.pending.pop(0)

        self._skip_whitespace()
        if self.current_char is None:
            return None

        tok_pos, tok_line, tok_col = self.pos, self.line, self.column

        token = self._try_handle_directive(tok_pos, tok_line, tok_col)
        if token: return token

        token = self._try_handle_media_url(tok_pos, tok_line, tok_col)
        if token: return token

        return self._handle_plain(tok_pos, tok_line, tok_col)

    def tokenize(self, text: str) -> Generator[Token, None, None]:
        self.init(text)
        while (token := self.get_next_token()) is not None:
            yield token

def tokenize(text: str) -> List[Token]:
    lexer = LolLexer()
    return list(lexer.tokenize(text))
