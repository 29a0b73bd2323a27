"""Parser for LOLMark documents.

A recursive-descent parser with one production per AST node type. Variable
declarations are applied to a per-document VariableTable as they are parsed
and every access is resolved on the spot, so a successful parse leaves
nothing for the renderer to look up. The first malformed construct aborts
the parse; there is no recovery.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Set, Tuple

from common.base.logging_config import get_logger

from .errors import ParseError, UnexpectedToken, UnterminatedBlock, UnterminatedFile, UndefinedVariable
from .lexer import MP3_SUFFIXES, Token, TokenType
from .nodes import (
    Node,
    NodeType,
    TextNode,
    CommentNode,
    TitleNode,
    MediaNode,
    VarDeclareNode,
    VarAccessNode,
)
from .variables import VariableTable

logger = get_logger(__name__)

# What may appear inside each container, keyed by the token that starts it.
BODY_CONTENT = (
    TokenType.PARAGRAPH_BEGIN, TokenType.LIST_BEGIN, TokenType.BOLD_BEGIN,
    TokenType.ITALIC_BEGIN, TokenType.NEWLINE, TokenType.COMMENT_BEGIN,
    TokenType.SOUND_BEGIN, TokenType.VIDEO_BEGIN, TokenType.DECLARE_BEGIN,
    TokenType.PLAIN, TokenType.ACCESS_BEGIN,
)
PARAGRAPH_CONTENT = (
    TokenType.BOLD_BEGIN, TokenType.ITALIC_BEGIN, TokenType.LIST_BEGIN,
    TokenType.ITEM_BEGIN, TokenType.PLAIN, TokenType.NEWLINE,
    TokenType.COMMENT_BEGIN, TokenType.SOUND_BEGIN, TokenType.VIDEO_BEGIN,
    TokenType.ACCESS_BEGIN,
)
LIST_CONTENT = (
    TokenType.ACCESS_BEGIN, TokenType.ITEM_BEGIN, TokenType.COMMENT_BEGIN, TokenType.NEWLINE,
)
ITEM_CONTENT = (
    TokenType.PLAIN, TokenType.BOLD_BEGIN, TokenType.ITALIC_BEGIN, TokenType.ACCESS_BEGIN,
)

@dataclass(frozen=True)
class ParseResult:
    """The document tree plus the frozen variable table built alongside it."""
    ast: Node
    variables: VariableTable

class LolParser:
    """Parser for LOLMark that creates an AST and a variable table."""

    def __init__(self, tokens: Iterable[Token]):
        """Initialize parser with token stream."""
        self.tokens = list(tokens)
        self.position = 0
        self.variables = VariableTable()
        self.open_blocks: List[Tuple[str, Token]] = []
        self.productions: Dict[TokenType, Callable[[], Node]] = {
            TokenType.PARAGRAPH_BEGIN: self.parse_paragraph,
            TokenType.LIST_BEGIN: self.parse_list,
            TokenType.ITEM_BEGIN: self.parse_item,
            TokenType.BOLD_BEGIN: self.parse_bold,
            TokenType.ITALIC_BEGIN: self.parse_italic,
            TokenType.NEWLINE: self.parse_newline,
            TokenType.COMMENT_BEGIN: self.parse_comment,
            TokenType.SOUND_BEGIN: self.parse_sound,
            TokenType.VIDEO_BEGIN: self.parse_video,
            TokenType.DECLARE_BEGIN: self.parse_var_declare,
            TokenType.ACCESS_BEGIN: self.parse_var_access,
            TokenType.PLAIN: self.parse_text,
        }

    def peek(self, offset: int = 0) -> Optional[Token]:
        """Look ahead in token stream without consuming."""
        pos = self.position + offset
        if pos < len(self.tokens):
            return self.tokens[pos]
        return None

    def consume(self) -> Optional[Token]:
        """Consume and return next token."""
        token = self.peek()
        if token:
            self.position += 1
        return token

    def check(self, token_type: TokenType) -> bool:
        token = self.peek()
        return token is not None and token.type == token_type

    def expect(self, token_type: TokenType) -> Token:
        """Consume next token if it matches expected type, otherwise fail."""
        if not self.check(token_type):
            raise self.error({token_type})
        return self.consume()

    def _end_location(self) -> Tuple[int, int, int]:
        """Offset, line and column just past the last token."""
        if not self.tokens:
            return 0, 1, 1
        last = self.tokens[-1]
        return last.position + len(last.value), last.line, last.column + len(last.value)

    def error(self, expected: Set[TokenType]) -> ParseError:
        """
        Build the error for the current token not matching any of expected.

        Running out of tokens inside an open block is reported against that
        block; anything else is an unexpected token.
        """
        token = self.peek()
        if token is not None:
            return UnexpectedToken(frozenset(expected), token, token.position, token.line, token.column)
        if self.open_blocks:
            block, opener = self.open_blocks[-1]
            if block == "file":
                return UnterminatedFile(*self._end_location())
            return UnterminatedBlock(block, opener.position, opener.line, opener.column)
        return UnexpectedToken(frozenset(expected), None, *self._end_location())

    @contextmanager
    def block(self, name: str, opener: Token) -> Iterator[None]:
        """Track an open block so end of input can be reported against it."""
        self.open_blocks.append((name, opener))
        try:
            yield
        finally:
            self.open_blocks.pop()

    def parse(self) -> ParseResult:
        """Parse tokens into an AST: File := FileBegin Content? FileEnd."""
        opener = self.expect(TokenType.FILE_BEGIN)
        with self.block("file", opener):
            children = self.parse_content()
            self.expect(TokenType.FILE_END)

        if self.peek() is not None:
            raise self.error(set())

        self.variables.freeze()
        logger.debug(
            f"Parsed {len(self.tokens)} tokens into {len(children)} top-level nodes, "
            f"{len(self.variables)} variables"
        )
        return ParseResult(Node(NodeType.FILE, opener, children), self.variables)

    def parse_content(self) -> List[Node]:
        """Leading comments, an optional head, then body content up to #KTHXBYE."""
        children: List[Node] = []
        while self.check(TokenType.COMMENT_BEGIN):
            children.append(self.parse_comment())
        if self.check(TokenType.HEAD_BEGIN):
            children.append(self.parse_head())
        children.extend(self.parse_sequence(BODY_CONTENT, TokenType.FILE_END))
        return children

    def parse_sequence(self, allowed: Tuple[TokenType, ...], end_type: TokenType) -> List[Node]:
        """
        Parse children until end_type, dispatching on each child's first token.

        The end token itself is left for the caller to consume.
        """
        children = []
        while True:
            token = self.peek()
            if token is not None and token.type == end_type:
                return children
            if token is None or token.type not in allowed:
                raise self.error(set(allowed) | {end_type})
            children.append(self.productions[token.type]())

    def parse_words(self, required: bool = True) -> List[Token]:
        """Consume a run of PLAIN tokens; at least one when required."""
        words = []
        while self.check(TokenType.PLAIN):
            words.append(self.consume())
        if required and not words:
            raise self.error({TokenType.PLAIN})
        return words

    def parse_optional_declare(self) -> List[Node]:
        if self.check(TokenType.DECLARE_BEGIN):
            return [self.parse_var_declare()]
        return []

    def parse_head(self) -> Node:
        """Head := HeadBegin VarDeclare? VarAccess* Title VarAccess* BlockEnd Comment*"""
        opener = self.expect(TokenType.HEAD_BEGIN)
        with self.block("head", opener):
            children = self.parse_optional_declare()
            while self.check(TokenType.ACCESS_BEGIN):
                children.append(self.parse_var_access())
            children.append(self.parse_title())
            while self.check(TokenType.ACCESS_BEGIN):
                children.append(self.parse_var_access())
            self.expect(TokenType.BLOCK_END)

        while self.check(TokenType.COMMENT_BEGIN):
            children.append(self.parse_comment())
        return Node(NodeType.HEAD, opener, children)

    def parse_title(self) -> TitleNode:
        """Title := TitleBegin Plain+ MkayEnd"""
        opener = self.expect(TokenType.TITLE_BEGIN)
        with self.block("title", opener):
            words = self.parse_words()
            self.expect(TokenType.MKAY_END)
        return TitleNode(" ".join(w.value for w in words), opener)

    def parse_paragraph(self) -> Node:
        opener = self.expect(TokenType.PARAGRAPH_BEGIN)
        with self.block("paragraph", opener):
            children = self.parse_optional_declare()
            children.extend(self.parse_sequence(PARAGRAPH_CONTENT, TokenType.BLOCK_END))
            self.expect(TokenType.BLOCK_END)
        return Node(NodeType.PARAGRAPH, opener, children)

    def parse_styled(self, begin_type: TokenType, node_type: NodeType, name: str) -> Node:
        """Bold/Italic := Begin VarDeclare? Plain* MkayEnd"""
        opener = self.expect(begin_type)
        with self.block(name, opener):
            children = self.parse_optional_declare()
            words = self.parse_words(required=False)
            if words:
                children.append(TextNode(" ".join(w.value for w in words), words[0]))
            self.expect(TokenType.MKAY_END)
        return Node(node_type, opener, children)

    def parse_bold(self) -> Node:
        return self.parse_styled(TokenType.BOLD_BEGIN, NodeType.BOLD, "bold")

    def parse_italic(self) -> Node:
        return self.parse_styled(TokenType.ITALIC_BEGIN, NodeType.ITALIC, "italics")

    def parse_list(self) -> Node:
        opener = self.expect(TokenType.LIST_BEGIN)
        with self.block("list", opener):
            children = self.parse_sequence(LIST_CONTENT, TokenType.BLOCK_END)
            self.expect(TokenType.BLOCK_END)
        return Node(NodeType.LIST, opener, children)

    def parse_item(self) -> Node:
        opener = self.expect(TokenType.ITEM_BEGIN)
        with self.block("item", opener):
            children = self.parse_optional_declare()
            children.extend(self.parse_sequence(ITEM_CONTENT, TokenType.MKAY_END))
            self.expect(TokenType.MKAY_END)
        return Node(NodeType.ITEM, opener, children)

    def parse_newline(self) -> Node:
        return Node(NodeType.NEWLINE, self.expect(TokenType.NEWLINE))

    def parse_sound(self) -> MediaNode:
        """Sound := SoundBegin UrlRoot Plain* Mp3Suffix MkayEnd"""
        opener = self.expect(TokenType.SOUND_BEGIN)
        with self.block("sound", opener):
            root = self.expect(TokenType.URL_ROOT)
            words = self.parse_words(required=False)
            if self.check(TokenType.MP3_SUFFIX):
                suffix = self.consume().value
            else:
                suffix = self.split_mp3_suffix(words)
            self.expect(TokenType.MKAY_END)
        return MediaNode(NodeType.SOUND, root.value, " ".join(w.value for w in words), opener, suffix=suffix)

    def split_mp3_suffix(self, words: List[Token]) -> str:
        """
        Take the .mp3 suffix off the last path word.

        The lexer only splits the suffix from text glued to the URL root; a
        path with spaces ends in an ordinary word such as "song.mp3" or ".mp3".
        """
        last = words[-1] if words else None
        if last is None or not last.value.endswith(MP3_SUFFIXES):
            raise self.error({TokenType.MP3_SUFFIX})

        words.pop()
        stem = last.value[:-len(MP3_SUFFIXES[0])]
        if stem:
            words.append(Token(TokenType.PLAIN, stem, last.position, last.line, last.column))
        return last.value[len(stem):]

    def parse_video(self) -> MediaNode:
        """Video := VideoBegin YoutubeRoot Plain* MkayEnd"""
        opener = self.expect(TokenType.VIDEO_BEGIN)
        with self.block("video", opener):
            root = self.expect(TokenType.YOUTUBE_ROOT)
            path = " ".join(w.value for w in self.parse_words(required=False))
            self.expect(TokenType.MKAY_END)
        return MediaNode(NodeType.VIDEO, root.value, path, opener)

    def parse_var_declare(self) -> VarDeclareNode:
        """VarDeclare := DeclareBegin Plain+ DeclareMid Plain+ MkayEnd"""
        opener = self.expect(TokenType.DECLARE_BEGIN)
        with self.block("declaration", opener):
            name = " ".join(w.value for w in self.parse_words())
            self.expect(TokenType.DECLARE_MID)
            value = " ".join(w.value for w in self.parse_words())
            self.expect(TokenType.MKAY_END)
        self.variables.declare(name, value)
        return VarDeclareNode(name, value, opener)

    def parse_var_access(self) -> VarAccessNode:
        """VarAccess := AccessBegin Plain+ MkayEnd, resolved immediately."""
        opener = self.expect(TokenType.ACCESS_BEGIN)
        with self.block("access", opener):
            words = self.parse_words()
            self.expect(TokenType.MKAY_END)

        name = " ".join(w.value for w in words)
        value = self.variables.lookup(name)
        if value is None:
            first = words[0]
            raise UndefinedVariable(name, first.position, first.line, first.column)
        return VarAccessNode(name, value, opener)

    def parse_comment(self) -> CommentNode:
        opener = self.expect(TokenType.COMMENT_BEGIN)
        with self.block("comment", opener):
            words = self.parse_words(required=False)
            self.expect(TokenType.COMMENT_END)
        return CommentNode(" ".join(w.value for w in words), opener)

    def parse_text(self) -> TextNode:
        words = self.parse_words()
        return TextNode(" ".join(w.value for w in words), words[0])


def parse(tokens: Iterable[Token]) -> ParseResult:
    """
    Parse a token stream into an AST and variable table.
    Provides main entry point for parsing LOLMark content.
    """
    parser = LolParser(tokens)
    return parser.parse()


def display_ast(node: Node, return_string: bool = False, indent: int = 0) -> Optional[str]:
    """
    Display or return a text representation of an AST node and its children.

    :param node: Root node of the AST to display
    :param return_string: If True, return the display string instead of printing
    :param indent: Current indentation level (used recursively)
    :return: String representation if return_string=True, None otherwise
    """
    if not node:
        return "" if return_string else None

    prefix = "  " * indent
    parts = [f"{prefix}{node.type.name}"]

    if isinstance(node, (TextNode, TitleNode, CommentNode)):
        parts[-1] += f": {node.text!r}"
    elif isinstance(node, MediaNode):
        parts[-1] += f": {node.media_path!r}"
    elif isinstance(node, VarDeclareNode):
        parts[-1] += f" (name={node.name!r}, value={node.value!r})"
    elif isinstance(node, VarAccessNode):
        parts[-1] += f" (name={node.name!r}) -> {node.value!r}"

    if node.token:
        parts[-1] += f" @ L{node.token.line}:C{node.token.column}"

    for child in node.children:
        child_str = display_ast(child, return_string=True, indent=indent + 1)
        if child_str:
            parts.append(child_str)

    result = "\n".join(parts)

    if return_string:
        return result
    else:
        print(result)
        return None
