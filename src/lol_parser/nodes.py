"""Abstract Syntax Tree for LOLMark documents.

Nodes are built once by the parser and never modified afterwards; children
are stored as tuples in document order.
"""

from enum import Enum, auto
from typing import Iterable, Optional

from .lexer import Token

class NodeType(Enum):
    """Types of nodes in the Abstract Syntax Tree."""
    FILE = auto()         # Root node, #HAI ... #KTHXBYE
    HEAD = auto()         # #MAEK HEAD ... #OIC
    TITLE = auto()        # #GIMMEH TITLE ... #MKAY
    PARAGRAPH = auto()    # #MAEK PARAGRAF ... #OIC
    BOLD = auto()         # #GIMMEH BOLD ... #MKAY
    ITALIC = auto()       # #GIMMEH ITALICS ... #MKAY
    LIST = auto()         # #MAEK LIST ... #OIC
    ITEM = auto()         # #GIMMEH ITEM ... #MKAY
    NEWLINE = auto()      # #GIMMEH NEWLINE
    SOUND = auto()        # #GIMMEH SOUNDZ <url> #MKAY
    VIDEO = auto()        # #GIMMEH VIDZ <url> #MKAY
    VAR_DECLARE = auto()  # #I HAZ name #IT IZ value #MKAY
    VAR_ACCESS = auto()   # #LEMME SEE name #MKAY
    COMMENT = auto()      # #OBTW ... #TLDR
    TEXT = auto()         # Run of plain words

class Node:
    """Base class for all AST nodes with position tracking."""
    def __init__(self, type: NodeType, token: Optional[Token] = None, children: Iterable['Node'] = ()):
        self.type = type
        self.token = token
        self.children = tuple(children)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.type.name}, children={len(self.children)})"

class TextNode(Node):
    """Plain words, joined by single spaces."""
    def __init__(self, text: str, token: Token):
        super().__init__(NodeType.TEXT, token)
        self.text = text

class CommentNode(Node):
    """Comment body; never rendered."""
    def __init__(self, text: str, token: Token):
        super().__init__(NodeType.COMMENT, token)
        self.text = text

class TitleNode(Node):
    """Document title text."""
    def __init__(self, text: str, token: Token):
        super().__init__(NodeType.TITLE, token)
        self.text = text

class MediaNode(Node):
    """Sound or video embed. The source URL is root + path + suffix."""
    def __init__(self, type: NodeType, root: str, path: str, token: Token, suffix: str = ""):
        super().__init__(type, token)
        self.root = root
        self.path = path
        self.suffix = suffix

    @property
    def media_path(self) -> str:
        return f"{self.root}{self.path}{self.suffix}"

class VarDeclareNode(Node):
    """Variable declaration; its effect is applied to the table during parsing."""
    def __init__(self, name: str, value: str, token: Token):
        super().__init__(NodeType.VAR_DECLARE, token)
        self.name = name
        self.value = value

class VarAccessNode(Node):
    """Variable access, carrying the value bound when it was parsed."""
    def __init__(self, name: str, value: str, token: Token):
        super().__init__(NodeType.VAR_ACCESS, token)
        self.name = name
        self.value = value

def find_child(node: Node, node_type: NodeType) -> Optional[Node]:
    """Return the first direct child of the given type, if any."""
    return next((child for child in node.children if child.type == node_type), None)
