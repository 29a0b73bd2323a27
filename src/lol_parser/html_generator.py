"""HTML generator for LOLMark documents.

This module walks the Abstract Syntax Tree created by the parser and emits an
HTML document. Variable accesses already carry their resolved values, so the
walk needs no state beyond the read-only render configuration.
"""

from typing import Iterable, List, Optional

from common.config.render_config import RenderConfig
from .nodes import Node, NodeType, TextNode, TitleNode, MediaNode, VarAccessNode, find_child
from .elements import (
    sanitize_html,
    create_paragraph,
    create_bold,
    create_italic,
    create_list_item,
    create_list_container,
    create_line_break,
    create_audio,
    create_video,
    create_heading,
    create_document,
)

# Top-level nodes that flow together on one line.
INLINE_TYPES = frozenset({
    NodeType.TEXT, NodeType.VAR_ACCESS, NodeType.BOLD, NodeType.ITALIC, NodeType.NEWLINE,
})


class HTMLGenerator:
    """
    Converts a LOLMark AST into HTML.

    Lists put each child on its own line, and so does the file body except
    that runs of inline content there share a line. Inline containers
    (paragraphs, items, bold, italics) join children with a single space.
    Comments and declarations produce no output and leave no trace in the
    surrounding whitespace.
    """

    def __init__(self, config: Optional[RenderConfig] = None):
        """
        Initialize the HTML generator.

        Args:
            config: Rendering options; defaults apply when omitted
        """
        self.config = config or RenderConfig()

    def generate(self, node: Node) -> str:
        """Generate HTML from an AST node."""
        if not node:
            return ""

        method_name = f"_generate_{node.type.name.lower()}"
        method = getattr(self, method_name, self._generate_unknown)
        return method(node)

    def _generate_unknown(self, node: Node) -> str:
        raise ValueError(f"No HTML rule for node type {node.type.name}")

    def _render_children(self, children: Iterable[Node]) -> List[str]:
        """Render children in order, dropping those that produce nothing."""
        rendered = (self.generate(child) for child in children)
        return [html for html in rendered if html]

    def _join_inline(self, node: Node) -> str:
        return " ".join(self._render_children(node.children))

    def _render_body(self, children: Iterable[Node]) -> List[str]:
        """
        Render top-level content, one block per line.

        Consecutive inline children share a line joined by spaces, so a
        comment or declaration between two words does not split them.
        """
        blocks: List[str] = []
        run: List[str] = []
        for child in children:
            html = self.generate(child)
            if not html:
                continue
            if child.type in INLINE_TYPES:
                run.append(html)
                continue
            if run:
                blocks.append(" ".join(run))
                run = []
            blocks.append(html)
        if run:
            blocks.append(" ".join(run))
        return blocks

    def document_title(self, head: Optional[Node]) -> str:
        """
        Title text for the document, unescaped.

        Head variable accesses contribute their values around the title text
        in document order.
        """
        if head is None:
            return self.config.default_title

        parts = []
        for child in head.children:
            if isinstance(child, TitleNode):
                parts.append(child.text)
            elif isinstance(child, VarAccessNode):
                parts.append(child.value)
        return " ".join(parts)

    def _generate_file(self, node: Node) -> str:
        """Generate the complete document for the root node."""
        head = find_child(node, NodeType.HEAD)
        title = sanitize_html(self.document_title(head))

        body_blocks = []
        if head is not None and self.config.heading_from_title:
            body_blocks.append(create_heading(title))
        body_blocks.extend(self._render_body(c for c in node.children if c is not head))

        return create_document(title, body_blocks, charset=self.config.charset, lang=self.config.lang)

    def _generate_head(self, node: Node) -> str:
        """The head only feeds the document title; see _generate_file."""
        return ""

    def _generate_paragraph(self, node: Node) -> str:
        return create_paragraph(self._join_inline(node))

    def _generate_bold(self, node: Node) -> str:
        return create_bold(self._join_inline(node))

    def _generate_italic(self, node: Node) -> str:
        return create_italic(self._join_inline(node))

    def _generate_list(self, node: Node) -> str:
        return create_list_container(self._render_children(node.children))

    def _generate_item(self, node: Node) -> str:
        return create_list_item(self._join_inline(node))

    def _generate_newline(self, node: Node) -> str:
        return create_line_break()

    def _generate_sound(self, node: MediaNode) -> str:
        return create_audio(node.media_path)

    def _generate_video(self, node: MediaNode) -> str:
        return create_video(node.media_path)

    def _generate_var_declare(self, node: Node) -> str:
        """Declarations were applied during parsing and render nothing."""
        return ""

    def _generate_var_access(self, node: VarAccessNode) -> str:
        return sanitize_html(node.value)

    def _generate_comment(self, node: Node) -> str:
        return ""

    def _generate_text(self, node: TextNode) -> str:
        return sanitize_html(node.text)


def generate_html(ast: Node, config: Optional[RenderConfig] = None) -> str:
    """
    Convenience function to generate HTML from an AST.

    Args:
        ast: Root node of the AST
        config: Optional rendering options

    Returns:
        Generated HTML string
    """
    generator = HTMLGenerator(config)
    return generator.generate(ast)
