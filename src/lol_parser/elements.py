"""HTML generation functions for LOLMark elements."""

from typing import List, Optional

# Replacement order matters: '&' first so later entities are not re-escaped.
_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#x27;"),
)


def sanitize_html(text: str) -> str:
    """Escape the five HTML-significant characters."""
    for char, entity in _ESCAPES:
        text = text.replace(char, entity)
    return text


def create_paragraph(content: str) -> str:
    return f"<p>{content}</p>"


def create_bold(content: str) -> str:
    return f"<b>{content}</b>"


def create_italic(content: str) -> str:
    return f"<i>{content}</i>"


def create_list_item(content: str) -> str:
    """
    Generate HTML for a single list item.

    :param content: Item content (already HTML)
    :return: HTML list item string
    """
    return f"<li>{content}</li>"


def create_list_container(entries: List[str]) -> str:
    """
    Wrap list entries in a container, one entry per line.

    :param entries: HTML strings, usually <li> elements
    :return: Complete HTML list (e.g., "<ul>\n<li>a</li>\n</ul>")
    """
    if not entries:
        return "<ul>\n</ul>"
    return f"<ul>\n{chr(10).join(entries)}\n</ul>"


def create_line_break() -> str:
    return "<br />"


def create_audio(src: str) -> str:
    """
    Generate an audio player for an mp3 source.

    :param src: Unescaped source URL
    :return: HTML audio element
    """
    return f'<audio controls src="{sanitize_html(src)}"></audio>'


def create_video(src: str) -> str:
    """
    Generate a video player for a YouTube source.

    :param src: Unescaped source URL
    :return: HTML video element
    """
    return f'<video controls src="{sanitize_html(src)}"></video>'


def create_heading(content: str) -> str:
    return f"<h1>{content}</h1>"


def create_document(title: str, body_blocks: List[str], charset: str = "UTF-8",
                    lang: Optional[str] = "en") -> str:
    """
    Wrap rendered body blocks in a complete HTML document.

    :param title: Title text (already escaped)
    :param body_blocks: Rendered top-level blocks, one per line
    :param charset: Declared document charset
    :param lang: Value for the html lang attribute; omitted when empty
    :return: Full HTML document
    """
    html_open = f'<html lang="{sanitize_html(lang)}">' if lang else "<html>"
    lines = [
        "<!DOCTYPE html>",
        html_open,
        "<head>",
        f'<meta charset="{sanitize_html(charset)}">',
        f"<title>{title}</title>",
        "</head>",
        "<body>",
        *body_blocks,
        "</body>",
        "</html>",
    ]
    return "\n".join(lines) + "\n"
