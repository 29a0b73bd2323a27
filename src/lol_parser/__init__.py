"""LOL Parser - translates LOLMark documents into HTML."""

from typing import Optional

from common.base.logging_config import get_logger
from common.config.render_config import RenderConfig

from .errors import (
    TranslationError,
    LexerError,
    ParseError,
    UnexpectedToken,
    UnterminatedFile,
    UnterminatedBlock,
    UndefinedVariable,
)
from .lexer import tokenize, Token, TokenType
from .parser import parse, ParseResult, display_ast
from .html_generator import generate_html
from .variables import VariableTable

logger = get_logger(__name__)

def translate(text: str, config: Optional[RenderConfig] = None) -> str:
    """Main entry point: tokenize, parse and render one document."""
    tokens = tokenize(text)
    result = parse(tokens)
    html = generate_html(result.ast, config=config)
    logger.info(
        f"Translated document: {len(text)} characters, {len(tokens)} tokens, "
        f"{len(result.variables)} variables, {len(html)} characters of HTML"
    )
    return html

__all__ = [
    'tokenize', 'parse', 'generate_html', 'translate', 'display_ast',
    'Token', 'TokenType', 'ParseResult', 'VariableTable',
    'TranslationError', 'LexerError', 'ParseError', 'UnexpectedToken',
    'UnterminatedFile', 'UnterminatedBlock', 'UndefinedVariable',
]
