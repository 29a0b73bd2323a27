"""Command line front end: translate a .lol file into an .html file."""

import argparse
import datetime
import os
import sys
from typing import List, Optional

import constants
from common.atomic_file import atomic_write_text
from common.base.logging_config import configure_logging, get_logger
from common.config.render_config import init_render_config

from .errors import TranslationError
from .html_generator import generate_html
from .lexer import tokenize
from .parser import display_ast, parse

logger = get_logger(__name__)

def get_log_filename() -> str:
    """
    Generate a log filename including PID and datetime.

    :return: Formatted log filename string
    """
    pid = os.getpid()
    timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"lolmark_{timestamp}_pid{pid}.log"

def output_path_for(input_path: str) -> str:
    """Replace the source extension with the output extension."""
    root, _ = os.path.splitext(input_path)
    return root + constants.OUTPUT_EXTENSION

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Translate a LOLMark document into HTML.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        prog='lolmark'
    )

    parser.add_argument('input', help=f'Source document (must end in {constants.SOURCE_EXTENSION})')
    parser.add_argument('--output', '-o',
                        help='Output path (default: input path with .html extension)')
    parser.add_argument('--stdout', action='store_true',
                        help='Write the HTML to standard output instead of a file')
    parser.add_argument('--check', action='store_true',
                        help='Only lex and parse; print "valid" on success')
    parser.add_argument('--dump-ast', action='store_true',
                        help='Print the syntax tree before rendering (to stderr with --stdout)')
    parser.add_argument('--config',
                        help=f'Render configuration TOML (default: {constants.DEFAULT_CONFIG_PATH})')

    # Logging configuration
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Set the logging level (default: WARNING)')
    parser.add_argument('--log-file', action='store_true',
                        help='Also log to a timestamped file in the log directory')

    parser.epilog = """
Examples:
  %(prog)s page.lol                  # Writes page.html
  %(prog)s page.lol --stdout         # Prints the HTML
  %(prog)s page.lol --check          # Syntax check only
  %(prog)s page.lol --dump-ast --log-level DEBUG
    """ % {'prog': parser.prog}

    return parser.parse_args(argv)

def run(args: argparse.Namespace) -> int:
    """Translate one document according to parsed arguments; returns exit status."""
    if not args.input.endswith(constants.SOURCE_EXTENSION):
        print(f"Error: input file must have a {constants.SOURCE_EXTENSION} extension", file=sys.stderr)
        return 1

    try:
        config = init_render_config(args.config)
    except (OSError, ValueError) as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 1

    try:
        with open(args.input, 'r', encoding='utf-8') as f:
            source = f.read()
    except (OSError, UnicodeDecodeError) as e:
        print(f"Failed to read '{args.input}': {e}", file=sys.stderr)
        return 1

    try:
        result = parse(tokenize(source))
    except TranslationError as e:
        logger.error(f"Translation of {args.input} failed: {e}")
        print(f"{args.input}: {e}", file=sys.stderr)
        return 1

    if args.dump_ast:
        # With --stdout the HTML owns standard output
        print(display_ast(result.ast, return_string=True), file=sys.stderr if args.stdout else sys.stdout)

    if args.check:
        print("valid")
        return 0

    html = generate_html(result.ast, config=config)

    if args.stdout:
        sys.stdout.write(html)
        return 0

    output_path = args.output or output_path_for(args.input)
    try:
        atomic_write_text(output_path, html)
    except OSError as e:
        print(f"Failed to write HTML file: {output_path}: {e}", file=sys.stderr)
        return 1

    logger.info(f"Wrote {output_path}")
    print(f"HTML generated successfully: {output_path}")
    return 0

def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    constants.init_production()
    configure_logging(
        log_level=args.log_level,
        app_log_level=args.log_level,
        log_filename=get_log_filename() if args.log_file else None
    )

    return run(args)

if __name__ == '__main__':
    sys.exit(main())
