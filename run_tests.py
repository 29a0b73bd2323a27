#!/usr/bin/python3

"""Run the LOLMark tests by category, optionally under coverage."""

import argparse
import os
import sys
from typing import List, Optional

import coverage
import pytest

PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
TEST_DIR = os.path.join(PROJECT_ROOT, 'src', 'tests')

CATEGORIES = {
    'lol_parser': 'Lexer, parser, variable table and HTML generator',
    'common': 'Logging, configuration and file writing',
    'cli': 'Command line front end',
}

def pytest_args(categories: Optional[List[str]], keyword: Optional[str],
                verbose: bool, fail_fast: bool) -> List[str]:
    """Translate runner options into a pytest command line."""
    args = [os.path.join(TEST_DIR, c) for c in (categories or CATEGORIES)]
    if keyword:
        args += ['-k', keyword]
    if verbose:
        args.append('-v')
    if fail_fast:
        args.append('-x')
    return args

def main(argv: Optional[List[str]] = None) -> int:
    categories_help = "\n".join(f"  {name:<11} {desc}" for name, desc in CATEGORIES.items())
    parser = argparse.ArgumentParser(
        description='Run the LOLMark test suite',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"Test categories:\n{categories_help}",
    )
    parser.add_argument('--category', choices=list(CATEGORIES), action='append',
                        help='Category to run (repeatable; default: all)')
    parser.add_argument('-k', '--keyword',
                        help='Only run tests matching this pytest keyword expression')
    parser.add_argument('--verbose', '-v', action='store_true')
    parser.add_argument('--fail-fast', '-x', action='store_true')
    parser.add_argument('--coverage', action='store_true',
                        help='Measure src/ and write an HTML report to coverage_html/')
    args = parser.parse_args(argv)

    cov = None
    if args.coverage:
        cov = coverage.Coverage(source=[os.path.join(PROJECT_ROOT, 'src')],
                                omit=[os.path.join(TEST_DIR, '*')])
        cov.start()

    status = pytest.main(pytest_args(args.category, args.keyword, args.verbose, args.fail_fast))

    if cov is not None:
        cov.stop()
        cov.report()
        cov.html_report(directory=os.path.join(PROJECT_ROOT, 'coverage_html'))

    return int(status)

if __name__ == '__main__':
    sys.exit(main())
