"""
CLI entry point for sicplint.

Usage:
    sicplint FILE ...                  Lint files (directories are searched)
    sicplint --json FILE ...           Print diagnostics as JSON lines
    sicplint --config lint.yaml FILE   Override style settings from YAML
    sicplint --jobs 4 src/             Lint files in parallel
"""

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .config import load_config
from .errors import ConfigError
from .linter.diagnostics import Reporter
from .runner import lint_paths

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sicplint",
        description="Style checker for the SICP study notes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    sicplint src/sicp/chapter-1.ss
    sicplint --jobs 4 src notes
""",
    )
    parser.add_argument('files', nargs='*', metavar='FILE', help='Files or directories to lint')
    parser.add_argument('--config', type=Path, help='YAML file overriding style settings')
    parser.add_argument('--json', action='store_true', help='Output diagnostics as JSON lines')
    parser.add_argument('-j', '--jobs', type=int, default=1, help='Lint this many files at once')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log progress to stderr')
    parser.add_argument('--version', action='version', version=f'sicplint {__version__}')
    return parser


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S',
        stream=sys.stderr,
    )

    if not args.files:
        print(f"usage: {parser.prog} FILE ...")
        return 0
    if args.jobs < 1:
        parser.error("--jobs must be at least 1")

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"{parser.prog}: {e}", file=sys.stderr)
        return 2

    run = lint_paths(args.files, config, jobs=args.jobs)

    reporter = Reporter()
    for result in run.files:
        if result.error is not None:
            print(f"{result.path}: {result.error}", file=sys.stderr)
        for d in result.diagnostics:
            reporter.add(d)

    output = reporter.to_jsonl() if args.json else reporter.render_human()
    if output:
        print(output)

    logger.info("%d files, %d diagnostics", len(run.files), len(run.diagnostics))
    return run.exit_status


if __name__ == "__main__":
    sys.exit(main())
