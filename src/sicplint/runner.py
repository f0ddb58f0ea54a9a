"""
Driver: feeds files through the line linter.

Each file gets its own LintState; nothing is shared between files, so files
may be linted concurrently.
"""

import concurrent.futures
import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from .config import LintConfig
from .errors import NestingError
from .linter.diagnostics import Diagnostic, Reporter
from .linter.machine import LineLinter, lint_lines
from .linter.state import LintState

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass
class FileResult:
    """Outcome of linting one file."""
    path: str
    diagnostics: List[Diagnostic] = field(default_factory=list)
    # Set when the file could not be opened or read.
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None or bool(self.diagnostics)


@dataclass
class RunResult:
    """Accumulates file results into one pass/fail status."""
    files: List[FileResult] = field(default_factory=list)
    failed: bool = False

    def add(self, result: FileResult) -> None:
        self.files.append(result)
        self.failed = self.failed or result.failed

    @property
    def exit_status(self) -> int:
        return 1 if self.failed else 0

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return [d for f in self.files for d in f.diagnostics]


def read_lines(path: PathLike) -> Iterator[str]:
    """Yield the lines of a file, each ending with a newline."""
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            if not line.endswith("\n"):
                line += "\n"
            yield line


def lint_source(source: str, filename: str = "<string>",
                config: Optional[LintConfig] = None) -> List[Diagnostic]:
    """Lint a string. Raises NestingError if parens go out of bounds."""
    config = config or LintConfig()
    state = LintState(filename, max_depth=config.max_depth)
    return lint_lines(state, config, io.StringIO(source))


def lint_file(path: PathLike, config: Optional[LintConfig] = None) -> FileResult:
    """Lint one file. Never raises for bad input; failures land in the result."""
    config = config or LintConfig()
    filename = str(path)
    result = FileResult(path=filename)
    reporter = Reporter()
    linter = LineLinter(LintState(filename, max_depth=config.max_depth), config)
    logger.debug("Linting %s", filename)
    try:
        for line in read_lines(path):
            for d in linter.lint_line(line):
                reporter.add(d)
    except NestingError as e:
        for d in e.diagnostics:
            reporter.add(d)
        reporter.add(Diagnostic(filename, e.line, e.column, str(e)))
        logger.debug("Stopped linting %s: %s", filename, e)
    except OSError as e:
        result.error = e.strerror or str(e)
    except UnicodeDecodeError as e:
        result.error = f"not valid UTF-8: {e.reason} at byte {e.start}"
    result.diagnostics = reporter.diagnostics
    if result.error:
        logger.debug("Could not read %s: %s", filename, result.error)
    return result


def expand_paths(paths: Iterable[PathLike], extensions: Iterable[str]) -> List[Path]:
    """Expand directories into the matching files they contain, recursively."""
    suffixes = tuple(extensions)
    expanded: List[Path] = []
    for p in paths:
        p = Path(p)
        if p.is_dir():
            found = sorted(f for f in p.rglob("*") if f.is_file() and f.suffix in suffixes)
            logger.debug("Found %d files under %s", len(found), p)
            expanded.extend(found)
        else:
            expanded.append(p)
    return expanded


def lint_paths(paths: Iterable[PathLike], config: Optional[LintConfig] = None,
               jobs: int = 1) -> RunResult:
    """Lint every file under *paths*. Results keep argument order."""
    config = config or LintConfig()
    files = expand_paths(paths, config.extensions)
    run = RunResult()
    if jobs > 1 and len(files) > 1:
        with concurrent.futures.ThreadPoolExecutor(max_workers=jobs) as executor:
            for result in executor.map(lambda f: lint_file(f, config), files):
                run.add(result)
    else:
        for f in files:
            run.add(lint_file(f, config))
    logger.debug("Linted %d files, failed=%s", len(run.files), run.failed)
    return run
