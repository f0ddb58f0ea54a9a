"""
Exceptions raised by sicplint.

Style violations are never exceptions; they are Diagnostic values. These are
for conditions that stop linting a file (or the whole run, for config).
"""


class LintError(Exception):
    """Base class for sicplint errors."""


class ConfigError(LintError):
    """Configuration file is unreadable or invalid."""


class NestingError(LintError):
    """Paren nesting went out of bounds (too deep, or an unmatched close)."""
    def __init__(self, message: str, line: int, column: int):
        self.line = line
        self.column = column
        # Diagnostics already found on the line where nesting failed.
        self.diagnostics = []
        super().__init__(message)
