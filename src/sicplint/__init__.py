"""
sicplint - Style checker for the SICP study notes

Checks Scheme sources line by line: indentation relative to the enclosing
form, whitespace and comment conventions, and import ordering.
"""

__version__ = "0.1.0"
__author__ = "sicplint contributors"

from sicplint.runner import lint_file, lint_paths, lint_source
