"""
sicplint.linter - Line-oriented style checker core

Rule table, per-file state, the line state machine, and import ordering.
"""

from sicplint.linter.diagnostics import Diagnostic, Reporter
from sicplint.linter.machine import LineLinter, Mode, lint_lines
from sicplint.linter.ordering import (
    ImportBlock,
    correct_id_order,
    correct_name_order,
    id_sort_key,
    lookup_import_block,
)
from sicplint.linter.rules import DEFAULT_INDENT_RULES, IndentRules, RuleTable, parse_flags
from sicplint.linter.state import MAX_DEPTH, LintState

__all__ = [
    # Diagnostics
    "Diagnostic",
    "Reporter",
    # State machine
    "LineLinter",
    "Mode",
    "lint_lines",
    "LintState",
    "MAX_DEPTH",
    # Rules
    "IndentRules",
    "RuleTable",
    "DEFAULT_INDENT_RULES",
    "parse_flags",
    # Import ordering
    "ImportBlock",
    "correct_id_order",
    "correct_name_order",
    "id_sort_key",
    "lookup_import_block",
]
