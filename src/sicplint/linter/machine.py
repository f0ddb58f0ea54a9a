"""
Line-oriented Lint State Machine

Consumes one physical line at a time and reports style violations without
ever building a syntax tree. Nesting is tracked with a stack of expected
indentation columns, one per unclosed paren; the operator that opened each
paren decides how its contents are indented (see rules.py).

Import ordering (see ordering.py) is validated in the same pass.

Usage:
    linter = LineLinter(LintState("notes.ss"), config)
    for line in lines:
        for diagnostic in linter.lint_line(line):
            print(diagnostic)
"""

from __future__ import annotations

from enum import Enum, auto
from typing import TYPE_CHECKING, List

from ..errors import NestingError
from .diagnostics import Diagnostic
from .ordering import ImportBlock, correct_id_order, correct_name_order, lookup_import_block
from .rules import IndentRules, RuleTable
from .state import LintState

if TYPE_CHECKING:
    from ..config import LintConfig


# Characters allowed immediately before an opening delimiter.
OPEN_PREFIXES = frozenset(" #'(,@[`")

OPENERS = "(["
CLOSERS = ")]"


class Mode(Enum):
    """Line-local scanner mode for the current character."""
    INDENT = auto()         # leading spaces
    NORMAL = auto()         # ordinary code
    OPERATOR = auto()       # reading the token right after an open paren
    STRING = auto()         # inside "..."
    COMMENT = auto()        # just saw ';'
    COMMENT_SPACE = auto()  # just saw ';;'


class LineLinter:
    """Runs the per-line checks against one file's LintState."""

    def __init__(self, state: LintState, config: LintConfig):
        self.state = state
        self.config = config
        self.rules: RuleTable = config.rule_table()
        self._out: List[Diagnostic] = []
        self._line = ""
        self._mode = Mode.INDENT
        self._prev = ""
        self._word_start = 0
        self._operator_start = 0

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def fail(self, column: int, message: str) -> None:
        """Report a violation at a zero-based column of the current line."""
        self.state.had_error = True
        self._out.append(Diagnostic(
            file=self.state.filename,
            line=self.state.lineno,
            column=column + 1,
            message=message,
        ))

    def _check_tabs(self, start: int) -> None:
        for i in range(start, len(self._line)):
            if self._line[i] == "\t":
                self.fail(i, "illegal character '\\t'")

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def lint_line(self, line: str) -> List[Diagnostic]:
        """
        Lint one line, which must be nonempty and end with a newline.

        Returns the diagnostics for this line. Advances state.lineno.
        """
        assert line and line.endswith("\n"), "line must end with a newline"
        self._out = []
        self._line = line
        try:
            self._lint(line)
        except NestingError as e:
            e.diagnostics = list(self._out)
            raise
        finally:
            self.state.lineno += 1
        return self._out

    def _lint(self, line: str) -> None:
        state = self.state
        content = line[:-1]

        # Step 1. Line length, whitespace, and comment lines.
        if not content.strip(" "):
            if not state.in_string and state.blank_run == 1:
                self.fail(0, "multiple blank lines")
            state.blank_run += 1
            return
        state.blank_run = 0
        if len(content) > self.config.max_columns:
            self.fail(self.config.max_columns - 1,
                      f"line too long: {len(content)} > {self.config.max_columns}")
        if content[-1] == " ":
            self.fail(len(content) - 1, "trailing whitespace")
        if content[0] == ";" and not state.in_string:
            self._check_tabs(0)
            self._lint_comment_line(content)
            return

        # Step 2. Spacing, alignment, and import ordering.
        self._scan(line)

    def _lint_comment_line(self, content: str) -> None:
        count = len(content) - len(content.lstrip(";"))
        if count > 3:
            self.fail(0, "too many semicolons")
        elif count == 3 and self.state.lineno != 1:
            self.fail(0, "';;;' only allowed on first line copyright")
        if count < len(content) and content[count] != " ":
            self.fail(count, "missing space after ';'")

    # ------------------------------------------------------------------
    # Character scanner
    # ------------------------------------------------------------------

    def _scan(self, line: str) -> None:
        state = self.state
        no_align = line.endswith(self.config.no_align_comment + "\n")
        escaped = False
        two_spaces = False
        self._prev = ""
        self._word_start = 0
        self._mode = Mode.STRING if state.in_string else Mode.INDENT

        for i, c in enumerate(line):
            if c == "\t":
                self.fail(i, "illegal character '\\t'")

            if self._mode is Mode.INDENT:
                if c != " ":
                    if not no_align:
                        self._check_indent(i)
                    self._mode = Mode.NORMAL

            if self._mode in (Mode.NORMAL, Mode.OPERATOR):
                if two_spaces and c not in " ;":
                    two_spaces = False
                    self.fail(i, "unexpected two spaces in a row")
                if c == " " and self._prev == " ":
                    two_spaces = True
                self._code_char(i, c)
            elif self._mode is Mode.STRING:
                if c == '"' and not escaped:
                    self._mode = Mode.NORMAL
                    state.in_string = False
            elif self._mode is Mode.COMMENT and c == ";":
                self._mode = Mode.COMMENT_SPACE
            elif self._mode in (Mode.COMMENT, Mode.COMMENT_SPACE):
                if c != " ":
                    self.fail(i, "expected space after ';'")
                self._check_tabs(i + 1)
                return

            if self._mode is Mode.NORMAL and self._prev == " " and c != " ":
                self._word_start = i
            self._prev = c
            escaped = (not escaped) if c == "\\" else False

    def _check_indent(self, i: int) -> None:
        state = self.state
        if i == state.expected_column:
            return
        if i == 0 and state.depth == state.wrapper_count:
            # Returning to zero indentation inside a wrapper.
            state.expected_column = 0
        elif i == state.quoted_align:
            # Quoted form is data, not code.
            state.expected_column = i
            state.quoted_align = None
        else:
            self.fail(i, "incorrect indentation")

    def _code_char(self, i: int, c: str) -> None:
        state = self.state
        prev = self._prev
        if c == '"':
            self._mode = Mode.STRING
            state.in_string = True
        elif c == ";":
            if self._mode is Mode.OPERATOR:
                self._finish_operator(i, "\n")
            self._mode = Mode.COMMENT
            if prev != " ":
                self.fail(i, "expected space before ';'")
        elif c in OPENERS:
            self._mode = Mode.OPERATOR
            self._operator_start = i + 1
            state.push(i + 1, i + 1)
            if i > 0 and prev not in OPEN_PREFIXES:
                self.fail(i, f"expected space before '{c}'")
            if prev == "'" or (state.quoted_align is not None and prev in OPENERS):
                state.quoted_align = i + 1
            else:
                state.quoted_align = None
        elif c in CLOSERS:
            self._mode = Mode.NORMAL
            if i != 0 and state.wrappers and state.depth == state.wrapper_count:
                self.fail(i, f"expected '{c}' at start of line for wrapper")
            if prev == " ":
                self.fail(i, f"unexpected space before '{c}'")
            if state.import_block == ImportBlock.DECL:
                self._check_name(i)
            depth = state.pop(i + 1)
            state.leave_import_block(depth)
        elif c in " \n":
            if self._mode is Mode.OPERATOR:
                self._finish_operator(i, c)
            elif state.import_block == ImportBlock.DECL:
                word = self._check_name(i)
                if word:
                    state.last_import_name = word

    def _finish_operator(self, i: int, terminator: str) -> None:
        """Apply the operator's indentation policy once its token is complete."""
        state = self.state
        self._mode = Mode.NORMAL
        start = self._operator_start
        name = self._line[start:i]
        rules = self.rules.lookup(name, start)
        if IndentRules.WRAPPER in rules:
            state.wrappers.append(state.depth)
        special = IndentRules.SPECIAL in rules
        if terminator == " ":
            if special and IndentRules.UNIFORM not in rules:
                state.expected_column = start + 1
            else:
                state.expected_column = i + 1
        elif special:
            state.expected_column = start + 1
        self._update_import_block(name, start)

    def _update_import_block(self, name: str, start: int) -> None:
        state = self.state
        block = state.import_block
        opened = lookup_import_block(
            name, start, self.config.section_operators, self.config.use_keyword)
        if block == ImportBlock.NONE:
            if opened == ImportBlock.SECTION:
                state.enter_import_block()
        elif block == ImportBlock.SECTION:
            if opened == ImportBlock.USE:
                state.enter_import_block()
        elif block == ImportBlock.USE:
            state.enter_import_block()
            if not correct_id_order(state.last_import_id, name):
                self.fail(start, f"incorrect import id ordering: "
                                 f"{state.last_import_id} > {name}")
            state.last_import_id = name

    def _check_name(self, end: int) -> str:
        """Check the word ending at *end* against the previous name. Returns it."""
        state = self.state
        word = self._line[self._word_start:end]
        if not word.strip():
            # Closing delimiter at the start of the line; no name here.
            return ""
        if not correct_name_order(state.last_import_name, word):
            self.fail(self._word_start, f"incorrect import name ordering: "
                                        f"{state.last_import_name} > {word}")
        return word


def lint_lines(state: LintState, config: LintConfig, lines) -> List[Diagnostic]:
    """Lint an iterable of lines against *state*, collecting all diagnostics."""
    linter = LineLinter(state, config)
    out: List[Diagnostic] = []
    for line in lines:
        if not line.endswith("\n"):
            line += "\n"
        out.extend(linter.lint_line(line))
    return out
