"""
Per-file linter state.

One LintState lives for the traversal of exactly one file.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ..errors import NestingError
from .ordering import ImportBlock


# Maximum paren nesting depth.
MAX_DEPTH = 64


@dataclass
class LintState:
    """Mutable state carried from one line to the next."""
    filename: str
    max_depth: int = MAX_DEPTH
    # One-based line number.
    lineno: int = 1
    # Set once any diagnostic is emitted; never cleared.
    had_error: bool = False
    # Number of blank lines in a row seen.
    blank_run: int = 0
    # True if the previous line ended inside a string.
    in_string: bool = False
    # If the last open paren was quoted, its alignment column (allowed as an
    # alternative to the normal alignment). Otherwise None.
    quoted_align: Optional[int] = None
    # Expected indentation per open paren. A new line is expected to be
    # indented by stack[-1]; stack[0] is always 0.
    stack: List[int] = field(default_factory=lambda: [0])
    # Depths of the currently open wrapper forms.
    wrappers: List[int] = field(default_factory=list)
    # Depths at which each active import block began.
    import_depths: List[int] = field(default_factory=list)
    last_import_id: str = ""
    last_import_name: str = ""

    @property
    def depth(self) -> int:
        """Number of unclosed parens."""
        return len(self.stack) - 1

    @property
    def wrapper_count(self) -> int:
        return len(self.wrappers)

    @property
    def import_block(self) -> ImportBlock:
        return ImportBlock(len(self.import_depths))

    @property
    def expected_column(self) -> int:
        return self.stack[-1]

    @expected_column.setter
    def expected_column(self, column: int) -> None:
        self.stack[-1] = column

    def push(self, column: int, at: int) -> None:
        """Open a paren whose contents align at *column* by default."""
        if self.depth + 1 >= self.max_depth:
            raise NestingError(
                f"nesting too deep: more than {self.max_depth - 1} open parens",
                self.lineno, at)
        self.stack.append(column)

    def pop(self, at: int) -> int:
        """Close the innermost paren and return the depth it was at."""
        if self.depth == 0:
            raise NestingError("unmatched ')'", self.lineno, at)
        depth = self.depth
        self.stack.pop()
        if self.wrappers and self.wrappers[-1] == depth:
            self.wrappers.pop()
        return depth

    def enter_import_block(self) -> None:
        self.import_depths.append(self.depth)

    def leave_import_block(self, depth: int) -> Optional[ImportBlock]:
        """Unwind the import block begun at *depth*, returning the block left."""
        if not self.import_depths or self.import_depths[-1] != depth:
            return None
        left = self.import_block
        self.import_depths.pop()
        if left == ImportBlock.DECL:
            self.last_import_name = ""
        elif left == ImportBlock.USE:
            self.last_import_id = ""
        return left
