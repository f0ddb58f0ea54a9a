"""
Indentation Rule Table

Maps an operator name (the first token after an opening delimiter) to the
indentation policy for the form it opens.
"""

from enum import Flag
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional


class IndentRules(Flag):
    """
    Indentation policy bits for an operator.

    By default, operands line up with the operator:

        (operator
         operand1
         operand2)

    or with the first operand, if it is on the same line as the operator:

        (operator operand1
                  operand2)
    """
    DEFAULT = 0

    # Body is indented two spaces from the open paren, whatever operands sit
    # on the opening line:
    #
    #     (operator operand
    #       body)
    SPECIAL = 1

    # Contents are not indented at all. Only recognized at the top level.
    #
    #     (operator operand
    #     contents
    #     ) ; operator
    WRAPPER = 2

    # With SPECIAL: operands and body are the same thing, so operands on the
    # opening line set the alignment, and a lone operator gets two spaces.
    UNIFORM = 4


DEFAULT_INDENT_RULES: Mapping[str, IndentRules] = MappingProxyType({
    # Exceptional cases.
    "SICP": IndentRules.WRAPPER,
    "begin": IndentRules.SPECIAL | IndentRules.UNIFORM,
    "cond": IndentRules.SPECIAL | IndentRules.UNIFORM,
    "library": IndentRules.SPECIAL | IndentRules.WRAPPER,

    # Special forms.
    "Chapter": IndentRules.SPECIAL,
    "Exercise": IndentRules.SPECIAL,
    "Section": IndentRules.SPECIAL,
    "case": IndentRules.SPECIAL,
    "define": IndentRules.SPECIAL,
    "define-record-type": IndentRules.SPECIAL,
    "define-syntax": IndentRules.SPECIAL,
    "lambda": IndentRules.SPECIAL,
    "let": IndentRules.SPECIAL,
    "let*": IndentRules.SPECIAL,
    "let-syntax": IndentRules.SPECIAL,
    "let-values": IndentRules.SPECIAL,
    "letrec": IndentRules.SPECIAL,
    "parameterize": IndentRules.SPECIAL,
    "syntax-case": IndentRules.SPECIAL,
    "syntax-rules": IndentRules.SPECIAL,
    "unless": IndentRules.SPECIAL,
    "when": IndentRules.SPECIAL,
    "with-mutex": IndentRules.SPECIAL,
    "with-syntax": IndentRules.SPECIAL,
})


def parse_flags(names: Iterable[str]) -> IndentRules:
    """Build an IndentRules value from flag names like ``["special", "uniform"]``."""
    rules = IndentRules.DEFAULT
    for name in names:
        try:
            flag = IndentRules[name.upper()]
        except KeyError:
            raise ValueError(f"unknown indent flag {name!r}") from None
        rules |= flag
    return rules


class RuleTable:
    """
    Immutable operator -> IndentRules lookup.

    Usage:
        table = RuleTable()
        rules = table.lookup("define", 1)
    """

    def __init__(self, extra: Optional[Mapping[str, IndentRules]] = None):
        rules: Dict[str, IndentRules] = dict(DEFAULT_INDENT_RULES)
        if extra:
            rules.update(extra)
        self._rules = MappingProxyType(rules)

    def __contains__(self, name: str) -> bool:
        return name in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def lookup(self, name: str, column: int) -> IndentRules:
        """
        Look up the rules for an operator starting at zero-based *column*.

        Wrapper forms are only recognized at the top level, i.e. when the
        operator is on column 1 (open paren on column 0).
        """
        rules = self._rules.get(name, IndentRules.DEFAULT)
        if column != 1:
            rules &= ~IndentRules.WRAPPER
        return rules
