"""
Import Ordering

Keys and comparisons for the nested import blocks:

    (Chapter :1.2 "Title"
      (use (:1.1 square cube)
           (?1.3 sum-cubes))
      ...)

A section (Chapter/Section/Exercise) at the top level contains a ``use``
block, which contains ``(ID NAME ...)`` declarations. Ids must be in order,
and so must the names within each declaration.
"""

from enum import IntEnum
from typing import Iterable, List, Tuple


class ImportBlock(IntEnum):
    """Nested import block the traversal is currently inside."""
    NONE = 0
    # Chapter/Section/Exercise form.
    SECTION = 1
    # The (use ...) form inside SECTION.
    USE = 2
    # One of the (ID NAME ...) forms inside USE.
    DECL = 3


# Column of the "use" operator inside a section body: "  (use".
USE_COLUMN = 3


def lookup_import_block(name: str, column: int,
                        section_operators: Iterable[str] = ("Chapter", "Section", "Exercise"),
                        use_keyword: str = "use") -> ImportBlock:
    """Return the import block opened by an operator. Never returns DECL."""
    if column == 1 and name in section_operators:
        return ImportBlock.SECTION
    if column == USE_COLUMN and name == use_keyword:
        return ImportBlock.USE
    return ImportBlock.NONE


def id_sort_key(import_id: str) -> Tuple[str, List[Tuple[int, str]]]:
    """
    Sort key for an import id such as ``:1.2.3`` or ``?2.10``.

    The sigil sorts first (':' before '?'). Components compare by length and
    then content, so "9" < "10", and a missing component sorts before any
    present one, so ":1.2" < ":1.2.1".
    """
    sigil, rest = import_id[:1], import_id[1:]
    return sigil, [(len(part), part) for part in rest.split(".")]


def correct_id_order(prev: str, current: str) -> bool:
    """Return True if *current* may follow *prev*. An empty *prev* accepts anything."""
    if not prev:
        return True
    return id_sort_key(prev) <= id_sort_key(current)


def correct_name_order(prev: str, current: str) -> bool:
    """Return True if name *current* may follow *prev* (strictly increasing)."""
    return prev < current
