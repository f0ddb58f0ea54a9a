"""
Diagnostics and the sink that collects them.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class Diagnostic:
    """A single style violation. Column is one-based."""
    file: str
    line: int
    column: int
    message: str

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}: {self.message}"

    def to_json(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)


class Reporter:
    """Accumulates diagnostics and renders them for output."""

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def add(self, d: Diagnostic) -> None:
        self.diagnostics.append(d)

    def render_human(self) -> str:
        return "\n".join(str(d) for d in self.diagnostics)

    def to_jsonl(self) -> str:
        return "\n".join(d.to_json() for d in self.diagnostics)
