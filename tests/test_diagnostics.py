"""
Tests for diagnostic values and the reporter.
"""

import json

from sicplint.linter.diagnostics import Diagnostic, Reporter


class TestDiagnostic:
    """Test a single diagnostic."""

    def test_str(self):
        d = Diagnostic("notes.ss", 3, 7, "trailing whitespace")
        assert str(d) == "notes.ss:3:7: trailing whitespace"

    def test_to_json(self):
        d = Diagnostic("notes.ss", 3, 7, "unexpected space before ')'")
        assert json.loads(d.to_json()) == {
            "file": "notes.ss",
            "line": 3,
            "column": 7,
            "message": "unexpected space before ')'",
        }


class TestReporter:
    """Test collecting and rendering diagnostics."""

    def test_empty(self):
        reporter = Reporter()
        assert reporter.diagnostics == []
        assert reporter.render_human() == ""
        assert reporter.to_jsonl() == ""

    def test_render_human_keeps_order(self):
        reporter = Reporter()
        reporter.add(Diagnostic("b.ss", 2, 1, "multiple blank lines"))
        reporter.add(Diagnostic("a.ss", 1, 4, "unexpected space before ')'"))
        assert reporter.render_human() == (
            "b.ss:2:1: multiple blank lines\n"
            "a.ss:1:4: unexpected space before ')'"
        )

    def test_to_jsonl(self):
        reporter = Reporter()
        reporter.add(Diagnostic("a.ss", 1, 5, "unexpected two spaces in a row"))
        reporter.add(Diagnostic("a.ss", 2, 1, "incorrect indentation"))
        records = [json.loads(line) for line in reporter.to_jsonl().splitlines()]
        assert [(r["line"], r["message"]) for r in records] == [
            (1, "unexpected two spaces in a row"),
            (2, "incorrect indentation"),
        ]
