"""
Tests for the file driver.
"""

from sicplint.config import LintConfig
from sicplint.runner import RunResult, expand_paths, lint_file, lint_paths

from conftest import write_file


class TestLintFile:
    """Test linting single files."""

    def test_clean_fixture(self, clean_file):
        result = lint_file(clean_file)
        assert result.diagnostics == []
        assert result.error is None
        assert not result.failed

    def test_messy_fixture(self, messy_file):
        result = lint_file(messy_file)
        assert result.failed
        found = [(d.line, d.column, d.message) for d in result.diagnostics]
        assert found == [
            (2, 1, "';;;' only allowed on first line copyright"),
            (5, 4, "incorrect indentation"),
            (7, 1, "multiple blank lines"),
            (8, 16, "unexpected two spaces in a row"),
            (9, 13, "unexpected space before ')'"),
            (11, 16, "incorrect import name ordering: b > a"),
            (12, 9, "incorrect import id ordering: :2.2 > :2.1"),
        ]
        assert all(d.file == str(messy_file) for d in result.diagnostics)

    def test_diagnostic_format(self, tmp_path):
        path = write_file(tmp_path, "a.ss", "(a )\n")
        result = lint_file(path)
        assert [str(d) for d in result.diagnostics] == [
            f"{path}:1:4: unexpected space before ')'",
        ]

    def test_missing_file(self, tmp_path):
        result = lint_file(tmp_path / "missing.ss")
        assert result.failed
        assert result.error
        assert result.diagnostics == []

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "bad.ss"
        path.write_bytes(b"(a)\n(\xff)\n")
        result = lint_file(path)
        assert result.failed
        assert "UTF-8" in result.error

    def test_nesting_error_reported(self, tmp_path):
        path = write_file(tmp_path, "deep.ss", "(a)\n)\n(b )\n")
        result = lint_file(path)
        assert result.failed
        assert result.error is None
        assert [(d.line, d.column, d.message) for d in result.diagnostics] == [
            (2, 1, "unmatched ')'"),
        ]

    def test_nesting_error_keeps_earlier_diagnostics_on_line(self, tmp_path):
        path = write_file(tmp_path, "a.ss", "(a)\n  x  y)\n")
        result = lint_file(path)
        assert [(d.line, d.column, d.message) for d in result.diagnostics] == [
            (2, 3, "incorrect indentation"),
            (2, 6, "unexpected two spaces in a row"),
            (2, 7, "unmatched ')'"),
        ]

    def test_no_trailing_newline(self, tmp_path):
        path = write_file(tmp_path, "a.ss", "(define x\n  1)")
        assert lint_file(path).diagnostics == []

    def test_crlf_line_endings(self, tmp_path):
        path = tmp_path / "a.ss"
        path.write_bytes(b"(define x\r\n  1)\r\n")
        assert lint_file(path).diagnostics == []


class TestLintPaths:
    """Test linting several files."""

    def test_status_is_or_of_files(self, tmp_path):
        good = write_file(tmp_path, "good.ss", "(a)\n")
        bad = write_file(tmp_path, "bad.ss", "(a  b)\n")
        assert lint_paths([good]).exit_status == 0
        assert lint_paths([good, bad]).exit_status == 1
        assert lint_paths([bad, good]).exit_status == 1

    def test_missing_file_does_not_stop_run(self, tmp_path):
        good = write_file(tmp_path, "good.ss", "(a )\n")
        run = lint_paths([tmp_path / "missing.ss", good])
        assert run.failed
        assert [r.path for r in run.files] == [str(tmp_path / "missing.ss"), str(good)]
        assert len(run.diagnostics) == 1

    def test_no_files_succeeds(self):
        run = lint_paths([])
        assert run.files == []
        assert run.exit_status == 0

    def test_directory_expansion(self, tmp_path):
        write_file(tmp_path, "src/b.ss", "(a)\n")
        write_file(tmp_path, "src/a.ss", "(a)\n")
        write_file(tmp_path, "notes/text.md", "Some text.\n")
        write_file(tmp_path, "notes/image.svg", "<svg/>\n")
        found = expand_paths([tmp_path], LintConfig().extensions)
        assert [p.relative_to(tmp_path).as_posix() for p in found] == [
            "notes/text.md",
            "src/a.ss",
            "src/b.ss",
        ]

    def test_explicit_file_kept_regardless_of_suffix(self, tmp_path):
        path = write_file(tmp_path, "script.scm", "(a)\n")
        assert expand_paths([path], (".ss",)) == [path]

    def test_parallel_matches_sequential(self, tmp_path):
        paths = [
            write_file(tmp_path, f"f{i}.ss", "(a  b)\n" * (i + 1))
            for i in range(6)
        ]
        sequential = lint_paths(paths)
        parallel = lint_paths(paths, jobs=3)
        assert [r.path for r in parallel.files] == [r.path for r in sequential.files]
        assert parallel.diagnostics == sequential.diagnostics


class TestRunResult:
    """Test the status accumulator."""

    def test_empty(self):
        assert not RunResult().failed
        assert RunResult().exit_status == 0
