"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sicplint.config import LintConfig
from sicplint.runner import lint_source


# =============================================================================
# PATH FIXTURES
# =============================================================================

@pytest.fixture
def fixtures_dir():
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def clean_file(fixtures_dir):
    """A notes file that follows every rule."""
    return fixtures_dir / "clean.ss"


@pytest.fixture
def messy_file(fixtures_dir):
    """A notes file with one violation of most rules."""
    return fixtures_dir / "messy.ss"


# =============================================================================
# LINT FIXTURES
# =============================================================================

@pytest.fixture
def lint():
    """Lint a source string, returning (line, column, message) triples."""
    def _lint(source: str, config: LintConfig = None):
        return [(d.line, d.column, d.message)
                for d in lint_source(source, "test.ss", config)]
    return _lint


def write_file(directory: Path, name: str, text: str) -> Path:
    """Write a source file under *directory* and return its path."""
    path = directory / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path
