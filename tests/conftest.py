"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path
import pytest

# Add the project root to the path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from asciifold.engine import TransliterationEngine
from asciifold.table import TransliterationTable, default_table
from tests.fixtures import SMALL_MAPPING


# ============================================================================
# Pytest Hooks
# ============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "integration: mark as integration test")


# ============================================================================
# Table Fixtures
# ============================================================================


@pytest.fixture
def small_table():
    """Create a table holding only a handful of mappings."""
    return TransliterationTable.from_mapping(SMALL_MAPPING)


@pytest.fixture
def table():
    """Provide the shared Unidecode-backed table."""
    return default_table()


# ============================================================================
# Engine Fixtures
# ============================================================================


@pytest.fixture
def small_engine(small_table):
    """Create an engine over the small table."""
    return TransliterationEngine(small_table)


@pytest.fixture
def engine(table):
    """Create an engine over the Unidecode-backed table."""
    return TransliterationEngine(table)


# ============================================================================
# File Fixtures
# ============================================================================


@pytest.fixture
def text_dir(tmp_path):
    """Create a directory with UTF-8 files and one invalid file."""
    source_dir = tmp_path / "texts"
    source_dir.mkdir()
    (source_dir / "beijing.txt").write_text("北亰\n", encoding="utf-8")
    (source_dir / "greek.md").write_text("Ταΰγετος\n", encoding="utf-8")
    (source_dir / "broken.txt").write_bytes(b"ok \x80 not ok\n")
    (source_dir / "nested").mkdir()
    return source_dir


@pytest.fixture
def output_dir(tmp_path):
    """Provide an output directory path that does not exist yet."""
    return tmp_path / "out"
