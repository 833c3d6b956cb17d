"""
Unit tests for file-level transliteration.
"""

import os

import pytest

from asciifold.core import FileTransliterator
from asciifold.scanner import MalformedInputError


class TestFileTransliterator:
    """Tests for FileTransliterator."""

    @pytest.fixture
    def transliterator(self, output_dir, small_engine):
        return FileTransliterator(output_dir=str(output_dir), engine=small_engine)

    def test_creates_output_dir(self, transliterator, output_dir):
        """Test that the output directory is created on construction."""
        assert output_dir.is_dir()

    def test_default_output_dir(self, tmp_path, monkeypatch):
        """Test that the output directory defaults under the working directory."""
        monkeypatch.chdir(tmp_path)
        transliterator = FileTransliterator()
        assert transliterator.output_dir == os.path.join(os.getcwd(), "asciifold_output")
        assert (tmp_path / "asciifold_output").is_dir()

    def test_convert_file_saves_output(self, transliterator, text_dir, output_dir, capsys):
        """Test converting and saving a single file."""
        result = transliterator.convert(str(text_dir / "beijing.txt"))

        assert result == b"Bei Jing \n"
        assert (output_dir / "beijing.ascii.txt").read_bytes() == b"Bei Jing \n"
        out = capsys.readouterr().out
        assert "[FILE]" in out
        assert "[SAVED]" in out

    def test_convert_without_saving(self, transliterator, text_dir, output_dir):
        """Test that save=False returns output without writing files."""
        result = transliterator.convert(str(text_dir / "beijing.txt"), save=False)
        assert result == b"Bei Jing \n"
        assert list(output_dir.iterdir()) == []

    def test_convert_strips_whitespace(self, transliterator, text_dir):
        """Test that surrounding whitespace in the source path is ignored."""
        result = transliterator.convert(f"  {text_dir / 'beijing.txt'}\n", save=False)
        assert result == b"Bei Jing \n"

    def test_convert_malformed_file_raises(self, transliterator, text_dir):
        """Test that a single invalid file raises MalformedInputError."""
        with pytest.raises(MalformedInputError):
            transliterator.convert(str(text_dir / "broken.txt"))

    def test_convert_unknown_source(self, transliterator, tmp_path):
        """Test that a missing path is rejected."""
        with pytest.raises(ValueError, match="Cannot handle source"):
            transliterator.convert(str(tmp_path / "missing.txt"))

    def test_convert_directory(self, transliterator, text_dir, output_dir, capsys):
        """Test that a directory converts valid files and skips invalid ones."""
        result = transliterator.convert(str(text_dir))

        # Files are processed in sorted order: beijing.txt, broken.txt, greek.md
        assert result.startswith(b"Bei Jing \n")
        assert sorted(p.name for p in output_dir.iterdir()) == [
            "beijing.ascii.txt",
            "greek.ascii.md",
        ]
        captured = capsys.readouterr()
        assert "[SKIP] broken.txt" in captured.err
        assert "2 files transliterated" in captured.out

    def test_output_path(self, transliterator, output_dir):
        """Test the saved file name for a source."""
        assert transliterator.output_path("/some/where/notes.md") == os.path.join(
            str(output_dir), "notes.ascii.md"
        )
