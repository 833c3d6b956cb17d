"""
File-level transliteration.

Routes files and directories through the engine and saves the ASCII
output next to an output directory, reporting progress on the console.
"""

import os
import sys
from pathlib import Path
from typing import Optional

from .engine import TransliterationEngine, default_engine
from .scanner import MalformedInputError


class FileTransliterator:
    """
    Transliterates files and directories of UTF-8 text to ASCII.

    Accepts a file path or a directory path and writes
    ``<stem>.ascii<suffix>`` files into the output directory.
    """

    DEFAULT_OUTPUT_DIR = "asciifold_output"
    OUTPUT_SUFFIX = ".ascii"

    def __init__(
        self,
        output_dir: Optional[str] = None,
        engine: Optional[TransliterationEngine] = None,
    ):
        self.output_dir = output_dir or os.path.join(os.getcwd(), self.DEFAULT_OUTPUT_DIR)
        self.engine = engine or default_engine()
        os.makedirs(self.output_dir, exist_ok=True)

    def convert(self, source: str, save: bool = True) -> bytes:
        """
        Transliterate a file or every file in a directory.

        Args:
            source: File or directory path
            save: If True, write the output into ``output_dir``

        Returns:
            The ASCII output

        Raises:
            ValueError: If ``source`` is neither a file nor a directory.
            MalformedInputError: If a single file is not valid UTF-8.
        """
        source = source.strip()

        if os.path.isdir(source):
            print(f"[DIR] Transliterating all files in: {source}")
            return self.convert_directory(source, save=save)

        if not os.path.isfile(source):
            raise ValueError(
                f"Cannot handle source: {source}\n"
                f"Provide a valid file or directory path."
            )

        print(f"[FILE] Transliterating: {source}")
        output = self.engine.transliterate_alloc(Path(source).read_bytes())
        if save:
            self._save(source, output)
        return output

    def convert_directory(self, dir_path: str, save: bool = True) -> bytes:
        """Transliterate every regular file in a directory, skipping invalid ones."""
        results = []
        converted_count = 0

        for filename in sorted(os.listdir(dir_path)):
            file_path = os.path.join(dir_path, filename)
            if not os.path.isfile(file_path):
                continue

            try:
                output = self.engine.transliterate_alloc(Path(file_path).read_bytes())
            except MalformedInputError as e:
                print(f"[SKIP] {filename}: {e}", file=sys.stderr)
                continue
            except OSError as e:
                print(f"[ERROR] Failed to read {filename}: {e}", file=sys.stderr)
                continue

            if save:
                self._save(file_path, output)
            results.append(output)
            converted_count += 1

        print(f"[DIR] {converted_count} files transliterated in: {dir_path}")
        return b"\n".join(results)

    def output_path(self, source: str) -> str:
        """Return where the output for ``source`` is saved."""
        path = Path(source)
        return os.path.join(self.output_dir, f"{path.stem}{self.OUTPUT_SUFFIX}{path.suffix}")

    def _save(self, source: str, output: bytes) -> None:
        out_path = self.output_path(source)
        Path(out_path).write_bytes(output)
        print(f"[SAVED] {out_path}")
