"""Output writers."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Iterable
from pathlib import Path


class AtomicTextWriter:
    """Write a text file through a temporary sibling and an atomic rename.

    Readers never observe a partially written output file.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def write(self, path: Path, lines: Iterable[str]) -> Path:
        """Write ``lines`` to ``path``, one per line with ``\\n`` endings.

        Parameters
        ----------
        path : Path
            Destination file; replaced if it already exists.
        lines : Iterable[str]
            Lines without terminators.

        Returns
        -------
        Path
            ``path``.
        """
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding=self.encoding, newline="\n") as handle:
                for line in lines:
                    handle.write(line)
                    handle.write("\n")
            os.replace(tmp_path, path)
        except Exception:
            tmp_path.unlink(missing_ok=True)
            raise
        return path
