"""Persist rendered pages beneath an output directory."""

from __future__ import annotations

import typing as typ
from pathlib import Path, PurePosixPath


class PageWriter(typ.Protocol):
    """Anything that can persist rendered text at a relative output path."""

    def write(self, relative_path: str, text: str) -> Path:
        """Persist ``text`` at ``relative_path`` and return where it went."""
        ...


class FileSystemWriter:
    """Write UTF-8 pages under ``output_dir``, creating parent directories."""

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = output_dir

    def write(self, relative_path: str, text: str) -> Path:
        """Write ``text`` to ``output_dir / relative_path``.

        Raises
        ------
        ValueError
            If ``relative_path`` is absolute or escapes the output directory.
        OSError
            Bubbles up when the filesystem write fails.
        """
        pure = PurePosixPath(relative_path)
        if pure.is_absolute() or ".." in pure.parts:
            msg = f"Refusing to write outside the output directory: {relative_path!r}"
            raise ValueError(msg)
        output_path = self.output_dir.joinpath(*pure.parts)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text, encoding="utf-8")
        return output_path


__all__ = ["FileSystemWriter", "PageWriter"]
