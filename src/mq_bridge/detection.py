from __future__ import annotations

from pathlib import Path

from .options import InputFormat


EXTENSION_MAP: dict[str, InputFormat] = {
    ".md": InputFormat.MARKDOWN,
    ".markdown": InputFormat.MARKDOWN,
    ".mdx": InputFormat.MDX,
    ".html": InputFormat.HTML,
    ".htm": InputFormat.HTML,
    ".txt": InputFormat.TEXT,
}


def detect_input_format(path: Path | str) -> InputFormat:
    """Guess the input format from a file name; unknown extensions are raw."""

    extension = Path(path).suffix.lower()
    return EXTENSION_MAP.get(extension, InputFormat.RAW)


__all__ = ["EXTENSION_MAP", "detect_input_format"]
