from __future__ import annotations

from typing import assert_never

from .errors import InputParseError
from .options import InputFormat
from .runtime import EngineInput, QueryEngine, null_input, raw_input


def prepare_input(engine: QueryEngine, input_format: InputFormat, content: str) -> list[EngineInput]:
    """Turn ``content`` into engine input units according to ``input_format``."""

    match input_format:
        case InputFormat.MARKDOWN:
            parser = engine.parse_markdown
        case InputFormat.MDX:
            parser = engine.parse_mdx
        case InputFormat.TEXT:
            parser = engine.parse_text
        case InputFormat.HTML:
            parser = engine.parse_html
        case InputFormat.RAW:
            return raw_input(content)
        case InputFormat.NULL:
            return null_input()
        case _:
            assert_never(input_format)
    try:
        return list(parser(content))
    except Exception as exc:
        raise InputParseError(str(exc)) from exc


__all__ = ["prepare_input"]
