"""Soft decoding of caller-supplied option bags.

Option bags arrive from a foreign boundary as loosely typed mappings whose
keys and values are symbolic tags (plain strings or enum members). Decoding
never fails: anything unrecognised falls back to the defaults below.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum


class InputFormat(str, Enum):
    MARKDOWN = "markdown"
    MDX = "mdx"
    TEXT = "text"
    HTML = "html"
    RAW = "raw"
    NULL = "null"


DEFAULT_INPUT_FORMAT = InputFormat.MARKDOWN

INPUT_FORMAT_KEY = "input_format"

_CONVERSION_FLAGS: tuple[str, ...] = (
    "extract_scripts_as_code_blocks",
    "generate_front_matter",
    "use_title_as_h1",
)


@dataclass(frozen=True, slots=True)
class QueryOptions:
    """Options for a single query run."""

    input_format: InputFormat = DEFAULT_INPUT_FORMAT


@dataclass(frozen=True, slots=True)
class ConversionOptions:
    """Options for a single HTML to Markdown conversion."""

    extract_scripts_as_code_blocks: bool = False
    generate_front_matter: bool = False
    use_title_as_h1: bool = False


def _tag_name(tag: object) -> str | None:
    if isinstance(tag, Enum):
        tag = tag.value
    if isinstance(tag, str):
        return tag
    return None


def parse_input_format(tag: object) -> InputFormat:
    """Map a format tag to :class:`InputFormat`, defaulting to Markdown."""

    if isinstance(tag, InputFormat):
        return tag
    match _tag_name(tag):
        case "mdx":
            return InputFormat.MDX
        case "text":
            return InputFormat.TEXT
        case "html":
            return InputFormat.HTML
        case "raw":
            return InputFormat.RAW
        case "null":
            return InputFormat.NULL
        case _:
            return DEFAULT_INPUT_FORMAT


def _lookup(raw: Mapping[object, object], key: str) -> object | None:
    for candidate, value in raw.items():
        if _tag_name(candidate) == key:
            return value
    return None


def decode_query_options(raw: object) -> QueryOptions:
    if isinstance(raw, QueryOptions):
        return raw
    if not isinstance(raw, Mapping):
        return QueryOptions()
    return QueryOptions(input_format=parse_input_format(_lookup(raw, INPUT_FORMAT_KEY)))


def _flag(raw: Mapping[object, object], key: str) -> bool:
    value = _lookup(raw, key)
    return value if isinstance(value, bool) else False


def decode_conversion_options(raw: object) -> ConversionOptions:
    if isinstance(raw, ConversionOptions):
        return raw
    if not isinstance(raw, Mapping):
        return ConversionOptions()
    return ConversionOptions(**{name: _flag(raw, name) for name in _CONVERSION_FLAGS})


__all__ = [
    "ConversionOptions",
    "DEFAULT_INPUT_FORMAT",
    "InputFormat",
    "QueryOptions",
    "decode_conversion_options",
    "decode_query_options",
    "parse_input_format",
]
