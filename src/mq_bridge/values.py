"""Transport values handed back across the host boundary."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Union, assert_never

from .runtime import (
    Array,
    Ast,
    Boolean,
    Dict,
    Function,
    Markdown,
    Module,
    NativeFunction,
    NoneValue,
    Number,
    RuntimeValue,
    String,
    Symbol,
)


@dataclass(frozen=True, slots=True)
class SequenceValue:
    items: tuple["TransportValue", ...] = ()

    def is_empty(self) -> bool:
        return not self.items

    def text(self) -> str:
        return "\n".join(item.text() for item in self.items)

    def to_python(self) -> list[object]:
        return [item.to_python() for item in self.items]


@dataclass(frozen=True, slots=True)
class MappingValue:
    entries: dict[str, "TransportValue"] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.entries

    def text(self) -> str:
        return "\n".join(f"{key}: {value.text()}" for key, value in self.entries.items())

    def to_python(self) -> dict[str, object]:
        return {key: value.to_python() for key, value in self.entries.items()}


@dataclass(frozen=True, slots=True)
class LeafValue:
    text_value: str = ""

    def is_empty(self) -> bool:
        return self.text_value == ""

    def text(self) -> str:
        return self.text_value

    def to_python(self) -> str:
        return self.text_value


TransportValue = Union[SequenceValue, MappingValue, LeafValue]


def format_number(value: int | float) -> str:
    """Render a number without exponent notation, ``inf``/``-inf``/``NaN`` for non-finite values."""

    if isinstance(value, bool):
        value = int(value)
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def _key_text(key: object) -> str:
    if isinstance(key, Symbol):
        return key.name
    return str(key)


def convert_value(value: RuntimeValue) -> TransportValue:
    """Collapse an engine value into its transport shape."""

    match value:
        case Array(items=items):
            return SequenceValue(tuple(convert_value(item) for item in items))
        case Dict(entries=entries):
            return MappingValue({_key_text(key): convert_value(item) for key, item in entries.items()})
        case Markdown(node=node):
            return LeafValue(str(node))
        case String(value=text):
            return LeafValue(text)
        case Symbol(name=name):
            return LeafValue(name)
        case Number(value=number):
            return LeafValue(format_number(number))
        case Boolean(value=flag):
            return LeafValue("true" if flag else "false")
        case Function() | NativeFunction() | Module() | Ast() | NoneValue():
            # Not representable in the transport model.
            return LeafValue("")
        case _:
            assert_never(value)


__all__ = [
    "LeafValue",
    "MappingValue",
    "SequenceValue",
    "TransportValue",
    "convert_value",
    "format_number",
]
