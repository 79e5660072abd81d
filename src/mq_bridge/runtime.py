"""Value model and interface of the external query engine."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Protocol, Union


@dataclass(frozen=True, slots=True)
class Array:
    items: tuple["RuntimeValue", ...] = ()


@dataclass(frozen=True, slots=True)
class Symbol:
    name: str


@dataclass(frozen=True, slots=True)
class Dict:
    entries: Mapping[Union[str, Symbol], "RuntimeValue"] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Markdown:
    """A markdown node; ``str(node)`` yields its canonical rendering."""

    node: object


@dataclass(frozen=True, slots=True)
class String:
    value: str


@dataclass(frozen=True, slots=True)
class Number:
    value: int | float


@dataclass(frozen=True, slots=True)
class Boolean:
    value: bool


@dataclass(frozen=True, slots=True)
class Function:
    name: str = ""


@dataclass(frozen=True, slots=True)
class NativeFunction:
    name: str = ""


@dataclass(frozen=True, slots=True)
class Module:
    name: str = ""


@dataclass(frozen=True, slots=True)
class Ast:
    node: object = None


@dataclass(frozen=True, slots=True)
class NoneValue:
    pass


RuntimeValue = Union[
    Array,
    Dict,
    Markdown,
    String,
    Symbol,
    Number,
    Boolean,
    Function,
    NativeFunction,
    Module,
    Ast,
    NoneValue,
]

# Units the engine evaluates queries against share the runtime value model.
EngineInput = RuntimeValue


class QueryEngine(Protocol):
    """Parsers and evaluator provided by a query engine implementation.

    Every method may raise any exception; its message is surfaced to callers.
    """

    def parse_markdown(self, content: str) -> Sequence[RuntimeValue]:  # pragma: no cover - interface
        ...

    def parse_mdx(self, content: str) -> Sequence[RuntimeValue]:  # pragma: no cover - interface
        ...

    def parse_text(self, content: str) -> Sequence[RuntimeValue]:  # pragma: no cover - interface
        ...

    def parse_html(self, content: str) -> Sequence[RuntimeValue]:  # pragma: no cover - interface
        ...

    def evaluate(self, code: str, inputs: Sequence[RuntimeValue]) -> Sequence[RuntimeValue]:  # pragma: no cover - interface
        ...


def raw_input(content: str) -> list[RuntimeValue]:
    return [String(content)]


def null_input() -> list[RuntimeValue]:
    return [NoneValue()]


__all__ = [
    "Array",
    "Ast",
    "Boolean",
    "Dict",
    "EngineInput",
    "Function",
    "Markdown",
    "Module",
    "NativeFunction",
    "NoneValue",
    "Number",
    "QueryEngine",
    "RuntimeValue",
    "String",
    "Symbol",
    "null_input",
    "raw_input",
]
