"""Result models for query runs."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .logging import StageTimings
from .options import InputFormat
from .values import TransportValue


@dataclass(frozen=True, slots=True)
class QueryResult:
    """Converted engine output with its filtered and flattened views."""

    values: tuple[TransportValue, ...] = ()

    @property
    def filtered_values(self) -> list[str]:
        return [value.text() for value in self.values if not value.is_empty()]

    @property
    def text(self) -> str:
        return "\n".join(self.filtered_values)

    def to_payload(self) -> dict[str, object]:
        return {"values": self.filtered_values, "text": self.text}


@dataclass(frozen=True, slots=True)
class RunOutcome:
    """Metadata for an individual query run."""

    run_id: str
    result: QueryResult
    input_format: InputFormat
    input_count: int
    timings: StageTimings


def build_result(values: Iterable[TransportValue]) -> QueryResult:
    return QueryResult(values=tuple(values))


__all__ = [
    "QueryResult",
    "RunOutcome",
    "build_result",
]
