from __future__ import annotations

import json
import threading
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any


@dataclass(slots=True)
class StageTimings:
    parse_ms: float = 0.0
    evaluate_ms: float = 0.0
    convert_ms: float = 0.0


@dataclass(slots=True)
class InvocationLogEntry:
    run_id: str
    operation: str
    status: str
    input_format: str | None
    content_bytes: int
    value_count: int
    error_code: str | None
    error_message: str | None
    timings: StageTimings

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["timings"] = asdict(self.timings)
        return payload


class InvocationLogger:
    def __init__(self, log_file: Path | None) -> None:
        self._log_file = log_file
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self._log_file is not None

    def append(self, entry: InvocationLogEntry) -> None:
        if self._log_file is None:
            return
        line = json.dumps(entry.to_dict(), ensure_ascii=False)
        with self._lock:
            self._log_file.parent.mkdir(parents=True, exist_ok=True)
            with self._log_file.open("a", encoding="utf-8") as handle:
                handle.write(line + "\n")


def read_log(log_file: Path) -> list[dict[str, Any]]:
    if not log_file.exists():
        return []
    with log_file.open("r", encoding="utf-8") as handle:
        return [json.loads(line) for line in handle if line.strip()]


__all__ = [
    "InvocationLogEntry",
    "InvocationLogger",
    "StageTimings",
    "read_log",
]
