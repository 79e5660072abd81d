from __future__ import annotations

import hashlib
import os
import tempfile
import time
from pathlib import Path


def generate_run_id(prefix: str = "run") -> str:
    epoch_ms = int(time.time() * 1000)
    random_bits = hashlib.sha256(os.urandom(16)).hexdigest()[:8]
    return f"{prefix}-{epoch_ms}-{random_bits}"


def atomic_write(path: Path, data: str, encoding: str = "utf-8") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile("w", delete=False, dir=path.parent, encoding=encoding) as tmp:
        tmp.write(data)
        tmp.flush()
        os.fsync(tmp.fileno())
    os.replace(tmp.name, path)


def elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


def content_size(content: str) -> int:
    return len(content.encode("utf-8"))


__all__ = ["atomic_write", "content_size", "elapsed_ms", "generate_run_id"]
