from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pytest

from mq_bridge.config import AppConfig, RuntimeConfig
from mq_bridge.runtime import Markdown, RuntimeValue


class FakeEngine:
    """In-memory engine: each parser yields one markdown node tagged with its format."""

    def __init__(
        self,
        outputs: Sequence[RuntimeValue] | None = None,
        *,
        parse_error: str | None = None,
        eval_error: str | None = None,
    ) -> None:
        self.outputs = outputs
        self.parse_error = parse_error
        self.eval_error = eval_error
        self.parsed: list[tuple[str, str]] = []
        self.evaluated: list[tuple[str, list[RuntimeValue]]] = []

    def _parse(self, fmt: str, content: str) -> list[RuntimeValue]:
        self.parsed.append((fmt, content))
        if self.parse_error is not None:
            raise ValueError(self.parse_error)
        return [Markdown(f"{fmt}:{content}")]

    def parse_markdown(self, content: str) -> list[RuntimeValue]:
        return self._parse("markdown", content)

    def parse_mdx(self, content: str) -> list[RuntimeValue]:
        return self._parse("mdx", content)

    def parse_text(self, content: str) -> list[RuntimeValue]:
        return self._parse("text", content)

    def parse_html(self, content: str) -> list[RuntimeValue]:
        return self._parse("html", content)

    def evaluate(self, code: str, inputs: Sequence[RuntimeValue]) -> list[RuntimeValue]:
        self.evaluated.append((code, list(inputs)))
        if self.eval_error is not None:
            raise RuntimeError(self.eval_error)
        if self.outputs is not None:
            return list(self.outputs)
        return list(inputs)


class FakeMarkItDownResult:
    def __init__(self, text_content: str, title: str | None = None) -> None:
        self.text_content = text_content
        self.title = title


class FakeMarkItDown:
    """Stands in for ``markitdown.MarkItDown``; returns canned markdown."""

    def __init__(self, markdown: str = "converted", *, title: str | None = None, error: str | None = None) -> None:
        self.markdown = markdown
        self.title = title
        self.error = error
        self.received: list[str] = []

    def convert_stream(self, stream, **kwargs):  # type: ignore[no-untyped-def]
        self.received.append(stream.read().decode("utf-8"))
        assert kwargs.get("file_extension") == ".html"
        if self.error is not None:
            raise ValueError(self.error)
        return FakeMarkItDownResult(self.markdown, self.title)


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def app_config(tmp_path: Path) -> AppConfig:
    runtime = RuntimeConfig(log_file=tmp_path / "logs" / "invocations.jsonl", enable_local_api=True)
    return AppConfig(runtime=runtime)
