from __future__ import annotations

import time
from dataclasses import dataclass
from functools import lru_cache

from .config import AppConfig
from .engines import EngineFactory, EngineRegistry, create_default_registry
from .errors import BridgeError, QueryEvaluationError
from .html_markdown import HtmlToMarkdownConverter
from .inputs import prepare_input
from .logging import InvocationLogEntry, InvocationLogger, StageTimings
from .models import QueryResult, RunOutcome, build_result
from .options import InputFormat, decode_conversion_options, decode_query_options
from .runtime import QueryEngine, RuntimeValue
from .settings import prepare_config
from .utils import content_size, elapsed_ms, generate_run_id
from .values import convert_value


@dataclass(slots=True)
class _RunContext:
    run_id: str
    input_format: InputFormat
    content_bytes: int
    timings: StageTimings


class BridgeService:
    """Runs queries through an engine and converts HTML to Markdown."""

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        engine_factory: EngineFactory | None = None,
        registry: EngineRegistry | None = None,
        html_converter: HtmlToMarkdownConverter | None = None,
    ) -> None:
        self._config = config or AppConfig()
        self._engine_factory = engine_factory
        self._registry = registry
        self._html_converter = html_converter
        self._logger = InvocationLogger(self._config.runtime.log_file)

    @property
    def config(self) -> AppConfig:
        return self._config

    def run(self, code: str, content: str, options: object = None) -> QueryResult:
        return self.run_with_metadata(code, content, options).result

    def run_with_metadata(self, code: str, content: str, options: object = None) -> RunOutcome:
        opts = decode_query_options(options)
        context = _RunContext(
            run_id=generate_run_id(),
            input_format=opts.input_format,
            content_bytes=content_size(content),
            timings=StageTimings(),
        )
        try:
            engine = self._create_engine()
            inputs = self._parse(engine, content, context)
            values = self._evaluate(engine, code, inputs, context)
            result = self._convert(values, context)
        except BridgeError as exc:
            self._log_failure("run", context, exc)
            raise
        self._log_success("run", context, len(result.values))
        return RunOutcome(
            run_id=context.run_id,
            result=result,
            input_format=context.input_format,
            input_count=len(inputs),
            timings=context.timings,
        )

    def html_to_markdown(self, content: str, options: object = None) -> str:
        opts = decode_conversion_options(options)
        context = _RunContext(
            run_id=generate_run_id("html"),
            input_format=InputFormat.HTML,
            content_bytes=content_size(content),
            timings=StageTimings(),
        )
        start = time.perf_counter()
        try:
            markdown = self._get_html_converter().convert(content, opts)
        except BridgeError as exc:
            context.timings.convert_ms = elapsed_ms(start)
            self._log_failure("html_to_markdown", context, exc)
            raise
        context.timings.convert_ms = elapsed_ms(start)
        self._log_success("html_to_markdown", context, 1)
        return markdown

    def _create_engine(self) -> QueryEngine:
        if self._engine_factory is not None:
            return self._engine_factory()
        registry = self._registry or _default_registry()
        return registry.create(self._config.runtime.default_engine)

    def _get_html_converter(self) -> HtmlToMarkdownConverter:
        if self._html_converter is None:
            self._html_converter = HtmlToMarkdownConverter()
        return self._html_converter

    def _parse(self, engine: QueryEngine, content: str, context: _RunContext) -> list[RuntimeValue]:
        start = time.perf_counter()
        try:
            return prepare_input(engine, context.input_format, content)
        finally:
            context.timings.parse_ms = elapsed_ms(start)

    def _evaluate(
        self, engine: QueryEngine, code: str, inputs: list[RuntimeValue], context: _RunContext
    ) -> list[RuntimeValue]:
        start = time.perf_counter()
        try:
            return list(engine.evaluate(code, inputs))
        except Exception as exc:
            raise QueryEvaluationError(str(exc)) from exc
        finally:
            context.timings.evaluate_ms = elapsed_ms(start)

    def _convert(self, values: list[RuntimeValue], context: _RunContext) -> QueryResult:
        start = time.perf_counter()
        result = build_result(convert_value(value) for value in values)
        context.timings.convert_ms = elapsed_ms(start)
        return result

    def _log_success(self, operation: str, context: _RunContext, value_count: int) -> None:
        self._logger.append(
            InvocationLogEntry(
                run_id=context.run_id,
                operation=operation,
                status="success",
                input_format=context.input_format.value,
                content_bytes=context.content_bytes,
                value_count=value_count,
                error_code=None,
                error_message=None,
                timings=context.timings,
            )
        )

    def _log_failure(self, operation: str, context: _RunContext, exc: BridgeError) -> None:
        self._logger.append(
            InvocationLogEntry(
                run_id=context.run_id,
                operation=operation,
                status="failure",
                input_format=context.input_format.value,
                content_bytes=context.content_bytes,
                value_count=0,
                error_code=exc.code,
                error_message=str(exc),
                timings=context.timings,
            )
        )


@lru_cache(maxsize=1)
def _default_registry() -> EngineRegistry:
    return create_default_registry()


def run(code: str, content: str, options: object = None) -> dict[str, object]:
    """Run ``code`` against ``content`` and return ``{"values": [...], "text": ...}``."""

    return BridgeService(prepare_config()).run(code, content, options).to_payload()


def html_to_markdown(content: str, options: object = None) -> str:
    return BridgeService(prepare_config()).html_to_markdown(content, options)


__all__ = [
    "BridgeService",
    "html_to_markdown",
    "run",
]
