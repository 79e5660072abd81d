from __future__ import annotations


class BridgeError(RuntimeError):
    code = "BRIDGE_ERROR"
    prefix = ""

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(f"{self.prefix}{message}")
        if code is not None:
            self.code = code


class InputParseError(BridgeError):
    """Raised when an engine parser rejects the input content."""

    code = "PARSE_ERROR"
    prefix = "Error parsing input: "


class QueryEvaluationError(BridgeError):
    """Raised when the engine fails to evaluate a query."""

    code = "EVAL_ERROR"
    prefix = "Error evaluating query: "


class HtmlConversionError(BridgeError):
    code = "HTML_CONVERSION_ERROR"
    prefix = "Error converting HTML to Markdown: "


class EngineNotFoundError(BridgeError):
    code = "NO_ENGINE"


__all__ = [
    "BridgeError",
    "EngineNotFoundError",
    "HtmlConversionError",
    "InputParseError",
    "QueryEvaluationError",
]
