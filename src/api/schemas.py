from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class HealthStatus(BaseModel):
    status: str
    version: str


class RunRequest(BaseModel):
    code: str
    content: str = ""
    # Loosely typed on purpose: unknown keys and values fall back to defaults.
    options: dict[str, Any] | None = None


class StageTimingsPayload(BaseModel):
    parse_ms: float
    evaluate_ms: float
    convert_ms: float


class RunResponse(BaseModel):
    run_id: str
    input_format: str
    values: list[str] = Field(default_factory=list)
    text: str = ""
    timings: StageTimingsPayload


class HtmlToMarkdownRequest(BaseModel):
    content: str
    options: dict[str, Any] | None = None


class HtmlToMarkdownResponse(BaseModel):
    markdown: str


class FormatInfo(BaseModel):
    name: str
    extensions: list[str]


class ErrorDetail(BaseModel):
    code: str
    message: str


class ErrorResponse(BaseModel):
    detail: ErrorDetail
