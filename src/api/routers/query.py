from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_config, get_service
from api.schemas import (
    ErrorResponse,
    FormatInfo,
    HtmlToMarkdownRequest,
    HtmlToMarkdownResponse,
    RunRequest,
    RunResponse,
    StageTimingsPayload,
)
from api.utils import run_bridge_call
from mq_bridge.config import AppConfig
from mq_bridge.core import BridgeService
from mq_bridge.detection import EXTENSION_MAP
from mq_bridge.options import InputFormat, QueryOptions
from mq_bridge.utils import content_size

router = APIRouter(tags=["query"])

ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"model": ErrorResponse, "description": "Input, query or conversion failure"},
    503: {"model": ErrorResponse, "description": "No query engine available"},
}


@router.post("/run", summary="Run a query against content", response_model=RunResponse, responses=ERROR_RESPONSES)
async def run_query(
    request: RunRequest,
    service: BridgeService = Depends(get_service),
    config: AppConfig = Depends(get_config),
) -> RunResponse:
    _enforce_size_limit(request.content, config)
    options: object = request.options
    if options is None:
        options = QueryOptions(input_format=config.runtime.default_input_format)
    outcome = await run_bridge_call(service.run_with_metadata, request.code, request.content, options)
    timings = outcome.timings
    return RunResponse(
        run_id=outcome.run_id,
        input_format=outcome.input_format.value,
        values=outcome.result.filtered_values,
        text=outcome.result.text,
        timings=StageTimingsPayload(
            parse_ms=timings.parse_ms,
            evaluate_ms=timings.evaluate_ms,
            convert_ms=timings.convert_ms,
        ),
    )


@router.post(
    "/html-to-markdown",
    summary="Convert HTML to Markdown",
    response_model=HtmlToMarkdownResponse,
    responses=ERROR_RESPONSES,
)
async def convert_html(
    request: HtmlToMarkdownRequest,
    service: BridgeService = Depends(get_service),
    config: AppConfig = Depends(get_config),
) -> HtmlToMarkdownResponse:
    _enforce_size_limit(request.content, config)
    markdown = await run_bridge_call(service.html_to_markdown, request.content, request.options)
    return HtmlToMarkdownResponse(markdown=markdown)


@router.get("/formats", summary="List supported input formats", response_model=list[FormatInfo])
def list_formats() -> list[FormatInfo]:
    return [
        FormatInfo(
            name=fmt.value,
            extensions=[ext for ext, mapped in EXTENSION_MAP.items() if mapped is fmt],
        )
        for fmt in InputFormat
    ]


def _enforce_size_limit(content: str, config: AppConfig) -> None:
    if content_size(content) > config.max_content_bytes:
        raise HTTPException(status_code=413, detail="SIZE_LIMIT")


__all__ = ["router"]
