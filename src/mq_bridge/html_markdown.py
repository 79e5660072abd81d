"""HTML to Markdown conversion backed by markitdown."""

from __future__ import annotations

import io
import json
from dataclasses import dataclass, field

from bs4 import BeautifulSoup, Tag

from .errors import HtmlConversionError
from .options import ConversionOptions

FRONT_MATTER_META = ("description", "keywords", "author")

_SCRIPT_LANGUAGES = {
    "text/javascript": "javascript",
    "application/javascript": "javascript",
    "module": "javascript",
    "application/json": "json",
    "application/ld+json": "json",
    "text/typescript": "typescript",
}


@dataclass(slots=True)
class HeadMetadata:
    title: str | None = None
    meta: dict[str, str] = field(default_factory=dict)


def _parse(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def _attr(tag: Tag, name: str) -> str:
    value = tag.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    return (value or "").strip()


def _head_metadata(soup: BeautifulSoup) -> HeadMetadata:
    metadata = HeadMetadata()
    title = soup.find("title")
    if isinstance(title, Tag):
        metadata.title = " ".join(title.get_text().split()) or None
    for meta in soup.find_all("meta"):
        name = _attr(meta, "name").lower()
        if name and name not in metadata.meta:
            metadata.meta[name] = _attr(meta, "content")
    return metadata


def parse_head_metadata(html: str) -> HeadMetadata:
    return _head_metadata(_parse(html))


def _script_language(script: Tag) -> str:
    script_type = _attr(script, "type").lower()
    if not script_type:
        return "javascript"
    return _SCRIPT_LANGUAGES.get(script_type, script_type.rsplit("/", 1)[-1])


def _placeholder(index: int) -> str:
    return f"MQBRIDGESCRIPTBLOCK{index}X"


def _extract_script_blocks(soup: BeautifulSoup) -> list[str]:
    """Swap inline scripts for placeholder paragraphs inside the rendered body.

    markitdown only renders ``<body>`` when the document has one, so scripts
    from ``<head>`` are moved to the start of the body and any other script
    outside it to the end, keeping document order.
    """

    blocks: list[str] = []
    body = soup.body
    leading: list[Tag] = []
    for script in soup.find_all("script"):
        code = (script.string or "").strip("\n")
        if script.has_attr("src") or not code.strip():
            script.decompose()
            continue
        blocks.append(f"```{_script_language(script)}\n{code}\n```")
        placeholder = soup.new_tag("p")
        placeholder.string = _placeholder(len(blocks) - 1)
        if body is None or script.find_parent("body") is not None:
            script.replace_with(placeholder)
        elif script.find_parent("head") is not None:
            script.decompose()
            leading.append(placeholder)
        else:
            script.decompose()
            body.append(placeholder)
    for placeholder in reversed(leading):
        body.insert(0, placeholder)
    return blocks


def extract_scripts(html: str) -> tuple[str, list[str]]:
    """Replace inline scripts with placeholders and return rendered code blocks."""

    soup = _parse(html)
    blocks = _extract_script_blocks(soup)
    return str(soup), blocks


def render_front_matter(metadata: HeadMetadata) -> str:
    fields: list[tuple[str, str]] = []
    if metadata.title:
        fields.append(("title", metadata.title))
    for name in FRONT_MATTER_META:
        value = metadata.meta.get(name)
        if value:
            fields.append((name, value))
    if not fields:
        return ""
    # JSON string literals are valid YAML double-quoted scalars.
    lines = [f"{key}: {json.dumps(value, ensure_ascii=False)}" for key, value in fields]
    return "---\n" + "\n".join(lines) + "\n---\n\n"


class HtmlToMarkdownConverter:
    def __init__(self, converter: object | None = None) -> None:
        if converter is None:
            try:
                from markitdown import MarkItDown
            except ModuleNotFoundError as exc:  # pragma: no cover - import guard
                raise RuntimeError("markitdown dependency is required for HTML conversion") from exc
            converter = MarkItDown()
        self._converter = converter

    def _convert_markup(self, html: str) -> tuple[str, str | None]:
        stream = io.BytesIO(html.encode("utf-8"))
        result = self._converter.convert_stream(stream, file_extension=".html")  # type: ignore[attr-defined]
        if isinstance(result, str):
            return result, None
        if hasattr(result, "text_content"):
            return str(result.text_content or ""), getattr(result, "title", None)
        raise RuntimeError("Unsupported markitdown return type")

    def convert(self, html: str, options: ConversionOptions | None = None) -> str:
        opts = options or ConversionOptions()
        try:
            return self._convert(html, opts)
        except HtmlConversionError:
            raise
        except Exception as exc:
            raise HtmlConversionError(str(exc)) from exc

    def _convert(self, html: str, opts: ConversionOptions) -> str:
        if not (opts.extract_scripts_as_code_blocks or opts.use_title_as_h1 or opts.generate_front_matter):
            return self._convert_markup(html)[0]

        soup = _parse(html)
        metadata = _head_metadata(soup)
        source = html
        blocks: list[str] = []
        if opts.extract_scripts_as_code_blocks:
            blocks = _extract_script_blocks(soup)
            source = str(soup)

        markdown, converted_title = self._convert_markup(source)
        unplaced: list[str] = []
        for index, block in enumerate(blocks):
            placeholder = _placeholder(index)
            if placeholder in markdown:
                markdown = markdown.replace(placeholder, block)
            else:
                unplaced.append(block)
        if unplaced:
            markdown = "\n\n".join(part for part in (markdown.rstrip("\n"), *unplaced) if part) + "\n"

        if not (opts.use_title_as_h1 or opts.generate_front_matter):
            return markdown

        if metadata.title is None and converted_title:
            metadata.title = str(converted_title).strip() or None

        if opts.use_title_as_h1 and metadata.title:
            heading = f"# {metadata.title}"
            body = markdown.lstrip("\n")
            if body.splitlines()[:1] != [heading]:
                markdown = f"{heading}\n\n{body}"
        if opts.generate_front_matter:
            markdown = render_front_matter(metadata) + markdown
        return markdown


__all__ = [
    "HeadMetadata",
    "HtmlToMarkdownConverter",
    "extract_scripts",
    "parse_head_metadata",
    "render_front_matter",
]
