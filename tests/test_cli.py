from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from conftest import FakeEngine, FakeMarkItDown
from mq_bridge import cli as cli_mod
from mq_bridge import core as core_mod
from mq_bridge.engines import EngineRegistry
from mq_bridge.html_markdown import HtmlToMarkdownConverter
from mq_bridge.runtime import Dict, Markdown, String

runner = CliRunner()


@pytest.fixture
def engine(monkeypatch) -> FakeEngine:
    engine = FakeEngine()

    def _registry() -> EngineRegistry:
        registry = EngineRegistry()
        registry.register("fake", lambda: engine)
        return registry

    monkeypatch.setattr(cli_mod, "create_default_registry", _registry)
    return engine


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    path = tmp_path / "config.toml"
    path.write_text(f'[runtime]\nlog_file = "{(tmp_path / "log.jsonl").as_posix()}"\n', encoding="utf-8")
    return path


def test_run_detects_format_from_extension(engine: FakeEngine, tmp_path: Path, config_path: Path) -> None:
    source = tmp_path / "page.html"
    source.write_text("<p>x</p>", encoding="utf-8")
    result = runner.invoke(cli_mod.app, ["run", "self", str(source), "--config", str(config_path)])
    assert result.exit_code == 0, result.output
    assert engine.parsed == [("html", "<p>x</p>")]
    assert "html:<p>x</p>" in result.output


def test_run_reads_stdin_with_explicit_format(engine: FakeEngine, config_path: Path) -> None:
    result = runner.invoke(
        cli_mod.app,
        ["run", "self", "--format", "raw", "--config", str(config_path)],
        input="from stdin",
    )
    assert result.exit_code == 0, result.output
    assert engine.parsed == []
    assert "from stdin" in result.output


def test_run_stdin_uses_configured_default_format(engine: FakeEngine, tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text(
        f'[runtime]\ndefault_input_format = "text"\nlog_file = "{(tmp_path / "log.jsonl").as_posix()}"\n',
        encoding="utf-8",
    )
    result = runner.invoke(cli_mod.app, ["run", "self", "--config", str(path)], input="plain")
    assert result.exit_code == 0, result.output
    assert engine.parsed == [("text", "plain")]


def test_run_json_output(engine: FakeEngine, config_path: Path) -> None:
    engine.outputs = [Markdown("# A"), String(""), Dict({"k": String("v")})]
    result = runner.invoke(
        cli_mod.app,
        ["run", "self", "--json", "--format", "null", "--config", str(config_path)],
        input="",
    )
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"values": ["# A", "k: v"], "text": "# A\nk: v"}


def test_run_failure_exits_non_zero(engine: FakeEngine, config_path: Path) -> None:
    engine.eval_error = "boom"
    result = runner.invoke(
        cli_mod.app,
        ["run", "bad(", "--format", "raw", "--config", str(config_path)],
        input="x",
    )
    assert result.exit_code == 1
    assert "EVAL_ERROR" in result.output


def test_html_to_markdown_writes_output(monkeypatch, tmp_path: Path, config_path: Path) -> None:
    backend = FakeMarkItDown("Body\n")
    monkeypatch.setattr(core_mod, "HtmlToMarkdownConverter", lambda: HtmlToMarkdownConverter(backend))
    source = tmp_path / "page.html"
    source.write_text("<title>Doc</title><p>Body</p>", encoding="utf-8")
    target = tmp_path / "out" / "page.md"
    result = runner.invoke(
        cli_mod.app,
        ["html-to-markdown", str(source), "--title-as-h1", "-o", str(target), "--config", str(config_path)],
    )
    assert result.exit_code == 0, result.output
    assert target.read_text(encoding="utf-8") == "# Doc\n\nBody\n"


def test_formats_lists_every_format() -> None:
    result = runner.invoke(cli_mod.app, ["formats"])
    assert result.exit_code == 0
    for name in ("markdown", "mdx", "text", "html", "raw", "null"):
        assert name in result.output


def test_engines_lists_registered(engine: FakeEngine) -> None:
    result = runner.invoke(cli_mod.app, ["engines"])
    assert result.exit_code == 0
    assert "fake" in result.output


def test_history_shows_logged_runs(engine: FakeEngine, config_path: Path) -> None:
    runner.invoke(cli_mod.app, ["run", "self", "--format", "raw", "--config", str(config_path)], input="x")
    result = runner.invoke(cli_mod.app, ["history", "--config", str(config_path)])
    assert result.exit_code == 0
    assert "success" in result.output


def test_show_config(config_path: Path) -> None:
    result = runner.invoke(cli_mod.app, ["show-config", "--config", str(config_path)])
    assert result.exit_code == 0
    assert json.loads(result.output)["runtime"]["default_input_format"] == "markdown"
