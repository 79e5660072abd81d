from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from .options import DEFAULT_INPUT_FORMAT, InputFormat, parse_input_format


CONFIG_FILE = Path("config.toml")


@dataclass(slots=True)
class RuntimeConfig:
    default_input_format: InputFormat = DEFAULT_INPUT_FORMAT
    default_engine: str | None = None
    log_file: Path | None = None
    max_content_size_mb: int = 25
    enable_local_api: bool = False


@dataclass(slots=True)
class APIConfig:
    host: str = "127.0.0.1"
    port: int = 8000


@dataclass(slots=True)
class AppConfig:
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)
    api: APIConfig = field(default_factory=APIConfig)

    @property
    def max_content_bytes(self) -> int:
        return self.runtime.max_content_size_mb * 1024 * 1024


def _read_toml(path: Path) -> Mapping[str, object]:
    if not path.exists():
        return {}
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _optional_str(value: object | None) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _build_runtime(data: Mapping[str, object] | None) -> RuntimeConfig:
    if not data:
        return RuntimeConfig()
    log_file = _optional_str(data.get("log_file"))
    return RuntimeConfig(
        default_input_format=parse_input_format(data.get("default_input_format")),
        default_engine=_optional_str(data.get("default_engine")),
        log_file=Path(log_file) if log_file else None,
        max_content_size_mb=int(data.get("max_content_size_mb", 25)),
        enable_local_api=bool(data.get("enable_local_api", False)),
    )


def _build_api(data: Mapping[str, object] | None) -> APIConfig:
    if not data:
        return APIConfig()
    return APIConfig(host=str(data.get("host", "127.0.0.1")), port=int(data.get("port", 8000)))


def load_config(path: Path | None = None) -> AppConfig:
    path = path or CONFIG_FILE
    raw = _read_toml(path)
    runtime_data = raw.get("runtime") if isinstance(raw, Mapping) else None
    api_data = raw.get("api") if isinstance(raw, Mapping) else None
    runtime = _build_runtime(runtime_data if isinstance(runtime_data, Mapping) else None)
    api = _build_api(api_data if isinstance(api_data, Mapping) else None)
    return AppConfig(runtime=runtime, api=api)


def dump_config(config: AppConfig) -> str:
    payload = {
        "runtime": {
            "default_input_format": config.runtime.default_input_format.value,
            "default_engine": config.runtime.default_engine,
            "log_file": str(config.runtime.log_file) if config.runtime.log_file else None,
            "max_content_size_mb": config.runtime.max_content_size_mb,
            "enable_local_api": config.runtime.enable_local_api,
        },
        "api": {
            "host": config.api.host,
            "port": config.api.port,
        },
    }
    return json.dumps(payload, indent=2)


__all__ = [
    "APIConfig",
    "AppConfig",
    "CONFIG_FILE",
    "RuntimeConfig",
    "dump_config",
    "load_config",
]
