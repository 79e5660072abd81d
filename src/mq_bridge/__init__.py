"""Bridge between markdown query engines and host callers."""

__version__ = "0.1.0"

from .config import AppConfig, load_config
from .core import BridgeService, html_to_markdown, run
from .errors import BridgeError, HtmlConversionError, InputParseError, QueryEvaluationError
from .models import QueryResult
from .options import ConversionOptions, InputFormat, QueryOptions

__all__ = [
    "__version__",
    "AppConfig",
    "BridgeError",
    "BridgeService",
    "ConversionOptions",
    "HtmlConversionError",
    "InputFormat",
    "InputParseError",
    "QueryEvaluationError",
    "QueryOptions",
    "QueryResult",
    "html_to_markdown",
    "load_config",
    "run",
]
