from . import health, query

__all__ = ["health", "query"]
