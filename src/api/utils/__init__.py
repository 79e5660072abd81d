from .executors import http_error, run_bridge_call

__all__ = ["http_error", "run_bridge_call"]
