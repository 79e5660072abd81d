"""Query engine registry and discovery helpers."""

from __future__ import annotations

import importlib
from collections.abc import Callable
from importlib.metadata import entry_points

from .errors import EngineNotFoundError
from .runtime import QueryEngine

ENTRY_POINT_GROUP = "mq_bridge.engines"

EngineFactory = Callable[[], QueryEngine]


class EngineRegistry:
    """Registry of named query engine factories.

    A fresh engine is created for every run, so registered factories must be
    cheap to call and must not share mutable state between engines.
    """

    def __init__(self) -> None:
        self._factories: dict[str, EngineFactory] = {}

    def register(self, name: str, factory: EngineFactory) -> None:
        name = name.strip()
        if not name:
            raise EngineNotFoundError("Engine must be registered under a non-empty name.")
        self._factories[name] = factory

    def names(self) -> list[str]:
        return sorted(self._factories)

    def get(self, name: str) -> EngineFactory:
        try:
            return self._factories[name]
        except KeyError as exc:
            available = ", ".join(self.names()) or "<none>"
            raise EngineNotFoundError(f"Unknown engine '{name}'. Available engines: {available}") from exc

    def resolve(self, name: str | None = None) -> EngineFactory:
        """Return the named factory, or the only registered one when ``name`` is empty."""

        if name:
            return self.get(name)
        if len(self._factories) == 1:
            return next(iter(self._factories.values()))
        if not self._factories:
            raise EngineNotFoundError(
                f"No query engine registered. Install a package exposing the '{ENTRY_POINT_GROUP}' entry point."
            )
        raise EngineNotFoundError(
            f"Multiple engines registered ({', '.join(self.names())}). Select one explicitly."
        )

    def create(self, name: str | None = None) -> QueryEngine:
        return self.resolve(name)()

    def load_entry_points(self) -> None:
        for entry in entry_points(group=ENTRY_POINT_GROUP):
            self.register(entry.name, entry.load())

    def load_module(self, module_name: str) -> None:
        """Register engines exposed by an importable module.

        The module must define ``register_engines(registry)`` or an
        ``ENGINES`` mapping of names to factories.
        """

        try:
            module = importlib.import_module(module_name)
        except ImportError as exc:
            raise EngineNotFoundError(f"Unable to import engine module '{module_name}': {exc}") from exc
        if hasattr(module, "register_engines"):
            module.register_engines(self)
            return
        engines = getattr(module, "ENGINES", None)
        if engines is None:
            raise EngineNotFoundError(
                f"Engine module '{module_name}' must expose register_engines(registry) or ENGINES."
            )
        for name, factory in engines.items():
            self.register(name, factory)


def create_default_registry() -> EngineRegistry:
    registry = EngineRegistry()
    registry.load_entry_points()
    return registry


__all__ = [
    "ENTRY_POINT_GROUP",
    "EngineFactory",
    "EngineRegistry",
    "create_default_registry",
]
