from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Iterator, List

from .base import ScriptProvider
from .errors import DuplicateTargetError, UnknownTargetError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TargetRegistry:
    """Thread-safe registry of build targets keyed by their exact name."""

    _targets: dict[str, ScriptProvider] = field(default_factory=dict)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    def register(self, name: str, provider: ScriptProvider, *, replace: bool = False) -> None:
        """
        Bind ``provider`` under ``name``.

        Names are case-sensitive. A name that is already bound raises
        DuplicateTargetError unless ``replace`` is set, in which case the
        previous binding is overwritten.
        """
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Target name must not be empty.")
        if not isinstance(provider, ScriptProvider):
            raise TypeError(
                f"Target '{name}' must be a ScriptProvider, got {type(provider).__name__}."
            )
        with self._lock:
            if name in self._targets:
                if not replace:
                    raise DuplicateTargetError(name)
                logger.warning("Replacing build target '%s'", name)
            self._targets[name] = provider
        logger.debug("Registered build target '%s' (%s)", name, type(provider).__name__)

    def get(self, name: str) -> ScriptProvider:
        """Look up a target by name, raising UnknownTargetError when absent."""
        with self._lock:
            provider = self._targets.get(name)
            if provider is None:
                raise UnknownTargetError(name, sorted(self._targets))
            return provider

    def find(self, name: str) -> ScriptProvider | None:
        """Look up a target by name, returning None when absent."""
        with self._lock:
            return self._targets.get(name)

    def names(self) -> list[str]:
        """Return all registered target names in sorted order."""
        with self._lock:
            return sorted(self._targets.keys())

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._targets

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        with self._lock:
            return len(self._targets)


_TARGET_FACTORIES: List[Callable[[], ScriptProvider]] = []


def register_target(factory: Callable[[], ScriptProvider]) -> Callable[[], ScriptProvider]:
    """
    Register a ScriptProvider factory.

    This is intended to be used as a decorator in target modules, e.g.:

        @register_target
        def make_target() -> ScriptProvider:
            return MyTarget()
    """
    _TARGET_FACTORIES.append(factory)
    return factory


def build_default_registry() -> TargetRegistry:
    """
    Build a TargetRegistry populated with all statically-registered targets.

    Target modules should call register_target() at import time so that
    they are included here. Importing ci.buildkit.targets pulls in the
    built-in targets.
    """
    registry = TargetRegistry()
    for factory in _TARGET_FACTORIES:
        provider = factory()
        registry.register(provider.name, provider)
    return registry
