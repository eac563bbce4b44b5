from __future__ import annotations


class BuildError(Exception):
    """Base error for all build-script failures."""


class UnknownTargetError(BuildError, LookupError):
    """Raised when a target name is not present in the registry."""

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        self.name = name
        self.available = list(available or [])
        supported = ", ".join(self.available) or "<none>"
        super().__init__(f"Unknown target '{name}'. Supported targets: {supported}")


class DuplicateTargetError(BuildError):
    """Raised when a target name is registered twice."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Target '{name}' already registered.")


class ScriptGenerationError(BuildError):
    """Errors raised while a target produces its build script."""


class ConfigError(BuildError):
    """Errors raised while loading a buildkit configuration file."""
