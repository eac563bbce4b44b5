"""Built-in build targets.

Importing this package registers every built-in target with
registry.register_target(); build_default_registry() then picks them up.
"""
from __future__ import annotations

from . import docs, linux, source
from .generic import TemplateScript

__all__ = ["TemplateScript", "docs", "linux", "source"]
