from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class BuildScript:
    target: str
    release: str
    build_dir: str
    text: str


class ScriptProvider(ABC):
    """Base contract for build targets (linux package, docs bundle, etc.).

    A provider turns a release identifier and a build directory into the
    script that builds its target. It never runs the script.
    """

    name: str
    description: str = ""

    @abstractmethod
    def script(self, release: str, build_dir: str) -> str:
        """
        Return the build script for ``release`` into ``build_dir``.

        Raises ScriptGenerationError when no valid script can be produced.
        """
