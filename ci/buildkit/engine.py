from __future__ import annotations

import logging

from .base import BuildScript
from .errors import BuildError, ScriptGenerationError
from .registry import TargetRegistry

logger = logging.getLogger(__name__)


def render_script(
    *,
    registry: TargetRegistry,
    target_name: str,
    release: str,
    build_dir: str,
) -> BuildScript:
    """Look up ``target_name`` and produce its build script."""
    target = registry.get(target_name)
    try:
        text = target.script(release, build_dir)
    except BuildError:
        raise
    except Exception as exc:
        raise ScriptGenerationError(
            f"Target '{target_name}' failed to generate a build script "
            f"for release '{release}' into {build_dir}"
        ) from exc

    if not isinstance(text, str):
        raise ScriptGenerationError(
            f"Target '{target_name}' returned {type(text).__name__} instead of a script string."
        )
    if not text.strip():
        raise ScriptGenerationError(f"Target '{target_name}' returned an empty script.")

    logger.debug(
        "Generated build script for target '%s' (release=%s, build_dir=%s, %d bytes)",
        target_name,
        release,
        build_dir,
        len(text),
    )
    return BuildScript(target=target_name, release=release, build_dir=build_dir, text=text)
