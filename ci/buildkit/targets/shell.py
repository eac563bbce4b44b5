"""POSIX shell rendering shared by the built-in targets."""
from __future__ import annotations

import shlex

from ..validation import require_build_dir, validate_git_ref


def artifact_stem(release: str) -> str:
    """Flatten a git ref (e.g. 'release/1.2') into a file-name-safe stem."""
    return release.replace("/", "-")


def generated_sh_header(target: str, release: str) -> str:
    return f"#!/bin/sh\n# Generated by buildkit (target: {target}, release: {release})\nset -eu\n"


def render_shell_script(target: str, release: str, build_dir: str, body: list[str]) -> str:
    """
    Validate inputs and assemble a shell script.

    The script defines RELEASE, BUILD_DIR and ARTIFACT before ``body``, so
    body lines only refer to those variables and never splice raw input.
    """
    validate_git_ref(release)
    require_build_dir(build_dir)
    lines = [
        generated_sh_header(target, release),
        f"RELEASE={shlex.quote(release)}",
        f"BUILD_DIR={shlex.quote(build_dir)}",
        f"ARTIFACT={shlex.quote(artifact_stem(release))}",
        "",
        *body,
    ]
    return "\n".join(lines) + "\n"


def checkout_release() -> list[str]:
    return [
        "git fetch --tags --quiet origin",
        'git -c advice.detachedHead=false checkout --quiet "$RELEASE"',
    ]
