from __future__ import annotations

import re

from .errors import ScriptGenerationError

_REF_CHARS = re.compile(r"[A-Za-z0-9._/+@-]+")


def require_release(release: str) -> str:
    if not isinstance(release, str) or not release.strip():
        raise ScriptGenerationError("Release must not be empty.")
    return release


def require_build_dir(build_dir: str) -> str:
    if not isinstance(build_dir, str) or not build_dir.strip():
        raise ScriptGenerationError("Build directory must not be empty.")
    if "\0" in build_dir:
        raise ScriptGenerationError("Build directory must not contain NUL bytes.")
    return build_dir


def validate_git_ref(release: str) -> str:
    """
    Check that ``release`` is usable as a git tag, branch or commit.

    Applies the git-check-ref-format rules that can be checked on a single
    string: only ref-safe characters (no whitespace or control characters),
    no leading '-' or '/', no '..' or '//', no path component starting with
    '.' or ending with '.lock', no trailing '/' or '.', and not the single
    character '@'.
    """
    require_release(release)
    problems: list[str] = []
    if not _REF_CHARS.fullmatch(release):
        problems.append("contains characters not allowed in a git ref")
    if release.startswith("-"):
        problems.append("starts with '-'")
    if release.startswith("/"):
        problems.append("starts with '/'")
    if ".." in release:
        problems.append("contains '..'")
    if "//" in release:
        problems.append("contains '//'")
    if release == "@":
        problems.append("is the single character '@'")
    components = release.split("/")
    if any(part.startswith(".") for part in components):
        problems.append("has a component starting with '.'")
    if any(part.endswith(".lock") for part in components):
        problems.append("has a component ending with '.lock'")
    if release.endswith(("/", ".")):
        problems.append("ends with '/' or '.'")
    if problems:
        raise ScriptGenerationError(
            f"Invalid release {release!r}: " + "; ".join(problems)
        )
    return release
