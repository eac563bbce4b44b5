"""Documentation bundle target.

Runs sphinx-build on the release's ``docs/`` tree and archives the HTML
output as ``$BUILD_DIR/<release>-docs.tar.gz``.
"""
from __future__ import annotations

import shlex

from ..base import ScriptProvider
from ..registry import register_target
from .shell import checkout_release, render_shell_script


class DocsBundleScript(ScriptProvider):
    name = "docs"
    description = "Build the HTML documentation bundle with sphinx-build."

    def __init__(self, source_dir: str = "docs") -> None:
        self.source_dir = source_dir

    def script(self, release: str, build_dir: str) -> str:
        body = [
            *checkout_release(),
            'mkdir -p "$BUILD_DIR"',
            f'sphinx-build -q -b html -D release="$RELEASE" {shlex.quote(self.source_dir)} "$BUILD_DIR/html"',
            'tar -C "$BUILD_DIR" -czf "$BUILD_DIR/$ARTIFACT-docs.tar.gz" html',
        ]
        return render_shell_script(self.name, release, build_dir, body)


@register_target
def _make_docs_target() -> ScriptProvider:
    return DocsBundleScript()
