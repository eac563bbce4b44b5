from __future__ import annotations

from ..base import ScriptProvider
from ..registry import register_target
from .shell import render_shell_script


class SourceArchiveScript(ScriptProvider):
    """Export the release tree with git archive; no checkout needed."""

    name = "source"
    description = "Export the release source tree as a tar.gz archive."

    def script(self, release: str, build_dir: str) -> str:
        body = [
            'PROJECT="$(basename "$(git rev-parse --show-toplevel)")"',
            'mkdir -p "$BUILD_DIR"',
            "git archive --format=tar.gz "
            '--prefix="$PROJECT-$ARTIFACT/" '
            '-o "$BUILD_DIR/$PROJECT-$ARTIFACT-source.tar.gz" '
            '"$RELEASE"',
        ]
        return render_shell_script(self.name, release, build_dir, body)


@register_target
def _make_source_target() -> ScriptProvider:
    return SourceArchiveScript()
