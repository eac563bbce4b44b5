"""Linux package target.

Checks out the release, builds it with make into the build directory and
packs the staged install tree into ``$BUILD_DIR/<release>-linux.tar.gz``.
"""
from __future__ import annotations

from ..base import ScriptProvider
from ..registry import register_target
from .shell import checkout_release, render_shell_script


class LinuxPackageScript(ScriptProvider):
    name = "linux"
    description = "Build the Linux release tarball with make."

    def script(self, release: str, build_dir: str) -> str:
        body = [
            *checkout_release(),
            'mkdir -p "$BUILD_DIR/stage"',
            'make -j"$(getconf _NPROCESSORS_ONLN)" RELEASE="$RELEASE" O="$BUILD_DIR"',
            'make O="$BUILD_DIR" DESTDIR="$BUILD_DIR/stage" install',
            'tar -C "$BUILD_DIR/stage" -czf "$BUILD_DIR/$ARTIFACT-linux.tar.gz" .',
        ]
        return render_shell_script(self.name, release, build_dir, body)


@register_target
def _make_linux_target() -> ScriptProvider:
    return LinuxPackageScript()
