from __future__ import annotations

import pytest

from ci.buildkit.base import BuildScript, ScriptProvider
from ci.buildkit.engine import render_script
from ci.buildkit.errors import ScriptGenerationError, UnknownTargetError
from ci.buildkit.registry import TargetRegistry
from ci.buildkit.targets.generic import TemplateScript


class _RejectEmptyRelease(ScriptProvider):
    name = "strict"

    def script(self, release: str, build_dir: str) -> str:
        if release == "":
            raise ScriptGenerationError("release must be set")
        return f"make RELEASE={release} DIR={build_dir}"


class _Broken(ScriptProvider):
    name = "broken"

    def script(self, release: str, build_dir: str) -> str:
        raise RuntimeError("template store unavailable")


class _Returns(ScriptProvider):
    name = "returns"

    def __init__(self, value: object) -> None:
        self.value = value

    def script(self, release: str, build_dir: str) -> str:
        return self.value  # type: ignore[return-value]


def _registry(*providers: ScriptProvider) -> TargetRegistry:
    registry = TargetRegistry()
    for provider in providers:
        registry.register(provider.name, provider)
    return registry


def test_render_script_returns_build_script() -> None:
    registry = TargetRegistry()
    registry.register("linux", TemplateScript("linux", "make RELEASE={release} DIR={build_dir}"))

    result = render_script(
        registry=registry, target_name="linux", release="v1.2", build_dir="/tmp/out"
    )

    assert result == BuildScript(
        target="linux",
        release="v1.2",
        build_dir="/tmp/out",
        text="make RELEASE=v1.2 DIR=/tmp/out",
    )


def test_unknown_target_propagates() -> None:
    with pytest.raises(UnknownTargetError):
        render_script(
            registry=TargetRegistry(), target_name="windows", release="v1.2", build_dir="/tmp/out"
        )


def test_provider_failure_yields_no_script() -> None:
    registry = _registry(_RejectEmptyRelease())

    with pytest.raises(ScriptGenerationError, match="release must be set"):
        render_script(registry=registry, target_name="strict", release="", build_dir="/tmp/out")


def test_unexpected_provider_exception_is_wrapped() -> None:
    registry = _registry(_Broken())

    with pytest.raises(ScriptGenerationError) as excinfo:
        render_script(registry=registry, target_name="broken", release="v1", build_dir="/tmp/out")

    assert "Target 'broken' failed" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, RuntimeError)


@pytest.mark.parametrize("value", ["", "   \n", None, 42])
def test_unusable_script_is_rejected(value: object) -> None:
    registry = _registry(_Returns(value))

    with pytest.raises(ScriptGenerationError):
        render_script(registry=registry, target_name="returns", release="v1", build_dir="/tmp/out")


def test_rendering_is_deterministic() -> None:
    registry = _registry(_RejectEmptyRelease())

    first = render_script(registry=registry, target_name="strict", release="v2", build_dir="/b")
    second = render_script(registry=registry, target_name="strict", release="v2", build_dir="/b")

    assert first == second

    errors = []
    for _ in range(2):
        with pytest.raises(ScriptGenerationError) as excinfo:
            render_script(registry=registry, target_name="strict", release="", build_dir="/b")
        errors.append(str(excinfo.value))
    assert errors[0] == errors[1]
