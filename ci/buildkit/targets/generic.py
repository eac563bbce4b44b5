"""
Template-driven ScriptProvider.

Not wired into the default registry; configuration files declare template
targets and tests use it to stand up simple providers.
"""
from __future__ import annotations

import shlex
import string

from ..base import ScriptProvider
from ..errors import ScriptGenerationError
from ..validation import require_build_dir, require_release

PLACEHOLDERS = frozenset({"release", "build_dir"})


def check_template(name: str, template: str) -> None:
    """Reject templates whose fields are anything but {release} or {build_dir}."""
    try:
        fields = [field for _, field, _, _ in string.Formatter().parse(template) if field is not None]
    except ValueError as exc:
        raise ScriptGenerationError(f"Target '{name}' has a malformed template: {exc}") from exc
    unknown = sorted({field for field in fields if field not in PLACEHOLDERS})
    if unknown:
        raise ScriptGenerationError(
            f"Target '{name}' template uses unsupported placeholder(s) "
            + ", ".join("{" + field + "}" for field in unknown)
            + ". Supported placeholders: {release}, {build_dir}"
        )


class TemplateScript(ScriptProvider):
    """Render a command template with ``{release}`` and ``{build_dir}`` fields."""

    def __init__(
        self,
        name: str,
        template: str,
        *,
        description: str = "",
        quote: bool = True,
    ) -> None:
        check_template(name, template)
        self.name = name
        self.template = template
        self.description = description
        self.quote = quote

    def script(self, release: str, build_dir: str) -> str:
        require_release(release)
        require_build_dir(build_dir)
        values = {"release": release, "build_dir": build_dir}
        if self.quote:
            values = {key: shlex.quote(value) for key, value in values.items()}
        try:
            return self.template.format_map(values)
        except (AttributeError, IndexError, KeyError, TypeError, ValueError) as exc:
            # Format specs such as {release:d} only fail once values are known.
            raise ScriptGenerationError(
                f"Target '{self.name}' has a malformed template: {exc}"
            ) from exc

    def __repr__(self) -> str:
        return f"TemplateScript(name={self.name!r}, template={self.template!r})"
