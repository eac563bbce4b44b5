from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ConfigError, ScriptGenerationError
from .registry import TargetRegistry
from .targets.generic import TemplateScript, check_template


@dataclass(slots=True)
class TemplateTargetConfig:
    name: str
    template: str
    description: str = ""
    quote: bool = True


@dataclass(slots=True)
class BuildConfig:
    targets: list[TemplateTargetConfig] = field(default_factory=list)
    log_level: str | None = None


def load_config(path: Path) -> BuildConfig:
    """
    Load a JSON configuration file.

    Expected shape:

        {
          "log_level": "INFO",
          "targets": {
            "<name>": {"template": "...", "description": "...", "quote": true}
          }
        }
    """
    config_file = Path(path)
    try:
        payload = json.loads(config_file.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {config_file}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Config file {config_file} is not valid JSON: {exc}") from exc
    return parse_config(payload, source=str(config_file))


def parse_config(payload: object, *, source: str = "<config>") -> BuildConfig:
    if not isinstance(payload, dict):
        raise ConfigError(f"Config file {source} must contain a JSON object.")

    log_level = payload.get("log_level")
    if log_level is not None:
        if not isinstance(log_level, str) or not isinstance(
            logging.getLevelName(log_level.upper()), int
        ):
            raise ConfigError(f"{source}: 'log_level' must be a logging level name such as 'INFO'.")

    raw_targets = payload.get("targets", {})
    if not isinstance(raw_targets, dict):
        raise ConfigError(f"{source}: 'targets' must be an object keyed by target name.")

    targets: list[TemplateTargetConfig] = []
    for name, entry in raw_targets.items():
        if not name.strip():
            raise ConfigError(f"{source}: target names must not be empty.")
        if not isinstance(entry, dict):
            raise ConfigError(f"{source}: target '{name}' must be an object.")
        template = entry.get("template")
        if not isinstance(template, str) or not template.strip():
            raise ConfigError(f"{source}: target '{name}' requires a non-empty 'template' string.")
        try:
            check_template(name, template)
        except ScriptGenerationError as exc:
            raise ConfigError(f"{source}: {exc}") from exc
        description = entry.get("description", "")
        if not isinstance(description, str):
            raise ConfigError(f"{source}: target '{name}' has a non-string 'description'.")
        quote = entry.get("quote", True)
        if not isinstance(quote, bool):
            raise ConfigError(f"{source}: target '{name}' has a non-boolean 'quote'.")
        targets.append(
            TemplateTargetConfig(name=name, template=template, description=description, quote=quote)
        )

    return BuildConfig(targets=targets, log_level=log_level.upper() if log_level else None)


def register_config_targets(registry: TargetRegistry, config: BuildConfig) -> None:
    """Register a TemplateScript for every target declared in ``config``."""
    for target in config.targets:
        registry.register(
            target.name,
            TemplateScript(
                target.name,
                target.template,
                description=target.description,
                quote=target.quote,
            ),
        )
