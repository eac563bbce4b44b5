from __future__ import annotations

import argparse
import logging
import subprocess
from pathlib import Path
import sys

from .config import BuildConfig, load_config, register_config_targets
from .engine import render_script
from .errors import BuildError
from .log import configure_logging
from .registry import TargetRegistry, build_default_registry

logger = logging.getLogger(__name__)


def _resolve_release(cwd: Path | None) -> str | None:
    """
    Resolve the release from git (in precedence order): tag at HEAD, short commit, else None.
    """
    work_dir = cwd if cwd is not None and cwd.exists() else Path.cwd()
    try:
        # 1. Tag pointing at current HEAD (exact match only)
        r = subprocess.run(
            ["git", "describe", "--tags", "--exact-match"],
            cwd=work_dir,
            capture_output=True,
            text=True,
            timeout=5,
        )
        if r.returncode == 0 and r.stdout.strip():
            return r.stdout.strip()
        # 2. Short commit hash
        r = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            cwd=work_dir,
            capture_output=True,
            text=True,
            timeout=5,
        )
        if r.returncode == 0 and r.stdout.strip():
            return r.stdout.strip()
    except (FileNotFoundError, subprocess.TimeoutExpired):
        logger.debug("git is unavailable; cannot resolve release from %s", work_dir)
    return None


def _build_registry(config: BuildConfig | None = None) -> TargetRegistry:
    """
    Build the default registry and ensure built-in targets are imported.

    Target modules register themselves via registry.register_target() at
    import time; we import them here so they are available on the CLI.
    Targets declared in the config file are added on top.
    """
    # Import built-in targets for side-effect registration.
    from . import targets as _targets  # noqa: F401

    registry = build_default_registry()
    if config is not None:
        register_config_targets(registry, config)
    return registry


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="python -m ci.buildkit",
        description="Generate the build script for a release of a named build target.",
    )
    parser.add_argument("--target", required=False, help="Build target (e.g. linux).")
    parser.add_argument(
        "--release",
        default=None,
        metavar="REF",
        help="Release to build. If omitted: git tag at HEAD, else short commit.",
    )
    parser.add_argument("--build-dir", help="Directory the build writes its artifacts to.")
    parser.add_argument(
        "--out",
        help="Write the script to this file (made executable) instead of stdout.",
    )
    parser.add_argument(
        "--list-targets",
        action="store_true",
        help="List available build targets and exit.",
    )
    parser.add_argument(
        "--config",
        help="Optional JSON config file declaring template targets and the log level.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv if argv is not None else sys.argv[1:])

    config: BuildConfig | None = None
    try:
        if args.config:
            config = load_config(Path(args.config))
        if args.verbose:
            configure_logging(logging.DEBUG)
        else:
            configure_logging(config.log_level if config and config.log_level else logging.WARNING)
        registry = _build_registry(config)
    except BuildError as exc:
        print(f"Configuration failed: {exc}", file=sys.stderr)
        return 1

    if args.list_targets:
        names = registry.names()
        if names:
            print("Available targets:")
            for name in names:
                description = registry.get(name).description
                print(f"  - {name}: {description}" if description else f"  - {name}")
        else:
            print("No targets are currently registered.")
        return 0

    if not args.target:
        raise SystemExit("Error: --target is required unless --list-targets is used.")
    if not args.build_dir:
        raise SystemExit("Error: --build-dir is required for script generation.")

    release = args.release if args.release is not None else _resolve_release(Path.cwd())
    if release is None:
        raise SystemExit("Error: --release is required when no git tag or commit can be resolved.")

    try:
        result = render_script(
            registry=registry,
            target_name=args.target,
            release=release,
            build_dir=args.build_dir,
        )
    except BuildError as exc:
        print(f"Script generation failed: {exc}", file=sys.stderr)
        return 1

    if args.out:
        out_path = Path(args.out)
        try:
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(result.text, encoding="utf-8")
            out_path.chmod(0o755)
        except OSError as exc:
            print(f"Cannot write build script to {out_path}: {exc}", file=sys.stderr)
            return 1
        print(f"Wrote {result.target} build script for {result.release} to {out_path}")
    else:
        sys.stdout.write(result.text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
