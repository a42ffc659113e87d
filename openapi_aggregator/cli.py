"""
cli.py

Responsibility: CLI entrypoint for the OpenAPI docs aggregator.

Commands:
- `generate`: resolve config from the environment (layered over `.env`), write the
  workflow, then try to write the README
- `setup`: prompt for config, write `.env`, then do what `generate` does with the
  config that `.env` resolves to

Failures writing the workflow or `.env` are fatal (exit status 1). A README that
cannot be written only produces a warning.

This module orchestrates; the real work lives in:
- Config resolution: `config.py`
- `.env` parsing: `env_file.py`
- Rendering: `renderer.py`
"""

from __future__ import annotations

import argparse
import os
from collections.abc import Callable, Mapping
from pathlib import Path

from openapi_aggregator.config import CONFIG_KEYS, Config, prompt_config, resolve_config
from openapi_aggregator.env_file import EnvFileError, load_env_file, missing_keys
from openapi_aggregator.logging import configure_logging, get_logger
from openapi_aggregator.renderer import (
    DEFAULT_WORKFLOW_DIR,
    WORKFLOW_TEMPLATES,
    RenderError,
    write_env_file,
    write_readme,
    write_workflow,
)

logger = get_logger(__name__)


class CLIError(RuntimeError):
    pass


def _load_environ(env_file: Path) -> Mapping[str, str]:
    """
    Process environment layered over the `.env` file.

    Only non-empty process variables win; an empty one falls through to `.env`.
    """
    if not env_file.exists():
        return os.environ
    values = load_env_file(env_file)
    merged = {**values, **{key: value for key, value in os.environ.items() if value}}
    absent = missing_keys(merged, CONFIG_KEYS)
    if absent:
        logger.warning("env_file_missing_keys", path=str(env_file), keys=absent)
    return merged


def _templates_dir(args: argparse.Namespace) -> Path | None:
    return Path(args.templates_dir) if args.templates_dir else None


def _generate(config: Config, args: argparse.Namespace) -> None:
    templates_dir = _templates_dir(args)
    path = write_workflow(config, args.workflow_dir, variant=args.template, templates_dir=templates_dir)
    print(f"✅ Workflow written: {path}")

    if args.no_readme:
        return
    try:
        readme = write_readme(config, args.readme, templates_dir=templates_dir)
    except RenderError as e:
        logger.warning("readme_not_written", path=str(args.readme), error=str(e))
    else:
        print(f"✅ README written: {readme}")


def generate_cmd(args: argparse.Namespace) -> int:
    config = resolve_config(_load_environ(Path(args.env_file)))
    logger.debug("config_resolved", source="environment", config=config)
    _generate(config, args)
    return 0


def setup_cmd(args: argparse.Namespace, *, ask: Callable[[str], str] | None = None) -> int:
    print("🚀 Setting up the OpenAPI documentation aggregator")
    try:
        config = prompt_config(ask)
    except EOFError as e:
        raise CLIError("Setup aborted: no more input") from e
    logger.debug("config_resolved", source="prompt", config=config)

    env_path = write_env_file(config, args.env_file)
    print(f"✅ Configuration saved to {env_path}")

    # Render what the saved `.env` resolves to, so empty answers get their defaults.
    _generate(resolve_config(config.to_env()), args)
    return 0


def _add_render_options(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--workflow-dir",
        default=str(DEFAULT_WORKFLOW_DIR),
        help=f"Directory for the workflow file (default: {DEFAULT_WORKFLOW_DIR})",
    )
    p.add_argument(
        "--template",
        default="basic",
        choices=sorted(WORKFLOW_TEMPLATES),
        help="Workflow template variant (default: basic)",
    )
    p.add_argument("--templates-dir", default=None, help="Directory with replacement template files")
    p.add_argument("--env-file", default=".env", help="Path of the .env file (default: .env)")
    p.add_argument("--readme", default="README.md", help="README output path (default: README.md)")
    p.add_argument("--no-readme", action="store_true", help="Do not write the README")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="openapi-aggregator",
        description="Generate a Gitea workflow that aggregates OpenAPI docs into one repository",
    )
    sub = p.add_subparsers(dest="command", required=True)

    g = sub.add_parser("generate", help="Write the workflow and README from environment settings")
    _add_render_options(g)
    g.set_defaults(func=generate_cmd)

    s = sub.add_parser("setup", help="Prompt for settings, save them to .env, then generate")
    _add_render_options(s)
    s.set_defaults(func=setup_cmd)

    return p


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        return int(args.func(args))
    except (CLIError, RenderError, EnvFileError) as e:
        logger.error("command_failed", command=args.command, error=str(e))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
