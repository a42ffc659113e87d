"""
renderer.py

Responsibility: Render the bundled templates for a `Config` and write the artifacts.

Rules:
- Templates are Jinja2 files under `templates/`, looked up first in an optional
  operator-supplied directory and then in the bundled one.
- Placeholders use `[[ name ]]` and blocks use `[% ... %]`, so the `${{ ... }}`
  expressions of the CI workflow syntax are emitted untouched.
- Undefined placeholders are errors, never empty strings.
- Output is UTF-8 with `\n` newlines; existing files are overwritten.

This module does NOT know about argument parsing or prompting.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateError

from openapi_aggregator.config import Config
from openapi_aggregator.env_file import format_env
from openapi_aggregator.logging import get_logger

logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

WORKFLOW_TEMPLATES = {
    "basic": "workflow-basic.yml.j2",
    "extended": "workflow-extended.yml.j2",
}
README_TEMPLATE = "README.md.j2"

DEFAULT_WORKFLOW_DIR = Path(".gitea") / "workflows"
WORKFLOW_FILENAME = "openapi-aggregator.yml"

# The README tree shows at most this many repositories.
README_TREE_LIMIT = 3


class RenderError(RuntimeError):
    pass


@dataclass(frozen=True)
class TemplateSet:
    workflows: dict[str, Template]
    readme: Template

    def workflow(self, variant: str) -> Template:
        try:
            return self.workflows[variant]
        except KeyError:
            known = ", ".join(sorted(self.workflows))
            raise RenderError(f"Unknown workflow template {variant!r} (expected one of: {known})") from None


def _environment(search_path: list[Path]) -> Environment:
    return Environment(
        loader=FileSystemLoader([str(p) for p in search_path], encoding="utf-8"),
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        variable_start_string="[[",
        variable_end_string="]]",
        block_start_string="[%",
        block_end_string="%]",
        comment_start_string="[#",
        comment_end_string="#]",
    )


def load_templates(templates_dir: str | Path | None = None) -> TemplateSet:
    """
    Load and compile every template once per resolved directory.

    `templates_dir` may override any subset of the bundled templates by file name.
    A relative path is resolved against the current working directory.
    """
    if templates_dir is None:
        return _load_templates(None)
    override = Path(templates_dir).resolve()
    if not override.is_dir():
        raise RenderError(f"Template directory not found: {override}")
    return _load_templates(override)


@lru_cache(maxsize=None)
def _load_templates(override: Path | None) -> TemplateSet:
    search_path = [TEMPLATES_DIR] if override is None else [override, TEMPLATES_DIR]
    env = _environment(search_path)
    try:
        workflows = {variant: env.get_template(name) for variant, name in WORKFLOW_TEMPLATES.items()}
        readme = env.get_template(README_TEMPLATE)
    except TemplateError as e:
        raise RenderError(f"Failed loading templates: {e}") from e
    logger.debug("templates_loaded", search_path=[str(p) for p in search_path])
    return TemplateSet(workflows=workflows, readme=readme)


def _render(template: Template, context: dict[str, Any]) -> str:
    try:
        return template.render(**context)
    except TemplateError as e:
        raise RenderError(f"Failed rendering template: {template.name}") from e


def render_workflow(config: Config, *, variant: str = "basic", templates_dir: Path | None = None) -> str:
    """
    Render the workflow text. Only `organization` and `gitea_host` are substituted.
    """
    template = load_templates(templates_dir).workflow(variant)
    return _render(template, {"organization": config.organization, "gitea_host": config.gitea_host})


def render_readme(config: Config, *, templates_dir: Path | None = None) -> str:
    repositories = list(config.repositories)
    context = {
        "gitea_host": config.gitea_host,
        "organization": config.organization,
        "docs_repo": config.docs_repo,
        "repositories": repositories,
        "tree_repositories": repositories[:README_TREE_LIMIT],
    }
    return _render(load_templates(templates_dir).readme, context)


def _write_text(path: Path, content: str) -> None:
    try:
        path.write_text(content, encoding="utf-8", newline="\n")
    except OSError as e:
        raise RenderError(f"Could not write {path}: {e}") from e
    logger.debug("artifact_written", path=str(path), size=len(content))


def write_workflow(
    config: Config,
    workflow_dir: str | Path = DEFAULT_WORKFLOW_DIR,
    *,
    variant: str = "basic",
    templates_dir: Path | None = None,
) -> Path:
    """
    Render the workflow and write it to `<workflow_dir>/openapi-aggregator.yml`.

    Creates `workflow_dir` and its parents as needed.
    """
    content = render_workflow(config, variant=variant, templates_dir=templates_dir)
    wf_dir = Path(workflow_dir)
    try:
        wf_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise RenderError(f"Could not create workflow directory {wf_dir}: {e}") from e
    path = wf_dir / WORKFLOW_FILENAME
    _write_text(path, content)
    return path


def write_readme(config: Config, path: str | Path = "README.md", *, templates_dir: Path | None = None) -> Path:
    p = Path(path)
    _write_text(p, render_readme(config, templates_dir=templates_dir))
    return p


def write_env_file(config: Config, path: str | Path = ".env") -> Path:
    p = Path(path)
    _write_text(p, format_env(config.to_env()))
    return p
