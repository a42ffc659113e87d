"""
config.py

Responsibility: Resolve the aggregator configuration into a typed, frozen record.

Two sources are supported:
- An environment mapping (process environment, optionally layered over `.env`)
- Interactive prompts, used by the `setup` command

Neither source validates hostnames or repository names; values are used as given.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass

ENV_GITEA_HOST = "GITEA_HOST"
ENV_ORGANIZATION = "ORGANIZATION"
ENV_DOCS_REPO = "DOCS_REPO"
ENV_REPOSITORIES = "REPOSITORIES"

CONFIG_KEYS = (ENV_GITEA_HOST, ENV_ORGANIZATION, ENV_DOCS_REPO, ENV_REPOSITORIES)

DEFAULT_GITEA_HOST = "gitea.example.com"
DEFAULT_ORGANIZATION = "myorg"
DEFAULT_DOCS_REPO = "docs"
DEFAULT_REPOSITORIES = "repo1,repo2,repo3"


@dataclass(frozen=True)
class Config:
    """Settings that drive workflow, README and `.env` rendering."""

    gitea_host: str
    organization: str
    docs_repo: str = DEFAULT_DOCS_REPO
    repositories: tuple[str, ...] = ()

    def to_env(self) -> dict[str, str]:
        # Key order is the order written to `.env`.
        return {
            ENV_GITEA_HOST: self.gitea_host,
            ENV_ORGANIZATION: self.organization,
            ENV_DOCS_REPO: self.docs_repo,
            ENV_REPOSITORIES: join_repositories(self.repositories),
        }


def split_repositories(value: str) -> tuple[str, ...]:
    """
    Split a comma-separated repository list.

    Entries are kept exactly as written: no whitespace trimming, no
    de-duplication, and empty entries survive (`"a,,b"` has three entries).
    """
    return tuple(value.split(","))


def join_repositories(repositories: Iterable[str]) -> str:
    return ",".join(repositories)


def _get_or_default(environ: Mapping[str, str], key: str, default: str) -> str:
    value = environ.get(key)
    if value:
        return value
    return default


def resolve_config(environ: Mapping[str, str]) -> Config:
    """
    Build a `Config` from an environment mapping.

    Unset and empty variables both fall back to the documented defaults.
    """
    return Config(
        gitea_host=_get_or_default(environ, ENV_GITEA_HOST, DEFAULT_GITEA_HOST),
        organization=_get_or_default(environ, ENV_ORGANIZATION, DEFAULT_ORGANIZATION),
        docs_repo=_get_or_default(environ, ENV_DOCS_REPO, DEFAULT_DOCS_REPO),
        repositories=split_repositories(_get_or_default(environ, ENV_REPOSITORIES, DEFAULT_REPOSITORIES)),
    )


def prompt_config(ask: Callable[[str], str] | None = None) -> Config:
    """
    Ask for each setting in turn and build a `Config`.

    Only the docs repository has a fallback; the other answers are used as
    typed, even when empty. `ask` defaults to the builtin `input`.
    """
    if ask is None:
        ask = input
    gitea_host = ask("Gitea host: ").strip()
    organization = ask("Organization: ").strip()
    docs_repo = ask(f"Docs repository (default '{DEFAULT_DOCS_REPO}'): ").strip() or DEFAULT_DOCS_REPO
    repositories = ask("Repositories (comma-separated): ").strip()
    return Config(
        gitea_host=gitea_host,
        organization=organization,
        docs_repo=docs_repo,
        repositories=split_repositories(repositories),
    )
