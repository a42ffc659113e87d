"""
openapi_aggregator package

Generates a Gitea workflow that copies each repository's `docs/openapi.yaml`
into a shared docs repository, plus a README describing the setup.

Key responsibilities are split across modules:
- `config.py`: resolve settings from the environment or interactive prompts
- `env_file.py`: strict read/write of the `.env` file that persists settings
- `renderer.py`: Jinja2 rendering of the bundled templates and artifact writes
- `logging.py`: structlog configuration
- `cli.py`: CLI entrypoint and orchestration (resolve -> render -> write)
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
