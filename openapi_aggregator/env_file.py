"""
env_file.py

Responsibility: Read and write the `.env` file that persists a configuration.

The format is deliberately small:
- One `KEY=value` pair per line, no quoting and no escaping.
- Blank lines and `#` comment lines are ignored when parsing.
- Everything after the first `=` is the value, taken verbatim.

Parsing is strict. A malformed line or a repeated key is an error rather than
something to skip, so a hand-edited file never silently loses a setting.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from pathlib import Path


class EnvFileError(ValueError):
    pass


_KEY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def format_env(values: Mapping[str, str]) -> str:
    """
    Serialize `values` as `KEY=value` lines, preserving mapping order.
    """
    return "".join(f"{key}={value}\n" for key, value in values.items())


def parse_env(text: str, *, source: str = "<string>") -> dict[str, str]:
    """
    Parse `.env` text into an ordered dict.

    Raises EnvFileError on a line without `=`, an invalid key, or a key that
    appears more than once.
    """
    out: dict[str, str] = {}
    seen_at: dict[str, int] = {}
    for lineno, raw in enumerate(text.split("\n"), start=1):
        line = raw[:-1] if raw.endswith("\r") else raw
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if "=" not in line:
            raise EnvFileError(f"{source}:{lineno}: expected KEY=value, got {line!r}")
        key, value = line.split("=", 1)
        if not _KEY_RE.match(key):
            raise EnvFileError(f"{source}:{lineno}: invalid key {key!r}")
        if key in seen_at:
            raise EnvFileError(f"{source}:{lineno}: duplicate key {key!r} (first defined on line {seen_at[key]})")
        seen_at[key] = lineno
        out[key] = value
    return out


def load_env_file(path: str | Path) -> dict[str, str]:
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise EnvFileError(f"Could not read env file: {p}") from e
    return parse_env(text, source=str(p))


def missing_keys(values: Mapping[str, str], required: Iterable[str]) -> list[str]:
    """Return the keys of `required` absent from `values`, in `required` order."""
    return [key for key in required if key not in values]
