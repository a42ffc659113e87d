"""Unit tests for the .env reader and writer."""

from pathlib import Path

import pytest

from openapi_aggregator.env_file import EnvFileError, format_env, load_env_file, missing_keys, parse_env


def test_format_env_keeps_order_and_values_verbatim() -> None:
    text = format_env({"B": "2", "A": "x y", "C": ""})

    assert text == "B=2\nA=x y\nC=\n"


def test_parse_env_skips_blank_and_comment_lines() -> None:
    text = "# settings\n\nGITEA_HOST=git.acme.io\n   # indented comment\nORGANIZATION=acme\n"

    assert parse_env(text) == {"GITEA_HOST": "git.acme.io", "ORGANIZATION": "acme"}


def test_parse_env_value_is_everything_after_first_equals() -> None:
    values = parse_env("TOKEN=a=b=c\nSPACED= padded \n")

    assert values["TOKEN"] == "a=b=c"
    assert values["SPACED"] == " padded "


def test_parse_env_accepts_crlf_line_endings() -> None:
    assert parse_env("A=1\r\nB=2\r\n") == {"A": "1", "B": "2"}


def test_parse_env_rejects_line_without_equals() -> None:
    with pytest.raises(EnvFileError, match=r"settings.env:2: expected KEY=value"):
        parse_env("A=1\nnot a pair\n", source="settings.env")


def test_parse_env_rejects_invalid_key() -> None:
    with pytest.raises(EnvFileError, match="invalid key"):
        parse_env("1BAD=value\n")


def test_parse_env_rejects_key_with_surrounding_space() -> None:
    with pytest.raises(EnvFileError, match="invalid key"):
        parse_env("KEY =value\n")


def test_parse_env_rejects_duplicate_keys() -> None:
    with pytest.raises(EnvFileError, match=r":3: duplicate key 'A' \(first defined on line 1\)"):
        parse_env("A=1\nB=2\nA=3\n")


def test_load_env_file_reads_from_disk(tmp_path: Path) -> None:
    path = tmp_path / ".env"
    path.write_text("DOCS_REPO=api-docs\n", encoding="utf-8")

    assert load_env_file(path) == {"DOCS_REPO": "api-docs"}


def test_load_env_file_missing_file(tmp_path: Path) -> None:
    with pytest.raises(EnvFileError, match="Could not read env file"):
        load_env_file(tmp_path / "nope.env")


def test_missing_keys_reports_in_required_order() -> None:
    values = {"B": "1"}

    assert missing_keys(values, ["C", "B", "A"]) == ["C", "A"]
    assert missing_keys(values, ["B"]) == []
