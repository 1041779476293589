"""Tests for ParserConfig validation and loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from xcconfparse.config import ParserConfig, load_parser_config


def test_defaults() -> None:
    config = ParserConfig()

    assert config.search_paths == []
    assert config.max_include_depth == 64
    assert config.encoding == "utf-8"
    assert config.strip_trailing_whitespace is True
    assert config.detect_include_cycles is True


@pytest.mark.parametrize(
    "data",
    [
        {"max_include_depth": 0},
        {"max_include_depth": 201},
        {"encoding": "no-such-codec"},
        {"unknown_option": True},
    ],
)
def test_invalid_values_are_rejected(data: dict) -> None:
    with pytest.raises(ValidationError):
        ParserConfig.from_dict(data)


def test_config_is_frozen() -> None:
    config = ParserConfig()
    with pytest.raises(ValidationError):
        config.max_include_depth = 3  # type: ignore[misc]


def test_to_dict_is_json_ready() -> None:
    config = ParserConfig(search_paths=[Path("/shared")])
    data = config.to_dict()

    assert data["search_paths"] == ["/shared"]
    json.dumps(data)


def test_load_none_and_dict() -> None:
    assert load_parser_config(None) == ParserConfig()
    assert load_parser_config({"max_include_depth": 3}).max_include_depth == 3
    assert (
        load_parser_config({"xcconfparse": {"detect_include_cycles": False}}).detect_include_cycles
        is False
    )


def test_load_toml_file_with_section(tmp_path: Path) -> None:
    path = tmp_path / "xcconfparse.toml"
    path.write_text(
        '[xcconfparse]\nsearch_paths = ["/shared", "vendor"]\nmax_include_depth = 8\n',
        encoding="utf-8",
    )

    config = load_parser_config(path)

    assert config.search_paths == [Path("/shared"), Path("vendor")]
    assert config.max_include_depth == 8


def test_load_json_file(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"strip_trailing_whitespace": False}), encoding="utf-8")

    assert load_parser_config(str(path)).strip_trailing_whitespace is False


def test_load_inline_strings() -> None:
    assert load_parser_config("max_include_depth = 2").max_include_depth == 2
    assert load_parser_config('{"encoding": "latin-1"}').encoding == "latin-1"


def test_load_rejects_non_mapping_and_bad_types() -> None:
    with pytest.raises(ValueError):
        load_parser_config("[1, 2]")
    with pytest.raises(TypeError):
        load_parser_config(42)  # type: ignore[arg-type]


def test_largest_include_depth_is_accepted() -> None:
    assert ParserConfig(max_include_depth=200).max_include_depth == 200
