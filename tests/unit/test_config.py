"""Tests for configuration loading."""

from pathlib import Path
from unittest.mock import patch

from fold_editor.config import EditorConfig, config_from_host, load_config


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    assert load_config(tmp_path / "nope.toml") == EditorConfig()


def test_no_config_file_anywhere_gives_defaults(tmp_path: Path) -> None:
    with patch("fold_editor.config.CONFIG_FILES", [tmp_path / "a.toml"]):
        assert load_config() == EditorConfig()


def test_first_existing_config_file_is_used(tmp_path: Path) -> None:
    second = tmp_path / "second.toml"
    second.write_text("indent_size = 8\n")
    with patch("fold_editor.config.CONFIG_FILES", [tmp_path / "first.toml", second]):
        assert load_config().indent_size == 8


def test_load_values(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text(
        "indent_size = 4\nexpand_tab = false\nlight_highlight = true\n"
        "key_timeout_ms = 500\nline_height = 18\noverscan = 5\n"
    )
    assert load_config(path) == EditorConfig(
        indent_size=4,
        expand_tab=False,
        light_highlight=True,
        key_timeout_ms=500,
        line_height=18,
        overscan=5,
    )


def test_invalid_values_fall_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text('indent_size = 0\nexpand_tab = "yes"\noverscan = 2\ncolour = "red"\n')
    config = load_config(path)
    assert config.indent_size == 2
    assert config.expand_tab is True
    assert config.overscan == 2


def test_malformed_toml_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text("indent_size = = 3\n")
    assert load_config(path) == EditorConfig()


def test_host_record_uses_camel_case_keys() -> None:
    config = config_from_host({"indentSize": 4, "expandTab": False, "lightHighlight": True})
    assert (config.indent_size, config.expand_tab, config.light_highlight) == (4, False, True)


def test_host_record_keeps_base_for_missing_or_invalid() -> None:
    base = EditorConfig(indent_size=3, key_timeout_ms=200)
    config = config_from_host({"indentSize": None, "expandTab": 1}, base)
    assert config == base
