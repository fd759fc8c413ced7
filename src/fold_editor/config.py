"""Configuration constants and loading for fold-editor."""

import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from loguru import logger

DEFAULT_INDENT_SIZE: int = 2
DEFAULT_EXPAND_TAB: bool = True
DEFAULT_LIGHT_HIGHLIGHT: bool = False

# Idle time after which a partial key chord is discarded.
KEY_TIMEOUT_MS: int = 1000

# Fixed row height and overscan used for viewport windowing.
LINE_HEIGHT: int = 22
OVERSCAN: int = 3

# Config file location. First file found is used.
CONFIG_FILES: list[Path] = [
    Path("~/.config/fold-editor/config.toml").expanduser(),
    Path("~/.fold-editor.toml").expanduser(),
]


@dataclass(frozen=True)
class EditorConfig:
    """Options recognized by the editor core."""

    indent_size: int = DEFAULT_INDENT_SIZE
    expand_tab: bool = DEFAULT_EXPAND_TAB
    light_highlight: bool = DEFAULT_LIGHT_HIGHLIGHT
    key_timeout_ms: int = KEY_TIMEOUT_MS
    line_height: int = LINE_HEIGHT
    overscan: int = OVERSCAN


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# field -> (validator, description used in warnings)
_VALIDATORS: dict[str, tuple[Any, str]] = {
    "indent_size": (lambda v: _is_int(v) and v >= 1, "an integer >= 1"),
    "expand_tab": (lambda v: isinstance(v, bool), "a boolean"),
    "light_highlight": (lambda v: isinstance(v, bool), "a boolean"),
    "key_timeout_ms": (lambda v: _is_int(v) and v >= 0, "an integer >= 0"),
    "line_height": (lambda v: _is_int(v) and v >= 1, "an integer >= 1"),
    "overscan": (lambda v: _is_int(v) and v >= 0, "an integer >= 0"),
}

_HOST_KEYS: dict[str, str] = {
    "indentSize": "indent_size",
    "expandTab": "expand_tab",
    "lightHighlight": "light_highlight",
}


def _apply(base: EditorConfig, values: dict[str, Any], *, source: str) -> EditorConfig:
    """Overlay valid values on ``base``; invalid ones are logged and dropped."""
    accepted: dict[str, Any] = {}
    for key, value in values.items():
        if value is None:
            continue
        if key not in _VALIDATORS:
            logger.warning("Ignoring unknown option {!r} from {}", key, source)
            continue
        is_valid, expected = _VALIDATORS[key]
        if not is_valid(value):
            logger.warning(
                "Ignoring {}={!r} from {}: expected {}", key, value, source, expected
            )
            continue
        accepted[key] = value
    return replace(base, **accepted)


def resolve_config_file() -> Path | None:
    """Return the first existing config file, or None."""
    for candidate in CONFIG_FILES:
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None = None) -> EditorConfig:
    """Load editor options from a TOML file.

    Args:
        path: Explicit config file. When None, ``CONFIG_FILES`` is searched.

    Returns:
        The loaded config. Missing or unreadable files yield the defaults.
    """
    config_path = path or resolve_config_file()
    if config_path is None:
        return EditorConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        logger.debug("Config file {} not found, using defaults", config_path)
        return EditorConfig()
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning("Cannot read config file {}: {}", config_path, exc)
        return EditorConfig()

    return _apply(EditorConfig(), data, source=str(config_path))


def config_from_host(record: dict[str, Any], base: EditorConfig | None = None) -> EditorConfig:
    """Build a config from the host's ``{indentSize, expandTab, lightHighlight}`` record."""
    values = {_HOST_KEYS.get(key, key): value for key, value in record.items()}
    return _apply(base or EditorConfig(), values, source="host")
