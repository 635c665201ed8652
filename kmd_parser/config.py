"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

CONFIG_TABLE = "kmd-parser"
CONFIG_DOTFILE = ".kmd-parser.toml"


@dataclass
class TokenizerConfig:
    """Configuration for tokenizing markup documents.

    Attributes:
        heading_marker: Character that introduces a heading when repeated at
            the start of a line and followed by a space.
        emphasis_marker: Character that opens and closes emphasis runs.
        hard_break_spaces: Minimum number of trailing spaces that turn a line
            ending into a hard line break.
        max_emphasis_depth: Maximum nesting of emphasis scans; deeper markers
            are kept as literal text.
        max_file_size: Maximum file size in bytes that will be tokenized.

    Examples:
        TokenizerConfig(emphasis_marker="_", max_emphasis_depth=8)
    """

    # Markers
    heading_marker: str = "#"
    emphasis_marker: str = "*"

    # Line breaks
    hard_break_spaces: int = 2

    # Limits
    max_emphasis_depth: int = 64
    max_file_size: int = 10 * 1024 * 1024


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`emphasis_marker` must be a single character")
    """


def load_config(search_path: Path) -> TokenizerConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.kmd-parser]`` table from `pyproject.toml` and the
    ``[kmd-parser]`` or ``[tool.kmd-parser]`` table from `.kmd-parser.toml`
    when present. Returns default values when no configuration is found. TOML
    files that cannot be read or decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        TokenizerConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If a matching table is not a mapping or contains unsupported keys.

    Examples:
        load_config(Path("docs"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", CONFIG_TABLE)]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / CONFIG_DOTFILE,
            table_paths=[(CONFIG_TABLE,), ("tool", CONFIG_TABLE)],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return TokenizerConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> TokenizerConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> TokenizerConfig:
    table_display = ".".join(table_path)

    if raw_config is None:
        return TokenizerConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    try:
        return TokenizerConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: TokenizerConfig) -> None:
    """Validate a `TokenizerConfig` instance.

    Args:
        config: Configuration to validate.

    Raises:
        ConfigError: If a marker is not a single visible character, both
            markers are the same, or a numeric limit is not a positive integer.

    Examples:
        validate_config(TokenizerConfig(emphasis_marker="_"))
    """
    _ensure_markers(
        {
            "heading_marker": config.heading_marker,
            "emphasis_marker": config.emphasis_marker,
        }
    )
    if config.heading_marker == config.emphasis_marker:
        raise ConfigError("`heading_marker` and `emphasis_marker` must differ")

    numeric = {
        "hard_break_spaces": config.hard_break_spaces,
        "max_emphasis_depth": config.max_emphasis_depth,
        "max_file_size": config.max_file_size,
    }
    _ensure_integers(numeric)
    _ensure_positive(numeric)


def apply_overrides(config: TokenizerConfig, **overrides: object) -> TokenizerConfig:
    """Apply override values to a `TokenizerConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        TokenizerConfig: New configuration with the overrides applied, or the
        original configuration when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `TokenizerConfig`.
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> TokenizerConfig:
    """Load, override, and validate configuration.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), emphasis_marker="_")
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config


def _ensure_markers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if not isinstance(value, str) or len(value) != 1:
            raise ConfigError(f"`{key}` must be a single character")
        if value.isspace():
            raise ConfigError(f"`{key}` must not be whitespace")


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
