"""Domain-level validation rules for grid configuration."""

from __future__ import annotations

from dataclasses import dataclass

from seatly.domain.errors import ConfigError


@dataclass(frozen=True)
class GridConfig:
    rows: int
    columns: int


def validate_grid_config(config: GridConfig) -> None:
    if not isinstance(config.rows, int) or isinstance(config.rows, bool):
        raise ConfigError("rows must be an integer")
    if not isinstance(config.columns, int) or isinstance(config.columns, bool):
        raise ConfigError("columns must be an integer")
    if config.rows < 1:
        raise ConfigError(f"rows must be >= 1, got {config.rows}")
    if config.columns < 1:
        raise ConfigError(f"columns must be >= 1, got {config.columns}")


def parse_dimension(value: str | int, name: str) -> int:
    """Parse a command-line or environment dimension into a positive integer."""
    if isinstance(value, int) and not isinstance(value, bool):
        number = value
    else:
        text = str(value).strip()
        try:
            number = int(text, 10)
        except ValueError as exc:
            raise ConfigError(f"Invalid {name} input: {value}") from exc
    if number < 1:
        raise ConfigError(f"Invalid {name} input: {value}")
    return number
