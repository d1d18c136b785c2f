"""Layout configuration and helpers for loading environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Final, Iterable, Mapping, Optional

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG",
    "GRID_INTERVALS",
    "LayoutConfig",
    "PLAN_RECORD_MODES",
    "load_env_file",
]

GRID_INTERVALS: Final[tuple[int, ...]] = (15, 30, 60)
PLAN_RECORD_MODES: Final[tuple[str, ...]] = ("plan", "record", "both")

ENV_PREFIX: Final[str] = "DAYGRID_"


class ConfigError(RuntimeError):
    """Raised when configuration values are malformed."""


@dataclass(frozen=True)
class LayoutConfig:
    """Read-only settings shared by the layout engine and the drag handler."""

    hour_height: float = 60.0
    grid_interval: int = 15
    min_event_height_px: float = 20.0
    plan_record_mode: str = "both"
    default_duration_minutes: int = 60
    min_drag_minutes: int = 15
    column_gutter_percent: float = 1.0
    day_start_hour: int = 0
    day_end_hour: int = 24
    container_width_px: Optional[float] = None

    def __post_init__(self) -> None:
        if self.hour_height <= 0:
            raise ConfigError(f"hour_height must be positive, got {self.hour_height!r}")
        if self.grid_interval not in GRID_INTERVALS:
            raise ConfigError(
                f"grid_interval must be one of {GRID_INTERVALS}, got {self.grid_interval!r}"
            )
        if self.min_event_height_px < 0:
            raise ConfigError("min_event_height_px cannot be negative")
        if self.plan_record_mode not in PLAN_RECORD_MODES:
            raise ConfigError(
                f"plan_record_mode must be one of {PLAN_RECORD_MODES}, "
                f"got {self.plan_record_mode!r}"
            )
        if self.default_duration_minutes <= 0:
            raise ConfigError("default_duration_minutes must be positive")
        if self.min_drag_minutes <= 0:
            raise ConfigError("min_drag_minutes must be positive")
        if not 0 <= self.column_gutter_percent < 100:
            raise ConfigError("column_gutter_percent must be within [0, 100)")
        if not 0 <= self.day_start_hour < self.day_end_hour <= 24:
            raise ConfigError(
                "day_start_hour and day_end_hour must satisfy 0 <= start < end <= 24, "
                f"got {self.day_start_hour!r}-{self.day_end_hour!r}"
            )
        if self.container_width_px is not None and self.container_width_px <= 0:
            raise ConfigError("container_width_px must be positive when set")

    @property
    def day_height(self) -> float:
        """Pixel height of the visible window."""

        return self.hour_height * (self.day_end_hour - self.day_start_hour)

    @property
    def window_start_minutes(self) -> int:
        return self.day_start_hour * 60

    @property
    def window_end_minutes(self) -> int:
        return self.day_end_hour * 60

    def with_overrides(self, **overrides: object) -> "LayoutConfig":
        """Return a copy with every non-``None`` override applied."""

        values = {key: value for key, value in overrides.items() if value is not None}
        if not values:
            return self
        return replace(self, **values)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "LayoutConfig":
        """Build a configuration from ``DAYGRID_*`` environment variables.

        Unset variables keep their defaults. Values that cannot be parsed raise
        :class:`ConfigError`.
        """

        env = os.environ if environ is None else environ
        return cls().with_overrides(
            hour_height=_read(env, "HOUR_HEIGHT", float),
            grid_interval=_read(env, "GRID_INTERVAL", int),
            min_event_height_px=_read(env, "MIN_EVENT_HEIGHT", float),
            plan_record_mode=_read(env, "PLAN_RECORD_MODE", str),
            default_duration_minutes=_read(env, "DEFAULT_DURATION", int),
            day_start_hour=_read(env, "DAY_START_HOUR", int),
            day_end_hour=_read(env, "DAY_END_HOUR", int),
            container_width_px=_read(env, "CONTAINER_WIDTH", float),
        )


DEFAULT_CONFIG: Final[LayoutConfig] = LayoutConfig()


def _read(env: Mapping[str, str], name: str, parse):
    key = ENV_PREFIX + name
    raw = env.get(key)
    if raw is None or not raw.strip():
        return None
    try:
        return parse(raw.strip())
    except ValueError as exc:
        raise ConfigError(f"Invalid value for {key}: {raw!r}") from exc


def load_env_file(env_file: str | Path | None = None) -> None:
    """Load environment variables from ``env_file`` if provided.

    When ``env_file`` is :data:`None`, the loader looks for a ``.env`` file in the
    current working directory. Existing environment variables are never overwritten.
    """

    path = Path(env_file) if env_file is not None else Path.cwd() / ".env"
    if not path.exists() or not path.is_file():
        return

    for key, value in _iter_env_entries(path):
        os.environ.setdefault(key, value)


def _iter_env_entries(path: Path) -> Iterable[tuple[str, str]]:
    for raw_line in path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            raise ConfigError(
                f"Invalid line in {path.name!r}: {raw_line!r}. Expected KEY=VALUE format."
            )
        key, raw_value = line.split("=", 1)
        key = key.strip()
        value = raw_value.strip().strip('"').strip("'")
        if not key:
            raise ConfigError(f"Environment variable key is missing in line: {raw_line!r}")
        yield key, value
