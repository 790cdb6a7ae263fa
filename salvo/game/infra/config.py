"""Runtime configuration and env loading.

Every knob here is diagnostic. With nothing set the process logs text at INFO
to stderr, seeds its rng from the OS and trusts its own last target over the
coordinates echoed back by the driver, so the wire protocol behaves the same
with or without an environment. ``SALVO_STRICT_COORDINATES`` only turns the
mismatch warning into a fatal error for debugging drivers.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class SalvoConfig:
    """Immutable runtime configuration."""

    log_level: str = "INFO"
    log_format: str = "text"  # text|json
    log_file: str | None = None
    strict_coordinates: bool = False
    seed: int | None = None


def _flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def resolve_log_level_name(default: str = "INFO") -> str:
    """Resolve log level with app-prefixed override."""
    value = os.getenv("SALVO_LOG_LEVEL")
    if value is None:
        value = os.getenv("LOG_LEVEL", default)
    return value.strip().upper()


def load_config() -> SalvoConfig:
    """Load configuration from env vars."""
    log_file = os.getenv("SALVO_LOG_FILE", "").strip()
    return SalvoConfig(
        log_level=resolve_log_level_name(),
        log_format=os.getenv("LOG_FORMAT", "text").strip().lower() or "text",
        log_file=log_file or None,
        strict_coordinates=_flag("SALVO_STRICT_COORDINATES", False),
        seed=_optional_int("SALVO_SEED"),
    )


DEFAULT_ENV_FILES: tuple[str, ...] = (".env.salvo", ".env.salvo.local")


def load_env_file(path: str | Path, *, override_existing: bool = True) -> None:
    """Load KEY=VALUE pairs from an env file into process environment.

    Relative paths resolve against the working directory. A missing file is
    ignored. By default, values from the env file overwrite existing
    environment variables.
    """
    env_path = Path(path)
    if not env_path.is_file():
        return

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        key, sep, value = raw_line.strip().partition("=")
        key = key.strip()
        if not sep or not key or key.startswith("#"):
            continue

        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]

        if override_existing or key not in os.environ:
            os.environ[key] = value


def load_default_env_files(paths: Sequence[str | Path] = DEFAULT_ENV_FILES) -> None:
    """Load ``.env.salvo`` then ``.env.salvo.local``; later files win."""
    for path in paths:
        load_env_file(path)
