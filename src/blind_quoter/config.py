"""Configuration helpers for the blind quoter."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

RESOURCE_DIR = Path(__file__).resolve().parent / "resources"
DEFAULT_CATALOG_PATH = RESOURCE_DIR / "price_catalog.json"

ENV_PREFIX = "BLIND_QUOTER_"
CATALOG_ENV_VAR = f"{ENV_PREFIX}CATALOG"
LOG_LEVEL_ENV_VAR = f"{ENV_PREFIX}LOG_LEVEL"
WORKDIR_ENV_VAR = f"{ENV_PREFIX}WORKDIR"
DEBUG_ENV_VAR = f"{ENV_PREFIX}DEBUG"

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def _to_bool(value: str | None, default: bool = False) -> bool:
    """Return a boolean from an environment string with tolerant parsing."""

    if value is None:
        return default

    normalized = value.strip().lower()
    if not normalized:
        return default

    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False

    try:
        return bool(int(normalized))
    except ValueError:
        return default


@dataclass(frozen=True)
class RuntimeConfig:
    """Configuration derived from environment variables for CLI runs."""

    # Pricing data
    catalog_path: Path = DEFAULT_CATALOG_PATH

    # Logging
    log_level: str = "INFO"
    debug: bool = False

    # Execution
    workdir: Path = field(default_factory=Path.cwd)


def build_config(
    env: Mapping[str, str] | None = None,
    *,
    workdir: Path | None = None,
    configure: bool = True,
) -> RuntimeConfig:
    """Build a :class:`RuntimeConfig` from ``env`` and optionally ``workdir``."""

    e = os.environ if env is None else env
    debug = _to_bool(e.get(DEBUG_ENV_VAR), False)
    log_level = e.get(LOG_LEVEL_ENV_VAR) or ("DEBUG" if debug else "INFO")
    catalog_raw = e.get(CATALOG_ENV_VAR)
    cfg = RuntimeConfig(
        catalog_path=Path(catalog_raw).expanduser().resolve() if catalog_raw else DEFAULT_CATALOG_PATH,
        log_level=log_level.upper(),
        debug=debug,
        workdir=workdir or Path(e.get(WORKDIR_ENV_VAR) or Path.cwd()),
    )
    if configure:
        configure_logging(cfg.log_level)
    return cfg


def configure_logging(level: str) -> None:
    numeric = getattr(logging, level.upper(), logging.INFO)
    if not isinstance(numeric, int):
        numeric = logging.INFO
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
    logger.debug("Logging configured at %s", logging.getLevelName(numeric))


__all__ = [
    "RESOURCE_DIR",
    "DEFAULT_CATALOG_PATH",
    "RuntimeConfig",
    "build_config",
    "configure_logging",
]
