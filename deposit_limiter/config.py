"""Limits configuration loading.

Limits come from `data/limits_config.json` next to the package, or from
the file named by DEPOSIT_LIMITER_CONFIG. Without either, the defaults
apply (daily $5000, weekly $20000, three deposits per day).
"""

import json
import os
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from deposit_limiter.exceptions import ConfigurationError
from deposit_limiter.models import LimitsConfig

# Resolve the data/ directory relative to this file so the service works
# regardless of which directory it is launched from.
DATA_DIR = Path(__file__).parent.parent / "data"
DEFAULT_CONFIG_PATH = DATA_DIR / "limits_config.json"


def resolve_config_path(path: Optional[Union[str, Path]] = None) -> Path:
    """Pick the explicit path, then the environment, then the default."""
    if path is not None:
        return Path(path)
    env_path = os.getenv("DEPOSIT_LIMITER_CONFIG")
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def load_limits_config(path: Optional[Union[str, Path]] = None) -> LimitsConfig:
    """Load limits from JSON, falling back to defaults if the file is absent.

    A file named explicitly or through DEPOSIT_LIMITER_CONFIG must exist;
    only the bundled default path may be missing.
    """
    config_path = resolve_config_path(path)

    if not config_path.exists():
        if path is not None or os.getenv("DEPOSIT_LIMITER_CONFIG"):
            raise ConfigurationError(f"Limits config not found: {config_path}")
        return LimitsConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return LimitsConfig(**json.load(f))
    except (OSError, ValueError, ValidationError, TypeError) as exc:
        raise ConfigurationError(
            f"Invalid limits config {config_path}: {exc}"
        ) from exc
