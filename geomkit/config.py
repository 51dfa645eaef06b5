from __future__ import annotations

import os
from collections.abc import Mapping

from adaptix import Retort
from attr import (
    field,
    frozen
)
from attr.validators import (
    ge,
    gt,
    instance_of
)


@frozen
class Settings:
    cell_width: int = field(default=4, validator=[instance_of(int), ge(1)])
    epsilon: float = field(default=1e-5, validator=gt(0))
    default_dtype: str = "int64"


DEFAULT_SETTINGS = Settings()
_current = DEFAULT_SETTINGS

ENV_PREFIX = "GEOMKIT_"

# Values usually arrive as strings (env vars, ini files), hence the lax coercion
_retort = Retort(strict_coercion=False)


def current_settings() -> Settings:
    return _current


def configure(settings: Settings) -> None:
    """Replace the process-wide settings used by matrices and vectors"""
    global _current
    _current = settings


def load_settings(data: Mapping[str, object]) -> Settings:
    """
    Build settings from a plain mapping.

    Unknown keys are ignored, missing keys keep their defaults.
    """
    return _retort.load(dict(data), Settings)


def settings_from_env(environ: Mapping[str, str] = os.environ) -> Settings:
    data = {
        key[len(ENV_PREFIX):].lower(): value
        for key, value in environ.items()
        if key.startswith(ENV_PREFIX)
    }
    return load_settings(data)
