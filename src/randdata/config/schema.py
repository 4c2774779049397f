"""Typed configuration schema and loader for the randdata package."""

from __future__ import annotations

import os
from collections.abc import Mapping
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, conint, field_validator, model_validator

from ..generators.base import INT64_MAX, INT64_MIN
from ..types import DataType

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class StreamSettings(BaseModel):
    """Default stream parameters used by the command line."""

    type: DataType
    seed: conint(ge=INT64_MIN, le=INT64_MAX)  # type: ignore[valid-type]
    size: conint(ge=0)  # type: ignore[valid-type]
    seed_env: str

    model_config = ConfigDict(extra="forbid")

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.lower()
        return value


class ReaderSettings(BaseModel):
    """Read size jitter and copy buffer settings."""

    jitter: bool
    min_read: conint(ge=1) = 1  # type: ignore[valid-type]
    max_read: conint(ge=1) | None = None  # type: ignore[valid-type]
    copy_buffer_size: conint(ge=1) = 8192  # type: ignore[valid-type]

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _check_bounds(self) -> "ReaderSettings":
        if self.max_read is not None and self.max_read < self.min_read:
            raise ValueError("max_read must not be smaller than min_read")
        return self


class VerifierSettings(BaseModel):
    """Behaviour of verifiers after a failure and error report sizes."""

    lockout_on_error: bool
    diff_window: conint(ge=1) = 8  # type: ignore[valid-type]

    model_config = ConfigDict(extra="forbid")


class LoggingSettings(BaseModel):
    """Package log level."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

    model_config = ConfigDict(extra="forbid")

    @field_validator("level", mode="before")
    @classmethod
    def _upper(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.upper()
        return value


class ConfigModel(BaseModel):
    """Top-level configuration model."""

    schema_version: conint(ge=1)  # type: ignore[valid-type]
    stream: StreamSettings
    reader: ReaderSettings
    verifier: VerifierSettings
    logging: LoggingSettings

    model_config = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# Loader utilities
# ---------------------------------------------------------------------------


def deep_merge_dicts(a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge mapping ``b`` onto ``a`` returning a new dict."""

    result: dict[str, Any] = dict(a)
    for key, b_val in b.items():
        if key in result and isinstance(result[key], dict) and isinstance(b_val, dict):
            result[key] = deep_merge_dicts(result[key], b_val)
        else:
            result[key] = b_val
    return result


def load_config(
    path: str | os.PathLike[str] | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> ConfigModel:
    """Load configuration from defaults and optional user overrides.

    Precedence of sources: package ``defaults.yml`` < user-provided YAML < the
    environment variable named by ``stream.seed_env``.

    Raises
    ------
    pydantic.ValidationError
        If the merged configuration does not validate.
    ValueError
        If the seed environment variable is not an integer.
    """

    with (
        importlib_resources.files("randdata.config")
        .joinpath("defaults.yml")
        .open("r", encoding="utf-8") as f
    ):
        defaults = yaml.safe_load(f) or {}

    if path is not None:
        with Path(path).open("r", encoding="utf-8") as f:
            overrides = yaml.safe_load(f) or {}
        if not isinstance(overrides, dict):
            raise ValueError(f"configuration file must contain a mapping: {path}")
        merged = deep_merge_dicts(defaults, overrides)
    else:
        merged = defaults

    cfg = ConfigModel.model_validate(merged)

    environ = env if env is not None else os.environ
    seed_env = cfg.stream.seed_env
    if seed_env in environ:
        raw = environ[seed_env].strip()
        try:
            seed = int(raw, 0)
        except ValueError:
            raise ValueError(f"{seed_env} must be an integer, got {raw!r}") from None
        stream = cfg.stream.model_copy(update={"seed": seed})
        cfg = ConfigModel.model_validate(
            {**cfg.model_dump(), "stream": stream.model_dump()}
        )

    return cfg


__all__ = [
    "ConfigModel",
    "StreamSettings",
    "ReaderSettings",
    "VerifierSettings",
    "LoggingSettings",
    "deep_merge_dicts",
    "load_config",
]
