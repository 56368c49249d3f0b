"""Settings for confmerge stores and presets.

Uses Pydantic v2 BaseSettings so each value can come from constructor
kwargs or a ``CONFMERGE_`` environment variable.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .merge import ArrayPolicy


class StoreSettings(BaseSettings):
    """Behaviour of a ConfigStore.

    Priority (highest to lowest):
    1. Constructor kwargs
    2. Environment variables with CONFMERGE_ prefix
    3. Field defaults
    """

    model_config = SettingsConfigDict(
        env_prefix="CONFMERGE_",
        case_sensitive=False,
        extra="ignore",
    )

    builtin_loaders: bool = Field(
        default=True,
        description="Register the JSON, YAML, TOML and Python module loaders",
    )

    array_policy: ArrayPolicy = Field(
        default=ArrayPolicy.UNION_DROP_FALSY,
        description="How arrays from later sources combine with earlier ones",
    )


class LocationSettings(BaseSettings):
    """Base directories used by the conventional config types.

    Unset values fall back to the platform defaults in
    :mod:`confmerge.locations`.
    """

    model_config = SettingsConfigDict(
        env_prefix="CONFMERGE_",
        case_sensitive=False,
        extra="ignore",
    )

    cwd: Path | None = Field(
        default=None,
        description="Working directory for the cwd and package types",
    )

    home: Path | None = Field(
        default=None,
        description="Home directory for the home type",
    )

    global_dir: Path | None = Field(
        default=None,
        description="Site-packages directory of the base interpreter",
    )

    local_dir: Path | None = Field(
        default=None,
        description="Site-packages directory of the active environment",
    )
