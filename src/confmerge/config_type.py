"""Config type records.

A config type is a named, independently resolvable source of configuration,
such as "rc file in the home directory" or "tool table in pyproject.toml".
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from .files import ConfigFile
from .merge import deep_clone

FileFilter = Callable[[ConfigFile], bool]
FileTransform = Callable[..., Any]

# Lowest layer of every registration
TYPE_DEFAULTS: dict[str, Any] = {
    "patterns": [],
    "options": {},
    "files": [],
    "data": {},
}


def normalize_patterns(settings: dict[str, Any]) -> dict[str, Any]:
    """Wrap a bare-string ``patterns`` entry in a list."""
    if isinstance(settings.get("patterns"), str):
        settings = {**settings, "patterns": [settings["patterns"]]}
    return settings


class ConfigType(BaseModel):
    """A named config source: glob patterns plus how to load what they match.

    Attributes:
        name: Unique key of the type in its store.
        patterns: Glob patterns, relative to ``options["cwd"]``.
        options: Resolution options. ``cwd`` is the base directory (defaults
            to the working directory); ``dot`` and ``ignore`` are passed to
            the glob matcher. Other keys are kept as-is.
        filter: Optional predicate; files for which it returns False are
            dropped.
        load: Optional transform called as ``load(file, config_type)`` after
            the extension loader; its result replaces the loader's.
        files: Files matched by the latest load.
        data: Merged data of the latest load.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        extra="allow",
    )

    name: str
    patterns: list[str] = Field(min_length=1)
    options: dict[str, Any] = Field(default_factory=dict)
    filter: FileFilter | None = None
    load: FileTransform | None = None
    files: list[ConfigFile] = Field(default_factory=list)
    data: Any = Field(default_factory=dict)

    _initial_data: Any = PrivateAttr(default_factory=dict)

    @field_validator("patterns", mode="before")
    @classmethod
    def _wrap_pattern(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("name")
    @classmethod
    def _require_name(cls, value: str) -> str:
        if not value:
            raise ValueError("expected type to be a non-empty string")
        return value

    def model_post_init(self, __context: Any) -> None:
        self._initial_data = deep_clone(self.data)

    @property
    def cwd(self) -> Path:
        """Absolute base directory for resolving this type's patterns."""
        cwd = self.options.get("cwd")
        return Path(cwd).absolute() if cwd else Path.cwd()

    def reset(self) -> None:
        """Clear results from a previous load."""
        self.files = []
        self.data = deep_clone(self._initial_data)
