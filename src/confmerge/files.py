"""File descriptors for resolved config files."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class ConfigFile:
    """A matched config file.

    Holds the absolute path and the base directory it was resolved under.
    Name components are derived from the path. ``data`` is filled in with
    the loader's output while the owning config type is loaded, so a
    per-type transform can read it.
    """

    path: Path
    cwd: Path
    data: Any = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.path = Path(self.path)
        self.cwd = Path(self.cwd)

    @property
    def dirname(self) -> Path:
        return self.path.parent

    @property
    def basename(self) -> str:
        return self.path.name

    @property
    def extname(self) -> str:
        # ".toolrc" has no extension
        return os.path.splitext(self.path.name)[1]

    @property
    def stem(self) -> str:
        extname = self.extname
        name = self.path.name
        return name[: -len(extname)] if extname else name

    @property
    def relative(self) -> str:
        """Path relative to the base directory, in posix form."""
        try:
            return self.path.relative_to(self.cwd).as_posix()
        except ValueError:
            return self.path.as_posix()

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()

    def read_text(self, encoding: str = "utf-8") -> str:
        return self.path.read_text(encoding=encoding)
