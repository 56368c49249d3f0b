"""Platform directories searched by the conventional config types."""

import sys
import sysconfig
from pathlib import Path

from .settings import LocationSettings

MANIFEST_NAMES = ("pyproject.toml", "package.json")


def get_cwd(settings: LocationSettings | None = None) -> Path:
    """Get the working directory.

    Priority:
    1. settings.cwd ($CONFMERGE_CWD)
    2. Path.cwd()
    """
    if settings is not None and settings.cwd is not None:
        return settings.cwd.absolute()
    return Path.cwd()


def get_home_dir(settings: LocationSettings | None = None) -> Path:
    """Get the home directory.

    Priority:
    1. settings.home ($CONFMERGE_HOME)
    2. Path.home()
    """
    if settings is not None and settings.home is not None:
        return settings.home.absolute()
    return Path.home()


def get_global_dir(settings: LocationSettings | None = None) -> Path:
    """Get the directory of globally installed packages.

    Priority:
    1. settings.global_dir ($CONFMERGE_GLOBAL_DIR)
    2. purelib of the base interpreter, outside any virtualenv
    """
    if settings is not None and settings.global_dir is not None:
        return settings.global_dir.absolute()
    paths = sysconfig.get_paths(
        vars={"base": sys.base_prefix, "platbase": sys.base_exec_prefix}
    )
    return Path(paths["purelib"])


def get_local_dir(settings: LocationSettings | None = None) -> Path:
    """Get the directory of locally installed packages.

    Priority:
    1. settings.local_dir ($CONFMERGE_LOCAL_DIR)
    2. purelib of the running environment (the virtualenv when active)
    """
    if settings is not None and settings.local_dir is not None:
        return settings.local_dir.absolute()
    paths = sysconfig.get_paths(vars={"base": sys.prefix, "platbase": sys.exec_prefix})
    return Path(paths["purelib"])


def find_package_manifest(start: Path) -> Path | None:
    """Find the nearest package manifest at or above ``start``.

    Looks for pyproject.toml, then package.json, in each directory while
    walking up to the filesystem root.

    Args:
        start: Directory to start searching from.

    Returns:
        Path to the manifest file, or None if no directory has one.
    """
    start = start.absolute()
    for directory in [start, *start.parents]:
        for name in MANIFEST_NAMES:
            candidate = directory / name
            if candidate.is_file():
                return candidate
    return None
