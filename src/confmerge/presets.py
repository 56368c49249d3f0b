"""Conventional config locations for a named tool.

``create_store("mytool")`` registers five types, from lowest to highest
precedence when merged in registration order:

- ``global``: ``mytool_config_*/`` packages in the base interpreter's
  site-packages
- ``local``: ``mytool_config_*/.mytoolrc.*`` in the active environment's
  site-packages
- ``home``: ``~/.mytoolrc.*``
- ``cwd``: ``./.mytoolrc.*``
- ``package``: ``[tool.mytool]`` in the nearest pyproject.toml, or the
  ``"mytool"`` field of the nearest package.json
"""

from collections.abc import Mapping
from typing import Any

from .config_type import ConfigType
from .files import ConfigFile
from .locations import (
    find_package_manifest,
    get_cwd,
    get_global_dir,
    get_home_dir,
    get_local_dir,
)
from .settings import LocationSettings, StoreSettings
from .store import ConfigStore

EXTENSIONS = "{json,yaml,yml,toml}"


def package_section(name: str):
    """Build a transform picking ``name``'s section out of a package manifest."""

    def load(file: ConfigFile, config_type: ConfigType) -> Any:
        if not isinstance(file.data, Mapping):
            return None
        if file.basename == "pyproject.toml":
            tool = file.data.get("tool")
            return tool.get(name) if isinstance(tool, Mapping) else None
        return file.data.get(name)

    return load


def create_store(
    name: str,
    *,
    locations: LocationSettings | None = None,
    config: Mapping[str, Any] | None = None,
    settings: StoreSettings | None = None,
) -> ConfigStore:
    """Create a ConfigStore with the conventional types for tool ``name``.

    Args:
        name: Tool name used in file and package patterns.
        locations: Base directory overrides; read from CONFMERGE_*
            environment variables when omitted.
        config: Store-level defaults, such as a shared ``filter``.
        settings: Store behaviour settings.

    Returns:
        The store, with types global, local, home, cwd and package registered.
    """
    locations = locations if locations is not None else LocationSettings()
    cwd = get_cwd(locations)
    store = ConfigStore(config, settings=settings)

    store.type(
        "global",
        {
            "patterns": [f"{name}_config_*/*.{EXTENSIONS}"],
            "options": {"cwd": str(get_global_dir(locations))},
        },
    )
    store.type(
        "local",
        {
            "patterns": [f"{name}_config_*/.{name}rc.{EXTENSIONS}"],
            "options": {"cwd": str(get_local_dir(locations))},
        },
    )
    store.type(
        "home",
        {
            "patterns": [f".{name}rc.{EXTENSIONS}"],
            "options": {"cwd": str(get_home_dir(locations))},
        },
    )
    store.type(
        "cwd",
        {
            "patterns": [f".{name}rc.{EXTENSIONS}"],
            "options": {"cwd": str(cwd)},
        },
    )

    manifest = find_package_manifest(cwd)
    store.type(
        "package",
        {
            "patterns": [manifest.name] if manifest else ["pyproject.toml", "package.json"],
            "options": {"cwd": str(manifest.parent if manifest else cwd)},
            "load": package_section(name),
        },
    )
    return store
