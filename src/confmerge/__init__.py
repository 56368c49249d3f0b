"""confmerge - discover config files in several locations and deep-merge them.

Config types name a set of glob patterns and a base directory. A store
resolves each type's files, loads them by extension and merges the results
with array-union semantics.
"""

from confmerge.config_type import ConfigType
from confmerge.exceptions import (
    CircularReferenceError,
    ConfigError,
    LoaderNotFoundError,
    UnknownTypeError,
    ValidationError,
)
from confmerge.files import ConfigFile
from confmerge.loaders import LoaderRegistry
from confmerge.merge import ArrayPolicy, Merger, deep_clone, merge
from confmerge.presets import create_store
from confmerge.settings import LocationSettings, StoreSettings
from confmerge.sources import MergedConfigSource
from confmerge.store import ConfigStore, LoadedConfigs

__version__ = "0.1.0"

__all__ = [
    # Exceptions
    "ConfigError",
    "ValidationError",
    "UnknownTypeError",
    "LoaderNotFoundError",
    "CircularReferenceError",
    # Merging
    "ArrayPolicy",
    "Merger",
    "merge",
    "deep_clone",
    # Store
    "ConfigStore",
    "ConfigType",
    "ConfigFile",
    "LoadedConfigs",
    "LoaderRegistry",
    "create_store",
    # Settings
    "StoreSettings",
    "LocationSettings",
    "MergedConfigSource",
]
