"""Config store: registers config types, loads their files and merges them.

Typical use::

    store = ConfigStore()
    store.type("home", {"patterns": ".toolrc.{json,yml}", "options": {"cwd": home}})
    store.type("cwd", {"patterns": ".toolrc.{json,yml}"})
    config = store.merge(["home", "cwd"])  # cwd wins on conflicts
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

import pydantic

from . import resolver
from .config_type import TYPE_DEFAULTS, ConfigType, normalize_patterns
from .exceptions import UnknownTypeError, ValidationError
from .files import ConfigFile
from .loaders import Loader, LoaderRegistry
from .merge import Merger
from .settings import StoreSettings

logger = logging.getLogger(__name__)

Selector = Callable[[ConfigType], Any]
TypeNames = str | Iterable[str] | None


def _select_data(config_type: ConfigType) -> Any:
    return config_type.data


class LoadedConfigs(dict[str, ConfigType]):
    """Config types returned by :meth:`ConfigStore.load`, keyed by name.

    Each type appears once. ``order`` keeps the names as requested,
    repeats included, and is the order :meth:`merge` folds them in.
    """

    def __init__(
        self,
        configs: Iterable[tuple[str, ConfigType]],
        merger: Merger,
        order: Iterable[str] | None = None,
    ) -> None:
        super().__init__(configs)
        self._merger = merger
        self.order: list[str] = list(order) if order is not None else list(self)

    def merge(self, selector: Selector | None = None) -> dict[str, Any]:
        """Merge the loaded types in request order; later types win."""
        selector = selector or _select_data
        result: dict[str, Any] = {}
        for name in self.order:
            config_type = self[name]
            result = self._merger.merge(result, selector(config_type))
        return result


class ConfigStore:
    """Registry of config types and the loaders used to read their files.

    Not thread-safe: loading a type mutates its ``files`` and ``data`` in
    place, so a store should be owned by one thread at a time.

    Args:
        config: Store-level defaults merged into every type registration,
            e.g. shared ``options`` or a ``filter``.
        settings: Store behaviour; read from CONFMERGE_* environment
            variables when omitted.
        on_resolved: Called as ``on_resolved(name, files)`` each time a
            type's files are resolved.
    """

    def __init__(
        self,
        config: Mapping[str, Any] | None = None,
        *,
        settings: StoreSettings | None = None,
        on_resolved: Callable[[str, list[ConfigFile]], None] | None = None,
    ) -> None:
        self.settings = settings if settings is not None else StoreSettings()
        self.merger = Merger(array_policy=self.settings.array_policy)
        self.config: dict[str, Any] = normalize_patterns(dict(config or {}))
        self.loaders = LoaderRegistry(builtins=self.settings.builtin_loaders)
        self.on_resolved = on_resolved
        self._types: dict[str, ConfigType] = {}

    @property
    def types(self) -> list[str]:
        """Registered type names, in registration order."""
        return list(self._types)

    # -------------------------------
    # Registration
    # -------------------------------

    def set_type(self, name: str, settings: Mapping[str, Any]) -> "ConfigStore":
        """Register config type ``name``.

        ``settings`` is merged over the store-level config, which is merged
        over the built-in defaults. Registering an existing name replaces it.

        Args:
            name: Type name.
            settings: Must provide ``patterns`` (a string or list of globs)
                unless the store config does.

        Returns:
            The store, for chaining.

        Raises:
            ValidationError: If name is not a non-empty string, no patterns
                are given, or ``filter``/``load`` is not callable.
        """
        if not isinstance(name, str) or not name:
            raise ValidationError("expected type to be a non-empty string")
        if not isinstance(settings, Mapping):
            raise ValidationError("expected settings to be a mapping")

        layered = self.merger.merge(
            TYPE_DEFAULTS, self.config, normalize_patterns(dict(settings))
        )
        layered = normalize_patterns(layered)
        layered["name"] = name

        try:
            config_type = ConfigType.model_validate(layered)
        except pydantic.ValidationError as err:
            raise ValidationError(f"invalid settings for config type {name!r}: {err}") from err

        self._types[name] = config_type
        logger.debug("Registered config type %r with patterns %s", name, config_type.patterns)
        return self

    def get_type(self, name: str) -> ConfigType:
        """Get config type ``name``.

        Raises:
            UnknownTypeError: If the type is not registered.
        """
        try:
            return self._types[name]
        except (KeyError, TypeError):
            raise UnknownTypeError(name) from None

    def type(
        self, name: str, settings: Mapping[str, Any] | None = None
    ) -> "ConfigType | ConfigStore":
        """Get type ``name``, or register it when ``settings`` is given."""
        if not isinstance(name, str):
            raise ValidationError("expected type to be a string")
        if settings is None:
            return self.get_type(name)
        return self.set_type(name, settings)

    def loader(self, extension: str, fn: Loader) -> "ConfigStore":
        """Register a loader for files ending in ``extension``.

        Loaders receive a ConfigFile and return the config value::

            store.loader("ini", lambda file: parse_ini(file.read_text()))

        Returns:
            The store, for chaining.
        """
        self.loaders.register(extension, fn)
        return self

    # -------------------------------
    # Resolution and loading
    # -------------------------------

    def resolve(self, name: str) -> list[ConfigFile]:
        """Resolve the files matched by config type ``name``.

        Raises:
            UnknownTypeError: If the type is not registered.
        """
        if not isinstance(name, str):
            raise ValidationError("expected type to be a string")
        return resolver.resolve(self.get_type(name), on_resolved=self.on_resolved)

    def load_file(self, file: ConfigFile, config_type: ConfigType) -> Any:
        """Load one file of ``config_type``.

        The extension loader's value is stored on ``file.data``. If the type
        defines a ``load`` transform, its return value replaces it.

        Raises:
            LoaderNotFoundError: If no loader handles the file's extension.
        """
        file.data = self.loaders.load(file)
        if config_type.load is not None:
            file.data = config_type.load(file, config_type)
        return file.data

    def load_type(self, name: str) -> ConfigType:
        """Resolve and load config type ``name``.

        Files are loaded in order and each mapping value is merged into the
        type's ``data``; other values are skipped. The first failure is
        raised, leaving the files and data processed so far on the type.

        Returns:
            The type, with ``files`` and ``data`` populated.

        Raises:
            UnknownTypeError: If the type is not registered.
            LoaderNotFoundError: If a matched file has no loader.
        """
        config_type = self.get_type(name)
        files = self.resolve(name)
        config_type.reset()
        config_type.files = files

        for file in files:
            value = self.load_file(file, config_type)
            if isinstance(value, Mapping):
                config_type.data = self.merger.merge(config_type.data, value)
            else:
                logger.debug(
                    "Skipping %s for type %r: loaded %s, not a mapping",
                    file.path,
                    name,
                    type(value).__name__,
                )
        return config_type

    def _names(self, names: TypeNames) -> list[str]:
        if names is None or names == "*":
            return self.types
        if isinstance(names, str):
            return [names]
        return list(names)

    def load(self, names: TypeNames = None) -> LoadedConfigs:
        """Load one or more config types.

        Args:
            names: A type name, a sequence of names, or None / ``"*"`` for
                every registered type.

        Returns:
            The loaded types keyed by name, in the requested order. A name
            given twice is loaded once; ``merge()`` still folds it at each
            position.
        """
        names = self._names(names)
        loaded: dict[str, ConfigType] = {}
        for name in names:
            if name not in loaded:
                loaded[name] = self.load_type(name)
        return LoadedConfigs(loaded.items(), self.merger, names)

    def merge(
        self,
        names: TypeNames | Selector = None,
        selector: Selector | None = None,
        *,
        defaults: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Load config types and merge them into one mapping.

        Types are merged in the order given, so later types win on scalar
        conflicts while arrays are unioned.

        Args:
            names: A type name, a sequence of names, or None / ``"*"`` for
                every registered type. A callable is taken as ``selector``
                for every type.
            selector: Picks the value to merge from each loaded type.
                Defaults to the type's ``data``.
            defaults: Values the merged result is layered over.

        Returns:
            The merged configuration.
        """
        if callable(names):
            return self.merge(None, names, defaults=defaults)

        names = self._names(names)
        configs = self.load(names)
        result = configs.merge(selector)

        if defaults is not None:
            result = self.merger.merge(defaults, result)
        return result
