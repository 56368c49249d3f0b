"""File loaders keyed by extension.

A loader receives a :class:`~confmerge.files.ConfigFile` and returns the
parsed value. Parse and I/O errors from the underlying parsers propagate
unchanged.
"""

import inspect
import json
import logging
import tomllib
import types
from collections.abc import Callable
from typing import Any

import yaml

from .exceptions import LoaderNotFoundError, ValidationError
from .files import ConfigFile

logger = logging.getLogger(__name__)

Loader = Callable[[ConfigFile], Any]


def normalize_extension(extension: str) -> str:
    """Return ``extension`` with a leading dot (``"json"`` -> ``".json"``)."""
    if not extension.startswith("."):
        extension = "." + extension
    return extension


def load_json(file: ConfigFile) -> Any:
    with open(file.path, "rb") as f:
        return json.load(f)


def load_yaml(file: ConfigFile) -> Any:
    with open(file.path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def load_toml(file: ConfigFile) -> Any:
    with open(file.path, "rb") as f:
        return tomllib.load(f)


def _is_data_attribute(name: str, value: Any) -> bool:
    if name.startswith("_"):
        return False
    return not (
        inspect.ismodule(value)
        or inspect.isfunction(value)
        or inspect.isclass(value)
        or inspect.isbuiltin(value)
    )


def load_module(file: ConfigFile) -> Any:
    """Execute a Python config module and return its exported value.

    The source is read and compiled on every call. The module is never
    added to ``sys.modules`` and no bytecode cache is consulted, so each
    load sees the file as it is on disk now.

    Returns:
        The module's ``config`` attribute if it defines one, otherwise a
        dict of its public data attributes.
    """
    source = file.read_bytes()
    code = compile(source, str(file.path), "exec")

    module = types.ModuleType(f"_confmerge_{file.stem.lstrip('.') or 'module'}")
    module.__file__ = str(file.path)
    exec(code, module.__dict__)

    namespace = vars(module)
    if "config" in namespace:
        return namespace["config"]
    return {
        name: value
        for name, value in namespace.items()
        if _is_data_attribute(name, value)
    }


BUILTIN_LOADERS: dict[str, Loader] = {
    ".json": load_json,
    ".yaml": load_yaml,
    ".yml": load_yaml,
    ".toml": load_toml,
    ".py": load_module,
}


class LoaderRegistry:
    """Maps normalized file extensions to loader functions.

    Registering an extension twice replaces the earlier loader. Looking up an
    extension with no loader is an error, never a silent fallback.
    """

    def __init__(self, builtins: bool = True) -> None:
        self._loaders: dict[str, Loader] = {}
        if builtins:
            for extension, loader in BUILTIN_LOADERS.items():
                self.register(extension, loader)

    def register(self, extension: str, loader: Loader) -> None:
        """Register ``loader`` for files ending in ``extension``.

        Args:
            extension: File extension, with or without the leading dot.
            loader: Callable taking a ConfigFile and returning its value.

        Raises:
            ValidationError: If extension is not a string or loader is not
                callable.
        """
        if not isinstance(extension, str):
            raise ValidationError("expected extname to be a string")
        if not callable(loader):
            raise ValidationError("expected loader to be a function")
        self._loaders[normalize_extension(extension)] = loader

    def resolve(self, extension: str, path: str | None = None) -> Loader:
        """Get the loader for ``extension``.

        Raises:
            LoaderNotFoundError: If no loader is registered.
        """
        try:
            return self._loaders[normalize_extension(extension)]
        except KeyError:
            raise LoaderNotFoundError(extension, path) from None

    def load(self, file: ConfigFile) -> Any:
        """Load ``file`` with the loader matching its extension."""
        loader = self.resolve(file.extname, str(file.path))
        logger.debug("Loading %s with %s", file.path, getattr(loader, "__name__", loader))
        return loader(file)

    def extensions(self) -> list[str]:
        return list(self._loaders)

    def __contains__(self, extension: object) -> bool:
        return isinstance(extension, str) and normalize_extension(extension) in self._loaders
