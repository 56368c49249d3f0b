"""Configuration exceptions for confmerge."""


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


class ValidationError(ConfigError, ValueError):
    """Raised when a registration call receives invalid input.

    For example, a config type registered without any glob patterns, or a
    loader that is not callable.
    """


class UnknownTypeError(ConfigError, LookupError):
    """Raised when an operation references an unregistered config type."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'config type "{name}" does not exist')


class LoaderNotFoundError(ConfigError, LookupError):
    """Raised when no loader is registered for a file extension."""

    def __init__(self, extension: str, path: str | None = None) -> None:
        self.extension = extension
        self.path = path
        message = f"no loaders are registered for: {extension or '<no extension>'}"
        if path:
            message = f"{message} ({path})"
        super().__init__(message)


class CircularReferenceError(ConfigError, ValueError):
    """Raised when a value passed to merge or clone references itself."""

    def __init__(self) -> None:
        super().__init__("cannot merge or clone a value containing a reference cycle")
