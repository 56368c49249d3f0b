"""Resolve a config type's glob patterns to concrete files."""

import logging
from collections.abc import Callable

from . import globbing
from .config_type import ConfigType
from .files import ConfigFile

logger = logging.getLogger(__name__)

ResolvedCallback = Callable[[str, list[ConfigFile]], None]


def resolve(
    config_type: ConfigType,
    *,
    on_resolved: ResolvedCallback | None = None,
) -> list[ConfigFile]:
    """Find the files matched by ``config_type``.

    Patterns are matched under the type's base directory. Each match becomes
    a ConfigFile with an absolute path; files rejected by the type's filter
    are dropped. Order follows the glob matcher.

    Args:
        config_type: The type to resolve.
        on_resolved: Called as ``on_resolved(name, files)`` once the file
            list is known.

    Returns:
        The matched files, in order.
    """
    cwd = config_type.cwd
    options = config_type.options
    ignore = options.get("ignore") or ()
    if isinstance(ignore, str):
        ignore = [ignore]
    matches = globbing.match(
        config_type.patterns,
        cwd=cwd,
        dot=bool(options.get("dot", False)),
        ignore=ignore,
    )

    files: list[ConfigFile] = []
    for relative in matches:
        file = ConfigFile(path=cwd / relative, cwd=cwd)
        if config_type.filter is not None and not config_type.filter(file):
            logger.debug("Filtered out %s for type %r", file.path, config_type.name)
            continue
        files.append(file)

    logger.debug(
        "Resolved %d file(s) for type %r under %s: %s",
        len(files),
        config_type.name,
        cwd,
        [str(f.path) for f in files],
    )
    if on_resolved is not None:
        on_resolved(config_type.name, files)
    return files
