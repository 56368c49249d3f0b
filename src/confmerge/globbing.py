"""Glob matching for config file patterns.

Thin layer over :func:`glob.glob` adding brace expansion (``*.{json,yml}``),
negated patterns (``!pattern``) and ignore lists.
"""

import glob
from collections.abc import Iterable, Sequence
from fnmatch import fnmatchcase
from pathlib import Path


def expand_braces(pattern: str) -> list[str]:
    """Expand the first brace group of ``pattern`` recursively.

    Examples:
        >>> expand_braces(".toolrc.{json,yml}")
        ['.toolrc.json', '.toolrc.yml']

        >>> expand_braces("{a,b{1,2}}.txt")
        ['a.txt', 'b1.txt', 'b2.txt']

    Patterns without a complete brace group are returned unchanged.
    """
    start = pattern.find("{")
    if start == -1:
        return [pattern]

    depth = 0
    options: list[str] = []
    option_start = start + 1
    for index in range(start, len(pattern)):
        char = pattern[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                options.append(pattern[option_start:index])
                prefix, suffix = pattern[:start], pattern[index + 1 :]
                if len(options) == 1:
                    # "{x}" is not an alternation
                    return [
                        prefix + "{" + options[0] + "}" + rest
                        for rest in expand_braces(suffix)
                    ]
                expanded: list[str] = []
                for option in options:
                    expanded.extend(expand_braces(prefix + option + suffix))
                return expanded
        elif char == "," and depth == 1:
            options.append(pattern[option_start:index])
            option_start = index + 1

    return [pattern]


def _is_ignored(relative: str, ignore: Sequence[str]) -> bool:
    return any(fnmatchcase(relative, pattern) for pattern in ignore)


def match(
    patterns: Iterable[str],
    *,
    cwd: str | Path,
    dot: bool = False,
    ignore: Iterable[str] = (),
) -> list[str]:
    """Match ``patterns`` against regular files under ``cwd``.

    Args:
        patterns: Glob patterns relative to ``cwd``, or a single pattern.
            ``**`` matches across directories. A leading ``!`` turns a
            pattern into an exclusion.
        cwd: Base directory.
        dot: Let wildcards match names starting with a dot.
        ignore: Additional exclusion patterns, or a single pattern.

    Returns:
        Relative posix paths, in pattern order. Matches of a single pattern
        are sorted; duplicates across patterns keep their first position.
        A missing base directory yields an empty list.
    """
    base = Path(cwd)
    if isinstance(patterns, str):
        patterns = [patterns]
    if isinstance(ignore, str):
        ignore = [ignore]
    positive: list[str] = []
    negative: list[str] = []
    for pattern in patterns:
        if pattern.startswith("!"):
            negative.extend(expand_braces(pattern[1:]))
        else:
            positive.extend(expand_braces(pattern))
    for pattern in ignore:
        negative.extend(expand_braces(pattern))

    if not base.is_dir():
        return []

    results: list[str] = []
    seen: set[str] = set()
    for pattern in positive:
        matches = glob.glob(pattern, root_dir=base, recursive=True, include_hidden=dot)
        for relative in sorted(Path(m).as_posix() for m in matches):
            if relative in seen or _is_ignored(relative, negative):
                continue
            if not (base / relative).is_file():
                continue
            seen.add(relative)
            results.append(relative)
    return results
