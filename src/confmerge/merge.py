"""Deep merge utility for configuration values."""

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from .exceptions import CircularReferenceError

# Keys that could rebind a container's prototype when the merged data is
# handed to another runtime; never copied.
UNSAFE_KEYS = frozenset({"__proto__", "constructor"})

_MISSING = object()


class ArrayPolicy(str, Enum):
    """How a sequence in an overlay combines with the existing value."""

    UNION_DROP_FALSY = "union-drop-falsy"
    UNION_KEEP_ALL = "union-keep-all"
    OVERWRITE = "array-overwrite"


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def deep_clone(value: Any) -> Any:
    """Recursively copy mappings and sequences.

    Mappings become plain dicts and tuples become lists. Leaf values are
    shared, since they are immutable in the JSON-like value set.

    Args:
        value: The value to copy.

    Returns:
        A copy sharing no mutable container with ``value``.

    Raises:
        CircularReferenceError: If ``value`` contains itself.
    """
    return _clone(value, set())


def _clone(value: Any, path: set[int]) -> Any:
    if isinstance(value, Mapping):
        items: Iterable[tuple[Any, Any]] = value.items()
    elif _is_sequence(value):
        items = enumerate(value)
    else:
        return value

    marker = id(value)
    if marker in path:
        raise CircularReferenceError()
    path.add(marker)
    try:
        if isinstance(value, Mapping):
            return {key: _clone(item, path) for key, item in items}
        return [_clone(item, path) for _, item in items]
    finally:
        path.discard(marker)


def _dedup_key(item: Any) -> tuple[type, Any]:
    # 1 and 1.0 are one number; 1 and True are not
    if isinstance(item, (int, float)) and not isinstance(item, bool):
        return (float, item)
    return (type(item), item)


def _unique(items: Iterable[Any]) -> list[Any]:
    """Drop repeated items, keeping the first occurrence."""
    result: list[Any] = []
    seen: set[tuple[type, Any]] = set()
    for item in items:
        try:
            key = _dedup_key(item)
            if key in seen:
                continue
            seen.add(key)
        except TypeError:
            if any(type(other) is type(item) and other == item for other in result):
                continue
        result.append(item)
    return result


class Merger:
    """Deep merge engine.

    Overlays are applied left to right, so later overlays take precedence:
    - mapping + mapping -> recursive merge
    - sequence overlay -> union with the existing value (see ``ArrayPolicy``)
    - everything else -> overlay value replaces the existing one

    Every container in the result is freshly allocated; inputs are never
    modified.
    """

    def __init__(
        self,
        array_policy: ArrayPolicy = ArrayPolicy.UNION_DROP_FALSY,
        unsafe_keys: Iterable[str] = UNSAFE_KEYS,
    ) -> None:
        self.array_policy = ArrayPolicy(array_policy)
        self.unsafe_keys = frozenset(unsafe_keys)

    def __repr__(self) -> str:
        return f"Merger(array_policy={self.array_policy.value!r})"

    def merge(self, base: Any, *overlays: Any) -> Any:
        """Deep merge ``overlays`` onto ``base``.

        Args:
            base: The value to start from.
            *overlays: Values whose keys take precedence, in increasing order.
                Anything that is not a mapping is ignored.

        Returns:
            The merged value. With no overlays, a deep clone of ``base``.

        Raises:
            CircularReferenceError: If any input contains a reference cycle.
        """
        result = deep_clone(base)
        for overlay in overlays:
            if not isinstance(overlay, Mapping):
                continue
            if not isinstance(result, dict):
                result = {}
            self._merge_into(result, overlay, set())
        return result

    def _merge_into(
        self, target: dict[str, Any], overlay: Mapping[str, Any], path: set[int]
    ) -> None:
        # target is always owned by the result being built, so it can be
        # updated in place
        marker = id(overlay)
        if marker in path:
            raise CircularReferenceError()
        path.add(marker)

        for key, value in overlay.items():
            if key in self.unsafe_keys:
                continue
            existing = target.get(key, _MISSING)
            if isinstance(value, Mapping) and isinstance(existing, dict):
                self._merge_into(existing, value, path)
            elif _is_sequence(value):
                target[key] = self._combine(existing, value)
            else:
                target[key] = deep_clone(value)

        path.discard(marker)

    def _combine(self, existing: Any, incoming: list[Any] | tuple[Any, ...]) -> list[Any]:
        if self.array_policy is ArrayPolicy.OVERWRITE:
            return deep_clone(incoming)

        if existing is _MISSING or existing is None:
            combined: list[Any] = []
        elif _is_sequence(existing):
            combined = list(existing)
        else:
            combined = [existing]
        combined.extend(incoming)

        if self.array_policy is ArrayPolicy.UNION_DROP_FALSY:
            combined = [item for item in combined if item]

        return [deep_clone(item) for item in _unique(combined)]


default_merger = Merger()


def merge(base: Any, *overlays: Any) -> Any:
    """Deep merge values using the default array policy.

    Examples:
        >>> merge({"a": 1}, {"b": 2})
        {'a': 1, 'b': 2}

        >>> merge({"a": {"x": 1}}, {"a": {"y": 2}})
        {'a': {'x': 1, 'y': 2}}

        >>> merge({"a": [1, 2]}, {"a": [2, 3]})
        {'a': [1, 2, 3]}

        >>> merge({"a": [0, 1]}, {"a": [2]})
        {'a': [1, 2]}
    """
    return default_merger.merge(base, *overlays)
