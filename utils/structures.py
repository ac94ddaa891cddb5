"""
=====================================================
Immutable update and deep copy of nested structures.
=====================================================

Pure helpers for JSON-like data: ``None``, primitives, lists/tuples and
mappings. Neither function mutates its input.

Key Features:
    - merge: copy a structure with one nested location patched
    - clone: fully independent deep copy
    - Structural sharing: merge only reallocates containers on the edited path
    - Bounded recursion: clone stops at config.max_structure_depth

Cyclic structures are not supported. clone() reports them through
StructureDepthError once the depth limit is reached.

Example:
    >>> from utils.structures import clone, merge
    >>>
    >>> state = {'tables': [{'name': 'users', 'fields': []}]}
    >>> renamed = merge(state, ['tables', 0], {'name': 'accounts'})
    >>> renamed['tables'][0]['name']
    'accounts'
    >>> state['tables'][0]['name']
    'users'
    >>>
    >>> copy = clone(state)
    >>> copy == state and copy['tables'] is not state['tables']
    True
"""

from collections.abc import Mapping
from typing import Any, Hashable, Iterable, Iterator, List, Optional, Tuple

from core.config import config

SEQUENCE_TYPES = (list, tuple)


class StructureError(Exception):
    """Base exception for structural operation failures."""
    pass


class PathError(StructureError):
    """Exception raised when a path cannot be followed through a structure.

    Raised when descending into a primitive value or when a key cannot
    address a list position.
    """
    pass


class StructureDepthError(StructureError):
    """Exception raised when a structure nests deeper than the allowed limit."""
    pass


def merge(target: Any, path: Iterable[Hashable], delta: Any) -> Any:
    """Return a copy of ``target`` with the location at ``path`` patched by ``delta``.

    The path is consumed one key per nesting level. Once it is exhausted the
    location found is updated according to its kind:

    - list/tuple: each entry of ``delta`` overwrites the same index
      (sparse patch, missing slots are padded with ``None``)
    - mapping: entries of ``delta`` are written over a shallow copy
    - primitive or ``None``: replaced by ``delta``

    Only the containers along the path are copied; untouched branches are
    shared with ``target``. The caller's ``path`` is never modified.

    Args:
        target: Structure to update
        path: Sequence of keys (list indices may be ints or digit strings)
        delta: Replacement value or partial structure

    Returns:
        New structure with the change applied

    List positions must be non-negative ints or digit strings. Negative
    indices and non-numeric keys cannot address a list slot (a list has no
    named properties), so they raise PathError just like descending into a
    primitive does.

    Raises:
        PathError: If the path descends into a primitive or uses a negative
            or non-numeric list index

    Example:
        >>> merge({'a': {'b': 1, 'c': 2}}, ['a'], {'b': 10})
        {'a': {'b': 10, 'c': 2}}
        >>> merge([1, 2, 3], [], {1: 'x'})
        [1, 'x', 3]
        >>> merge({'a': [0, {'n': 1}]}, ['a', '1', 'n'], 5)
        {'a': [0, {'n': 5}]}
    """
    return _merge(target, tuple(path), delta)


def _merge(target: Any, path: Tuple[Hashable, ...], delta: Any) -> Any:
    if isinstance(target, SEQUENCE_TYPES):
        result = list(target)
        if path:
            index = _list_index(path[0])
            current = target[index] if index < len(target) else None
            _assign(result, index, _merge(current, path[1:], delta))
        else:
            for key, value in _delta_items(delta):
                _assign(result, _list_index(key), value)
        return tuple(result) if isinstance(target, tuple) else result

    if isinstance(target, Mapping):
        result = dict(target)
        if path:
            key = path[0]
            result[key] = _merge(target.get(key), path[1:], delta)
        else:
            result.update(_delta_items(delta))
        return result

    if path:
        raise PathError(f"Cannot descend into a primitive ({target!r}) with key {path[0]!r}")
    return delta


def _delta_items(delta: Any) -> Iterator[Tuple[Hashable, Any]]:
    """Yield (key, value) pairs of a delta; non-containers have none."""
    if isinstance(delta, Mapping):
        return iter(delta.items())
    if isinstance(delta, SEQUENCE_TYPES):
        return enumerate(delta)
    return iter(())


def _list_index(key: Hashable) -> int:
    """Convert a path key into a non-negative list index."""
    if isinstance(key, str) and key.isdecimal():
        return int(key)
    if isinstance(key, int) and not isinstance(key, bool) and key >= 0:
        return key
    raise PathError(f"Invalid list index: {key!r}")


def _assign(items: List[Any], index: int, value: Any) -> None:
    if index >= len(items):
        items.extend([None] * (index + 1 - len(items)))
    items[index] = value


def clone(target: Any, max_depth: Optional[int] = None) -> Any:
    """Return a deep copy of ``target`` sharing no containers with it.

    Mappings become ``dict``, lists stay ``list`` and tuples stay ``tuple``.
    Anything else is treated as immutable and returned as-is.

    Args:
        target: Structure to copy
        max_depth: Maximum container nesting, defaults to config.max_structure_depth

    Returns:
        Independent copy of ``target``

    Raises:
        StructureDepthError: If the structure nests deeper than ``max_depth``
    """
    if max_depth is None:
        max_depth = config.max_structure_depth
    return _clone(target, 0, max_depth)


def _clone(target: Any, depth: int, max_depth: int) -> Any:
    if target is None:
        return None

    if not isinstance(target, (Mapping,) + SEQUENCE_TYPES):
        return target

    if depth >= max_depth:
        raise StructureDepthError(
            f"Structure nesting exceeds {max_depth} levels (cyclic input?)"
        )

    if isinstance(target, Mapping):
        result = {}
        for key, value in target.items():
            result[key] = _clone(value, depth + 1, max_depth)
        return result

    items = []
    for value in target:
        items.append(_clone(value, depth + 1, max_depth))
    return tuple(items) if isinstance(target, tuple) else items
