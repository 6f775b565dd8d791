"""
Document - Helpers for generic JSON-like documents.

A document is any tree of dict, list, str, int, float, bool and None, as
produced by json.load or yaml.safe_load. Paths are tuples of dict keys and
list indices. Nothing here mutates a document in place: with_value_at
returns a new tree that copies the containers along the path and shares
every other subtree with the original.
"""

import re
from typing import Any, Iterator, Union

from ..exceptions import InvalidPathError

PathComponent = Union[str, int]
Path = tuple[PathComponent, ...]

PATH_SEPARATOR = "."
SAFE_PATH_PATTERN = re.compile(r"^[a-zA-Z0-9._-]+$")

_MISSING = object()


def format_path(path: Path) -> str:
    """Build the canonical path string, e.g. ('fields', 'labels', 0) -> 'fields.labels.0'."""
    return PATH_SEPARATOR.join(str(component) for component in path)


def is_safe_path(path_string: str) -> bool:
    """Check a canonical path against the permitted character set."""
    return bool(SAFE_PATH_PATTERN.match(path_string))


def validate_path(path: Path) -> str:
    """
    Return the canonical path string, or raise if it is not safe to edit.

    Raises:
        InvalidPathError: If the path contains characters outside [a-zA-Z0-9._-]
    """
    path_string = format_path(path)
    if not is_safe_path(path_string):
        raise InvalidPathError(path_string)
    return path_string


def iter_string_leaves(document: Any, prefix: Path = ()) -> Iterator[tuple[Path, str]]:
    """
    Yield (path, value) for every string leaf, depth-first in declaration order.
    """
    if isinstance(document, dict):
        for key, value in document.items():
            yield from iter_string_leaves(value, prefix + (key,))
    elif isinstance(document, list):
        for index, value in enumerate(document):
            yield from iter_string_leaves(value, prefix + (index,))
    elif isinstance(document, str):
        yield prefix, document


def get_at(document: Any, path: Path, default: Any = None) -> Any:
    """Read the value at path, or default if any component is absent."""
    current = document
    for component in path:
        if isinstance(current, dict) and component in current:
            current = current[component]
        elif (
            isinstance(current, list)
            and isinstance(component, int)
            and -len(current) <= component < len(current)
        ):
            current = current[component]
        else:
            return default
    return current


def has_path(document: Any, path: Path) -> bool:
    """Check whether every component of path exists in the document."""
    return get_at(document, path, _MISSING) is not _MISSING


def with_value_at(document: Any, path: Path, value: Any) -> Any:
    """
    Return a copy of document with value stored at path.

    Missing intermediate mappings are created. Containers off the path are
    shared with the input, which is left untouched.

    Raises:
        KeyError: If a list index is out of range
        TypeError: If the path traverses a scalar
    """
    if not path:
        return value

    head, rest = path[0], path[1:]

    if isinstance(document, dict):
        updated = dict(document)
        updated[head] = with_value_at(document.get(head, {}), rest, value)
        return updated

    if isinstance(document, list):
        if not isinstance(head, int):
            raise TypeError(f"List index must be an integer, got {head!r}")
        if not -len(document) <= head < len(document):
            raise KeyError(f"List index {head} out of range")
        updated_list = list(document)
        updated_list[head] = with_value_at(document[head], rest, value)
        return updated_list

    raise TypeError(
        f"Cannot set {format_path(path)!r} inside a {type(document).__name__} value"
    )
