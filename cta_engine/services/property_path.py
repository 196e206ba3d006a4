"""
Property Paths

Dotted paths ("props.title", "style.gradient.startColor", "props.features.0.title")
parsed into segments, with copy-on-write get/set over plain JSON data.

set_at_path never mutates its input: every dict or list along the path is
copied, everything off the path is shared.
"""

from typing import Any, NamedTuple

from cta_engine.core.exceptions import InvalidPropertyPathError

_MISSING = object()


class PropertyPath(NamedTuple):
    """A parsed dotted path."""

    segments: tuple[str, ...]

    @classmethod
    def parse(cls, path: "str | PropertyPath") -> "PropertyPath":
        if isinstance(path, PropertyPath):
            return path
        if not isinstance(path, str) or not path.strip():
            raise InvalidPropertyPathError(str(path), "path is empty")
        segments = tuple(path.split("."))
        if any(not segment for segment in segments):
            raise InvalidPropertyPathError(path, "empty segment")
        return cls(segments)

    @property
    def head(self) -> str:
        return self.segments[0]

    @property
    def leaf(self) -> str:
        return self.segments[-1]

    def __str__(self) -> str:
        return ".".join(self.segments)


def _index(container: list, segment: str, path: PropertyPath) -> int:
    try:
        index = int(segment)
    except ValueError:
        raise InvalidPropertyPathError(str(path), f"'{segment}' is not a list index")
    if index < 0 or index > len(container):
        raise InvalidPropertyPathError(str(path), f"index {index} out of range")
    return index


def get_at_path(data: Any, path: "str | PropertyPath", default: Any = None) -> Any:
    """Read the value at a path; missing steps yield `default`."""
    parsed = PropertyPath.parse(path)
    current = data
    for segment in parsed.segments:
        if isinstance(current, dict):
            current = current.get(segment, _MISSING)
        elif isinstance(current, list):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError):
                current = _MISSING
        else:
            current = _MISSING
        if current is _MISSING or current is None:
            return default
    return current


def set_at_path(data: dict[str, Any], path: "str | PropertyPath", value: Any) -> dict[str, Any]:
    """
    Return a copy of `data` with `value` written at `path`.

    Missing or null intermediate records are created as dicts. Setting
    index == len(list) appends.

    Raises:
        InvalidPropertyPathError: Empty path, or a step through a scalar
    """
    parsed = PropertyPath.parse(path)
    return _set(data, parsed.segments, value, parsed)


def _set(node: Any, segments: tuple[str, ...], value: Any, path: PropertyPath) -> Any:
    segment, rest = segments[0], segments[1:]

    if node is None:
        node = {}

    if isinstance(node, dict):
        copy = dict(node)
        copy[segment] = value if not rest else _set(node.get(segment), rest, value, path)
        return copy

    if isinstance(node, list):
        copy = list(node)
        index = _index(copy, segment, path)
        child = copy[index] if index < len(copy) else None
        new_child = value if not rest else _set(child, rest, value, path)
        if index == len(copy):
            copy.append(new_child)
        else:
            copy[index] = new_child
        return copy

    raise InvalidPropertyPathError(
        str(path), f"cannot descend into {type(node).__name__} at '{segment}'"
    )
