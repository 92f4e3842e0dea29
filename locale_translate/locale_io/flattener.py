"""Conversion between nested locale trees and dot-notation maps."""

from typing import Any


DEFAULT_SEPARATOR = "."


def flatten(
    nested: dict[Any, Any],
    separator: str = DEFAULT_SEPARATOR,
    parent_key: str = "",
) -> dict[str, Any]:
    """Flatten nested mappings into dot-notation keys.

    Only mappings are descended into; strings, numbers, booleans, None and
    lists pass through unchanged as leaf values. Empty mappings are kept as
    leaves so that the tree can be rebuilt exactly.

    Args:
        nested: Nested locale tree.
        separator: Key path separator.
        parent_key: Prefix for every produced key.

    Returns:
        Flat mapping in depth-first source order.

    Example:
        >>> flatten({"users": {"profile": {"title": "Profile"}}})
        {'users.profile.title': 'Profile'}
    """
    result: dict[str, Any] = {}
    for key, value in nested.items():
        new_key = f"{parent_key}{separator}{key}" if parent_key else str(key)
        if isinstance(value, dict) and value:
            result.update(flatten(value, separator, new_key))
        else:
            result[new_key] = value
    return result


def unflatten(
    flat: dict[str, Any], separator: str = DEFAULT_SEPARATOR
) -> dict[str, Any]:
    """Rebuild a nested tree from dot-notation keys.

    Args:
        flat: Flat mapping produced by ``flatten``.
        separator: Key path separator.

    Returns:
        Nested locale tree.
    """
    result: dict[str, Any] = {}
    for key, value in flat.items():
        *parents, leaf = key.split(separator)
        node = result
        for part in parents:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[leaf] = value
    return result
