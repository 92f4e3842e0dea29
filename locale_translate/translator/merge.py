"""Reconciliation of fresh translations with an existing target file."""

from collections.abc import Collection, Mapping
from typing import Any

from locale_translate.config.schema import TranslationMode


def merge(
    mode: TranslationMode,
    existing: Mapping[str, Any],
    new: Mapping[str, Any],
    *,
    source_keys: Collection[str] | None = None,
    prune: bool = False,
) -> dict[str, Any]:
    """Merge translated keys into the existing target map.

    Override mode discards the existing map. Incremental mode keeps every
    existing value and only adds keys missing from it; existing keys are
    never removed unless ``prune`` is set and ``source_keys`` is given, in
    which case keys no longer present in the source are dropped.

    Args:
        mode: Reconciliation mode.
        existing: Flat content of the current target file.
        new: Flat freshly translated content.
        source_keys: Keys present in the source file.
        prune: Whether incremental mode drops keys absent from the source.

    Returns:
        Flat map to hand to the writer.

    Example:
        >>> merge(TranslationMode.INCREMENTAL, {"a": "x"}, {"a": "y", "b": "z"})
        {'a': 'x', 'b': 'z'}
    """
    if mode == TranslationMode.OVERRIDE:
        return dict(new)

    if prune and source_keys is not None:
        keep = set(source_keys)
        result = {key: value for key, value in existing.items() if key in keep}
    else:
        result = dict(existing)

    for key, value in new.items():
        if key not in result:
            result[key] = value
    return result
