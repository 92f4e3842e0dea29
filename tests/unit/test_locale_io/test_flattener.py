"""Unit tests for flatten/unflatten."""

import pytest

from locale_translate.locale_io.flattener import flatten, unflatten


class TestFlatten:
    """Tests for flatten."""

    def test_nested_keys_joined_with_dots(self) -> None:
        """Nested mappings become dot-notation keys."""
        nested = {"users": {"profile": {"title": "Profile"}}, "ok": "OK"}
        assert flatten(nested) == {"users.profile.title": "Profile", "ok": "OK"}

    def test_preserves_order(self) -> None:
        """Keys appear in depth-first source order."""
        nested = {"b": {"y": "1", "x": "2"}, "a": "3"}
        assert list(flatten(nested)) == ["b.y", "b.x", "a"]

    def test_non_string_leaves_pass_through(self) -> None:
        """Numbers, booleans, None and lists are leaf values."""
        nested = {"n": 3, "flag": True, "none": None, "days": ["Mon", "Tue"]}
        assert flatten(nested) == nested

    def test_custom_separator(self) -> None:
        """The separator is configurable."""
        assert flatten({"a": {"b": "c"}}, separator="/") == {"a/b": "c"}


class TestUnflatten:
    """Tests for unflatten."""

    def test_rebuilds_tree(self) -> None:
        """Dot keys are split back into nested mappings."""
        flat = {"a.b.c": "1", "a.b.d": "2", "e": "3"}
        assert unflatten(flat) == {"a": {"b": {"c": "1", "d": "2"}}, "e": "3"}

    @pytest.mark.parametrize(
        "nested",
        [
            {},
            {"a": "1"},
            {"users": {"profile": {"title": "T", "count": 2}}, "x": ["l"]},
            {"a": {}, "b": {"c": {}}},
            {"es": {"nav": {"home": "Inicio", "back": None}}},
        ],
    )
    def test_round_trip(self, nested: dict[str, object]) -> None:
        """unflatten(flatten(x)) == x for string-keyed trees."""
        assert unflatten(flatten(nested)) == nested
