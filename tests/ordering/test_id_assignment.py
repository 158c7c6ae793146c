"""
Tests for orderly.ordering.ids — unique id assignment.
"""

import re

from orderly.ordering.ids import enforce_unique_id, random_id


class TestEnforceUniqueId:
    def test_free_id_unchanged(self):
        assert enforce_unique_id("X", set()) == "X"

    def test_first_collision(self):
        assert enforce_unique_id("X", {"X"}) == "X-1"

    def test_probes_until_free(self):
        assert enforce_unique_id("X", {"X", "X-1", "X-2"}) == "X-3"

    def test_gap_in_suffixes_is_reused(self):
        assert enforce_unique_id("X", {"X", "X-2"}) == "X-1"

    def test_omitted_id_uses_factory(self):
        assert enforce_unique_id(None, set(), lambda: "fresh") == "fresh"

    def test_generated_id_goes_through_collision_loop(self):
        taken = {"fresh", "fresh-1"}
        assert enforce_unique_id(None, taken, lambda: "fresh") == "fresh-2"

    def test_factory_not_called_when_id_given(self):
        calls = []

        def factory():
            calls.append(1)
            return "unused"

        enforce_unique_id("X", {"X"}, factory)
        assert calls == []

    def test_empty_string_is_a_real_id(self):
        assert enforce_unique_id("", {""}) == "-1"


class TestRandomId:
    def test_hex_format(self):
        assert re.fullmatch(r"[0-9a-f]{32}", random_id())

    def test_distinct(self):
        assert len({random_id() for _ in range(100)}) == 100
