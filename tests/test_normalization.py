# ==============================================
# Tests for Normalization Module (labels + values)
# ==============================================

import math
import sys

import pytest

from leakview.normalization import (
    CIRCULAR_REFERENCE,
    format_label,
    has_meaningful_value,
    normalize_key,
    normalize_value,
    should_skip_key,
)


# ==============================================
# Label Tests
# ==============================================

class TestFormatLabel:
    """Tests for key → display label conversion."""

    @pytest.mark.parametrize("key, expected", [
        ("full_name", "Full Name"),
        ("ipAddress", "IP Address"),
        ("md5", "MD5"),
        ("leak-name", "Leak Name"),
        ("user_ID", "User ID"),
        ("ssidPassword", "SSID Password"),
        ("SHA256", "SHA256"),
        ("dob", "DOB"),
        ("phone_number-2", "Phone Number 2"),
        ("address2", "Address2"),
    ])
    def test_snake_camel_kebab_and_acronyms(self, key, expected):
        assert format_label(key) == expected

    def test_short_words_are_uppercased(self):
        """Words of up to two characters read as acronyms."""
        assert format_label("db") == "DB"
        assert format_label("name_of_user") == "Name OF User"

    def test_short_numeric_word_is_not_uppercased(self):
        assert format_label("42") == "42"

    def test_whitespace_is_collapsed(self):
        assert format_label("  first   name ") == "First Name"

    @pytest.mark.parametrize("key", ["", "   ", "___", "-_-"])
    def test_empty_key_falls_back_to_value(self, key):
        assert format_label(key) == "Value"

    def test_reformatting_is_not_idempotent_for_short_words(self):
        """An already formatted label can change casing on a second pass."""
        assert format_label("Go Home") == "GO Home"


class TestNormalizeKey:
    def test_collapses_separators(self):
        assert normalize_key("  Search_Time ") == "search time"
        assert normalize_key("num-of__results") == "num of results"

    def test_does_not_split_camel_case(self):
        assert normalize_key("NumOfResults") == "numofresults"


# ==============================================
# Value Normalizer Tests
# ==============================================

class TestNormalizeValue:
    """Tests for recursive value sanitization."""

    def test_primitives(self):
        assert normalize_value("  x  ", set()) == "x"
        assert normalize_value(0, set()) == 0
        assert normalize_value(2.5, set()) == 2.5
        assert normalize_value(None, set()) is None

    def test_booleans_stay_booleans(self):
        assert normalize_value(True, set()) is True
        assert normalize_value(False, set()) is False

    def test_list_elements_are_not_pruned(self):
        assert normalize_value([" a ", None, 1], set()) == ["a", None, 1]

    def test_tuple_becomes_list(self):
        assert normalize_value(("a", "b"), set()) == ["a", "b"]

    def test_empty_children_are_pruned_from_mappings(self):
        raw = {
            "a": None,
            "b": [],
            "c": {},
            "d": {"e": None},
            "f": "ok",
            "g": [None, "n/a"],
        }
        assert normalize_value(raw, set()) == {"f": "ok"}

    def test_placeholder_strings_are_kept_inside_mappings(self):
        """Only None and empty containers are pruned, not "n/a" strings."""
        assert normalize_value({"a": "n/a", "b": "x"}, set()) == {"a": "n/a", "b": "x"}

    def test_noise_and_blank_keys_are_skipped(self):
        raw = {
            "num_of_results": 3,
            "Search-Time": 1.2,
            "PRICE": 2,
            "num results": 4,
            " ": "blank key",
            "name": "x",
        }
        assert normalize_value(raw, set()) == {"name": "x"}

    def test_key_order_is_preserved(self):
        raw = {"z": 1, "a": 2, "m": 3}
        assert list(normalize_value(raw, set())) == ["z", "a", "m"]

    def test_keys_are_kept_untrimmed(self):
        assert normalize_value({" name ": "x"}, set()) == {" name ": "x"}

    def test_self_reference_becomes_sentinel(self):
        a = {"name": "x"}
        a["self"] = a
        assert normalize_value(a, set()) == {"name": "x", "self": CIRCULAR_REFERENCE}

    def test_cycle_through_list(self):
        a = {"name": "x", "children": []}
        a["children"].append(a)
        # ["Circular reference"] carries nothing meaningful, so the key is pruned
        assert normalize_value(a, set()) == {"name": "x"}

    def test_shared_sibling_is_normalized_twice(self):
        shared = {"v": 1}
        assert normalize_value({"a": shared, "b": shared}, set()) == {"a": {"v": 1}, "b": {"v": 1}}

    def test_self_containing_list(self):
        items = ["x"]
        items.append(items)
        assert normalize_value({"l": items}, set()) == {"l": ["x", CIRCULAR_REFERENCE]}

    def test_shared_sibling_list_is_not_a_cycle(self):
        shared = ["v"]
        assert normalize_value([shared, shared], set()) == [["v"], ["v"]]

    def test_nesting_deeper_than_recursion_limit(self):
        value = "x"
        for _ in range(sys.getrecursionlimit() * 3):
            value = {"a": value}

        result = normalize_value(value, set())
        for _ in range(sys.getrecursionlimit() * 3):
            result = result["a"]
        assert result == "x"

    def test_pruning_applies_at_every_depth(self):
        value = None
        for _ in range(2000):
            value = {"a": value}
        assert normalize_value(value, set()) == {}

    def test_seen_set_is_restored(self):
        a = {"name": "x"}
        a["self"] = a
        seen = set()
        normalize_value(a, seen)
        assert seen == set()

    def test_unknown_types_are_stringified(self):
        class Thing:
            def __str__(self):
                return "thing"

        assert normalize_value(Thing(), set()) == "thing"


class TestHasMeaningfulValue:
    @pytest.mark.parametrize("value", [
        "x", 0, 0.0, False, True, -1, ["", "x"], {"a": {"b": "c"}},
    ])
    def test_meaningful(self, value):
        assert has_meaningful_value(value) is True

    @pytest.mark.parametrize("value", [
        None, "", "   ", " N/A ", "na", "None", "null", "undefined",
        "Unknown", "no data", "Circular Reference", math.nan,
        [], {}, [None, ""], {"a": {"b": None}}, [[], {}],
    ])
    def test_not_meaningful(self, value):
        assert has_meaningful_value(value) is False

    def test_deep_value(self):
        value = ["x"]
        for _ in range(sys.getrecursionlimit() * 3):
            value = [value]
        assert has_meaningful_value(value) is True


class TestShouldSkipKey:
    @pytest.mark.parametrize("key", [
        "num of results", "num_of_results", "num-results", "numresults",
        "Num Results", "price", "Price", "search time", "search_time",
        "SEARCH-TIME", "", "  ",
    ])
    def test_skipped(self, key):
        assert should_skip_key(key) is True

    @pytest.mark.parametrize("key", ["name", "prices", "NumOfResults", "time"])
    def test_kept(self, key):
        assert should_skip_key(key) is False
