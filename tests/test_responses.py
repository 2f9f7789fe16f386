"""
Unit Tests for Response Paths and Collected Responses
Tests path algebra, response values and the flat response map
"""

import pytest
import sys
from pathlib import Path, PurePosixPath

# Add scripts directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from interview import (
    ResponsePath,
    ResponseValue,
    Responses,
    ValueKind,
    DefaultValue,
    MissingPath,
    TypeMismatch
)


# ===================
# Fixtures
# ===================

@pytest.fixture
def address_responses():
    """Responses for a nested address plus a sibling field."""
    return Responses({
        "name": "Ada",
        "address.street": "1 Analytical Way",
        "address.city": "London",
        "address_book": "unrelated",
        "age": 36,
    })


# ===================
# Path Tests
# ===================

class TestResponsePath:
    """Tests for ResponsePath."""

    def test_empty_path(self):
        """Test the root path has no segments."""
        path = ResponsePath.empty()
        assert path.is_empty()
        assert path.as_str() == ""
        assert len(path) == 0
        assert path.first() is None
        assert path.last() is None

    def test_parse_dotted_text(self):
        """Test dotted text splits into segments."""
        path = ResponsePath("address.street")
        assert list(path.segments()) == ["address", "street"]
        assert str(path) == "address.street"

    def test_child_appends_segment(self):
        """Test child() builds nested paths."""
        path = ResponsePath.empty().child("role").child("selected_variant")
        assert path.as_str() == "role.selected_variant"

    def test_child_with_empty_segment_is_noop(self):
        """Test child('') returns an equal path."""
        path = ResponsePath("a.b")
        assert path.child("") == path

    def test_child_accepts_index_and_path(self):
        """Test integer item indices and whole sub-paths."""
        path = ResponsePath("items").child(0).child(ResponsePath("x.y"))
        assert path.as_str() == "items.0.x.y"

    def test_parent(self):
        """Test parent() drops the last segment."""
        assert ResponsePath("a.b.c").parent() == ResponsePath("a.b")
        assert ResponsePath("a").parent().is_empty()
        assert ResponsePath.empty().parent().is_empty()

    def test_segments_are_restartable(self):
        """Test segments() yields a fresh iterator each call."""
        path = ResponsePath("a.b")
        assert list(path.segments()) == list(path.segments()) == ["a", "b"]

    def test_structural_equality_and_hash(self):
        """Test paths built differently compare and hash equal."""
        built = ResponsePath("a").child("b")
        parsed = ResponsePath("a.b")
        assert built == parsed
        assert hash(built) == hash(parsed)
        assert {built: 1}[parsed] == 1

    def test_path_is_not_equal_to_text(self):
        """Test a path never compares equal to a plain string."""
        assert ResponsePath("a") != "a"

    def test_immutable(self):
        """Test attribute assignment is rejected."""
        path = ResponsePath("a")
        with pytest.raises(AttributeError):
            path._segments = ("b",)

    def test_strip_prefix_exact_match(self):
        """Test stripping the whole path leaves the empty path."""
        stripped = ResponsePath("address").strip_prefix("address")
        assert stripped is not None
        assert stripped.is_empty()

    def test_strip_prefix_dotted(self):
        """Test stripping a proper prefix returns the suffix."""
        assert ResponsePath("address.street").strip_prefix("address") == ResponsePath("street")

    def test_strip_prefix_partial_segment_fails(self):
        """Test partial segments never match."""
        assert ResponsePath("address.street").strip_prefix("add") is None
        assert ResponsePath("address_book").strip_prefix("address") is None

    def test_strip_prefix_longer_than_path(self):
        """Test a prefix longer than the path does not match."""
        assert ResponsePath("a").strip_prefix("a.b") is None

    def test_round_trip_through_prefixes(self):
        """Test child composition, text form and prefix stripping agree."""
        segments = ["survey", "items", "3", "selected_variant"]
        path = ResponsePath.empty()
        for segment in segments:
            path = path.child(segment)

        reparsed = ResponsePath(path.as_str())
        recovered = []
        remaining = reparsed
        for segment in segments:
            remaining = remaining.strip_prefix(segment)
            assert remaining is not None
            recovered.append(segment)

        assert remaining.is_empty()
        assert recovered == segments


# ===================
# Value Tests
# ===================

class TestResponseValue:
    """Tests for ResponseValue."""

    def test_from_python_scalars(self):
        """Test native scalars map to their kinds."""
        assert ResponseValue.from_python("x").kind is ValueKind.STRING
        assert ResponseValue.from_python(3).kind is ValueKind.INT
        assert ResponseValue.from_python(2.5).kind is ValueKind.FLOAT

    def test_bool_is_not_int(self):
        """Test booleans are checked before integers."""
        value = ResponseValue.from_python(True)
        assert value.kind is ValueKind.BOOL
        assert value.as_bool() is True
        assert value.as_int() is None

    def test_from_python_lists(self):
        """Test homogeneous lists map to list kinds."""
        assert ResponseValue.from_python(["a", "b"]).kind is ValueKind.STRING_LIST
        assert ResponseValue.from_python([1, 2]).kind is ValueKind.INT_LIST
        assert ResponseValue.from_python([1, 2.5]).kind is ValueKind.FLOAT_LIST

    def test_from_python_path(self):
        """Test filesystem paths become strings."""
        value = ResponseValue.from_python(PurePosixPath("/tmp/receipt.txt"))
        assert value == ResponseValue.string("/tmp/receipt.txt")

    def test_from_python_rejects_unknown(self):
        """Test unsupported values raise TypeError."""
        with pytest.raises(TypeError):
            ResponseValue.from_python({"a": 1})

    def test_chosen_variants_keep_order_and_repeats(self):
        """Test selections are ordered and may repeat."""
        value = ResponseValue.chosen_variants([1, 0, 1])
        assert value.as_chosen_variants() == [1, 0, 1]
        assert value.to_python() == [1, 0, 1]

    def test_accessors_return_none_on_mismatch(self):
        """Test as_* accessors do not coerce."""
        value = ResponseValue.integer(5)
        assert value.as_str() is None
        assert value.as_float() is None
        assert value.as_chosen_variant() is None

    def test_default_value_modes(self):
        """Test the three default tiers."""
        assert DefaultValue.none().is_none()
        assert DefaultValue.suggested("x").is_suggested()
        assumed = DefaultValue.assumed(3)
        assert assumed.is_assumed()
        assert assumed.value == ResponseValue.integer(3)


# ===================
# Response Map Tests
# ===================

class TestResponses:
    """Tests for the Responses map."""

    def test_insert_and_get(self):
        """Test insertion overwrites and get returns the value."""
        responses = Responses()
        responses.insert("name", "Ada")
        responses.insert("name", "Grace")
        assert responses.get("name") == ResponseValue.string("Grace")
        assert len(responses) == 1

    def test_get_missing_returns_none(self):
        """Test get() on an absent path."""
        assert Responses().get("missing") is None

    def test_remove(self):
        """Test remove() returns the old value."""
        responses = Responses({"a": 1})
        assert responses.remove("a") == ResponseValue.integer(1)
        assert responses.remove("a") is None
        assert "a" not in responses

    def test_contains_accepts_text_and_paths(self):
        """Test membership with either key form."""
        responses = Responses({"a.b": 1})
        assert responses.contains("a.b")
        assert ResponsePath("a.b") in responses
        assert not responses.contains("a")

    def test_filter_prefix_strips_prefix(self, address_responses):
        """Test filtering extracts the nested sub-map."""
        address = address_responses.filter_prefix("address")
        assert address.to_dict() == {"city": "London", "street": "1 Analytical Way"}

    def test_filter_prefix_is_segment_exact(self, address_responses):
        """Test address_book is not under address."""
        address = address_responses.filter_prefix("address")
        assert "book" not in address.to_dict()
        assert len(address) == 2

    def test_filter_prefix_exact_key(self):
        """Test an entry equal to the prefix lands at the empty path."""
        responses = Responses({"x": 1, "x.y": 2})
        filtered = responses.filter_prefix("x")
        assert filtered.get(ResponsePath.empty()) == ResponseValue.integer(1)
        assert filtered.get("y") == ResponseValue.integer(2)

    def test_extend_other_wins(self):
        """Test merge keeps the other map's values on conflict."""
        base = Responses({"a": 1, "b": 2})
        base.extend(Responses({"b": 20, "c": 30}))
        assert base.to_dict() == {"a": 1, "b": 20, "c": 30}

    def test_has_value(self):
        """Test empty strings count as no value."""
        responses = Responses({"empty": "", "zero": 0, "text": "x", "no": False})
        assert not responses.has_value("empty")
        assert not responses.has_value("missing")
        assert responses.has_value("zero")
        assert responses.has_value("text")
        assert responses.has_value("no")

    def test_typed_getters(self, address_responses):
        """Test typed getters return native values."""
        assert address_responses.get_string("name") == "Ada"
        assert address_responses.get_int("age") == 36

    def test_typed_getter_mismatch(self, address_responses):
        """Test reading with the wrong accessor is a type mismatch."""
        with pytest.raises(TypeMismatch) as exc:
            address_responses.get_int("name")
        assert exc.value.expected == "Int"
        assert exc.value.actual == "String"

    def test_typed_getter_missing(self):
        """Test a missing path is distinct from a mismatch."""
        with pytest.raises(MissingPath) as exc:
            Responses().get_string("nope")
        assert exc.value.path == ResponsePath("nope")
        assert not isinstance(exc.value, TypeMismatch)

    def test_list_getters(self):
        """Test list accessors."""
        responses = Responses({
            "tags": ["a", "b"],
            "scores": [1, 2],
            "weights": [0.5, 1.5],
            "picks": ResponseValue.chosen_variants([2, 2]),
        })
        assert responses.get_string_list("tags") == ["a", "b"]
        assert responses.get_int_list("scores") == [1, 2]
        assert responses.get_float_list("weights") == [0.5, 1.5]
        assert responses.get_chosen_variants("picks") == [2, 2]

    def test_copy_is_independent(self):
        """Test copies do not share storage."""
        original = Responses({"a": 1})
        duplicate = original.copy()
        duplicate.insert("b", 2)
        assert "b" not in original
        assert duplicate != original

    def test_items_sorted(self):
        """Test items() is ordered by path."""
        responses = Responses({"b": 1, "a.z": 2, "a": 3})
        assert [path.as_str() for path, _ in responses.items()] == ["a", "a.z", "b"]
