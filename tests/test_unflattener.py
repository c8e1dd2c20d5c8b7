"""Tests for the unflattener."""

import pytest
from i18n_transformer.config import TransformOptions
from i18n_transformer.flattener import flatten
from i18n_transformer.types import ConflictingSchemaError, ErrorType, MalformedPathError
from i18n_transformer.unflattener import Unflattener, unflatten


class TestUnflattener:
    """Tests for Unflattener class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.unflattener = Unflattener()

    def test_unflatten_nested_mappings(self):
        flat = {"app.title": "Hi", "app.menu.home": "Home", "footer": "bye"}

        assert self.unflattener.unflatten(flat) == {
            "app": {"title": "Hi", "menu": {"home": "Home"}},
            "footer": "bye"
        }

    def test_unflatten_array_reconstruction(self):
        flat = {"list.0.name": "a", "list.1.name": "b"}

        assert self.unflattener.unflatten(flat) == {"list": [{"name": "a"}, {"name": "b"}]}

    def test_unflatten_sample_document(self, sample_flat_map, sample_locale_tree):
        assert self.unflattener.unflatten(sample_flat_map) == sample_locale_tree

    def test_unflatten_preserves_first_seen_key_order(self):
        tree = self.unflattener.unflatten({"z": "1", "a.y": "2", "a.b": "3"})

        assert list(tree) == ["z", "a"]
        assert list(tree["a"]) == ["y", "b"]

    def test_unflatten_orders_sequences_by_index(self):
        tree = self.unflattener.unflatten({"a.1": "second", "a.0": "first"})

        assert tree == {"a": ["first", "second"]}

    def test_unflatten_sparse_sequence_has_holes(self):
        tree = self.unflattener.unflatten({"a.0": "x", "a.3": "z"})

        assert tree == {"a": ["x", None, None, "z"]}

    def test_unflatten_mixed_nesting_raises_conflict(self):
        with pytest.raises(ConflictingSchemaError) as exc_info:
            self.unflattener.unflatten({"a.b.c": "x", "a.0.b": "y"})

        error = exc_info.value
        assert error.error_type == ErrorType.SCHEMA
        assert error.prefix == "a"
        assert error.paths == ["a.b.c", "a.0.b"]

    def test_unflatten_conflict_detected_regardless_of_order(self):
        with pytest.raises(ConflictingSchemaError) as exc_info:
            self.unflattener.unflatten({"a.0.b": "y", "a.b.c": "x"})

        assert exc_info.value.paths == ["a.b.c", "a.0.b"]

    def test_unflatten_deep_conflict_names_prefix(self):
        with pytest.raises(ConflictingSchemaError) as exc_info:
            self.unflattener.unflatten({"x.items.0": "a", "x.items.label": "b"})

        assert exc_info.value.prefix == "x.items"

    def test_unflatten_value_and_container_conflict(self):
        with pytest.raises(ConflictingSchemaError) as exc_info:
            self.unflattener.unflatten({"a": "x", "a.b": "y"})

        assert exc_info.value.prefix == "a"
        assert exc_info.value.paths == ["a", "a.b"]

    def test_unflatten_root_sequence_when_all_top_level_are_indices(self):
        tree = self.unflattener.unflatten({"0": "x", "1.name": "y"})

        assert tree == ["x", {"name": "y"}]

    def test_unflatten_mixed_root_falls_back_to_mapping(self):
        tree = self.unflattener.unflatten({"0": "x", "name": "y"})

        assert tree == {"0": "x", "name": "y"}

    def test_unflatten_mixed_root_strict(self):
        unflattener = Unflattener(TransformOptions(strict_root=True))

        with pytest.raises(ConflictingSchemaError) as exc_info:
            unflattener.unflatten({"0": "x", "name": "y"})

        assert exc_info.value.prefix == ""

    def test_unflatten_skips_empty_paths(self):
        tree = self.unflattener.unflatten({"": "x", "   ": "y", "a": "z"})

        assert tree == {"a": "z"}

    def test_unflatten_trims_paths(self):
        assert self.unflattener.unflatten({" a.b ": "x"}) == {"a": {"b": "x"}}

    def test_unflatten_malformed_path_raises(self):
        with pytest.raises(MalformedPathError) as exc_info:
            self.unflattener.unflatten({"a..b": "x"})

        assert exc_info.value.path == "a..b"

    def test_unflatten_malformed_path_skipped(self):
        unflattener = Unflattener(TransformOptions(malformed_paths="skip"))

        tree = unflattener.unflatten({"a..b": "x", "a.c": "y", ".d": "z"})

        assert tree == {"a": {"c": "y"}}

    def test_unflatten_blank_values_are_preserved(self):
        tree = self.unflattener.unflatten({"a": "", "b": None, "c.0": ""})

        assert tree == {"a": "", "b": "", "c": [""]}

    def test_unflatten_later_entry_wins(self):
        pairs = [("a.b", "first"), ("a.b", "second")]

        assert self.unflattener.unflatten(pairs) == {"a": {"b": "second"}}

    def test_unflatten_equivalent_indices_collide(self):
        pairs = [("a.01", "x"), ("a.1", "y")]

        assert self.unflattener.unflatten(pairs) == {"a": [None, "y"]}

    def test_unflatten_equivalent_indices_collide_at_sequence_root(self):
        assert self.unflattener.unflatten([("01", "x"), ("0", "y")]) == ["y", "x"]

    def test_unflatten_mapping_root_keeps_index_spelling(self):
        tree = self.unflattener.unflatten({"01": "x", "name": "y"})

        assert tree == {"01": "x", "name": "y"}

    @pytest.mark.parametrize("path", ["list.99999999999999999999", "list.1000000000"])
    def test_unflatten_index_above_limit_raises(self, path):
        with pytest.raises(MalformedPathError) as exc_info:
            self.unflattener.unflatten({path: "x"})

        assert exc_info.value.path == path
        assert exc_info.value.error_type == ErrorType.PATH

    def test_unflatten_index_above_limit_skipped(self):
        unflattener = Unflattener(TransformOptions(malformed_paths="skip"))

        tree = unflattener.unflatten({"list.99999999999999999999": "x", "list.0": "y"})

        assert tree == {"list": ["y"]}

    def test_unflatten_custom_index_limit(self):
        unflattener = Unflattener(TransformOptions(max_index=2))

        assert unflattener.unflatten({"a.2": "x"}) == {"a": [None, None, "x"]}
        with pytest.raises(MalformedPathError, match="above the limit of 2"):
            unflattener.unflatten({"a.3": "x"})

    def test_unflatten_empty_input(self):
        assert self.unflattener.unflatten({}) == {}

    def test_module_level_unflatten(self):
        assert unflatten({"a.0": 1}) == {"a": [1]}


class TestRoundTrip:
    """Flatten and unflatten are inverse on well-formed input."""

    TREES = [
        {"a": {"b": 1, "c": [1, 2]}},
        {"list": [{"name": "a", "tags": ["x", "y"]}, {"name": "b", "tags": ["z"]}]},
        [{"title": "first"}, {"title": "second"}],
        {"blank": "", "nested": {"deep": {"deeper": [["a"], ["b", "c"]]}}},
    ]

    @pytest.mark.parametrize("tree", TREES)
    def test_tree_round_trip(self, tree):
        assert unflatten(flatten(tree)) == tree

    def test_flat_map_round_trip(self, sample_flat_map):
        assert flatten(unflatten(sample_flat_map)) == sample_flat_map

    def test_idempotence(self, sample_flat_map):
        once = unflatten(sample_flat_map)

        assert unflatten(flatten(once)) == once
