"""Tests for row and column estimation."""

import pytest
from json_exploder.engine import flatten
from json_exploder.models import collect_columns
from json_exploder.utils.row_estimator import RowEstimator


class TestRowEstimator:
    """Tests for RowEstimator class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.estimator = RowEstimator()

    def test_scalar_is_one_row(self):
        assert self.estimator.estimate_rows(42) == 1

    def test_empty_mapping_is_one_row(self):
        assert self.estimator.estimate_rows({}) == 1

    def test_empty_list_is_zero_rows(self):
        assert self.estimator.estimate_rows([]) == 0

    def test_mapping_multiplies(self):
        """Test that sibling lists multiply."""
        assert self.estimator.estimate_rows({"a": [1, 2, 3], "b": [1, 2], "c": "x"}) == 6

    def test_sequence_adds(self):
        """Test that sequence elements add."""
        assert self.estimator.estimate_rows([{"a": [1, 2]}, {"a": [1, 2, 3]}, 5]) == 6

    def test_empty_factor_annihilates(self):
        """Test that one empty list zeroes the mapping."""
        assert self.estimator.estimate_rows({"a": [1, 2], "b": []}) == 0

    def test_wide_cross_product_without_building(self):
        """Test counting a product far too large to materialize."""
        data = {f"key_{i}": list(range(10)) for i in range(12)}

        assert self.estimator.estimate_rows(data) == 10 ** 12

    @pytest.mark.parametrize("node", [
        {"a": {"b": 1}},
        {"a": [1, 2], "b": ["x", "y"]},
        [[], [1, [2, 3]], {"k": []}],
        {"team": "core", "members": [{"name": "Ann", "skills": ["py", "sql"]}, {"name": "Bo", "skills": []}]},
        (),
        "scalar",
    ])
    def test_matches_engine_row_count(self, node):
        """Test that estimates equal the number of rows actually produced."""
        assert self.estimator.estimate_rows(node) == len(flatten(node))

    def test_columns_of_order(self, sample_order):
        """Test column estimation on an order document."""
        columns = self.estimator.estimate_columns(sample_order)

        assert columns == [
            "order_id",
            "customer_name",
            "customer_address_city",
            "customer_address_zip",
            "items_sku",
            "items_qty",
        ]

    def test_columns_match_engine_column_set(self):
        """Test that estimated columns equal the union of produced keys."""
        data = {"a": [{"x": 1}, {"y": 2}], "b": 1, "c": [{"z": []}, {"w": 3}]}

        columns = self.estimator.estimate_columns(data)

        assert set(columns) == set(collect_columns(flatten(data)))
        assert "c_z" not in columns

    def test_columns_of_root_scalar(self):
        """Test that a root scalar reports the placeholder column."""
        assert self.estimator.estimate_columns(3) == ["value"]

    def test_columns_with_separator(self):
        """Test column estimation with a custom separator."""
        assert self.estimator.estimate_columns({"a": {"b": 1}}, sep=".") == ["a.b"]

    def test_columns_of_annihilated_tree(self):
        """Test that a tree producing no rows has no columns."""
        assert self.estimator.estimate_columns({"a": 1, "b": []}) == []

    def test_columns_skip_empty_element(self):
        """Test that a sequence element producing no rows contributes no columns."""
        node = {"a": [{"x": 1, "gone": []}, {"y": 2}]}

        assert self.estimator.estimate_columns(node) == ["a_y"]
        assert collect_columns(flatten(node)) == ["a_y"]

    def test_shared_subtree(self):
        """Test estimation when one object appears at several places."""
        shared = {"v": [1, 2]}
        node = {"left": shared, "right": shared}

        assert self.estimator.estimate_rows(node) == 4
        assert self.estimator.estimate_columns(node) == ["left_v", "right_v"]

    def test_columns_of_deep_chain(self, make_nested):
        """Test column estimation down a long chain of mappings."""
        columns = self.estimator.estimate_columns(make_nested(150))

        assert len(columns) == 1
        assert columns[0].endswith("level_0_leaf")
