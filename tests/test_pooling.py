"""Tests for mean pooling of feature-extraction output."""

import itertools

import pytest

from pdfchat.errors import ShapeError
from pdfchat.service.pooling import average_pool, pool_embedding


class TestAveragePool:
    """Tests for average_pool."""

    def test_single_vector_is_unchanged(self):
        vector = [0.1, -2.5, 3.75, 1e-12]
        assert average_pool([[vector]]) == vector

    def test_mean_per_component(self):
        vectors = [[1.0, 2.0, 3.0], [3.0, 4.0, 5.0], [5.0, 0.0, -2.0]]

        pooled = average_pool([vectors])

        assert pooled == pytest.approx([3.0, 2.0, 2.0], abs=1e-9)

    def test_order_of_token_vectors_does_not_matter(self):
        vectors = [[0.1, 0.7], [0.3, -0.2], [1e6, 1e-6], [-0.4, 0.05]]
        expected = average_pool([vectors])

        for permutation in itertools.permutations(vectors):
            assert average_pool([list(permutation)]) == pytest.approx(expected, abs=1e-9)

    def test_zero_token_vectors_raises(self):
        with pytest.raises(ShapeError):
            average_pool([[]])

    def test_empty_token_vectors_raise(self):
        with pytest.raises(ShapeError):
            average_pool([[[], []]])

    @pytest.mark.parametrize("nested", [[], [[[1.0]], [[2.0]]]])
    def test_outer_dimension_must_be_one(self, nested):
        with pytest.raises(ShapeError):
            average_pool(nested)

    def test_inconsistent_dimensions_raise(self):
        with pytest.raises(ShapeError, match="dimension"):
            average_pool([[[1.0, 2.0], [3.0]]])

    def test_shape_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            average_pool([[]])


class TestPoolEmbedding:
    """Tests for pool_embedding shape normalization."""

    def test_flat_vector_passes_through(self):
        assert pool_embedding([1, 2.5, -3]) == [1.0, 2.5, -3.0]

    def test_token_matrix_is_pooled(self):
        assert pool_embedding([[1.0, 3.0], [3.0, 5.0]]) == pytest.approx([2.0, 4.0])

    def test_batched_token_matrix_is_pooled(self):
        assert pool_embedding([[[1.0, 3.0], [3.0, 5.0]]]) == pytest.approx([2.0, 4.0])

    def test_empty_output_raises(self):
        with pytest.raises(ShapeError):
            pool_embedding([])

    def test_batch_with_zero_tokens_raises(self):
        with pytest.raises(ShapeError):
            pool_embedding([[]])

    def test_too_deep_output_raises(self):
        with pytest.raises(ShapeError):
            pool_embedding([[[[1.0]]]])
