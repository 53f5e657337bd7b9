"""
Unit tests for batched matrix multiplication.

Tests 2-D products, batch broadcasting and precondition errors.
"""

import numpy as np
import pytest

import ndstride as nd
from ndstride.ops.matmul import matmul
from ndstride.errors import BroadcastIncompatible, DimensionMismatch, RankTooLow


class TestMatmul2D:
    """Tests for plain matrix products."""

    def test_square(self, matrix_a, matrix_b):
        """Test [[1, 2], [3, 4]] @ [[5, 6], [7, 8]]."""
        c = matmul(matrix_a, matrix_b)
        assert c.shape == (2, 2)
        assert list(c.data) == [19, 22, 43, 50]

    def test_rectangular(self):
        """Test (2, 3) @ (3, 2)."""
        a = nd.reshape_copy(nd.arange(1.0, 7.0, 1.0), [2, 3], 2)
        b = nd.reshape_copy(nd.arange(7.0, 13.0, 1.0), [3, 2], 2)
        c = matmul(a, b)
        assert c.shape == (2, 2)
        assert c.tolist() == [[58.0, 64.0], [139.0, 154.0]]

    def test_outer_product_shape(self):
        """Test (3, 1) @ (1, 4) gives (3, 4)."""
        a = nd.asarray([[1], [2], [3]])
        b = nd.asarray([[1, 10, 100, 1000]])
        c = matmul(a, b)
        assert c.shape == (3, 4)
        assert c.tolist()[2] == [3, 30, 300, 3000]

    def test_matches_numpy(self, seed):
        """Test a larger product against numpy."""
        a = nd.random((7, 5), seed=seed)
        b = nd.random((5, 9), seed=seed + 1)
        np.testing.assert_allclose(
            matmul(a, b).to_numpy(), a.to_numpy() @ b.to_numpy(), rtol=1e-12
        )

    def test_operator(self, matrix_a, matrix_b):
        """Test the @ operator."""
        assert (matrix_a @ matrix_b).tolist() == [[19, 22], [43, 50]]

    def test_dtype_promotion(self, matrix_a):
        """Test int @ float yields float."""
        b = nd.asarray([[0.5, 0.0], [0.0, 0.5]])
        c = matmul(matrix_a, b)
        assert c.dtype == np.float64
        assert c.tolist() == [[0.5, 1.0], [1.5, 2.0]]

    def test_operands_untouched(self, matrix_a, matrix_b):
        """Test operands are not mutated."""
        matmul(matrix_a, matrix_b)
        assert matrix_a.tolist() == [[1, 2], [3, 4]]
        assert matrix_b.tolist() == [[5, 6], [7, 8]]


class TestMatmulBatched:
    """Tests for leading batch dimensions."""

    def test_equal_batches(self, seed):
        """Test (3, 2, 4) @ (3, 4, 2)."""
        a = nd.random((3, 2, 4), seed=seed)
        b = nd.random((3, 4, 2), seed=seed + 1)
        c = matmul(a, b)
        assert c.shape == (3, 2, 2)
        np.testing.assert_allclose(c.to_numpy(), np.matmul(a.to_numpy(), b.to_numpy()))

    def test_missing_batch_axis(self, seed):
        """Test a 2-D operand applies to every batch entry."""
        a = nd.random((2, 2, 3), seed=seed)
        b = nd.random((3, 2), seed=seed + 1)
        c = matmul(a, b)
        assert c.shape == (2, 2, 2)
        np.testing.assert_allclose(c.to_numpy(), np.matmul(a.to_numpy(), b.to_numpy()))

    def test_unit_batch_axis_broadcasts(self, seed):
        """Test batch extent 1 against batch extent 4."""
        a = nd.random((1, 2, 2), seed=seed)
        b = nd.random((4, 2, 2), seed=seed + 1)
        c = matmul(a, b)
        assert c.shape == (4, 2, 2)
        np.testing.assert_allclose(c.to_numpy(), np.matmul(a.to_numpy(), b.to_numpy()))

    def test_multi_axis_batch(self, seed):
        """Test (3, 1, 2, 3) @ (4, 3, 5) broadcasts to batch (3, 4)."""
        a = nd.random((3, 1, 2, 3), seed=seed)
        b = nd.random((4, 3, 5), seed=seed + 1)
        c = matmul(a, b)
        assert c.shape == (3, 4, 2, 5)
        np.testing.assert_allclose(c.to_numpy(), np.matmul(a.to_numpy(), b.to_numpy()))

    def test_incompatible_batches(self):
        """Test batch (2,) against batch (3,) raises."""
        with pytest.raises(BroadcastIncompatible):
            matmul(nd.create([2, 2, 2]), nd.create([3, 2, 2]))


class TestMatmulErrors:
    """Tests for matmul preconditions."""

    def test_rank_too_low(self, seq6, matrix_a):
        """Test 1-D operands raise RankTooLow."""
        with pytest.raises(RankTooLow):
            matmul(seq6, matrix_a)
        with pytest.raises(RankTooLow):
            matmul(matrix_a, nd.arange(0, 2))

    def test_dimension_mismatch(self):
        """Test (2, 3) @ (2, 3) raises DimensionMismatch."""
        a = nd.create([2, 3])
        with pytest.raises(DimensionMismatch):
            matmul(a, nd.create([2, 3]))

    def test_rank_checked_first(self):
        """Test rank is validated before inner dimensions."""
        with pytest.raises(RankTooLow):
            matmul(nd.create([3]), nd.create([2, 2]))

    def test_non_array_operand(self, matrix_a):
        """Test a non-Array operand raises TypeError."""
        with pytest.raises(TypeError):
            matmul(matrix_a, [[1, 0], [0, 1]])
