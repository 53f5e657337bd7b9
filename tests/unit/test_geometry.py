"""
Unit tests for index geometry.

Tests strides, back-strides, coordinate enumeration and linear offsets.
"""

import numpy as np
import pytest

from ndstride.base.geometry import (
    ArrayIndices,
    LinearIndices,
    compute_backstrides,
    compute_strides,
    enumerate_coordinates,
    linear_offsets,
    shape_size,
    validate_shape,
)
from ndstride.errors import InvalidShape


class TestStrides:
    """Tests for compute_strides and compute_backstrides."""

    def test_last_axis_stride_is_itemsize(self):
        """Test that the innermost stride equals the element size."""
        assert compute_strides((5,), 8) == (8,)
        assert compute_strides((2, 3), 4)[-1] == 4

    def test_row_major_strides(self):
        """Test that each stride is the next stride times the next extent."""
        assert compute_strides((2, 3, 4), 4) == (48, 16, 4)
        assert compute_strides((2, 3), 8) == (24, 8)

    def test_backstrides(self):
        """Test back-strides undo a full walk along each axis."""
        assert compute_backstrides((2, 3), (24, 8)) == (-24, -16)

    def test_backstride_zero_for_unit_axis(self):
        """Test that an axis of extent 1 never wraps."""
        assert compute_backstrides((1, 4), (32, 8)) == (0, -24)


class TestEnumerateCoordinates:
    """Tests for odometer coordinate enumeration."""

    def test_row_major_order(self):
        """Test that the last axis varies fastest."""
        coords = enumerate_coordinates((2, 3))
        assert list(coords) == [
            (0, 0), (0, 1), (0, 2),
            (1, 0), (1, 1), (1, 2),
        ]

    def test_count_matches_size(self):
        """Test that one tuple is produced per element."""
        coords = enumerate_coordinates((2, 3, 4))
        assert isinstance(coords, ArrayIndices)
        assert coords.count == 24
        assert len(coords) == 24
        assert coords.indices.shape == (24, 3)

    def test_matches_numpy_ndindex(self):
        """Test agreement with numpy's row-major enumeration."""
        shape = (3, 1, 2, 2)
        assert list(enumerate_coordinates(shape)) == list(np.ndindex(*shape))

    def test_one_dimensional(self):
        """Test a single axis enumerates 0..n-1."""
        assert list(enumerate_coordinates((4,))) == [(0,), (1,), (2,), (3,)]

    def test_table_is_read_only(self):
        """Test that the coordinate table cannot be modified."""
        coords = enumerate_coordinates((2, 2))
        with pytest.raises(ValueError):
            coords.indices[0, 0] = 1


class TestLinearOffsets:
    """Tests for linear element offsets."""

    def test_identity_for_c_contiguous(self):
        """Test that a fresh C layout maps position i to offset i."""
        offsets = linear_offsets((2, 3), (24, 8), 8)
        assert isinstance(offsets, LinearIndices)
        assert list(offsets) == [0, 1, 2, 3, 4, 5]

    def test_reuses_supplied_coordinates(self):
        """Test offsets computed from a precomputed enumeration."""
        coords = enumerate_coordinates((2, 2))
        offsets = linear_offsets((2, 2), (16, 8), 8, coords=coords)
        assert offsets.count == 4
        assert offsets[3] == 3

    def test_transposed_strides(self):
        """Test column-major strides produce a transposed walk."""
        # shape (2, 3) laid out column-major: strides (8, 16) for itemsize 8
        offsets = linear_offsets((2, 3), (8, 16), 8)
        assert list(offsets) == [0, 2, 4, 1, 3, 5]


class TestValidateShape:
    """Tests for shape validation."""

    def test_normalizes_to_tuple_of_ints(self):
        """Test lists and numpy ints become a plain tuple."""
        assert validate_shape([np.int64(2), 3]) == (2, 3)

    def test_rejects_empty_shape(self):
        """Test that ndim 0 is rejected."""
        with pytest.raises(InvalidShape):
            validate_shape([])

    def test_rejects_rank_mismatch(self):
        """Test that ndim must equal len(shape)."""
        with pytest.raises(InvalidShape):
            validate_shape([2, 3], 3)

    @pytest.mark.parametrize("shape", [[0], [2, 0], [3, -1]])
    def test_rejects_non_positive(self, shape):
        """Test that every extent must be positive."""
        with pytest.raises(InvalidShape):
            validate_shape(shape)

    @pytest.mark.parametrize("shape", [[2.5], ["3"], [True, 2], 7])
    def test_rejects_non_integers(self, shape):
        """Test that extents must be integers."""
        with pytest.raises(InvalidShape):
            validate_shape(shape)

    def test_rejects_overflow(self):
        """Test that an element count beyond the index type is rejected."""
        with pytest.raises(InvalidShape):
            validate_shape([2**40, 2**40])

    def test_shape_size(self):
        """Test element count is the product of extents."""
        assert shape_size((2, 3, 4)) == 24
