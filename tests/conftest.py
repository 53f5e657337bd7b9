"""
Pytest fixtures for ndstride tests.
"""

import pytest

import ndstride as nd
from ndstride.utils.config import Config


@pytest.fixture(autouse=True)
def reset_config():
    """Restore default configuration after every test."""
    yield
    Config.reset()


@pytest.fixture
def seed():
    """Fixed random seed for reproducibility."""
    return 42


@pytest.fixture
def seq6():
    """arange(1, 7, 1): [1, 2, 3, 4, 5, 6]."""
    return nd.arange(1, 7, 1)


@pytest.fixture
def matrix_a():
    """[[1, 2], [3, 4]]."""
    return nd.reshape_copy(nd.arange(1, 5, 1), [2, 2], 2)


@pytest.fixture
def matrix_b():
    """[[5, 6], [7, 8]]."""
    return nd.reshape_copy(nd.arange(5, 9, 1), [2, 2], 2)


@pytest.fixture
def row_1x3():
    """[[1, 2, 3]] with shape (1, 3)."""
    return nd.reshape_copy(nd.arange(1, 4, 1), [1, 3], 2)


@pytest.fixture
def col_2x1():
    """[[1], [2]] with shape (2, 1)."""
    return nd.reshape_copy(nd.arange(1, 3, 1), [2, 1], 2)
