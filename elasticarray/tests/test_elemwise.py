import operator

import pytest

import numpy as np

from elasticarray import ElasticArray
from elasticarray._utils import assert_eq


@pytest.fixture
def x(rng):
    return rng.integers(1, 10, size=(2, 3, 4))


@pytest.fixture
def y(rng):
    return rng.integers(1, 10, size=(2, 3, 4))


@pytest.mark.parametrize(
    "func",
    [operator.add, operator.sub, operator.mul, operator.floordiv, operator.mod, operator.pow, np.maximum],
)
def test_binary(func, x, y):
    a = ElasticArray.from_numpy(x)
    b = ElasticArray.from_numpy(y)

    for result in (func(a, b), func(a, y), func(x, b)):
        assert isinstance(result, ElasticArray)
        assert_eq(result, func(x, y))


@pytest.mark.parametrize("func", [operator.neg, operator.abs, np.sqrt, np.exp])
def test_unary(func, x):
    a = ElasticArray.from_numpy(x)
    result = func(a)

    assert isinstance(result, ElasticArray)
    assert_eq(result, func(x))


def test_scalar_operand(x):
    a = ElasticArray.from_numpy(x)

    assert_eq(a * 2, x * 2)
    assert_eq(3 - a, 3 - x)
    assert_eq(a / np.float32(2), x / np.float32(2))


def test_comparison_is_elementwise(x, y):
    a = ElasticArray.from_numpy(x)
    b = ElasticArray.from_numpy(y)

    eq = a == b
    assert isinstance(eq, ElasticArray)
    assert eq.dtype == np.bool_
    assert_eq(eq, x == y)
    assert np.all(a == a.copy())


def test_result_with_other_kernel_is_ndarray(x):
    a = ElasticArray.from_numpy(x)
    result = a + np.ones((5, 2, 3, 4), dtype=x.dtype)

    assert type(result) is np.ndarray
    assert result.shape == (5, 2, 3, 4)


def test_inplace(x):
    a = ElasticArray.from_numpy(x)
    storage = a._buffer._storage
    b = a
    b += 1

    assert b is a
    assert a._buffer._storage is storage
    assert_eq(a, x + 1)


def test_out(x, y):
    a = ElasticArray.from_numpy(x)
    out = ElasticArray(x.shape, dtype=x.dtype)
    result = np.add(a, y, out=out)

    assert result is out
    assert_eq(out, x + y)

    dense_out = np.empty_like(x)
    np.multiply(a, 2, out=dense_out)
    np.testing.assert_array_equal(dense_out, x * 2)


def test_divmod(x):
    a = ElasticArray.from_numpy(x)
    q, r = divmod(a, 3)

    assert_eq(q, x // 3)
    assert_eq(r, x % 3)


def test_matmul():
    x = np.arange(6).reshape(2, 3)
    a = ElasticArray.from_numpy(x)
    result = a @ x.T

    assert isinstance(result, ElasticArray)
    assert_eq(result, x @ x.T)


def test_reductions(x):
    a = ElasticArray.from_numpy(x)

    assert np.sum(a) == x.sum()
    np.testing.assert_array_equal(np.add.reduce(a, axis=0), x.sum(axis=0))
    np.testing.assert_array_equal(np.max(a, axis=-1), x.max(axis=-1))


def test_array_function(x, y):
    a = ElasticArray.from_numpy(x)
    b = ElasticArray.from_numpy(y)

    c = np.concatenate([a, b], axis=-1)
    assert isinstance(c, ElasticArray)
    assert_eq(c, np.concatenate([x, y], axis=-1))

    assert np.shape(a) == x.shape
    assert np.array_equal(a, x)
    assert np.may_share_memory(a, a[:, 0])
    assert not np.may_share_memory(a, b)


def test_unsupported_operand(x):
    a = ElasticArray.from_numpy(x)

    with pytest.raises(TypeError):
        a + "abc"


def test_bool():
    assert bool(ElasticArray.from_numpy(np.array([1])))
    assert not ElasticArray.from_numpy(np.array([[0]]))

    with pytest.raises(ValueError):
        bool(ElasticArray.from_numpy(np.array([1, 2])))
