import functools

import numpy as np
import scipy.sparse


def assert_eq(x, y, compare_dtype=True, **kwargs):
    from ._core import ElasticArray

    assert x.shape == y.shape

    if compare_dtype:
        assert x.dtype == y.dtype

    check_equal = (
        np.array_equal
        if x.dtype.kind in "biu" and y.dtype.kind in "biu"
        else functools.partial(np.allclose, equal_nan=True)
    )

    if isinstance(x, ElasticArray):
        assert_shape_invariant(x)
    if isinstance(y, ElasticArray):
        assert_shape_invariant(y)

    xx = x.todense() if hasattr(x, "todense") else x
    yy = y.todense() if hasattr(y, "todense") else y

    assert check_equal(xx, yy, **kwargs)


def assert_shape_invariant(x):
    assert len(x.data) == x.kernel_length * x.shape[-1]
    if x.kernel_length > 0:
        assert len(x.data) % x.kernel_length == 0
    else:
        assert x.shape[-1] == 0


def as_dense(x, dtype=None):
    """
    Convert ``x`` to a :obj:`numpy.ndarray`, densifying :obj:`scipy.sparse`
    inputs on the way.
    """
    from ._core import ElasticArray

    if isinstance(x, ElasticArray):
        x = x.todense(copy=False)
    elif scipy.sparse.issparse(x):
        x = x.toarray()

    return np.asarray(x, dtype=dtype)


def flat_values(x):
    """
    The elements of ``x`` in buffer order: first index fastest, last index
    slowest.

    Examples
    --------
    >>> flat_values([[1, 2, 3], [4, 5, 6]])
    array([1, 4, 2, 5, 3, 6])
    """
    from ._core import ElasticArray

    if isinstance(x, ElasticArray):
        return x.data
    return as_dense(x).ravel(order="F")


def byte_bounds(x):
    """
    The half-open range of memory addresses spanned by the array ``x``.

    Returns
    -------
    (int, int)
        The lowest address and one past the highest address.
    """
    x = np.asarray(x)
    low = high = x.__array_interface__["data"][0]
    if x.size == 0:
        return low, high

    for extent, stride in zip(x.shape, x.strides):
        if stride < 0:
            low += (extent - 1) * stride
        else:
            high += (extent - 1) * stride

    return low, high + x.dtype.itemsize


def ranges_overlap(a, b):
    """
    Whether the half-open ranges ``a`` and ``b`` overlap.

    Examples
    --------
    >>> ranges_overlap((0, 4), (3, 8))
    True
    >>> ranges_overlap((0, 4), (4, 8))
    False
    """
    (a_low, a_high), (b_low, b_high) = a, b
    if a_low == a_high or b_low == b_high:
        return False
    return a_low < b_high and b_low < a_high
