import numpy as np

from ._core import ElasticArray
from ._exceptions import DimensionMismatchError
from ._utils import byte_bounds, flat_values, ranges_overlap


def empty(shape, dtype=None):
    """
    Create an :obj:`ElasticArray` with uninitialized elements.

    Examples
    --------
    >>> empty((3, 0))
    <ElasticArray: shape=(3, 0), dtype=float64>
    """
    return ElasticArray(shape, dtype=dtype)


def full(shape, fill_value, dtype=None):
    """
    Create an :obj:`ElasticArray` with all elements set to ``fill_value``.

    Parameters
    ----------
    shape : Union[int, tuple[int]]
        The full shape of the array.
    fill_value : scalar
        The value of every element.
    dtype : numpy.dtype, optional
        The data type of the array. Inferred from ``fill_value`` if not given.

    Examples
    --------
    >>> full((2, 2), 7).todense()
    array([[7, 7],
           [7, 7]])
    """
    if dtype is None:
        dtype = np.array(fill_value).dtype
    return ElasticArray(shape, dtype=dtype, fill_value=fill_value)


def zeros(shape, dtype=float):
    """
    Create an :obj:`ElasticArray` filled with zeros.

    Examples
    --------
    >>> zeros(3, dtype=np.int64).todense()
    array([0, 0, 0])
    """
    return full(shape, 0, dtype=np.dtype(dtype))


def ones(shape, dtype=float):
    """
    Create an :obj:`ElasticArray` filled with ones.

    Examples
    --------
    >>> ones((2, 1), dtype=np.int64).data
    array([1, 1])
    """
    return full(shape, 1, dtype=np.dtype(dtype))


def asarray(obj, dtype=None):
    """
    Convert ``obj`` to an :obj:`ElasticArray`, without copying if it already
    is one of the right dtype.

    Examples
    --------
    >>> a = asarray([[1, 2], [3, 4]])
    >>> asarray(a) is a
    True
    """
    if isinstance(obj, ElasticArray):
        if dtype is None or np.dtype(dtype) == obj.dtype:
            return obj
        return obj.astype(dtype)

    return ElasticArray.from_numpy(obj, dtype=dtype)


def copyto(dest, src):
    """
    Copy all elements of ``src`` into ``dest``, in buffer order.

    Either side may be an :obj:`ElasticArray` or a dense array. Neither
    shape changes; only the element counts must match.

    Raises
    ------
    DimensionMismatchError
        If ``src`` and ``dest`` hold a different number of elements.

    See Also
    --------
    ElasticArray.copy_region : Copy part of a source.

    Examples
    --------
    >>> x = np.zeros((2, 2), dtype=np.int64)
    >>> _ = copyto(x, ElasticArray.from_numpy(np.arange(4)))
    >>> x
    array([[0, 2],
           [1, 3]])
    """
    if isinstance(dest, ElasticArray):
        return dest.copy_from(src)

    values = flat_values(src)
    if values.size != dest.size:
        raise DimensionMismatchError(
            f"Can't copy a source of {values.size} elements into an "
            f"array of {dest.size} elements."
        )

    dest[...] = values.reshape(dest.shape, order="F")
    return dest


def array_equal(a, b, equal_nan=False):
    """
    Whether two arrays have the same rank, kernel shape and elements.

    Examples
    --------
    >>> a = ElasticArray.from_numpy(np.arange(4))
    >>> array_equal(a, a.copy())
    True
    """
    if isinstance(a, ElasticArray):
        return a.equals(b, equal_nan=equal_nan)
    if isinstance(b, ElasticArray):
        return b.equals(a, equal_nan=equal_nan)
    return bool(np.array_equal(a, b, equal_nan=equal_nan))


def may_share_memory(a, b):
    """
    Whether the memory ranges of ``a`` and ``b`` overlap.

    Only the address ranges are compared, so this may report an overlap
    for interleaved views that share no element, like
    :obj:`numpy.may_share_memory`.

    Examples
    --------
    >>> a = ElasticArray.from_numpy(np.arange(6).reshape(2, 3))
    >>> may_share_memory(a, a[:, 1])
    True
    >>> may_share_memory(a, a.todense())
    False
    """
    return ranges_overlap(_bounds(a), _bounds(b))


def _bounds(x):
    if isinstance(x, ElasticArray):
        return byte_bounds(x.data)
    return byte_bounds(x)
