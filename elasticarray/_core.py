from collections.abc import Iterator
from numbers import Number

import numpy as np
import scipy.sparse
from numpy.lib.mixins import NDArrayOperatorsMixin

from ._buffer import FlatBuffer
from ._exceptions import DimensionMismatchError, InvalidShapeError
from ._shape import (
    buffer_length,
    check_shape,
    kernel_size,
    normalize_shape_args,
    slab_count,
    split_dims,
    split_resize_dims,
    trailing_extent,
)
from ._utils import as_dense, flat_values

_HANDLED_TYPES = (np.ndarray, np.generic, Number, list, tuple)


class ElasticArray(NDArrayOperatorsMixin):
    """
    A dense multidimensional array that can grow and shrink along its last
    dimension.

    All dimensions but the last one (the *kernel*) are fixed when the array
    is created. The elements live in a single contiguous flat buffer, with
    the first index varying fastest and the last index slowest, so that one
    step along the last dimension is one contiguous *page* of
    :attr:`kernel_length` elements. Resizing, appending and prepending only
    grow or shrink that buffer.

    Parameters
    ----------
    shape : Union[int, tuple[int], numpy.ndarray, ElasticArray, scipy.sparse.spmatrix]
        The full shape of the array, kernel dimensions followed by the
        initial trailing extent. Arrays are converted instead.
    dtype : numpy.dtype, optional
        The data type of this array. Defaults to ``float64`` for shapes and
        to the source's dtype for arrays.
    fill_value : scalar, optional
        The initial value of all elements. If not given, the elements are
        left uninitialized. Not allowed when converting an array.

    Attributes
    ----------
    kernel_shape : tuple[int]
        All dimensions but the last one.
    kernel_length : int
        The number of elements in one page.
    data : numpy.ndarray
        The flat buffer, as a one-dimensional view.

    Raises
    ------
    InvalidShapeError
        If the shape is empty or malformed, or the kernel is empty but the
        trailing extent isn't.

    See Also
    --------
    numpy.ndarray : The dense array this class behaves like.

    Notes
    -----
    ElasticArrays are not thread-safe. Concurrent mutation of one array must
    be synchronized by the caller. Views obtained by indexing or
    :meth:`todense` with ``copy=False`` alias the buffer and are only valid
    until the next operation that may reallocate it (:meth:`resize`,
    :meth:`reserve`, :meth:`append`, :meth:`prepend`, :meth:`shrink_to_fit`).

    Examples
    --------
    >>> a = ElasticArray((2, 3, 0), dtype=np.int64)
    >>> a
    <ElasticArray: shape=(2, 3, 0), dtype=int64>
    >>> for i in range(4):
    ...     _ = a.append(np.full((2, 3), i))
    >>> a.shape
    (2, 3, 4)
    >>> a[1, 2, :]
    array([0, 1, 2, 3])
    >>> _ = a.resize(2, 3, 2)
    >>> a.shape
    (2, 3, 2)
    """

    def __init__(self, shape, dtype=None, fill_value=None):
        if fill_value is not None and (
            isinstance(shape, (ElasticArray, np.ndarray)) or scipy.sparse.issparse(shape)
        ):
            raise ValueError("fill_value can only be given together with a shape.")

        if isinstance(shape, ElasticArray):
            ar = shape.astype(dtype) if dtype is not None else shape.copy()
            self._make_shallow_copy_of(ar)
            return

        if isinstance(shape, np.ndarray) or scipy.sparse.issparse(shape):
            ar = ElasticArray.from_numpy(as_dense(shape), dtype=dtype)
            self._make_shallow_copy_of(ar)
            return

        kernel_shape, extent = split_dims(shape)
        length = kernel_size(kernel_shape)
        check_shape(length, extent)

        self._kernel_shape = kernel_shape
        self._kernel_length = length
        self._buffer = FlatBuffer(
            buffer_length(length, extent), dtype=dtype, fill_value=fill_value
        )

    @classmethod
    def _from_buffer(cls, kernel_shape, buf):
        ar = cls.__new__(cls)
        ar._kernel_shape = kernel_shape
        ar._kernel_length = kernel_size(kernel_shape)
        ar._buffer = buf
        return ar

    def _make_shallow_copy_of(self, other):
        self.__dict__ = other.__dict__.copy()

    @classmethod
    def from_numpy(cls, x, dtype=None):
        """
        Convert a dense array into an :obj:`ElasticArray` of the same shape.

        Parameters
        ----------
        x : array_like
            The array to convert. Must have at least one dimension.
        dtype : numpy.dtype, optional
            The data type of the result. Defaults to that of ``x``.

        Returns
        -------
        ElasticArray
            The converted array, holding a copy of the elements.

        Raises
        ------
        InvalidShapeError
            If ``x`` is zero-dimensional, or has an empty kernel but a
            non-zero last dimension.

        Examples
        --------
        >>> x = np.arange(6).reshape(2, 3)
        >>> s = ElasticArray.from_numpy(x)
        >>> s
        <ElasticArray: shape=(2, 3), dtype=int64>
        >>> np.array_equal(s.todense(), x)
        True
        """
        x = as_dense(x, dtype=dtype)
        if x.ndim == 0:
            raise InvalidShapeError(
                "Can't convert a zero-dimensional array to an ElasticArray."
            )

        ar = cls(x.shape, dtype=x.dtype)
        ar._buffer.view[...] = x.ravel(order="F")
        return ar

    @classmethod
    def from_scipy_sparse(cls, x, dtype=None):
        """
        Convert a :obj:`scipy.sparse.spmatrix` into an :obj:`ElasticArray`.

        Examples
        --------
        >>> x = scipy.sparse.eye(3, format="csr")
        >>> ElasticArray.from_scipy_sparse(x)
        <ElasticArray: shape=(3, 3), dtype=float64>
        """
        return cls.from_numpy(x.toarray(), dtype=dtype)

    @property
    def kernel_shape(self):
        return self._kernel_shape

    @property
    def kernel_length(self):
        return self._kernel_length

    @property
    def shape(self):
        """
        The full shape of this array, the kernel shape followed by the
        trailing extent.

        Examples
        --------
        >>> a = ElasticArray((2, 3, 4))
        >>> a.shape
        (2, 3, 4)
        >>> a.kernel_shape
        (2, 3)
        """
        return self._kernel_shape + (
            trailing_extent(len(self._buffer), self._kernel_length),
        )

    @property
    def ndim(self):
        return len(self._kernel_shape) + 1

    @property
    def size(self):
        """The number of elements in this array, the length of the flat buffer."""
        return len(self._buffer)

    @property
    def dtype(self):
        return self._buffer.dtype

    @property
    def nbytes(self):
        """
        The number of bytes taken up by the elements of this array. Reserved
        but unused capacity is not counted.
        """
        return self.size * self.dtype.itemsize

    @property
    def capacity(self):
        """The number of elements this array can hold before its buffer is reallocated."""
        return self._buffer.capacity

    @property
    def data(self):
        """The flat buffer as a one-dimensional view, in buffer order."""
        return self._buffer.view

    def __len__(self):
        return len(self._buffer)

    def __str__(self):
        return f"<ElasticArray: shape={self.shape!s}, dtype={self.dtype!s}>"

    __repr__ = __str__

    def todense(self, copy=True):
        """
        Convert this array into a :obj:`numpy.ndarray` of the same shape.

        Parameters
        ----------
        copy : bool, optional
            If ``False``, return a Fortran-ordered view of the buffer instead
            of a copy. The view is invalidated by any operation that
            reallocates the buffer.

        Returns
        -------
        numpy.ndarray
            The dense array.

        Examples
        --------
        >>> a = ElasticArray((2, 2), dtype=np.int64, fill_value=0)
        >>> a.setflat(1, 5)
        >>> a.todense()
        array([[0, 0],
               [5, 0]])
        """
        view = self._buffer.view.reshape(self.shape, order="F")
        if copy:
            return view.copy(order="F")
        return view

    def __array__(self, dtype=None, copy=None):
        if copy is False and dtype is not None and np.dtype(dtype) != self.dtype:
            raise ValueError(
                "Unable to avoid a copy while converting an ElasticArray "
                f"of dtype {self.dtype} to {np.dtype(dtype)}."
            )

        arr = self.todense(copy=bool(copy))
        if dtype is not None:
            arr = arr.astype(dtype, copy=False)
        return arr

    def __getitem__(self, key):
        return self.todense(copy=False)[key]

    def __setitem__(self, key, value):
        self.todense(copy=False)[key] = value

    def getflat(self, index):
        """Get the element at position ``index`` of the flat buffer."""
        return self._buffer.view[index]

    def setflat(self, index, value):
        """Set the element at position ``index`` of the flat buffer."""
        self._buffer.view[index] = value

    def pages(self):
        """
        Iterate over the slices of this array along its last dimension.

        Yields
        ------
        numpy.ndarray
            Views of shape :attr:`kernel_shape`, one per trailing index.

        Examples
        --------
        >>> a = ElasticArray.from_numpy(np.arange(6).reshape(3, 2))
        >>> [p.tolist() for p in a.pages()]
        [[0, 2, 4], [1, 3, 5]]
        """
        view = self.todense(copy=False)
        for j in range(view.shape[-1]):
            yield view[..., j]

    __iter__ = pages

    def __bool__(self):
        return bool(self.todense(copy=False))

    def resize(self, *shape):
        """
        Change the trailing extent of this array in place.

        Parameters
        ----------
        shape : tuple[int]
            The new full shape, either as a single tuple or as separate
            integers. Only the last dimension may differ from
            :attr:`shape`.

        Returns
        -------
        ElasticArray
            This array.

        Raises
        ------
        ImmutableDimensionError
            If any dimension but the last one would change. The array is
            left untouched.
        InvalidShapeError
            If the new shape is malformed.

        Notes
        -----
        Growing adds pages with unspecified values, shrinking discards the
        pages at the end. An array with an empty kernel stays at a trailing
        extent of 0.

        Examples
        --------
        >>> a = ElasticArray((2, 3))
        >>> a.resize(2, 5).shape
        (2, 5)
        >>> a.resize((2, 1)).shape
        (2, 1)
        """
        _, extent = split_resize_dims(
            self._kernel_shape, normalize_shape_args(shape)
        )
        self._buffer.resize(buffer_length(self._kernel_length, extent))
        return self

    def reserve(self, *shape):
        """
        Preallocate room for an array of ``shape`` without changing the
        shape of this array.

        Validation is the same as for :meth:`resize`.

        Examples
        --------
        >>> a = ElasticArray((4, 0)).reserve(4, 100)
        >>> a.shape, a.capacity
        ((4, 0), 400)
        """
        _, extent = split_resize_dims(
            self._kernel_shape, normalize_shape_args(shape)
        )
        self._buffer.reserve(buffer_length(self._kernel_length, extent))
        return self

    sizehint = reserve

    def shrink_to_fit(self):
        """Release the capacity not used by the elements of this array."""
        self._buffer.shrink_to_fit()
        return self

    def _as_pages(self, src, action):
        values = flat_values(src)
        slab_count(values.size, self._kernel_length, action)
        return values

    def append(self, src):
        """
        Append pages at the end of this array.

        Parameters
        ----------
        src : array_like or Iterator[array_like]
            The elements to append, whose count must be a multiple of
            :attr:`kernel_length`. They are taken in buffer order, so an
            array of shape ``kernel_shape + (n,)`` (or just
            ``kernel_shape``) appends its ``n`` (or one) pages unchanged.
            An iterator is consumed as a stream of such blocks.

        Returns
        -------
        ElasticArray
            This array.

        Raises
        ------
        DimensionMismatchError
            If the element count is not a whole number of pages. For an
            array-like source the array is left untouched. For an iterator
            the blocks appended before the failing one are kept.

        Examples
        --------
        >>> a = ElasticArray((2, 0), dtype=np.int64)
        >>> a.append([[1, 2], [3, 4]]).todense()
        array([[1, 2],
               [3, 4]])
        >>> a.append(np.full(2, 9) for _ in range(2)).shape
        (2, 4)
        """
        if isinstance(src, Iterator):
            for slab in src:
                self._buffer.extend(self._as_pages(slab, "append"))
            return self

        self._buffer.extend(self._as_pages(src, "append"))
        return self

    def prepend(self, src):
        """
        Insert pages at the start of this array.

        The counterpart of :meth:`append`: the pages of ``src`` keep their
        order and come before the existing pages. For an iterator, the
        blocks read before a failing one are prepended before the error is
        raised.

        Examples
        --------
        >>> a = ElasticArray.from_numpy(np.array([[3], [4]]))
        >>> a.prepend([[1, 2], [1, 2]]).todense()
        array([[1, 2, 3],
               [1, 2, 4]])
        """
        if isinstance(src, Iterator):
            slabs = []
            try:
                for slab in src:
                    slabs.append(self._as_pages(slab, "prepend"))
            finally:
                if slabs:
                    self._buffer.extendleft(np.concatenate(slabs))
            return self

        self._buffer.extendleft(self._as_pages(src, "prepend"))
        return self

    def copy_region(self, dest_offset, src, src_offset=0, count=None):
        """
        Copy ``count`` elements of ``src`` starting at ``src_offset`` into the
        flat buffer of this array starting at ``dest_offset``.

        Offsets are flat positions in buffer order. The shape of this array
        never changes.

        Raises
        ------
        IndexError
            If either range is out of bounds. Nothing is copied.

        Examples
        --------
        >>> a = ElasticArray((2, 2), dtype=np.int64, fill_value=0)
        >>> a.copy_region(1, [7, 8, 9], 1, 2).data
        array([0, 8, 9, 0])
        """
        values = flat_values(src)
        if count is None:
            count = values.size - src_offset

        if (
            count < 0
            or src_offset < 0
            or dest_offset < 0
            or src_offset + count > values.size
            or dest_offset + count > self.size
        ):
            raise IndexError(
                f"Can't copy {count} elements from offset {src_offset} of a "
                f"source of length {values.size} to offset {dest_offset} of "
                f"a destination of length {self.size}."
            )

        self._buffer.view[dest_offset : dest_offset + count] = values[
            src_offset : src_offset + count
        ]
        return self

    def copy_from(self, src):
        """
        Overwrite all elements of this array with those of ``src``.

        Raises
        ------
        DimensionMismatchError
            If ``src`` doesn't have exactly :attr:`size` elements.
        """
        values = flat_values(src)
        if values.size != self.size:
            raise DimensionMismatchError(
                f"Can't copy a source of {values.size} elements into an "
                f"ElasticArray of {self.size} elements."
            )

        self._buffer.view[...] = values
        return self

    def copy(self):
        """An independent copy of this array with the same kernel and elements."""
        return ElasticArray._from_buffer(self._kernel_shape, self._buffer.copy())

    def astype(self, dtype):
        """A copy of this array with its elements cast to ``dtype``."""
        return ElasticArray._from_buffer(
            self._kernel_shape, self._buffer.astype(dtype)
        )

    def similar(self, dtype=None, shape=None):
        """
        A new uninitialized array with the same kernel as this one.

        Parameters
        ----------
        dtype : numpy.dtype, optional
            Defaults to the dtype of this array.
        shape : tuple[int], optional
            The full shape. Defaults to the shape of this array.
        """
        return ElasticArray(
            self.shape if shape is None else shape,
            dtype=self.dtype if dtype is None else dtype,
        )

    def equals(self, other, equal_nan=False):
        """
        Whether ``other`` has the same rank, the same kernel shape and the
        same elements as this array.

        Examples
        --------
        >>> a = ElasticArray.from_numpy(np.ones((2, 3)))
        >>> a.equals(a.copy())
        True
        >>> a.equals(ElasticArray.from_numpy(np.ones((3, 2))))
        False
        """
        if isinstance(other, ElasticArray):
            return bool(
                self.ndim == other.ndim
                and self._kernel_shape == other._kernel_shape
                and np.array_equal(self.data, other.data, equal_nan=equal_nan)
            )

        other = as_dense(other)
        return bool(
            other.shape == self.shape
            and np.array_equal(
                self.todense(copy=False), other, equal_nan=equal_nan
            )
        )

    def _wrap(self, result):
        if isinstance(result, tuple):
            return tuple(self._wrap(r) for r in result)

        if (
            isinstance(result, np.ndarray)
            and result.ndim == self.ndim
            and result.shape[:-1] == self._kernel_shape
            and (self._kernel_length != 0 or result.shape[-1] == 0)
        ):
            return ElasticArray.from_numpy(result)

        return result

    def __array_ufunc__(self, ufunc, method, *inputs, **kwargs):
        out = kwargs.pop("out", None)
        for x in inputs + (out or ()):
            if not isinstance(x, _HANDLED_TYPES + (ElasticArray,)):
                return NotImplemented

        inputs = _unwrap(inputs)
        if out is not None:
            kwargs["out"] = _unwrap(out)

        result = getattr(ufunc, method)(*inputs, **kwargs)

        if out is not None:
            return out[0] if len(out) == 1 else out

        return self._wrap(result)

    def __array_function__(self, func, types, args, kwargs):
        if not all(issubclass(t, (np.ndarray, ElasticArray)) for t in types):
            return NotImplemented

        return self._wrap(func(*_unwrap(args), **_unwrap(kwargs)))


def _unwrap(x):
    if isinstance(x, ElasticArray):
        return x.todense(copy=False)
    if isinstance(x, (list, tuple)):
        return type(x)(_unwrap(i) for i in x)
    if isinstance(x, dict):
        return {k: _unwrap(v) for k, v in x.items()}
    return x
