import operator
from collections.abc import Iterable
from functools import reduce
from numbers import Integral

from ._exceptions import (
    DimensionMismatchError,
    ImmutableDimensionError,
    InvalidShapeError,
)


def normalize_shape_args(args):
    """
    Accept both ``f((2, 3, 4))`` and ``f(2, 3, 4)`` call styles.

    Examples
    --------
    >>> normalize_shape_args(((2, 3, 4),))
    (2, 3, 4)
    >>> normalize_shape_args((2, 3, 4))
    (2, 3, 4)
    """
    if len(args) == 1 and isinstance(args[0], Iterable):
        return tuple(args[0])
    return tuple(args)


def split_dims(dims):
    """
    Split a full shape into the kernel shape and the trailing extent.

    Parameters
    ----------
    dims : Union[int, Iterable[int]]
        The full shape. A single integer is a one-dimensional shape.

    Returns
    -------
    kernel_shape : tuple[int]
        All dimensions but the last one.
    trailing_extent : int
        The last dimension.

    Raises
    ------
    InvalidShapeError
        If the shape is empty or contains anything but non-negative integers.

    Examples
    --------
    >>> split_dims((2, 3, 4))
    ((2, 3), 4)
    >>> split_dims(5)
    ((), 5)
    """
    if not isinstance(dims, Iterable):
        dims = (dims,)

    dims = tuple(dims)

    if len(dims) == 0:
        raise InvalidShapeError(
            "An ElasticArray needs at least one dimension, the resizable one."
        )

    if not all(isinstance(d, Integral) and int(d) >= 0 for d in dims):
        raise InvalidShapeError(
            "shape must be a non-negative integer or a tuple "
            "of non-negative integers."
        )

    dims = tuple(int(d) for d in dims)
    return dims[:-1], dims[-1]


def split_resize_dims(kernel_shape, dims):
    """
    Split ``dims`` like :obj:`split_dims` and check that its kernel matches
    ``kernel_shape``.

    Raises
    ------
    ImmutableDimensionError
        If any dimension but the last one differs, or the rank differs.

    Examples
    --------
    >>> split_resize_dims((2, 3), (2, 3, 7))
    ((2, 3), 7)
    >>> split_resize_dims((2, 3), (2, 4, 7))
    Traceback (most recent call last):
        ...
    elasticarray._exceptions.ImmutableDimensionError: Can only resize the last dimension of an ElasticArray: kernel (2, 3) != (2, 4)
    """
    new_kernel_shape, extent = split_dims(dims)
    if new_kernel_shape != tuple(kernel_shape):
        raise ImmutableDimensionError(
            "Can only resize the last dimension of an ElasticArray: "
            f"kernel {tuple(kernel_shape)} != {new_kernel_shape}"
        )
    return new_kernel_shape, extent


def kernel_size(kernel_shape):
    # Not np.prod: it returns a float64 for an empty shape.
    return reduce(operator.mul, kernel_shape, 1)


def trailing_extent(buffer_length, kernel_length):
    """
    The trailing extent represented by ``buffer_length`` elements.

    Examples
    --------
    >>> trailing_extent(24, 6)
    4
    >>> trailing_extent(0, 0)
    0
    """
    if kernel_length == 0:
        return 0
    return buffer_length // kernel_length


def buffer_length(kernel_length, extent):
    """The number of buffer elements holding ``extent`` pages."""
    length = kernel_length * extent
    if length < 0:
        raise InvalidShapeError(f"Negative buffer length {length} requested.")
    return length


def check_shape(kernel_length, extent):
    if kernel_length == 0 and extent != 0:
        raise InvalidShapeError(
            "An ElasticArray with an empty kernel can only have a trailing "
            f"extent of 0, got {extent}."
        )


def slab_count(count, kernel_length, action="append"):
    """
    The number of pages held by ``count`` elements.

    Raises
    ------
    DimensionMismatchError
        If ``count`` is not a whole number of pages.

    Examples
    --------
    >>> slab_count(12, 6)
    2
    >>> slab_count(0, 0)
    0
    """
    if kernel_length == 0:
        if count != 0:
            raise DimensionMismatchError(
                f"Can't {action}, the array has an empty kernel and "
                f"the source has {count} elements."
            )
        return 0

    pages, remainder = divmod(count, kernel_length)
    if remainder != 0:
        raise DimensionMismatchError(
            f"Can't {action}, length of source ({count}) is not a multiple "
            f"of the kernel length ({kernel_length})."
        )
    return pages
