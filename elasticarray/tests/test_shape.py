import pytest

import numpy as np

from elasticarray import (
    DimensionMismatchError,
    ImmutableDimensionError,
    InvalidShapeError,
)
from elasticarray._shape import (
    buffer_length,
    check_shape,
    kernel_size,
    normalize_shape_args,
    slab_count,
    split_dims,
    split_resize_dims,
    trailing_extent,
)


@pytest.mark.parametrize(
    "dims, expected",
    [
        ((2, 3, 4), ((2, 3), 4)),
        ((5,), ((), 5)),
        (5, ((), 5)),
        ([0, 1], ((0,), 1)),
        ((np.int64(2), np.int32(3)), ((2,), 3)),
    ],
)
def test_split_dims(dims, expected):
    kernel, extent = split_dims(dims)
    assert (kernel, extent) == expected
    assert all(type(d) is int for d in kernel + (extent,))


@pytest.mark.parametrize("dims", [(), [], (2, -1), (-1, 2), (2.0, 3), ("a",)])
def test_split_dims_invalid(dims):
    with pytest.raises(InvalidShapeError):
        split_dims(dims)


def test_invalid_shape_is_value_error():
    with pytest.raises(ValueError):
        split_dims(())


def test_split_resize_dims():
    assert split_resize_dims((2, 3), (2, 3, 9)) == ((2, 3), 9)
    assert split_resize_dims((), (0,)) == ((), 0)


@pytest.mark.parametrize(
    "kernel, dims",
    [
        ((2, 3), (2, 4, 2)),
        ((2, 3), (3, 2)),
        ((2, 3), (2, 3, 1, 2)),
        ((), (1, 2)),
    ],
)
def test_split_resize_dims_kernel_mismatch(kernel, dims):
    with pytest.raises(ImmutableDimensionError):
        split_resize_dims(kernel, dims)


@pytest.mark.parametrize(
    "kernel, expected", [((), 1), ((2, 3), 6), ((4, 0, 2), 0), ((7,), 7)]
)
def test_kernel_size(kernel, expected):
    assert kernel_size(kernel) == expected
    assert type(kernel_size(kernel)) is int


@pytest.mark.parametrize(
    "length, kernel_length, expected",
    [(24, 6, 4), (0, 6, 0), (0, 0, 0), (10, 1, 10)],
)
def test_trailing_extent(length, kernel_length, expected):
    assert trailing_extent(length, kernel_length) == expected


def test_buffer_length():
    assert buffer_length(6, 4) == 24
    assert buffer_length(0, 5) == 0

    with pytest.raises(InvalidShapeError):
        buffer_length(6, -1)


def test_check_shape():
    check_shape(6, 3)
    check_shape(0, 0)

    with pytest.raises(InvalidShapeError):
        check_shape(0, 1)


@pytest.mark.parametrize(
    "count, kernel_length, expected", [(12, 6, 2), (0, 6, 0), (0, 0, 0), (5, 1, 5)]
)
def test_slab_count(count, kernel_length, expected):
    assert slab_count(count, kernel_length) == expected


@pytest.mark.parametrize("count, kernel_length", [(5, 6), (13, 6), (1, 0)])
def test_slab_count_mismatch(count, kernel_length):
    with pytest.raises(DimensionMismatchError, match="prepend"):
        slab_count(count, kernel_length, "prepend")


def test_normalize_shape_args():
    assert normalize_shape_args(([2, 3],)) == (2, 3)
    assert normalize_shape_args((4,)) == (4,)
    assert normalize_shape_args(()) == ()
