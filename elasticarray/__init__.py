from ._version import __version__, __version_tuple__  # noqa: F401

from ._core import ElasticArray
from ._common import (
    array_equal,
    asarray,
    copyto,
    empty,
    full,
    may_share_memory,
    ones,
    zeros,
)
from ._exceptions import (
    DimensionMismatchError,
    ElasticArrayError,
    ElasticArrayWarning,
    ImmutableDimensionError,
    InvalidShapeError,
)

__all__ = [
    "DimensionMismatchError",
    "ElasticArray",
    "ElasticArrayError",
    "ElasticArrayWarning",
    "ImmutableDimensionError",
    "InvalidShapeError",
    "array_equal",
    "asarray",
    "copyto",
    "empty",
    "full",
    "may_share_memory",
    "ones",
    "zeros",
]
