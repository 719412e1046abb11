class ElasticArrayError(Exception):
    """Base class for the errors raised by :obj:`ElasticArray` operations."""


class InvalidShapeError(ElasticArrayError, ValueError):
    """
    Raised for a malformed shape: an empty shape, negative or non-integer
    dimensions, or a non-zero trailing extent on an array whose kernel
    holds no elements.
    """


class ImmutableDimensionError(ElasticArrayError, ValueError):
    """Raised when a resize would change any dimension but the last one."""


class DimensionMismatchError(ElasticArrayError, ValueError):
    """
    Raised when the number of elements of a source is incompatible with the
    kernel length (append, prepend) or the size (copy) of the destination.
    """


class ElasticArrayWarning(UserWarning):
    pass
