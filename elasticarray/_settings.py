import os
import warnings

from ._exceptions import ElasticArrayWarning


def _read_setting(name, default, convert, is_valid):
    raw = os.environ.get(name, "")
    if raw == "":
        return default

    try:
        value = convert(raw)
    except ValueError:
        value = None

    if value is None or not is_valid(value):
        warnings.warn(
            f"Invalid value for {name}: {raw!r}. Using the default {default!r}.",
            ElasticArrayWarning,
            stacklevel=2,
        )
        return default

    return value


GROWTH_FACTOR = _read_setting(
    "ELASTICARRAY_GROWTH_FACTOR", 1.5, float, lambda x: x > 1
)
MIN_CAPACITY = _read_setting(
    "ELASTICARRAY_MIN_CAPACITY", 8, int, lambda x: x >= 0
)
