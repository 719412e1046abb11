import pytest

import numpy as np


@pytest.fixture(scope="function")
def rng():
    return np.random.default_rng(seed=42)


@pytest.fixture
def pages_2x3(rng):
    return [rng.integers(-100, 100, size=(2, 3)) for _ in range(4)]
