import pytest


@pytest.fixture(scope="session", autouse=True)
def add_doctest_modules(doctest_namespace):
    import elasticarray

    import numpy as np

    doctest_namespace["np"] = np
    doctest_namespace["elasticarray"] = elasticarray
