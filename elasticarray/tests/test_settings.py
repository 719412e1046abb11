import pytest

from elasticarray import ElasticArrayWarning, _settings


def test_defaults():
    assert _settings.GROWTH_FACTOR > 1
    assert _settings.MIN_CAPACITY >= 0


def test_read_setting_unset(monkeypatch):
    monkeypatch.delenv("ELASTICARRAY_TEST_SETTING", raising=False)
    assert _settings._read_setting("ELASTICARRAY_TEST_SETTING", 3, int, lambda x: x > 0) == 3


def test_read_setting_valid(monkeypatch):
    monkeypatch.setenv("ELASTICARRAY_TEST_SETTING", "2.5")
    assert _settings._read_setting("ELASTICARRAY_TEST_SETTING", 1.5, float, lambda x: x > 1) == 2.5


@pytest.mark.parametrize("raw", ["abc", "0.5"])
def test_read_setting_invalid(monkeypatch, raw):
    monkeypatch.setenv("ELASTICARRAY_TEST_SETTING", raw)

    with pytest.warns(ElasticArrayWarning, match="ELASTICARRAY_TEST_SETTING"):
        value = _settings._read_setting("ELASTICARRAY_TEST_SETTING", 1.5, float, lambda x: x > 1)

    assert value == 1.5
