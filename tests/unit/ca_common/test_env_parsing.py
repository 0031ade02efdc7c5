import pytest

from ca_common.config import parse_bool_env, parse_list_env


pytestmark = pytest.mark.unit_common


@pytest.mark.parametrize("value", ["1", "true", "YES", " on "])
def test_parse_bool_env_truthy(value: str) -> None:
    assert parse_bool_env(value) is True


@pytest.mark.parametrize("value", ["0", "false", "off", ""])
def test_parse_bool_env_falsy(value: str) -> None:
    assert parse_bool_env(value) is False


def test_parse_bool_env_missing() -> None:
    assert parse_bool_env(None) is None


def test_parse_list_env_splits_and_strips() -> None:
    assert parse_list_env("q, escape ,") == ["q", "escape"]
    assert parse_list_env(" , ") is None
    assert parse_list_env(None) is None
