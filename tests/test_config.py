import pytest

from pizzastore.config import ConnectionSettings, parse_args
from pizzastore.errors import UsageError


def test_parse_args():
    settings = parse_args(["pizza", "5432", "esi"])
    assert settings == ConnectionSettings(dbname="pizza", port=5432, user="esi")
    assert settings.database_path == "pizza.db"
    assert settings.url.startswith("sqlite:///pizza.db")


@pytest.mark.parametrize("argv", [[], ["pizza"], ["pizza", "5432"], ["pizza", "5432", "esi", "extra"]])
def test_parse_args_requires_three_arguments(argv):
    with pytest.raises(UsageError):
        parse_args(argv)


def test_parse_args_requires_numeric_port():
    with pytest.raises(UsageError):
        parse_args(["pizza", "port", "esi"])


def test_database_path_keeps_existing_suffix():
    assert ConnectionSettings("data/pizza.sqlite3", 1, "u").database_path == "data/pizza.sqlite3"
    assert ConnectionSettings(":memory:", 1, "u").database_path == ":memory:"
