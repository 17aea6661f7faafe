import pytest

from pizzastore.errors import StoreError, ValidationError
from pizzastore.helpers import (is_valid_phone_number, parse_boolean_input, parse_item_types, parse_price,
                                read_choice, read_int, read_price, reports_errors, safe_int)

from tests.utils.fixtures import console_with


def test_phone_accepts_exact_pattern():
    assert is_valid_phone_number("123-456-7890")
    assert is_valid_phone_number("000-000-0000")


@pytest.mark.parametrize("phone", [
    "", "1234567890", "123-456-789", "123-456-78901", "123 456 7890", "(12)456-7890", "123-4567-890",
])
def test_phone_rejects_wrong_shape(phone):
    assert not is_valid_phone_number(phone)


@pytest.mark.parametrize("index", [i for i in range(12) if i not in (3, 7)])
def test_phone_rejects_non_digit_anywhere(index):
    phone = list("123-456-7890")
    phone[index] = "x"
    assert not is_valid_phone_number("".join(phone))


@pytest.mark.parametrize("index", [3, 7])
def test_phone_requires_hyphens(index):
    phone = list("123-456-7890")
    phone[index] = "5"
    assert not is_valid_phone_number("".join(phone))


def test_safe_int():
    assert safe_int("4") == 4
    assert safe_int("x") is None
    assert safe_int("0", minimum=1) is None


def test_read_int_reprompts_until_valid(console_with, capsys):
    console = console_with("abc", "", "-3", "4")
    assert read_int(console, "n: ", minimum=1) == 4
    assert capsys.readouterr().out.count("Your input is invalid!") == 3


def test_read_int_respects_maximum(console_with):
    assert read_int(console_with("5", "2"), "n: ", minimum=1, maximum=3) == 2


def test_read_int_cancel(console_with):
    assert read_int(console_with("CANCEL"), "n: ") is None


def test_read_choice_is_not_cancellable(console_with):
    assert read_choice(console_with("cancel", "2")) == 2


def test_read_int_propagates_eof(console_with):
    with pytest.raises(EOFError):
        read_int(console_with(), "n: ")


def test_parse_price():
    assert parse_price("12.5") == 12.5
    assert parse_price("0") == 0


@pytest.mark.parametrize("text", ["-1", "abc", "", "nan", "inf"])
def test_parse_price_rejects(text):
    with pytest.raises(ValidationError):
        parse_price(text)


def test_read_price_reprompts_and_cancels(console_with):
    assert read_price(console_with("x", "-2", "3.25"), "price: ") == 3.25
    assert read_price(console_with("cancel"), "price: ") is None


def test_parse_item_types():
    assert parse_item_types("Entree, DRINKS") == ["entree", "drinks"]
    assert parse_item_types("sides,") == ["sides"]


@pytest.mark.parametrize("text", ["entree, pizza", "", "dessert"])
def test_parse_item_types_rejects_whole_list(text):
    with pytest.raises(ValidationError):
        parse_item_types(text)


def test_parse_boolean_input():
    assert parse_boolean_input("Yes")
    assert parse_boolean_input(" y ")
    assert not parse_boolean_input("no")
    assert not parse_boolean_input("sure")


def test_reports_errors_keeps_going(capsys):
    @reports_errors("testing")
    def broken():
        raise StoreError("boom")

    @reports_errors("testing")
    def invalid():
        raise ValidationError("bad input")

    assert broken() is None
    assert invalid() is None
    out = capsys.readouterr().out
    assert "error while testing: boom" in out
    assert "bad input" in out
