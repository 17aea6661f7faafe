import pytest

from pizzastore.errors import AccessDenied
from pizzastore.models import Identity, Role

from tests.utils.fixtures import db, console_with, managers, add_user, add_order, count_rows


def user_row(db, login):
    rows = db.query_rows("SELECT login, password, role, favoriteItems, phoneNum FROM Users WHERE login=?;", (login,))
    return rows[0] if rows else None


def test_create_user(db, console_with):
    accounts, _, _ = managers(db, console_with("alice", "pw1", "123-456-7890"))
    assert accounts.create_user() is True
    assert user_row(db, "alice") == ("alice", "pw1", "customer", None, "123-456-7890")


@pytest.mark.parametrize("lines", [
    ("", "pw1", "123-456-7890"),
    ("alice", "", "123-456-7890"),
    ("alice", "pw1", ""),
])
def test_create_user_requires_every_field(db, console_with, capsys, lines):
    accounts, _, _ = managers(db, console_with(*lines))
    before = count_rows(db, "Users")
    assert accounts.create_user() is None
    assert count_rows(db, "Users") == before
    assert "All fields are required" in capsys.readouterr().out


def test_create_user_rejects_bad_phone(db, console_with, capsys):
    accounts, _, _ = managers(db, console_with("alice", "pw1", "1234567890"))
    accounts.create_user()
    assert user_row(db, "alice") is None
    assert "Invalid phone number format" in capsys.readouterr().out


def test_create_user_rejects_taken_login(db, console_with, capsys):
    add_user(db, "alice", password="old")
    accounts, _, _ = managers(db, console_with("alice", "pw1", "123-456-7890"))
    assert accounts.create_user() is None
    assert user_row(db, "alice")[1] == "old"
    assert "already taken" in capsys.readouterr().out


def test_login(db, console_with):
    add_user(db, "alice", password="pw1")
    accounts, _, _ = managers(db, console_with("alice", "pw1"))
    assert accounts.login() == Identity("alice", Role.CUSTOMER)


@pytest.mark.parametrize("lines", [("alice", "wrong"), ("nobody", "pw1"), ("ALICE", "pw1")])
def test_login_rejects_unknown_pairs(db, console_with, capsys, lines):
    add_user(db, "alice", password="pw1")
    accounts, _, _ = managers(db, console_with(*lines))
    assert accounts.login() is None
    assert "Invalid login or password." in capsys.readouterr().out


def test_require_role_rereads_store(db, console_with):
    add_user(db, "dave", role="Driver")
    accounts, _, _ = managers(db, console_with())
    assert accounts.require_role("dave", Role.DRIVER, Role.MANAGER) is Role.DRIVER
    db.execute("UPDATE Users SET role='customer' WHERE login='dave';")
    with pytest.raises(AccessDenied):
        accounts.require_role("dave", Role.DRIVER, Role.MANAGER)


def test_view_profile(db, console_with, capsys):
    add_user(db, "alice", phone="123-456-7890")
    accounts, _, _ = managers(db, console_with())
    accounts.view_profile("alice")
    out = capsys.readouterr().out
    assert "No favorite item set" in out
    assert "123-456-7890" in out


def test_update_profile_fields(db, console_with):
    add_user(db, "alice")
    accounts, _, _ = managers(db, console_with("1", "Hawaiian", "2", "111-222-3333", "3", "secret"))
    accounts.update_profile("alice")
    accounts.update_profile("alice")
    accounts.update_profile("alice")
    assert user_row(db, "alice") == ("alice", "secret", "customer", "Hawaiian", "111-222-3333")


def test_update_profile_rejects_bad_phone(db, console_with, capsys):
    add_user(db, "alice", phone="123-456-7890")
    accounts, _, _ = managers(db, console_with("2", "12-3456-7890"))
    accounts.update_profile("alice")
    assert user_row(db, "alice")[4] == "123-456-7890"
    assert "Invalid phone number format" in capsys.readouterr().out


def test_update_user_denied_for_non_manager(db, console_with, capsys):
    add_user(db, "bob")
    add_user(db, "dave", role="driver")
    accounts, _, _ = managers(db, console_with("bob", "2", "manager"))
    accounts.update_user("dave")
    assert user_row(db, "bob")[2] == "customer"
    assert "Invalid role access" in capsys.readouterr().out


def test_update_user_changes_role(db, console_with):
    add_user(db, "bob")
    accounts, _, _ = managers(db, console_with("bob", "2", "Driver"))
    accounts.update_user("manager")
    assert user_row(db, "bob")[2] == "driver"


def test_update_user_rejects_same_role(db, console_with, capsys):
    add_user(db, "bob")
    accounts, _, _ = managers(db, console_with("bob", "2", "customer"))
    accounts.update_user("manager")
    assert user_row(db, "bob")[2] == "customer"
    assert "has already been assigned the 'customer' role" in capsys.readouterr().out


def test_update_user_rejects_unknown_role(db, console_with, capsys):
    add_user(db, "bob")
    accounts, _, _ = managers(db, console_with("bob", "2", "chef"))
    accounts.update_user("manager")
    assert user_row(db, "bob")[2] == "customer"
    assert "Invalid role assignment" in capsys.readouterr().out


def test_update_user_renames_and_keeps_orders(db, console_with):
    add_user(db, "bob")
    add_order(db, 10000, "bob")
    accounts, _, _ = managers(db, console_with("bob", "1", "robert"))
    accounts.update_user("manager")
    assert user_row(db, "bob") is None
    assert db.query_rows("SELECT login FROM FoodOrder WHERE orderID=10000;") == [("robert",)]


def test_update_user_rejects_taken_login(db, console_with, capsys):
    add_user(db, "bob")
    add_user(db, "carol")
    accounts, _, _ = managers(db, console_with("bob", "1", "carol"))
    accounts.update_user("manager")
    assert user_row(db, "bob") is not None
    assert "Logins must be unique" in capsys.readouterr().out


def test_update_user_unknown_target(db, console_with, capsys):
    accounts, _, _ = managers(db, console_with("ghost"))
    accounts.update_user("manager")
    assert "Invalid login" in capsys.readouterr().out


def test_update_user_on_self_updates_own_profile(db, console_with):
    accounts, _, _ = managers(db, console_with("manager", "3", "newpass"))
    accounts.update_user("manager")
    assert user_row(db, "manager")[1] == "newpass"
