import pytest

from pizzastore.accounts import AccountManager
from pizzastore.database import Database
from pizzastore.helpers import Console
from pizzastore.menu import MenuManager
from pizzastore.orders import OrderManager


class ScriptedInput:
    """stands in for input(); raises EOFError once the script runs out"""
    def __init__(self, lines):
        self.lines = list(lines)
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)


@pytest.fixture
def db():
    database = Database(":memory:")
    yield database
    database.close()


@pytest.fixture
def console_with():
    def make(*lines):
        return Console(ScriptedInput(lines))
    return make


def managers(db, console):
    """account, menu and order managers sharing one console"""
    account_manager = AccountManager(db, console)
    menu_manager = MenuManager(db, console, account_manager)
    order_manager = OrderManager(db, console, account_manager, menu_manager)
    return account_manager, menu_manager, order_manager


def add_user(db, login, role="customer", password="pw", phone="555-555-5555"):
    db.execute(
        "INSERT INTO Users(login, password, role, favoriteItems, phoneNum) VALUES(?, ?, ?, NULL, ?);",
        (login, password, role, phone)
    )
    return login


def add_order(db, order_id, login, store_id=1, total=10.0, timestamp="2024-01-01 12:00:00",
              status="incomplete", lines=(("Cola", 1),)):
    db.execute(
        "INSERT INTO FoodOrder(orderID, login, storeID, totalPrice, orderTimestamp, orderStatus) "
        "VALUES(?, ?, ?, ?, ?, ?);",
        (order_id, login, store_id, total, timestamp, status)
    )
    for item_name, quantity in lines:
        db.execute("INSERT INTO ItemsInOrder(orderID, itemName, quantity) VALUES(?, ?, ?);",
                   (order_id, item_name, quantity))
    return order_id


def count_rows(db, table):
    return int(db.query_rows(f"SELECT COUNT(*) FROM {table};")[0][0])
