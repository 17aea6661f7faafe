from datetime import datetime
from typing import Callable

from termcolor import cprint, colored

from pizzastore.accounts import AccountManager
from pizzastore.config import DONE_SENTINEL, ORDER_ID_FLOOR, RECENT_ORDER_LIMIT, SQL_INT_MAX, TIMESTAMP_FORMAT
from pizzastore.database import Database
from pizzastore.display import color_money, print_order_info, print_orders, print_stores
from pizzastore.errors import ValidationError
from pizzastore.helpers import Console, parse_boolean_input, read_int, reports_errors
from pizzastore.logger import logger
from pizzastore.menu import MenuManager
from pizzastore.models import Order, OrderLine, OrderStatus, Role, Store

ORDER_COLUMNS = "orderID, login, storeID, totalPrice, orderTimestamp, orderStatus"
STORE_COLUMNS = "storeID, address, city, state, isOpen, reviewScore"
PRIVILEGED = (Role.DRIVER, Role.MANAGER)


class OrderManager:
    """place orders, browse order history, toggle order status"""
    def __init__(self, db: Database, console: Console, account_manager: AccountManager,
                 menu_manager: MenuManager, clock: Callable[[], datetime] = datetime.now):
        self.db = db
        self.console = console
        self.account_manager = account_manager
        self.menu_manager = menu_manager
        self.clock = clock

    # queries
    def fetch_stores(self, open_only: bool = False) -> list[Store]:
        where = " WHERE isOpen = 1" if open_only else ""
        rows = self.db.query_rows(f"SELECT {STORE_COLUMNS} FROM Store{where} ORDER BY storeID;")
        return [Store.from_row(r) for r in rows]

    def fetch_orders(self, login: str, limit: int | None = None) -> list[Order]:
        """orders of one login, newest first"""
        sql = f"SELECT {ORDER_COLUMNS} FROM FoodOrder WHERE login=? ORDER BY orderTimestamp DESC, orderID DESC"
        params: list = [login]
        if limit is not None:
            sql += " LIMIT ?"
            params.append(limit)
        return [Order.from_row(r) for r in self.db.query_rows(sql + ";", params)]

    def fetch_order(self, order_id: int, login: str | None = None) -> Order | None:
        """order by id, optionally only if it belongs to login"""
        sql = f"SELECT {ORDER_COLUMNS} FROM FoodOrder WHERE orderID=?"
        params: list = [order_id]
        if login is not None:
            sql += " AND login=?"
            params.append(login)
        rows = self.db.query_rows(sql + ";", params)
        return Order.from_row(rows[0]) if rows else None

    def fetch_order_lines(self, order_id: int) -> list[OrderLine]:
        rows = self.db.query_rows(
            "SELECT itemName, quantity FROM ItemsInOrder WHERE orderID=? ORDER BY itemName;",
            (order_id,)
        )
        return [OrderLine.from_row(r) for r in rows]

    def next_order_id(self) -> int:
        """max existing id + 1, or the floor for the first order"""
        rows = self.db.query_rows("SELECT MAX(orderID) FROM FoodOrder;")
        if not rows or rows[0][0] is None:
            return ORDER_ID_FLOOR
        return int(rows[0][0]) + 1

    # placing orders
    def _pick_store(self) -> Store | None:
        stores = self.fetch_stores(open_only=True)
        if not stores:
            cprint("Sorry, there are no open stores available to place an order.", "red")
            return None
        cprint("Available stores:", "green", attrs=["bold"])
        print_stores(stores, numbered=True)
        choice = read_int(self.console, "Enter the number of the store you want to order from (or 'cancel'): ",
                          minimum=1, maximum=len(stores))
        if choice is None:
            cprint("Order cancelled.", "yellow")
            return None
        store = stores[choice - 1]
        cprint(f"You have selected store {store.id}.", "green")
        return store

    def _collect_lines(self) -> list[OrderLine]:
        """prompt for items until 'done'; repeated items merge into one line"""
        lines: dict[str, OrderLine] = {}
        total = 0.0
        while True:
            text = self.console.read(f"Enter the item name of the food, or type '{DONE_SENTINEL}' to finish ordering: ")
            if text.lower() == DONE_SENTINEL:
                return list(lines.values())
            item = self.menu_manager.find_item(text) if text else None
            if item is None:
                cprint("Item not found. Please try again.", "red")
                continue
            print(f"You have selected {item.name} - {color_money(item.price)}")
            quantity = read_int(self.console, "Enter the quantity you want to order (or 'cancel'): ",
                                minimum=1, maximum=SQL_INT_MAX)
            if quantity is None:
                cprint(f"{item.name} not added.", "yellow")
                continue
            line = lines.setdefault(item.name, OrderLine(item.name, 0, item.price))
            line.quantity += quantity
            total += item.price * quantity
            cprint(f"Added {quantity} of {item.name} to your order.", "green")
            print(f"Total so far: {color_money(total)}")

    @reports_errors("placing order")
    def place_order(self, login: str) -> int | None:
        """build an order interactively; returns the new order id when one is written"""
        store = self._pick_store()
        if store is None:
            return None
        print("Loading menu")
        self.menu_manager.show_full_menu()

        lines = self._collect_lines()
        if not lines:
            cprint("No items selected. Exiting order process.", "yellow")
            return None

        total = round(sum(line.subtotal for line in lines), 2)
        print(f"Total order price: {color_money(total)}")
        if not parse_boolean_input(self.console.read("Enter 'yes' to confirm your order: ")):
            cprint("Order cancelled.", "yellow")
            return None

        timestamp = self.clock().strftime(TIMESTAMP_FORMAT)
        with self.db.transaction():
            order_id = self.next_order_id()
            self.db.execute(
                f"INSERT INTO FoodOrder({ORDER_COLUMNS}) VALUES(?, ?, ?, ?, ?, ?);",
                (order_id, login, store.id, total, timestamp, OrderStatus.INCOMPLETE.value)
            )
            for line in lines:
                self.db.execute(
                    "INSERT INTO ItemsInOrder(orderID, itemName, quantity) VALUES(?, ?, ?);",
                    (order_id, line.item_name, line.quantity)
                )
        logger.info(f"order #{order_id} placed by {login}: {len(lines)} lines, total {total:.2f}")
        cprint(f"Order #{order_id} confirmed! Thank you for your purchase.", "green")
        return order_id

    # history
    def _history_target(self, login: str, prompt: str) -> str:
        """customers see themselves; drivers and managers pick any existing login"""
        role = self.account_manager.current_role(login)
        if role is Role.CUSTOMER:
            return login
        if role in PRIVILEGED:
            target = self.console.read(prompt)
            if not self.account_manager.user_exists(target):
                raise ValidationError("Invalid login. Exiting view order history.")
            return target
        raise ValidationError("Invalid role assignment. Exiting view order history.")

    @reports_errors("viewing all orders")
    def view_all_orders(self, login: str):
        target = self._history_target(login, "Enter the login of the user to view their order history: ")
        print_orders(self.fetch_orders(target), f"{target}'s order history:")

    @reports_errors("viewing recent orders")
    def view_recent_orders(self, login: str):
        target = self._history_target(login, "Enter the login of the user to view their recent orders: ")
        print_orders(self.fetch_orders(target, limit=RECENT_ORDER_LIMIT),
                     f"{target}'s {RECENT_ORDER_LIMIT} most recent orders:")

    @reports_errors("viewing order info")
    def view_order_info(self, login: str):
        """header and lines of one order; customers only their own"""
        role = self.account_manager.current_role(login)
        if role not in (Role.CUSTOMER, *PRIVILEGED):
            raise ValidationError("Invalid role assignment. Exiting view order info.")
        order_id = read_int(self.console, "Enter the orderID to view its details (or 'cancel'): ",
                            minimum=0, maximum=SQL_INT_MAX)
        if order_id is None:
            return
        order = self.fetch_order(order_id, login=login if role is Role.CUSTOMER else None)
        if order is None:
            raise ValidationError("Invalid orderID. Exiting view order info.")
        print_order_info(order, self.fetch_order_lines(order.id))

    @reports_errors("viewing stores")
    def view_stores(self):
        stores = self.fetch_stores()
        if not stores:
            cprint("No stores found.", "yellow")
            return
        print_stores(stores)

    @reports_errors("updating order status")
    def update_order_status(self, login: str) -> OrderStatus | None:
        """drivers and managers flip an order between incomplete and complete"""
        self.account_manager.require_role(login, *PRIVILEGED)
        order_id = read_int(self.console,
                            "Enter the orderID of the order whose status you wish to update (or 'cancel'): ",
                            minimum=0, maximum=SQL_INT_MAX)
        if order_id is None:
            return None
        order = self.fetch_order(order_id)
        if order is None:
            raise ValidationError("Invalid orderID. Exiting update order status.")
        current = OrderStatus.COMPLETE if order.status.lower() == OrderStatus.COMPLETE.value else OrderStatus.INCOMPLETE
        new_status = current.toggled()
        self.db.execute("UPDATE FoodOrder SET orderStatus=? WHERE orderID=?;", (new_status.value, order.id))
        logger.info(f"{login} set order #{order.id} to {new_status.value}")
        cprint(f"OrderID {order.id}'s status has been changed to {colored(new_status.value, 'yellow')}.", "green")
        return new_status
