from termcolor import cprint

from pizzastore.accounts import AccountManager
from pizzastore.database import Database
from pizzastore.display import print_items, print_menu
from pizzastore.errors import ValidationError
from pizzastore.helpers import Console, parse_item_types, read_choice, read_price, reports_errors
from pizzastore.logger import logger
from pizzastore.models import Item, ItemType, Role

ITEM_COLUMNS = "itemName, ingredients, typeOfItem, price, description"

# choice -> (label, filter by type, filter by price, order by price descending)
VIEW_MODES = {
    1: ("Unfiltered display of all items", False, False, None),
    2: ("Filter display based on type", True, False, None),
    3: ("Filter display based on price (highest->lowest)", False, True, True),
    4: ("Filter display based on price (lowest->highest)", False, True, False),
    5: ("Filter display based on both type and price (highest->lowest)", True, True, True),
    6: ("Filter display based on both type and price (lowest->highest)", True, True, False),
}
EXIT_VIEW_MENU = 7


def build_menu_query(types: list[str] | None = None, max_price: float | None = None,
                     descending: bool | None = None) -> tuple[str, list]:
    """assemble the one parameterized select every menu view uses"""
    clauses, params = [], []
    if types:
        clauses.append(f"lower(typeOfItem) IN ({', '.join('?' for _ in types)})")
        params += types
    if max_price is not None:
        clauses.append("price <= ?")
        params.append(max_price)
    sql = f"SELECT {ITEM_COLUMNS} FROM Items"
    if clauses:
        sql += " WHERE " + " AND ".join(clauses)
    if descending is None:
        sql += " ORDER BY typeOfItem, itemName;"
    else:
        sql += f" ORDER BY price {'DESC' if descending else 'ASC'}, itemName;"
    return sql, params


def describe_filters(types: list[str] | None, max_price: float | None) -> str:
    parts = []
    if types:
        parts.append(f"Item type ({', '.join(types)})")
    if max_price is not None:
        parts.append(f"Price <= ${max_price:.2f}")
    return "Menu filtered by: " + ", ".join(parts) + ":" if parts else "Full menu:"


class MenuManager:
    """browse and maintain the item list"""
    def __init__(self, db: Database, console: Console, account_manager: AccountManager):
        self.db = db
        self.console = console
        self.account_manager = account_manager

    # queries
    def fetch_items(self, types: list[str] | None = None, max_price: float | None = None,
                    descending: bool | None = None) -> list[Item]:
        sql, params = build_menu_query(types, max_price, descending)
        return [Item.from_row(r) for r in self.db.query_rows(sql, params)]

    def get_item(self, name: str) -> Item | None:
        """exact-name lookup"""
        rows = self.db.query_rows(f"SELECT {ITEM_COLUMNS} FROM Items WHERE itemName=?;", (name,))
        return Item.from_row(rows[0]) if rows else None

    def find_item(self, text: str) -> Item | None:
        """case-insensitive partial match, preferring an exact name"""
        pattern = "%" + text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_") + "%"
        rows = self.db.query_rows(
            f"""--sql
            SELECT {ITEM_COLUMNS} FROM Items
            WHERE itemName LIKE ? ESCAPE '\\'
            ORDER BY lower(itemName) = lower(?) DESC, length(itemName), itemName
            LIMIT 1;
            """,
            (pattern, text)
        )
        return Item.from_row(rows[0]) if rows else None

    def _require_item(self, name: str) -> Item:
        item = self.get_item(name)
        if item is None:
            raise ValidationError(f"Item {name} does not exist. Exiting update menu.")
        return item

    # viewing
    def show_full_menu(self) -> int:
        return print_items(self.fetch_items(), "Full menu:", "The menu is currently empty.")

    @reports_errors("viewing menu")
    def view_menu(self) -> int | None:
        """pick a display mode and render matching items; returns rows rendered"""
        print_menu("How would you like the menu to be displayed?",
                   [(n, label) for n, (label, *_rest) in VIEW_MODES.items()] + [(EXIT_VIEW_MENU, "Exit view menu")])
        choice = read_choice(self.console)
        if choice == EXIT_VIEW_MENU:
            cprint("Exiting view menu.", "yellow")
            return 0
        if choice not in VIEW_MODES:
            cprint("Invalid choice. Exiting view menu.", "red")
            return 0
        _, by_type, by_price, descending = VIEW_MODES[choice]

        types = None
        if by_type:
            types = parse_item_types(self.console.read(
                "Enter food type to filter by (e.g., entree, drinks, sides). Separate with commas for multiple types: "
            ))
        max_price = None
        if by_price:
            max_price = read_price(self.console, "Enter the maximum price to filter by: ")
            if max_price is None:
                cprint("Exiting view menu.", "yellow")
                return 0

        items = self.fetch_items(types, max_price, descending)
        empty = "The menu is currently empty." if not (types or by_price) else "No items found for the specified filters."
        return print_items(items, describe_filters(types, max_price), empty)

    # maintenance
    @reports_errors("updating menu")
    def update_menu(self, login: str):
        """manager-only item maintenance"""
        self.account_manager.require_role(login, Role.MANAGER)
        print_menu("How would you like to update the menu?", [
            (1, "Add an item"),
            (2, "Remove an item"),
            (3, "Update an item's name"),
            (4, "Update an item's ingredients list"),
            (5, "Update an item's type"),
            (6, "Update an item's price"),
            (7, "Update an item's description"),
            (8, "Exit update menu"),
        ])
        choice = read_choice(self.console)
        if choice == 1:
            self._add_item()
        elif choice == 2:
            item = self._require_item(self.console.read("Enter the name of the item to be removed: "))
            self.db.execute("DELETE FROM Items WHERE itemName=?;", (item.name,))
            logger.info(f"{login} removed item {item.name}")
            cprint(f"Item {item.name} successfully removed from the menu.", "green")
        elif choice == 3:
            item = self._require_item(self.console.read("Enter the name of the item to be updated: "))
            new_name = self.console.read("Enter the new item name: ")
            if not new_name:
                raise ValidationError("Item name cannot be empty. Exiting update menu.")
            if self.get_item(new_name):
                raise ValidationError(
                    f"Invalid item name. There already exists an item with item name {new_name}. Exiting update menu."
                )
            self._set_field(item, "itemName", new_name)
            cprint(f"Successfully updated the name of item {item.name}!", "green")
        elif choice == 4:
            item = self._require_item(self.console.read("Enter the name of the item to update ingredients: "))
            ingredients = self.console.read(f"Enter the new ingredients for item {item.name}: ")
            self._set_field(item, "ingredients", ingredients)
            cprint(f"Successfully updated the ingredients of item {item.name}!", "green")
        elif choice == 5:
            item = self._require_item(self.console.read("Enter the name of the item to update type: "))
            new_type = self._read_item_type(f"Enter the new item type for item {item.name}: ")
            self._set_field(item, "typeOfItem", new_type)
            cprint(f"Successfully updated the type of item {item.name}!", "green")
        elif choice == 6:
            item = self._require_item(self.console.read("Enter the name of the item to update price: "))
            price = read_price(self.console, f"Enter the new price for item {item.name}: ")
            if price is None:
                cprint("Price unchanged. Exiting update menu.", "yellow")
                return
            self._set_field(item, "price", price)
            cprint(f"Successfully updated the price of item {item.name}!", "green")
        elif choice == 7:
            item = self._require_item(self.console.read("Enter the name of the item to update description: "))
            description = self.console.read(f"Enter the new description for item {item.name}: ")
            self._set_field(item, "description", description)
            cprint(f"Successfully updated the description of item {item.name}!", "green")
        elif choice == 8:
            cprint("Exiting update menu.", "yellow")
        else:
            cprint("Invalid choice. Exiting update menu.", "red")

    def _read_item_type(self, prompt: str) -> str:
        raw = self.console.read(prompt).lower()
        if raw not in {t.value for t in ItemType}:
            raise ValidationError(
                f"Invalid type entered: {raw}. Only 'entree', 'drinks', or 'sides' are allowed. Exiting update menu."
            )
        return raw

    def _add_item(self):
        name = self.console.read("Enter the name of the new item: ")
        if not name:
            raise ValidationError("Item name cannot be empty. Exiting update menu.")
        if self.get_item(name):
            raise ValidationError("Invalid item name. This item name already exists! Exiting update menu.")
        ingredients = self.console.read(f"Enter the ingredients for item {name}: ")
        item_type = self._read_item_type(f"Enter the item type for item {name} (entree, drinks, sides): ")
        price = read_price(self.console, f"Enter the price for item {name}: ")
        if price is None:
            cprint("Item not added. Exiting update menu.", "yellow")
            return
        description = self.console.read(f"Enter the description for item {name}: ")
        self.db.execute(
            f"INSERT INTO Items({ITEM_COLUMNS}) VALUES(?, ?, ?, ?, ?);",
            (name, ingredients, item_type, price, description)
        )
        logger.info(f"added item {name}")
        cprint(f"Successfully added new item {name} to the menu!!", "green")

    def _set_field(self, item: Item, column: str, value):
        """update one item column; column names come from this module only"""
        self.db.execute(f"UPDATE Items SET {column}=? WHERE itemName=?;", (value, item.name))
        logger.info(f"item {item.name}: {column} -> {value}")
