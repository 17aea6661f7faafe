from typing import Iterable

from termcolor import cprint, colored

from pizzastore.models import Item, Order, OrderLine, Store, User

RULE = "*" * 55


def rule():
    print(RULE)


def color_money(amount: float) -> str:
    """format amount as green money string"""
    return colored(f"${amount:.2f}", "green")


def print_items(items: list[Item], heading: str, empty_message: str) -> int:
    """render menu rows; returns how many were printed"""
    if not items:
        cprint(empty_message, "yellow")
        return 0
    cprint(heading, None, attrs=["bold"])
    rule()
    for item in items:
        print(f"({colored('Item type: ' + item.type, 'cyan')}) {colored(item.name, 'yellow', attrs=['bold'])}"
              f" - {color_money(item.price)}")
        print(f"\tDescription: {item.description}")
        print(f"\t\tIngredients: {item.ingredients}")
    rule()
    return len(items)


def print_orders(orders: Iterable[Order], heading: str):
    """render order history rows"""
    orders = list(orders)
    if not orders:
        cprint("No orders found.", "yellow")
        return
    cprint(heading, "green", attrs=["bold"])
    print("Order ID\t| Store ID\t| Total Price\t| Order Timestamp\t| Order Status")
    rule()
    for o in orders:
        print(f"{o.id}\t\t| {o.store_id}\t\t| {color_money(o.total_price)}\t\t| {o.timestamp}\t| {o.status}")
    rule()


def print_order_info(order: Order, lines: list[OrderLine]):
    """render one order header and its line items"""
    cprint(f"order #{order.id}", "green", attrs=["bold"])
    print("Order Timestamp:", order.timestamp)
    print("Total Price:", color_money(order.total_price))
    print("Order Status:", order.status)
    rule()
    print("Items in this order:\n")
    print("Item Name\t| Quantity")
    rule()
    for line in lines:
        print(f"{line.item_name}\t| {line.quantity}")
    rule()


def print_stores(stores: list[Store], numbered: bool = False):
    """render stores, optionally as a 1-based pick list"""
    if not numbered:
        print("StoreID\t| Address\t| City\t| State\t| Open\t| Review Score")
        rule()
    for i, s in enumerate(stores, start=1):
        if numbered:
            print(f"{colored(str(i), 'light_blue')}. {s.address}, {s.city}, {s.state} (Store ID: {s.id})")
            continue
        score = f"{s.review_score:.1f}" if s.review_score is not None else "n/a"
        print(f"{s.id}\t| {s.address}\t| {s.city}\t| {s.state}\t| {'yes' if s.is_open else 'no'}\t| {score}")


def print_profile(user: User):
    cprint("Your profile information:", "green", attrs=["bold"])
    print("Favorite Item:", user.favorite_item or "No favorite item set")
    print("Phone Number:", user.phone_number)
    print("Role:", user.role.value if user.role else "unknown")


def print_menu(title: str, options: list[tuple[int, str]]):
    """numbered option list"""
    cprint(title, "green", attrs=["bold"])
    print("-" * len(title))
    for number, label in options:
        print(f"{colored(str(number), 'light_blue')}. {label}")
