from dataclasses import dataclass
from enum import Enum
from typing import Sequence

Row = Sequence[str | None]


class Role(Enum):
    """who is acting; gates the privileged commands"""
    CUSTOMER = "customer"
    DRIVER = "driver"
    MANAGER = "manager"

    @classmethod
    def parse(cls, value: str | None) -> "Role | None":
        """case-insensitive lookup, none for unknown tokens"""
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return None


class ItemType(Enum):
    ENTREE = "entree"
    DRINKS = "drinks"
    SIDES = "sides"


class OrderStatus(Enum):
    INCOMPLETE = "incomplete"
    COMPLETE = "complete"

    def toggled(self) -> "OrderStatus":
        """incomplete <-> complete"""
        if self is OrderStatus.INCOMPLETE:
            return OrderStatus.COMPLETE
        return OrderStatus.INCOMPLETE


def _to_bool(value: str | None) -> bool:
    return (value or "").strip().lower() in ("1", "t", "true", "yes")


@dataclass
class Identity:
    """the logged-in login and the role it had at login time"""
    login: str
    role: Role | None


@dataclass
class User:
    login: str
    role: Role | None
    favorite_item: str | None
    phone_number: str

    @classmethod
    def from_row(cls, row: Row) -> "User":
        """row order: login, role, favoriteItems, phoneNum"""
        return cls(row[0], Role.parse(row[1]), row[2], row[3] or "")


@dataclass
class Item:
    name: str
    ingredients: str
    type: str
    price: float
    description: str

    @classmethod
    def from_row(cls, row: Row) -> "Item":
        """row order: itemName, ingredients, typeOfItem, price, description"""
        return cls(row[0], row[1] or "", row[2] or "", float(row[3] or 0), row[4] or "")


@dataclass
class Store:
    id: str
    address: str
    city: str
    state: str
    is_open: bool
    review_score: float | None

    @classmethod
    def from_row(cls, row: Row) -> "Store":
        """row order: storeID, address, city, state, isOpen, reviewScore"""
        score = float(row[5]) if row[5] is not None else None
        return cls(row[0], row[1] or "", row[2] or "", row[3] or "", _to_bool(row[4]), score)


@dataclass
class Order:
    id: int
    login: str
    store_id: str
    total_price: float
    timestamp: str
    status: str

    @classmethod
    def from_row(cls, row: Row) -> "Order":
        """row order: orderID, login, storeID, totalPrice, orderTimestamp, orderStatus"""
        return cls(int(row[0]), row[1] or "", row[2] or "", float(row[3] or 0), row[4] or "", row[5] or "")


@dataclass
class OrderLine:
    item_name: str
    quantity: int
    unit_price: float = 0.0

    @classmethod
    def from_row(cls, row: Row) -> "OrderLine":
        """row order: itemName, quantity"""
        return cls(row[0], int(row[1]))

    @property
    def subtotal(self) -> float:
        return self.unit_price * self.quantity
