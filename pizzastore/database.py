import sqlite3
from contextlib import contextmanager
from typing import Iterator, Sequence

from pizzastore.errors import ConnectivityError, StoreError
from pizzastore.logger import logger, log_message

Params = Sequence[object]

SEED_ITEMS = [
    # itemName, ingredients, typeOfItem, price, description
    ("Pepperoni", "dough, tomato sauce, mozzarella, pepperoni", "entree", 21.00, "the classic"),
    ("Chicken Supreme", "dough, tomato sauce, chicken, capsicum, onion", "entree", 23.50, "loaded with chicken"),
    ("BBQ Meatlovers", "dough, bbq sauce, beef, bacon, ham, sausage", "entree", 25.50, "for the hungry"),
    ("Veg Supreme", "dough, tomato sauce, mushroom, capsicum, olives", "entree", 22.50, "garden on a crust"),
    ("Hawaiian", "dough, tomato sauce, ham, pineapple", "entree", 19.00, "yes, pineapple"),
    ("Margherita", "dough, tomato sauce, mozzarella, basil", "entree", 18.50, "simple and fresh"),
    ("Garlic Bread", "bread, garlic butter, parsley", "sides", 6.50, "warm and buttery"),
    ("Potato Wedges", "potato, seasoning, sour cream", "sides", 7.00, "crispy wedges"),
    ("Cola", "carbonated water, sugar, caramel", "drinks", 3.50, "375ml can"),
    ("Lemonade", "lemon, sugar, water", "drinks", 4.00, "freshly squeezed"),
]

SEED_STORES = [
    # storeID, address, city, state, isOpen, reviewScore
    (1, "12 Crust Lane", "Riverside", "CA", 1, 4.5),
    (2, "400 Oven Road", "Pasadena", "CA", 1, 3.9),
    (3, "7 Dough Street", "Irvine", "CA", 0, 4.1),
]


class Database:
    """own the sqlite connection, schema and seed data; the only place sql runs"""
    def __init__(self, path: str):
        self.path = path
        self.conn = None
        try:
            self.conn = sqlite3.connect(path)
            self.conn.autocommit = True
            self.conn.execute("--sql\nPRAGMA foreign_keys=ON;")
            self._create_schema()
            self._seed()
        except sqlite3.Error as e:
            if self.conn is not None:
                self.conn.close()
            raise ConnectivityError(str(e)) from e
        self._closed = False

    def _create_schema(self):
        """create tables if missing"""
        self.conn.executescript(
            """--sql
            CREATE TABLE IF NOT EXISTS Users (
                login TEXT PRIMARY KEY,
                password TEXT NOT NULL, -- plain text, compared by the store
                role TEXT NOT NULL DEFAULT 'customer',
                favoriteItems TEXT,
                phoneNum TEXT NOT NULL
            );
            CREATE TABLE IF NOT EXISTS Items (
                itemName TEXT PRIMARY KEY,
                ingredients TEXT NOT NULL DEFAULT '',
                typeOfItem TEXT NOT NULL,
                price REAL NOT NULL CHECK (price >= 0),
                description TEXT NOT NULL DEFAULT ''
            );
            CREATE TABLE IF NOT EXISTS Store (
                storeID INTEGER PRIMARY KEY,
                address TEXT NOT NULL,
                city TEXT NOT NULL,
                state TEXT NOT NULL,
                isOpen INTEGER NOT NULL DEFAULT 1,
                reviewScore REAL
            );
            CREATE TABLE IF NOT EXISTS FoodOrder (
                orderID INTEGER PRIMARY KEY,
                login TEXT NOT NULL,
                storeID INTEGER NOT NULL,
                totalPrice REAL NOT NULL,
                orderTimestamp TEXT NOT NULL,
                orderStatus TEXT NOT NULL DEFAULT 'incomplete',
                FOREIGN KEY(login) REFERENCES Users(login) ON UPDATE CASCADE,
                FOREIGN KEY(storeID) REFERENCES Store(storeID)
            );
            CREATE TABLE IF NOT EXISTS ItemsInOrder (
                orderID INTEGER NOT NULL,
                itemName TEXT NOT NULL,
                quantity INTEGER NOT NULL CHECK (quantity > 0),
                PRIMARY KEY(orderID, itemName),
                FOREIGN KEY(orderID) REFERENCES FoodOrder(orderID) ON DELETE CASCADE,
                FOREIGN KEY(itemName) REFERENCES Items(itemName) ON UPDATE CASCADE
            );
            """
        )

    def _seed(self):
        """seed menu and stores into empty tables, and the default manager"""
        if not self.conn.execute("SELECT 1 FROM Items LIMIT 1;").fetchone():
            self.conn.executemany(
                """--sql
                INSERT INTO Items(itemName, ingredients, typeOfItem, price, description) VALUES(?, ?, ?, ?, ?);
                """,
                SEED_ITEMS
            )
        if not self.conn.execute("SELECT 1 FROM Store LIMIT 1;").fetchone():
            self.conn.executemany(
                """--sql
                INSERT INTO Store(storeID, address, city, state, isOpen, reviewScore) VALUES(?, ?, ?, ?, ?, ?);
                """,
                SEED_STORES
            )
        self.conn.execute(
            """--sql
            INSERT OR IGNORE INTO Users(login, password, role, favoriteItems, phoneNum)
            VALUES (?, ?, 'manager', NULL, ?);
            """,
            ("manager", "manager", "000-000-0000")
        )

    # gateway
    def execute(self, statement: str, params: Params = ()):
        """run an insert / update / delete"""
        log_message("execute", statement.strip(), params)
        try:
            self.conn.execute(statement, params)
        except (sqlite3.Error, OverflowError) as e:
            raise StoreError(str(e)) from e

    def query_rows(self, query: str, params: Params = ()) -> list[tuple[str | None, ...]]:
        """return rows as tuples of text in select-list order (null stays none)"""
        log_message("query", query.strip(), params)
        try:
            rows = self.conn.execute(query, params).fetchall()
        except (sqlite3.Error, OverflowError) as e:
            raise StoreError(str(e)) from e
        return [tuple(None if v is None else str(v) for v in row) for row in rows]

    def query_count(self, query: str, params: Params = ()) -> int:
        """number of rows the query matches"""
        return len(self.query_rows(query, params))

    @contextmanager
    def transaction(self) -> Iterator["Database"]:
        """group statements; roll everything back if any of them fails"""
        self.execute("BEGIN;")
        try:
            yield self
            self.execute("COMMIT;")
        except BaseException:
            if self.conn.in_transaction:
                self.conn.execute("ROLLBACK;")
            logger.warning("transaction rolled back")
            raise

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self):
        """close the connection once; later calls do nothing"""
        if self._closed:
            return
        self._closed = True
        self.conn.close()
