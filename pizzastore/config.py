from dataclasses import dataclass
from pathlib import Path

from pizzastore.errors import UsageError

# constants
DB_HOST = "localhost"
LOG_LEVEL = "WARNING"
ORDER_ID_FLOOR = 10000
RECENT_ORDER_LIMIT = 5
SQL_INT_MAX = 2**63 - 1
DONE_SENTINEL = "done"
CANCEL_SENTINEL = "cancel"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

USAGE = "usage: pizzastore <dbname> <port> <user>"


@dataclass(frozen=True)
class ConnectionSettings:
    """where to find the database; port and user only label the connection for sqlite"""
    dbname: str
    port: int
    user: str
    host: str = DB_HOST

    @property
    def database_path(self) -> str:
        """sqlite file for dbname (adds .db when there is no suffix)"""
        if self.dbname == ":memory:" or Path(self.dbname).suffix:
            return self.dbname
        return f"{self.dbname}.db"

    @property
    def url(self) -> str:
        return f"sqlite:///{self.database_path}?host={self.host}&port={self.port}&user={self.user}"


def parse_args(argv: list[str]) -> ConnectionSettings:
    """build settings from exactly <dbname> <port> <user>"""
    if len(argv) != 3:
        raise UsageError(USAGE)
    dbname, port, user = argv
    if not port.isdigit():
        raise UsageError(f"port must be a number\n{USAGE}")
    return ConnectionSettings(dbname=dbname, port=int(port), user=user)
