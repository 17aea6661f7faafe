import signal
import sys

from termcolor import cprint
from colorama import just_fix_windows_console as enable_windows_ansi_interpretation

from pizzastore.accounts import AccountManager
from pizzastore.config import ConnectionSettings, parse_args
from pizzastore.database import Database
from pizzastore.errors import ConnectivityError, UsageError
from pizzastore.helpers import Console
from pizzastore.logger import logger
from pizzastore.menu import MenuManager
from pizzastore.orders import OrderManager
from pizzastore.session import Command, Session

EXIT_OK = 0
EXIT_CONNECTION_FAILED = 1
EXIT_USAGE = 2


def build_session(db: Database, console: Console) -> Session:
    """wire managers and the logged-in command menu"""
    account_manager = AccountManager(db, console)
    menu_manager = MenuManager(db, console, account_manager)
    order_manager = OrderManager(db, console, account_manager, menu_manager)
    commands = [
        Command(1, "View Profile", account_manager.view_profile),
        Command(2, "Update Profile", account_manager.update_profile),
        Command(3, "View Menu", menu_manager.view_menu, needs_login=False),
        Command(4, "Place Order", order_manager.place_order),
        Command(5, "View Full Order ID History", order_manager.view_all_orders),
        Command(6, "View Past 5 Order IDs", order_manager.view_recent_orders),
        Command(7, "View Order Information", order_manager.view_order_info),
        Command(8, "View Stores", order_manager.view_stores, needs_login=False),
        # drivers & managers
        Command(9, "Update Order Status", order_manager.update_order_status),
        # managers
        Command(10, "Update Menu", menu_manager.update_menu),
        Command(11, "Update User", account_manager.update_user),
    ]
    return Session(console, account_manager, commands)


def connect(settings: ConnectionSettings) -> Database:
    print("Connecting to database...", end="")
    print(f"Connection URL: {settings.url}\n")
    db = Database(settings.database_path)
    cprint("Done", "green")
    logger.info(f"connected to {settings.url}")
    return db


def run(settings: ConnectionSettings, console: Console) -> int:
    """connect, run the session, always disconnect"""
    try:
        db = connect(settings)
    except ConnectivityError as e:
        cprint(f"Error - Unable to Connect to Database: {e}", "red", file=sys.stderr)
        print("Make sure the database path is reachable from this machine")
        return EXIT_CONNECTION_FAILED

    try:
        greeting()
        build_session(db, console).run()
    finally:
        print("Disconnecting from database...", end="")
        db.close()
        print("Done\n\nBye !")
    return EXIT_OK


def greeting():
    cprint("""
*******************************************************
         welcome to the pizza store 🍕
*******************************************************
    """, "green", attrs=["bold"])
    print("numbered menus throughout; type 'cancel' at a number prompt inside a command to back out.")


# signal handler
class SignalHandler:
    """ctrl+c leaves through SystemExit so the connection still closes"""
    @staticmethod
    def sigint(_, __):
        """handle ctrl+c"""
        cprint("\nnext time, use exit!", "yellow")
        sys.exit(EXIT_OK)


# entry point
def main(argv: list[str] | None = None) -> int:
    """entrypoint wrapper"""
    if argv is None:
        argv = sys.argv[1:]
    try:
        settings = parse_args(argv)
    except UsageError as e:
        cprint(str(e), "red", file=sys.stderr)
        return EXIT_USAGE
    enable_windows_ansi_interpretation()
    signal.signal(signal.SIGINT, SignalHandler.sigint)
    return run(settings, Console())


if __name__ == "__main__":
    raise SystemExit(main())
