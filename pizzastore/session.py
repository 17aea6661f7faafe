from typing import Callable

from termcolor import cprint

from pizzastore.accounts import AccountManager
from pizzastore.display import print_menu
from pizzastore.helpers import Console, read_choice
from pizzastore.logger import logger
from pizzastore.models import Identity


class Command:
    """bind a menu number to a handler"""
    def __init__(self, number: int, label: str, function: Callable, needs_login: bool = True):
        self.number = number
        self.label = label
        self._fn = function
        self.needs_login = needs_login

    def execute(self, identity: Identity | None):
        """call the handler, passing the acting login when it needs one"""
        if self.needs_login:
            return self._fn(identity.login)
        return self._fn()


class Session:
    """anonymous main menu plus the logged-in command menu"""
    CREATE_USER = 1
    LOG_IN = 2
    EXIT = 9
    LOG_OUT = 20

    def __init__(self, console: Console, account_manager: AccountManager, commands: list[Command]):
        self.console = console
        self.account_manager = account_manager
        self.commands = {c.number: c for c in commands}
        self.identity: Identity | None = None

    @property
    def authenticated(self) -> bool:
        return self.identity is not None

    def run(self):
        """loop until exit or end of input"""
        try:
            while self.step():
                pass
        except EOFError:
            print()
            logger.info("input closed, ending session")
        self.identity = None

    def step(self) -> bool:
        """draw the menu for the current state and handle one choice; false means exit"""
        if self.authenticated:
            self._user_menu_step()
            return True
        return self._main_menu_step()

    def _main_menu_step(self) -> bool:
        print_menu("MAIN MENU", [
            (self.CREATE_USER, "Create user"),
            (self.LOG_IN, "Log in"),
            (self.EXIT, "< EXIT"),
        ])
        choice = read_choice(self.console)
        if choice == self.CREATE_USER:
            self.account_manager.create_user()
        elif choice == self.LOG_IN:
            self.identity = self.account_manager.login()
        elif choice == self.EXIT:
            return False
        else:
            cprint("Unrecognized choice!", "red")
        return True

    def _user_menu_step(self):
        print_menu("MAIN MENU", [(c.number, c.label) for c in self.commands.values()]
                   + [(self.LOG_OUT, "Log out")])
        choice = read_choice(self.console)
        if choice == self.LOG_OUT:
            cprint(f"logged out {self.identity.login}", "green")
            logger.info(f"logout {self.identity.login}")
            self.identity = None
            return
        cmd = self.commands.get(choice)
        if cmd is None:
            cprint("Unrecognized choice!", "red")
            return
        cmd.execute(self.identity)
