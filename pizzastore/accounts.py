from termcolor import cprint, colored

from pizzastore.database import Database
from pizzastore.display import print_menu, print_profile
from pizzastore.errors import AccessDenied, ValidationError
from pizzastore.helpers import Console, is_valid_phone_number, read_choice, reports_errors
from pizzastore.logger import logger
from pizzastore.models import Identity, Role, User

PHONE_FORMAT_HINT = "Invalid phone number format. Use format xxx-xxx-xxxx."


class AccountManager:
    """accounts, credentials and role checks (plain text passwords, compared by the store)"""
    def __init__(self, db: Database, console: Console):
        self.db = db
        self.console = console

    # lookups
    def fetch_user(self, login: str) -> User | None:
        rows = self.db.query_rows(
            "SELECT login, role, favoriteItems, phoneNum FROM Users WHERE login=?;",
            (login,)
        )
        return User.from_row(rows[0]) if rows else None

    def user_exists(self, login: str) -> bool:
        """check if login exists"""
        return self.db.query_count("SELECT 1 FROM Users WHERE login=?;", (login,)) > 0

    def current_role(self, login: str) -> Role | None:
        """re-read the role from the store; never trust the session copy"""
        user = self.fetch_user(login)
        if user is None:
            raise ValidationError("User not found.")
        return user.role

    def require_role(self, login: str, *allowed: Role) -> Role:
        """guard for privileged actions"""
        role = self.current_role(login)
        if role not in allowed:
            names = " or ".join(r.value for r in allowed)
            logger.info(f"access denied for {login} (needs {names})")
            raise AccessDenied(f"Invalid role access: {names} privileges required.")
        return role

    # anonymous actions
    @reports_errors("creating user")
    def create_user(self) -> bool:
        """create a customer account"""
        login = self.console.read("Enter login: ")
        password = self.console.read("Enter password: ")
        phone = self.console.read("Enter phone number (format xxx-xxx-xxxx): ")
        if not (login and password and phone):
            raise ValidationError("All fields are required. Exiting create user.")
        if not is_valid_phone_number(phone):
            raise ValidationError(f"{PHONE_FORMAT_HINT} Exiting create user.")
        if self.user_exists(login):
            raise ValidationError("login already taken. Exiting create user.")
        self.db.execute(
            """--sql
            INSERT INTO Users(login, password, role, favoriteItems, phoneNum) VALUES(?, ?, ?, NULL, ?);
            """,
            (login, password, Role.CUSTOMER.value, phone)
        )
        logger.info(f"created user {login}")
        cprint("User created successfully!", "green")
        return True

    @reports_errors("logging in")
    def login(self) -> Identity | None:
        """one credential check; identity on success"""
        login = self.console.read("Enter login: ")
        password = self.console.read("Enter password: ")
        rows = self.db.query_rows(
            "SELECT login, role FROM Users WHERE login=? AND password=?;",
            (login, password)
        )
        if not rows:
            cprint("Invalid login or password.", "red")
            return None
        identity = Identity(rows[0][0], Role.parse(rows[0][1]))
        role = identity.role.value if identity.role else "unknown"
        prefix = f"{role}: " if identity.role is not Role.CUSTOMER else ""
        logger.info(f"login {identity.login} ({role})")
        cprint(f"Login successful! logged in as {prefix}{colored(identity.login, 'yellow', attrs=['bold'])}", "green")
        return identity

    # profile
    @reports_errors("viewing profile")
    def view_profile(self, login: str):
        user = self.fetch_user(login)
        if user is None:
            raise ValidationError("User not found.")
        print_profile(user)

    @reports_errors("updating profile")
    def update_profile(self, login: str):
        """change favorite item, phone number or password"""
        print_menu("Please choose what you would like to update:", [
            (1, "Update Favorite Item"),
            (2, "Update Phone Number"),
            (3, "Update Password"),
            (4, "Exit update profile"),
        ])
        choice = read_choice(self.console)
        if choice == 1:
            favorite = self.console.read("Enter new Favorite Item: ")
            self._set_field(login, "favoriteItems", favorite or None)
            cprint("Favorite Item updated successfully!", "green")
        elif choice == 2:
            phone = self.console.read("Enter new Phone Number (format xxx-xxx-xxxx): ")
            if not is_valid_phone_number(phone):
                raise ValidationError(f"{PHONE_FORMAT_HINT}\nExiting update profile.")
            self._set_field(login, "phoneNum", phone)
            cprint("Phone Number updated successfully!", "green")
        elif choice == 3:
            password = self.console.read("Enter new Password: ")
            if not password:
                raise ValidationError("Password cannot be empty. Exiting update profile.")
            self._set_field(login, "password", password)
            cprint("Password updated successfully!", "green")
        elif choice == 4:
            cprint("Exiting update profile.", "yellow")
        else:
            cprint("Invalid choice. Exiting update profile.", "red")

    def _set_field(self, login: str, column: str, value: str | None):
        """update one profile column; column names come from this module only"""
        self.db.execute(f"UPDATE Users SET {column}=? WHERE login=?;", (value, login))
        logger.info(f"{login} updated {column}")

    # manager actions
    @reports_errors("updating user")
    def update_user(self, login: str):
        """manager edits another account's login or role, or their own profile"""
        self.require_role(login, Role.MANAGER)
        target = self.console.read(f"Hello manager {login}, which account would you like to update? ")
        user = self.fetch_user(target)
        if user is None:
            raise ValidationError("Invalid login. Exiting update user.")
        cprint("Account found. Continuing with update profile.", "green")

        if target.lower() == login.lower():
            self.update_profile(login)
            return

        print_menu("Please choose what you would like to update:", [
            (1, "Update Login"),
            (2, "Update Role"),
            (3, "Exit update user"),
        ])
        choice = read_choice(self.console)
        if choice == 1:
            new_login = self.console.read("Enter new Login: ")
            if not new_login:
                raise ValidationError("Login cannot be empty. Exiting update user.")
            if self.user_exists(new_login):
                raise ValidationError("The new login already exists. Logins must be unique. Exiting update user.")
            self.db.execute("UPDATE Users SET login=? WHERE login=?;", (new_login, user.login))
            logger.info(f"{login} renamed {user.login} to {new_login}")
            cprint("Login updated successfully!", "green")
        elif choice == 2:
            raw = self.console.read("Enter new Role (customer, driver, manager): ")
            new_role = Role.parse(raw)
            if new_role is None:
                raise ValidationError("Invalid role assignment. Role has not been changed. Exiting update user.")
            if new_role is user.role:
                raise ValidationError(
                    f"'{user.login}' has already been assigned the '{new_role.value}' role. "
                    "Role has not been changed. Exiting update user."
                )
            self.db.execute("UPDATE Users SET role=? WHERE login=?;", (new_role.value, user.login))
            logger.info(f"{login} set role of {user.login} to {new_role.value}")
            cprint("Role updated successfully!", "green")
        elif choice == 3:
            cprint("Exiting update user.", "yellow")
        else:
            cprint("Invalid choice. Exiting update user.", "red")
