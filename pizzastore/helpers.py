import functools
import math
from typing import Callable

from termcolor import cprint, colored

from pizzastore.config import CANCEL_SENTINEL
from pizzastore.errors import StoreError, ValidationError
from pizzastore.logger import log_exception
from pizzastore.models import ItemType


class Console:
    """line reader handed to every handler so tests can script the keyboard"""
    def __init__(self, reader: Callable[[str], str] = input):
        self._reader = reader

    def read(self, prompt: str, color: str = "magenta") -> str:
        """prompt and return the stripped line (eof propagates)"""
        return self._reader(colored(prompt, color)).strip()


def safe_int(value: str, minimum: int | None = None):
    """return int value or none if invalid / below minimum"""
    try:
        v = int(value)
        if minimum is not None and v < minimum:
            return None
        return v
    except ValueError:
        return None


def read_int(console: Console, prompt: str, minimum: int | None = None, maximum: int | None = None,
             cancellable: bool = True) -> int | None:
    """keep asking until an int in range is typed; none if the user cancels"""
    while True:
        raw = console.read(prompt)
        if cancellable and raw.lower() == CANCEL_SENTINEL:
            return None
        value = safe_int(raw, minimum)
        if value is not None and (maximum is None or value <= maximum):
            return value
        cprint("Your input is invalid!", "red")


def read_choice(console: Console) -> int:
    """menu selection; never cancels"""
    return read_int(console, "Please make your choice: ", cancellable=False)


def is_valid_phone_number(phone: str) -> bool:
    """exactly ddd-ddd-dddd"""
    if len(phone) != 12:
        return False
    for i, ch in enumerate(phone):
        if i in (3, 7):
            if ch != "-":
                return False
        elif ch not in "0123456789":
            return False
    return True


def parse_price(text: str) -> float:
    """non-negative finite number or ValidationError"""
    try:
        value = float(text)
    except ValueError:
        raise ValidationError(f"invalid price: {text!r}") from None
    if not math.isfinite(value) or value < 0:
        raise ValidationError(f"invalid price: {text!r}")
    return value


def read_price(console: Console, prompt: str) -> float | None:
    """keep asking until a valid price is typed; none if the user cancels"""
    while True:
        raw = console.read(prompt)
        if raw.lower() == CANCEL_SENTINEL:
            return None
        try:
            return parse_price(raw)
        except ValidationError as e:
            cprint(f"{e}, please try again (or '{CANCEL_SENTINEL}')", "red")


def parse_item_types(text: str) -> list[str]:
    """split comma separated item types; any unknown token rejects the whole list"""
    allowed = {t.value for t in ItemType}
    types = [t.strip().lower() for t in text.split(",") if t.strip()]
    if not types:
        raise ValidationError("no item type entered. Exiting view menu.")
    for t in types:
        if t not in allowed:
            raise ValidationError(
                f"Invalid type entered: {t}. Only 'entree', 'drinks', or 'sides' are allowed. Exiting view menu."
            )
    return types


def parse_boolean_input(prompt: str, handle_invalid: bool = False) -> bool:
    """parse y/n style input; optionally warn on invalid"""
    p = prompt.lower().strip()
    if p in ("y", "yes"):
        return True
    if p in ("n", "no"):
        return False
    if handle_invalid:
        cprint("invalid input, please try again.", "red")
    return False


def reports_errors(action: str):
    """report validation and store failures at the handler boundary and keep the session alive"""
    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except ValidationError as e:
                cprint(str(e), "red")
            except StoreError as e:
                log_exception(e, msg=f"{fn.__name__} failed: ")
                cprint(f"error while {action}: {e}", "red")
            return None
        return wrapper
    return decorator
