__all__ = ["PizzaStoreError", "ConnectivityError", "StoreError", "ValidationError", "AccessDenied",
           "UsageError"]


class PizzaStoreError(Exception):
    pass


# startup
class ConnectivityError(PizzaStoreError):
    pass


class UsageError(PizzaStoreError):
    pass


# store statement failures (bad sql, constraint violations)
class StoreError(PizzaStoreError):
    pass


# bad user input, conflicts, missing targets
class ValidationError(PizzaStoreError):
    pass


class AccessDenied(ValidationError):
    pass
