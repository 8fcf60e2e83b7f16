"""Exceptions raised by factory-helper."""


class FactoryHelperError(Exception):
    """Base class for all factory-helper errors."""


class IntrospectionError(FactoryHelperError):
    """Reflecting a model's table failed."""

    def __init__(self, table: str, message: str):
        self.table = table
        super().__init__(f"Could not reflect table '{table}': {message}")


class PersistenceError(FactoryHelperError):
    """Writing the generated factories module failed."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"Failed to write model factories to {path}: {message}")
