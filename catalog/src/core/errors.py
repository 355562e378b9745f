class CatalogError(Exception):
    """Base class for every error the catalog raises on purpose."""


class ValidationFailure(CatalogError):
    def __init__(self, errors: dict[str, str]):
        super().__init__("validation failed")
        self.errors = errors


class RecordNotFoundError(CatalogError):
    def __init__(self, message: str = "record not found"):
        super().__init__(message)


class EditConflictError(CatalogError):
    def __init__(self, message: str = "edit conflict"):
        super().__init__(message)


class InvalidRuntimeFormat(CatalogError, ValueError):
    def __init__(self, message: str = "invalid runtime format"):
        super().__init__(message)


class BadRequestError(CatalogError):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PersistenceError(CatalogError):
    """The backing store failed (I/O, constraint, decode)."""


class StoreTimeoutError(PersistenceError):
    def __init__(self, operation: str, timeout: float):
        super().__init__(f"{operation} exceeded its {timeout}s deadline")
        self.operation = operation
        self.timeout = timeout
