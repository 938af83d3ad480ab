class DomainError(Exception):
    def __init__(self, code: str, message: str, details: dict | None = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class NotFoundError(DomainError):
    def __init__(self, entity: str, message: str | None = None, details: dict | None = None):
        code = f"NF_{entity.upper()}_001"
        msg = message or f"{entity} not found"
        super().__init__(code, msg, details)


class ValidationError(DomainError):
    def __init__(self, field: str, message: str, details: dict | None = None):
        code = f"VAL_{field.upper()}_001"
        msg = f"Validation failed for {field}: {message}"
        self.field = field
        super().__init__(code, msg, details or {"field": field})


class PersistenceError(DomainError):
    """A backend write or read was rejected or the connection failed."""

    def __init__(self, operation: str, message: str | None = None, details: dict | None = None):
        code = f"PERSIST_{operation.upper()}_001"
        msg = message or f"Failed to {operation.replace('_', ' ')}"
        self.operation = operation
        super().__init__(code, msg, details or {"operation": operation})


class ConflictError(DomainError):
    def __init__(self, message: str, code: str = "CF_001", details: dict | None = None):
        super().__init__(code, message, details)
