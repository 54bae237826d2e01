"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class ValidationError(Exception):
    """Raised when input is rejected before any remote call is made."""

    def __init__(self, message: str, field: str | None = None):
        self.message = message
        self.field = field
        super().__init__(message)


class DataServiceError(Exception):
    """Raised when the data service or object storage fails an operation.

    Backend-agnostic — wraps database drivers and storage adapters alike.
    """

    def __init__(self, operation: str, target: str, message: str):
        self.operation = operation
        self.target = target
        self.message = message
        super().__init__(f"{operation} on '{target}' failed: {message}")


class RecordLoadError(Exception):
    """Raised when the primary query of an entity store load fails."""

    def __init__(self, table: str, cause: Exception):
        self.table = table
        self.cause = cause
        super().__init__(f"Failed to load '{table}': {cause}")


class WriteInProgressError(Exception):
    """Raised when a write starts while another write on the same target is pending."""

    def __init__(self, target: str):
        self.target = target
        super().__init__(f"Another change to '{target}' is still being saved")
