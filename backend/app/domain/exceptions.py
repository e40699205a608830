"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class UnsupportedOperationError(Exception):
    """Raised when the active storage backend lacks a capability.

    Backends implement the full repository port; capabilities they do not
    provide raise this instead of being silently missing.
    """

    def __init__(self, capability: str, backend: str = "storage backend"):
        self.capability = capability
        self.backend = backend
        super().__init__(f"{backend} does not support '{capability}'")


class StorageTimeoutError(Exception):
    """Raised when a storage call does not finish within the configured timeout."""

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"Storage operation timed out after {timeout:.1f}s")
