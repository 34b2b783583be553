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


class RecordValidationError(Exception):
    """Raised when submitted field values fail the entity's field rules."""

    def __init__(self, entity_type: str, errors: dict[str, str]):
        self.entity_type = entity_type
        self.errors = errors
        super().__init__(f"Invalid {entity_type}: {', '.join(sorted(errors))}")


class UnsupportedOperationError(Exception):
    """Raised when an entity has no window, lookup or transition with the given name."""

    def __init__(self, entity_type: str, operation: str):
        self.entity_type = entity_type
        self.operation = operation
        super().__init__(f"{entity_type} does not support '{operation}'")


class InvalidTransitionError(Exception):
    """Raised when a status transition is requested from a status it does not start at."""

    def __init__(self, entity_type: str, action: str, current: object):
        self.entity_type = entity_type
        self.action = action
        self.current = current
        super().__init__(f"Cannot {action} {entity_type} in status '{current}'")


class GatewayError(Exception):
    """Raised when a REST call made by an HttpGateway fails.

    ``status_code`` is None when no usable response was received: transport
    failures (connection refused, timeouts) or an undecodable body.
    """

    def __init__(self, entity_type: str, status_code: int | None, message: str):
        self.entity_type = entity_type
        self.status_code = status_code
        self.message = message
        super().__init__(f"[{entity_type}] {status_code or 'network'}: {message}")
