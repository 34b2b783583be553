from .record import Record, Identifier
from .stored_record import StoredRecord
from .user import User
from .entity_config import (
    EntityConfig,
    EventWindow,
    FieldKind,
    FieldSpec,
    Transition,
    WINDOW_ALIASES,
)

__all__ = [
    "Record",
    "Identifier",
    "StoredRecord",
    "User",
    "EntityConfig",
    "EventWindow",
    "FieldKind",
    "FieldSpec",
    "Transition",
    "WINDOW_ALIASES",
]
