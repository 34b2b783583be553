from .entity_catalog import EntityCatalog, get_catalog
from .form_controller import FormController, SubmitResult
from .list_controller import ListController, ListView
from .record_service import RecordService
from .user_service import UserService, InvalidSortError

__all__ = [
    "EntityCatalog",
    "get_catalog",
    "FormController",
    "SubmitResult",
    "ListController",
    "ListView",
    "RecordService",
    "UserService",
    "InvalidSortError",
]
