"""Catalog entity endpoints — one CRUD router per served entity.

Every router follows the same path layout under the entity prefix:
``/list``, ``/search``, ``/add``, ``/edit/{id}``, ``/{id}`` plus the
entity's windows, lookups and status transitions.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import APIRouter, Body, Depends, Request, status
from fastapi.responses import JSONResponse

from churchapp.application.schemas import MessageResponse, ValidationErrorResponse
from churchapp.application.services import RecordService
from churchapp.domain.entities import WINDOW_ALIASES, EntityConfig, EventWindow, StoredRecord
from churchapp.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidTransitionError,
    RecordValidationError,
    UnsupportedOperationError,
)
from churchapp.infrastructure.dependencies import record_service_provider

logger = logging.getLogger(__name__)

_UNPROCESSABLE = 422

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    status.HTTP_404_NOT_FOUND: {"model": MessageResponse},
    status.HTTP_409_CONFLICT: {"model": MessageResponse},
    _UNPROCESSABLE: {"model": ValidationErrorResponse},
}


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=MessageResponse(message=message).model_dump(),
    )


async def _respond(
    service: RecordService,
    operation: Callable[[], Awaitable[Any]],
    status_code: int = status.HTTP_200_OK,
) -> Any:
    """Run a service call and map domain errors onto HTTP responses."""
    try:
        result = await operation()
    except EntityNotFoundError as e:
        return _message(status.HTTP_404_NOT_FOUND, str(e))
    except UnsupportedOperationError as e:
        return _message(status.HTTP_404_NOT_FOUND, str(e))
    except (DuplicateEntityError, InvalidTransitionError) as e:
        return _message(status.HTTP_409_CONFLICT, str(e))
    except RecordValidationError as e:
        return JSONResponse(
            status_code=_UNPROCESSABLE,
            content=ValidationErrorResponse(errors=e.errors).model_dump(),
        )

    if isinstance(result, StoredRecord):
        content: Any = service.present(result)
    elif isinstance(result, list):
        content = [service.present(r) for r in result]
    else:
        content = result
    return JSONResponse(status_code=status_code, content=content)


def build_records_router(config: EntityConfig) -> APIRouter:
    """Create the router serving ``config`` under its path prefix."""
    get_service = record_service_provider(config)
    router = APIRouter(
        prefix=config.prefix,
        tags=[config.plural.title()],
        responses=_ERROR_RESPONSES,
    )

    # Literal paths first; /{record_id:int} only matches numeric segments.

    @router.get("/list", summary=f"List {config.plural}")
    async def list_records(service: RecordService = Depends(get_service)):
        return await _respond(service, service.list_records)

    @router.get("/search", summary=f"Search {config.plural}")
    async def search_records(
        request: Request,
        service: RecordService = Depends(get_service),
    ):
        params = dict(request.query_params)
        return await _respond(service, lambda: service.search_records(params))

    for window in config.windows:
        _add_window_route(router, config, get_service, window.value, window)
    for alias, window in WINDOW_ALIASES.items():
        if window in config.windows:
            _add_window_route(router, config, get_service, alias, window)

    for lookup in config.lookups:
        _add_lookup_route(router, config, get_service, lookup)

    @router.post(
        "/add",
        status_code=status.HTTP_201_CREATED,
        summary=f"Add a {config.noun}",
    )
    async def add_record(
        values: dict[str, Any] = Body(...),
        service: RecordService = Depends(get_service),
    ):
        return await _respond(
            service, lambda: service.create_record(values), status.HTTP_201_CREATED
        )

    @router.put("/edit/{record_id:int}", summary=f"Update a {config.noun}")
    async def edit_record(
        record_id: int,
        values: dict[str, Any] = Body(...),
        service: RecordService = Depends(get_service),
    ):
        return await _respond(service, lambda: service.update_record(record_id, values))

    for action in config.transitions:
        _add_transition_route(router, config, get_service, action)

    @router.get("/{record_id:int}", summary=f"Get a {config.noun}")
    async def get_record(record_id: int, service: RecordService = Depends(get_service)):
        return await _respond(service, lambda: service.get_record(record_id))

    @router.delete("/{record_id:int}", summary=f"Delete a {config.noun}")
    async def delete_record(record_id: int, service: RecordService = Depends(get_service)):
        async def delete() -> dict[str, str]:
            await service.delete_record(record_id)
            logger.info("Deleted %s id=%s", config.noun, record_id)
            return MessageResponse(message=f"{config.label} deleted successfully.").model_dump()

        return await _respond(service, delete)

    return router


def _add_window_route(
    router: APIRouter,
    config: EntityConfig,
    get_service: Callable[..., Any],
    segment: str,
    window: EventWindow,
) -> None:
    @router.get(
        f"/{segment}",
        summary=f"List {window.value.replace('_', ' and ')} {config.plural}",
        include_in_schema=segment == window.value,
    )
    async def list_window(service: RecordService = Depends(get_service)):
        return await _respond(service, lambda: service.records_in_window(window))


def _add_lookup_route(
    router: APIRouter,
    config: EntityConfig,
    get_service: Callable[..., Any],
    name: str,
) -> None:
    @router.get(f"/{name}/{{value}}", summary=f"List {config.plural} by {name}")
    async def lookup_records(value: str, service: RecordService = Depends(get_service)):
        return await _respond(service, lambda: service.lookup_records(name, value))


def _add_transition_route(
    router: APIRouter,
    config: EntityConfig,
    get_service: Callable[..., Any],
    action: str,
) -> None:
    @router.post(f"/{action}/{{record_id:int}}", summary=f"{action.title()} a {config.noun}")
    async def transition_record(record_id: int, service: RecordService = Depends(get_service)):
        return await _respond(service, lambda: service.apply_transition(action, record_id))
