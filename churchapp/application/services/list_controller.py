"""List controller — the fetch → filter/sort/paginate → mutate → refetch cycle.

One generic implementation replaces the per-screen list components; all
entity-specific behaviour (search fields, default sort, page size) comes
from the gateway's EntityConfig.
"""

import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from churchapp.application.interfaces import RecordGateway
from churchapp.application.services.form_controller import FormController
from churchapp.domain.entities import EntityConfig, EventWindow, Identifier, Record
from churchapp.domain.exceptions import GatewayError, UnsupportedOperationError

logger = logging.getLogger(__name__)

Predicate = Callable[[Record], bool]
SortKey = Callable[[Record], Any]


@dataclass
class ListView:
    """One page of the locally filtered and sorted collection."""

    items: list[Record]
    total: int
    page: int
    page_size: int
    total_pages: int

    @property
    def has_previous(self) -> bool:
        return self.page > 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages - 1


def field_sort_key(fields: Sequence[str]) -> SortKey:
    """Case-insensitive string key over one or more record fields."""

    def key(record: Record) -> tuple[str, ...]:
        return tuple(
            "" if record.get(name) is None else str(record.get(name)).casefold()
            for name in fields
        )

    return key


def _message_of(error: Exception) -> str:
    """User-facing text for an expected controller failure."""
    if isinstance(error, GatewayError):
        return error.message
    return str(error)


class ListController:
    """Owns one screen's collection, search term, sort order, page and edit form."""

    def __init__(
        self,
        gateway: RecordGateway,
        *,
        page_size: int | None = None,
        sort_key: SortKey | None = None,
    ):
        config = gateway.config
        self._gateway = gateway
        self.page_size = page_size or config.page_size
        if self.page_size < 1:
            raise ValueError("page_size must be at least 1")

        self.records: list[Record] = []
        self.search_term = ""
        self.predicate: Predicate | None = None
        self.sort_fields: tuple[str, ...] = config.sort_fields or (config.fields[0].name,)
        self.descending = config.sort_descending
        self._sort_key = sort_key
        self._page = 0

        self.error: str | None = None
        self.loading = False
        self.editing: FormController | None = None

    @property
    def config(self) -> EntityConfig:
        return self._gateway.config

    # ── Remote state ────────────────────────────────────────────────

    async def fetch(
        self,
        filter_params: dict[str, Any] | None = None,
        *,
        window: EventWindow | str | None = None,
        lookup: tuple[str, Identifier] | None = None,
    ) -> list[Record]:
        """Replace the local collection with the backend's current one.

        On failure the previous collection is kept and ``error`` is set.
        """
        self.loading = True
        self.error = None
        try:
            if window is not None:
                records = await self._gateway.window(self._window(window))
            elif lookup is not None:
                records = await self._gateway.lookup(*lookup)
            elif filter_params:
                records = await self._gateway.search(filter_params)
            else:
                records = await self._gateway.list()
        except (GatewayError, UnsupportedOperationError) as e:
            self.error = _message_of(e)
            logger.warning("Fetching %s failed: %s", self.config.plural, self.error)
            return self.records
        except Exception:
            logger.exception("Unexpected error fetching %s", self.config.plural)
            self.error = f"Failed to fetch {self.config.plural}"
            return self.records
        finally:
            self.loading = False

        self.records = records
        logger.debug("Fetched %d %s", len(records), self.config.plural)
        return self.records

    async def remove(self, record_id: Identifier) -> bool:
        """Delete on the backend, then refetch. Nothing changes locally on failure."""
        self.error = None
        try:
            await self._gateway.delete(record_id)
        except GatewayError as e:
            self.error = e.message
            logger.warning(
                "Deleting %s %s failed: %s", self.config.noun, record_id, e.message
            )
            return False
        except Exception:
            logger.exception("Unexpected error deleting %s %s", self.config.noun, record_id)
            self.error = f"Failed to delete {self.config.noun}"
            return False
        await self.fetch()
        return True

    async def apply_transition(self, action: str, record_id: Identifier) -> bool:
        """Run a status transition (confirm/decline), then refetch."""
        self.error = None
        try:
            await self._gateway.transition(action, record_id)
        except (GatewayError, UnsupportedOperationError) as e:
            self.error = _message_of(e)
            logger.warning(
                "%s of %s %s failed: %s", action, self.config.noun, record_id, self.error
            )
            return False
        except Exception:
            logger.exception(
                "Unexpected error running %s on %s %s", action, self.config.noun, record_id
            )
            self.error = f"Failed to {action} {self.config.noun}"
            return False
        await self.fetch()
        return True

    def _window(self, window: EventWindow | str) -> EventWindow:
        try:
            return EventWindow(window)
        except ValueError:
            raise UnsupportedOperationError(self.config.label, str(window)) from None

    # ── Local view ──────────────────────────────────────────────────

    def search(self, term: str) -> ListView:
        self.search_term = term
        self._page = 0
        return self.view()

    def sort(
        self,
        field: str | Sequence[str],
        descending: bool = False,
        key: SortKey | None = None,
    ) -> ListView:
        fields = (field,) if isinstance(field, str) else tuple(field)
        unknown = [f for f in fields if f not in self.config.field_names]
        if unknown:
            raise ValueError(f"{self.config.label} has no field(s): {', '.join(unknown)}")
        self.sort_fields = fields
        self.descending = descending
        self._sort_key = key
        self._page = 0
        return self.view()

    def apply_local_filter(self, predicate: Predicate | None = None) -> ListView:
        """Filter by search term and predicate, sort, then paginate. No refetch."""
        self.predicate = predicate
        return self.view()

    def view(self) -> ListView:
        rows = self._filtered()
        total_pages = math.ceil(len(rows) / self.page_size)
        self._page = min(self._page, max(total_pages - 1, 0))
        start = self._page * self.page_size
        return ListView(
            items=rows[start:start + self.page_size],
            total=len(rows),
            page=self._page,
            page_size=self.page_size,
            total_pages=total_pages,
        )

    @property
    def page(self) -> int:
        return self.view().page

    @property
    def total_pages(self) -> int:
        return math.ceil(len(self._filtered()) / self.page_size)

    def set_page(self, page: int) -> bool:
        """Move to ``page``; out-of-range pages are rejected and change nothing."""
        if not 0 <= page < self.total_pages:
            return False
        self._page = page
        return True

    def _filtered(self) -> list[Record]:
        rows = [r for r in self.records if self._matches(r)]
        key = self._sort_key or field_sort_key(self.sort_fields)
        return sorted(rows, key=key, reverse=self.descending)

    def _matches(self, record: Record) -> bool:
        if self.predicate is not None and not self.predicate(record):
            return False
        term = self.search_term.strip().casefold()
        if not term:
            return True
        fields = self.config.search_fields or self.config.field_names
        return any(
            term in str(record.get(name)).casefold()
            for name in fields
            if record.get(name) is not None
        )

    # ── Editing ─────────────────────────────────────────────────────

    def edit(self, record: Record) -> FormController:
        """Open the update form for a persisted record, replacing any open form."""
        if not record.is_persisted:
            raise ValueError("Only persisted records can be edited")
        self.editing = FormController(
            self._gateway, record, on_success=self._on_form_submitted
        )
        return self.editing

    def new(self) -> FormController:
        """Open an empty create form, replacing any open form."""
        self.editing = FormController(self._gateway, on_success=self._on_form_submitted)
        return self.editing

    def cancel_edit(self) -> None:
        self.editing = None

    async def _on_form_submitted(self, record: Record) -> None:
        self.editing = None
        await self.fetch()
