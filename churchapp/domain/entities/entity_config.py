"""Entity configuration — the data that parameterises lists, forms and gateways.

One EntityConfig describes everything that used to be copy-pasted per
screen: the REST path prefix, the field set and its rules, which fields
the search box matches, the default sort order, and the auxiliary
queries (time windows, lookups, status transitions) the entity supports.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from urllib.parse import quote


class FieldKind(str, Enum):
    """Value kinds a form field can hold."""

    TEXT = "text"
    EMAIL = "email"
    DATE = "date"
    TIME = "time"
    INT = "int"
    BOOL = "bool"
    CHOICE = "choice"


class EventWindow(str, Enum):
    """Time windows relative to today for date-bearing entities."""

    PAST = "past"
    CURRENT = "current"
    FUTURE = "future"
    CURRENT_FUTURE = "current_future"

    def contains(self, value: date, today: date) -> bool:
        if self is EventWindow.PAST:
            return value < today
        if self is EventWindow.CURRENT:
            return value == today
        if self is EventWindow.FUTURE:
            return value > today
        return value >= today


# Path segments accepted by the server in addition to the window names.
# "pass" is what deployed clients request for past events.
WINDOW_ALIASES: dict[str, EventWindow] = {"pass": EventWindow.PAST}


@dataclass(frozen=True)
class FieldSpec:
    """A single form field and its validation rules."""

    name: str
    label: str
    kind: FieldKind = FieldKind.TEXT
    required: bool = False
    create_only: bool = False  # required when creating, optional on update
    omit_blank: bool = False   # left out of the request body when blank
    choices: tuple[str, ...] = ()


@dataclass(frozen=True)
class Transition:
    """A named status change, e.g. confirm → rsvp_status = confirmed.

    When ``from_value`` is set the change only applies to records whose
    field currently holds that value (pending → confirmed).
    """

    field: str
    value: str
    from_value: str | None = None

    def allowed_from(self, current: object) -> bool:
        return self.from_value is None or current == self.from_value


@dataclass(frozen=True)
class EntityConfig:
    """Declarative description of one REST-backed entity type."""

    name: str
    label: str
    plural: str
    prefix: str
    fields: tuple[FieldSpec, ...]
    service: str = "api"
    search_fields: tuple[str, ...] = ()
    sort_fields: tuple[str, ...] = ()
    sort_descending: bool = False
    page_size: int = 10
    window_field: str | None = None
    windows: tuple[EventWindow, ...] = ()
    lookups: Mapping[str, str] = field(default_factory=dict)
    transitions: Mapping[str, Transition] = field(default_factory=dict)
    unique_fields: tuple[str, ...] = ()
    secret_fields: tuple[str, ...] = ()
    served: bool = True

    @property
    def noun(self) -> str:
        """Label for use mid-sentence: "Home group" → "home group", "RSVP" stays."""
        if self.label[:2].isupper():
            return self.label
        return self.label[:1].lower() + self.label[1:]

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def get_field(self, name: str) -> FieldSpec | None:
        for spec in self.fields:
            if spec.name == name:
                return spec
        return None

    # ── REST path templates ─────────────────────────────────────────

    @property
    def list_path(self) -> str:
        return f"{self.prefix}/list"

    @property
    def search_path(self) -> str:
        return f"{self.prefix}/search"

    @property
    def add_path(self) -> str:
        return f"{self.prefix}/add"

    def edit_path(self, record_id: int | str) -> str:
        return f"{self.prefix}/edit/{record_id}"

    def item_path(self, record_id: int | str) -> str:
        """Path used for both GET (one record) and DELETE."""
        return f"{self.prefix}/{record_id}"

    def window_path(self, window: EventWindow) -> str:
        return f"{self.prefix}/{window.value}"

    def lookup_path(self, name: str, value: int | str) -> str:
        return f"{self.prefix}/{name}/{quote(str(value), safe='')}"

    def transition_path(self, action: str, record_id: int | str) -> str:
        return f"{self.prefix}/{action}/{record_id}"
