"""Domain entity — a client-side record as exchanged with the REST API."""

import copy
from dataclasses import dataclass, field
from typing import Any

Identifier = int | str


@dataclass
class Record:
    """A single entity record: an optional backend id plus its field values.

    ``id`` is None for records built on the client and not yet persisted.
    Once the backend assigns it, it is never changed by the client.
    """

    fields: dict[str, Any] = field(default_factory=dict)
    id: Identifier | None = None

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)

    def copy(self) -> "Record":
        """Deep copy used as the working copy while the record is being edited."""
        return Record(fields=copy.deepcopy(self.fields), id=self.id)

    def to_payload(self) -> dict[str, Any]:
        """Flatten into the JSON object shape the API returns."""
        payload = dict(self.fields)
        if self.id is not None:
            payload["id"] = self.id
        return payload

    @classmethod
    def from_payload(cls, data: dict[str, Any], id_field: str = "id") -> "Record":
        """Build a Record from a JSON object, splitting the id out of the fields."""
        fields = {k: v for k, v in data.items() if k != id_field}
        return cls(fields=fields, id=data.get(id_field))
