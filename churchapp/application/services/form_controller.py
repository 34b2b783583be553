"""Form controller — field values, validation and submission for one record.

Create vs update is never stored as a mode: it follows solely from
whether the record handed to the controller carries an ``id``.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from churchapp.application.interfaces import RecordGateway
from churchapp.domain.entities import EntityConfig, Identifier, Record
from churchapp.domain.exceptions import GatewayError
from churchapp.domain.validation import coerce_fields, validate_fields

logger = logging.getLogger(__name__)

SubmitCallback = Callable[[Record], Awaitable[None]]

INCOMPLETE_FORM_MESSAGE = "Please fill in all required fields"


@dataclass
class SubmitResult:
    """Outcome of FormController.submit()."""

    record: Record | None = None
    errors: dict[str, str] = field(default_factory=dict)
    error_message: str | None = None

    @property
    def ok(self) -> bool:
        return self.record is not None


class FormController:
    """Holds the editable values of one record and submits them via a gateway.

    The record passed in is copied; the caller's instance is never mutated.
    ``on_success`` is awaited with the saved record after a successful
    submit (ListController uses it to refresh its collection).
    """

    def __init__(
        self,
        gateway: RecordGateway,
        record: Record | None = None,
        on_success: SubmitCallback | None = None,
    ):
        self._gateway = gateway
        self._original = record.copy() if record is not None else Record()
        self._initial = self._initial_values(gateway.config, self._original)
        self._on_success = on_success

        self.values: dict[str, Any] = dict(self._initial)
        self.errors: dict[str, str] = {}
        self.submit_error: str | None = None
        self.submitting = False

    @property
    def config(self) -> EntityConfig:
        return self._gateway.config

    @property
    def record_id(self) -> Identifier | None:
        return self._original.id

    @property
    def is_update(self) -> bool:
        return self._original.id is not None

    @property
    def original(self) -> Record:
        """The persisted record as it was when editing started."""
        return self._original.copy()

    def set_value(self, name: str, value: Any) -> None:
        if name not in self.values:
            raise KeyError(f"{self.config.label} has no field '{name}'")
        self.values[name] = value
        self.errors.pop(name, None)

    def validate(self) -> dict[str, str]:
        """Check required fields, formats and create-only rules."""
        self.errors = validate_fields(
            self.config, self.values, creating=not self.is_update
        )
        return dict(self.errors)

    def build_payload(self) -> dict[str, Any]:
        """Request body: every field when creating, changed fields when updating."""
        if not self.is_update:
            return coerce_fields(self.config, self.values)
        changed = {
            name: value
            for name, value in self.values.items()
            if value != self._initial.get(name)
        }
        return coerce_fields(self.config, changed)

    async def submit(self) -> SubmitResult:
        """Validate, then create or update through the gateway.

        Validation errors abort before any network call. Gateway failures
        are reported through ``submit_error`` and never raised.
        """
        self.submit_error = None
        errors = self.validate()
        if errors:
            self.submit_error = INCOMPLETE_FORM_MESSAGE
            logger.debug(
                "%s form has %d invalid field(s): %s",
                self.config.label, len(errors), ", ".join(errors),
            )
            return SubmitResult(errors=errors, error_message=self.submit_error)

        payload = self.build_payload()
        self.submitting = True
        try:
            if self.is_update:
                saved = await self._gateway.update(self.record_id, payload)
                saved = self._merge_update(saved)
            else:
                saved = await self._gateway.create(payload)
        except GatewayError as e:
            self.submit_error = e.message
            return SubmitResult(error_message=e.message)
        except Exception:
            logger.exception("Unexpected error saving %s", self.config.label)
            self.submit_error = self._fallback_message()
            return SubmitResult(error_message=self.submit_error)
        finally:
            self.submitting = False

        logger.info(
            "%s %s (id=%s)",
            self.config.label, "updated" if self.is_update else "created", saved.id,
        )
        if self._on_success is not None:
            await self._on_success(saved)
        return SubmitResult(record=saved)

    def _merge_update(self, saved: Record) -> Record:
        """Overlay the backend's answer on the original so the result is complete."""
        hidden = set(self.config.secret_fields)
        fields = {
            k: v
            for k, v in {**self._original.fields, **saved.fields}.items()
            if k not in hidden
        }
        return Record(fields=fields, id=saved.id if saved.id is not None else self.record_id)

    def _fallback_message(self) -> str:
        verb = "update" if self.is_update else "add"
        return f"Failed to {verb} {self.config.noun}"

    @staticmethod
    def _initial_values(config: EntityConfig, record: Record) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for spec in config.fields:
            value = record.get(spec.name)
            values[spec.name] = "" if value is None else value
        return values
