"""Unit tests for the RecordService."""

from datetime import date

import pytest

from churchapp.application.services import RecordService, get_catalog
from churchapp.application.services.record_service import hash_secret, verify_secret
from churchapp.domain.entities import EventWindow
from churchapp.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidTransitionError,
    RecordValidationError,
    UnsupportedOperationError,
)
from tests.fakes import FakeRecordRepository


@pytest.fixture
def repository() -> FakeRecordRepository:
    return FakeRecordRepository()


@pytest.fixture
def events(repository) -> RecordService:
    return RecordService(repository, get_catalog().get("events"))


@pytest.fixture
def users(repository) -> RecordService:
    return RecordService(repository, get_catalog().get("users"))


def _event(title: str, day: str) -> dict:
    return {"event_title": title, "event_date": day, "event_time": "10:00"}


@pytest.mark.asyncio
async def test_create_and_get(events: RecordService):
    created = await events.create_record(_event("Picnic", "2025-06-01"))

    fetched = await events.get_record(created.id)
    assert fetched.data["event_title"] == "Picnic"
    assert events.present(fetched)["id"] == created.id


@pytest.mark.asyncio
async def test_create_invalid_raises_with_field_errors(events: RecordService):
    with pytest.raises(RecordValidationError) as exc_info:
        await events.create_record({"event_title": "", "event_date": "soon", "event_time": "10:00"})

    assert exc_info.value.errors == {
        "event_title": "Event title is required",
        "event_date": "Event date must be a date (YYYY-MM-DD)",
    }


@pytest.mark.asyncio
async def test_get_not_found(events: RecordService):
    with pytest.raises(EntityNotFoundError):
        await events.get_record(999)


@pytest.mark.asyncio
async def test_records_are_scoped_by_entity_type(events: RecordService, repository):
    created = await events.create_record(_event("Picnic", "2025-06-01"))
    servings = RecordService(repository, get_catalog().get("servings"))

    assert await servings.list_records() == []
    with pytest.raises(EntityNotFoundError):
        await servings.get_record(created.id)


@pytest.mark.asyncio
async def test_update_is_partial(events: RecordService):
    created = await events.create_record(_event("Picnic", "2025-06-01"))

    updated = await events.update_record(created.id, {"address": "Main park"})

    assert updated.data["event_title"] == "Picnic"
    assert updated.data["address"] == "Main park"


@pytest.mark.asyncio
async def test_delete(events: RecordService):
    created = await events.create_record(_event("Picnic", "2025-06-01"))

    assert await events.delete_record(created.id) is True
    with pytest.raises(EntityNotFoundError):
        await events.delete_record(created.id)


@pytest.mark.asyncio
async def test_windows(events: RecordService):
    await events.create_record(_event("Past", "2025-05-01"))
    await events.create_record(_event("Today", "2025-06-01"))
    await events.create_record(_event("Future", "2025-07-01"))
    today = date(2025, 6, 1)

    async def titles(window: EventWindow) -> list[str]:
        return [r.data["event_title"] for r in await events.records_in_window(window, today)]

    assert await titles(EventWindow.PAST) == ["Past"]
    assert await titles(EventWindow.CURRENT) == ["Today"]
    assert await titles(EventWindow.FUTURE) == ["Future"]
    assert await titles(EventWindow.CURRENT_FUTURE) == ["Today", "Future"]


@pytest.mark.asyncio
async def test_window_unsupported(repository):
    servings = RecordService(repository, get_catalog().get("servings"))
    with pytest.raises(UnsupportedOperationError):
        await servings.records_in_window(EventWindow.PAST)


@pytest.mark.asyncio
async def test_search(events: RecordService):
    await events.create_record({**_event("Youth picnic", "2025-05-01"), "address": "Park"})
    await events.create_record({**_event("Choir night", "2025-06-10"), "address": "Hall"})
    await events.create_record({**_event("Picnic II", "2025-07-01"), "address": "Beach"})

    by_text = await events.search_records({"text": "PICNIC"})
    assert [r.data["event_title"] for r in by_text] == ["Youth picnic", "Picnic II"]

    by_field = await events.search_records({"address": "hall"})
    assert [r.data["event_title"] for r in by_field] == ["Choir night"]

    by_range = await events.search_records({"start_date": "2025-06-01", "end_date": "2025-06-30"})
    assert [r.data["event_title"] for r in by_range] == ["Choir night"]

    ignored = await events.search_records({"page": "3"})
    assert len(ignored) == 3


@pytest.mark.asyncio
async def test_unique_fields_case_insensitive(users: RecordService):
    await users.create_record(
        {"email": "ada@example.com", "username": "ada", "role": "user", "password": "pw1"}
    )

    with pytest.raises(DuplicateEntityError):
        await users.create_record(
            {"email": "ADA@example.com", "username": "ada2", "role": "user", "password": "pw2"}
        )


@pytest.mark.asyncio
async def test_update_may_keep_own_unique_value(users: RecordService):
    created = await users.create_record(
        {"email": "ada@example.com", "username": "ada", "role": "user", "password": "pw1"}
    )
    updated = await users.update_record(created.id, {"email": "ada@example.com", "username": "ada l"})
    assert updated.data["username"] == "ada l"


@pytest.mark.asyncio
async def test_secret_fields_hashed_and_hidden(users: RecordService):
    created = await users.create_record(
        {"email": "ada@example.com", "username": "ada", "role": "admin", "password": "hunter2"}
    )

    assert "password" not in created.data
    assert verify_secret("hunter2", created.data["password_hash"])

    shown = users.present(created)
    assert "password" not in shown
    assert "password_hash" not in shown
    assert shown["email"] == "ada@example.com"


def test_hash_secret_is_salted():
    assert hash_secret("pw") != hash_secret("pw")
    assert verify_secret("pw", hash_secret("pw"))
    assert not verify_secret("other", hash_secret("pw"))
    assert not verify_secret("pw", "garbage")


@pytest.mark.asyncio
async def test_lookup_and_transition(repository):
    rsvps = RecordService(repository, get_catalog().get("event_rsvp"))
    first = await rsvps.create_record({"event_id": "1", "email": "a@x.com", "rsvp_status": "pending"})
    await rsvps.create_record({"event_id": 2, "email": "b@x.com", "rsvp_status": "pending"})

    by_event = await rsvps.lookup_records("event", "1")
    assert [r.id for r in by_event] == [first.id]

    confirmed = await rsvps.apply_transition("confirm", first.id)
    assert confirmed.data["rsvp_status"] == "confirmed"

    with pytest.raises(UnsupportedOperationError):
        await rsvps.apply_transition("cancel", first.id)
    with pytest.raises(UnsupportedOperationError):
        await rsvps.lookup_records("phone", "123")


@pytest.mark.asyncio
async def test_transition_only_applies_to_pending(repository):
    rsvps = RecordService(repository, get_catalog().get("event_rsvp"))
    declined = await rsvps.create_record(
        {"event_id": 1, "email": "a@x.com", "rsvp_status": "declined"}
    )

    with pytest.raises(InvalidTransitionError) as exc_info:
        await rsvps.apply_transition("confirm", declined.id)

    assert exc_info.value.current == "declined"
    assert (await rsvps.get_record(declined.id)).data["rsvp_status"] == "declined"


@pytest.mark.asyncio
async def test_confirmed_record_cannot_be_declined(repository):
    signups = RecordService(repository, get_catalog().get("serving_rsvp"))
    signup = await signups.create_record(
        {"serving_id": 3, "name": "Ada", "email": "a@x.com", "signup_status": "pending"}
    )
    await signups.apply_transition("confirm", signup.id)

    with pytest.raises(InvalidTransitionError):
        await signups.apply_transition("decline", signup.id)
