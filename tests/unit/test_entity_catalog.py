"""Unit tests for the entity catalog loader and EntityConfig paths."""

import pytest

from churchapp.application.services import EntityCatalog, get_catalog
from churchapp.domain.entities import EventWindow, FieldKind


def test_bundled_catalog_covers_every_entity():
    catalog = get_catalog()

    assert set(catalog.names()) == {
        "events",
        "users",
        "media",
        "watch_history",
        "servings",
        "home_groups",
        "event_rsvp",
        "eventrsvp",
        "home_group_rsvp",
        "serving_rsvp",
    }
    assert "eventrsvp" not in {c.name for c in catalog.served()}


def test_events_config():
    events = get_catalog().get("events")

    assert events.window_field == "event_date"
    assert set(events.windows) == set(EventWindow)
    assert events.get_field("event_date").kind is FieldKind.DATE
    assert events.sort_descending is True


def test_rest_paths():
    rsvp = get_catalog().get("event_rsvp")

    assert rsvp.list_path == "/events/rsvp/list"
    assert rsvp.search_path == "/events/rsvp/search"
    assert rsvp.add_path == "/events/rsvp/add"
    assert rsvp.edit_path(4) == "/events/rsvp/edit/4"
    assert rsvp.item_path(4) == "/events/rsvp/4"
    assert rsvp.lookup_path("email", "a@x.com") == "/events/rsvp/email/a%40x.com"
    assert rsvp.transition_path("decline", 4) == "/events/rsvp/decline/4"
    assert get_catalog().get("events").window_path(EventWindow.PAST) == "/events/past"


@pytest.mark.parametrize(
    "entity, noun",
    [("events", "event"), ("home_groups", "home group"), ("event_rsvp", "RSVP"), ("media", "media")],
)
def test_noun(entity: str, noun: str):
    assert get_catalog().get(entity).noun == noun


def test_unknown_entity():
    with pytest.raises(KeyError):
        get_catalog().get("donations")


def test_load_custom_catalog(tmp_path):
    path = tmp_path / "entities.yaml"
    path.write_text(
        """
entities:
  - name: notes
    fields:
      - {name: body, required: true}
      - {name: pinned, kind: bool}
""",
        encoding="utf-8",
    )

    catalog = EntityCatalog.load(path)
    notes = catalog.get("notes")

    assert len(catalog) == 1
    assert notes.prefix == "/notes"
    assert notes.get_field("body").label == "Body"
    assert notes.get_field("pinned").kind is FieldKind.BOOL
    assert notes.page_size == 10


def test_windows_require_window_field(tmp_path):
    path = tmp_path / "entities.yaml"
    path.write_text(
        """
entities:
  - name: notes
    fields: [{name: body}]
    windows: [past]
""",
        encoding="utf-8",
    )

    with pytest.raises(ValueError):
        EntityCatalog.load(path)


def test_duplicate_entity_names_rejected():
    events = get_catalog().get("events")
    with pytest.raises(ValueError):
        EntityCatalog([events, events])


def test_rsvp_transitions_start_from_pending():
    for name in ("event_rsvp", "home_group_rsvp", "serving_rsvp"):
        transitions = get_catalog().get(name).transitions
        assert {t.from_value for t in transitions.values()} == {"pending"}
        assert transitions["confirm"].allowed_from("pending")
        assert not transitions["confirm"].allowed_from("declined")


def test_watch_history_config():
    history = get_catalog().get("watch_history")

    assert history.prefix == "/media/watch_history"
    assert history.lookup_path("user", 5) == "/media/watch_history/user/5"
    assert history.get_field("completed").kind is FieldKind.BOOL
    assert history.noun == "watch history entry"
