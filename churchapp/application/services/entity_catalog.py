"""Entity catalog — parses the entities YAML file into EntityConfig objects.

Loaded once per process; both the REST server (router factory) and the
client gateways read their entity definitions from here.
"""

import logging
from collections.abc import Iterator
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from churchapp.domain.entities import (
    EntityConfig,
    EventWindow,
    FieldKind,
    FieldSpec,
    Transition,
)

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_FILE = Path(__file__).resolve().parents[2] / "data" / "entities.yaml"


class EntityCatalog:
    """Name-indexed collection of entity configurations."""

    def __init__(self, configs: list[EntityConfig]):
        self._configs: dict[str, EntityConfig] = {}
        for config in configs:
            if config.name in self._configs:
                raise ValueError(f"Duplicate entity '{config.name}' in catalog")
            self._configs[config.name] = config

    @classmethod
    def load(cls, path: str | Path = DEFAULT_CATALOG_FILE) -> "EntityCatalog":
        """Parse a catalog YAML file."""
        path = Path(path)
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        entries = data.get("entities", [])
        configs = [cls._build_config(entry) for entry in entries]
        logger.info("Loaded %d entity definitions from %s", len(configs), path.name)
        return cls(configs)

    def get(self, name: str) -> EntityConfig:
        try:
            return self._configs[name]
        except KeyError:
            raise KeyError(f"Unknown entity '{name}'") from None

    def served(self) -> list[EntityConfig]:
        """Entities the records API mounts routes for."""
        return [c for c in self._configs.values() if c.served]

    def names(self) -> list[str]:
        return list(self._configs)

    def __iter__(self) -> Iterator[EntityConfig]:
        return iter(self._configs.values())

    def __len__(self) -> int:
        return len(self._configs)

    # ── YAML → domain builders ──────────────────────────────────────

    @staticmethod
    def _build_field(entry: dict[str, Any]) -> FieldSpec:
        return FieldSpec(
            name=entry["name"],
            label=entry.get("label", entry["name"].replace("_", " ").capitalize()),
            kind=FieldKind(entry.get("kind", "text")),
            required=bool(entry.get("required", False)),
            create_only=bool(entry.get("create_only", False)),
            omit_blank=bool(entry.get("omit_blank", False)),
            choices=tuple(entry.get("choices", ())),
        )

    @classmethod
    def _build_config(cls, entry: dict[str, Any]) -> EntityConfig:
        fields = tuple(cls._build_field(f) for f in entry.get("fields", []))
        if not fields:
            raise ValueError(f"Entity '{entry.get('name')}' declares no fields")

        windows = tuple(EventWindow(w) for w in entry.get("windows", ()))
        if windows and not entry.get("window_field"):
            raise ValueError(f"Entity '{entry['name']}' declares windows without window_field")

        transitions = {
            action: Transition(
                field=spec["field"], value=spec["value"], from_value=spec.get("from")
            )
            for action, spec in (entry.get("transitions") or {}).items()
        }

        return EntityConfig(
            name=entry["name"],
            label=entry.get("label", entry["name"]),
            plural=entry.get("plural", entry["name"]),
            prefix=entry.get("prefix", f"/{entry['name']}"),
            fields=fields,
            service=entry.get("service", "api"),
            search_fields=tuple(entry.get("search_fields", ())),
            sort_fields=tuple(entry.get("sort_fields", ())),
            sort_descending=bool(entry.get("sort_descending", False)),
            page_size=int(entry.get("page_size", 10)),
            window_field=entry.get("window_field"),
            windows=windows,
            lookups=dict(entry.get("lookups") or {}),
            transitions=transitions,
            unique_fields=tuple(entry.get("unique_fields", ())),
            secret_fields=tuple(entry.get("secret_fields", ())),
            served=bool(entry.get("served", True)),
        )


@lru_cache
def get_catalog() -> EntityCatalog:
    """Cached catalog instance — parses the bundled YAML once."""
    return EntityCatalog.load()
