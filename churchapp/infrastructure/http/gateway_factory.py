"""Gateway factory — wires an HttpGateway for a catalog entity."""

import logging

import httpx

from churchapp.application.services.entity_catalog import EntityCatalog, get_catalog
from churchapp.config import Settings, get_settings
from churchapp.infrastructure.http.http_gateway import HttpGateway
from churchapp.infrastructure.platform import Platform, resolve_base_url

logger = logging.getLogger(__name__)


def build_gateway(
    entity: str,
    *,
    settings: Settings | None = None,
    platform: Platform | str | None = None,
    http_client: httpx.AsyncClient | None = None,
    catalog: EntityCatalog | None = None,
) -> HttpGateway:
    """Create the gateway for ``entity`` against its service's base URL.

    The base URL is picked once here, from the platform (or the configured
    ``client_platform``) and the entity's service family.
    """
    settings = settings or get_settings()
    catalog = catalog or get_catalog()
    config = catalog.get(entity)
    base_url = resolve_base_url(settings, platform, service=config.service)

    logger.debug("Gateway for %s → %s%s", config.name, base_url, config.prefix)
    return HttpGateway(
        config,
        base_url,
        http_client=http_client,
        timeout=settings.http_timeout,
    )
