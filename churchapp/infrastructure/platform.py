"""Platform-dependent base URL selection for the REST gateways."""

import logging
from enum import Enum

from churchapp.config import Settings, get_settings

logger = logging.getLogger(__name__)


class Platform(str, Enum):
    """Client platform targets, each with its own configured backend URL."""

    ANDROID = "android"
    IOS = "ios"
    WEB = "web"


def resolve_base_url(
    settings: Settings | None = None,
    platform: Platform | str | None = None,
    service: str = "api",
) -> str:
    """Pick the base URL of ``service`` for ``platform``.

    Falls back to the configured ``client_platform`` when no platform is
    given. Settings fields follow the ``<service>_url_<platform>`` naming.
    """
    settings = settings or get_settings()
    platform = Platform(platform or settings.client_platform)
    base_url = getattr(settings, f"{service}_url_{platform.value}", None)
    if not base_url:
        raise ValueError(f"No {service} base URL configured for platform '{platform.value}'")

    logger.debug("Platform %s → %s base URL %s", platform.value, service, base_url)
    return base_url.rstrip("/")
