"""V1 API router — health plus one records router per served catalog entity."""

from fastapi import APIRouter

from churchapp.application.services import get_catalog
from churchapp.presentation.api.v1.endpoints.health import router as health_router
from churchapp.presentation.api.v1.endpoints.records import build_records_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)

# Longer prefixes first so /events/rsvp/... is not shadowed by /events/...
for _config in sorted(get_catalog().served(), key=lambda c: len(c.prefix), reverse=True):
    router.include_router(build_records_router(_config))
