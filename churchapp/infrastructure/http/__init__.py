"""REST client infrastructure package."""

from .http_gateway import HttpGateway
from .gateway_factory import build_gateway

__all__ = ["HttpGateway", "build_gateway"]
