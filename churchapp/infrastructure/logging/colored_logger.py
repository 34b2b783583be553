"""Colored exchange logger — ANSI-colored console tracing of REST calls.

Gives each HttpGateway request/response a colour per HTTP verb so the
traffic of a screen can be followed in the terminal.

Color scheme:
    🔵 Blue    — GET
    🟢 Green   — POST
    🟡 Yellow  — PUT
    🟣 Magenta — DELETE
    🔴 Red     — Failures
    ⚪ Gray    — Timing / details
"""

import logging
from typing import Any


# ── ANSI Color Codes ─────────────────────────────────────────────────

class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    WHITE = "\033[97m"
    GRAY = "\033[90m"


_METHOD_COLORS = {
    "GET": _Colors.BLUE,
    "POST": _Colors.GREEN,
    "PUT": _Colors.YELLOW,
    "DELETE": _Colors.MAGENTA,
}


# ── ExchangeLogger ───────────────────────────────────────────────────

class ExchangeLogger:
    """Color-coded logger for HTTP request/response pairs.

    Usage:
        log = ExchangeLogger(__name__)
        log.request("GET", "http://localhost:8000/api/v1/events/list")
        log.response("GET", url, 200, elapsed=0.012)
        log.failure("DELETE", url, status_code=500, message="Failed to delete event")
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    def request(self, method: str, url: str, **kwargs: Any) -> None:
        """Log an outgoing request (debug level)."""
        color = _METHOD_COLORS.get(method, _Colors.WHITE)
        formatted = f"{color}{_Colors.BOLD}🚀 [{method}]{_Colors.RESET} {color}{url}{_Colors.RESET}"
        details = _format_details(kwargs)
        if details:
            formatted += f" {_Colors.GRAY}({details}){_Colors.RESET}"
        self._logger.debug(formatted)

    def response(self, method: str, url: str, status_code: int, elapsed: float) -> None:
        """Log a successful response with its duration."""
        color = _METHOD_COLORS.get(method, _Colors.WHITE)
        self._logger.info(
            f"{color}✅ [{method}]{_Colors.RESET} {url} "
            f"{_Colors.GREEN}→ {status_code}{_Colors.RESET} "
            f"{_Colors.GRAY}({elapsed * 1000:.0f}ms){_Colors.RESET}"
        )

    def failure(
        self,
        method: str,
        url: str,
        *,
        status_code: int | None = None,
        message: str | None = None,
        error: Exception | None = None,
        elapsed: float | None = None,
    ) -> None:
        """Log a failed exchange in red — backend error or transport failure."""
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}❌ [{method}]{_Colors.RESET} "
            f"{_Colors.RED}{url} → {status_code if status_code is not None else 'no response'}"
            f"{_Colors.RESET}"
        )
        if message:
            formatted += f" {_Colors.RED}{message}{_Colors.RESET}"
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        if elapsed is not None:
            formatted += f" {_Colors.GRAY}({elapsed * 1000:.0f}ms){_Colors.RESET}"
        self._logger.warning(formatted)


def _format_details(details: dict[str, Any]) -> str:
    return " | ".join(f"{k}={v}" for k, v in details.items() if v is not None)
