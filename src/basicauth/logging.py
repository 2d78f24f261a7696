import logging
from collections.abc import MutableMapping
from typing import Any

import structlog

# Event keys whose values must never reach a log sink
SENSITIVE_KEYS = frozenset({"token", "cookie", "password", "password_hash", "old_password", "new_password"})
REDACTED = "[redacted]"


def redact_secrets(_: Any, __: str, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """Replace bearer tokens and credentials passed as log keys."""
    for key in SENSITIVE_KEYS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


def setup_logging(debug: bool) -> None:
    """Route stdlib (uvicorn, pymongo) and structlog output through one handler.

    Console rendering in debug mode, JSON lines otherwise.
    """
    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO, format="%(message)s")
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    # Access lines carry no session data; keep them only while debugging
    logging.getLogger("uvicorn.access").setLevel(logging.INFO if debug else logging.WARNING)

    renderer: structlog.types.Processor = (
        structlog.dev.ConsoleRenderer() if debug else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            redact_secrets,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
