from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator

# LogRecord attributes that must not be overwritten through `extra`.
RESERVED_LOG_KEYS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


def _clean_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in fields.items() if k not in RESERVED_LOG_KEYS}


def log_event(event: str, logger: logging.Logger | None = None, **fields: Any) -> None:
    """Emit one structured INFO record with `fields` attached as extras."""
    log = logger or logging.getLogger("hal_client.observability")
    extra = {"event": event, **_clean_fields(fields)}
    log.info(event, extra=extra)


@contextmanager
def track_call(
    method: str, url: str, logger: logging.Logger | None = None
) -> Iterator[Dict[str, Any]]:
    """
    Time one transport call and log a `hal_call` event when it ends.

    The caller stores the response status in the yielded dict; an exception
    escaping the block is logged as status="exception" and re-raised.
    """
    fields: Dict[str, Any] = {"method": method, "url": url}
    start = time.perf_counter()
    try:
        yield fields
    except Exception as exc:
        fields["status"] = "exception"
        fields["error_type"] = type(exc).__name__
        raise
    finally:
        fields["duration_ms"] = int((time.perf_counter() - start) * 1000)
        log_event("hal_call", logger=logger, **fields)


__all__ = ["log_event", "track_call", "RESERVED_LOG_KEYS"]
