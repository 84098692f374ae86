import logging

import httpx
import pytest
import respx

from hal_client.core.client import HalClient
from hal_client.core.errors import HttpClientError
from hal_client.core.logging import LogfmtFormatter, setup_logging
from hal_client.core.observability import log_event


@pytest.mark.asyncio
@respx.mock
async def test_client_logs_success(caplog):
    caplog.set_level(logging.INFO, logger="hal_client.observability")
    route = respx.get("https://example.com/documents").mock(
        return_value=httpx.Response(204)
    )
    client = HalClient("https://example.com")
    try:
        await client.get("/documents")
    finally:
        await client.aclose()

    assert route.called
    record = next(r for r in caplog.records if r.getMessage() == "hal_call")
    assert record.method == "GET"
    assert record.url == "https://example.com/documents"
    assert record.status == 204
    assert record.duration_ms >= 0


@pytest.mark.asyncio
@respx.mock
async def test_client_logs_transport_exception(caplog):
    caplog.set_level(logging.INFO, logger="hal_client.observability")
    respx.get("https://example.com/documents").mock(
        side_effect=httpx.ConnectTimeout("boom")
    )
    client = HalClient("https://example.com")
    with pytest.raises(HttpClientError):
        await client.get("/documents")
    await client.aclose()

    record = next(r for r in caplog.records if r.getMessage() == "hal_call")
    assert record.status == "exception"
    assert record.error_type == "ConnectTimeout"


def test_log_event_drops_reserved_keys(caplog):
    caplog.set_level(logging.INFO, logger="hal_client.observability")
    log_event("custom", name="clobbered", hops=2)

    record = next(r for r in caplog.records if r.getMessage() == "custom")
    assert record.name == "hal_client.observability"
    assert record.hops == 2


def test_logfmt_formatter_renders_extras():
    record = logging.LogRecord(
        "hal_client.client", logging.INFO, __file__, 1, "hal_call", (), None
    )
    record.method = "GET"
    record.url = "http://propilex.test/documents?q=a b"
    record.status = 200

    line = LogfmtFormatter().format(record)
    assert line == (
        'level=info logger=hal_client.client event=hal_call method=GET '
        'url="http://propilex.test/documents?q=a b" status=200'
    )


@pytest.fixture
def restore_hal_client_logger():
    log = logging.getLogger("hal_client")
    handlers, level = list(log.handlers), log.level
    yield log
    for h in list(log.handlers):
        log.removeHandler(h)
    for h in handlers:
        log.addHandler(h)
    log.setLevel(level)


def test_setup_logging_is_idempotent(restore_hal_client_logger):
    setup_logging("debug")
    setup_logging("debug")
    log = restore_hal_client_logger
    assert len(log.handlers) == 1
    assert isinstance(log.handlers[0].formatter, LogfmtFormatter)
    assert log.level == logging.DEBUG
