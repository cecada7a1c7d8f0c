"""Error Handlers: BrowserError severity picks the log level of the handler's record."""

import logging

from pymongo.errors import OperationFailure

_HANDLER_LOGGER = "docbrowser.api.error_handlers"


def _handler_records(caplog):
    return [r for r in caplog.records if r.name == _HANDLER_LOGGER]


async def test_validation_error_logged_as_warning(client, caplog):
    with caplog.at_level(logging.INFO, logger=_HANDLER_LOGGER):
        res = await client.get("/collection")
    assert res.status_code == 400
    [record] = _handler_records(caplog)
    assert record.levelno == logging.WARNING
    assert record.error_code == "VALIDATION_ERROR"
    assert record.path == "/collection"


async def test_store_error_logged_as_error(client, store, caplog):
    store.failures["count_documents"] = OperationFailure("denied")
    with caplog.at_level(logging.INFO, logger=_HANDLER_LOGGER):
        res = await client.get("/collection", params={"name": "users"})
    assert res.status_code == 400
    [record] = _handler_records(caplog)
    assert record.levelno == logging.ERROR
    assert record.error_code == "STORE_ERROR"
