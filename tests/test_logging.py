import asyncio
import logging

import pytest

from contacts_api.core.logging import ContextFilter, LogContext, get_logger


class RecordingHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []
        self.addFilter(ContextFilter())

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def captured():
    logger = get_logger("tests.context")
    handler = RecordingHandler()
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    yield logger, handler.records
    logger.removeHandler(handler)


async def test_context_is_isolated_between_concurrent_tasks(captured):
    logger, records = captured
    factory = logging.getLogRecordFactory()

    async def request(name, email):
        with LogContext(email=email):
            await asyncio.sleep(0)
            logger.info(name)
            await asyncio.sleep(0)
            logger.info(name)

    await asyncio.gather(request("alice", "alice@b.co"), request("bob", "bob@b.co"))

    seen = {(record.getMessage(), record.email) for record in records}
    assert seen == {("alice", "alice@b.co"), ("bob", "bob@b.co")}
    assert logging.getLogRecordFactory() is factory

    logger.info("after")
    assert not hasattr(records[-1], "email")


def test_explicit_extra_wins_over_context(captured):
    logger, records = captured
    with LogContext(email="context@b.co", user_id="u1"):
        logger.info("sent", extra={"email": "explicit@b.co"})

    assert records[-1].email == "explicit@b.co"
    assert records[-1].user_id == "u1"


def test_nested_contexts_restore_outer_fields(captured):
    logger, records = captured
    with LogContext(user_id="u1"):
        with LogContext(contact_id="c1"):
            logger.info("inner")
        logger.info("outer")

    inner, outer = records[-2:]
    assert (inner.user_id, inner.contact_id) == ("u1", "c1")
    assert outer.user_id == "u1"
    assert not hasattr(outer, "contact_id")
