import collections
import logging

import pytest

from diagtrace.internal import logger as diag_logger


@pytest.fixture
def rate_limited(monkeypatch):
    monkeypatch.setattr(diag_logger, "_rate_limit", 60)
    buckets = collections.defaultdict(lambda: diag_logger.LoggingBucket(diag_logger._MINF, 0))
    monkeypatch.setattr(diag_logger, "_buckets", buckets)


def test_get_logger_adds_filter():
    log = diag_logger.get_logger("diagtrace.test.filter")
    diag_logger.get_logger("diagtrace.test.filter")

    assert log.filters.count(diag_logger.log_filter) == 1
    assert log.propagate


def test_rate_limit_per_call_site(rate_limited, caplog):
    log = diag_logger.get_logger("diagtrace.test.rate")

    with caplog.at_level(logging.WARNING, logger="diagtrace.test.rate"):
        for _ in range(3):
            log.warning("same call site")

    assert [r.getMessage() for r in caplog.records] == ["same call site"]


def test_skipped_records_are_reported(rate_limited):
    record = logging.LogRecord("diagtrace.test", logging.WARNING, "file.py", 12, "message", None, None)
    bucket = diag_logger.LoggingBucket(diag_logger._MINF, 0)

    assert bucket.is_sampled(record, 60)
    assert not bucket.is_sampled(record, 60)
    assert not bucket.is_sampled(record, 60)
    assert bucket.skipped == 2

    bucket.bucket -= 61
    assert bucket.is_sampled(record, 60)
    assert record.skipped == 2

    formatted = diag_logger.DiagtraceFormatter().format(record)
    assert formatted == "WARNING message [2 skipped]"


def test_debug_level_is_never_limited(rate_limited, caplog):
    log = diag_logger.get_logger("diagtrace.test.debug")

    with caplog.at_level(logging.DEBUG, logger="diagtrace.test.debug"):
        for _ in range(3):
            log.debug("same call site")

    assert len(caplog.records) == 3
