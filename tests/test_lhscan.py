import logging

import lhscan


def test_set_logging(caplog):
    log = logging.getLogger("lhscan")

    # message not recorded by default
    log.debug("log message")
    assert len(caplog.records) == 0
    caplog.clear()

    # set custom logging, now message is recorded
    lhscan.set_logging()
    log.debug("log message")
    assert "log message" in [rec.message for rec in caplog.records]


def test_dir():
    assert "surface" in dir(lhscan)
    assert "set_logging" in dir(lhscan)
