import logging

from cashier.core.logging import LOG_FORMAT


def test_handlers_share_one_format() -> None:
    # the app is created on import in conftest, which configures the logger
    handlers = logging.getLogger("cashier").handlers
    assert handlers
    assert all(h.formatter._fmt == LOG_FORMAT for h in handlers)
