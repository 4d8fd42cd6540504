import logging
import os

import pytest

from epochseries.config import reset_config


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Isolate every test from EPOCHSERIES_* variables and the cached config."""
    for name in list(os.environ):
        if name.startswith("EPOCHSERIES_"):
            monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def detach_package_handlers():
    yield
    logger = logging.getLogger("epochseries")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
