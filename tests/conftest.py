import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_lint_scope_logger():
    yield
    logger = logging.getLogger("lint_scope")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
