import logging

import pytest


@pytest.fixture(autouse=True)
def reset_launcher_logger():
    """cli.main attaches a stderr handler; drop it so it never outlives a test's captured stream."""
    yield
    logger = logging.getLogger("lambda_lift_launcher")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
