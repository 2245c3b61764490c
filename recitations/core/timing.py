import logging
import time
from contextlib import contextmanager

logger = logging.getLogger(__name__)


@contextmanager
def log_duration(label: str):
    start = time.monotonic()

    yield

    duration = time.monotonic() - start
    logger.info("%s -> done (%.2fs)", label, duration)
