"""Root logger configuration shared by the HTTP service and the CLI."""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s :: %(message)s"


def setup_logging(level: str = "INFO", stream=None) -> None:
    """
    Attach one stream handler to the root logger.

    The HTTP service logs to stdout. The CLI passes stderr because stdout
    carries the cleaned CSV. A root logger that already has handlers is
    left untouched.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
