# --- src/rlcsim_core/log_config.py ---
import logging
import sys
from typing import Union

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] [%(name)s] %(message)s"


def setup_logging(level: Union[int, str] = logging.INFO, stream=None):
    """
    Routes all log records to a single console handler.

    Calling it again replaces the handler instead of adding a second one, so the
    level can be changed after import, e.g. `setup_logging("DEBUG")` to see the
    per-100-step progress lines of a transient run.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    root_logger = logging.getLogger()

    for old in list(root_logger.handlers):
        root_logger.removeHandler(old)
        old.close()

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    logging.getLogger(__name__).debug(f"Logging configured at level {logging.getLevelName(level)}.")
