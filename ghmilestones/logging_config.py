import logging
import sys
from typing import Union


def setup_logging(level: Union[int, str] = logging.WARNING) -> logging.Logger:
    logger = logging.getLogger("ghmilestones")
    logger.setLevel(level)
    if logger.handlers:
        return logger  # already configured
    handler = logging.StreamHandler(sys.stderr)
    fmt = logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s")
    handler.setFormatter(fmt)
    logger.addHandler(handler)
    # keep connection-pool chatter out unless debugging
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    return logger
