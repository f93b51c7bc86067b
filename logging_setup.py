"""Shared logging setup for the Support Triage Assistant."""
import logging
import sys
from typing import Optional

import config

_NOISY_LOGGERS = ('werkzeug', 'apscheduler', 'urllib3')


def setup_logging(level: Optional[str] = None) -> None:
    """Send every record to stdout at LOG_LEVEL (or the given level)."""
    name = (level or config.LOG_LEVEL).upper()
    lvl = getattr(logging, name, logging.INFO)
    logging.basicConfig(
        level=lvl,
        handlers=[logging.StreamHandler(sys.stdout)],
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
        force=True,
    )
    for logger_name in _NOISY_LOGGERS:
        lg = logging.getLogger(logger_name)
        lg.setLevel(lvl)
        lg.propagate = True
