"""Logging setup for the API process."""
import logging
from typing import Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """Configure the root logger once; repeated calls only adjust the level."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if not any(getattr(h, "_releaf", False) for h in root_logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._releaf = True
        root_logger.addHandler(handler)

    # Engine echo is too chatty at INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
