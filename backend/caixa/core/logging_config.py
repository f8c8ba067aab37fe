import logging
import sys

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that flood stdout at INFO
QUIET_LOGGERS = ("uvicorn.access", "python_multipart", "multipart")


def setup_logging(level: str = "INFO") -> None:
    """
    Configure stdout logging for the Caixa engine.

    Safe to call more than once (app import, tests, uvicorn reload):
    when the root logger already has a handler only the level changes.
    """
    numeric_level = getattr(logging, str(level).upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
