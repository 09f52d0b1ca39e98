# learnify/core/logging_config.py
import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_CONFIGURED_LOGGERS = ["uvicorn", "uvicorn.access", "uvicorn.error", "fastapi", "learnify"]


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once; safe to call again on reload."""
    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())

    if not any(getattr(h, "_learnify", False) for h in root_logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._learnify = True
        root_logger.addHandler(handler)

    for logger_name in _CONFIGURED_LOGGERS:
        logging.getLogger(logger_name).setLevel(level.upper())
