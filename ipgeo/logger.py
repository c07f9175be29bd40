import os
from logging import config, getLogger
from typing import Any

LOGGER_NAME = "ipgeo"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def build_log_config(level: str) -> dict[str, Any]:
    """dictConfig for the lookup logger and uvicorn's own loggers.

    The same dict is handed to uvicorn by run_app, so server and lookup records
    share one format. Lookup records keep propagating, which lets pytest's
    caplog see them.
    """
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "lookup": {
                "()": "uvicorn.logging.DefaultFormatter",
                "fmt": "%(levelprefix)s %(asctime)s - %(name)s - %(message)s",
                "datefmt": DATE_FORMAT,
            },
            "access": {
                "()": "uvicorn.logging.AccessFormatter",
                "fmt": '%(levelprefix)s %(asctime)s - %(client_addr)s - "%(request_line)s" %(status_code)s',
                "datefmt": DATE_FORMAT,
            },
        },
        "handlers": {
            "stderr": {"class": "logging.StreamHandler", "formatter": "lookup", "stream": "ext://sys.stderr"},
            "access": {"class": "logging.StreamHandler", "formatter": "access", "stream": "ext://sys.stdout"},
        },
        "loggers": {
            LOGGER_NAME: {"handlers": ["stderr"], "level": level, "propagate": True},
            "uvicorn": {"handlers": ["stderr"], "level": level, "propagate": False},
            "uvicorn.error": {"level": level},
            "uvicorn.access": {"handlers": ["access"], "level": level, "propagate": False},
        },
    }


LOG_LEVEL = os.getenv("IPGEO_LOG_LEVEL", "INFO")  # DEBUG, WARNING, ERROR
LOG_CONFIG = build_log_config(LOG_LEVEL)

config.dictConfig(LOG_CONFIG)

logger = getLogger(LOGGER_NAME)
