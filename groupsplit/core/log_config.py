import logging
from logging.config import dictConfig


def setup_logging(level: str = "INFO"):
    dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
            },
        },
        "loggers": {
            "groupsplit": {
                "handlers": ["console"],
                "level": level.upper(),
                "propagate": False,
            },
        },
    })
    logging.getLogger("groupsplit").debug("logging configured at %s", level)
