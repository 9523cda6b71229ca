"""Logging configuration for the tripledger command line."""

import logging.config

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(levelname)s %(name)s: %(message)s"},
        "verbose": {
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "DEBUG",
            "formatter": "simple",
            "stream": "ext://sys.stderr",
        },
    },
    "loggers": {
        "tripledger": {
            "level": "WARNING",
            "handlers": ["console"],
            "propagate": False,
        },
        "sqlalchemy.engine": {"level": "WARNING", "propagate": True},
    },
}


def configure_logging(verbose: bool = False) -> None:
    """Apply LOGGING, lowering the tripledger level to DEBUG when verbose."""
    config = dict(LOGGING)
    loggers = dict(config["loggers"])
    loggers["tripledger"] = dict(loggers["tripledger"], level="DEBUG" if verbose else "WARNING")
    if verbose:
        config["handlers"] = {
            "console": dict(LOGGING["handlers"]["console"], formatter="verbose"),
        }
    config["loggers"] = loggers
    logging.config.dictConfig(config)
