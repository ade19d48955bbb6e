"""
structlog setup shared by the API, the UI and the scripts.
"""
import logging

import structlog


def configure_logging(level: str = "INFO"):
    """Install the JSON processor chain with the given minimum level."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
    )
