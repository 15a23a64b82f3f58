"""Logging configuration for the sales report service."""
import logging
import sys


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )

    # uvicorn access lines are noise for a batch job
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
