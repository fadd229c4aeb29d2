'''
universal logger
'''
import logging
import os
import sys

def setup_logger(level: str | None = None):
    """
    Configures and returns the application logger.
    The level comes from the LOG_LEVEL environment variable (default INFO).
    """
    logger = logging.getLogger('TT-backend')
    logger.setLevel((level or os.getenv("LOG_LEVEL", "INFO")).upper())
    # Keep uvicorn's root handlers from printing every line twice
    logger.propagate = False

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(module)s - %(levelname)s\n - %(message)s'
    ))

    if not logger.handlers:
        logger.addHandler(handler)

    return logger

# Create a single logger instance to be imported by other modules
log = setup_logger()
