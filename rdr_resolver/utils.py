# Copyright (c) 2025 Red Hat, Inc.
# Copyright Contributors to the Open Cluster Management project

"""
Logging helpers.
"""

import logging

import coloredlogs

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def configure_logging(verbose=False):
    """Install coloredlogs on the root logger at DEBUG (verbose) or INFO level."""
    level = 'DEBUG' if verbose else 'INFO'
    coloredlogs.install(level=level, fmt=LOG_FORMAT)


def log_header(message, *args):
    """
    Logs a header message with visual separators and formats the message using multiple arguments.

    Args:
        message (str): The message to be displayed as the header
        *args: Additional arguments to be passed into the message string
    """
    formatted_message = message.format(*args)
    separator = "=" * len(formatted_message)

    logging.info("")
    logging.info(separator)
    logging.info(formatted_message)
    logging.info(separator)
