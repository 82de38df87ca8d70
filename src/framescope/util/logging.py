# -*- coding: utf-8 -*-
"""
loguru sinks for framescope sessions.
"""

import os
import sys
import traceback

from loguru import logger

from .defaults import CONFIG_DIR, DEFAULT_LOGLEVEL, SINGLE_LINE_ERR_LOG


def format_error_response():
    err_str = traceback.format_exc()
    if SINGLE_LINE_ERR_LOG:
        return "\t".join(line.strip() for line in err_str.splitlines())
    else:
        return err_str


def start_log(
    log_to_file=True,
    log_to_stdout=False,
    log_path=None,
    clear_prev=True,
    log_level=DEFAULT_LOGLEVEL,
):
    if log_path is None or log_path == "":
        log_path = log_default_path()
    else:
        log_path = os.path.abspath(log_path)

    if clear_prev:
        clear_log(log_path)

    # first remove (default) stderr output
    logger.remove()

    if log_to_file:
        os.makedirs(os.path.dirname(log_path), exist_ok=True)
        logger.add(log_path, level=log_level, enqueue=True, colorize=False)
    if log_to_stdout:
        logger.add(sys.stderr, level=log_level, enqueue=True, colorize=True)
    if log_to_file:
        logger.info("Log started at {}", log_path)
    else:
        logger.info("Log started.")


def log_default_path() -> str:
    return str(CONFIG_DIR / "framescope.log")


def clear_log(log_path: str):
    """
    Clear the log file at the given path, if it exists.

    Arguments
    ---------
    log_path : str
        The path to the log file. Get the default with log_default_path().
    """
    if os.path.exists(log_path):
        try:
            os.remove(log_path)
        except PermissionError:
            logger.error(
                f"Could not clear log file {log_path}. Permission denied. Continuing."
            )


def shutdown_log():
    try:
        logger.info("Closing down log.")
        logger.complete()
        logger.remove()
    except Exception:
        logger.exception("Error shutting down log - skipping.")

