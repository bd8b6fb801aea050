"""
Logging utilities for the type registry.

This module provides logging functions that respect the RegistryContext
log level and format flags. Registry internals report through `log_event`,
which tags each line with the table that produced it.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

import sys
import time

from tid_context import RegistryContext, LogLevel

_LEVEL_TAGS = {
    LogLevel.ERROR: "ERROR",
    LogLevel.WARNING: "WARNING",
    LogLevel.INFO: "INFO",
    LogLevel.DEBUG: "DEBUG",
}


def log(context: RegistryContext, log_level: LogLevel, message: str) -> None:
    """
    Log a message if the context's logging level admits it.

    Args:
        context:    The registry context containing the logging level.
        log_level:  The level of the message to log.
        message:    The message to log.
    """
    if context.log_level < log_level:
        return
    prefix = ""
    if context.log_rich_format and log_level in _LEVEL_TAGS:
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
        prefix = f"{timestamp} [{_LEVEL_TAGS[log_level]}] "
    print(f"{prefix}{message}", file=sys.stderr)


def log_error(context: RegistryContext, message: str) -> None:
    """
    Log an error-level message if logging level is ERROR or higher.

    Args:
        context: The registry context containing the logging level.
        message: The message to log.
    """
    log(context, LogLevel.ERROR, message)


def log_warning(context: RegistryContext, message: str) -> None:
    log(context, LogLevel.WARNING, message)


def log_info(context: RegistryContext, message: str) -> None:
    log(context, LogLevel.INFO, message)


def log_debug(context: RegistryContext, message: str) -> None:
    log(context, LogLevel.DEBUG, message)


def log_event(context: RegistryContext, log_level: LogLevel, component: str, message: str) -> None:
    """
    Log a message raised by one of the registry's tables.

    Args:
        context:   The registry context containing the logging level.
        log_level: The level of the message to log.
        component: The table reporting the event ("names", "interner",
                   "cache", "parser", "registry").
        message:   The message to log.
    """
    log(context, log_level, f"{component}: {message}")
