"""
Registry context for cross-cutting options.

This module defines the RegistryContext dataclass which holds options that
affect several registry components (name parsing, logging, etc.).
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Hierarchical logging levels for the type registry."""
    SILENT = 0      # No logging
    ERROR = 3       # Error messages only
    WARNING = 6     # Warning messages (default)
    INFO = 10       # Registrations and progress messages (-v)
    DEBUG = 30      # Every type creation and interner change (-vvv)


@dataclass
class RegistryContext:
    """
    Holds cross-cutting options shared by the components of a TypeRegistry.

    Attributes:
        log_level:          Current logging level.
        log_rich_format:    If True, emit logs in rich format: timestamp and log level prefix.
        strict_syntax:      If True, malformed generic type names raise TypeNameSyntaxError;
                            if False, the parser recovers on a best-effort basis.
    """
    log_level: LogLevel = LogLevel.WARNING
    log_rich_format: bool = False
    strict_syntax: bool = True

    @staticmethod
    def default() -> 'RegistryContext':
        """Create a RegistryContext with default settings."""
        return RegistryContext(log_level=LogLevel.WARNING)
