#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from tid_context import RegistryContext, LogLevel
from tid_registry import TypeRegistry


@pytest.fixture
def registry() -> TypeRegistry:
    return TypeRegistry()


@pytest.fixture
def lenient_registry() -> TypeRegistry:
    return TypeRegistry(RegistryContext(strict_syntax=False))


@pytest.fixture
def debug_context() -> RegistryContext:
    return RegistryContext(log_level=LogLevel.DEBUG)


def has_error_code(exc: BaseException, code: str) -> bool:
    """Check that an exception message carries the given error code.

    Args:
        exc:  A raised TypeIdError
        code: Error code string like "PAR-0030" or "[PAR-0030]"
    """
    if not code.startswith("["):
        code = f"[{code}]"
    return code in str(exc)
