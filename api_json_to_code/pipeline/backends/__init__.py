"""
Code generation backends.

Each backend turns analyzed interfaces into source code for one language.
"""

from __future__ import annotations

from .base import CodeBackend
from .java_backend import JavaBackend

BACKENDS: dict[str, type[CodeBackend]] = {
    "java": JavaBackend,
}

__all__ = ["CodeBackend", "JavaBackend", "BACKENDS"]
