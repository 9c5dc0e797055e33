"""Shared constants and globals for backend modules."""

from __future__ import annotations

from core import (
    DEFAULT_REST_DURATION,
    DEFAULT_DB_PATH,
    STATE_KEY,
    UNKNOWN_EXERCISE_NAME,
)

# Set fields the logging screen may edit directly
EDITABLE_SET_FIELDS = ("weight", "reps")

# Kinds of source an active session can be created from
SOURCE_PROGRAM = "program"
SOURCE_STANDALONE = "standalone"
SOURCE_FREESTYLE = "freestyle"
SOURCE_KINDS = (SOURCE_PROGRAM, SOURCE_STANDALONE, SOURCE_FREESTYLE)

__all__ = [
    "DEFAULT_REST_DURATION",
    "DEFAULT_DB_PATH",
    "STATE_KEY",
    "UNKNOWN_EXERCISE_NAME",
    "EDITABLE_SET_FIELDS",
    "SOURCE_PROGRAM",
    "SOURCE_STANDALONE",
    "SOURCE_FREESTYLE",
    "SOURCE_KINDS",
]
