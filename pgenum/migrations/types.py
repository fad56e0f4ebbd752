"""Type definitions for the enum migration system."""

from enum import Enum


class Direction(str, Enum):
    """Which half of an operation pair to run."""

    FORWARD = "forward"
    BACKWARD = "backward"
