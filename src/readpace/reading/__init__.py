"""Reading pace, projection and progress."""

from .projection import (
    ProjectionEngine,
    ReadingProjection,
    project,
)
from .progress import BookProgress
from .status import classify_status

__all__ = [
    "ProjectionEngine",
    "ReadingProjection",
    "project",
    "BookProgress",
    "classify_status",
]
