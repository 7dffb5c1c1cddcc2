"""
Adapters layer - Reading participant availability from files.
"""

from .availability_loader import (
    FileAvailabilitySource,
    load_availability,
    load_participants_file,
    load_poll_csv,
)

__all__ = [
    "FileAvailabilitySource",
    "load_availability",
    "load_participants_file",
    "load_poll_csv",
]
