"""Services that connect the engine to stored data."""

from .scheduling import Snapshot, delete_schedule, generate_schedule, load_snapshot

__all__ = [
    "Snapshot",
    "load_snapshot",
    "generate_schedule",
    "delete_schedule",
]
