# app/services/scheduler/slot_generator.py
"""Candidate start times for a window"""
from typing import List

from app.services.scheduler.types import TimeWindow


def generate_candidates(
        window: TimeWindow,
        duration_minutes: int,
        step_minutes: int,
        buffer_minutes: int = 0
) -> List[int]:
    """
    Start times (minutes since midnight) from window.start in step increments
    whose [start, start + duration) fits inside the window.

    buffer_minutes is accepted so callers pass the whole slot shape in one
    place, but it does not shrink the window: the conflict checker applies it
    to the busy time of existing appointments.
    """
    if duration_minutes <= 0:
        raise ValueError(f"duration_minutes must be > 0, got {duration_minutes}")
    if step_minutes <= 0:
        raise ValueError(f"step_minutes must be > 0, got {step_minutes}")
    if buffer_minutes < 0:
        raise ValueError(f"buffer_minutes must be >= 0, got {buffer_minutes}")

    candidates = []
    current = window.start
    while current + duration_minutes <= window.end:
        candidates.append(current)
        current += step_minutes
    return candidates
