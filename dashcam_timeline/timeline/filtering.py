from datetime import date
from typing import List, Optional

from ..models import Timeline
from .builder import timeline_from_segments


def available_dates(timeline: Timeline) -> List[date]:
    """Distinct days (in the recording's zone) on which a segment starts, oldest first."""
    return sorted({segment.start_time.date() for segment in timeline.segments})


def latest_date(timeline: Timeline) -> Optional[date]:
    dates = available_dates(timeline)
    return dates[-1] if dates else None


def timeline_for_date(timeline: Timeline, day: date) -> Timeline:
    """
    Narrows a timeline to the segments starting on `day`.

    A segment running past midnight stays whole and belongs to the day it
    started on. Bounds and total duration are recomputed for the subset.
    """
    segments = [s for s in timeline.segments if s.start_time.date() == day]
    return timeline_from_segments(segments)
