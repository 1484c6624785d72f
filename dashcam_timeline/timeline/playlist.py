"""
Conversions between wall-clock time and playlist position.

The playlist is every clip of every segment played back to back, so the
offset space only accumulates real clip durations; gaps between segments
take up no room. Offsets are integer milliseconds.
"""
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from ..models import Timeline, VideoClip

_MS = timedelta(milliseconds=1)


def _to_ms(delta: timedelta) -> int:
    return delta // _MS


def playlist_duration(timeline: Timeline) -> int:
    """Length of the concatenated playlist in milliseconds."""
    return sum(_to_ms(clip.duration) for clip in timeline.clips)


def clip_offsets(timeline: Timeline) -> List[int]:
    """Playlist offset at which each clip starts, in timeline.clips order."""
    offsets = []
    acc = 0
    for clip in timeline.clips:
        offsets.append(acc)
        acc += _to_ms(clip.duration)
    return offsets


def time_to_playlist_position(timeline: Timeline, wall_clock: datetime) -> int:
    """
    Maps an absolute time to an offset into the playlist.

    Times before the first clip map to 0, times after the last clip map to
    the end of the playlist, and a time falling in a gap maps to the start
    of the next clip.
    """
    offset = 0
    for clip in timeline.clips:
        if wall_clock < clip.start_time:
            return offset
        if wall_clock < clip.end_time:
            return offset + _to_ms(wall_clock - clip.start_time)
        offset += _to_ms(clip.duration)
    return offset


def locate_clip(timeline: Timeline, offset_ms: int) -> Optional[Tuple[VideoClip, int]]:
    """
    Returns the clip playing at offset_ms and the position inside it, or None
    when the offset is past the end of the playlist. Negative offsets seek to
    the start of the first clip.
    """
    offset_ms = max(offset_ms, 0)
    acc = 0
    for clip in timeline.clips:
        clip_ms = _to_ms(clip.duration)
        if offset_ms < acc + clip_ms:
            return clip, offset_ms - acc
        acc += clip_ms
    return None


def playlist_position_to_wall_clock(timeline: Timeline, offset_ms: int) -> Optional[datetime]:
    """Inverse of time_to_playlist_position. None for an empty timeline."""
    if timeline.is_empty:
        return None

    located = locate_clip(timeline, offset_ms)
    if located is None:
        return timeline.latest_timestamp

    clip, position_ms = located
    return clip.start_time + timedelta(milliseconds=position_ms)
