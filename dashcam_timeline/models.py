from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Tuple


class CameraRole(Enum):
    FRONT = 'F'
    INSIDE = 'I'


@dataclass(frozen=True)
class VideoFile:
    """
    One physical clip file, as found on the volume.
    """
    handle: Any             # opaque reference used to open the file (Path for local volumes)
    name: str
    timestamp: datetime     # timezone aware, derived from the filename
    role: CameraRole
    is_event: bool = False
    duration: timedelta = timedelta(0)   # zero when unknown


@dataclass(frozen=True)
class VideoClip:
    """
    One recording moment: the front file plus the inside file sharing its timestamp.
    """
    front: VideoFile
    inside: Optional[VideoFile]
    start_time: datetime
    duration: timedelta

    @property
    def end_time(self) -> datetime:
        return self.start_time + self.duration

    @property
    def is_event(self) -> bool:
        return self.front.is_event or (self.inside is not None and self.inside.is_event)


@dataclass(frozen=True)
class RecordingSegment:
    """
    A continuous run of clips with no gap larger than the tolerance.
    """
    clips: Tuple[VideoClip, ...]
    start_time: datetime
    end_time: datetime
    duration: timedelta

    @property
    def is_event(self) -> bool:
        return any(clip.is_event for clip in self.clips)


@dataclass(frozen=True)
class Timeline:
    segments: Tuple[RecordingSegment, ...]
    earliest_timestamp: Optional[datetime]
    latest_timestamp: Optional[datetime]
    total_duration: timedelta   # sum of segment durations, gaps excluded

    @property
    def is_empty(self) -> bool:
        return not self.segments

    @property
    def clips(self) -> Tuple[VideoClip, ...]:
        return tuple(clip for segment in self.segments for clip in segment.clips)


@dataclass(frozen=True)
class VolumeInfo:
    root: Path
    name: str
    video_count: int
