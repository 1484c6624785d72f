import logging
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional, Sequence

from .. import config
from ..models import CameraRole, RecordingSegment, Timeline, VideoClip, VideoFile

EMPTY_TIMELINE = Timeline(segments=(), earliest_timestamp=None, latest_timestamp=None, total_duration=timedelta(0))


class TimelineBuilder:
    """
    Turns an unordered set of VideoFiles into a Timeline.

    Pipeline:
      1. Pair front/inside files sharing a timestamp into clips.
      2. Give every clip a positive duration (probed -> next clip gap -> default).
      3. Split the ordered clips into segments wherever the gap exceeds the tolerance.

    The builder holds no state between calls and never raises on sparse or
    malformed input; degenerate data just produces a smaller Timeline.
    """

    def __init__(self,
                 gap_tolerance: timedelta = config.GAP_TOLERANCE,
                 max_inferred_duration: timedelta = config.MAX_INFERRED_DURATION,
                 default_clip_duration: timedelta = config.DEFAULT_CLIP_DURATION):
        self.gap_tolerance = gap_tolerance
        self.max_inferred_duration = max_inferred_duration
        self.default_clip_duration = default_clip_duration

    def build(self, files: Iterable[VideoFile]) -> Timeline:
        clips = self.pair_clips(files)
        if not clips:
            return EMPTY_TIMELINE

        clips = self.refine_durations(clips)
        segments = self.assemble_segments(clips)
        return timeline_from_segments(segments)

    # --- Step 1: Pairing ---

    def pair_clips(self, files: Iterable[VideoFile]) -> List[VideoClip]:
        """
        Groups files by exact timestamp. A clip needs a front file; the inside
        file is optional. With duplicate roles the first file seen wins.
        """
        groups: Dict[datetime, Dict[CameraRole, VideoFile]] = {}
        for video in files:
            group = groups.setdefault(video.timestamp, {})
            if video.role in group:
                logging.debug(f"Duplicate {video.role.name} file at {video.timestamp}: keeping {group[video.role].name}, ignoring {video.name}")
                continue
            group[video.role] = video

        clips = []
        for timestamp, group in groups.items():
            front = group.get(CameraRole.FRONT)
            if front is None:
                logging.debug(f"No front file at {timestamp}, dropping {group[CameraRole.INSIDE].name}")
                continue
            clips.append(VideoClip(
                front=front,
                inside=group.get(CameraRole.INSIDE),
                start_time=timestamp,
                duration=front.duration,
            ))

        clips.sort(key=lambda c: c.start_time)
        return clips

    # --- Step 2: Duration Refinement ---

    def refine_durations(self, clips: Sequence[VideoClip]) -> List[VideoClip]:
        """Expects clips sorted by start time. Returns new clips, all with positive durations."""
        refined = []
        for idx, clip in enumerate(clips):
            next_start = clips[idx + 1].start_time if idx + 1 < len(clips) else None
            duration = self._refine_duration(clip, next_start)
            try:
                clip.start_time + duration
            except OverflowError:
                logging.debug(f"Clip {clip.front.name} ends past the representable range, dropping it")
                continue
            if duration != clip.duration:
                clip = VideoClip(clip.front, clip.inside, clip.start_time, duration)
            refined.append(clip)
        return refined

    def _refine_duration(self, clip: VideoClip, next_start: Optional[datetime]) -> timedelta:
        # 1. Trust the probed value
        if clip.duration > timedelta(0):
            return clip.duration

        # 2. Fixed-interval recording: the next clip starts where this one ends
        if next_start is not None:
            gap = next_start - clip.start_time
            if timedelta(0) < gap <= self.max_inferred_duration:
                return gap

        # 3. Last clip, or recording stopped after this one
        return self.default_clip_duration

    # --- Step 3: Segmentation ---

    def assemble_segments(self, clips: Sequence[VideoClip]) -> List[RecordingSegment]:
        if not clips:
            return []

        segments = []
        current = [clips[0]]
        for prev, clip in zip(clips, clips[1:]):
            # abs() so tiny overlaps from rounded durations still count as continuous
            gap = clip.start_time - prev.end_time
            if abs(gap) > self.gap_tolerance:
                segments.append(self._make_segment(current))
                current = [clip]
            else:
                current.append(clip)
        segments.append(self._make_segment(current))
        return segments

    def _make_segment(self, clips: Sequence[VideoClip]) -> RecordingSegment:
        start = clips[0].start_time
        end = clips[-1].end_time
        return RecordingSegment(
            clips=tuple(clips),
            start_time=start,
            end_time=end,
            duration=end - start,
        )


def timeline_from_segments(segments: Sequence[RecordingSegment]) -> Timeline:
    """Wraps already assembled segments (in time order) in a Timeline."""
    if not segments:
        return EMPTY_TIMELINE
    # Not latest - earliest: gaps between segments are not recorded time
    total = sum((s.duration for s in segments), timedelta(0))
    return Timeline(
        segments=tuple(segments),
        earliest_timestamp=segments[0].start_time,
        latest_timestamp=segments[-1].end_time,
        total_duration=total,
    )


def build_timeline(files: Iterable[VideoFile]) -> Timeline:
    """Builds a Timeline with the default thresholds."""
    return TimelineBuilder().build(files)
