import logging
from pathlib import Path
from typing import List, Optional, Protocol

from .models import Timeline, VideoFile
from .timeline.builder import TimelineBuilder


class VideoSource(Protocol):
    def discover(self, root: Path) -> List[VideoFile]:
        ...


class DashcamTimelineApp:
    def __init__(self, source: VideoSource, builder: Optional[TimelineBuilder] = None):
        self.source = source
        self.builder = builder or TimelineBuilder()

    def load_timeline(self, root: Path) -> Timeline:
        """
        1. Discover clips on the volume (I/O, delegated to the source)
        2. Build the timeline (pure)

        Upstream failures such as a missing volume propagate from the source;
        an empty volume yields an empty Timeline.
        """
        logging.info(f"Loading videos from {root}...")
        videos = self.source.discover(root)

        timeline = self.builder.build(videos)
        if timeline.is_empty:
            logging.info("No recordings found.")
        else:
            logging.info(
                f"Built timeline: {len(timeline.clips)} clips in {len(timeline.segments)} segments, "
                f"{timeline.total_duration} recorded"
            )
        return timeline
