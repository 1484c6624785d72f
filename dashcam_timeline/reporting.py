import csv
import logging
from pathlib import Path
from typing import List

from .models import Timeline
from .timeline.playlist import clip_offsets


class TimelineReport:
    def __init__(self, timeline: Timeline):
        self.timeline = timeline

    def write_csv(self, output_csv: Path):
        """
        Writes one row per clip, in playback order.
        """
        headers = [
            "Segment",
            "Clip Start",
            "Duration (s)",
            "Playlist Offset (ms)",
            "Front File",
            "Inside File",
            "Event",
        ]

        rows = 0
        offsets = clip_offsets(self.timeline)
        with open(output_csv, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(headers)

            for seg_idx, segment in enumerate(self.timeline.segments, start=1):
                for clip in segment.clips:
                    writer.writerow([
                        seg_idx,
                        clip.start_time.isoformat(),
                        f"{clip.duration.total_seconds():.3f}",
                        offsets[rows],
                        clip.front.name,
                        clip.inside.name if clip.inside else "",
                        "yes" if clip.is_event else "no",
                    ])
                    rows += 1

        logging.info(f"Report complete. Wrote {rows} clips to {output_csv}")

    def summary_lines(self) -> List[str]:
        if self.timeline.is_empty:
            return ["No recordings found."]

        lines = []
        for idx, segment in enumerate(self.timeline.segments, start=1):
            flag = " [event]" if segment.is_event else ""
            lines.append(
                f"#{idx:<3} {segment.start_time:%Y-%m-%d %H:%M:%S} -> {segment.end_time:%H:%M:%S} "
                f"({segment.duration}, {len(segment.clips)} clips){flag}"
            )
        lines.append(
            f"Total: {self.timeline.total_duration} recorded between "
            f"{self.timeline.earliest_timestamp:%Y-%m-%d %H:%M:%S} and {self.timeline.latest_timestamp:%Y-%m-%d %H:%M:%S}"
        )
        return lines
