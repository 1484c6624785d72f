import logging
from pathlib import Path

from pymediainfo import MediaInfo

from ..exceptions import MetadataExtractionError


class DurationProbe:
    """
    Reads clip durations from the container using 'pymediainfo'.

    Dashcams often write no duration (or zero) into interrupted clips, so a
    missing value is reported as 0 and left for the timeline builder to infer.
    """

    def probe_ms(self, path: Path) -> int:
        """
        Returns the duration of the video in milliseconds, or 0 if unknown.
        """
        try:
            return self._extract_mediainfo(path)
        except MetadataExtractionError as e:
            logging.debug(f"No duration for {path}: {e}")
        except Exception as e:
            logging.debug(f"MediaInfo failed for {path}: {e}")
        return 0

    def _extract_mediainfo(self, path: Path) -> int:
        """Parses video using pymediainfo."""
        mi = MediaInfo.parse(str(path))

        for track in mi.tracks:
            if track.track_type != "General":
                continue
            duration = getattr(track, "duration", None)
            if duration:
                # MediaInfo duration is already in milliseconds, sometimes as a float string
                return max(int(float(duration)), 0)

        raise MetadataExtractionError("no General track duration")
