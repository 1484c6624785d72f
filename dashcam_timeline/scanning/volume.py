import os
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

from tqdm import tqdm

from .. import config
from ..exceptions import DashcamTimelineError, VolumeNotFoundError
from ..metadata.extract import DurationProbe
from ..models import VideoFile, VolumeInfo
from ..parsing.filename import Parsed, Rejected, parse_filename


class VolumeScanner:
    """
    Finds dashcam clips on a mounted volume.

    Expected layout (directory names matched case-insensitively):
        <root>/Normal/F, <root>/Normal/I   routine recordings
        <root>/Event/F,  <root>/Event/I    triggered recordings
    """

    def __init__(self,
                 probe: Optional[DurationProbe] = None,
                 max_workers: int = config.DEFAULT_MAX_WORKERS):
        self.probe = probe
        self.max_workers = max_workers

    def discover(self, root: Path) -> List[VideoFile]:
        """
        Returns a VideoFile for every parseable clip under root, in no particular order.
        Durations are probed when a probe is configured, otherwise left at zero.
        """
        self._check_root(root)

        found: List[Tuple[Path, bool, Parsed, datetime]] = []
        for path, is_event in self._iter_candidates(root):
            result = parse_filename(path.name)
            if isinstance(result, Rejected):
                logging.warning(f"Could not parse file name {path.name}: {result.reason}")
                continue
            try:
                # Camera clocks are local time
                timestamp = result.timestamp.astimezone()
            except (ValueError, OverflowError) as e:
                logging.warning(f"Could not localize timestamp of {path.name}: {e}")
                continue
            found.append((path, is_event, result, timestamp))

        durations = self._probe_all([path for path, _, _, _ in found])

        videos = []
        for (path, is_event, parsed, timestamp), duration_ms in zip(found, durations):
            videos.append(VideoFile(
                handle=path,
                name=path.name,
                timestamp=timestamp,
                role=parsed.role,
                is_event=is_event,
                duration=timedelta(milliseconds=duration_ms),
            ))

        logging.info(f"Found {len(videos)} videos in {root}")
        return videos

    def count_videos(self, root: Path) -> int:
        """Counts parseable clips without probing them."""
        self._check_root(root)
        return sum(
            1 for path, _ in self._iter_candidates(root)
            if isinstance(parse_filename(path.name), Parsed)
        )

    def list_volumes(self, roots: Iterable[Path]) -> List[VolumeInfo]:
        """Returns the roots that hold at least one dashcam clip."""
        volumes = []
        for root in roots:
            try:
                count = self.count_videos(root)
            except (OSError, DashcamTimelineError) as e:
                logging.warning(f"Skipping volume {root}: {e}")
                continue

            if count > 0:
                volumes.append(VolumeInfo(root=root, name=root.name or "External Storage", video_count=count))
        return volumes

    def _check_root(self, root: Path):
        if not root.is_dir():
            raise VolumeNotFoundError(f"Volume '{root}' not found. Check the mount point and permissions.")

    def _probe_all(self, paths: List[Path]) -> List[int]:
        if self.probe is None or not paths:
            return [0] * len(paths)

        if self.max_workers <= 1:
            return [self.probe.probe_ms(p) for p in tqdm(paths, desc="Probing durations")]

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            # map keeps input order
            return list(tqdm(executor.map(self.probe.probe_ms, paths), total=len(paths), desc="Probing durations"))

    def _iter_candidates(self, root: Path) -> Iterator[Tuple[Path, bool]]:
        """Yields (path, is_event) for every video file in the known clip directories."""
        for rec_dir in self._subdirs(root):
            is_event = config.RECORDING_DIRS.get(rec_dir.name.lower())
            if is_event is None:
                continue
            for cam_dir in self._subdirs(rec_dir):
                if cam_dir.name.lower() not in config.CAMERA_DIRS:
                    continue
                for path in self._files(cam_dir):
                    if path.suffix.lower() in config.VIDEO_EXTS:
                        yield path, is_event

    def _subdirs(self, directory: Path) -> List[Path]:
        return [p for p, is_dir in self._entries(directory) if is_dir]

    def _files(self, directory: Path) -> List[Path]:
        return [p for p, is_dir in self._entries(directory) if not is_dir]

    def _entries(self, directory: Path) -> List[Tuple[Path, bool]]:
        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except (OSError, PermissionError):
            logging.warning(f"Permission denied: {directory}")
            return []

        # Sort for stable traversal order
        entries.sort(key=lambda e: e.name.lower())
        return [
            (Path(e.path), e.is_dir(follow_symlinks=False))
            for e in entries
            if e.is_dir(follow_symlinks=False) or e.is_file(follow_symlinks=False)
        ]
