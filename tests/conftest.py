import pytest
from datetime import datetime, timedelta, timezone
from dashcam_timeline.models import CameraRole, VideoFile

T0 = datetime(2024, 1, 15, 9, 30, 0, tzinfo=timezone.utc)


def make_video(ts, role=CameraRole.FRONT, duration_ms=0, is_event=False, name=None):
    """Builds a VideoFile the way the scanner would, without touching disk."""
    if name is None:
        name = f"{ts:%Y%m%d%H%M%S}_000001_{role.value}.mp4"
    return VideoFile(
        handle=f"mem://{name}",
        name=name,
        timestamp=ts,
        role=role,
        is_event=is_event,
        duration=timedelta(milliseconds=duration_ms),
    )


def make_pair(ts, duration_ms=0, is_event=False):
    return [
        make_video(ts, CameraRole.FRONT, duration_ms, is_event),
        make_video(ts, CameraRole.INSIDE, duration_ms, is_event),
    ]


@pytest.fixture
def continuous_files():
    """Three back-to-back 60s recordings starting at T0, no probed durations."""
    files = []
    for i in range(3):
        files.extend(make_pair(T0 + timedelta(seconds=60 * i)))
    return files


@pytest.fixture
def volume(tmp_path):
    """
    Returns a factory that lays out a dashcam volume on disk:
    volume({"Normal/F": ["20240115093000_000001_F.mp4", ...], ...})
    """
    def _make(layout):
        root = tmp_path / "SDCARD"
        root.mkdir(exist_ok=True)
        for rel_dir, names in layout.items():
            d = root / rel_dir
            d.mkdir(parents=True, exist_ok=True)
            for name in names:
                (d / name).write_bytes(b"\x00")
        return root
    return _make
