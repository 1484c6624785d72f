import pytest
from datetime import timedelta
from dashcam_timeline.core import DashcamTimelineApp
from dashcam_timeline.exceptions import VolumeNotFoundError
from dashcam_timeline.main import main
from dashcam_timeline.timeline.builder import TimelineBuilder

from conftest import T0, make_pair


class InMemorySource:
    def __init__(self, videos):
        self.videos = videos
        self.roots = []

    def discover(self, root):
        self.roots.append(root)
        return list(self.videos)


class MissingVolumeSource:
    def discover(self, root):
        raise VolumeNotFoundError(f"Volume '{root}' not found.")


def test_app_builds_timeline_from_injected_source(tmp_path):
    source = InMemorySource(make_pair(T0) + make_pair(T0 + timedelta(seconds=60)))
    timeline = DashcamTimelineApp(source).load_timeline(tmp_path)

    assert source.roots == [tmp_path]
    assert len(timeline.segments) == 1
    assert timeline.total_duration == timedelta(seconds=120)


def test_app_uses_given_builder(tmp_path):
    source = InMemorySource(make_pair(T0))
    builder = TimelineBuilder(default_clip_duration=timedelta(seconds=30))
    timeline = DashcamTimelineApp(source, builder).load_timeline(tmp_path)
    assert timeline.total_duration == timedelta(seconds=30)


def test_app_empty_source_is_not_an_error(tmp_path):
    timeline = DashcamTimelineApp(InMemorySource([])).load_timeline(tmp_path)
    assert timeline.is_empty


def test_app_propagates_upstream_failure(tmp_path):
    with pytest.raises(VolumeNotFoundError):
        DashcamTimelineApp(MissingVolumeSource()).load_timeline(tmp_path)


# --- CLI ---

LAYOUT = {
    "Normal/F": ["20240115093000_000001_F.mp4", "20240115093100_000002_F.mp4", "20240116080000_000003_F.mp4"],
    "Normal/I": ["20240115093000_000001_I.mp4"],
}


def _run(argv):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    return exc.value.code


def test_cli_prints_timeline(volume, capsys, tmp_path):
    root = volume(LAYOUT)
    report = tmp_path / "report.csv"

    assert _run([str(root), "--no-probe", "--report-csv", str(report)]) == 0

    out = capsys.readouterr().out
    assert "2024-01-15 09:30:00" in out
    assert "Total: 0:03:00" in out
    assert report.exists()


def test_cli_lists_dates(volume, capsys):
    root = volume(LAYOUT)
    assert _run([str(root), "--no-probe", "--list-dates"]) == 0
    out = capsys.readouterr().out
    assert "2024-01-15\n2024-01-16" in out


def test_cli_filters_by_date_and_seeks(volume, capsys):
    root = volume(LAYOUT)
    assert _run([str(root), "--no-probe", "--date", "2024-01-15", "--seek", "2024-01-15T09:31:30"]) == 0
    out = capsys.readouterr().out
    assert "2024-01-16" not in out
    assert "playlist offset 90000 ms -> 20240115093100_000002_F.mp4 @ 30000 ms" in out


def test_cli_empty_volume(tmp_path, capsys):
    assert _run([str(tmp_path), "--no-probe"]) == 0
    assert "No recordings found." in capsys.readouterr().out


def test_cli_missing_volume_fails(tmp_path):
    assert _run([str(tmp_path / "missing"), "--no-probe"]) == 1


def test_cli_lists_volumes(volume, tmp_path, capsys):
    root = volume(LAYOUT)
    assert _run([str(root), str(tmp_path / "missing"), "--volumes"]) == 0
    out = capsys.readouterr().out
    assert "SDCARD\t4 videos" in out


def test_cli_rejects_several_roots_without_volumes(volume, tmp_path, capsys):
    root = volume(LAYOUT)
    assert _run([str(root), str(tmp_path), "--no-probe"]) == 2
    assert "only one volume root" in capsys.readouterr().err
