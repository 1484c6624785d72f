import argparse
import logging
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from .core import DashcamTimelineApp
from .exceptions import DashcamTimelineError
from .metadata.extract import DurationProbe
from .reporting import TimelineReport
from .scanning.volume import VolumeScanner
from .timeline.filtering import available_dates, timeline_for_date
from .timeline.playlist import locate_clip, time_to_playlist_position
from . import config


def setup_logging(verbose: bool, log_file: Optional[Path] = None):
    """Sets up logging to the console and, optionally, a file."""
    log_level = logging.DEBUG if verbose else logging.INFO

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=handlers,
    )

    # Silence chatty libraries
    logging.getLogger("pymediainfo").setLevel(logging.WARNING)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Dashcam Timeline: rebuild continuous recordings from dashcam clips")

    p.add_argument("roots", type=Path, nargs="+", help="Volume root (the folder holding Normal/ and Event/)")

    p.add_argument("--volumes", action="store_true", help="List the given roots that contain dashcam videos and exit")
    p.add_argument("--date", type=date.fromisoformat, default=None, help="Only show segments starting on this day (YYYY-MM-DD)")
    p.add_argument("--list-dates", action="store_true", help="List the days that have recordings")
    p.add_argument("--seek", type=datetime.fromisoformat, default=None, help="Print the clip and playlist offset for a local time (ISO format)")
    p.add_argument("--report-csv", type=Path, default=None, help="Write a per-clip CSV report to this path")

    p.add_argument("--no-probe", action="store_true", help="Do not read durations from the files; infer them from the timestamps")
    p.add_argument("--workers", type=int, default=config.DEFAULT_MAX_WORKERS, help="Parallel workers for duration probing")
    p.add_argument("--log-file", type=Path, default=None, help="Also write the log to this file")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = p.parse_args(argv)
    if len(args.roots) > 1 and not args.volumes:
        p.error("only one volume root can be shown at a time (use --volumes to list several)")
    return args


def list_volumes(scanner: VolumeScanner, roots) -> int:
    volumes = scanner.list_volumes(roots)
    if not volumes:
        print("No volumes with dashcam videos found.")
        return 0

    for vol in volumes:
        print(f"{vol.name}\t{vol.video_count} videos\t{vol.root}")
    return 0


def show_timeline(app: DashcamTimelineApp, args) -> int:
    root = args.roots[0].resolve()
    timeline = app.load_timeline(root)

    if args.list_dates:
        for day in available_dates(timeline):
            print(day.isoformat())
        return 0

    if args.date:
        timeline = timeline_for_date(timeline, args.date)

    for line in TimelineReport(timeline).summary_lines():
        print(line)

    if args.seek and not timeline.is_empty:
        # Naive input is local time, like the clip timestamps
        target = args.seek if args.seek.tzinfo else args.seek.astimezone()
        offset = time_to_playlist_position(timeline, target)
        located = locate_clip(timeline, offset)
        if located:
            clip, position = located
            print(f"Seek {target:%Y-%m-%d %H:%M:%S}: playlist offset {offset} ms -> {clip.front.name} @ {position} ms")
        else:
            print(f"Seek {target:%Y-%m-%d %H:%M:%S}: past the end of the recordings")

    if args.report_csv:
        TimelineReport(timeline).write_csv(args.report_csv)

    return 0


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.verbose, args.log_file)

    probe = None if args.no_probe else DurationProbe()
    scanner = VolumeScanner(probe=probe, max_workers=args.workers)

    try:
        if args.volumes:
            code = list_volumes(scanner, args.roots)
        else:
            code = show_timeline(DashcamTimelineApp(scanner), args)
    except DashcamTimelineError as e:
        logging.error(str(e))
        code = 1
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        code = 1
    except Exception:
        logging.exception("Fatal error while building the timeline.")
        code = 1

    sys.exit(code)


if __name__ == "__main__":
    main()
