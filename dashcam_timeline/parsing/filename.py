import logging
import os
import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Iterator, Tuple, Union

from .. import config
from ..models import CameraRole

_TIMESTAMP_RE = re.compile(config.TIMESTAMP_PATTERN)

_ROLE_CHARS = {role.value: role for role in CameraRole}

# Leaves room for a UTC offset (< 1 day) and a default-length clip
_EARLIEST = datetime.min + timedelta(days=1)
_LATEST = datetime.max - timedelta(days=1)


@dataclass(frozen=True)
class Parsed:
    timestamp: datetime     # zone-naive, as written by the camera
    role: CameraRole


@dataclass(frozen=True)
class Rejected:
    name: str
    reason: str


ParseResult = Union[Parsed, Rejected]


def parse_filename(name: str) -> ParseResult:
    """
    Splits a dashcam filename into its timestamp and camera role.

    Expected shape: <YYYYMMDDHHMMSS>_<reserved>_<role...>.<ext>
    The reserved middle part is not interpreted. Malformed names come back
    as Rejected instead of raising, so batch callers can just skip them.
    """
    stem, _ = os.path.splitext(name)
    parts = stem.split(config.FILENAME_SEPARATOR)
    if len(parts) != config.FILENAME_PART_COUNT:
        return Rejected(name, f"expected {config.FILENAME_PART_COUNT} parts, got {len(parts)}")

    ts_str, _reserved, role_str = parts

    # strptime accepts single-digit fields, so enforce the fixed width first
    if not _TIMESTAMP_RE.match(ts_str):
        return Rejected(name, f"malformed timestamp '{ts_str}'")
    try:
        timestamp = datetime.strptime(ts_str, config.TIMESTAMP_FORMAT)
    except ValueError:
        return Rejected(name, f"invalid date '{ts_str}'")
    if not _EARLIEST <= timestamp <= _LATEST:
        return Rejected(name, f"timestamp out of range '{ts_str}'")

    role = _ROLE_CHARS.get(role_str[:1])
    if role is None:
        return Rejected(name, f"unknown camera role '{role_str[:1]}'")

    return Parsed(timestamp, role)


def parse_filenames(names: Iterable[str]) -> Iterator[Tuple[str, Parsed]]:
    """Yields (name, Parsed) for every name that parses. Rejects are logged and skipped."""
    for name in names:
        result = parse_filename(name)
        if isinstance(result, Rejected):
            logging.debug(f"Skipping {result.name}: {result.reason}")
            continue
        yield name, result
