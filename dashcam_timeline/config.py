"""
Configuration constants for the dashcam timeline builder.
"""
from datetime import timedelta

# --- File Type Definitions ---
VIDEO_EXTS = {'.mp4'}

# --- Volume Layout ---
# Recording class directory -> is_event
RECORDING_DIRS = {
    'normal': False,
    'event': True,
}
# Camera subdirectories inside each recording class directory
CAMERA_DIRS = ('f', 'i')

# --- Filename Parsing ---
# e.g. 20240115093000_000123_F.mp4
FILENAME_SEPARATOR = '_'
FILENAME_PART_COUNT = 3
TIMESTAMP_PATTERN = r'^[0-9]{14}$'
TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"

# --- Timeline Construction ---
# Clips closer than this are considered continuous
GAP_TOLERANCE = timedelta(seconds=1)
# A missing duration is inferred from the next clip only up to this gap
MAX_INFERRED_DURATION = timedelta(seconds=65)
# Nominal recording interval of the device
DEFAULT_CLIP_DURATION = timedelta(seconds=60)

# --- Scanning ---
DEFAULT_MAX_WORKERS = 3
