"""
Custom exception hierarchy for the dashcam timeline builder.

Timeline construction itself never raises for malformed input; these cover
the collaborators that touch the file system.
"""


class DashcamTimelineError(Exception):
    """Base exception for all dashcam timeline errors."""
    pass


class VolumeNotFoundError(DashcamTimelineError):
    """Raised when a volume root does not exist or is not a directory."""
    pass


class MetadataExtractionError(DashcamTimelineError):
    """Raised when the duration of a video cannot be probed."""
    pass
