"""Project-wide constants and state definitions."""

from __future__ import annotations

from enum import Enum


class JobState(str, Enum):
    QUEUED = "Queued"
    DOWNLOADING = "Downloading"
    PROCESSING = "Processing"
    COMPOSITING = "Compositing"
    FINALIZING = "Finalizing"
    COMPLETE = "Complete"
    FAILED = "Failed"
    CANCELLED = "Cancelled"


TERMINAL_STATES = {JobState.COMPLETE.value, JobState.FAILED.value, JobState.CANCELLED.value}
UNSUCCESSFUL_STATES = {JobState.FAILED.value, JobState.CANCELLED.value}


class Command(str, Enum):
    CHECK_DEPENDENCIES = "check_dependencies"
    GET_APP_DIRS = "get_app_dirs"
    VALIDATE_YOUTUBE_URL = "validate_youtube_url"
    GET_ALL_JOBS = "get_all_jobs"
    START_JOB = "start_job"
    CANCEL_JOB = "cancel_job"
    GET_JOB_STATUS = "get_job_status"
    GET_OVERLAY_POSITIONS = "get_overlay_positions"
    GET_OUTPUT_FORMATS = "get_output_formats"


class OverlayPosition(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"
    SIDE_BY_SIDE = "side-by-side"


DEFAULT_OVERLAY_POSITION = OverlayPosition.TOP.value
CPU_ENCODER = "CPU"
UNKNOWN_ENCODER = "unknown"
DEFAULT_NOTIFICATION_MS = 5000
DEFAULT_POLL_INTERVAL_S = 1.0

VIDEO_EXTENSIONS = {"mp4", "mkv", "avi", "mov", "webm", "flv", "wmv"}

OVERLAY_CATALOG = [
    {"value": "top", "label": "B-Roll on Top", "description": "Classic split - B-Roll above, you below"},
    {"value": "bottom", "label": "B-Roll on Bottom", "description": "Split - you above, B-Roll below"},
    {
        "value": "top-left",
        "label": "Picture in Picture (Top Left)",
        "description": "Small B-Roll overlay in top left corner",
    },
    {
        "value": "top-right",
        "label": "Picture in Picture (Top Right)",
        "description": "Small B-Roll overlay in top right corner",
    },
    {
        "value": "bottom-left",
        "label": "Picture in Picture (Bottom Left)",
        "description": "Small B-Roll overlay in bottom left corner",
    },
    {
        "value": "bottom-right",
        "label": "Picture in Picture (Bottom Right)",
        "description": "Small B-Roll overlay in bottom right corner",
    },
    {"value": "side-by-side", "label": "Side by Side", "description": "B-Roll on left, you on right"},
]

FORMAT_CATALOG = [
    {"value": "youtube", "label": "YouTube", "width": 1920, "height": 1080, "description": "16:9 landscape for YouTube"},
    {"value": "tiktok", "label": "TikTok", "width": 1080, "height": 1920, "description": "9:16 portrait for TikTok/Reels"},
    {"value": "instagram", "label": "Instagram", "width": 1080, "height": 1350, "description": "4:5 for Instagram feed"},
    {"value": "custom", "label": "Custom", "width": 0, "height": 0, "description": "Pick your own dimensions"},
]
