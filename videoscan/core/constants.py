"""
Shared constants for VideoScan.
Single source of truth — imported by every other module.
"""

import pathlib

# ── Application identity ──────────────────────────────────────────────
APP_NAME = "VideoScan"
APP_VERSION = "1.0.0"

# ── Filesystem paths ─────────────────────────────────────────────────
HOME = pathlib.Path.home()

APP_CONFIG_DIR = HOME / ".config" / APP_NAME
APP_CACHE_DIR = HOME / ".cache" / APP_NAME
JOBS_CACHE_DIR = APP_CACHE_DIR / "jobs"
LOG_DIR = APP_CACHE_DIR / "logs"
CONFIG_PATH = APP_CONFIG_DIR / "config.json"

# ── Secrets (environment variable names) ──────────────────────────────
ELEVENLABS_API_KEY_ENV = "ELEVENLABS_API_KEY"
IMGBB_API_KEY_ENV = "IMGBB_API_KEY"

# ── Job status values ─────────────────────────────────────────────────
class JobStatus:
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


# ── Error codes ───────────────────────────────────────────────────────
class ErrorCode:
    # Caller errors
    INVALID_URL = "ERR_INVALID_URL"
    JOB_NOT_FOUND = "ERR_JOB_NOT_FOUND"
    INVALID_TRANSITION = "ERR_INVALID_TRANSITION"
    RESULT_TIMEOUT = "ERR_RESULT_TIMEOUT"

    # Hard dependency failures
    DOWNLOAD_FAILED = "ERR_DOWNLOAD_FAILED"
    FFMPEG_NORMALIZE = "ERR_FFMPEG_NORMALIZE"
    TRANSCRIBE_FAILED = "ERR_TRANSCRIBE_FAILED"
    TRANSCRIBE_TIMEOUT = "ERR_TRANSCRIBE_TIMEOUT"
    TRANSCRIPT_EMPTY = "ERR_TRANSCRIPT_EMPTY"
    NETWORK_TRANSIENT = "ERR_NETWORK_TRANSIENT"
    MISSING_API_KEY = "ERR_MISSING_API_KEY"

    # Soft dependency failures (never stored on a job)
    SCREENSHOT_FAILED = "ERR_SCREENSHOT_FAILED"
    UPLOAD_FAILED = "ERR_UPLOAD_FAILED"
    CLASSIFICATION_FAILED = "ERR_CLASSIFICATION_FAILED"

    # Orchestrator
    PIPELINE_ABORTED = "ERR_PIPELINE_ABORTED"
    UNEXPECTED = "ERR_UNEXPECTED"

RETRYABLE_ERRORS = {
    ErrorCode.DOWNLOAD_FAILED,
    ErrorCode.TRANSCRIBE_FAILED,
    ErrorCode.TRANSCRIBE_TIMEOUT,
    ErrorCode.NETWORK_TRANSIENT,
}

MAX_ERROR_MESSAGE_LEN = 2000

# ── Thumbnail capture ─────────────────────────────────────────────────
SCREENSHOT_WIDTH = 1280
SCREENSHOT_HEIGHT = 720
PLACEHOLDER_SCREENSHOT_FAILED = (
    "https://via.placeholder.com/1280x720/ff4444/ffffff?text=Screenshot+Failed"
)
PLACEHOLDER_UPLOAD_FAILED = (
    "https://via.placeholder.com/1280x720/ff4444/ffffff?text=Upload+Failed"
)
IMGBB_UPLOAD_URL = "https://api.imgbb.com/1/upload"

# ── Audio pipeline defaults ───────────────────────────────────────────
NORM_CHANNELS = 1
NORM_SAMPLE_RATE = 16000
NORM_CODEC = "pcm_s16le"
NORM_FORMAT = "wav"

# ── ElevenLabs ────────────────────────────────────────────────────────
ELEVENLABS_API_BASE = "https://api.elevenlabs.io/v1"
ELEVENLABS_MODEL = "scribe_v1"

# ── Classification ────────────────────────────────────────────────────
DEFAULT_CLASSIFICATION_URL = "https://huggingface.co/spaces/skyoi1212/ai-detection"
NEUTRAL_PROBABILITY = 0.5
AI_LABEL = 0                   # detector label meaning "AI-written"
AI_LABEL_PROBABILITY = 0.8
HUMAN_LABEL_PROBABILITY = 0.2
MIN_CLASSIFICATION_CHARS = 50
CACHE_MAX_ENTRIES = 1024

# ── Aggregation thresholds ────────────────────────────────────────────
AI_LEANING_THRESHOLD = 0.7
MIXED_THRESHOLD = 0.5
HUMAN_LEANING_THRESHOLD = 0.3
HIGH_CONFIDENCE_SHARE = 0.8

class Prediction:
    AI = "AI-generated"
    MIXED = "mixed"
    HUMAN = "human-generated"

class Confidence:
    HIGH = "high"
    MEDIUM = "medium"

# ── Façade polling ────────────────────────────────────────────────────
RESULT_WAIT_SEC = 180
POLL_INTERVAL_SEC = 1.0

# ── Misc ──────────────────────────────────────────────────────────────
YOUTUBE_URL_PATTERNS = [
    r'^(?:https?://)?(?:www\.)?youtube\.com/watch\?(?:.*&)?v=([a-zA-Z0-9_-]{11})',
    r'^(?:https?://)?youtu\.be/([a-zA-Z0-9_-]{11})',
    r'^(?:https?://)?(?:www\.)?youtube\.com/embed/([a-zA-Z0-9_-]{11})',
    r'^(?:https?://)?(?:www\.)?youtube\.com/v/([a-zA-Z0-9_-]{11})',
    r'^(?:https?://)?(?:www\.)?youtube\.com/shorts/([a-zA-Z0-9_-]{11})',
    r'^(?:https?://)?(?:www\.)?youtube\.com/live/([a-zA-Z0-9_-]{11})',
    r'^(?:https?://)?m\.youtube\.com/watch\?(?:.*&)?v=([a-zA-Z0-9_-]{11})',
    r'^(?:https?://)?music\.youtube\.com/watch\?(?:.*&)?v=([a-zA-Z0-9_-]{11})',
]
