"""
Application configuration manager.
Settings live in a JSON file; environment variables override it.
"""

import json
import os
import logging
from pathlib import Path

from videoscan.core.constants import (
    CONFIG_PATH, JOBS_CACHE_DIR, DEFAULT_CLASSIFICATION_URL,
    MIN_CLASSIFICATION_CHARS, CACHE_MAX_ENTRIES,
    RESULT_WAIT_SEC, POLL_INTERVAL_SEC,
)

ENV_PREFIX = "VIDEOSCAN_"

# Validation bounds (seconds unless noted)
_TIMEOUT_MIN = 1
_TIMEOUT_MAX = 3600
_POLL_MIN = 0.01
_POLL_MAX = 60

logger = logging.getLogger(__name__)

_DEFAULTS = {
    'temp_dir': str(JOBS_CACHE_DIR),
    'keep_debug_artifacts': False,
    'thumbnail_timeout_sec': 15,
    'thumbnail_settle_sec': 2,
    'image_upload_timeout_sec': 30,
    'imgbb_expiration_sec': 0,
    'audio_download_timeout_sec': 600,
    'audio_normalize_timeout_sec': 600,
    'transcription_timeout_sec': 300,
    'classification_url': DEFAULT_CLASSIFICATION_URL,
    'classification_timeout_sec': 15,
    'min_classification_chars': MIN_CLASSIFICATION_CHARS,
    'cache_max_entries': CACHE_MAX_ENTRIES,
    'per_segment_classification': False,
    'result_wait_sec': RESULT_WAIT_SEC,
    'poll_interval_sec': POLL_INTERVAL_SEC,
}

_TIMEOUT_KEYS = {
    'thumbnail_timeout_sec', 'image_upload_timeout_sec',
    'audio_download_timeout_sec', 'audio_normalize_timeout_sec',
    'transcription_timeout_sec', 'classification_timeout_sec',
    'result_wait_sec',
}

_BOOL_KEYS = {'keep_debug_artifacts', 'per_segment_classification'}

_COUNT_KEYS = {'min_classification_chars', 'cache_max_entries', 'imgbb_expiration_sec'}


def _to_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ('1', 'true', 'yes', 'on')
    return bool(value)


class AppConfig:
    """Manages application configuration stored as JSON."""

    def __init__(self, config_path: Path | None = None, environ: dict | None = None):
        self.path = config_path or CONFIG_PATH
        self._environ = os.environ if environ is None else environ
        self._data: dict = {}
        self.load()

    def load(self):
        """Load config from disk, merging with defaults, then apply env overrides."""
        self._data = dict(_DEFAULTS)
        if self.path.exists():
            try:
                with open(self.path, 'r') as f:
                    saved = json.load(f)
                for key, value in saved.items():
                    self._data[key] = self._validate(key, value)
            except (OSError, ValueError, AttributeError) as e:
                logger.warning("Failed to load config: %s", e)
        self._apply_env()

    def _apply_env(self):
        for key in _DEFAULTS:
            env_value = self._environ.get(ENV_PREFIX + key.upper())
            if env_value is not None:
                self._data[key] = self._validate(key, env_value)

        # Compatibility names for the detector endpoint
        url = self._environ.get('AI_DETECTION_URL')
        if url:
            self._data['classification_url'] = url
        timeout_ms = self._environ.get('AI_DETECTION_TIMEOUT')
        if timeout_ms:
            try:
                seconds = int(timeout_ms) / 1000
            except ValueError:
                logger.warning("Invalid AI_DETECTION_TIMEOUT %r — ignoring", timeout_ms)
            else:
                self._data['classification_timeout_sec'] = self._validate(
                    'classification_timeout_sec', seconds)

    def save(self):
        """Persist config to disk."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w') as f:
            json.dump(self._data, f, indent=2)

    def get(self, key: str, default=None):
        return self._data.get(key, default)

    def set(self, key: str, value):
        value = self._validate(key, value)
        self._data[key] = value
        self.save()

    def _validate(self, key: str, value):
        """Validate and coerce config values to safe ranges."""
        if key in _TIMEOUT_KEYS:
            try:
                value = float(value)
            except (TypeError, ValueError):
                logger.warning("Invalid %s %r — using default", key, value)
                return _DEFAULTS[key]
            return max(_TIMEOUT_MIN, min(_TIMEOUT_MAX, value))

        if key in ('thumbnail_settle_sec', 'poll_interval_sec'):
            try:
                value = float(value)
            except (TypeError, ValueError):
                logger.warning("Invalid %s %r — using default", key, value)
                return _DEFAULTS[key]
            low = _POLL_MIN if key == 'poll_interval_sec' else 0
            return max(low, min(_POLL_MAX, value))

        if key in _COUNT_KEYS:
            try:
                value = int(value)
            except (TypeError, ValueError):
                logger.warning("Invalid %s %r — using default", key, value)
                return _DEFAULTS[key]
            return max(0, value)

        if key in _BOOL_KEYS:
            return _to_bool(value)

        if key in ('temp_dir', 'classification_url'):
            value = str(value).strip()
            return value or _DEFAULTS[key]

        return value

    def as_dict(self) -> dict:
        return dict(self._data)

    @property
    def temp_dir(self) -> str:
        return self._data.get('temp_dir', str(JOBS_CACHE_DIR))

    @property
    def result_wait_sec(self) -> float:
        return self._data.get('result_wait_sec', RESULT_WAIT_SEC)

    @property
    def poll_interval_sec(self) -> float:
        return self._data.get('poll_interval_sec', POLL_INTERVAL_SEC)
