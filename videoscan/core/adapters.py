"""
Capability interfaces for the external collaborators.

Each collaborator exposes a single method. Concrete implementations live in
thumbnail.py, download_audio.py, transcribe_elevenlabs.py and
classify_http.py; tests substitute fakes.
"""

import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from videoscan.core.constants import PLACEHOLDER_SCREENSHOT_FAILED
from videoscan.core.models import TranscriptUnit

logger = logging.getLogger(__name__)


@runtime_checkable
class ThumbnailCapturer(Protocol):
    def capture(self, source_url: str) -> str:
        """Return a hosted image URL for a frame of the video."""
        ...


@runtime_checkable
class AudioExtractor(Protocol):
    def extract(self, source_url: str, output_dir: Path) -> Path:
        """Return the path of a mono 16kHz audio artifact inside output_dir."""
        ...


@runtime_checkable
class Transcriber(Protocol):
    def transcribe(self, audio_path: Path) -> list[TranscriptUnit]:
        """Return the recognized units in time order."""
        ...


@runtime_checkable
class Classifier(Protocol):
    def score(self, text: str) -> float:
        """Return the probability (0..1) that text is AI-generated."""
        ...


def capture_thumbnail_or_placeholder(capturer: ThumbnailCapturer, source_url: str) -> str:
    """Thumbnail capture never fails a job: any error yields the placeholder."""
    try:
        reference = capturer.capture(source_url)
    except Exception as e:
        logger.error("Screenshot failed for %s: %s", source_url, e)
        return PLACEHOLDER_SCREENSHOT_FAILED
    if not reference:
        logger.error("Screenshot for %s returned no reference", source_url)
        return PLACEHOLDER_SCREENSHOT_FAILED
    return reference
