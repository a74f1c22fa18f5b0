"""
ElevenLabs Speech-to-Text integration.
Uses the scribe_v1 model with word-level timestamps and speaker labels.
Includes exponential backoff for rate-limit (429) responses.
"""

import json
import logging
import time
import random
import requests
from pathlib import Path

from videoscan.core.security_utils import get_api_key
from videoscan.core.error_codes import JobError
from videoscan.core.models import TranscriptUnit
from videoscan.core.constants import (
    ErrorCode, ELEVENLABS_API_BASE, ELEVENLABS_MODEL, ELEVENLABS_API_KEY_ENV,
)

logger = logging.getLogger(__name__)

ELEVENLABS_STT_URL = f"{ELEVENLABS_API_BASE}/speech-to-text"

_MAX_RATE_LIMIT_RETRIES = 4
_RATE_LIMIT_BASE_DELAY = 2.0   # seconds — doubles each retry with jitter


def _first(entry: dict, *keys, default=None):
    for key in keys:
        value = entry.get(key)
        if value is not None:
            return value
    return default


def extract_transcript_units(response: dict) -> list[TranscriptUnit]:
    """
    Turn an ElevenLabs response into ordered TranscriptUnits.
    Accepts word-level or segment-level payloads, optionally wrapped in 'data'.
    """
    if not isinstance(response, dict):
        return []
    body = response.get('data') if isinstance(response.get('data'), dict) else response
    entries = body.get('words') or body.get('segments') or []

    units = []
    for entry in entries:
        if not isinstance(entry, dict) or entry.get('type') == 'spacing':
            continue
        text = str(_first(entry, 'text', 'word', default='')).strip()
        if not text:
            continue
        try:
            start = float(_first(entry, 'start', 'start_time', default=0) or 0)
            end = float(_first(entry, 'end', 'end_time', default=start) or start)
        except (TypeError, ValueError):
            logger.warning("Skipping unit with bad timestamps: %r", entry)
            continue
        speaker = _first(entry, 'speaker_id', 'speaker')
        units.append(TranscriptUnit(
            text=text,
            start=start,
            end=max(start, end),
            speaker=str(speaker) if speaker is not None else None,
        ))
    return units


class ElevenLabsTranscriber:
    """Transcriber backed by the ElevenLabs speech-to-text REST API."""

    def __init__(self, api_key: str | None = None, timeout: float = 300,
                 model: str = ELEVENLABS_MODEL):
        self.api_key = api_key
        self.timeout = timeout
        self.model = model

    def transcribe(self, audio_path: Path) -> list[TranscriptUnit]:
        try:
            response = self._request(audio_path)
        except JobError as e:
            if not e.retryable:
                raise
            # Auto-retry once for other retryable errors
            logger.info("Retrying transcription after %s", e.code)
            response = self._request(audio_path)
        return extract_transcript_units(response)

    def _request(self, audio_path: Path) -> dict:
        """
        POST the audio file to ElevenLabs.
        Retries up to 4 times with exponential backoff on 429 responses.
        """
        api_key = self.api_key or get_api_key(ELEVENLABS_API_KEY_ENV)
        if not api_key:
            raise JobError(ErrorCode.MISSING_API_KEY,
                           f"ElevenLabs API key not set ({ELEVENLABS_API_KEY_ENV})")

        headers = {"xi-api-key": api_key}
        data = {"model_id": self.model, "diarize": "true", "timestamps_granularity": "word"}

        for attempt in range(_MAX_RATE_LIMIT_RETRIES + 1):
            try:
                audio_file = open(audio_path, 'rb')
            except OSError as e:
                raise JobError(ErrorCode.TRANSCRIBE_FAILED,
                               f"Cannot read audio file {audio_path}: {e}", retryable=False)

            try:
                with audio_file:
                    resp = requests.post(
                        ELEVENLABS_STT_URL,
                        headers=headers,
                        data=data,
                        files={"file": (audio_path.name, audio_file, "audio/wav")},
                        timeout=self.timeout,
                    )
            except requests.exceptions.Timeout:
                raise JobError(ErrorCode.TRANSCRIBE_TIMEOUT,
                               "ElevenLabs request timed out")
            except requests.exceptions.ConnectionError:
                raise JobError(ErrorCode.NETWORK_TRANSIENT,
                               "Network error connecting to ElevenLabs")
            except requests.exceptions.RequestException as e:
                raise JobError(ErrorCode.TRANSCRIBE_FAILED,
                               f"ElevenLabs request failed: {e}")

            if resp.status_code == 429:
                if attempt < _MAX_RATE_LIMIT_RETRIES:
                    # Exponential backoff with jitter: 2s, 4s, 8s, 16s (+/- 10%)
                    delay = _RATE_LIMIT_BASE_DELAY * (2 ** attempt)
                    delay *= 1 + random.uniform(-0.1, 0.1)
                    logger.warning(
                        "ElevenLabs rate limited (429) — retrying in %.1fs (attempt %d/%d)",
                        delay, attempt + 1, _MAX_RATE_LIMIT_RETRIES,
                    )
                    time.sleep(delay)
                    continue
                raise JobError(ErrorCode.NETWORK_TRANSIENT,
                               f"ElevenLabs rate limited (429) after {_MAX_RATE_LIMIT_RETRIES} retries",
                               retryable=False)

            if resp.status_code in (401, 403):
                raise JobError(ErrorCode.TRANSCRIBE_FAILED,
                               f"ElevenLabs rejected the API key ({resp.status_code})",
                               retryable=False)

            if resp.status_code != 200:
                # Sanitize error message (never log API key)
                error_body = resp.text[:300] if resp.text else "No response body"
                raise JobError(ErrorCode.TRANSCRIBE_FAILED,
                               f"ElevenLabs returned {resp.status_code}: {error_body}",
                               retryable=resp.status_code >= 500)

            try:
                return resp.json()
            except (json.JSONDecodeError, ValueError):
                raise JobError(ErrorCode.TRANSCRIBE_FAILED,
                               "Failed to parse ElevenLabs response JSON", retryable=False)

        # Should never reach here
        raise JobError(ErrorCode.NETWORK_TRANSIENT, "ElevenLabs request exhausted retries")
