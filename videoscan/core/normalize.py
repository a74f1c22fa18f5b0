"""
Audio normalization using ffmpeg.
Target: mono, 16kHz, 16-bit PCM WAV.
"""

import logging
from pathlib import Path

from videoscan.core.security_utils import run_subprocess_capture
from videoscan.core.error_codes import JobError
from videoscan.core.constants import (
    ErrorCode, NORM_CHANNELS, NORM_SAMPLE_RATE, NORM_CODEC, NORM_FORMAT,
)

logger = logging.getLogger(__name__)


def normalize_audio(input_path: Path, output_dir: Path, timeout: float = 600) -> Path:
    """
    Convert audio to mono 16kHz PCM WAV.
    Returns path to normalized file.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / f"audio.{NORM_FORMAT}"

    args = [
        "ffmpeg",
        "-y",                           # overwrite
        "-i", str(input_path),
        "-vn",
        "-ac", str(NORM_CHANNELS),      # mono
        "-ar", str(NORM_SAMPLE_RATE),   # 16kHz
        "-codec:a", NORM_CODEC,
        "-f", NORM_FORMAT,
        str(output_path),
    ]

    try:
        result = run_subprocess_capture(args, timeout=timeout)
    except Exception as e:
        raise JobError(ErrorCode.FFMPEG_NORMALIZE, f"ffmpeg normalization failed: {e}")

    if result.returncode != 0:
        stderr = result.stderr or ""
        raise JobError(ErrorCode.FFMPEG_NORMALIZE,
                       f"ffmpeg failed (rc={result.returncode}): {stderr[-300:]}")

    if not output_path.exists():
        raise JobError(ErrorCode.FFMPEG_NORMALIZE, "Normalized file not created")

    logger.info("Normalized audio: %s", output_path)
    return output_path
