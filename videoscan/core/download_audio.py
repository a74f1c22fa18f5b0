"""
Audio extraction: download via yt-dlp, then normalize with ffmpeg.
"""

import logging
from pathlib import Path

from videoscan.core.security_utils import run_subprocess_capture
from videoscan.core.normalize import normalize_audio
from videoscan.core.error_codes import JobError
from videoscan.core.constants import ErrorCode

logger = logging.getLogger(__name__)


def download_audio(video_url: str, output_dir: Path,
                   format_id: str = "bestaudio/best",
                   timeout: float = 600) -> Path:
    """
    Download audio-only stream using yt-dlp.
    Returns path to the downloaded file.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    output_template = str(output_dir / "source.%(ext)s")

    args = [
        "yt-dlp",
        "--no-playlist",
        "--no-progress",
        "-f", format_id,
        "-o", output_template,
        video_url,
    ]

    try:
        result = run_subprocess_capture(args, timeout=timeout)
    except Exception as e:
        raise JobError(ErrorCode.DOWNLOAD_FAILED, f"Audio download failed: {e}")

    if result.returncode != 0:
        stderr = result.stderr or ""
        raise JobError(ErrorCode.DOWNLOAD_FAILED,
                       f"yt-dlp download failed (rc={result.returncode}): {stderr[:300]}")

    # Find the downloaded file
    source_files = [p for p in output_dir.glob("source.*") if not p.name.endswith(".part")]
    if not source_files:
        raise JobError(ErrorCode.DOWNLOAD_FAILED, "No audio file found after download")

    downloaded = source_files[0]
    logger.info("Downloaded audio: %s", downloaded)
    return downloaded


class YtDlpAudioExtractor:
    """AudioExtractor backed by yt-dlp + ffmpeg."""

    def __init__(self, download_timeout: float = 600, normalize_timeout: float = 600):
        self.download_timeout = download_timeout
        self.normalize_timeout = normalize_timeout

    def extract(self, source_url: str, output_dir: Path) -> Path:
        source = download_audio(source_url, output_dir / "source",
                                timeout=self.download_timeout)
        return normalize_audio(source, output_dir / "normalized",
                               timeout=self.normalize_timeout)
