"""
Diagnostics: tool version detection and credential checks.
"""

import importlib.util
import logging

from videoscan.core.security_utils import run_subprocess_capture, get_api_key, mask_secret
from videoscan.core.constants import ELEVENLABS_API_KEY_ENV, IMGBB_API_KEY_ENV

logger = logging.getLogger(__name__)


def get_ytdlp_version() -> str:
    """Return yt-dlp version string, or error message."""
    try:
        result = run_subprocess_capture(["yt-dlp", "--version"], timeout=10)
        if result.returncode == 0:
            return result.stdout.strip()
        return f"Error (rc={result.returncode})"
    except FileNotFoundError:
        return "Not installed"
    except Exception as e:
        return f"Error: {e}"


def get_ffmpeg_version() -> str:
    """Return ffmpeg version string, or error message."""
    try:
        result = run_subprocess_capture(["ffmpeg", "-version"], timeout=10)
        if result.returncode == 0:
            return result.stdout.strip().splitlines()[0]
        return f"Error (rc={result.returncode})"
    except FileNotFoundError:
        return "Not installed"
    except Exception as e:
        return f"Error: {e}"


def has_playwright() -> bool:
    return importlib.util.find_spec("playwright") is not None


def check_api_keys() -> dict:
    return {
        name: mask_secret(get_api_key(name))
        for name in (ELEVENLABS_API_KEY_ENV, IMGBB_API_KEY_ENV)
    }


def get_diagnostics() -> dict:
    """Gather all diagnostic information."""
    return {
        "ytdlp_version": get_ytdlp_version(),
        "ffmpeg_version": get_ffmpeg_version(),
        "playwright_installed": has_playwright(),
        "api_keys": check_api_keys(),
    }
