"""
YouTube URL parsing and validation.
"""

import re
from urllib.parse import urlparse, parse_qs

from videoscan.core.constants import YOUTUBE_URL_PATTERNS
from videoscan.core.error_codes import ValidationError


def extract_video_id(url: str) -> str | None:
    """
    Extract the 11-character video_id from a YouTube URL.
    Returns None if the URL is not a valid YouTube URL.
    """
    if not isinstance(url, str):
        return None
    url = url.strip()
    if not url or any(ch.isspace() for ch in url):
        return None

    for pattern in YOUTUBE_URL_PATTERNS:
        m = re.search(pattern, url)
        if m:
            return m.group(1)

    # Fallback: parse query string for 'v' parameter
    parsed = urlparse(url if '://' in url else f"https://{url}")
    host = parsed.netloc.lower()
    if host == 'youtube.com' or host.endswith('.youtube.com') or host == 'youtu.be':
        v = parse_qs(parsed.query).get('v', [None])[0]
        if v and re.match(r'^[a-zA-Z0-9_-]{11}$', v):
            return v

    return None


def validate_youtube_url(url: str) -> str:
    """
    Validate a YouTube URL and return the video_id.
    Raises ValidationError if invalid.
    """
    video_id = extract_video_id(url)
    if not video_id:
        raise ValidationError(f"Not a valid YouTube URL: {url!r}")
    return video_id


def is_youtube_url(url: str) -> bool:
    """Quick check if a string looks like a YouTube URL."""
    return extract_video_id(url) is not None
