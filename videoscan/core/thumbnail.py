"""
Thumbnail capture: headless Chromium screenshot, hosted on ImgBB.
"""

import base64
import logging
import requests
from playwright.sync_api import sync_playwright

from videoscan.core.security_utils import get_api_key
from videoscan.core.error_codes import JobError
from videoscan.core.constants import (
    ErrorCode, IMGBB_UPLOAD_URL, IMGBB_API_KEY_ENV,
    SCREENSHOT_WIDTH, SCREENSHOT_HEIGHT, PLACEHOLDER_UPLOAD_FAILED,
)

logger = logging.getLogger(__name__)


class ImgBBUploader:
    """Uploads PNG bytes to ImgBB and returns the public URL."""

    def __init__(self, api_key: str | None = None, timeout: float = 30,
                 expiration_sec: int = 0):
        self.api_key = api_key
        self.timeout = timeout
        self.expiration_sec = expiration_sec

    def upload(self, image: bytes) -> str:
        api_key = self.api_key or get_api_key(IMGBB_API_KEY_ENV)
        if not api_key:
            raise JobError(ErrorCode.MISSING_API_KEY, f"ImgBB API key not set ({IMGBB_API_KEY_ENV})")

        form = {"key": api_key, "image": base64.b64encode(image).decode('ascii')}
        if self.expiration_sec:
            form["expiration"] = str(self.expiration_sec)

        try:
            resp = requests.post(IMGBB_UPLOAD_URL, data=form, timeout=self.timeout)
            body = resp.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            raise JobError(ErrorCode.UPLOAD_FAILED, f"ImgBB upload failed: {e}")

        if resp.status_code == 200 and body.get('success'):
            url = body['data']['url']
            logger.info("Image uploaded: %s", url)
            return url

        message = (body.get('error') or {}).get('message') or f"HTTP {resp.status_code}"
        raise JobError(ErrorCode.UPLOAD_FAILED, f"ImgBB upload failed: {message}")


class PlaywrightThumbnailCapturer:
    """ThumbnailCapturer that screenshots the video page in headless Chromium."""

    def __init__(self, uploader: ImgBBUploader, timeout: float = 15, settle_sec: float = 2):
        self.uploader = uploader
        self.timeout = timeout
        self.settle_sec = settle_sec

    def screenshot(self, source_url: str) -> bytes:
        with sync_playwright() as p:
            browser = p.chromium.launch(
                headless=True,
                args=["--no-sandbox", "--disable-setuid-sandbox"],
                timeout=self.timeout * 1000,
            )
            try:
                page = browser.new_page(
                    viewport={"width": SCREENSHOT_WIDTH, "height": SCREENSHOT_HEIGHT},
                )
                page.goto(source_url, wait_until="domcontentloaded",
                          timeout=self.timeout * 1000)
                page.wait_for_timeout(self.settle_sec * 1000)
                return page.screenshot(type="png", timeout=self.timeout * 1000)
            finally:
                browser.close()

    def capture(self, source_url: str) -> str:
        image = self.screenshot(source_url)
        try:
            return self.uploader.upload(image)
        except JobError as e:
            logger.error("ImgBB upload error: %s", e.message)
            return PLACEHOLDER_UPLOAD_FAILED
