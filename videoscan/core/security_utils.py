"""
Security utilities for VideoScan.
- Safe subprocess execution (argument arrays only)
- API keys from the environment (never logged)
"""

import os
import subprocess
import logging

logger = logging.getLogger(__name__)


# ── Subprocess safety ─────────────────────────────────────────────────

def run_subprocess(args: list[str], **kwargs) -> subprocess.CompletedProcess:
    """
    Execute a subprocess using argument arrays only.
    shell=True is explicitly forbidden.
    """
    if not isinstance(args, (list, tuple)):
        raise TypeError("Subprocess args must be a list/tuple, not a string")

    # Force shell=False — remove any caller-supplied value, then set it once
    kwargs.pop('shell', None)

    logger.debug("Running subprocess: %s", ' '.join(str(a) for a in args))
    return subprocess.run(args, shell=False, **kwargs)


def run_subprocess_capture(args: list[str], timeout: float = 300, **kwargs) -> subprocess.CompletedProcess:
    """Run subprocess and capture stdout/stderr."""
    return run_subprocess(
        args,
        capture_output=True,
        text=True,
        timeout=timeout,
        **kwargs,
    )


# ── API keys ──────────────────────────────────────────────────────────

def get_api_key(env_name: str) -> str | None:
    """Read an API key from the environment. Blank values count as missing."""
    value = os.environ.get(env_name, "").strip()
    return value or None


def mask_secret(value: str | None) -> str:
    """Render a secret for diagnostics without revealing it."""
    if not value:
        return "(not set)"
    if len(value) <= 8:
        return "****"
    return f"{value[:4]}…{value[-2:]}"
