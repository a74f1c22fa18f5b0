#!/usr/bin/env python3
"""
VideoScan v1.0.0 — command-line entry point.

    python main.py analyze <youtube-url> [--timeout SEC]
    python main.py diagnostics
"""

import sys
import json
import logging
import argparse
from pathlib import Path
from datetime import datetime

from videoscan.core.constants import APP_NAME, APP_VERSION, LOG_DIR, JobStatus
from videoscan.core.config import AppConfig
from videoscan.core.error_codes import JobError, ValidationError, ResultTimeoutError

logger = logging.getLogger("videoscan")

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INVALID = 2


def setup_logging(verbose: bool = False, log_dir: Path = LOG_DIR):
    """Log to <log_dir>/videoscan.log and to stderr."""
    log_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(log_dir / "videoscan.log", encoding="utf-8"),
            logging.StreamHandler(sys.stderr),
        ],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="videoscan",
                                     description="Detect AI-generated speech in YouTube videos.")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.json")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    analyze = sub.add_parser("analyze", help="Analyze a YouTube video")
    analyze.add_argument("url")
    analyze.add_argument("--timeout", type=float, default=None,
                         help="Seconds to wait for the result (default: result_wait_sec)")

    sub.add_parser("diagnostics", help="Show tool versions and API key status")
    return parser


def cmd_analyze(args, config: AppConfig) -> int:
    from videoscan.core.service import AnalysisService

    service = AnalysisService.from_config(config)
    try:
        job_id = service.submit(args.url)
    except ValidationError as e:
        print(json.dumps({"error": e.message, "error_code": e.code}), file=sys.stderr)
        return EXIT_INVALID

    try:
        job = service.get_result(job_id, timeout=args.timeout)
    except ResultTimeoutError as e:
        print(json.dumps({"id": job_id, "error": e.message, "error_code": e.code}),
              file=sys.stderr)
        return EXIT_FAILED

    print(json.dumps(job.to_dict(), indent=2))
    return EXIT_OK if job.status == JobStatus.COMPLETED else EXIT_FAILED


def cmd_diagnostics(args, config: AppConfig) -> int:
    from videoscan.core.diagnostics import get_diagnostics

    info = get_diagnostics()
    info["config"] = config.as_dict()
    print(json.dumps(info, indent=2))
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    logger.info("%s v%s starting at %s", APP_NAME, APP_VERSION, datetime.now().isoformat())
    config = AppConfig(args.config)

    try:
        if args.command == "analyze":
            return cmd_analyze(args, config)
        return cmd_diagnostics(args, config)
    except JobError as e:
        logger.error("Request failed: %s", e)
        print(json.dumps({"error": e.message, "error_code": e.code}), file=sys.stderr)
        return EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
