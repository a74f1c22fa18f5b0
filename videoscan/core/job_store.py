"""
In-memory job store for VideoScan.
Thread-safe via a short index lock plus one lock per job record.
"""

import copy
import threading
import uuid
import logging
from datetime import datetime, timezone
from typing import Iterable

from videoscan.core.constants import (
    JobStatus, ErrorCode, MAX_ERROR_MESSAGE_LEN,
)
from videoscan.core.error_codes import JobNotFoundError, InvalidTransitionError
from videoscan.core.models import Job, TranscriptSegment, Summary

logger = logging.getLogger(__name__)


class _Record:
    __slots__ = ('job', 'lock')

    def __init__(self, job: Job):
        self.job = job
        self.lock = threading.Lock()


class JobStore:
    """
    Single source of truth for job status and results.

    Jobs start in PROCESSING and move exactly once to COMPLETED or ERROR.
    Readers always receive a copy, never the live record.
    """

    def __init__(self):
        self._lock = threading.Lock()    # guards _records only
        self._records: dict[str, _Record] = {}

    # ── Helpers ───────────────────────────────────────────────────────

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()

    def _record(self, job_id: str) -> _Record:
        with self._lock:
            record = self._records.get(job_id)
        if record is None:
            raise JobNotFoundError(job_id)
        return record

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, job_id: object) -> bool:
        with self._lock:
            return job_id in self._records

    def list_ids(self) -> list[str]:
        with self._lock:
            return list(self._records)

    # ── Job lifecycle ─────────────────────────────────────────────────

    def create(self, source_url: str) -> str:
        job_id = str(uuid.uuid4())
        record = _Record(Job(id=job_id, source_url=source_url, created_at=self._now()))
        with self._lock:
            self._records[job_id] = record
        logger.info("Created job %s for %s", job_id, source_url)
        return job_id

    def get(self, job_id: str) -> Job:
        record = self._record(job_id)
        with record.lock:
            return copy.copy(record.job)

    def is_terminal(self, job_id: str) -> bool:
        record = self._record(job_id)
        with record.lock:
            return record.job.is_terminal

    def set_thumbnail(self, job_id: str, thumbnail_url: str):
        record = self._record(job_id)
        with record.lock:
            if record.job.is_terminal:
                raise InvalidTransitionError(job_id, record.job.status, "set thumbnail on")
            record.job.thumbnail_url = thumbnail_url

    def mark_completed(self, job_id: str, segments: Iterable[TranscriptSegment],
                       summary: Summary):
        segments = tuple(segments)
        if not segments:
            raise ValueError("A completed job needs at least one segment")
        record = self._record(job_id)
        with record.lock:
            if record.job.is_terminal:
                raise InvalidTransitionError(job_id, record.job.status, "complete")
            record.job.segments = segments
            record.job.summary = summary
            record.job.completed_at = self._now()
            record.job.status = JobStatus.COMPLETED
        logger.info("Job %s completed (%d segments, %s)",
                    job_id, len(segments), summary.prediction)

    def mark_error(self, job_id: str, message: str, code: str = ErrorCode.UNEXPECTED):
        message = (message or "Unknown error")[:MAX_ERROR_MESSAGE_LEN]
        record = self._record(job_id)
        with record.lock:
            if record.job.is_terminal:
                raise InvalidTransitionError(job_id, record.job.status, "fail")
            record.job.error_code = code
            record.job.error_message = message
            record.job.completed_at = self._now()
            record.job.status = JobStatus.ERROR
        logger.info("Job %s failed: [%s] %s", job_id, code, message)
