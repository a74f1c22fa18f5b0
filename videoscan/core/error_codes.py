"""
Standardised error handling for VideoScan.
"""

from videoscan.core.constants import ErrorCode, RETRYABLE_ERRORS


class JobError(Exception):
    """Raised when a job encounters a known error condition."""

    def __init__(self, code: str, message: str, retryable: bool | None = None):
        self.code = code
        self.message = message
        # auto-detect retryable from code if not explicitly set
        self.retryable = retryable if retryable is not None else (code in RETRYABLE_ERRORS)
        super().__init__(f"[{code}] {message}")


class ValidationError(JobError):
    """The submitted source reference is not a recognizable video URL."""

    def __init__(self, message: str):
        super().__init__(ErrorCode.INVALID_URL, message, retryable=False)


class JobNotFoundError(JobError):
    def __init__(self, job_id: str):
        self.job_id = job_id
        super().__init__(ErrorCode.JOB_NOT_FOUND, f"Job not found: {job_id}", retryable=False)


class InvalidTransitionError(JobError):
    def __init__(self, job_id: str, status: str, action: str):
        self.job_id = job_id
        self.status = status
        super().__init__(ErrorCode.INVALID_TRANSITION,
                         f"Cannot {action} job {job_id} in state {status!r}",
                         retryable=False)


class ResultTimeoutError(JobError):
    """The caller's wait expired; the job itself keeps running."""

    def __init__(self, job_id: str, waited_sec: float):
        self.job_id = job_id
        self.waited_sec = waited_sec
        super().__init__(ErrorCode.RESULT_TIMEOUT,
                         f"Job {job_id} still processing after {waited_sec:.0f}s",
                         retryable=True)


def is_retryable(code: str) -> bool:
    return code in RETRYABLE_ERRORS
