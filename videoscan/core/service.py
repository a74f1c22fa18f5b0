"""
Request façade: submit a video, query status, wait for the result.
"""

import logging
import time
from pathlib import Path

from videoscan.core.classification_cache import ClassificationCache
from videoscan.core.classify_http import HttpClassifier
from videoscan.core.config import AppConfig
from videoscan.core.constants import JobStatus, RESULT_WAIT_SEC, POLL_INTERVAL_SEC
from videoscan.core.download_audio import YtDlpAudioExtractor
from videoscan.core.error_codes import ResultTimeoutError
from videoscan.core.job_store import JobStore
from videoscan.core.models import Job
from videoscan.core.pipeline import PipelineOrchestrator
from videoscan.core.thumbnail import ImgBBUploader, PlaywrightThumbnailCapturer
from videoscan.core.transcribe_elevenlabs import ElevenLabsTranscriber

logger = logging.getLogger(__name__)


class AnalysisService:
    """Answers submit/status/result queries from the job store."""

    def __init__(self, orchestrator: PipelineOrchestrator, store: JobStore,
                 result_wait_sec: float = RESULT_WAIT_SEC,
                 poll_interval_sec: float = POLL_INTERVAL_SEC):
        self.orchestrator = orchestrator
        self.store = store
        self.result_wait_sec = result_wait_sec
        self.poll_interval_sec = poll_interval_sec

    @classmethod
    def from_config(cls, config: AppConfig) -> "AnalysisService":
        """Wire the production adapters, store and cache."""
        settings = config.as_dict()
        Path(config.temp_dir).mkdir(parents=True, exist_ok=True)

        store = JobStore()
        cache = ClassificationCache(
            HttpClassifier(settings['classification_url'],
                           timeout=settings['classification_timeout_sec']),
            min_chars=settings['min_classification_chars'],
            max_entries=settings['cache_max_entries'],
        )
        thumbnailer = PlaywrightThumbnailCapturer(
            ImgBBUploader(timeout=settings['image_upload_timeout_sec'],
                          expiration_sec=settings['imgbb_expiration_sec']),
            timeout=settings['thumbnail_timeout_sec'],
            settle_sec=settings['thumbnail_settle_sec'],
        )
        orchestrator = PipelineOrchestrator(
            store, cache,
            thumbnailer=thumbnailer,
            audio_extractor=YtDlpAudioExtractor(
                download_timeout=settings['audio_download_timeout_sec'],
                normalize_timeout=settings['audio_normalize_timeout_sec'],
            ),
            transcriber=ElevenLabsTranscriber(timeout=settings['transcription_timeout_sec']),
            config=settings,
        )
        return cls(orchestrator, store,
                   result_wait_sec=config.result_wait_sec,
                   poll_interval_sec=config.poll_interval_sec)

    def submit(self, source_url: str) -> str:
        job_id = self.orchestrator.submit(source_url)
        logger.info("Submitted job %s", job_id)
        return job_id

    def get_status(self, job_id: str) -> dict:
        job = self.store.get(job_id)
        status = {"id": job.id, "status": job.status}
        if job.status == JobStatus.ERROR:
            status["error"] = job.error_message
            status["error_code"] = job.error_code
        return status

    def get_result(self, job_id: str, timeout: float | None = None) -> Job:
        """
        Return the job once it is terminal (completed or error).
        Polls up to `timeout` seconds, then raises ResultTimeoutError;
        the job itself keeps running.
        """
        wait_sec = self.result_wait_sec if timeout is None else timeout
        deadline = time.monotonic() + wait_sec

        job = self.store.get(job_id)
        while not job.is_terminal:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise ResultTimeoutError(job_id, wait_sec)
            time.sleep(min(self.poll_interval_sec, remaining))
            job = self.store.get(job_id)
        return job
