"""
Pipeline orchestrator.
Drives one job at a time per worker thread: acquisition (thumbnail + audio in
parallel) → transcription → classification → aggregation.
"""

import json
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict
from pathlib import Path

from videoscan.core.adapters import (
    ThumbnailCapturer, AudioExtractor, Transcriber,
    capture_thumbnail_or_placeholder,
)
from videoscan.core.aggregate import summarize_segments
from videoscan.core.classification_cache import ClassificationCache
from videoscan.core.cleanup import cleanup_job_artifacts
from videoscan.core.constants import ErrorCode, JOBS_CACHE_DIR
from videoscan.core.error_codes import JobError, InvalidTransitionError
from videoscan.core.job_store import JobStore
from videoscan.core.models import TranscriptUnit, TranscriptSegment
from videoscan.core.url_parse import validate_youtube_url

logger = logging.getLogger(__name__)


class PipelineOrchestrator:
    """
    Starts one supervised worker thread per submitted job.
    Every worker ends with exactly one terminal write to the store.
    """

    def __init__(self, store: JobStore, cache: ClassificationCache,
                 thumbnailer: ThumbnailCapturer, audio_extractor: AudioExtractor,
                 transcriber: Transcriber, config: dict | None = None):
        self.store = store
        self.cache = cache
        self.thumbnailer = thumbnailer
        self.audio_extractor = audio_extractor
        self.transcriber = transcriber
        self.config = config or {}
        self._workers_lock = threading.Lock()
        self._workers: dict[str, threading.Thread] = {}

    # ── Config helpers ────────────────────────────────────────────────

    @property
    def temp_dir(self) -> Path:
        return Path(self.config.get('temp_dir', str(JOBS_CACHE_DIR)))

    @property
    def keep_debug(self) -> bool:
        return bool(self.config.get('keep_debug_artifacts', False))

    @property
    def per_segment(self) -> bool:
        return bool(self.config.get('per_segment_classification', False))

    # ── Submission / supervision ──────────────────────────────────────

    def submit(self, source_url: str) -> str:
        """Validate, create the job and start its worker. Returns the job id."""
        validate_youtube_url(source_url)
        source_url = source_url.strip()
        job_id = self.store.create(source_url)

        worker = threading.Thread(
            target=self.run, args=(job_id, source_url),
            name=f"job-{job_id[:8]}", daemon=True,
        )
        with self._workers_lock:
            self._prune_finished()
            self._workers[job_id] = worker
        worker.start()
        return job_id

    def _prune_finished(self):
        for job_id in [j for j, t in self._workers.items() if not t.is_alive() and t.ident]:
            del self._workers[job_id]

    def active_jobs(self) -> list[str]:
        with self._workers_lock:
            return [j for j, t in self._workers.items() if t.is_alive()]

    def join(self, job_id: str, timeout: float | None = None) -> bool:
        """Wait for a job's worker. Returns True if it has finished."""
        with self._workers_lock:
            worker = self._workers.get(job_id)
        if worker is None:
            return True
        worker.join(timeout)
        return not worker.is_alive()

    def join_all(self, timeout: float | None = None) -> bool:
        with self._workers_lock:
            workers = list(self._workers.values())
        for worker in workers:
            worker.join(timeout)
        return not any(w.is_alive() for w in workers)

    # ── Job processing pipeline ───────────────────────────────────────

    def run(self, job_id: str, source_url: str):
        """Process a single job. Never raises."""
        workspace = self.temp_dir / job_id

        try:
            self._process_job(job_id, source_url, workspace)
        except JobError as e:
            logger.warning("Job %s failed: %s", job_id, e)
            self._fail(job_id, e.code, e.message)
        except Exception as e:
            logger.error("Unexpected error processing job %s: %s", job_id, e, exc_info=True)
            self._fail(job_id, ErrorCode.UNEXPECTED, str(e) or type(e).__name__)
        finally:
            try:
                cleanup_job_artifacts(workspace, self.keep_debug)
            except Exception as e:
                logger.warning("Cleanup failed for job %s: %s", job_id, e)
            if not self.store.is_terminal(job_id):
                self._fail(job_id, ErrorCode.PIPELINE_ABORTED,
                           "Pipeline exited without writing a result")

    def _fail(self, job_id: str, code: str, message: str):
        try:
            self.store.mark_error(job_id, message, code=code)
        except InvalidTransitionError:
            logger.warning("Job %s already terminal; dropping error %s", job_id, code)

    def _process_job(self, job_id: str, source_url: str, workspace: Path):
        # ── Stage 1: acquisition barrier ──
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix=f"acquire-{job_id[:8]}") as pool:
            thumb_future = pool.submit(capture_thumbnail_or_placeholder,
                                       self.thumbnailer, source_url)
            audio_future = pool.submit(self.audio_extractor.extract, source_url, workspace)
        # both futures have settled once the executor exits

        self.store.set_thumbnail(job_id, thumb_future.result())
        audio_path = audio_future.result()
        logger.info("Job %s acquired audio %s", job_id, audio_path)

        # ── Stage 2: transcription ──
        units = self.transcriber.transcribe(Path(audio_path))
        if not units:
            raise JobError(ErrorCode.TRANSCRIPT_EMPTY, "Transcription returned no speech",
                           retryable=False)
        logger.info("Job %s transcribed %d units", job_id, len(units))
        if self.keep_debug:
            self._save_units(workspace, units)

        # ── Stage 3: classification ──
        segments = self._classify(units)

        # ── Stage 4: aggregation ──
        summary = summarize_segments(segments)
        self.store.mark_completed(job_id, segments, summary)

    def _classify(self, units: list[TranscriptUnit]) -> list[TranscriptSegment]:
        if self.per_segment:
            return [TranscriptSegment.from_unit(u, self.cache.get_or_compute(u.text))
                    for u in units]

        text = ' '.join(u.text for u in units)
        probability = self.cache.get_or_compute(text)
        return [TranscriptSegment.from_unit(u, probability) for u in units]

    @staticmethod
    def _save_units(workspace: Path, units: list[TranscriptUnit]):
        meta_dir = workspace / "meta"
        meta_dir.mkdir(parents=True, exist_ok=True)
        with open(meta_dir / "transcript_units.json", 'w') as f:
            json.dump([asdict(u) for u in units], f, indent=2)
