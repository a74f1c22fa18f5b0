"""
Data models (plain dataclasses) for VideoScan.
"""

from dataclasses import dataclass, field, asdict
from typing import Optional

from videoscan.core.constants import JobStatus


@dataclass(frozen=True)
class TranscriptUnit:
    """One raw word/segment as returned by the transcription vendor."""
    text: str
    start: float
    end: float
    speaker: Optional[str] = None


@dataclass(frozen=True)
class TranscriptSegment:
    text: str
    start_time: float                # seconds
    end_time: float                  # seconds, >= start_time
    speaker: Optional[str]
    ai_probability: float            # 0..1

    @classmethod
    def from_unit(cls, unit: TranscriptUnit, ai_probability: float) -> "TranscriptSegment":
        start = float(unit.start)
        end = max(start, float(unit.end))
        return cls(
            text=unit.text,
            start_time=start,
            end_time=end,
            speaker=unit.speaker,
            ai_probability=min(1.0, max(0.0, float(ai_probability))),
        )


@dataclass(frozen=True)
class SentenceStats:
    total: int
    ai_leaning: int
    human_leaning: int
    neutral: int
    average_probability: float


@dataclass(frozen=True)
class Summary:
    overall_probability: float
    prediction: str
    confidence: str
    rationale: str
    sentence_stats: SentenceStats


@dataclass
class Job:
    id: str                          # UUID
    source_url: str
    status: str = JobStatus.PROCESSING
    thumbnail_url: Optional[str] = None
    segments: tuple[TranscriptSegment, ...] = field(default_factory=tuple)
    summary: Optional[Summary] = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    created_at: Optional[str] = None
    completed_at: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.status != JobStatus.PROCESSING

    def to_dict(self) -> dict:
        data = asdict(self)
        data['segments'] = [asdict(s) for s in self.segments]
        return data
