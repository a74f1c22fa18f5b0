"""
Segment aggregation: scored segments → overall verdict.
"""

from typing import Sequence

from videoscan.core.constants import (
    NEUTRAL_PROBABILITY, AI_LEANING_THRESHOLD, MIXED_THRESHOLD,
    HUMAN_LEANING_THRESHOLD, HIGH_CONFIDENCE_SHARE, Prediction, Confidence,
)
from videoscan.core.models import TranscriptSegment, Summary, SentenceStats


def predict(probability: float) -> str:
    if probability >= AI_LEANING_THRESHOLD:
        return Prediction.AI
    if probability >= MIXED_THRESHOLD:
        return Prediction.MIXED
    return Prediction.HUMAN


def summarize_segments(segments: Sequence[TranscriptSegment]) -> Summary:
    """
    Build the overall verdict for a list of segments.
    An empty list yields the neutral probability with medium confidence.
    """
    total = len(segments)
    probabilities = [s.ai_probability for s in segments]
    average = sum(probabilities) / total if total else NEUTRAL_PROBABILITY

    ai_count = sum(1 for p in probabilities if p >= AI_LEANING_THRESHOLD)
    human_count = sum(1 for p in probabilities if p <= HUMAN_LEANING_THRESHOLD)

    dominant = max(ai_count, human_count)
    confidence = Confidence.HIGH if dominant > total * HIGH_CONFIDENCE_SHARE else Confidence.MEDIUM

    return Summary(
        overall_probability=average,
        prediction=predict(average),
        confidence=confidence,
        rationale=f"{ai_count} AI-leaning, {human_count} human-leaning segments",
        sentence_stats=SentenceStats(
            total=total,
            ai_leaning=ai_count,
            human_leaning=human_count,
            neutral=total - ai_count - human_count,
            average_probability=average,
        ),
    )
