"""
AI-text detection over HTTP.
The detector answers with a binary label; label 0 means AI-written.
"""

import json
import logging
import requests

from videoscan.core.error_codes import JobError
from videoscan.core.constants import (
    ErrorCode, DEFAULT_CLASSIFICATION_URL,
    AI_LABEL, AI_LABEL_PROBABILITY, HUMAN_LABEL_PROBABILITY,
)

logger = logging.getLogger(__name__)


def label_to_probability(label) -> float:
    return AI_LABEL_PROBABILITY if label == AI_LABEL else HUMAN_LABEL_PROBABILITY


class HttpClassifier:
    """Classifier that POSTs {"sentence": text} to a detection endpoint."""

    def __init__(self, url: str = DEFAULT_CLASSIFICATION_URL, timeout: float = 15):
        self.url = url
        self.timeout = timeout

    def score(self, text: str) -> float:
        try:
            resp = requests.post(self.url, json={"sentence": text}, timeout=self.timeout)
        except requests.exceptions.Timeout:
            raise JobError(ErrorCode.CLASSIFICATION_FAILED,
                           f"Classifier timed out after {self.timeout}s")
        except requests.exceptions.RequestException as e:
            raise JobError(ErrorCode.CLASSIFICATION_FAILED, f"Classifier request failed: {e}")

        if resp.status_code != 200:
            raise JobError(ErrorCode.CLASSIFICATION_FAILED,
                           f"Classifier returned {resp.status_code}: {resp.text[:200]}")

        try:
            label = resp.json()['output']['label']
        except (json.JSONDecodeError, ValueError, KeyError, TypeError):
            raise JobError(ErrorCode.CLASSIFICATION_FAILED,
                           f"Unexpected classifier response: {resp.text[:200]}")

        probability = label_to_probability(label)
        logger.debug("Classifier label %r -> %.2f (%d chars)", label, probability, len(text))
        return probability
