"""
Content-classification cache.
Memoizes classifier probabilities by a sha256 fingerprint of the text.
"""

import hashlib
import logging
import threading
from collections import OrderedDict

from videoscan.core.adapters import Classifier
from videoscan.core.constants import (
    NEUTRAL_PROBABILITY, MIN_CLASSIFICATION_CHARS, CACHE_MAX_ENTRIES,
)
from videoscan.core.error_codes import JobError

logger = logging.getLogger(__name__)


def fingerprint(text: str) -> str:
    return hashlib.sha256(text.encode('utf-8')).hexdigest()


class ClassificationCache:
    """
    Front door for every classification call.

    Short texts skip the classifier entirely. Classifier failures degrade to
    the neutral probability and are not cached. Two threads missing on the
    same text may both call the classifier; the last write wins.
    """

    def __init__(self, classifier: Classifier,
                 min_chars: int = MIN_CLASSIFICATION_CHARS,
                 max_entries: int = CACHE_MAX_ENTRIES):
        self.classifier = classifier
        self.min_chars = min_chars
        self.max_entries = max_entries   # 0 = unbounded
        self._lock = threading.Lock()
        self._entries: OrderedDict[str, float] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self):
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def get_or_compute(self, text: str) -> float:
        if len(text.strip()) < self.min_chars:
            return NEUTRAL_PROBABILITY

        key = fingerprint(text)
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                self.hits += 1
                return self._entries[key]
            self.misses += 1

        # classifier call happens outside the lock
        try:
            probability = float(self.classifier.score(text))
        except JobError as e:
            logger.warning("Classification failed, using neutral %.1f: %s",
                           NEUTRAL_PROBABILITY, e)
            return NEUTRAL_PROBABILITY
        except Exception as e:
            logger.error("Unexpected classifier error, using neutral %.1f: %s",
                         NEUTRAL_PROBABILITY, e, exc_info=True)
            return NEUTRAL_PROBABILITY

        probability = min(1.0, max(0.0, probability))
        with self._lock:
            self._entries[key] = probability
            self._entries.move_to_end(key)
            if self.max_entries:
                while len(self._entries) > self.max_entries:
                    self._entries.popitem(last=False)
        return probability
