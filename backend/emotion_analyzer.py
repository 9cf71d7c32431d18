import logging
import random
from dataclasses import asdict, dataclass
from typing import Dict, Iterable, Optional, Tuple

from errors import InvalidInputError
from lexicon import (
    DEFAULT_LANGUAGE,
    DESCRIPTIONS,
    EMOTION_LABELS,
    KEYWORD_WEIGHT,
    NEUTRAL,
    NEUTRAL_THRESHOLD,
    SCORED_EMOTIONS,
    keywords_for,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassificationResult:
    type: str
    score: float
    description: str

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


class EmotionAnalyzer:
    """Keyword-scored text emotion classifier with a stand-in for webcam snapshots."""

    SNAPSHOT_CONFIDENCE = 0.85

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def classify(self, text: str, language: str = DEFAULT_LANGUAGE) -> ClassificationResult:
        scores = self._normalize(self._raw_scores(text, language))
        label, score = self._dominant(
            ((emotion, scores[emotion]) for emotion in SCORED_EMOTIONS)
        )
        logger.debug("Classified %r (%s) as %s with %.2f", text, language, label, score)
        return ClassificationResult(type=label, score=score, description=DESCRIPTIONS[label])

    def detect_from_snapshot(self, image_data: str) -> ClassificationResult:
        """Pick a label for a webcam frame.

        There is no facial-expression model behind this: the frame only has to
        be present, and the label is drawn at random with a fixed confidence.
        """
        if not isinstance(image_data, str) or not image_data:
            raise InvalidInputError("No image data provided.")

        label = self._rng.choice(EMOTION_LABELS)
        return ClassificationResult(
            type=label,
            score=self.SNAPSHOT_CONFIDENCE,
            description=DESCRIPTIONS[label],
        )

    # ------------------------------------------------------------------
    # Scoring helpers
    # ------------------------------------------------------------------
    def _raw_scores(self, text: str, language: str) -> Dict[str, float]:
        lowered = (text or "").lower()
        lexicon = keywords_for(language)

        scores = {emotion: 0.0 for emotion in SCORED_EMOTIONS}
        for emotion in SCORED_EMOTIONS:
            for keyword in lexicon[emotion]:
                if keyword in lowered:
                    scores[emotion] += KEYWORD_WEIGHT
        return scores

    def _normalize(self, scores: Dict[str, float]) -> Dict[str, float]:
        total = sum(scores.values())
        if total <= 0:
            return scores
        return {emotion: min(score / total, 1.0) for emotion, score in scores.items()}

    def _dominant(self, ranked: Iterable[Tuple[str, float]]) -> Tuple[str, float]:
        # Only a strictly greater score takes over, so earlier labels win ties
        best_label, best_score = NEUTRAL, NEUTRAL_THRESHOLD
        for label, score in ranked:
            if score > best_score:
                best_label, best_score = label, score
        return best_label, best_score
