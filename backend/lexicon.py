"""Static emotion vocabulary: labels, trigger keywords and canned descriptions."""

from types import MappingProxyType
from typing import Mapping, Tuple

JOY = "joy"
SADNESS = "sadness"
ANGER = "anger"
NEUTRAL = "neutral"

EMOTION_LABELS: Tuple[str, ...] = (JOY, SADNESS, ANGER, NEUTRAL)

# Evaluation order doubles as the tie-break precedence
SCORED_EMOTIONS: Tuple[str, ...] = (JOY, SADNESS, ANGER)

DEFAULT_LANGUAGE = "english"
SUPPORTED_LANGUAGES: Tuple[str, ...] = ("english", "hindi")

KEYWORD_WEIGHT = 0.2
NEUTRAL_THRESHOLD = 0.1

_LEXICON = {
    "english": {
        JOY: ("happy", "joy", "wonderful", "great", "excited", "smile", "laugh", "pleasure", "delighted"),
        SADNESS: ("sad", "unhappy", "depressed", "down", "sorrow", "miserable", "upset", "gloomy", "heartbroken"),
        ANGER: ("angry", "mad", "frustrated", "annoyed", "furious", "rage", "outraged", "irritated"),
    },
    "hindi": {
        JOY: ("खुश", "आनंद", "प्रसन्न", "हर्षित", "मज़ा", "खुशी", "हँसी", "मस्ती", "उत्साह"),
        SADNESS: ("दुःख", "उदास", "दुखी", "अफ़सोस", "निराश", "दिल टूटा", "गम", "रोना", "पीड़ा"),
        ANGER: ("गुस्सा", "क्रोध", "नाराज़", "चिढ़", "आक्रोश", "रोष", "भड़का हुआ", "कुपित", "क्रोधित"),
    },
}

LEXICON: Mapping[str, Mapping[str, Tuple[str, ...]]] = MappingProxyType(
    {language: MappingProxyType(entries) for language, entries in _LEXICON.items()}
)

DESCRIPTIONS: Mapping[str, str] = MappingProxyType(
    {
        JOY: "You're feeling happy and upbeat! We'll find some uplifting tunes to match your positive energy.",
        SADNESS: "You seem to be feeling down or reflective. We'll suggest some music that resonates with your current mood.",
        ANGER: "You appear to be feeling frustrated or upset. We'll recommend some tracks to help channel those emotions.",
        NEUTRAL: "Your mood seems balanced or neutral. We'll suggest some gentle tracks that won't disrupt your state of mind.",
    }
)

SELECTED_DESCRIPTIONS: Mapping[str, str] = MappingProxyType(
    {
        JOY: "You've selected a joyful mood! Here are some uplifting tunes to match your positive energy.",
        SADNESS: "You've selected a reflective mood. Here are some tracks that resonate with your melancholic feelings.",
        ANGER: "You've selected an energetic mood. Here are some intense tracks to help channel your emotions.",
        NEUTRAL: "You've selected a balanced mood. Here are some gentle tracks that won't disrupt your state of mind.",
    }
)


def is_emotion(value: object) -> bool:
    return value in EMOTION_LABELS


def keywords_for(language: str) -> Mapping[str, Tuple[str, ...]]:
    """Keyword sets for ``language``; anything we don't know reads as English."""
    return LEXICON.get((language or "").lower(), LEXICON[DEFAULT_LANGUAGE])
