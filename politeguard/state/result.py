"""Classification output dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PolitenessLevel(str, Enum):
    """Four-tier politeness taxonomy."""

    POLITE = "polite"
    SOMEWHAT_POLITE = "somewhat_polite"
    NEUTRAL = "neutral"
    IMPOLITE = "impolite"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def tier(self) -> int:
        """0 for the most polite tier through 3 for the least."""
        return _TIERS[self]


_DISPLAY_NAMES = {
    PolitenessLevel.POLITE: "Polite",
    PolitenessLevel.SOMEWHAT_POLITE: "Somewhat Polite",
    PolitenessLevel.NEUTRAL: "Neutral",
    PolitenessLevel.IMPOLITE: "Impolite",
}

_DESCRIPTIONS = {
    PolitenessLevel.POLITE: (
        "Text is considerate and shows respect and good manners, often including "
        "courteous phrases and a friendly tone."
    ),
    PolitenessLevel.SOMEWHAT_POLITE: (
        "Text is generally respectful but lacks warmth or formality, communicating "
        "with a decent level of courtesy."
    ),
    PolitenessLevel.NEUTRAL: (
        "Text is straightforward and factual, without emotional undertones or "
        "specific attempts at politeness."
    ),
    PolitenessLevel.IMPOLITE: (
        "Text is disrespectful or rude, often blunt or dismissive, showing a lack "
        "of consideration for the recipient's feelings."
    ),
}

_TIERS = {
    PolitenessLevel.POLITE: 0,
    PolitenessLevel.SOMEWHAT_POLITE: 1,
    PolitenessLevel.NEUTRAL: 2,
    PolitenessLevel.IMPOLITE: 3,
}


@dataclass(frozen=True, slots=True)
class Prediction:
    """Post-processed forward-pass output.

    Attributes:
        predicted_class: Argmax class index (0 = polite, 1 = impolite).
        confidence: Probability of the predicted class.
        probabilities: Full softmax vector.
    """

    predicted_class: int
    confidence: float
    probabilities: tuple[float, ...]


@dataclass(frozen=True, slots=True)
class ClassificationResult:
    """Terminal artifact of a completed analysis."""

    level: PolitenessLevel
    description: str
    elapsed_ms: int
    confidence: float | None = None


__all__ = ["PolitenessLevel", "Prediction", "ClassificationResult"]
