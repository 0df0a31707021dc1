"""Logit post-processing and tier mapping.

softmax():
    Numerically stable softmax (max-shifted before exponentiating).

argmax():
    First index holding the maximum, so ties go to the lower class.

predict():
    Scores -> Prediction (class, confidence, probabilities).

map_to_level():
    (class, confidence) -> one of the four politeness tiers. Confidence
    strictly above the threshold selects the extreme tier; a confidence
    equal to the threshold stays in the softer tier.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from ..config.model import POLITE_CLASS_INDEX, POLITE_CONFIDENCE_THRESHOLD
from ..state import PolitenessLevel, Prediction


def softmax(scores: Sequence[float]) -> list[float]:
    values = np.asarray(scores, dtype=np.float64)
    if values.size == 0:
        raise ValueError("softmax of an empty score vector")
    shifted = np.exp(values - values.max())
    return (shifted / shifted.sum()).tolist()


def argmax(values: Sequence[float]) -> int:
    if len(values) == 0:
        raise ValueError("argmax of an empty vector")
    # np.argmax returns the first occurrence of the maximum
    return int(np.argmax(np.asarray(values, dtype=np.float64)))


def predict(scores: Sequence[float]) -> Prediction:
    """Turn raw per-class scores into a Prediction."""
    probabilities = softmax(scores)
    predicted = argmax(probabilities)
    return Prediction(
        predicted_class=predicted,
        confidence=float(probabilities[predicted]),
        probabilities=tuple(probabilities),
    )


def map_to_level(
    predicted_class: int,
    confidence: float,
    threshold: float = POLITE_CONFIDENCE_THRESHOLD,
) -> PolitenessLevel:
    """Map the winning class and its probability to a politeness tier."""
    confident = confidence > threshold
    if predicted_class == POLITE_CLASS_INDEX:
        return PolitenessLevel.POLITE if confident else PolitenessLevel.SOMEWHAT_POLITE
    return PolitenessLevel.IMPOLITE if confident else PolitenessLevel.NEUTRAL


__all__ = ["softmax", "argmax", "predict", "map_to_level"]
