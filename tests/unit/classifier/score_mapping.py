"""Unit tests for softmax/argmax post-processing and tier mapping."""

from __future__ import annotations

import math

import pytest

from politeguard.classifier import argmax, map_to_level, predict, softmax
from politeguard.state import PolitenessLevel


def test_softmax_sums_to_one() -> None:
    probs = softmax([2.0, -1.0])
    assert math.isclose(sum(probs), 1.0)
    assert probs[0] > probs[1]


def test_softmax_is_shift_invariant() -> None:
    base = softmax([0.0, 1.0])
    shifted = softmax([1000.0, 1001.0])
    assert shifted == pytest.approx(base)
    assert all(math.isfinite(p) for p in shifted)


def test_softmax_rejects_empty() -> None:
    with pytest.raises(ValueError):
        softmax([])


def test_argmax_prefers_first_on_ties() -> None:
    assert argmax([0.5, 0.5]) == 0
    assert argmax([0.1, 0.7, 0.7]) == 1


def test_argmax_rejects_empty() -> None:
    with pytest.raises(ValueError):
        argmax([])


def test_predict_equal_logits_is_polite_half() -> None:
    prediction = predict([0.0, 0.0])
    assert prediction.predicted_class == 0
    assert prediction.confidence == pytest.approx(0.5)
    assert prediction.probabilities == pytest.approx((0.5, 0.5))


def test_predict_impolite_winner() -> None:
    prediction = predict([0.0, 3.0])
    assert prediction.predicted_class == 1
    assert prediction.confidence == pytest.approx(math.exp(3) / (math.exp(3) + 1))


@pytest.mark.parametrize(
    ("predicted_class", "confidence", "expected"),
    [
        (0, 0.95, PolitenessLevel.POLITE),
        (0, 0.8000001, PolitenessLevel.POLITE),
        (0, 0.8, PolitenessLevel.SOMEWHAT_POLITE),
        (0, 0.5, PolitenessLevel.SOMEWHAT_POLITE),
        (1, 0.95, PolitenessLevel.IMPOLITE),
        (1, 0.8, PolitenessLevel.NEUTRAL),
        (1, 0.6, PolitenessLevel.NEUTRAL),
    ],
)
def test_map_to_level(predicted_class: int, confidence: float, expected: PolitenessLevel) -> None:
    assert map_to_level(predicted_class, confidence) is expected


def test_map_to_level_custom_threshold() -> None:
    assert map_to_level(0, 0.7, threshold=0.6) is PolitenessLevel.POLITE
    assert map_to_level(1, 0.7, threshold=0.9) is PolitenessLevel.NEUTRAL


def test_level_labels_and_tiers() -> None:
    assert [level.display_name for level in PolitenessLevel] == [
        "Polite",
        "Somewhat Polite",
        "Neutral",
        "Impolite",
    ]
    assert [level.tier for level in PolitenessLevel] == [0, 1, 2, 3]
    assert all(level.description for level in PolitenessLevel)
