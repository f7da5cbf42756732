from __future__ import annotations

import pytest

from visaeval.core import LikelihoodClassifier


@pytest.mark.parametrize(
    ("score", "band"),
    [
        (100.0, "Excellent"),
        (70.0, "Excellent"),
        (69.99, "Good"),
        (60.0, "Good"),
        (59.5, "Fair"),
        (45.0, "Fair"),
        (44.9, "Low"),
        (30.0, "Low"),
        (29.99, "Very Low"),
        (0.0, "Very Low"),
    ],
)
def test_default_thresholds(score: float, band: str):
    assert LikelihoodClassifier().classify(score) == band


def test_classification_is_monotonic():
    classifier = LikelihoodClassifier()
    ranks = [classifier.rank(classifier.classify(score / 2)) for score in range(0, 201)]

    assert ranks == sorted(ranks)


def test_threshold_overrides_merge_with_defaults():
    classifier = LikelihoodClassifier(thresholds={"Excellent": 80.0})

    assert classifier.classify(75.0) == "Good"
    assert classifier.thresholds == {"Excellent": 80.0, "Good": 60.0, "Fair": 45.0, "Low": 30.0}


def test_rejects_overlapping_thresholds():
    with pytest.raises(ValueError):
        LikelihoodClassifier(thresholds={"Good": 75.0})


def test_rejects_unknown_band():
    with pytest.raises(ValueError):
        LikelihoodClassifier(thresholds={"Superb": 90.0})
