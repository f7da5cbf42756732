"""Map a numeric score to a likelihood band."""

from __future__ import annotations

from typing import Mapping

from ..schemas import LIKELIHOOD_BANDS, Likelihood


class LikelihoodClassifier:
    """Fixed, non-overlapping thresholds; the lowest band has no threshold."""

    DEFAULT_THRESHOLDS: dict[str, float] = {
        "Excellent": 70.0,
        "Good": 60.0,
        "Fair": 45.0,
        "Low": 30.0,
    }

    def __init__(self, *, thresholds: Mapping[str, float] | None = None) -> None:
        merged = {**self.DEFAULT_THRESHOLDS, **(thresholds or {})}
        unknown = set(merged) - set(LIKELIHOOD_BANDS[1:])
        if unknown:
            raise ValueError(f"Unknown likelihood bands: {sorted(unknown)}")
        ordered = [merged[band] for band in LIKELIHOOD_BANDS[1:]]
        if any(lower >= upper for lower, upper in zip(ordered, ordered[1:])):
            raise ValueError(f"Likelihood thresholds must increase with the band: {merged}")
        # Highest band first so the first satisfied threshold wins.
        self._thresholds: list[tuple[Likelihood, float]] = [
            (band, merged[band]) for band in reversed(LIKELIHOOD_BANDS[1:])
        ]

    @property
    def thresholds(self) -> dict[str, float]:
        return dict(self._thresholds)

    def classify(self, score: float) -> Likelihood:
        for band, threshold in self._thresholds:
            if score >= threshold:
                return band
        return LIKELIHOOD_BANDS[0]

    @staticmethod
    def rank(band: Likelihood) -> int:
        return LIKELIHOOD_BANDS.index(band)


__all__ = ["LikelihoodClassifier"]
