"""Seven-dimension score vector and its fixed weighting scheme."""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Iterator, Mapping

# Strict weighting: maxima sum to NOMINAL_CEILING.
DIMENSION_MAXIMA: dict[str, float] = {
    "education": 35.0,
    "experience": 25.0,
    "salary": 20.0,
    "documents": 5.0,
    "awards": 2.0,
    "language": 3.0,
    "employer": 10.0,
}

DIMENSIONS: tuple[str, ...] = tuple(DIMENSION_MAXIMA)

NOMINAL_CEILING: float = sum(DIMENSION_MAXIMA.values())


@dataclass(frozen=True, slots=True)
class ScoreVector:
    """Per-dimension points, each bounded by ``DIMENSION_MAXIMA``."""

    education: float
    experience: float
    salary: float
    documents: float
    awards: float
    language: float
    employer: float

    def __post_init__(self) -> None:
        for item in fields(self):
            value = getattr(self, item.name)
            maximum = DIMENSION_MAXIMA[item.name]
            if not isinstance(value, (int, float)) or not math.isfinite(value):
                raise ValueError(f"{item.name} must be a finite number, got {value!r}")
            if value < 0 or value > maximum:
                raise ValueError(f"{item.name}={value} outside [0, {maximum}]")

    @classmethod
    def clamped(cls, values: Mapping[str, float]) -> "ScoreVector":
        """Build a vector, clamping every dimension into its bound."""
        return cls(
            **{
                name: min(max(float(values[name]), 0.0), DIMENSION_MAXIMA[name])
                for name in DIMENSIONS
            }
        )

    def items(self) -> Iterator[tuple[str, float]]:
        for name in DIMENSIONS:
            yield name, getattr(self, name)

    def as_dict(self) -> dict[str, float]:
        return dict(self.items())

    def ratio(self, name: str) -> float:
        return getattr(self, name) / DIMENSION_MAXIMA[name]

    @property
    def total(self) -> float:
        return sum(value for _, value in self.items())


__all__ = ["DIMENSIONS", "DIMENSION_MAXIMA", "NOMINAL_CEILING", "ScoreVector"]
