"""Visa eligibility scoring engine."""

__version__ = "0.1.0"
