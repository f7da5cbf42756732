"""Error taxonomy for the eligibility engine."""

from __future__ import annotations


class UnknownVisaCategory(LookupError):
    """Raised when a (country, visa category) pair is not in the catalog."""

    def __init__(self, country: str, visa_category: str):
        super().__init__(f"Unknown visa category: {country!r} / {visa_category!r}")
        self.country = country
        self.visa_category = visa_category


class InvalidProfileField(ValueError):
    """Raised by field coercers; always recovered with a neutral default."""

    def __init__(self, field: str, value: object, reason: str):
        super().__init__(f"{field}: {reason} (got {value!r})")
        self.field = field
        self.value = value
        self.reason = reason


class AIServiceUnavailable(RuntimeError):
    """The generative model could not be reached or did not answer in time."""

    def __init__(self, reason: str, message: str = ""):
        super().__init__(message or reason)
        self.reason = reason


class MalformedAIResponse(ValueError):
    """The generative model answered with something outside the expected shape."""

    def __init__(self, message: str, *, reason: str = "malformed"):
        super().__init__(message)
        self.reason = reason


__all__ = [
    "AIServiceUnavailable",
    "InvalidProfileField",
    "MalformedAIResponse",
    "UnknownVisaCategory",
]
