from __future__ import annotations


class ProrationError(ValueError):
    """Input rejected before any proration math ran."""


class InvalidDate(ProrationError):
    pass


class InvalidAnchor(ProrationError):
    pass


class InvalidAmount(ProrationError):
    pass
