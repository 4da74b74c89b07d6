"""Exceptions raised by the runway beam engine."""

from __future__ import annotations


class RunwayError(Exception):
    """Base class for engine errors."""


class ValidationError(RunwayError, ValueError):
    """A crane/runway input is missing, malformed or out of range."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class SelectionError(RunwayError):
    """No catalog beam carries the required load at the requested span."""

    def __init__(self, required_load: float, span: float, capped: bool) -> None:
        self.required_load = required_load
        self.span = span
        self.capped = capped
        suggestion = "a larger capped" if capped else "the capped"
        super().__init__(
            f"No adequate beam found for ECL={required_load:.0f} lbs and "
            f"span={span:.1f} ft. Consider using {suggestion} beam system "
            f"or reducing loads."
        )
