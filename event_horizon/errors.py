"""Errors raised by event-horizon."""

from __future__ import annotations


class MalformedTimeLabel(ValueError):
    """A date or clock label did not match the expected wall-clock pattern."""

    def __init__(self, label: object, reason: str = "unrecognized label") -> None:
        self.label = label
        self.reason = reason
        super().__init__(f"Malformed time label {label!r}: {reason}")
