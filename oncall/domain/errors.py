"""Error taxonomy raised by the scheduling engine."""

from __future__ import annotations


class SchedulerError(Exception):
    """Base class for every error raised by the engine."""


class ConfigurationError(SchedulerError, ValueError):
    """Caller input error: duplicate person, unknown email, unset range, bad dates."""


class CapacityError(SchedulerError, RuntimeError):
    """Headcount is below the number of slots that must be filled each day."""


class SchedulingImpossibleError(SchedulerError, RuntimeError):
    """A slot has no eligible candidate even after relaxing preferences."""

    def __init__(self, message: str, slot=None):
        super().__init__(message)
        self.slot = slot


class CsvFormatError(SchedulerError, ValueError):
    """A CSV file cannot be imported at all (empty, or missing a required column)."""
