"""Domain models and error types."""

from .errors import (
    CapacityError,
    ConfigurationError,
    CsvFormatError,
    SchedulerError,
    SchedulingImpossibleError,
)
from .models import (
    PRIMARY,
    SECONDARY,
    SHIFT_CATEGORIES,
    DutySlot,
    FairnessReport,
    LoadRecord,
    Person,
    PersonReport,
    PreferenceSet,
    ScheduleResult,
    TargetRecord,
)

__all__ = [
    "PRIMARY",
    "SECONDARY",
    "SHIFT_CATEGORIES",
    "DutySlot",
    "FairnessReport",
    "LoadRecord",
    "Person",
    "PersonReport",
    "PreferenceSet",
    "ScheduleResult",
    "TargetRecord",
    "SchedulerError",
    "ConfigurationError",
    "CapacityError",
    "SchedulingImpossibleError",
    "CsvFormatError",
]
