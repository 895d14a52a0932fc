"""Base interface that every scheduling phase implements."""

from __future__ import annotations

from abc import ABC, abstractmethod

from oncall.config import SchedulerConfig

from .state import ScheduleState


class BasePhase(ABC):
    """
    One step of the scheduling pipeline.

    Phases run in order over the same ScheduleState. Each one documents
    which parts of the state it is allowed to change.
    """

    name: str | None = None  # Override in subclasses (e.g., "assignment", "balance")

    @abstractmethod
    def run(self, state: ScheduleState, cfg: SchedulerConfig) -> ScheduleState:
        """
        Apply this phase to the run state.

        Args:
            state: State produced by the previous phase
            cfg: SchedulerConfig with thresholds and cost weights

        Returns:
            The state for the next phase

        Raises:
            SchedulingImpossibleError: If a slot cannot be filled at all
        """
        pass

    def get_phase_name(self) -> str:
        """Get the name used in log lines."""
        return self.name or type(self).__name__
