"""Scheduling engine: assignment, swap optimization and balancing phases."""

from .assignment import GreedyAssigner
from .balancer import Balancer
from .base import BasePhase
from .optimizer import SwapOptimizer
from .orchestrator import OnCallScheduler, build_schedule
from .state import ScheduleState

__all__ = [
    "BasePhase",
    "GreedyAssigner",
    "SwapOptimizer",
    "Balancer",
    "ScheduleState",
    "OnCallScheduler",
    "build_schedule",
]
