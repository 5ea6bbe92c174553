"""Scheduling engine for generating duty rosters."""

from stablescheduler.scheduling.anchor_pass import AnchorPass
from stablescheduler.scheduling.candidate_generator import CandidateGenerator
from stablescheduler.scheduling.fairness import FairnessMetrics, FairnessTracker
from stablescheduler.scheduling.fill_pass import FillPass
from stablescheduler.scheduling.override import cycle_assignment, eligible_cycle
from stablescheduler.scheduling.scheduler import Scheduler

__all__ = [
    # Core scheduler
    "Scheduler",
    # Passes
    "AnchorPass",
    "FillPass",
    "CandidateGenerator",
    # Fairness
    "FairnessMetrics",
    "FairnessTracker",
    # Manual overrides
    "cycle_assignment",
    "eligible_cycle",
]
