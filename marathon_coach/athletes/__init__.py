"""Runner profiles and derived fitness metrics."""

from marathon_coach.athletes.accuracy import accuracy_score
from marathon_coach.athletes.metrics import derive_metrics
from marathon_coach.athletes.models import DerivedMetrics, Gender, ManualPRs, RunnerProfile

__all__ = [
    "DerivedMetrics",
    "Gender",
    "ManualPRs",
    "RunnerProfile",
    "accuracy_score",
    "derive_metrics",
]
