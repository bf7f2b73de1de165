"""Threshold evaluation for collected metrics."""
from dataclasses import dataclass
from typing import Iterable, List

from ..collectors.system_models import Metric
from ..config.threshold_config import ThresholdConfig


@dataclass(frozen=True)
class AlertResult:
    metric: Metric
    limit: int
    exceeded: bool

    @property
    def level(self) -> str:
        return "ALERT" if self.exceeded else "OK"


def evaluate(metric: Metric, thresholds: ThresholdConfig) -> AlertResult:
    """Classify a metric; a value equal to its limit is an alert."""
    limit = thresholds.limit_for(metric.kind)
    return AlertResult(metric=metric, limit=limit, exceeded=metric.value >= limit)


def evaluate_all(metrics: Iterable[Metric], thresholds: ThresholdConfig) -> List[AlertResult]:
    """Evaluate metrics in order against the same thresholds."""
    return [evaluate(metric, thresholds) for metric in metrics]
