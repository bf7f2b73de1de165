"""Health report assembly: collect, evaluate, hand off for rendering."""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from ..collectors.process_collector import ProcessMonitor
from ..collectors.system_collector import SystemCollector
from ..collectors.system_models import ProcessInfo
from ..config.threshold_config import ThresholdConfig
from .alerts import AlertResult, evaluate_all

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HealthReport:
    """Everything one health report shows, computed once."""
    timestamp: datetime
    results: Tuple[AlertResult, ...]
    sections: Dict[str, str] = field(default_factory=dict)
    top_cpu: Tuple[ProcessInfo, ...] = ()
    top_memory: Tuple[ProcessInfo, ...] = ()

    @property
    def alerts(self) -> List[AlertResult]:
        return [r for r in self.results if r.exceeded]

    @property
    def disk_results(self) -> List[AlertResult]:
        return [r for r in self.results if r.metric.kind == "disk"]


def build_health_report(collector: SystemCollector, thresholds: ThresholdConfig,
                        processes: Optional[ProcessMonitor] = None,
                        top_count: int = 10,
                        include_snapshot: bool = True) -> HealthReport:
    """Collect metrics and classify them against the given thresholds."""
    sections = collector.collect_snapshot() if include_snapshot else {}

    top_cpu: Tuple[ProcessInfo, ...] = ()
    top_memory: Tuple[ProcessInfo, ...] = ()
    if processes is not None:
        top_cpu = tuple(processes.top_processes("cpu", top_count))
        top_memory = tuple(processes.top_processes("memory", top_count))

    metrics = collector.collect()
    results = tuple(evaluate_all(metrics, thresholds))
    logger.debug("Health report: %d metrics, %d alerts",
                 len(results), sum(1 for r in results if r.exceeded))

    return HealthReport(
        timestamp=datetime.now(),
        results=results,
        sections=dict(sections),
        top_cpu=top_cpu,
        top_memory=top_memory,
    )
