"""System data models for system collector."""
from dataclasses import dataclass

METRIC_KINDS = ("cpu", "memory", "disk")


@dataclass(frozen=True)
class Metric:
    """A single percentage measurement of resource usage."""
    kind: str  # "cpu", "memory", "disk"
    name: str  # mount target for disk metrics
    value: float

    def __post_init__(self):
        if self.kind not in METRIC_KINDS:
            raise ValueError(f"Unknown metric kind: {self.kind}")
        if not 0 <= self.value <= 100:
            raise ValueError(f"{self.kind} metric out of range: {self.value}")

    @classmethod
    def cpu(cls, value: float) -> "Metric":
        return cls("cpu", "CPU", value)

    @classmethod
    def memory(cls, value: float) -> "Metric":
        return cls("memory", "Memory", value)

    @classmethod
    def disk(cls, mount: str, value: float) -> "Metric":
        return cls("disk", mount, value)


@dataclass(frozen=True)
class ProcessInfo:
    pid: int
    ppid: int
    command: str
    cpu_percent: float
    memory_percent: float
