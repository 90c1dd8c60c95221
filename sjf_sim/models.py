from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

IDLE_PID = 0


@dataclass(frozen=True)
class Process:
    pid: int
    arrival_time: int
    burst_time: int


@dataclass(frozen=True)
class Completion:
    completion_time: int
    turnaround_time: int
    waiting_time: int


@dataclass
class ProcessRecord:
    """
    One row of the process table: the input process plus its outcome.

    A record is pending until ``complete`` is called; after that the outcome
    is fixed.
    """

    process: Process
    outcome: Optional[Completion] = None

    @property
    def pid(self) -> int:
        return self.process.pid

    @property
    def arrival_time(self) -> int:
        return self.process.arrival_time

    @property
    def burst_time(self) -> int:
        return self.process.burst_time

    @property
    def visited(self) -> bool:
        return self.outcome is not None

    @property
    def completion_time(self) -> Optional[int]:
        return None if self.outcome is None else self.outcome.completion_time

    @property
    def turnaround_time(self) -> Optional[int]:
        return None if self.outcome is None else self.outcome.turnaround_time

    @property
    def waiting_time(self) -> Optional[int]:
        return None if self.outcome is None else self.outcome.waiting_time

    def complete(self, completion_time: int) -> Completion:
        if self.outcome is not None:
            raise RuntimeError(f"P{self.pid} already completed at {self.outcome.completion_time}")

        turnaround_time = completion_time - self.arrival_time
        self.outcome = Completion(
            completion_time=completion_time,
            turnaround_time=turnaround_time,
            waiting_time=turnaround_time - self.burst_time,
        )
        return self.outcome


@dataclass(frozen=True)
class TimelineSegment:
    """
    One contiguous interval of the timeline, ``[start_time, end_time)``.
    Idle intervals carry ``IDLE_PID``.
    """

    pid: int
    start_time: int
    end_time: int

    @property
    def is_idle(self) -> bool:
        return self.pid == IDLE_PID

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass
class ProcessSummary:
    avg_waiting: float
    avg_turnaround: float
    avg_completion: float
    legacy_avg_completion: float


@dataclass
class SystemMetrics:
    makespan: int
    cpu_busy_time: int
    idle_time: int
    throughput: float
    cpu_utilization: float


@dataclass
class SimulationResult:
    processes: List[ProcessRecord] = field(default_factory=list)
    timeline: List[TimelineSegment] = field(default_factory=list)
    final_clock: int = 0
    summary: Optional[ProcessSummary] = None
    system: Optional[SystemMetrics] = None

    @property
    def avg_waiting(self) -> float:
        return self.summary.avg_waiting if self.summary else 0.0

    @property
    def avg_turnaround(self) -> float:
        return self.summary.avg_turnaround if self.summary else 0.0

    @property
    def avg_completion(self) -> float:
        return self.summary.avg_completion if self.summary else 0.0

    def execution_order(self) -> List[int]:
        return [seg.pid for seg in self.timeline if not seg.is_idle]

    def to_dict(self) -> dict:
        return {
            "processes": [
                {
                    "pid": r.pid,
                    "arrival_time": r.arrival_time,
                    "burst_time": r.burst_time,
                    "completion_time": r.completion_time,
                    "turnaround_time": r.turnaround_time,
                    "waiting_time": r.waiting_time,
                }
                for r in self.processes
            ],
            "timeline": [
                {"pid": s.pid, "start_time": s.start_time, "end_time": s.end_time}
                for s in self.timeline
            ],
            "final_clock": self.final_clock,
            "avg_waiting": self.avg_waiting,
            "avg_turnaround": self.avg_turnaround,
            "avg_completion": self.avg_completion,
        }
