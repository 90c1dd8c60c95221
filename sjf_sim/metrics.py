from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import List

from .models import ProcessRecord, ProcessSummary, SimulationResult, SystemMetrics


def summarize(records: List[ProcessRecord], final_clock: int) -> ProcessSummary:
    """
    Return averages of the per-process outputs.

    ``avg_completion`` is the mean of the individual completion times.
    ``legacy_avg_completion`` reproduces the older ``(final_clock - 1) / n``
    figure and is kept only for comparison.
    """
    if not records:
        return ProcessSummary(avg_waiting=0.0, avg_turnaround=0.0, avg_completion=0.0, legacy_avg_completion=0.0)

    n = len(records)
    return ProcessSummary(
        avg_waiting=sum(r.waiting_time for r in records) / n,
        avg_turnaround=sum(r.turnaround_time for r in records) / n,
        avg_completion=sum(r.completion_time for r in records) / n,
        legacy_avg_completion=(final_clock - 1) / n,
    )


def compute_system_metrics(result: SimulationResult) -> SystemMetrics:
    """
    Compute throughput and CPU utilization from the timeline.
    """
    makespan = result.final_clock
    cpu_busy_time = sum(seg.duration for seg in result.timeline if not seg.is_idle)
    idle_time = sum(seg.duration for seg in result.timeline if seg.is_idle)

    system = SystemMetrics(
        makespan=makespan,
        cpu_busy_time=cpu_busy_time,
        idle_time=idle_time,
        throughput=len(result.processes) / makespan if makespan > 0 else 0.0,
        cpu_utilization=cpu_busy_time / makespan if makespan > 0 else 0.0,
    )
    result.system = system
    return system


def round_half_up(value: float, digits: int = 2) -> Decimal:
    """
    Round to ``digits`` decimal places, halves away from zero (2.345 -> 2.35,
    -2.345 -> -2.35).
    """
    if not 0 <= digits <= 10:
        raise ValueError(f"digits must be between 0 and 10, got {digits}")
    quantum = Decimal(1).scaleb(-digits)
    # str() avoids binary float artifacts such as 2.675 -> 2.67499999...
    return Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)


def format_average(value: float, digits: int = 2) -> str:
    return f"{round_half_up(value, digits):.{digits}f}"
