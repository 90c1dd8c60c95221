from __future__ import annotations

import logging
from typing import List, Sequence

from .metrics import compute_system_metrics, summarize
from .models import IDLE_PID, Process, ProcessRecord, SimulationResult, TimelineSegment

logger = logging.getLogger(__name__)


def build_process_table(
    process_ids: Sequence[int],
    arrivals: Sequence[int],
    bursts: Sequence[int],
) -> List[ProcessRecord]:
    """
    Zip the three parallel input sequences into pending records, keeping
    input order.
    """
    return [
        ProcessRecord(Process(pid=pid, arrival_time=arrival, burst_time=burst))
        for pid, arrival, burst in zip(process_ids, arrivals, bursts)
    ]


def simulate(
    process_ids: Sequence[int],
    arrivals: Sequence[int],
    bursts: Sequence[int],
    *,
    jump_idle: bool = False,
) -> SimulationResult:
    """
    Shortest Job First (non-preemptive) over already validated input.

    At each decision point, among processes that have arrived and have not
    run yet, the one with the smallest burst time runs to completion. Ties go
    to the process that comes first in the input.

    When nothing has arrived the clock advances one unit at a time and a
    unit idle segment is recorded for each step. With ``jump_idle`` the clock
    jumps straight to the next arrival and a single idle segment covers the
    gap instead.
    """
    table = build_process_table(process_ids, arrivals, bursts)
    return _run(table, jump_idle=jump_idle)


def simulate_processes(processes: Sequence[Process], *, jump_idle: bool = False) -> SimulationResult:
    table = [ProcessRecord(p) for p in processes]
    return _run(table, jump_idle=jump_idle)


def _run(table: List[ProcessRecord], *, jump_idle: bool) -> SimulationResult:
    clock = 0
    completed = 0
    timeline: List[TimelineSegment] = []

    while completed < len(table):
        eligible = [r for r in table if not r.visited and r.arrival_time <= clock]

        if not eligible:
            if jump_idle:
                next_clock = min(r.arrival_time for r in table if not r.visited)
            else:
                next_clock = clock + 1
            timeline.append(TimelineSegment(pid=IDLE_PID, start_time=clock, end_time=next_clock))
            logger.debug("t=%d: idle until %d", clock, next_clock)
            clock = next_clock
            continue

        # min() keeps the first of equal keys, so input order breaks ties.
        record = min(eligible, key=lambda r: r.burst_time)

        start_time = clock
        clock += record.burst_time
        record.complete(clock)
        timeline.append(TimelineSegment(pid=record.pid, start_time=start_time, end_time=clock))
        completed += 1
        logger.debug(
            "t=%d: dispatch P%d (burst %d) until %d",
            start_time,
            record.pid,
            record.burst_time,
            clock,
        )

    result = SimulationResult(processes=table, timeline=timeline, final_clock=clock)
    result.summary = summarize(table, final_clock=clock)
    compute_system_metrics(result)
    logger.info(
        "Simulated %d processes: makespan=%d avg_waiting=%.2f avg_turnaround=%.2f",
        len(table),
        clock,
        result.summary.avg_waiting,
        result.summary.avg_turnaround,
    )
    return result
