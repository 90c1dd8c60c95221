from __future__ import annotations

from typing import Dict, List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import IDLE_PID, TimelineSegment

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def merge_idle(segments: List[TimelineSegment]) -> List[TimelineSegment]:
    """
    Collapse runs of adjacent idle segments into one segment each.
    """
    merged: List[TimelineSegment] = []
    for seg in segments:
        if seg.is_idle and merged and merged[-1].is_idle and merged[-1].end_time == seg.start_time:
            merged[-1] = TimelineSegment(pid=IDLE_PID, start_time=merged[-1].start_time, end_time=seg.end_time)
        else:
            merged.append(seg)
    return merged


def assign_colors(segments: List[TimelineSegment]) -> Dict[int, str]:
    """
    Give each process a display color, cycling through the palette in order
    of first appearance.
    """
    pid_to_color: Dict[int, str] = {}
    for seg in segments:
        if not seg.is_idle and seg.pid not in pid_to_color:
            pid_to_color[seg.pid] = COLORS[len(pid_to_color) % len(COLORS)]
    return pid_to_color


def segment_label(seg: TimelineSegment) -> str:
    return "idle" if seg.is_idle else f"P{seg.pid}"


def render_gantt(segments: List[TimelineSegment]) -> str:
    """
    Plain-text Gantt chart. Idle time is drawn with dots.
    """
    if not segments:
        return "(no execution)"

    line = "|"
    labels = ""
    time_marks = f"{segments[0].start_time}"

    for seg in merge_idle(segments):
        width = max(1, seg.duration)
        if seg.is_idle:
            line += "." * width
            labels += " " * width
        else:
            line += "=" * width
            labels += segment_label(seg)[:width].ljust(width)
        time_marks += f"{seg.end_time:>{width}}"

    line += "|"

    return "\n".join(
        [
            "Gantt Chart:",
            line,
            labels,
            time_marks,
        ]
    )


def build_rich_gantt(segments: List[TimelineSegment], show_idle: bool = True) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.

    With ``show_idle`` off, idle segments are left out entirely and the
    executed blocks are drawn back to back.
    """
    if not segments:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    colors = assign_colors(segments)
    segments = merge_idle(segments)
    if not show_idle:
        segments = [seg for seg in segments if not seg.is_idle]

    timeline = Text()
    labels = Text()
    time_marks = ""

    prev_end = None
    for seg in segments:
        label = segment_label(seg)
        # A gap left by hidden idle time needs both the previous end and this start.
        if prev_end is None or prev_end == seg.start_time:
            mark = f"{seg.start_time}"
        else:
            mark = f"{prev_end} {seg.start_time}"
        width = max(len(label) + 1, len(mark) + 1, seg.duration)

        if seg.is_idle:
            timeline.append("." * width, style="dim")
            labels.append(label.ljust(width), style="dim")
        else:
            timeline.append(" " * width, style=f"on {colors[seg.pid]}")
            labels.append(label.ljust(width), style="bold")

        time_marks += mark.ljust(width)
        prev_end = seg.end_time

    if segments:
        time_marks += f"{segments[-1].end_time}"

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks
