from __future__ import annotations

import argparse
import json
import logging
import time
from pathlib import Path

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .gantt import build_rich_gantt, render_gantt
from .metrics import format_average
from .models import SimulationResult
from .scheduler import simulate, simulate_processes
from .validation import parse_form
from .workload_io import load_workload

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]
MAX_PRECISION = 10


def configure_logging(level: str = "WARNING") -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def _precision(text: str) -> int:
    try:
        value = int(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid precision: {text!r}") from exc
    if not 0 <= value <= MAX_PRECISION:
        raise argparse.ArgumentTypeError(f"precision must be between 0 and {MAX_PRECISION}, got {value}")
    return value


def _add_output_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--jump-idle",
        action="store_true",
        help="Record each idle gap as one segment instead of one segment per time unit.",
    )
    parser.add_argument(
        "--hide-idle",
        action="store_true",
        help="Leave idle time out of the Gantt chart.",
    )
    parser.add_argument(
        "--plain",
        action="store_true",
        help="Draw the Gantt chart as plain text instead of a colored panel.",
    )
    parser.add_argument(
        "--precision",
        type=_precision,
        default=2,
        help=f"Decimal places for averages, 0-{MAX_PRECISION} (default: 2).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON instead of tables.",
    )
    parser.add_argument(
        "--step",
        action="store_true",
        help="Show a simple time-stepped simulation in the terminal.",
    )
    parser.add_argument(
        "--step-delay",
        type=float,
        default=0.3,
        help="Seconds to wait between steps when --step is used (default: 0.3).",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sjf-sim",
        description="Non-preemptive Shortest Job First CPU scheduling simulator.",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging level (default: WARNING).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Shorthand for --log-level DEBUG.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Simulate a workload file.")
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    _add_output_options(run_parser)

    calc_parser = subparsers.add_parser(
        "calc",
        help="Simulate processes given as a count plus space-separated arrival and burst times.",
    )
    calc_parser.add_argument("--count", "-n", required=True, help="Number of processes.")
    calc_parser.add_argument("--arrivals", "-a", required=True, help='Arrival times, e.g. "0 1 2".')
    calc_parser.add_argument("--bursts", "-b", required=True, help='Burst times, e.g. "2 4 1".')
    _add_output_options(calc_parser)

    form_parser = subparsers.add_parser(
        "form",
        help="Prompt for the number of processes, arrival times and burst times.",
    )
    _add_output_options(form_parser)

    return parser


def _print_result(
    result: SimulationResult,
    console: Console,
    precision: int = 2,
    show_idle: bool = True,
    plain: bool = False,
) -> None:
    if plain:
        console.print(render_gantt(result.timeline), markup=False, highlight=False)
    else:
        panel, time_marks = build_rich_gantt(result.timeline, show_idle=show_idle)
        console.print(panel)
        if time_marks:
            console.print(time_marks)

    console.print()

    headers = ["Process ID", "Arrival Time", "Burst Time", "Completion Time", "Turnaround Time", "Waiting Time"]

    proc_table = Table(title="Output", box=box.SIMPLE_HEAVY, show_footer=True)
    footers = [
        "",
        "",
        "",
        f"Average CT: {format_average(result.avg_completion, precision)}",
        f"Average TAT: {format_average(result.avg_turnaround, precision)}",
        f"Average WT: {format_average(result.avg_waiting, precision)}",
    ]
    for h, footer in zip(headers, footers):
        justify = "center" if h == "Process ID" else "right"
        proc_table.add_column(h, footer=footer, justify=justify)

    for r in result.processes:
        proc_table.add_row(
            str(r.pid),
            str(r.arrival_time),
            str(r.burst_time),
            str(r.completion_time),
            str(r.turnaround_time),
            str(r.waiting_time),
        )

    console.print(proc_table)
    console.print()

    if result.system:
        sys = result.system
        sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
        sys_table.add_column("Metric")
        sys_table.add_column("Value", justify="right")

        sys_table.add_row("Makespan", str(sys.makespan))
        sys_table.add_row("CPU busy time", str(sys.cpu_busy_time))
        sys_table.add_row("Idle time", str(sys.idle_time))
        sys_table.add_row("Throughput (proc/time)", f"{sys.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{sys.cpu_utilization*100:.1f}%")

        console.print(sys_table)


def _animate_result(result: SimulationResult, console: Console, delay: float) -> None:
    """
    Simple time-stepped textual simulation using the computed schedule.
    """
    if not result.timeline:
        console.print("[red]No execution to animate.[/red]")
        return

    console.print(f"[bold]Simulating SJF[/bold] (duration {result.final_clock} time units)")
    console.print("[dim]Press Ctrl+C to skip animation.[/dim]")

    for t in range(result.final_clock):
        seg = next(s for s in result.timeline if s.start_time <= t < s.end_time)
        if seg.is_idle:
            msg = f"t={t:2d}: [dim]idle[/dim]"
        else:
            msg = f"t={t:2d}: P{seg.pid} [green]{'█' * (t - seg.start_time + 1)}[/green]"
        console.print(msg)
        time.sleep(delay)


def _prompt_form(console: Console) -> tuple[str, str, str]:
    console.print("[bold cyan]Shortest Job First (SJF) CPU Scheduling Non-Preemptive[/bold cyan]")
    count = input("Number of Processes: ").strip()
    arrivals = input("Arrival Times (example: 1 2 3 4): ")
    bursts = input("Burst Times (example: 2 4 6 8): ")
    return count, arrivals, bursts


def _simulate_from_args(args: argparse.Namespace, console: Console) -> SimulationResult:
    if args.command == "run":
        processes = load_workload(Path(args.workload))
        return simulate_processes(processes, jump_idle=args.jump_idle)

    if args.command == "calc":
        fields = (args.count, args.arrivals, args.bursts)
    else:
        fields = _prompt_form(console)

    process_ids, arrivals, bursts = parse_form(*fields)
    return simulate(process_ids, arrivals, bursts, jump_idle=args.jump_idle)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging("DEBUG" if args.verbose else args.log_level)
    console = Console()

    try:
        result = _simulate_from_args(args, console)
    except (ValueError, OSError) as exc:
        logger.debug("Simulation not run: %s", exc)
        console.print(f"[red]Error: {exc}[/red]")
        return 2

    if args.json:
        console.print_json(json.dumps(result.to_dict()))
        return 0

    if args.step:
        try:
            _animate_result(result, console, delay=args.step_delay)
        except KeyboardInterrupt:
            console.print("[yellow]Animation skipped.[/yellow]")

    _print_result(
        result,
        console,
        precision=args.precision,
        show_idle=not args.hide_idle,
        plain=args.plain,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
