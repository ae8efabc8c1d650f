from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .config import (
    DEFAULT_AGING_INTERVAL,
    DEFAULT_ARRIVAL_RANGE,
    DEFAULT_BURST_RANGE,
    DEFAULT_COUNT,
    DEFAULT_PRIORITY_RANGE,
    WorkloadConfig,
    validate_aging_interval,
)
from .engine import ALGORITHMS, compare_algorithms, run_algorithm
from .gantt import build_rich_gantt, render_gantt
from .metrics import summarize_process_metrics
from .models import Process, ScheduleResult
from .workload import generate_workload
from .workload_io import load_workload, save_workload

logger = logging.getLogger(__name__)


def _format_range(bounds: Tuple[int, int]) -> str:
    return f"{bounds[0]},{bounds[1]}"


def parse_range(raw: str) -> Tuple[int, int]:
    parts = [item.strip() for item in raw.split(",") if item.strip()]
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"expected an inclusive range as min,max, got {raw!r}")
    try:
        low, high = int(parts[0]), int(parts[1])
    except ValueError:
        raise argparse.ArgumentTypeError(f"range bounds must be integers, got {raw!r}") from None
    return (low, high)


def _add_workload_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--count",
        "-n",
        type=int,
        default=DEFAULT_COUNT,
        help=f"Number of processes to generate (default: {DEFAULT_COUNT}).",
    )
    parser.add_argument(
        "--arrival-range",
        type=parse_range,
        default=DEFAULT_ARRIVAL_RANGE,
        help=f"Inclusive arrival time range as min,max (default: {_format_range(DEFAULT_ARRIVAL_RANGE)}).",
    )
    parser.add_argument(
        "--burst-range",
        type=parse_range,
        default=DEFAULT_BURST_RANGE,
        help=f"Inclusive burst time range as min,max (default: {_format_range(DEFAULT_BURST_RANGE)}).",
    )
    parser.add_argument(
        "--priority-range",
        type=parse_range,
        default=DEFAULT_PRIORITY_RANGE,
        help=f"Inclusive priority range as min,max (default: {_format_range(DEFAULT_PRIORITY_RANGE)}).",
    )
    parser.add_argument(
        "--seed",
        "-s",
        type=int,
        default=None,
        help="Random seed for workload generation (default: unseeded).",
    )


def _add_run_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--workload",
        "-w",
        default=None,
        help="Path to JSON or CSV workload file (default: generate a random workload).",
    )
    parser.add_argument(
        "--aging-interval",
        "-i",
        type=int,
        default=DEFAULT_AGING_INTERVAL,
        help=f"Waiting ticks before a ready process is promoted (default: {DEFAULT_AGING_INTERVAL}).",
    )
    parser.add_argument(
        "--plain",
        action="store_true",
        help="Print plain text lines instead of tables.",
    )
    _add_workload_options(parser)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scheduler-lab",
        description="CPU scheduling simulator (SJF, Priority with aging).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Increase log output (-v for info, -vv for every scheduling decision).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run one scheduling algorithm on a workload.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        choices=sorted(ALGORITHMS),
        help="Algorithm to use.",
    )
    _add_run_options(run_parser)

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run every algorithm on the same workload and compare average metrics.",
    )
    _add_run_options(compare_parser)

    generate_parser = subparsers.add_parser("generate", help="Generate a random workload.")
    generate_parser.add_argument(
        "--output",
        "-o",
        default=None,
        help="Write the workload to this .json or .csv file instead of printing it.",
    )
    _add_workload_options(generate_parser)

    return parser


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    package_logger = logging.getLogger("scheduler_lab")
    package_logger.setLevel(level)
    for handler in list(package_logger.handlers):
        if isinstance(handler, RichHandler):
            package_logger.removeHandler(handler)

    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    package_logger.addHandler(handler)


def _workload_from_args(args: argparse.Namespace) -> List[Process]:
    if getattr(args, "workload", None):
        processes = load_workload(Path(args.workload))
        logger.info("Loaded %d processes from %s", len(processes), args.workload)
        return processes

    config = WorkloadConfig(
        count=args.count,
        arrival_range=args.arrival_range,
        burst_range=args.burst_range,
        priority_range=args.priority_range,
        seed=args.seed,
    )
    return generate_workload(config)


def _format_average(value: Optional[float]) -> str:
    return "no data" if value is None else f"{value:.2f}"


def plain_result_lines(result: ScheduleResult) -> List[str]:
    """
    Classic one-line-per-process report followed by the two averages.
    """
    show_priority = result.uses_priority
    lines = []
    for p in result.processes:
        line = f"Process ID: {p.pid} Arrival: {p.arrival_time} Burst: {p.burst_time}"
        if show_priority:
            line += f" Priority: {p.final_priority}"
        line += (
            f" Start: {p.start_time} Finish: {p.completion_time}"
            f" Waiting: {p.waiting_time} Turnaround: {p.turnaround_time}"
        )
        lines.append(line)

    summary = summarize_process_metrics(result.processes)
    lines.append(f"Average Waiting Time: {_format_average(summary.avg_waiting)}")
    lines.append(f"Average Turnaround Time: {_format_average(summary.avg_turnaround)}")
    return lines


def _print_plain(result: ScheduleResult, console: Console) -> None:
    console.print(f"{result.algorithm}:", soft_wrap=True, markup=False, highlight=False)
    for line in plain_result_lines(result):
        console.print(line, soft_wrap=True, markup=False, highlight=False)
    console.print(render_gantt(result.timeline), soft_wrap=True, markup=False, highlight=False)


def _print_result(result: ScheduleResult, console: Console) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.aging_interval is not None:
        console.print(f"[bold]Aging interval:[/bold] {result.aging_interval}")

    console.print()

    panel, time_marks = build_rich_gantt(result.timeline)
    console.print(panel)
    if time_marks:
        console.print(time_marks)

    console.print()

    show_priority = result.uses_priority
    headers = ["PID", "Arrive", "Burst"]
    if show_priority:
        headers += ["Priority", "Aged to"]
    headers += ["Start", "Finish", "Wait", "Turnaround"]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority", "Aged to"} else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.processes:
        row = [p.pid, str(p.arrival_time), str(p.burst_time)]
        if show_priority:
            row += [
                "" if p.priority is None else str(p.priority),
                "" if p.final_priority is None else str(p.final_priority),
            ]
        row += [str(p.start_time), str(p.completion_time), str(p.waiting_time), str(p.turnaround_time)]
        proc_table.add_row(*row)

    console.print(proc_table)
    console.print()

    summary = summarize_process_metrics(result.processes)
    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg waiting", _format_average(summary.avg_waiting))
    sys_table.add_row("Avg turnaround", _format_average(summary.avg_turnaround))
    if result.system:
        sys = result.system
        sys_table.add_row("Makespan", str(sys.makespan))
        sys_table.add_row("Idle time", str(sys.idle_time))
        sys_table.add_row("Throughput (proc/time)", f"{sys.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{sys.cpu_utilization*100:.1f}%")
        sys_table.add_row("Starvation count", str(sys.starvation_count))

    console.print(sys_table)


def _print_comparison(results: Sequence[ScheduleResult], console: Console) -> None:
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Aging interval", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")

    for result in results:
        summary = summarize_process_metrics(result.processes)
        summary_table.add_row(
            result.algorithm,
            "" if result.aging_interval is None else str(result.aging_interval),
            _format_average(summary.avg_waiting),
            _format_average(summary.avg_turnaround),
        )

    console.print(summary_table)


def _print_workload(processes: Sequence[Process], console: Console) -> None:
    table = Table(title="Workload", box=box.SIMPLE_HEAVY)
    for h in ("PID", "Arrive", "Burst", "Priority"):
        table.add_column(h, justify="center" if h == "PID" else "right")
    for p in processes:
        table.add_row(p.pid, str(p.arrival_time), str(p.burst_time), "" if p.priority is None else str(p.priority))
    console.print(table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    console = Console()

    try:
        if args.command in {"run", "compare"}:
            aging_interval = validate_aging_interval(args.aging_interval)
            processes = _workload_from_args(args)

        if args.command == "run":
            result = run_algorithm(args.algorithm, processes, aging_interval=aging_interval)
            if args.plain:
                _print_plain(result, console)
            else:
                _print_result(result, console)
            return 0

        if args.command == "compare":
            results = compare_algorithms(processes, aging_interval=aging_interval)
            for result in results:
                if args.plain:
                    _print_plain(result, console)
                else:
                    _print_result(result, console)
                console.print()
            if not args.plain:
                _print_comparison(results, console)
            return 0

        if args.command == "generate":
            processes = _workload_from_args(args)
            if args.output:
                path = save_workload(processes, args.output)
                console.print(f"Wrote {len(processes)} processes to {path}", soft_wrap=True, markup=False, highlight=False)
            else:
                _print_workload(processes, console)
            return 0
    except (OSError, ValueError) as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
