from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice

Segment = Tuple[Optional[str], int, int]


def gantt_segments(slices: Sequence[ScheduledSlice]) -> List[Segment]:
    """
    Split a timeline into (pid, start, end) segments from t=0 onwards, with
    idle gaps as segments whose pid is None.
    """
    segments: List[Segment] = []
    last_time = 0
    for sl in sorted(slices, key=lambda s: (s.start_time, s.end_time)):
        if sl.start_time > last_time:
            segments.append((None, last_time, sl.start_time))
        segments.append((sl.pid, sl.start_time, sl.end_time))
        last_time = sl.end_time
    return segments


def render_gantt(slices: Sequence[ScheduledSlice]) -> str:
    """
    Plain-text Gantt chart: '=' for execution, '.' for idle ticks.
    """
    if not slices:
        return "(no execution)"

    line = "|"
    labels = " "
    time_marks = "0"

    for pid, start, end in gantt_segments(slices):
        # Widen short segments so the end mark fits under them.
        width = max(1, end - start, len(str(end)))
        line += ("=" if pid is not None else ".") * width
        labels += (pid or "")[:width].ljust(width)
        time_marks += f"{end:>{width}}"

    line += "|"

    return "\n".join(
        [
            "Gantt Chart:",
            line,
            labels.rstrip(),
            time_marks,
        ]
    )


def build_rich_gantt(slices: Sequence[ScheduledSlice]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not slices:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    pid_to_color: Dict[str, str] = {}

    def pid_color(pid: str) -> str:
        if pid not in pid_to_color:
            pid_to_color[pid] = colors[len(pid_to_color) % len(colors)]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()
    time_marks = "0"

    for pid, start, end in gantt_segments(slices):
        width = max(1, end - start)
        if pid is None:
            timeline.append("·" * width, style="dim")
            labels.append(" " * width)
        else:
            timeline.append(" " * width, style=f"on {pid_color(pid)}")
            labels.append(pid[:width].ljust(width), style="bold")
        time_marks += f"{end:>3}"

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks
