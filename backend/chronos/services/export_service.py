import io
import logging
import re
from typing import Dict, List, Optional

import pandas as pd
from matplotlib.figure import Figure
from matplotlib.patches import Rectangle

from chronos.schemas.subjects import LectureType
from chronos.schemas.timetables import TimetableData, TimetableEntry
from chronos.utils.time_utils import format_hour_header, parse_time, to_12_hour

logger = logging.getLogger(__name__)

THEORY_COLOR = "#e0e7ff"
PRACTICAL_COLOR = "#d1fae5"
BREAK_COLOR = "#f1f5f9"
EDGE_COLOR = "#94a3b8"


def export_filename(college_name: Optional[str]) -> str:
    clean_name = re.sub(r"[^a-z0-9]", "_", (college_name or "timetable"), flags=re.I).lower()
    return f"{clean_name or 'timetable'}_schedule.png"


def entries_frame(data: TimetableData) -> pd.DataFrame:
    """Flatten a timetable into one row per entry with minute offsets."""
    rows = []
    for row_idx, schedule in enumerate(data.days):
        for entry in schedule.entries:
            rows.append({
                "day": schedule.day,
                "row": row_idx,
                "start_min": parse_time(entry.time_start),
                "end_min": parse_time(entry.time_end),
                "subject": entry.subject_name,
                "teacher": entry.teacher,
                "room": entry.room,
                "type": entry.type.value,
                "batches": ", ".join(entry.batches),
                "is_break": entry.is_break,
            })
    return pd.DataFrame(rows, columns=[
        "day", "row", "start_min", "end_min", "subject", "teacher", "room", "type", "batches", "is_break"
    ])


def grid_dimensions(data: TimetableData) -> Dict[str, object]:
    """
        Whole-hour span covering every entry: the earliest start hour up to
        the latest end, rounded up. An empty timetable spans 8 AM to 3 PM.
    """
    df = entries_frame(data)
    if df.empty:
        start_hour, end_hour = 8, 15
    else:
        start_hour = int(df["start_min"].min() // 60)
        end_hour = int(-(-df["end_min"].max() // 60))

    start_hour = max(0, start_hour)
    end_hour = min(24, end_hour)
    return {"start_hour": start_hour, "end_hour": end_hour, "hours": list(range(start_hour, end_hour))}


def group_concurrent_entries(entries: List[TimetableEntry]) -> List[List[TimetableEntry]]:
    """Entries sharing the same start and end, in first-seen order."""
    groups: Dict[str, List[TimetableEntry]] = {}
    for entry in entries:
        groups.setdefault(f"{entry.time_start}-{entry.time_end}", []).append(entry)
    return list(groups.values())


def _entry_text(entry: TimetableEntry, show_room: bool) -> str:
    if entry.is_break:
        return entry.break_label or entry.subject_name
    lines = [entry.subject_name, f"{to_12_hour(entry.time_start)} - {to_12_hour(entry.time_end)}", entry.teacher]
    if show_room and entry.room:
        lines.append(entry.room)
    if entry.batches:
        lines.append(f"Batch {', '.join(entry.batches)}")
    return "\n".join(line for line in lines if line)


def render_timetable_png(data: TimetableData, title: Optional[str] = None, show_room: bool = True) -> bytes:
    """Draw the week as one row per day on a shared hour axis and return PNG bytes."""
    dims = grid_dimensions(data)
    grid_start = dims["start_hour"] * 60
    grid_end = dims["end_hour"] * 60
    n_days = max(1, len(data.days))

    # no pyplot here: exports render concurrently in worker threads
    fig = Figure(figsize=(max(12, (dims["end_hour"] - dims["start_hour"]) * 2.2), 1.6 * n_days + 1))
    ax = fig.subplots()
    for row_idx, schedule in enumerate(data.days):
        top = n_days - row_idx - 1
        for group in group_concurrent_entries(schedule.entries):
            start = parse_time(group[0].time_start)
            width = parse_time(group[0].time_end) - start
            height = 0.9 / len(group)
            for lane, entry in enumerate(group):
                if entry.is_break:
                    color = BREAK_COLOR
                elif entry.type == LectureType.PRACTICAL:
                    color = PRACTICAL_COLOR
                else:
                    color = THEORY_COLOR
                y = top + 0.05 + lane * height
                ax.add_patch(Rectangle((start, y), width, height, facecolor=color, edgecolor=EDGE_COLOR))
                ax.text(start + width / 2, y + height / 2, _entry_text(entry, show_room),
                        ha="center", va="center", fontsize=7, wrap=True)

    ax.set_xlim(grid_start, grid_end)
    ax.set_ylim(0, n_days)
    ax.set_xticks([h * 60 for h in dims["hours"]])
    ax.set_xticklabels([" ".join(format_hour_header(h)) for h in dims["hours"]])
    ax.set_yticks([n_days - i - 0.5 for i in range(len(data.days))])
    ax.set_yticklabels([d.day for d in data.days])
    ax.grid(axis="x", linestyle=":", color=EDGE_COLOR)
    if title:
        ax.set_title(title)

    buf = io.BytesIO()
    fig.savefig(buf, format="png", bbox_inches="tight", facecolor="white")

    logger.debug(f"Rendered timetable image for {len(data.days)} day(s)")
    return buf.getvalue()
