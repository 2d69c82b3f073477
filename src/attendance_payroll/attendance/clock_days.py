from __future__ import annotations

from datetime import date, tzinfo
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from ..common.datetime_utils import get_zone, to_zone
from .model import ClockEvent, ClockSummary


def summarize_by_local_day(
    events: Iterable[ClockEvent],
    *,
    start: date,
    end: date,
    default_timezone: str,
    storage_zone: tzinfo,
    roster: Optional[Mapping[Tuple[int, date], str]] = None,
) -> List[ClockSummary]:
    """Fold raw clock events into one summary per (employee, local date) inside [start, end].

    The day of an event is the date of its clock-in in the employee's own zone.
    """
    roster = roster or {}
    grouped: Dict[Tuple[int, date], List[ClockEvent]] = {}
    for ev in events:
        zone = get_zone(ev.timezone, default_timezone)
        local_day = to_zone(ev.clock_in, zone, naive_as=storage_zone).date()
        if start <= local_day <= end:
            grouped.setdefault((ev.user_id, local_day), []).append(ev)

    out: List[ClockSummary] = []
    for (user_id, day), day_events in grouped.items():
        clock_outs = [e.clock_out for e in day_events if e.clock_out is not None]
        out.append(
            ClockSummary(
                user_id=user_id,
                work_date=day,
                clock_in=min(e.clock_in for e in day_events),
                clock_out=max(clock_outs) if clock_outs else None,
                total_hours=sum(e.total_hours for e in day_events),
                shift_type=roster.get((user_id, day)),
            )
        )
    out.sort(key=lambda s: (s.work_date, s.user_id))
    return out
