from __future__ import annotations

from datetime import date, timedelta
from typing import Dict, Sequence, Tuple

from ..common.datetime_utils import get_zone
from ..core.constants import DEFAULT_ATTENDANCE_TIMEZONE, DEFAULT_CLOCK_STORAGE_TIMEZONE
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall
from .clock_days import summarize_by_local_day
from .model import ClockEvent, ClockSummary
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(
        self,
        conn_factory: DatabaseConnection,
        *,
        default_timezone: str = DEFAULT_ATTENDANCE_TIMEZONE,
        storage_timezone: str = DEFAULT_CLOCK_STORAGE_TIMEZONE,
    ):
        self._conn_factory = conn_factory
        self._default_timezone = default_timezone
        self._storage_zone = get_zone(storage_timezone, "UTC")

    def get_clock_summaries(self, *, start_date: date, end_date: date) -> Sequence[ClockSummary]:
        # Stored timestamps are in the storage zone; one day either side covers every local offset.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT tc.user_id, tc.clock_in, tc.clock_out, tc.total_hours, u.timezone
                FROM time_clock tc
                JOIN users u ON u.id = tc.user_id
                WHERE tc.clock_in >= %s AND tc.clock_in < %s
                """,
                (start_date - timedelta(days=1), end_date + timedelta(days=2)),
            )
            events = [
                ClockEvent(
                    user_id=int(r["user_id"]),
                    clock_in=r["clock_in"],
                    clock_out=r.get("clock_out"),
                    total_hours=as_float(r.get("total_hours")),
                    timezone=r.get("timezone"),
                )
                for r in fetchall(cur)
            ]

            cur.execute(
                "SELECT user_id, date, shift_type FROM shift_roster WHERE date BETWEEN %s AND %s",
                (start_date, end_date),
            )
            roster: Dict[Tuple[int, date], str] = {
                (int(r["user_id"]), r["date"]): r["shift_type"] for r in fetchall(cur)
            }

        return summarize_by_local_day(
            events,
            start=start_date,
            end=end_date,
            default_timezone=self._default_timezone,
            storage_zone=self._storage_zone,
            roster=roster,
        )
