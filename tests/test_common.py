from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from attendance_payroll.audit.service import AuditTrail
from attendance_payroll.common.datetime_utils import (
    get_zone,
    iter_dates_desc,
    parse_strict_iso_date,
    to_zone,
)
from attendance_payroll.common.validators import require_month, require_year
from attendance_payroll.core.enums import AuditAction, LeaveSession, LeaveType
from attendance_payroll.core.exceptions import ValidationError
from attendance_payroll.database.bootstrap import iter_sql_statements

from fakes import BrokenAudit, InMemoryAudit


@pytest.mark.parametrize(
    "value,expected",
    [
        ("2024-04-01", date(2024, 4, 1)),
        (" 2024-04-01 ", date(2024, 4, 1)),
        ("2024-4-1", None),
        ("01/04/2024", None),
        ("2024-02-30", None),
        (None, None),
        (date(2023, 1, 2), date(2023, 1, 2)),
        (datetime(2023, 1, 2, 10, 0), date(2023, 1, 2)),
    ],
)
def test_parse_strict_iso_date(value, expected):
    assert parse_strict_iso_date(value) == expected


def test_iter_dates_desc_is_inclusive():
    assert list(iter_dates_desc(date(2024, 2, 28), date(2024, 3, 1))) == [
        date(2024, 3, 1),
        date(2024, 2, 29),
        date(2024, 2, 28),
    ]


def test_unknown_zone_falls_back():
    assert get_zone("Not/AZone", "Asia/Kolkata") == ZoneInfo("Asia/Kolkata")
    assert get_zone(None, "Bad/Zone") == timezone.utc


def test_naive_timestamp_is_read_in_storage_zone():
    local = to_zone(datetime(2024, 9, 11, 6, 0), ZoneInfo("Asia/Kolkata"), naive_as=timezone.utc)

    assert (local.hour, local.minute) == (11, 30)


def test_leave_type_aliases():
    assert LeaveType.resolve("Paid Leave") == LeaveType.PRIVILEGE
    assert LeaveType.resolve(" pl ") == LeaveType.PRIVILEGE
    assert LeaveType.resolve("UNPAID LEAVE") == LeaveType.UNPAID
    assert LeaveType.resolve("Comp Off") is None
    assert LeaveType.resolve(None) is None
    assert LeaveSession.SECOND_HALF.is_half
    assert not LeaveSession.FULL_DAY.is_half


def test_period_validators():
    assert require_month("6") == 6
    assert require_year(2024) == 2024
    for bad in (0, 13, "x", None):
        with pytest.raises(ValidationError):
            require_month(bad)


def test_audit_trail_records_and_tolerates_failures():
    sink = InMemoryAudit()
    assert AuditTrail(sink).record(
        AuditAction.PAYSLIP_RELEASED, entity_type="payslip", entity_id=5, performed_by=1, details={"month": 6}
    )
    assert sink.entries[0].entity_id == "5"

    assert AuditTrail(BrokenAudit()).record(
        AuditAction.PAYSLIP_LOCKED, entity_type="payslip", entity_id=5, performed_by=1
    ) is False


def test_schema_splitter_ignores_semicolons_in_strings_and_comments():
    sql = "-- a; comment\nCREATE TABLE a (x VARCHAR(5) DEFAULT ';');\nINSERT INTO a VALUES ('b;c');\n"

    assert list(iter_sql_statements(sql)) == [
        "CREATE TABLE a (x VARCHAR(5) DEFAULT ';')",
        "INSERT INTO a VALUES ('b;c')",
    ]
