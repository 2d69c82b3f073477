"""Policy constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time
from decimal import Decimal

DEFAULT_ATTENDANCE_TIMEZONE = "Asia/Kolkata"
DEFAULT_CLOCK_STORAGE_TIMEZONE = "UTC"

# Attendance classification
LATE_ARRIVAL_CUTOFF = time(11, 0)
FULL_DAY_HOURS = 8
HALF_DAY_HOURS = 4

# Leave accrual
PROBATION_DAYS = 90
MONTHLY_ACCRUAL_DAYS = 1.25
YEARLY_ACCRUAL_CAP = 15.0
ACCRUAL_MONTH_LOOP_LIMIT = 100
BALANCE_TOLERANCE = 0.01
FINANCIAL_YEAR_START_MONTH = 4

# Payroll
DEFAULT_BASE_SALARY = Decimal("15000")
HRA_RATE = Decimal("0.40")
PF_RATE = Decimal("0.12")
ESI_EMPLOYEE_RATE = Decimal("0.0075")
ESI_EMPLOYER_RATE = Decimal("0.0325")
PROFESSIONAL_TAX_THRESHOLD = Decimal("15000")
PROFESSIONAL_TAX_AMOUNT = Decimal("200")

DEFAULT_HISTORY_LIMIT = 200
