from decimal import Decimal

from attendance_payroll.payroll.calculator.standard_calculator import StandardPayrollCalculator, round_whole


def test_prorated_salary_example():
    calc = StandardPayrollCalculator()
    s = calc.compute(base_salary=Decimal("20000"), paid_days=Decimal("20"), days_in_month=30)

    assert s.basic_pay == Decimal("13333")
    assert s.hra == Decimal("5333")
    assert s.gross == Decimal("18666")
    assert s.pf_employee == s.pf_employer == Decimal("1600")
    assert s.esi_employee == Decimal("140")
    assert s.esi_employer == Decimal("607")
    assert s.professional_tax == Decimal("200")


def test_full_month_at_default_base():
    calc = StandardPayrollCalculator()
    s = calc.compute(base_salary=Decimal("15000"), paid_days=Decimal("31"), days_in_month=31)

    assert s.basic_pay == Decimal("15000")
    assert s.hra == Decimal("6000")
    assert s.pf_employee == Decimal("1800")
    assert s.esi_employee == Decimal("158")
    assert s.professional_tax == Decimal("200")


def test_no_professional_tax_at_or_below_threshold():
    calc = StandardPayrollCalculator()
    s = calc.compute(base_salary=Decimal("10000"), paid_days=Decimal("30"), days_in_month=30)

    assert s.gross == Decimal("14000")
    assert s.professional_tax == Decimal("0")


def test_zero_paid_days_yields_zero_pay():
    s = StandardPayrollCalculator().compute(base_salary=Decimal("20000"), paid_days=Decimal("0"), days_in_month=30)

    assert s.gross == 0
    assert s.pf_employee == 0
    assert s.esi_employee == 0


def test_rounding_is_half_up():
    assert round_whole(Decimal("2.5")) == Decimal("3")
    assert round_whole(Decimal("139.995")) == Decimal("140")
    assert round_whole(Decimal("1599.49")) == Decimal("1599")
