"""Example: price a month of shifts without a database."""

from datetime import date

from shift_payroll.attendance.model import ShiftRecord
from shift_payroll.payroll.aggregation import aggregate, group_by_date
from shift_payroll.payroll.breakdown import compute_breakdown
from shift_payroll.policy.model import PayPolicy


def main():
    policy = PayPolicy.from_settings(
        {
            "defaultHourlyWage": 1200,
            "transportAllowanceEnabled": True,
            "transportAllowancePerShift": 300,
        }
    )
    records = [
        ShiftRecord("s1", "emp-1", date(2025, 3, 1), "18:00", "23:00"),
        ShiftRecord("s2", "emp-1", date(2025, 3, 3), "09:00", "12:00"),
        ShiftRecord("s3", "emp-1", date(2025, 3, 3), "13:00", "18:00"),
    ]

    for r in records:
        print(r.record_id, compute_breakdown(r, policy))
    for day in group_by_date(records, policy):
        print(day.date_key, day.total_amount)
    print(aggregate(records, policy))


if __name__ == "__main__":
    main()
