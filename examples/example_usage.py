"""Example: monthly payroll straight from the service layer (no Flask).

Controllers stay thin; the calculation lives in the services wired by the container.
"""

import importlib
import sys
from datetime import date

from config import get_settings_module

from src.store_payroll.store_payroll.common.time_utils import format_duration
from src.store_payroll.store_payroll.container import build_container
from src.store_payroll.store_payroll.core.settings import PayrollSettings


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=PayrollSettings.from_module(settings))

    month = date.fromisoformat(sys.argv[1] + "-01") if len(sys.argv) > 1 else date.today()
    report = container.payroll_report_service.build_monthly_report(month=month)

    for pay in report.actual:
        print(f"{pay.employee_code} {pay.employee_name}: {format_duration(pay.total_hours)} -> {pay.total_pay:,.0f}円")
    print(f"Estimated total: {report.summary.estimated_payroll_cost:,.0f}円")
    print(f"Difference:      {report.summary.payroll_difference:,.0f}円")


if __name__ == "__main__":
    main()
