"""Example: drive the payroll engine through the service layer (no Flask).

Previews the current month as one administrator and prints the draft totals;
nothing is persisted.
"""

import importlib
from datetime import date

from config import get_settings_module

from src.hr_payroll.hr_payroll.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=settings)

    today = date.today()
    draft = container.payroll_workflow.preview(today.replace(day=1), today, "alice")
    for p in draft.paychecks:
        print(f"{p.employee_username:<12} gross={p.gross_pay:>10} deductions={p.total_deductions:>10} net={p.net_pay:>10}")
    print(f"total net pay: {draft.total_net_pay}")
    print(container.overview_aggregator.overview(today))


if __name__ == "__main__":
    main()
