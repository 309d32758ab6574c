"""CSV export of archived monthly summaries"""

import csv
import io
from datetime import date
from typing import Iterable

HEADERS = ["Period", "Income", "Expenses", "Extras", "DAS", "IncomeTax", "NetBalance", "Status"]


def summaries_to_csv(summaries: Iterable) -> str:
    """Render summaries as a comma-separated table, one row per archived month"""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(HEADERS)
    for s in summaries:
        writer.writerow(
            [
                f"{s.month:02d}/{s.year}",
                s.total_income,
                s.total_expenses,
                s.total_extras,
                s.das_value,
                s.income_tax_estimate,
                s.net_balance,
                "Positive" if s.net_balance >= 0 else "Negative",
            ]
        )
    return buffer.getvalue()


def export_filename(today: date) -> str:
    return f"financial-history-{today.isoformat()}.csv"
