"""Unit tests for history CSV export"""

from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from mei_finance.domain.export import export_filename, summaries_to_csv


def summary(month, year, net):
    return SimpleNamespace(
        month=month,
        year=year,
        total_income=Decimal("5000.00"),
        total_expenses=Decimal("1200.00"),
        total_extras=Decimal("300.00"),
        das_value=Decimal("67.00"),
        income_tax_estimate=Decimal("0.00"),
        net_balance=Decimal(net),
    )


def test_summaries_to_csv():
    content = summaries_to_csv([summary(3, 2024, "4033.00"), summary(11, 2023, "-15.50")])

    assert content.splitlines() == [
        "Period,Income,Expenses,Extras,DAS,IncomeTax,NetBalance,Status",
        "03/2024,5000.00,1200.00,300.00,67.00,0.00,4033.00,Positive",
        "11/2023,5000.00,1200.00,300.00,67.00,0.00,-15.50,Negative",
    ]


def test_summaries_to_csv_empty_has_header_only():
    assert summaries_to_csv([]) == "Period,Income,Expenses,Extras,DAS,IncomeTax,NetBalance,Status\n"


def test_zero_balance_is_positive():
    assert summaries_to_csv([summary(1, 2024, "0")]).splitlines()[1].endswith(",Positive")


def test_export_filename():
    assert export_filename(date(2024, 3, 10)) == "financial-history-2024-03-10.csv"
