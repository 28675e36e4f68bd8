from datetime import date
from decimal import Decimal

import pytest

from domain.exceptions.conversion import StatementImportError
from domain.models.statement import Document, Transaction
from infrastructure.statements.csv_statement import read_statement_rows, write_statement


def test_read_statement_rows_keeps_header_and_text(tmp_path):
    path = tmp_path / "statement.csv"
    path.write_text("Date,Description,Amount,Currency\n2025-01-01,Coffee,-45.50,SEK\n2025-01-02,,0100,EUR\n")

    rows = read_statement_rows(path)

    assert rows == [
        ["Date", "Description", "Amount", "Currency"],
        ["2025-01-01", "Coffee", "-45.50", "SEK"],
        ["2025-01-02", "", "0100", "EUR"],
    ]


def test_read_statement_rows_with_delimiter(tmp_path):
    path = tmp_path / "statement.csv"
    path.write_text("2025-01-01;Coffee;-45,50;SEK\n")

    assert read_statement_rows(path, delimiter=";") == [["2025-01-01", "Coffee", "-45,50", "SEK"]]


def test_read_statement_rows_empty_file(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("")

    with pytest.raises(StatementImportError):
        read_statement_rows(path)


def test_read_statement_rows_missing_file(tmp_path):
    with pytest.raises(StatementImportError):
        read_statement_rows(tmp_path / "missing.csv")


def test_write_statement_formats_dates_and_amounts(tmp_path):
    document = Document([
        Transaction("Coffee, large", date(2025, 1, 1), Decimal("-4.046"), "EUR"),
        Transaction("Salary", date(2025, 1, 25), Decimal("2500"), "EUR"),
    ])

    path = write_statement(document, tmp_path / "converted.csv")

    assert path.read_text().splitlines() == [
        "Date,Description,Amount,Currency",
        '2025-01-01,"Coffee, large",-4.05,EUR',
        "2025-01-25,Salary,2500.00,EUR",
    ]


def test_write_statement_empty_document_writes_header(tmp_path):
    path = write_statement(Document(), tmp_path / "failed.csv")

    assert path.read_text().splitlines() == ["Date,Description,Amount,Currency"]
