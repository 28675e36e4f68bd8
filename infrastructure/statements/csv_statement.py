import logging
from pathlib import Path

import pandas as pd

from domain.exceptions.conversion import StatementImportError
from domain.models.statement import Document

logger = logging.getLogger(__name__)

OUTPUT_COLUMNS = ["Date", "Description", "Amount", "Currency"]


def read_statement_rows(file_path: str | Path, delimiter: str = ",") -> list[list[str]]:
    """Read every row of a statement CSV as text, header rows included."""
    try:
        df = pd.read_csv(
            file_path,
            sep=delimiter,
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except FileNotFoundError as e:
        raise StatementImportError(f"failed to open CSV: {file_path}") from e
    except pd.errors.EmptyDataError as e:
        raise StatementImportError(f"csv file is empty: {file_path}") from e
    except pd.errors.ParserError as e:
        raise StatementImportError(f"failed to read CSV {file_path}: {e}") from e

    rows = df.values.tolist()
    logger.info(f"Read {len(rows)} rows from {file_path}")
    return rows


def write_statement(document: Document, file_path: str | Path) -> Path:
    df = pd.DataFrame(
        [
            [t.date.strftime("%Y-%m-%d"), t.description, f"{t.amount:.2f}", t.currency]
            for t in document
        ],
        columns=OUTPUT_COLUMNS,
    )
    df.to_csv(file_path, index=False)
    logger.info(f"Wrote {len(document)} transactions to {file_path}")
    return Path(file_path)
