import logging
from typing import Any, Dict, List, Optional, Protocol, Sequence
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from support_intel.core.exceptions import TableNotFoundError, TableReadError
from support_intel.models.sheets import SHEET_MODELS

logger = logging.getLogger(__name__)

Row = List[Any]

class TableName:
    DAILY_BRIEF = "Daily_Brief(SI)"
    RISK_SCORES = "Risk_Scores(SI)"
    TICKETS = "Daily"
    SENTIMENT = "Sentiment_Analysis(SI)"
    DAILY_METRICS = "Daily_Metrics(SI)"
    TRENDS = "Trends_Cache(SI)"
    QUALITY_SIGNALS = "Quality_Signals(SI)"
    KNOWLEDGE_BASE = "testkb"
    FAQS = "testfaqs"


class TableReader(Protocol):
    def read_rows(self, table_name: str, from_row: int, column_count: int) -> List[Row]:
        """
        Return the data rows of a table starting at the 1-based data row
        from_row, each padded or truncated to column_count cells.
        Raises TableNotFoundError for an unknown table.
        """
        ...


def fit_row(cells: Sequence[Any], column_count: int) -> Row:
    row = list(cells[:column_count])
    if len(row) < column_count:
        row.extend([""] * (column_count - len(row)))
    return row


class InMemoryTableReader:
    """
    Serves rows from a {table_name: rows} snapshot.
    A table that is present but empty reads as no rows; a missing table is an error.
    """

    def __init__(self, tables: Optional[Dict[str, Sequence[Sequence[Any]]]] = None):
        self.tables = dict(tables or {})

    def read_rows(self, table_name: str, from_row: int, column_count: int) -> List[Row]:
        if table_name not in self.tables:
            raise TableNotFoundError(table_name)
        rows = self.tables[table_name][max(from_row, 1) - 1:]
        return [fit_row(row, column_count) for row in rows]


class SqlTableReader:
    """
    Reads sheet-shaped tables through the ORM models in models.sheets.
    Database failures surface as TableReadError for the whole read.
    """

    def __init__(self, db: Session):
        self.db = db

    def read_rows(self, table_name: str, from_row: int, column_count: int) -> List[Row]:
        model = SHEET_MODELS.get(table_name)
        if model is None:
            raise TableNotFoundError(table_name)

        columns = model.SHEET_COLUMNS[:column_count]
        try:
            records = (
                self.db.query(model)
                .order_by(model.row_id)
                .offset(max(from_row, 1) - 1)
                .all()
            )
        except SQLAlchemyError as exc:
            logger.error("Reading %s failed: %s", table_name, exc)
            raise TableReadError(table_name) from exc

        logger.debug("Read %d rows from %s", len(records), table_name)
        return [fit_row([getattr(record, column) for column in columns], column_count) for record in records]
