from datetime import date, datetime
import pytest
from support_intel.core.db import Base
from support_intel.core.exceptions import TableNotFoundError, TableReadError
from support_intel.core.tables import InMemoryTableReader, SqlTableReader, TableName
from support_intel.models.sheets import DailyMetricRow, SentimentAnalysisRow, TicketRow
from support_intel.services.assembler import build_response

def test_sql_reader_returns_rows_in_sheet_order(db_session):
    db_session.add_all([
        TicketRow(ticket_id="T1", summary="Login", panel="Access", resolved=False, ikc_found=True, opened_at=datetime(2026, 2, 15, 6, 0)),
        TicketRow(ticket_id="T2", summary="Refund", panel="Billing", resolved=True, ikc_found=False),
    ])
    db_session.commit()

    rows = SqlTableReader(db_session).read_rows(TableName.TICKETS, 1, 6)

    assert rows == [
        ["T1", "Login", "Access", False, True, datetime(2026, 2, 15, 6, 0)],
        ["T2", "Refund", "Billing", True, False, None],
    ]

def test_sql_reader_honours_from_row_and_column_count(db_session):
    db_session.add_all([
        DailyMetricRow(metric_date=date(2026, 2, 14), total_tickets=40, resolved_count=30, critical_count=4, avg_sentiment=6.2),
        DailyMetricRow(metric_date=date(2026, 2, 15), total_tickets=50, resolved_count=40, critical_count=5, avg_sentiment=5.8),
    ])
    db_session.commit()

    rows = SqlTableReader(db_session).read_rows(TableName.DAILY_METRICS, 2, 2)
    assert rows == [[date(2026, 2, 15), 50]]

def test_sql_reader_pads_extra_columns(db_session):
    db_session.add(SentimentAnalysisRow(ticket_id="T1", score=2))
    db_session.commit()
    rows = SqlTableReader(db_session).read_rows(TableName.SENTIMENT, 1, 9)
    assert len(rows[0]) == 9
    assert rows[0][-2:] == ["", ""]

def test_sql_reader_unknown_table(db_session):
    with pytest.raises(TableNotFoundError):
        SqlTableReader(db_session).read_rows("Nope", 1, 3)

def test_sql_reader_wraps_database_failures(db_session):
    Base.metadata.drop_all(bind=db_session.get_bind())
    with pytest.raises(TableReadError):
        SqlTableReader(db_session).read_rows(TableName.TRENDS, 1, 11)

def test_sql_snapshot_feeds_critical_tickets(db_session, now):
    db_session.add_all([
        TicketRow(ticket_id="T1", summary="Login", panel="Access", resolved=False, opened_at=datetime(2026, 2, 15, 6, 0)),
        TicketRow(ticket_id="T2", summary="Export", panel="Exports", resolved=False),
        SentimentAnalysisRow(ticket_id="T1", score=2, keywords="login", revenue_risk=True, sla_risk=False, reputation_risk=None),
    ])
    db_session.commit()

    reader = SqlTableReader(db_session)
    payload = build_response("getDashboard", reader, now=now)

    assert [t["ticket_id"] for t in payload["criticalTickets"]] == ["T1"]
    assert payload["criticalTickets"][0]["agingColor"] == "amber"
    assert payload["criticalTickets"][0]["impact"] == ["Revenue Risk"]
    assert payload["metrics"][0]["status"] == "neutral"

def test_in_memory_reader():
    reader = InMemoryTableReader({"Sheet": [["a", "b", "c"], ["d"]]})
    assert reader.read_rows("Sheet", 1, 2) == [["a", "b"], ["d", ""]]
    assert reader.read_rows("Sheet", 2, 1) == [["d"]]
    with pytest.raises(TableNotFoundError):
        reader.read_rows("Missing", 1, 1)
