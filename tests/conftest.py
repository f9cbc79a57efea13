import pytest
from datetime import datetime, timezone
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from support_intel.core.db import Base
from support_intel.core.tables import InMemoryTableReader, TableName

# Setup a SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_support_intel.db"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# 2026-02-16 12:00 UTC is 17:30 on the same day in the report timezone.
NOW = datetime(2026, 2, 16, 12, 0, tzinfo=timezone.utc)

@pytest.fixture
def now():
    return NOW

@pytest.fixture(scope="function")
def db_session():
    # Create the tables
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        # Drop the tables after the test
        Base.metadata.drop_all(bind=engine)

@pytest.fixture
def empty_tables():
    return {
        TableName.DAILY_BRIEF: [],
        TableName.RISK_SCORES: [],
        TableName.TICKETS: [],
        TableName.SENTIMENT: [],
        TableName.DAILY_METRICS: [],
        TableName.TRENDS: [],
        TableName.QUALITY_SIGNALS: [],
        TableName.KNOWLEDGE_BASE: [],
        TableName.FAQS: [],
    }

@pytest.fixture
def snapshot_tables(empty_tables):
    tables = dict(empty_tables)
    tables[TableName.DAILY_BRIEF] = [
        ["Volume spiked 22% in Billing.\n\nLogin frustration rising.\n", "Faster refunds", "Login timeouts", "Publish OIDC macro", "2026-02-16T03:00:00Z"],
    ]
    tables[TableName.RISK_SCORES] = [
        ["Billing & Refunds", 72, 45, ""],
        ["Enterprise Access", 88, 80, ""],
        ["Technical Support", 12, 10, ""],
        ["", 99, 0, ""],
    ]
    tables[TableName.TICKETS] = [
        ["T1", "Enterprise login timeout", "Account Access", False, "FALSE", "2026-02-15T06:00:00Z"],
        ["T2", "Refund not received", "Billing", "TRUE", False, "2026-02-14T12:00:00Z"],
        ["T3", "Export stuck", "Exports", False, False, "2026-02-16T09:00:00Z"],
        ["T4", "Password reset loop", "Account Access", "false", "true", "2026-02-13T11:00:00Z"],
    ]
    tables[TableName.SENTIMENT] = [
        ["T1", 2, "login, unacceptable, waiting", True, False, False, "Customer repeated the issue twice."],
        ["T2", 1, "refund", True, True, True, "Angry about refund delay."],
        ["T3", 8, "export", False, False, False, "Calm."],
        ["T4", 3, "", "FALSE", "TRUE", "true", "Looping reset emails."],
    ]
    tables[TableName.DAILY_METRICS] = [
        ["2026-02-14", 40, 30, 4, 6.2],
        ["2026-02-15", 50, 40, 5, 5.8],
        ["2026-02-16", 60, 45, 3, 6.3],
    ]
    tables[TableName.QUALITY_SIGNALS] = [
        ["Q1", "Redundant Reply", 5, "Template sent twice", 8, 7, "2026-02-15"],
        ["Q2", "Sentiment Drop", 3, "Tone mismatch", 9, 4, "2026-02-16"],
        ["Q3", "Churn Risk", 0, "Asked to cancel", 5, 5, "2026-02-16"],
    ]
    tables[TableName.TRENDS] = [
        ["TR1", "OIDC timeouts", "ESCALATING", 14, "T1, T4", "IdP latency", 0.876, "TRUE", 35.5, "2026-02-10", "2026-02-16"],
    ]
    tables[TableName.KNOWLEDGE_BASE] = [
        ["KB1", "Reset SSO", "Login loops", "1. Clear cookies", "sso, login", "Access", 12, "Account Access, Enterprise", 8.5, "High"],
    ]
    tables[TableName.FAQS] = [
        ["F1", "How do refunds work?", "Within 5 days.", "Billing", "refund, billing"],
        ["", "orphan", "dropped", "", ""],
    ]
    return tables

@pytest.fixture
def snapshot_reader(snapshot_tables):
    return InMemoryTableReader(snapshot_tables)
