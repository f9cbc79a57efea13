from sqlalchemy import Column, Integer, String, Float, Boolean, Date, DateTime, Text
from support_intel.core.db import Base

# Each model mirrors one sheet tab. SHEET_COLUMNS lists the attributes in
# sheet column order; row_id preserves the sheet's row order.

class TicketRow(Base):
    __tablename__ = "daily_tickets"
    SHEET_NAME = "Daily"
    SHEET_COLUMNS = ("ticket_id", "summary", "panel", "resolved", "ikc_found", "opened_at")

    row_id = Column(Integer, primary_key=True, autoincrement=True)
    ticket_id = Column(String(64), nullable=True, index=True)
    summary = Column(Text, nullable=True)
    panel = Column(String(255), nullable=True)
    resolved = Column(Boolean, nullable=True)
    ikc_found = Column(Boolean, nullable=True)
    opened_at = Column(DateTime, nullable=True)


class SentimentAnalysisRow(Base):
    __tablename__ = "sentiment_analysis"
    SHEET_NAME = "Sentiment_Analysis(SI)"
    SHEET_COLUMNS = ("ticket_id", "score", "keywords", "revenue_risk", "sla_risk", "reputation_risk", "ai_reasoning")

    row_id = Column(Integer, primary_key=True, autoincrement=True)
    ticket_id = Column(String(64), nullable=True, index=True)
    score = Column(Float, nullable=True)
    keywords = Column(Text, nullable=True)
    revenue_risk = Column(Boolean, nullable=True)
    sla_risk = Column(Boolean, nullable=True)
    reputation_risk = Column(Boolean, nullable=True)
    ai_reasoning = Column(Text, nullable=True)


class RiskScoreRow(Base):
    __tablename__ = "risk_scores"
    SHEET_NAME = "Risk_Scores(SI)"
    SHEET_COLUMNS = ("panel_name", "score", "score_24h_ago", "updated_at")

    row_id = Column(Integer, primary_key=True, autoincrement=True)
    panel_name = Column(String(255), nullable=True)
    score = Column(Float, nullable=True)
    score_24h_ago = Column(Float, nullable=True)
    updated_at = Column(DateTime, nullable=True)


class DailyMetricRow(Base):
    __tablename__ = "daily_metrics"
    SHEET_NAME = "Daily_Metrics(SI)"
    SHEET_COLUMNS = ("metric_date", "total_tickets", "resolved_count", "critical_count", "avg_sentiment")

    row_id = Column(Integer, primary_key=True, autoincrement=True)
    metric_date = Column(Date, nullable=True, index=True)
    total_tickets = Column(Integer, nullable=True)
    resolved_count = Column(Integer, nullable=True)
    critical_count = Column(Integer, nullable=True)
    avg_sentiment = Column(Float, nullable=True)


class QualitySignalRow(Base):
    __tablename__ = "quality_signals"
    SHEET_NAME = "Quality_Signals(SI)"
    SHEET_COLUMNS = (
        "signal_id", "signal_type", "redundant_reply_count", "description",
        "sentiment_before", "sentiment_after", "flagged_date",
    )

    row_id = Column(Integer, primary_key=True, autoincrement=True)
    signal_id = Column(String(64), nullable=True)
    signal_type = Column(String(100), nullable=True)
    redundant_reply_count = Column(Integer, nullable=True)
    description = Column(Text, nullable=True)
    sentiment_before = Column(Float, nullable=True)
    sentiment_after = Column(Float, nullable=True)
    flagged_date = Column(Date, nullable=True, index=True)


class TrendCacheRow(Base):
    __tablename__ = "trends_cache"
    SHEET_NAME = "Trends_Cache(SI)"
    SHEET_COLUMNS = (
        "trend_id", "title", "state", "ticket_count", "ticket_ids", "root_cause",
        "confidence", "needs_escalation", "growth_percentage", "first_seen", "last_seen",
    )

    row_id = Column(Integer, primary_key=True, autoincrement=True)
    trend_id = Column(String(64), nullable=True)
    title = Column(String(255), nullable=True)
    state = Column(String(50), nullable=True)
    ticket_count = Column(Integer, nullable=True)
    ticket_ids = Column(Text, nullable=True)
    root_cause = Column(Text, nullable=True)
    confidence = Column(Float, nullable=True)
    needs_escalation = Column(Boolean, nullable=True)
    growth_percentage = Column(Float, nullable=True)
    first_seen = Column(DateTime, nullable=True)
    last_seen = Column(DateTime, nullable=True)


class DailyBriefRow(Base):
    __tablename__ = "daily_brief"
    SHEET_NAME = "Daily_Brief(SI)"
    SHEET_COLUMNS = ("summary", "win", "risk", "action", "generated_at")

    row_id = Column(Integer, primary_key=True, autoincrement=True)
    summary = Column(Text, nullable=True)
    win = Column(Text, nullable=True)
    risk = Column(Text, nullable=True)
    action = Column(Text, nullable=True)
    generated_at = Column(DateTime, nullable=True)


class KnowledgeArticleRow(Base):
    __tablename__ = "kb_articles"
    SHEET_NAME = "testkb"
    SHEET_COLUMNS = (
        "kb_id", "title", "problem_statement", "resolution_steps", "keywords",
        "category", "frequency", "panels_affected", "priority_score", "priority_level",
    )

    row_id = Column(Integer, primary_key=True, autoincrement=True)
    kb_id = Column(String(64), nullable=True)
    title = Column(String(255), nullable=True)
    problem_statement = Column(Text, nullable=True)
    resolution_steps = Column(Text, nullable=True)
    keywords = Column(Text, nullable=True)
    category = Column(String(100), nullable=True)
    frequency = Column(Integer, nullable=True)
    panels_affected = Column(Text, nullable=True)
    priority_score = Column(Float, nullable=True)
    priority_level = Column(String(50), nullable=True)


class FaqRow(Base):
    __tablename__ = "kb_faqs"
    SHEET_NAME = "testfaqs"
    SHEET_COLUMNS = ("faq_id", "question", "answer", "panel", "keywords")

    row_id = Column(Integer, primary_key=True, autoincrement=True)
    faq_id = Column(String(64), nullable=True)
    question = Column(Text, nullable=True)
    answer = Column(Text, nullable=True)
    panel = Column(String(255), nullable=True)
    keywords = Column(Text, nullable=True)


SHEET_MODELS = {
    model.SHEET_NAME: model
    for model in (
        TicketRow, SentimentAnalysisRow, RiskScoreRow, DailyMetricRow, QualitySignalRow,
        TrendCacheRow, DailyBriefRow, KnowledgeArticleRow, FaqRow,
    )
}
