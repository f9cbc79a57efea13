from pydantic import BaseModel, Field
from typing import Optional, List, Union
from datetime import date, datetime

# Typed records built from raw table rows. They live for one request only.

class TicketRecord(BaseModel):
    id: str
    summary: str = ""
    panel: str = ""
    resolved: bool = False
    knowledge_found: bool = Field(False, description="Whether an internal knowledge article matched the ticket.")
    opened_at: Optional[Union[datetime, date]] = None

class SentimentRecord(BaseModel):
    ticket_id: str
    score: Optional[float] = Field(None, description="1-10, lower is worse. A blank cell reads as 0, a malformed one as None.")
    keywords: List[str] = []
    revenue_risk: bool = False
    sla_risk: bool = False
    reputation_risk: bool = False
    ai_reasoning: str = ""

class RiskScoreRecord(BaseModel):
    panel_name: str
    score: float = 0
    score_24h_ago: float = 0

class MetricSample(BaseModel):
    metric_date: Optional[date] = None
    total_tickets: int = 0
    resolved_count: int = 0
    critical_count: int = 0
    avg_sentiment: float = 0

class QualitySignalEvent(BaseModel):
    id: str
    signal_type: str = ""
    redundant_reply_count: int = 0
    description: str = ""
    sentiment_before: Optional[float] = None
    sentiment_after: Optional[float] = None
    flagged_at: Optional[Union[datetime, date]] = None

class TrendRecord(BaseModel):
    id: str
    title: str = ""
    state: str = ""
    ticket_count: int = 0
    ticket_ids: List[str] = []
    root_cause: str = ""
    confidence: float = Field(0, description="Stored upstream as a 0-1 fraction.")
    needs_escalation: bool = False
    growth_percentage: float = 0
    first_seen: Optional[Union[datetime, date]] = None
    last_seen: Optional[Union[datetime, date]] = None

class DailyBriefRecord(BaseModel):
    summary: str = ""
    win: str = ""
    risk: str = ""
    action: str = ""
    generated_at: Optional[Union[datetime, date]] = None

class KnowledgeArticleRecord(BaseModel):
    kb_id: str
    title: str = ""
    problem_statement: str = ""
    resolution_steps: str = ""
    keywords: List[str] = []
    frequency: float = 0
    panels_affected: List[str] = []
    priority_score: float = 0
    priority_level: str = ""

class FaqRecord(BaseModel):
    id: str
    question: str = ""
    answer: str = ""
    panel: str = ""
    keywords: List[str] = []
